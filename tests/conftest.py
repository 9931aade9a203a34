"""Global test fixtures and utilities for levelup tests"""
import pytest

from levelup.models.goal import Goal, Task, TaskPriority
from levelup.services import container
from tests.helpers import make_activity


# ============================================================================
# Activity Fixtures
# ============================================================================

@pytest.fixture
def workout_activity():
    """1-hour Health activity with a numbered workout plan"""
    return make_activity("Health", 1, "1. Warm-up\n2. Main set\n")


@pytest.fixture
def empty_activity():
    """0-hour Personal activity with no details"""
    return make_activity("Personal", 0, None)


@pytest.fixture
def career_activity():
    """2-hour Career activity with effort and planning keywords"""
    return make_activity("Career", 2, "A challenging session to plan the quarter")


# ============================================================================
# Goal Fixtures
# ============================================================================

@pytest.fixture
def test_user_id():
    """Standard test user ID"""
    return "user-1"


@pytest.fixture
def health_goal(test_user_id):
    """Health goal with one milestone and two daily tasks"""
    return Goal(
        id="goal-health",
        user_id=test_user_id,
        category="Health",
        title="Run a half marathon",
        xp=950,
        tasks=(
            Task(id="m1", goal_id="goal-health", title="Run 15km without stopping",
                 xp_reward=500, priority=TaskPriority.HIGH),
            Task(id="d1", goal_id="goal-health", title="Stretch for 10 minutes",
                 xp_reward=50, priority=TaskPriority.MEDIUM),
            Task(id="d2", goal_id="goal-health", title="Log today's run",
                 xp_reward=75, priority=TaskPriority.LOW),
        ),
    )


@pytest.fixture
def career_goal(test_user_id):
    """Career goal with no tasks"""
    return Goal(
        id="goal-career",
        user_id=test_user_id,
        category="Career",
        title="Get a promotion",
        xp=1200,
    )


@pytest.fixture(autouse=True)
def reset_service_container():
    """Reset the global container around each test"""
    container.reset_container()
    yield
    container.reset_container()
