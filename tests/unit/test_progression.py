"""Unit tests for the progression tracker (levelup/gamification/progression.py)"""
import pytest
from datetime import datetime

from levelup.exceptions import InvalidDeltaError, TaskAlreadyCompletedError, TaskNotFoundError
from levelup.gamification.progression import (
    apply_xp,
    build_snapshot,
    category_xp,
    complete_task,
    summarize_progress,
)
from levelup.models.goal import TaskStatus
from tests.helpers import make_goal


# ============================================================================
# apply_xp Tests
# ============================================================================

def test_apply_xp_crosses_level(health_goal):
    updated = apply_xp(health_goal, 100)

    assert updated.xp == 1050
    assert updated.level == 2
    assert updated.current_level_xp == 50
    assert updated.progress_fraction == pytest.approx(0.05)


def test_apply_xp_returns_new_goal(health_goal):
    updated = apply_xp(health_goal, 10)

    assert updated is not health_goal
    assert health_goal.xp == 950
    assert updated.id == health_goal.id
    assert updated.tasks == health_goal.tasks


def test_apply_xp_negative_delta_rejected(health_goal):
    with pytest.raises(InvalidDeltaError) as exc_info:
        apply_xp(health_goal, -10)

    assert exc_info.value.delta == -10
    assert exc_info.value.context["goal_id"] == "goal-health"
    assert health_goal.xp == 950
    assert health_goal.level == 1


def test_apply_xp_non_integer_delta_rejected(health_goal):
    """Fractional or boolean deltas never reach the stored xp"""
    for delta in (1.5, True, "10"):
        with pytest.raises(InvalidDeltaError):
            apply_xp(health_goal, delta)

    assert health_goal.xp == 950
    assert isinstance(health_goal.xp, int)


def test_apply_xp_zero_delta(health_goal):
    assert apply_xp(health_goal, 0).xp == 950


def test_apply_xp_is_additive(health_goal):
    twice = apply_xp(apply_xp(health_goal, 30), 70)
    assert twice.xp == health_goal.xp + 30 + 70


# ============================================================================
# complete_task Tests
# ============================================================================

def test_complete_task_awards_reward(health_goal):
    done_at = datetime(2024, 3, 14, 18, 0)

    updated, awarded = complete_task(health_goal, "d1", done_at)

    assert awarded == 50
    assert updated.xp == 1000
    assert updated.level == 2
    task = next(t for t in updated.tasks if t.id == "d1")
    assert task.status == TaskStatus.COMPLETED
    assert task.completed_at == done_at
    assert [t.id for t in updated.tasks] == ["m1", "d1", "d2"]


def test_complete_task_leaves_input_untouched(health_goal):
    complete_task(health_goal, "m1")

    assert all(t.status == TaskStatus.PENDING for t in health_goal.tasks)
    assert health_goal.xp == 950


def test_complete_unknown_task(health_goal):
    with pytest.raises(TaskNotFoundError):
        complete_task(health_goal, "nope")


def test_complete_task_twice(health_goal):
    updated, _ = complete_task(health_goal, "d2")

    with pytest.raises(TaskAlreadyCompletedError):
        complete_task(updated, "d2")


# ============================================================================
# Aggregation Tests
# ============================================================================

def test_category_xp_sums_per_category():
    goals = [
        make_goal("a", "Health", xp=850),
        make_goal("b", "Career", xp=1200),
        make_goal("c", "Health", xp=150),
    ]

    assert category_xp(goals) == {"Health": 1000, "Career": 1200}


def test_build_snapshot_counts_tasks():
    goals = [
        make_goal("a", "Health", xp=2500, completed=2, milestones=1),
        make_goal("b", "Career", xp=600, completed=1),
    ]

    snapshot = build_snapshot(goals, streak_days=4)

    assert snapshot.total_xp == 3100
    assert snapshot.level == 4
    assert snapshot.streak_days == 4
    assert snapshot.tasks_completed_count == 4
    assert snapshot.milestones_completed_count == 1
    assert snapshot.goals_count == 2


def test_summarize_progress(health_goal, career_goal):
    progress = summarize_progress([health_goal, career_goal], streak_days=5)

    assert progress.total_xp == 2150
    assert progress.level == 3
    assert progress.streak_days == 5
    assert progress.level_info.current_level_xp == 150
    assert progress.category_xp == {"Health": 950, "Career": 1200}
    assert progress.tasks_completed == 0
    assert progress.tasks_total == 3


def test_summarize_no_goals():
    progress = summarize_progress([])

    assert progress.total_xp == 0
    assert progress.level == 1
    assert progress.category_xp == {}
