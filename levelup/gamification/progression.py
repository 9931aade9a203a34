"""
Progression Tracker

Applies XP to goals and aggregates goals into user-level progression.

Rules:
- XP is additive and permanent: negative deltas are rejected
- Level is always recomputed from XP, never incremented on its own
- Completing a task awards its xp_reward to the owning goal exactly once
- User totals are derived from the goal set
"""

from typing import Dict, Iterable, Optional, Tuple
from datetime import datetime
import logging

from levelup.exceptions import InvalidDeltaError, TaskAlreadyCompletedError, TaskNotFoundError
from levelup.gamification.xp_system import calculate_level_from_xp, level_of
from levelup.models.goal import Goal, TaskStatus
from levelup.models.progression import ProgressSnapshot, UserProgress

logger = logging.getLogger(__name__)


def apply_xp(goal: Goal, delta: int) -> Goal:
    """
    Return a copy of goal with delta XP added

    Args:
        goal: Goal to update (not mutated)
        delta: XP to add, must be >= 0

    Raises:
        InvalidDeltaError: If delta is negative or not an int; goal is left unchanged
    """
    if isinstance(delta, bool) or not isinstance(delta, int) or delta < 0:
        raise InvalidDeltaError(delta, goal_id=goal.id)

    updated = goal.model_copy(update={"xp": goal.xp + delta})

    logger.info(
        f"Applied {delta} XP to goal {goal.id} ({goal.category}). "
        f"Total: {updated.xp} XP, Level: {updated.level}"
    )
    if updated.level > goal.level:
        logger.info(f"Goal {goal.id} leveled up from {goal.level} to {updated.level}!")

    return updated


def complete_task(
    goal: Goal,
    task_id: str,
    completed_at: Optional[datetime] = None
) -> Tuple[Goal, int]:
    """
    Mark a task completed and award its XP reward to the goal

    Args:
        goal: Goal owning the task
        task_id: Task to complete
        completed_at: Completion time (defaults to now)

    Returns:
        (updated goal, xp awarded)

    Raises:
        TaskNotFoundError: If the task is not on this goal
        TaskAlreadyCompletedError: If the task was already completed
    """
    task = next((t for t in goal.tasks if t.id == task_id), None)
    if task is None:
        raise TaskNotFoundError(task_id, goal.id)
    if task.is_completed:
        raise TaskAlreadyCompletedError(task_id, goal.id)

    completed = task.model_copy(update={
        "status": TaskStatus.COMPLETED,
        "completed_at": completed_at or datetime.now(),
    })
    tasks = tuple(completed if t.id == task_id else t for t in goal.tasks)

    updated = apply_xp(goal.model_copy(update={"tasks": tasks}), task.xp_reward)
    return updated, task.xp_reward


def category_xp(goals: Iterable[Goal]) -> Dict[str, int]:
    """Total XP per category, in first-seen category order"""
    totals: Dict[str, int] = {}
    for goal in goals:
        totals[goal.category] = totals.get(goal.category, 0) + goal.xp
    return totals


def build_snapshot(goals: Iterable[Goal], streak_days: int = 0) -> ProgressSnapshot:
    """
    Build the snapshot the achievement evaluator checks against

    Args:
        goals: All of the user's goals
        streak_days: Consecutive-day count supplied by the caller
    """
    goals = list(goals)
    total_xp = sum(g.xp for g in goals)
    completed = [t for g in goals for t in g.tasks if t.is_completed]

    return ProgressSnapshot(
        total_xp=total_xp,
        level=level_of(total_xp),
        streak_days=streak_days,
        tasks_completed_count=len(completed),
        milestones_completed_count=sum(1 for t in completed if t.is_milestone),
        goals_count=len(goals),
    )


def summarize_progress(goals: Iterable[Goal], streak_days: int = 0) -> UserProgress:
    """
    Aggregate user progression from the goal set

    Returns:
        UserProgress with total XP, level, per-category XP and task counts
    """
    goals = list(goals)
    total_xp = sum(g.xp for g in goals)
    level_info = calculate_level_from_xp(total_xp)
    all_tasks = [t for g in goals for t in g.tasks]

    return UserProgress(
        total_xp=total_xp,
        level=level_info.level,
        streak_days=streak_days,
        level_info=level_info,
        category_xp=category_xp(goals),
        tasks_completed=sum(1 for t in all_tasks if t.is_completed),
        tasks_total=len(all_tasks),
    )
