"""Shared builders for levelup tests"""
from datetime import datetime, timedelta

from levelup.models.activity import Activity
from levelup.models.goal import Goal, Task, TaskPriority, TaskStatus


START = datetime(2024, 3, 14, 9, 0, 0)


def make_activity(category: str, hours: float, content=None) -> Activity:
    """Activity starting at START lasting the given number of hours"""
    return Activity(
        category=category,
        start_time=START,
        end_time=START + timedelta(hours=hours),
        content=content,
    )


def make_goal(goal_id: str, category: str, xp: int = 0, completed: int = 0, milestones: int = 0) -> Goal:
    """Goal with the given number of completed daily tasks and completed milestones"""
    tasks = [
        Task(id=f"{goal_id}-d{i}", goal_id=goal_id, title=f"Daily {i}",
             xp_reward=10, status=TaskStatus.COMPLETED)
        for i in range(completed)
    ]
    tasks += [
        Task(id=f"{goal_id}-m{i}", goal_id=goal_id, title=f"Milestone {i}",
             xp_reward=500, priority=TaskPriority.HIGH, status=TaskStatus.COMPLETED)
        for i in range(milestones)
    ]
    return Goal(id=goal_id, user_id="user-1", category=category, title=goal_id, xp=xp, tasks=tuple(tasks))
