"""
Gamification engine for levelup

This module turns activity records and goal structures into progression:
- Activity scoring (XP breakdown per activity)
- XP and leveling (1000 XP per level)
- Goal and user progression tracking
- Achievement evaluation
"""

from levelup.gamification.xp_system import (
    score_activity,
    calculate_activity_xp,
    score_activities,
    calculate_level_from_xp,
    level_of,
)
from levelup.gamification.progression import apply_xp, complete_task, build_snapshot, summarize_progress
from levelup.gamification.achievement_system import evaluate_achievements, get_achievement_progress

__all__ = [
    "score_activity",
    "calculate_activity_xp",
    "score_activities",
    "calculate_level_from_xp",
    "level_of",
    "apply_xp",
    "complete_task",
    "build_snapshot",
    "summarize_progress",
    "evaluate_achievements",
    "get_achievement_progress",
]
