"""
GamificationService - Progression Orchestration

Runs the scoring pipeline for a single event:
activity -> XP breakdown -> goal XP/level -> newly unlocked achievements.
"""

import logging
from typing import Any, Dict, Iterable, Optional, Sequence
from datetime import datetime

from levelup.gamification.rules import DEFAULT_RULES, ScoringRules
from levelup.gamification.xp_system import score_activity
from levelup.gamification.progression import apply_xp, build_snapshot, complete_task
from levelup.gamification.achievement_system import DEFAULT_ACHIEVEMENTS, evaluate_achievements
from levelup.models.achievement import Achievement
from levelup.models.activity import Activity
from levelup.models.goal import Goal

logger = logging.getLogger(__name__)


class GamificationService:
    """
    Service for progression features.

    Responsibilities:
    - Scoring activities with the configured rules
    - Applying XP to goals
    - Checking achievements against the resulting snapshot

    Holds no per-user state: callers pass the goal, the user's other goals,
    the streak count and the already-unlocked achievement ids, and persist
    what comes back.
    """

    def __init__(
        self,
        rules: ScoringRules = DEFAULT_RULES,
        achievements: Sequence[Achievement] = DEFAULT_ACHIEVEMENTS
    ):
        """
        Initialize GamificationService.

        Args:
            rules: Category and pattern tables
            achievements: Achievement definitions in evaluation order
        """
        self.rules = rules
        self.achievements = tuple(achievements)
        logger.debug("GamificationService initialized")

    def record_activity(
        self,
        goal: Goal,
        activity: Activity,
        streak_days: int = 0,
        unlocked_ids: Iterable[str] = (),
        other_goals: Iterable[Goal] = (),
        now: Optional[datetime] = None
    ) -> Dict[str, Any]:
        """
        Score an activity and credit it to a goal.

        Args:
            goal: Goal the activity counts toward
            activity: Activity to score
            streak_days: Current consecutive-day count
            unlocked_ids: Achievement ids the user already holds
            other_goals: The user's remaining goals, for user-level totals
            now: Unlock timestamp for achievements

        Returns:
            {
                'breakdown': XPBreakdown,
                'goal': Goal,  # updated copy
                'xp_awarded': int,
                'leveled_up': bool,
                'old_level': int,
                'new_level': int,
                'achievements_unlocked': list[UnlockedAchievement]
            }
        """
        breakdown = score_activity(activity, self.rules)
        updated = apply_xp(goal, breakdown.total)

        result = self._progression_event(goal, updated, breakdown.total, streak_days, unlocked_ids, other_goals, now)
        result["breakdown"] = breakdown
        return result

    def complete_task(
        self,
        goal: Goal,
        task_id: str,
        streak_days: int = 0,
        unlocked_ids: Iterable[str] = (),
        other_goals: Iterable[Goal] = (),
        completed_at: Optional[datetime] = None
    ) -> Dict[str, Any]:
        """
        Complete a task and credit its XP reward to the goal.

        Returns:
            Same shape as record_activity, with 'task_id' in place of 'breakdown'
        """
        updated, xp_awarded = complete_task(goal, task_id, completed_at)

        result = self._progression_event(goal, updated, xp_awarded, streak_days, unlocked_ids, other_goals, completed_at)
        result["task_id"] = task_id
        return result

    def _progression_event(
        self,
        old_goal: Goal,
        new_goal: Goal,
        xp_awarded: int,
        streak_days: int,
        unlocked_ids: Iterable[str],
        other_goals: Iterable[Goal],
        now: Optional[datetime]
    ) -> Dict[str, Any]:
        others = [g for g in other_goals if g.id != new_goal.id]
        snapshot = build_snapshot([new_goal, *others], streak_days)
        unlocked = evaluate_achievements(snapshot, unlocked_ids, self.achievements, now)

        if unlocked:
            logger.info(
                f"Goal {new_goal.id}: {len(unlocked)} achievement(s) unlocked: "
                f"{', '.join(a.achievement_id for a in unlocked)}"
            )

        return {
            "goal": new_goal,
            "xp_awarded": xp_awarded,
            "leveled_up": new_goal.level > old_goal.level,
            "old_level": old_goal.level,
            "new_level": new_goal.level,
            "achievements_unlocked": unlocked,
        }
