"""
Achievement System

Evaluates declarative unlock criteria against a progression snapshot.

Criteria types:
- total_xp: cumulative XP across all goals
- level: user level
- streak: consecutive-day count (computed by the caller)
- tasks_completed: completed tasks of any priority
- milestones_completed: completed high-priority tasks
- goals_count: number of goals

Features:
- Idempotent: already-unlocked achievements are never re-emitted
- Declaration order is evaluation order
- Progress tracking for locked achievements
"""

from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Set
from datetime import datetime
from pathlib import Path
import json
import logging

from levelup.exceptions import ConfigurationError
from levelup.models.achievement import Achievement, AchievementRarity, UnlockedAchievement
from levelup.models.progression import ProgressSnapshot

logger = logging.getLogger(__name__)


# criteria type -> snapshot value
_CRITERIA_SOURCES: Dict[str, Callable[[ProgressSnapshot], int]] = {
    "total_xp": lambda s: s.total_xp,
    "level": lambda s: s.level,
    "streak": lambda s: s.streak_days,
    "tasks_completed": lambda s: s.tasks_completed_count,
    "milestones_completed": lambda s: s.milestones_completed_count,
    "goals_count": lambda s: s.goals_count,
}


DEFAULT_ACHIEVEMENTS: tuple[Achievement, ...] = (
    Achievement(
        id="first_steps",
        name="First Steps",
        description="Complete your first task",
        icon="star",
        rarity=AchievementRarity.COMMON,
        criteria={"type": "tasks_completed", "value": 1},
    ),
    Achievement(
        id="goal_crusher",
        name="Goal Crusher",
        description="Complete your first major milestone",
        icon="trophy",
        rarity=AchievementRarity.LEGENDARY,
        criteria={"type": "milestones_completed", "value": 1},
    ),
    Achievement(
        id="consistency_champion",
        name="Consistency Champion",
        description="Maintain a 7-day streak",
        icon="flame",
        rarity=AchievementRarity.EPIC,
        criteria={"type": "streak", "value": 7},
    ),
    Achievement(
        id="rising_star",
        name="Rising Star",
        description="Reach level 5",
        icon="star",
        rarity=AchievementRarity.RARE,
        criteria={"type": "level", "value": 5},
    ),
    Achievement(
        id="xp_hunter",
        name="XP Hunter",
        description="Earn 5000 XP across all goals",
        icon="zap",
        rarity=AchievementRarity.RARE,
        criteria={"type": "total_xp", "value": 5000},
    ),
    Achievement(
        id="dedicated",
        name="Dedicated",
        description="Maintain a 30-day streak",
        icon="flame",
        rarity=AchievementRarity.EPIC,
        criteria={"type": "streak", "value": 30},
    ),
)


def _current_value(achievement: Achievement, snapshot: ProgressSnapshot) -> Optional[int]:
    """Snapshot value the achievement's criteria measures, or None if unknown"""
    source = _CRITERIA_SOURCES.get(achievement.criteria.type)
    if source is None:
        logger.warning(
            f"Achievement {achievement.id} has unknown criteria type "
            f"{achievement.criteria.type!r}; it can never unlock"
        )
        return None
    return source(snapshot)


def is_criteria_met(achievement: Achievement, snapshot: ProgressSnapshot) -> bool:
    current = _current_value(achievement, snapshot)
    if current is None:
        return False
    return current >= achievement.criteria.value


def evaluate_achievements(
    snapshot: ProgressSnapshot,
    unlocked_ids: Iterable[str] = (),
    definitions: Sequence[Achievement] = DEFAULT_ACHIEVEMENTS,
    now: Optional[datetime] = None
) -> List[UnlockedAchievement]:
    """
    Return achievements that newly hold for this snapshot

    Args:
        snapshot: Current progression state
        unlocked_ids: IDs already unlocked; these are skipped
        definitions: Achievement definitions in evaluation order
        now: Unlock timestamp (defaults to the call time)

    Returns:
        Newly unlocked achievements, in declaration order
    """
    already: Set[str] = set(unlocked_ids)
    unlocked_at = now or datetime.now()
    newly_unlocked = []

    for achievement in definitions:
        # Skip if already unlocked
        if achievement.id in already:
            continue

        if is_criteria_met(achievement, snapshot):
            newly_unlocked.append(
                UnlockedAchievement(achievement=achievement, unlocked_at=unlocked_at)
            )
            already.add(achievement.id)
            logger.info(
                f"Unlocked achievement: {achievement.id} "
                f"({achievement.name}, {achievement.rarity.value})"
            )

    return newly_unlocked


def get_achievement_progress(
    snapshot: ProgressSnapshot,
    unlocked_ids: Iterable[str] = (),
    definitions: Sequence[Achievement] = DEFAULT_ACHIEVEMENTS
) -> List[Dict[str, Any]]:
    """
    Progress toward each locked achievement

    Returns:
        [
            {
                'achievement_id': str,
                'name': str,
                'rarity': str,
                'current': int,
                'required': int,
                'percentage': int
            }
        ]
        sorted closest to completion first
    """
    already = set(unlocked_ids)
    locked = []

    for achievement in definitions:
        if achievement.id in already:
            continue

        current = _current_value(achievement, snapshot) or 0
        required = achievement.criteria.value
        if required > 0:
            percentage = min(100, int(current / required * 100))
        else:
            percentage = 100

        locked.append({
            "achievement_id": achievement.id,
            "name": achievement.name,
            "rarity": achievement.rarity.value,
            "current": current,
            "required": required,
            "percentage": percentage,
        })

    # Stable sort keeps declaration order among ties
    locked.sort(key=lambda x: x["percentage"], reverse=True)
    return locked


def get_achievement_recommendations(
    snapshot: ProgressSnapshot,
    unlocked_ids: Iterable[str] = (),
    definitions: Sequence[Achievement] = DEFAULT_ACHIEVEMENTS,
    limit: int = 3
) -> List[Dict[str, Any]]:
    """Locked achievements at least 50% complete, closest first"""
    progress = get_achievement_progress(snapshot, unlocked_ids, definitions)
    close_to_completion = [ach for ach in progress if ach["percentage"] >= 50]
    return close_to_completion[:limit]


def load_achievements(path: Optional[Path] = None) -> tuple[Achievement, ...]:
    """
    Load achievement definitions from a JSON list, or the defaults

    Raises:
        ConfigurationError: If the file cannot be read or a definition is invalid
    """
    if path is None:
        return DEFAULT_ACHIEVEMENTS

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        definitions = tuple(Achievement(**item) for item in data)
    except (OSError, json.JSONDecodeError, TypeError, ValueError) as e:
        raise ConfigurationError(
            f"Could not load achievements from {path}: {e}",
            config_key="ACHIEVEMENTS_PATH",
            cause=e
        )

    ids = [a.id for a in definitions]
    if len(ids) != len(set(ids)):
        raise ConfigurationError(
            f"Duplicate achievement ids in {path}",
            config_key="ACHIEVEMENTS_PATH"
        )

    logger.info(f"Loaded {len(definitions)} achievement definitions from {path}")
    return definitions
