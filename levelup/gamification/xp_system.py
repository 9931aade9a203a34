"""
XP and Leveling System

Scores single activities and maps cumulative XP to levels.

XP Award Rules (per activity):
- Base: 15 XP per hour of duration
- Category bonus: base x (multiplier - 1), from the unmultiplied base
- Structure bonus: 10 XP if the details contain a numbered or bulleted line
- Step bonus: 2 XP per numbered line
- Pattern bonuses: flat bonus per matching keyword group

Every component is rounded half-up on its own before the total is summed, so
base + category_bonus is not always base x multiplier. Batch totals are the
sum of per-activity totals, never re-derived from summed durations.

Leveling Curve:
- 1000 XP per level, level 1 at 0 XP
"""

from typing import Iterable, List, Optional, Tuple
import logging
import math
import re

from levelup.config import XP_PER_HOUR, XP_PER_LEVEL, STRUCTURE_BONUS, STEP_BONUS
from levelup.exceptions import InvalidIntervalError
from levelup.gamification.rules import DEFAULT_RULES, ScoringRules
from levelup.models.activity import Activity, PatternBonus, XPBreakdown
from levelup.models.progression import LevelInfo, level_of

logger = logging.getLogger(__name__)

_LIST_LINE = re.compile(r"^(?:\d+\.|[-•])", re.MULTILINE)
_NUMBERED_LINE = re.compile(r"^\d+\.")


def round_half_up(value: float) -> int:
    """Round to nearest integer with .5 going up (not banker's rounding)"""
    return int(math.floor(value + 0.5))


def score_activity(activity: Activity, rules: ScoringRules = DEFAULT_RULES) -> XPBreakdown:
    """
    Compute the itemized XP for one activity

    Args:
        activity: Activity to score
        rules: Category and pattern tables

    Returns:
        XPBreakdown whose total equals the sum of its components

    Raises:
        InvalidIntervalError: If end_time is before start_time
    """
    if activity.end_time < activity.start_time:
        raise InvalidIntervalError(activity.start_time, activity.end_time)

    base = round_half_up(activity.duration_hours * XP_PER_HOUR)

    multiplier = rules.multiplier_for(activity.category)
    category_bonus = round_half_up(base * (multiplier - 1))

    structure_bonus = 0
    step_bonus = 0
    pattern_bonuses: List[PatternBonus] = []

    content = activity.content
    if content:
        if _LIST_LINE.search(content):
            structure_bonus = STRUCTURE_BONUS

        steps = sum(1 for line in content.split("\n") if _NUMBERED_LINE.match(line))
        step_bonus = steps * STEP_BONUS

        for pattern in rules.patterns:
            if pattern.matches(content):
                pattern_bonuses.append(PatternBonus(name=pattern.name, bonus=pattern.bonus))

    total = (
        base
        + category_bonus
        + structure_bonus
        + step_bonus
        + sum(p.bonus for p in pattern_bonuses)
    )

    return XPBreakdown(
        base=base,
        category_bonus=category_bonus,
        structure_bonus=structure_bonus,
        step_bonus=step_bonus,
        pattern_bonuses=tuple(pattern_bonuses),
        total=total,
    )


def calculate_activity_xp(activity: Activity, rules: ScoringRules = DEFAULT_RULES) -> int:
    """Total XP for an activity; shared by live preview and submit"""
    return score_activity(activity, rules).total


def score_activities(
    activities: Iterable[Activity],
    rules: ScoringRules = DEFAULT_RULES
) -> Tuple[List[XPBreakdown], int]:
    """
    Score a batch of activities independently

    All activities are validated before any result is returned, so a single
    invalid interval aborts the whole batch.

    Returns:
        (breakdowns in input order, sum of their totals)
    """
    breakdowns = [score_activity(activity, rules) for activity in activities]
    total = sum(b.total for b in breakdowns)
    logger.debug(f"Scored {len(breakdowns)} activities for {total} XP")
    return breakdowns, total


def calculate_level_from_xp(total_xp: int) -> LevelInfo:
    """
    Calculate level and in-level progress from total XP

    Returns:
        LevelInfo(xp, level, current_level_xp, xp_to_next_level, progress_fraction)
    """
    level = level_of(total_xp)
    current_level_xp = total_xp % XP_PER_LEVEL

    return LevelInfo(
        xp=total_xp,
        level=level,
        current_level_xp=current_level_xp,
        xp_to_next_level=XP_PER_LEVEL - current_level_xp,
        progress_fraction=current_level_xp / XP_PER_LEVEL,
    )


def describe_breakdown(breakdown: XPBreakdown, category: Optional[str] = None) -> List[Tuple[str, int]]:
    """
    Non-zero breakdown lines in display order, for preview panels

    Returns:
        [(label, xp), ...] ending with ("total", xp)
    """
    lines = [("base", breakdown.base)]
    if breakdown.category_bonus:
        lines.append((f"category:{category}" if category else "category", breakdown.category_bonus))
    if breakdown.structure_bonus:
        lines.append(("structure", breakdown.structure_bonus))
    if breakdown.step_bonus:
        lines.append(("steps", breakdown.step_bonus))
    for pattern in breakdown.pattern_bonuses:
        lines.append((pattern.name, pattern.bonus))
    lines.append(("total", breakdown.total))
    return lines
