"""Progression state models"""
from pydantic import BaseModel, ConfigDict, Field

from levelup.config import XP_PER_LEVEL
from levelup.exceptions import ValidationError


def level_of(total_xp: int) -> int:
    """Level for a cumulative XP amount (1-indexed)"""
    if total_xp < 0:
        raise ValidationError("XP must not be negative", field="total_xp", value=total_xp)
    return total_xp // XP_PER_LEVEL + 1


class LevelInfo(BaseModel):
    """Level and in-level progress derived from cumulative XP"""
    model_config = ConfigDict(frozen=True)

    xp: int = Field(ge=0)
    level: int = Field(ge=1)
    current_level_xp: int = Field(ge=0)
    xp_to_next_level: int = Field(gt=0)
    progress_fraction: float = Field(ge=0, lt=1)


class ProgressSnapshot(BaseModel):
    """Inputs the achievement evaluator checks criteria against"""
    model_config = ConfigDict(frozen=True)

    total_xp: int = Field(default=0, ge=0)
    level: int = Field(default=1, ge=1)
    streak_days: int = Field(default=0, ge=0)
    tasks_completed_count: int = Field(default=0, ge=0)
    milestones_completed_count: int = Field(default=0, ge=0)
    goals_count: int = Field(default=0, ge=0)


class UserProgress(BaseModel):
    """Aggregate progression across all of a user's goals"""
    model_config = ConfigDict(frozen=True)

    total_xp: int = Field(ge=0)
    level: int = Field(ge=1)
    streak_days: int = Field(ge=0)
    level_info: LevelInfo
    category_xp: dict[str, int]
    tasks_completed: int = Field(ge=0)
    tasks_total: int = Field(ge=0)
