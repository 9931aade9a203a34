"""Achievement models for gamification"""
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, StrictInt
from datetime import datetime


class AchievementRarity(str, Enum):
    """Achievement rarity, lowest to highest"""
    COMMON = "common"
    RARE = "rare"
    EPIC = "epic"
    LEGENDARY = "legendary"


class AchievementCriteria(BaseModel):
    """Unlock condition: snapshot value of ``type`` must reach ``value``"""
    model_config = ConfigDict(frozen=True)

    type: str  # total_xp, level, streak, tasks_completed, milestones_completed, goals_count
    value: StrictInt = Field(ge=0)


class Achievement(BaseModel):
    """Achievement definition"""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str
    icon: str = "trophy"
    rarity: AchievementRarity = AchievementRarity.COMMON
    criteria: AchievementCriteria


class UnlockedAchievement(BaseModel):
    """An achievement unlocked at a point in time; never revoked"""
    model_config = ConfigDict(frozen=True)

    achievement: Achievement
    unlocked_at: datetime

    @property
    def achievement_id(self) -> str:
        return self.achievement.id
