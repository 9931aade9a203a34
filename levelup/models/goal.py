"""Goal and task models"""
from enum import Enum
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from uuid import uuid4

from levelup.config import XP_PER_LEVEL
from levelup.models.progression import level_of


class TaskPriority(str, Enum):
    """Milestones are high priority; daily tasks are medium or low"""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class TaskStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    DELEGATED_TO_AI = "delegated_to_ai"


class GoalStatus(str, Enum):
    ACTIVE = "active"
    PAUSED = "paused"


class Task(BaseModel):
    """Milestone or daily task belonging to a goal"""
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid4()))
    goal_id: str
    title: str
    description: Optional[str] = None
    xp_reward: int = Field(default=0, ge=0)
    duration_minutes: int = Field(default=0, ge=0)
    priority: TaskPriority = TaskPriority.MEDIUM
    status: TaskStatus = TaskStatus.PENDING
    ai_assignable: bool = False
    created_at: datetime = Field(default_factory=datetime.now)
    completed_at: Optional[datetime] = None

    @property
    def is_milestone(self) -> bool:
        return self.priority == TaskPriority.HIGH

    @property
    def is_completed(self) -> bool:
        return self.status == TaskStatus.COMPLETED


class Goal(BaseModel):
    """
    A user goal in one category, accumulating XP

    Level and progress are derived from ``xp`` on every access, so they can
    never drift from it.
    """
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid4()))
    user_id: str
    category: str
    title: str
    description: str = ""
    xp: int = Field(default=0, ge=0)
    status: GoalStatus = GoalStatus.ACTIVE
    created_at: datetime = Field(default_factory=datetime.now)
    tasks: tuple[Task, ...] = ()

    @property
    def level(self) -> int:
        return level_of(self.xp)

    @property
    def current_level_xp(self) -> int:
        return self.xp % XP_PER_LEVEL

    @property
    def progress_fraction(self) -> float:
        return self.current_level_xp / XP_PER_LEVEL

    @property
    def milestones(self) -> tuple[Task, ...]:
        return tuple(t for t in self.tasks if t.is_milestone)

    @property
    def daily_tasks(self) -> tuple[Task, ...]:
        return tuple(t for t in self.tasks if not t.is_milestone)
