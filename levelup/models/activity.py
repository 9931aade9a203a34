"""Activity and XP breakdown models"""
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, model_validator


class Activity(BaseModel):
    """A scheduled or completed calendar activity handed to the scorer"""
    model_config = ConfigDict(frozen=True)

    category: str
    start_time: datetime
    end_time: datetime
    content: Optional[str] = None  # free-text details, e.g. a workout plan
    title: Optional[str] = None

    @property
    def duration_hours(self) -> float:
        """Duration derived from the interval, never stored"""
        return (self.end_time - self.start_time).total_seconds() / 3600


class PatternBonus(BaseModel):
    """A matched keyword pattern and the flat bonus it contributed"""
    model_config = ConfigDict(frozen=True)

    name: str
    bonus: int = Field(ge=0)


class XPBreakdown(BaseModel):
    """Itemized XP for a single activity"""
    model_config = ConfigDict(frozen=True)

    base: int
    category_bonus: int
    structure_bonus: int = 0
    step_bonus: int = 0
    pattern_bonuses: tuple[PatternBonus, ...] = ()
    total: int

    @model_validator(mode='after')
    def check_total(self) -> 'XPBreakdown':
        """Total must equal the sum of the itemized components"""
        expected = (
            self.base
            + self.category_bonus
            + self.structure_bonus
            + self.step_bonus
            + self.pattern_total
        )
        if self.total != expected:
            raise ValueError(f"total {self.total} does not match components sum {expected}")
        return self

    @property
    def pattern_total(self) -> int:
        return sum(p.bonus for p in self.pattern_bonuses)
