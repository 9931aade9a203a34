"""
Scoring Rules

Immutable category multiplier and keyword pattern tables consumed by the
activity scorer. Loaded once at process start (see
levelup.services.container.init_container) and passed explicitly to callers.

Default categories:
- Health: 1.2 (health activities often require more effort)
- Career: 1.1
- Learning: 1.15
- Personal: 1.0
- Finance: 1.05

Default patterns (case-insensitive substring match, all matches count):
- effort: +10
- planning: +5
- measurement: +8
"""

from typing import Dict, List, Optional, Any
from pathlib import Path
import json
import logging

from pydantic import BaseModel, ConfigDict, Field, field_validator

from levelup.config import DEFAULT_MULTIPLIER
from levelup.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class CategoryRule(BaseModel):
    """Multiplier applied to base XP for a category"""
    model_config = ConfigDict(frozen=True)

    category_id: str
    multiplier: float = Field(default=DEFAULT_MULTIPLIER, ge=0)


class PatternRule(BaseModel):
    """Keyword group that awards a flat bonus when any keyword appears in content"""
    model_config = ConfigDict(frozen=True)

    name: str
    keywords: frozenset[str]
    bonus: int = Field(ge=0)

    @field_validator('keywords', mode='before')
    @classmethod
    def lowercase_keywords(cls, v):
        """Store keywords lowercased so matching is case-insensitive"""
        return frozenset(str(k).lower() for k in v)

    def matches(self, content: Optional[str]) -> bool:
        if not content:
            return False
        lowered = content.lower()
        return any(keyword in lowered for keyword in self.keywords)


class ScoringRules(BaseModel):
    """Category and pattern tables; patterns keep declaration order"""
    model_config = ConfigDict(frozen=True)

    categories: tuple[CategoryRule, ...] = ()
    patterns: tuple[PatternRule, ...] = ()

    def multiplier_for(self, category: Optional[str]) -> float:
        """Multiplier for a category; unknown categories are neutral"""
        for rule in self.categories:
            if rule.category_id == category:
                return rule.multiplier
        logger.debug(f"Unknown category {category!r}, using neutral multiplier")
        return DEFAULT_MULTIPLIER

    @property
    def category_ids(self) -> List[str]:
        return [rule.category_id for rule in self.categories]


DEFAULT_CATEGORY_MULTIPLIERS: Dict[str, float] = {
    "Health": 1.2,
    "Career": 1.1,
    "Learning": 1.15,
    "Personal": 1.0,
    "Finance": 1.05,
}

DEFAULT_PATTERNS: List[Dict[str, Any]] = [
    {"name": "effort", "keywords": ["intense", "challenging", "advanced", "complex"], "bonus": 10},
    {"name": "planning", "keywords": ["preparation", "plan", "steps", "checklist"], "bonus": 5},
    {"name": "measurement", "keywords": ["sets", "reps", "minutes", "target", "goal"], "bonus": 8},
]


def build_scoring_rules(
    categories: Optional[Dict[str, Optional[float]]] = None,
    patterns: Optional[List[Dict[str, Any]]] = None
) -> ScoringRules:
    """
    Build an immutable ScoringRules from plain tables

    Args:
        categories: {category_id: multiplier}; a None multiplier means 1.0
        patterns: [{'name', 'keywords', 'bonus'}] in declaration order

    Raises:
        ConfigurationError: If a multiplier or bonus is invalid
    """
    if categories is None:
        categories = DEFAULT_CATEGORY_MULTIPLIERS
    if patterns is None:
        patterns = DEFAULT_PATTERNS

    try:
        category_rules = tuple(
            CategoryRule(
                category_id=category_id,
                multiplier=DEFAULT_MULTIPLIER if multiplier is None else multiplier,
            )
            for category_id, multiplier in categories.items()
        )
        pattern_rules = tuple(PatternRule(**pattern) for pattern in patterns)
    except (ValueError, TypeError) as e:
        raise ConfigurationError(
            f"Invalid scoring rules: {e}",
            config_key="SCORING_RULES_PATH",
            cause=e
        )

    return ScoringRules(categories=category_rules, patterns=pattern_rules)


DEFAULT_RULES: ScoringRules = build_scoring_rules()


def load_scoring_rules(path: Optional[Path] = None) -> ScoringRules:
    """
    Load scoring rules, overlaying a JSON file on the defaults

    File format:
        {
            "categories": {"Health": 1.2, "Chess": null},
            "patterns": [{"name": "effort", "keywords": ["intense"], "bonus": 10}]
        }

    Categories in the file are merged into the default table; new categories
    with no multiplier get 1.0. A "patterns" list replaces the default patterns.

    Args:
        path: JSON file path; None returns the defaults

    Returns:
        ScoringRules
    """
    if path is None:
        return DEFAULT_RULES

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(
            f"Could not read scoring rules from {path}: {e}",
            config_key="SCORING_RULES_PATH",
            cause=e
        )

    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Scoring rules file {path} must contain a JSON object",
            config_key="SCORING_RULES_PATH"
        )

    overrides = data.get("categories") or {}
    if not isinstance(overrides, dict):
        raise ConfigurationError(
            f"\"categories\" in {path} must be an object of category -> multiplier",
            config_key="SCORING_RULES_PATH"
        )
    patterns = data.get("patterns", DEFAULT_PATTERNS)
    if not isinstance(patterns, list) or not all(isinstance(p, dict) for p in patterns):
        raise ConfigurationError(
            f"\"patterns\" in {path} must be a list of pattern objects",
            config_key="SCORING_RULES_PATH"
        )

    categories = dict(DEFAULT_CATEGORY_MULTIPLIERS)
    categories.update(overrides)

    rules = build_scoring_rules(categories, patterns)
    logger.info(
        f"Loaded scoring rules from {path}: "
        f"{len(rules.categories)} categories, {len(rules.patterns)} patterns"
    )
    return rules
