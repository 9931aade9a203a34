"""Configuration management"""
import os
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv

from levelup.exceptions import ConfigurationError

load_dotenv()

# Logging
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

# Scoring rules override (JSON file with "categories" and/or "patterns")
# Empty means the built-in tables in levelup.gamification.rules are used.
SCORING_RULES_PATH: Optional[Path] = (
    Path(os.environ["SCORING_RULES_PATH"]) if os.getenv("SCORING_RULES_PATH") else None
)

# Achievement definitions override (JSON list)
ACHIEVEMENTS_PATH: Optional[Path] = (
    Path(os.environ["ACHIEVEMENTS_PATH"]) if os.getenv("ACHIEVEMENTS_PATH") else None
)

# Scoring constants
XP_PER_HOUR: int = 15
STRUCTURE_BONUS: int = 10
STEP_BONUS: int = 2
DEFAULT_MULTIPLIER: float = 1.0

# Progression constants
XP_PER_LEVEL: int = 1000


# Validation
def validate_config() -> None:
    """Validate configured override paths"""
    if LOG_LEVEL.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        raise ConfigurationError(f"Unknown LOG_LEVEL: {LOG_LEVEL}", config_key="LOG_LEVEL")
    if SCORING_RULES_PATH is not None and not SCORING_RULES_PATH.is_file():
        raise ConfigurationError(
            f"Scoring rules file not found: {SCORING_RULES_PATH}",
            config_key="SCORING_RULES_PATH"
        )
    if ACHIEVEMENTS_PATH is not None and not ACHIEVEMENTS_PATH.is_file():
        raise ConfigurationError(
            f"Achievements file not found: {ACHIEVEMENTS_PATH}",
            config_key="ACHIEVEMENTS_PATH"
        )
