"""
Service Container - Process-wide configuration lifecycle

Loads the scoring rules and achievement definitions once at startup and hands
out the GamificationService built from them.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import logging

from levelup import config
from levelup.gamification.achievement_system import load_achievements
from levelup.gamification.rules import ScoringRules, load_scoring_rules
from levelup.models.achievement import Achievement

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """
    Holds the immutable configuration for the process.

    Services are lazy-loaded on first access via properties.
    """

    rules: ScoringRules
    achievements: tuple[Achievement, ...]

    _gamification_service: Optional[object] = field(default=None, init=False, repr=False)

    @property
    def gamification_service(self):
        """Get GamificationService instance (lazy-loaded)"""
        if self._gamification_service is None:
            from levelup.services.gamification_service import GamificationService
            self._gamification_service = GamificationService(self.rules, self.achievements)
            logger.debug("GamificationService instantiated")
        return self._gamification_service


# Global container instance (initialized in main.py)
_container: Optional[ServiceContainer] = None


def get_container() -> ServiceContainer:
    """
    Get the global service container.

    Raises:
        RuntimeError: If container not initialized (call init_container first)
    """
    if _container is None:
        raise RuntimeError(
            "Service container not initialized. "
            "Call init_container() at startup before using services."
        )
    return _container


def init_container(
    rules_path: Optional[Path] = None,
    achievements_path: Optional[Path] = None
) -> ServiceContainer:
    """
    Initialize the global service container.

    Should be called once at process start. Paths default to
    SCORING_RULES_PATH and ACHIEVEMENTS_PATH from the environment.

    Returns:
        ServiceContainer: The initialized container
    """
    global _container

    _container = ServiceContainer(
        rules=load_scoring_rules(rules_path or config.SCORING_RULES_PATH),
        achievements=load_achievements(achievements_path or config.ACHIEVEMENTS_PATH),
    )

    logger.info("Service container initialized")
    return _container


def reset_container() -> None:
    """Tear down the global container (process shutdown and tests)"""
    global _container
    _container = None
    logger.debug("Service container reset")
