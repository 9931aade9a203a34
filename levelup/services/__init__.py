"""
Service Layer Package

- GamificationService: scoring, XP application and achievement checks
- ServiceContainer: configuration loaded once per process
"""

from levelup.services.container import ServiceContainer, get_container, init_container, reset_container
from levelup.services.gamification_service import GamificationService

__all__ = [
    "ServiceContainer",
    "get_container",
    "init_container",
    "reset_container",
    "GamificationService",
]
