"""
Standardized exception hierarchy for levelup
Provides structured context and consistent logging for precondition violations
"""

from datetime import datetime, timezone
from typing import Optional, Dict, Any
from uuid import uuid4
import logging

logger = logging.getLogger(__name__)


class LevelUpError(Exception):
    """
    Base exception for all levelup errors

    Provides:
    - Automatic timestamping
    - Error ID for tracing
    - Structured context
    - Automatic logging

    The engine only produces structured signals; translating them into
    user-facing text is left to presentation layers.

    Example:
        raise LevelUpError(
            message="Failed to apply XP",
            operation="apply_xp",
            context={"goal_id": "abc-123"}
        )
    """

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
        error_id: Optional[str] = None
    ):
        super().__init__(message)
        self.message = message
        self.operation = operation
        self.context = context or {}
        self.cause = cause
        self.error_id = error_id or str(uuid4())
        self.timestamp = datetime.now(timezone.utc)

        # Auto-log on creation
        self._log_error()

    @property
    def code(self) -> str:
        """Stable machine-readable error kind"""
        return self.__class__.__name__

    def _log_error(self) -> None:
        """Log error with full context"""
        log_data = {
            "error_type": self.code,
            "error_message": self.message,  # Avoid conflict with logging's 'message' field
            "error_id": self.error_id,
            "operation": self.operation,
            "error_context": self.context,
            "timestamp": self.timestamp.isoformat()
        }

        if self.cause:
            log_data["cause"] = str(self.cause)
            logger.warning(f"{self.code}: {self.message}", extra=log_data, exc_info=self.cause)
        else:
            logger.warning(f"{self.code}: {self.message}", extra=log_data)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize exception as a structured error signal"""
        return {
            "error": self.code,
            "message": self.message,
            "operation": self.operation,
            "context": self.context,
            "error_id": self.error_id,
            "timestamp": self.timestamp.isoformat()
        }


# ==========================================
# Validation Errors (precondition violations)
# ==========================================

class ValidationError(LevelUpError):
    """
    Raised when an input record violates an engine precondition

    Example:
        raise ValidationError(
            message="XP delta must be a non-negative integer",
            field="delta",
            value=-5
        )
    """

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
        **kwargs
    ):
        self.field = field
        self.value = value
        merged = {"field": field, "value": value}
        merged.update(context or {})
        super().__init__(
            message=message,
            context=merged,
            **kwargs
        )


class InvalidIntervalError(ValidationError):
    """Activity end time is before its start time"""

    def __init__(self, start_time: datetime, end_time: datetime, **kwargs):
        self.start_time = start_time
        self.end_time = end_time
        super().__init__(
            message="Activity end time must not be before start time",
            field="end_time",
            value=end_time.isoformat(),
            context={"start_time": start_time.isoformat()},
            operation=kwargs.pop("operation", "score_activity"),
            **kwargs
        )


class InvalidDeltaError(ValidationError):
    """Negative or non-integer XP delta; XP is a permanent progression record"""

    def __init__(self, delta: int, goal_id: Optional[str] = None, **kwargs):
        self.delta = delta
        super().__init__(
            message="XP delta must not be negative",
            field="delta",
            value=delta,
            context={"goal_id": goal_id},
            operation=kwargs.pop("operation", "apply_xp"),
            **kwargs
        )


class TaskNotFoundError(ValidationError):
    """Task id does not belong to the goal"""

    def __init__(self, task_id: str, goal_id: str, **kwargs):
        self.task_id = task_id
        self.goal_id = goal_id
        super().__init__(
            message="Task not found on goal",
            field="task_id",
            value=task_id,
            context={"goal_id": goal_id},
            operation=kwargs.pop("operation", "complete_task"),
            **kwargs
        )


class TaskAlreadyCompletedError(ValidationError):
    """Task was already completed; its XP reward has been awarded"""

    def __init__(self, task_id: str, goal_id: str, **kwargs):
        self.task_id = task_id
        self.goal_id = goal_id
        super().__init__(
            message="Task is already completed",
            field="task_id",
            value=task_id,
            context={"goal_id": goal_id},
            operation=kwargs.pop("operation", "complete_task"),
            **kwargs
        )


# ==========================================
# Configuration Errors
# ==========================================

class ConfigurationError(LevelUpError):
    """Scoring or achievement configuration is invalid or missing"""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        **kwargs
    ):
        self.config_key = config_key
        context = kwargs.pop("context", None) or {}
        context.setdefault("config_key", config_key)
        super().__init__(
            message=message,
            context=context,
            **kwargs
        )
