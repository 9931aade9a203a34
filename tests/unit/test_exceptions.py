"""Unit tests for custom exception hierarchy"""
import logging
from datetime import datetime

from levelup.exceptions import (
    ConfigurationError,
    InvalidDeltaError,
    InvalidIntervalError,
    LevelUpError,
    TaskAlreadyCompletedError,
    TaskNotFoundError,
    ValidationError,
)


class TestLevelUpError:
    """Test base exception class"""

    def test_basic_exception(self):
        error = LevelUpError("Test error")
        assert error.message == "Test error"
        assert error.error_id is not None
        assert isinstance(error.timestamp, datetime)
        assert error.context == {}

    def test_exception_with_cause(self):
        original_error = ValueError("Invalid value")
        error = LevelUpError(message="Load failed", cause=original_error)
        assert error.cause == original_error

    def test_to_dict(self):
        error = LevelUpError("Failed", operation="apply_xp", context={"goal_id": "g1"})

        data = error.to_dict()

        assert data["error"] == "LevelUpError"
        assert data["message"] == "Failed"
        assert data["operation"] == "apply_xp"
        assert data["context"] == {"goal_id": "g1"}
        assert "error_id" in data
        assert "timestamp" in data

    def test_logs_on_creation(self, caplog):
        with caplog.at_level(logging.WARNING, logger="levelup.exceptions"):
            LevelUpError("Something broke")

        assert "LevelUpError: Something broke" in caplog.text


class TestValidationErrors:
    """Test precondition violation errors"""

    def test_invalid_interval(self):
        start = datetime(2024, 1, 1, 10, 0)
        end = datetime(2024, 1, 1, 9, 0)

        error = InvalidIntervalError(start, end)

        assert isinstance(error, ValidationError)
        assert isinstance(error, LevelUpError)
        assert error.code == "InvalidIntervalError"
        assert error.operation == "score_activity"
        assert error.context["start_time"] == start.isoformat()
        assert error.value == end.isoformat()

    def test_invalid_delta(self):
        error = InvalidDeltaError(-10, goal_id="g1")

        assert error.field == "delta"
        assert error.to_dict()["context"] == {"field": "delta", "value": -10, "goal_id": "g1"}

    def test_task_errors(self):
        assert TaskNotFoundError("t1", "g1").context["goal_id"] == "g1"
        assert TaskAlreadyCompletedError("t1", "g1").value == "t1"


class TestConfigurationError:

    def test_config_key_in_context(self):
        error = ConfigurationError("Missing file", config_key="SCORING_RULES_PATH")

        assert error.config_key == "SCORING_RULES_PATH"
        assert error.context["config_key"] == "SCORING_RULES_PATH"
