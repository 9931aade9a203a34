"""Tests for the command-line entry point"""
import json

from levelup.main import main


def test_score_command(capsys):
    exit_code = main([
        "score",
        "--category", "Health",
        "--start", "2024-03-14T09:00:00",
        "--end", "2024-03-14T10:00:00",
        "--content", "1. Warm-up\n2. Main set\n",
    ])

    assert exit_code == 0
    data = json.loads(capsys.readouterr().out)
    assert data["base"] == 15
    assert data["category_bonus"] == 3
    assert data["total"] == 32


def test_level_command(capsys):
    assert main(["level", "1050"]) == 0

    data = json.loads(capsys.readouterr().out)
    assert data["level"] == 2
    assert data["current_level_xp"] == 50


def test_invalid_interval_reports_structured_error(capsys):
    exit_code = main([
        "score",
        "--category", "Health",
        "--start", "2024-03-14T10:00:00",
        "--end", "2024-03-14T09:00:00",
    ])

    assert exit_code == 1
    err = capsys.readouterr().err
    error = json.loads(err[err.index("{\n"):])
    assert error["error"] == "InvalidIntervalError"
    assert error["context"]["field"] == "end_time"
