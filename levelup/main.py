"""Command-line entry point for scoring activities and inspecting levels"""
import argparse
import json
import logging
import sys
from datetime import datetime
from typing import List, Optional

from levelup.config import validate_config, LOG_LEVEL
from levelup.exceptions import LevelUpError
from levelup.gamification.xp_system import calculate_level_from_xp, describe_breakdown, score_activity
from levelup.models.activity import Activity
from levelup.services.container import init_container, reset_container

# Configure logging
logging.basicConfig(
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    level=getattr(logging, LOG_LEVEL.upper(), logging.INFO)
)

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="levelup", description="XP scoring and progression")
    sub = parser.add_subparsers(dest="command", required=True)

    score = sub.add_parser("score", help="Score a single activity")
    score.add_argument("--category", required=True)
    score.add_argument("--start", required=True, type=datetime.fromisoformat, help="ISO start time")
    score.add_argument("--end", required=True, type=datetime.fromisoformat, help="ISO end time")
    score.add_argument("--content", default=None, help="Activity details; '-' reads stdin")

    level = sub.add_parser("level", help="Show level info for an XP total")
    level.add_argument("xp", type=int)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Run the CLI; returns a process exit code"""
    args = build_parser().parse_args(argv)

    try:
        validate_config()
        container = init_container()

        if args.command == "score":
            content = sys.stdin.read() if args.content == "-" else args.content
            activity = Activity(
                category=args.category,
                start_time=args.start,
                end_time=args.end,
                content=content,
            )
            breakdown = score_activity(activity, container.rules)
            for label, xp in describe_breakdown(breakdown, activity.category):
                logger.debug(f"{label}: {xp}")
            print(breakdown.model_dump_json(indent=2))
        else:
            print(calculate_level_from_xp(args.xp).model_dump_json(indent=2))

    except LevelUpError as e:
        print(json.dumps(e.to_dict(), indent=2), file=sys.stderr)
        return 1
    finally:
        reset_container()

    return 0


if __name__ == "__main__":
    sys.exit(main())
