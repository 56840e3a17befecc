"""CLI entry point for the decision-aware search engine."""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from decision_search.core.config import Settings
from decision_search.core.profiles import describe_metrics, describe_profiles, valid_profiles
from decision_search.core.schemas import (
    SUPPORTED_CURRENCIES,
    ErrorResponse,
    SearchRequest,
    valid_skill_levels,
)
from decision_search.pipeline.orchestrator import build_orchestrator, export_response_json

DEFAULT_CONFIG = str(Path(__file__).resolve().parent / "config" / "settings.yaml")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Decision-aware search - rank results for a profile and constraints",
    )
    subparsers = parser.add_subparsers(dest="command")

    # --- search subcommand ---
    search_parser = subparsers.add_parser("search", help="Rank results for a query")
    search_parser.add_argument("query", help="Search query text")
    search_parser.add_argument(
        "--profile",
        default="casual",
        help=f"User profile: {', '.join(valid_profiles())} (default: casual)",
    )
    search_parser.add_argument(
        "--budget",
        action="store_true",
        help="Apply the budget constraint",
    )
    search_parser.add_argument(
        "--budget-amount",
        type=float,
        default=None,
        help="Budget amount (implies --budget)",
    )
    search_parser.add_argument(
        "--currency",
        default="USD",
        help=f"Currency code: {', '.join(SUPPORTED_CURRENCIES)} (default: USD)",
    )
    search_parser.add_argument(
        "--reading-time",
        type=int,
        default=None,
        help="Maximum reading time in minutes",
    )
    search_parser.add_argument(
        "--skill-level",
        default=None,
        help=f"Skill level: {', '.join(valid_skill_levels())}",
    )
    search_parser.add_argument(
        "--config",
        default=DEFAULT_CONFIG,
        help=f"Path to settings YAML file (default: {DEFAULT_CONFIG})",
    )
    search_parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )

    # --- catalog subcommands ---
    subparsers.add_parser("profiles", help="Show available profiles and their weights")
    metrics_parser = subparsers.add_parser("metrics", help="Show the metrics used for ranking")
    metrics_parser.add_argument(
        "--config",
        default=DEFAULT_CONFIG,
        help=f"Path to settings YAML file (default: {DEFAULT_CONFIG})",
    )

    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        sys.exit(1)
    return args


def setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def load_settings(path: str) -> Settings:
    """Load settings; the default path may be absent, an explicit one may not."""
    if path == DEFAULT_CONFIG and not Path(path).exists():
        return Settings()
    return Settings.from_yaml(path)


def build_request(args: argparse.Namespace) -> SearchRequest:
    """Build a validated request from CLI arguments. Raises pydantic ValidationError."""
    return SearchRequest.model_validate({
        "query": args.query,
        "profile": args.profile,
        "constraints": {
            "budget": args.budget,
            "budget_amount": args.budget_amount,
            "currency": args.currency,
            "reading_time": args.reading_time,
            "skill_level": args.skill_level,
        },
    })


async def run_search(settings: Settings, request: SearchRequest) -> str:
    """Run one search and return the response as JSON."""
    orchestrator = build_orchestrator(settings)
    response = await orchestrator.search(request)
    return export_response_json(response)


def cmd_search(args: argparse.Namespace) -> None:
    """Handle search subcommand."""
    try:
        settings = load_settings(args.config)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        request = build_request(args)
    except ValidationError as e:
        print(ErrorResponse.from_validation_error(e).model_dump_json(indent=2))
        sys.exit(1)

    print(asyncio.run(run_search(settings, request)))


def cmd_metrics(args: argparse.Namespace) -> None:
    """Handle metrics subcommand."""
    try:
        settings = load_settings(args.config)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        sys.exit(1)
    print(json.dumps(describe_metrics(settings.ranking.relevance_weight), indent=2))


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    setup_logging(getattr(args, "verbose", False))

    if args.command == "profiles":
        print(json.dumps({"profiles": describe_profiles()}, indent=2))
    elif args.command == "metrics":
        cmd_metrics(args)
    else:
        cmd_search(args)


if __name__ == "__main__":
    main()
