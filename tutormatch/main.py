"""Command-line entry point for Tutor Match discovery."""

from dotenv import load_dotenv
load_dotenv()

import argparse
import json
import math
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from tutormatch.adapters import AdapterError, RestProfileStore
from tutormatch.config.environment import EnvironmentConfig
from tutormatch.config.exceptions import ConfigurationError
from tutormatch.config.loader import load_config
from tutormatch.config.models import AppConfig, StoreBackend
from tutormatch.discovery import DiscoveryService, LearnerNotFoundError
from tutormatch.logging import get_logger
from tutormatch.logging.config import configure_logging
from tutormatch.matching import MatchResult, filter_by_search_term
from tutormatch.persistence import (
    PersistenceError,
    SqlProfileStore,
    close_database,
    get_session,
    init_database,
)

logger = get_logger(__name__, component="cli")


def load_runtime_config(
    config_path: Optional[Path], log_level_override: Optional[str]
) -> Tuple[AppConfig, EnvironmentConfig]:
    """
    Load configuration and resolve the effective log level.

    Args:
        config_path: Path to configuration file
        log_level_override: Log level from CLI (takes precedence)

    Returns:
        Tuple of (AppConfig, EnvironmentConfig) with env_config.log_level resolved

    Raises:
        ConfigurationError: If configuration is invalid
    """
    app_config, env_config = load_config(config_path)

    # Log level priority: CLI > Environment > Config
    if log_level_override:
        env_config.log_level = log_level_override
    elif env_config.log_level:
        pass
    else:
        env_config.log_level = app_config.logging.level

    return app_config, env_config


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tutormatch",
        description="Tutor Match - list approved tutors near a learner, nearest first",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: config.yaml if present, else built-in defaults)",
    )
    parser.add_argument("--learner-id", required=True, help="Learner to find tutors for")
    parser.add_argument(
        "--all",
        action="store_true",
        dest="all_tutors",
        help="List all tutors instead of only those matching the learner's subjects",
    )
    parser.add_argument(
        "--max-distance",
        type=_non_negative_float,
        default=None,
        metavar="KM",
        help="Only list tutors within this many kilometres",
    )
    parser.add_argument(
        "--limit",
        type=_non_negative_int,
        default=None,
        metavar="N",
        help="List at most N tutors",
    )
    parser.add_argument("--subject", default=None, help="Only list tutors offering this subject")
    parser.add_argument(
        "--search",
        default=None,
        metavar="TERM",
        help="Only list tutors whose name or subjects contain TERM (case-insensitive)",
    )
    parser.add_argument(
        "--format",
        choices=["table", "json"],
        default="table",
        dest="output_format",
        help="Output format (default: table)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (overrides config and environment)",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Main entry point for the tutormatch command.

    Returns:
        Exit code (0 for success, including an empty listing; 1 for failure).
    """
    args = build_parser().parse_args(argv)

    try:
        app_config, env_config = load_runtime_config(args.config, args.log_level)

        # Logs go to stderr so stdout carries only the listing
        configure_logging(
            level=env_config.log_level,
            format_type=app_config.logging.format,
            environment=env_config.environment,
            stream=sys.stderr,
        )

        logger.info(
            "Tutor discovery starting",
            extra={
                "event": "cli.starting",
                "config_path": str(args.config) if args.config else None,
                "store_backend": app_config.store.backend,
                "listing": "all" if args.all_tutors else "matching",
            },
        )

        results = run_discovery(args, app_config, env_config)
        if args.search:
            results = _apply_search(results, args.search, _effective_limit(args, app_config))

        print(render_results(results, args.output_format))

        logger.info(
            f"Listed {len(results)} tutors",
            extra={"event": "cli.completed", "results": len(results)},
        )
        return 0

    except ConfigurationError as e:
        print(f"Configuration Error: {e}", file=sys.stderr)
        logger.error(
            f"Configuration error: {e}",
            extra={"event": "config.error", "error_type": "ConfigurationError"},
        )
        return 1
    except LearnerNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except (PersistenceError, AdapterError) as e:
        print(f"Profile store error: {e}", file=sys.stderr)
        logger.error(
            f"Profile store failed: {e}",
            extra={"event": "store.error", "error_type": type(e).__name__},
        )
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return 1


def run_discovery(
    args: argparse.Namespace, app_config: AppConfig, env_config: EnvironmentConfig
) -> List[MatchResult]:
    """Open the configured profile store and run the requested listing."""
    default_options = app_config.matching.to_options()
    if args.search:
        # Limit is applied after the search filter
        default_options = replace(default_options, limit=None)

    if app_config.store.backend == StoreBackend.REST:
        store = RestProfileStore(
            base_url=env_config.backend_url,
            api_key=env_config.backend_api_key,
            timeout=app_config.advanced.http_request_timeout,
            user_agent=app_config.advanced.user_agent,
        )
        return _list(DiscoveryService(store, default_options), args)

    init_database(env_config.database_url)
    try:
        with get_session() as session:
            return _list(DiscoveryService(SqlProfileStore(session), default_options), args)
    finally:
        close_database()


def _list(service: DiscoveryService, args: argparse.Namespace) -> List[MatchResult]:
    listing = service.all_tutors if args.all_tutors else service.matching_tutors
    return listing(
        args.learner_id,
        max_distance_km=args.max_distance,
        limit=None if args.search else args.limit,
        subject=args.subject,
    )


def _effective_limit(args: argparse.Namespace, app_config: AppConfig) -> Optional[int]:
    if args.limit is not None:
        return args.limit
    return app_config.matching.default_limit


def _apply_search(
    results: List[MatchResult], term: str, limit: Optional[int]
) -> List[MatchResult]:
    """Narrow ranked results by a search term, then cut to the limit."""
    found = filter_by_search_term(results, term)
    return found if limit is None else found[:limit]


def render_results(results: Sequence[MatchResult], output_format: str) -> str:
    """Render a listing as a text table or a JSON array."""
    if output_format == "json":
        return json.dumps([_result_to_dict(result) for result in results], indent=2)

    if not results:
        return "No tutors found."

    rows = [
        (
            str(rank),
            result.tutor_id,
            (result.tutor.full_name if result.tutor else None) or "-",
            f"{result.distance_km:.1f}",
            ", ".join(result.matched_subjects) or "-",
        )
        for rank, result in enumerate(results, start=1)
    ]
    headers = ("#", "TUTOR ID", "NAME", "KM", "MATCHED SUBJECTS")
    widths = [max(len(row[i]) for row in [headers, *rows]) for i in range(len(headers))]

    lines = ["  ".join(cell.ljust(width) for cell, width in zip(headers, widths)).rstrip()]
    for row in rows:
        lines.append("  ".join(cell.ljust(width) for cell, width in zip(row, widths)).rstrip())
    return "\n".join(lines)


def _result_to_dict(result: MatchResult) -> dict:
    tutor = result.tutor
    return {
        "tutor_id": result.tutor_id,
        "full_name": tutor.full_name if tutor else None,
        "location_city": tutor.location_city if tutor else None,
        "distance_km": round(result.distance_km, 3),
        "matched_subjects": list(result.matched_subjects),
        "subjects": list(tutor.subjects) if tutor else [],
        "rating": tutor.rating if tutor else None,
    }


def _non_negative_float(value: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a number, got: {value!r}")
    if not math.isfinite(number) or number < 0:
        raise argparse.ArgumentTypeError(f"must be a finite non-negative number, got: {value}")
    return number


def _non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got: {value!r}")
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be non-negative, got: {value}")
    return number


if __name__ == "__main__":
    sys.exit(main())
