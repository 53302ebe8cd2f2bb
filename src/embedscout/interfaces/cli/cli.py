from __future__ import annotations

import argparse
import asyncio
import json
import sys
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import structlog

from embedscout.domain.exceptions import InvalidInputError, ResolutionFailedError
from embedscout.infrastructure.composition import resolver_session
from embedscout.infrastructure.config import AppConfig, load_config
from embedscout.infrastructure.logging.setup import configure_logging

log = structlog.get_logger(__name__)


def _parse_args(argv: Iterable[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="embedscout",
        description="Resolve stream URLs for a movie or episode.",
    )

    parser.add_argument("media_id", help="Media identifier (e.g. TMDB id).")
    parser.add_argument(
        "--kind",
        default="movie",
        choices=["movie", "tv", "series"],
        help="Media kind.",
    )
    parser.add_argument("--season", type=int, default=None, help="Season number.")
    parser.add_argument("--episode", type=int, default=None, help="Episode number.")

    # Config wiring flags (no business logic)
    parser.add_argument(
        "--config",
        default=None,
        help="Path to YAML config file.",
    )
    parser.add_argument(
        "--dotenv",
        default=None,
        help="Path to .env file.",
    )
    parser.add_argument(
        "--embed-url",
        default=None,
        help="Override the embed site origin.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Override log level.",
    )
    parser.add_argument(
        "--log-format",
        default=None,
        choices=["json", "console"],
        help="Override log format.",
    )

    return parser.parse_args(argv)


async def _run(config: AppConfig, args: argparse.Namespace) -> list[dict[str, Any]]:
    async with resolver_session(config) as use_case:
        results = await use_case.resolve(
            args.media_id, args.kind, args.season, args.episode
        )
    return [r.to_dict() for r in results]


def start(argv: Iterable[str] | None = None) -> int:
    """
    Process entrypoint.

    Prints the result list as JSON on stdout. Exit code 1 on invalid input or
    a failed resolution; an empty list is still a success.
    """
    if argv is None:
        argv = sys.argv[1:]

    args = _parse_args(argv)

    cli_overrides: dict[str, Any] = {}
    if args.embed_url:
        cli_overrides["embed_site_url"] = args.embed_url
    if args.log_level:
        cli_overrides["log_level"] = args.log_level
    if args.log_format:
        cli_overrides["log_format"] = args.log_format

    config = load_config(
        config_path=Path(args.config) if args.config else None,
        dotenv_path=Path(args.dotenv) if args.dotenv else None,
        cli_overrides=cli_overrides,
    )
    configure_logging(config)

    try:
        payload = asyncio.run(_run(config, args))
    except InvalidInputError as exc:
        log.error("invalid_input", error=str(exc))
        return 1
    except ResolutionFailedError as exc:
        log.error("resolution_failed", error=str(exc), cause=repr(exc.__cause__))
        return 1

    print(json.dumps(payload, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(start())
