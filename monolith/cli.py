"""Command-line entry point for the page compactor."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from .compactor import compact
from .config import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT, MonolithConfig
from .errors import MonolithError

logger = logging.getLogger("monolith.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="monolith",
        description=(
            "Bundle a web page and its stylesheets, scripts, images and favicons "
            "into a single HTML document."
        ),
        epilog="Example: monolith https://github.com > github.html",
    )
    parser.add_argument(
        "target",
        nargs="?",
        help="Path to a local HTML file or an http(s) URL",
    )
    parser.add_argument(
        "-u",
        "--data-uri",
        action="store_true",
        help="Print the result as base64 instead of raw HTML",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Do not report each resource as it is retrieved",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT,
        help="Network timeout in seconds for each remote resource",
    )
    parser.add_argument(
        "--user-agent",
        default=DEFAULT_USER_AGENT,
        help="User-Agent header sent with every request",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.target:
        parser.print_usage()
        return 0

    level = logging.DEBUG if args.verbose else logging.INFO
    if args.quiet and not args.verbose:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
        force=True,
    )

    config = MonolithConfig(
        output_as_base64=args.data_uri,
        quiet=args.quiet,
        user_agent=args.user_agent,
        timeout=args.timeout,
    )

    try:
        result = compact(args.target, config)
    except MonolithError as exc:
        logger.error("%s", exc)
        return 1

    sys.stdout.write(result if result.endswith("\n") else result + "\n")
    sys.stdout.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())
