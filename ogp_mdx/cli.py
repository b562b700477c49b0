"""Command-line entry point for ogp-mdx."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Iterable, Optional, Sequence

from .config import DEFAULT_USER_AGENT, FetchConfig
from .errors import OGPError
from .fetch import fetch_html, is_remote
from .models import Object
from .parser import parse
from .renderer import to_html

logger = logging.getLogger("ogp_mdx.cli")


def _ensure_command_prefix(argv: Sequence[str], commands: Iterable[str]) -> Sequence[str]:
    if not argv:
        return argv
    first = argv[0]
    if first in commands or (first.startswith("-") and first != "-"):
        return argv
    return ("parse", *argv)


def _add_parse_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "sources",
        nargs="+",
        help="URLs, HTML file paths, or '-' to read a document from STDIN",
    )
    parser.add_argument(
        "--encoding",
        default=None,
        help="Character encoding of the documents (sniffed when omitted)",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail on unknown og: properties, orphaned details and malformed integers",
    )
    parser.add_argument(
        "--indent",
        type=int,
        default=2,
        help="JSON indentation; use 0 for one object per line",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=15.0,
        help="HTTP timeout in seconds for remote sources",
    )
    parser.add_argument(
        "--user-agent",
        default=DEFAULT_USER_AGENT,
        help="User-Agent header sent with remote requests",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )


def _add_render_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "path",
        help="JSON file describing an Open Graph object, or '-' for STDIN",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="ogp-mdx",
        description="Extract Open Graph metadata from HTML or render it back into meta tags.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    parse_parser = subparsers.add_parser(
        "parse", help="Print the Open Graph object of each document as JSON"
    )
    _add_parse_arguments(parse_parser)

    render_parser = subparsers.add_parser(
        "render", help="Print <meta> tags for an Open Graph object given as JSON"
    )
    _add_render_arguments(render_parser)

    argv = list(sys.argv[1:] if argv is None else argv)
    argv = list(_ensure_command_prefix(argv, subparsers.choices.keys()))
    return parser.parse_args(argv)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
        force=True,
    )


def _parse_source(source: str, args: argparse.Namespace, config: FetchConfig) -> Object:
    if is_remote(source):
        return parse(fetch_html(source, config), encoding=args.encoding, strict=args.strict)
    if source == "-":
        return parse(sys.stdin.buffer, encoding=args.encoding, strict=args.strict)
    with open(source, "rb") as fh:
        return parse(fh.read(), encoding=args.encoding, strict=args.strict)


def _run_parse(args: argparse.Namespace) -> int:
    config = FetchConfig(timeout=args.timeout, user_agent=args.user_agent)
    indent = args.indent or None
    failures = 0
    for source in args.sources:
        try:
            obj = _parse_source(source, args, config)
        except (OGPError, OSError) as exc:
            logger.error("Failed to parse %s: %s", source, exc)
            failures += 1
            continue
        sys.stdout.write(json.dumps(obj.to_dict(), indent=indent, ensure_ascii=False) + "\n")
    sys.stdout.flush()
    logger.debug(
        "Parsed %d/%d sources (%d failed)",
        len(args.sources) - failures,
        len(args.sources),
        failures,
    )
    return 1 if failures else 0


def _run_render(args: argparse.Namespace) -> int:
    try:
        if args.path == "-":
            data = json.load(sys.stdin)
        else:
            data = json.loads(Path(args.path).read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.error("Failed to read %s: %s", args.path, exc)
        return 1
    if not isinstance(data, dict):
        logger.error("Expected a JSON object in %s", args.path)
        return 1
    try:
        obj = Object.from_dict(data)
    except (AttributeError, TypeError, ValueError) as exc:
        logger.error("Invalid Open Graph object in %s: %s", args.path, exc)
        return 1
    markup = to_html(obj)
    if markup:
        sys.stdout.write(markup + "\n")
    sys.stdout.flush()
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    _configure_logging(args.verbose)
    if args.command == "parse":
        return _run_parse(args)
    return _run_render(args)


if __name__ == "__main__":
    sys.exit(main())
