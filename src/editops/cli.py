"""Command-line interface for editops."""

import argparse
import json
import logging
import sys

from .config import settings
from .engine import apply_operations, count_tags, diff
from .operations import EditOperationError, parse_operations

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        description="editops - parse, execute and derive text edit operations"
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Parse command
    parse_parser = subparsers.add_parser("parse", help="Parse and normalize operations")
    parse_parser.add_argument("operations", nargs="+", help="Operations in DSL notation")
    parse_parser.add_argument("--json", action="store_true", help="Print operations as JSON")

    # Diff command
    diff_parser = subparsers.add_parser("diff", help="Derive operations between two strings")
    diff_parser.add_argument("source", help="Original text")
    diff_parser.add_argument("target", help="Transformed text")
    diff_parser.add_argument(
        "--no-input-text",
        dest="include_input_text",
        action="store_false",
        default=settings.include_input_text,
        help="Do not describe the affected source text",
    )
    diff_parser.add_argument(
        "--no-adjust",
        dest="adjust",
        action="store_false",
        default=settings.adjust_moves,
        help="Do not merge deletions and insertions into moves",
    )
    diff_parser.add_argument(
        "--insert-only",
        action="store_true",
        default=settings.insert_only,
        help="Only merge deletions with insertions, not replacements",
    )
    diff_parser.add_argument("--json", action="store_true", help="Print operations as JSON")

    # Apply command
    apply_parser = subparsers.add_parser("apply", help="Execute operations against a text")
    apply_parser.add_argument("text", help="Text to transform")
    apply_parser.add_argument("operations", nargs="+", help="Operations in DSL notation")

    # Tags command
    tags_parser = subparsers.add_parser("tags", help="Count the tags of operations")
    tags_parser.add_argument("operations", nargs="+", help="Operations in DSL notation")

    return parser


def _print_operations(operations, as_json: bool) -> None:
    if as_json:
        print(json.dumps([op.model_dump(mode="json") for op in operations], indent=2, ensure_ascii=False))
    else:
        for op in operations:
            print(op.to_string())


def main(argv=None) -> int:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 1

    try:
        if args.command == "parse":
            operations = parse_operations(args.operations, strict=settings.strict_parsing)
            _print_operations(operations, args.json)
        elif args.command == "diff":
            operations = diff(
                args.source,
                args.target,
                include_input_text=args.include_input_text,
                adjust=args.adjust,
                insert_only=args.insert_only,
            )
            _print_operations(operations, args.json)
        elif args.command == "apply":
            operations = parse_operations(args.operations, strict=True)
            print(apply_operations(args.text, operations))
        elif args.command == "tags":
            operations = parse_operations(args.operations, strict=settings.strict_parsing)
            for tag, count in count_tags(operations).items():
                print(f"{tag}\t{count}")
    except EditOperationError as e:
        logger.debug(f"Command {args.command} failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
