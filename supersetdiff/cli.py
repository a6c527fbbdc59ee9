"""Command line interface: compare two JSON files."""

from __future__ import annotations

import argparse
import sys

from .comparators import number_comparator
from .config import load_options
from .engine import DiffEngine
from .exceptions import ConfigurationError
from .models import Difference
from .presets import preset

EXIT_CODES = {
    Difference.FULL_MATCH: 0,
    Difference.SUPERSET_MATCH: 1,
    Difference.NO_MATCH: 2,
    Difference.FIRST_INVALID: 3,
    Difference.SECOND_INVALID: 3,
    Difference.BOTH_INVALID: 3,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="supersetdiff",
        description="Compare two JSON documents; the first may be a superset of the second",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Exit status: 0 full match, 1 superset match, 2 no match, 3 invalid input.

Examples:
  supersetdiff response.json expected.json
  supersetdiff response.json expected.json --skip-matches --ignore '$..updatedAt'
  supersetdiff response.json expected.json --config options.yaml --format html
        """
    )
    parser.add_argument("first", help="Path to the document under test")
    parser.add_argument("second", help="Path to the expected document")
    parser.add_argument("-c", "--config", help="Path to YAML/JSON options file")
    parser.add_argument(
        "-f", "--format",
        choices=["plain", "json", "console", "html"],
        help="Output preset (default: console, or the options file's preset)"
    )
    parser.add_argument("-t", "--types", action="store_true", help="Annotate values with their kind")
    parser.add_argument("-s", "--skip-matches", action="store_true", help="Only print differences")
    parser.add_argument(
        "-i", "--ignore", action="append", default=[], metavar="JSONPATH",
        help="Exclude matching members from the comparison (repeatable)"
    )
    parser.add_argument(
        "-n", "--numbers", choices=["literal", "float", "decimal"],
        help="Number comparison (default: literal tokens)"
    )
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        if args.config:
            options = load_options(args.config)
            if args.format:
                options = preset(args.format).replace(
                    print_types=options.print_types,
                    skip_matches=options.skip_matches,
                    compare_numbers=options.compare_numbers,
                    ignore_paths=options.ignore_paths,
                )
        else:
            options = preset(args.format or "console")

        changes = {}
        if args.types:
            changes["print_types"] = True
        if args.skip_matches:
            changes["skip_matches"] = True
        if args.ignore:
            changes["ignore_paths"] = options.ignore_paths + tuple(args.ignore)
        if args.numbers:
            changes["compare_numbers"] = number_comparator(args.numbers)
        options = options.replace(**changes)

        with open(args.first, 'rb') as first, open(args.second, 'rb') as second:
            result = DiffEngine(options).compare_streams(first, second)
    except (ConfigurationError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 4

    print(result.difference)
    if result.text:
        print(result.text)
    return EXIT_CODES[result.difference]


if __name__ == "__main__":
    sys.exit(main())
