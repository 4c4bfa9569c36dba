"""Command-line interface for charsniff."""

from __future__ import annotations

import argparse
import logging
import sys

import charsniff
from charsniff.enums import StrategyName
from charsniff.pipeline.strategy import DEFAULT_STRATEGY_NAME

_STDIN_CHUNK_SIZE = 65_536


def _detect_stdin(strategy: charsniff.Strategy) -> str:
    detector = charsniff.StreamDetector(strategy)
    while not detector.done:
        chunk = sys.stdin.buffer.read(_STDIN_CHUNK_SIZE)
        if not chunk:
            break
        detector.feed(chunk)
    return detector.close()


def main(argv: list[str] | None = None) -> int:
    """Run the ``charsniff`` command-line tool.

    :param argv: Command-line arguments.  Defaults to ``sys.argv[1:]``.
    :returns: 0 on success, 1 if any file could not be read, 2 if the
        requested strategy is unavailable.
    """
    parser = argparse.ArgumentParser(
        description="Detect whether files are binary and, if not, their encoding."
    )
    parser.add_argument("files", nargs="*", help="Files to examine (default: stdin)")
    parser.add_argument(
        "-l", "--label-only", action="store_true", help="Output only the label"
    )
    parser.add_argument(
        "-s",
        "--strategy",
        default=DEFAULT_STRATEGY_NAME.value,
        choices=[s.value for s in StrategyName],
        help="Detection strategy (default: %(default)s)",
    )
    parser.add_argument(
        "--debug", action="store_true", help="Log detection decisions to stderr"
    )
    parser.add_argument(
        "--version", action="version", version=f"charsniff {charsniff.__version__}"
    )

    args = parser.parse_args(argv)

    if args.debug:
        logging.basicConfig(
            level=logging.DEBUG, format="%(name)s: %(levelname)s: %(message)s"
        )

    try:
        strategy = charsniff.get_strategy(args.strategy)
    except ImportError as e:
        print(f"charsniff: {e}", file=sys.stderr)
        return 2

    if not args.files:
        label = _detect_stdin(strategy)
        print(label if args.label_only else f"stdin: {label}")
        return 0

    status = 0
    for filepath in args.files:
        try:
            label = charsniff.detect_file(filepath, strategy)
        except OSError as e:
            print(f"charsniff: {filepath}: {e}", file=sys.stderr)
            status = 1
            continue
        print(label if args.label_only else f"{filepath}: {label}")
    return status


if __name__ == "__main__":
    sys.exit(main())
