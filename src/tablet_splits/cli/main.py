# CLI using argparse that loads an instance layout and lists the splits of one table.
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from tablet_splits.components.metadata_table import load_layout
from tablet_splits.core.command import GetSplitsCommand
from tablet_splits.core.config import SplitsConfig, load_config
from tablet_splits.core.errors import SplitsError


def setup_logging(level: str) -> None:
    """Log to stderr so stdout only carries split lines."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s | %(levelname)s | %(message)s",
        stream=sys.stderr,
    )


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="tablet-splits",
        description="retrieves the current split points for tablets in a table",
    )
    p.add_argument("-t", "--table", required=True, help="table to get splits for")
    p.add_argument("-o", "--output", type=Path, metavar="file", help="local file to write the splits to")
    p.add_argument(
        "-m", "--max", type=int, default=0, metavar="num",
        help="maximum number of splits to return (evenly spaced)",
    )
    p.add_argument("-b64", "--base64encoded", action="store_true", help="encode the split points")
    p.add_argument(
        "-v", "--verbose", action="store_true",
        help="print out the tablet information with start/end rows",
    )
    p.add_argument("--layout", type=Path, required=True, help="TOML layout of the tables to inspect")
    p.add_argument("--config", type=Path, help="TOML tool configuration")
    p.add_argument("--digest", type=str, help="digest algorithm for obscured tablet names")
    p.add_argument("--page-size", type=int, help="pause console output every N lines")
    p.add_argument("--log-level", type=str, default="warning", help="logging level (default: warning)")
    return p


def main(argv: list[str] | None = None) -> int:
    argv = argv if argv is not None else sys.argv[1:]
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    try:
        config = load_config(args.config) if args.config else SplitsConfig()
        if args.digest:
            config.digest_algorithm = args.digest
        if args.page_size is not None:
            config.page_size = args.page_size
        config.validate()
        store = load_layout(args.layout)
    except (OSError, ValueError) as e:
        print(f"Error loading input: {e}", file=sys.stderr)
        return 2
    except SplitsError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    command = GetSplitsCommand(store, config)
    try:
        return command.execute(
            args.table,
            output_file=args.output,
            max_splits=args.max,
            encode=args.base64encoded,
            verbose=args.verbose,
        )
    except OSError as e:
        print(f"Error writing output: {e}", file=sys.stderr)
        return 2
    except SplitsError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
