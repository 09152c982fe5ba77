"""Command-line interface for lrg."""

import argparse
import logging
import os
import sys

from pydantic import ValidationError

from lrg import __version__
from lrg.config.parser import ConfigurationError, create_config_template, load_config
from lrg.models.config import LrgConfig
from lrg.tools.ranker import Lrg
from lrg.tools.walker import WalkError

logger = logging.getLogger(__name__)

VERBOSITY_LEVELS = [logging.WARNING, logging.INFO, logging.DEBUG]


def non_negative_int(value: str) -> int:
    """Parse a command-line integer that must not be negative."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: '{value}'")
    if number < 0:
        raise argparse.ArgumentTypeError(f"must not be negative: {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the lrg command."""
    parser = argparse.ArgumentParser(
        prog="lrg",
        description="A utility to help find the largest file(s) in a directory.",
    )
    parser.add_argument(
        "filepath",
        metavar="FILEPATH",
        nargs="?",
        help="the path to search in (default: current directory)",
    )
    parser.add_argument(
        "-n",
        "--number",
        type=non_negative_int,
        metavar="NUM_ENTRIES",
        help="sets the number of files to list (default: 5)",
    )
    parser.add_argument(
        "-r",
        "--no-recursion",
        action="store_true",
        help="will only visit files in specified directory, takes precedence over max-depth",
    )
    parser.add_argument(
        "-d",
        "--max-depth",
        type=non_negative_int,
        metavar="MAX_DEPTH",
        help="sets the maximum depth of folders to search, 0 being the specified directory "
        "(default: unbounded)",
    )
    parser.add_argument(
        "-m",
        "--min-depth",
        type=non_negative_int,
        metavar="MIN_DEPTH",
        help="only list entries at least this deep (default: 0)",
    )
    parser.add_argument(
        "-l",
        "--follow-links",
        action="store_true",
        help="will follow symbolic links",
    )
    parser.add_argument(
        "-i",
        "--directories",
        action="store_true",
        help="include directories in search",
    )
    parser.add_argument(
        "-a",
        "--ascending",
        action="store_true",
        help="list the smallest entries instead of the largest",
    )
    parser.add_argument(
        "-c",
        "--config",
        metavar="PATH",
        help="read defaults from this YAML file instead of searching for .lrg.yaml",
    )
    parser.add_argument(
        "--init-config",
        metavar="PATH",
        help="write a commented configuration template to PATH and exit",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="show more logging output (repeat for debug output)",
    )
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def configure_logging(verbose: int, default_level: str = "WARNING") -> None:
    """Send log records to stderr at the level chosen by -v or the configuration."""
    if verbose:
        level = VERBOSITY_LEVELS[min(verbose, len(VERBOSITY_LEVELS) - 1)]
    else:
        level = getattr(logging, default_level)
    logging.basicConfig(level=level, format="%(name)s: %(levelname)s: %(message)s", force=True)


def apply_overrides(config: LrgConfig, args: argparse.Namespace) -> LrgConfig:
    """Layer command-line flags over configuration file values."""
    search = config.search.to_dict()
    if args.max_depth is not None:
        search["max_depth"] = args.max_depth
    if args.min_depth is not None:
        search["min_depth"] = args.min_depth
    if args.no_recursion:
        search["no_recursion"] = True
    if args.follow_links:
        search["follow_links"] = True
    if args.directories:
        search["include_dirs"] = True

    output = config.output.to_dict()
    if args.number is not None:
        output["number"] = args.number
    if args.ascending:
        output["order"] = "ascending"

    return LrgConfig.from_dict(
        {"search": search, "output": output, "logging": config.logging.to_dict()}
    )


def main(argv=None) -> int:
    """Main entry point for the lrg CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    if args.init_config:
        try:
            create_config_template(args.init_config)
        except ConfigurationError as e:
            print(f"lrg: {e}", file=sys.stderr)
            return 1
        print(f"lrg: wrote configuration template to {args.init_config}")
        return 0

    try:
        result = load_config(args.config)
    except ConfigurationError as e:
        print(f"lrg: {e}", file=sys.stderr)
        return 1

    try:
        config = apply_overrides(result.config, args)
    except ValidationError as e:
        parser.error(str(e))

    configure_logging(args.verbose, config.logging.level.value)
    for warning in config.validate_configuration():
        logger.warning(warning)

    root = args.filepath if args.filepath is not None else os.getcwd()
    try:
        options = config.to_options(root)
    except ValidationError as e:
        parser.error(f"invalid FILEPATH '{root}': {e.errors()[0]['msg']}")

    try:
        lrg = Lrg(options=options).sort_by(config.output.order)
    except WalkError as e:
        print(f"lrg: {e}", file=sys.stderr)
        return 1

    if not len(lrg):
        print("lrg: no files found")
        return 0

    for entry in lrg.get_entries(config.output.number):
        print(f"{entry.get_size_human_readable()}: {entry.path}")

    logger.info(
        f"Scanned {lrg.stats['directories_traversed']} directories, "
        f"{lrg.stats['errors']} unreadable"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
