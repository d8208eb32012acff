#!/usr/bin/env python3
"""
Command-line front end for Go tag generation.

Writes an etags-style TAGS file for Go sources, with better Go awareness
than etags: constants, variables, types inside type lists, generic
functions and types, and interface methods are all tagged, and local
declarations inside functions are not.  Files that fail to parse fall back
to etags-style line matching; non-Go files are handed to etags.

Input file names are emitted verbatim; there is no resolution of relative
names against the location of the output file.

Usage:
    python run_gotags.py *.go
    python run_gotags.py -o - main.go util.go
    find . -name '*.go' -o -name '*.c' | python run_gotags.py -o TAGS -
"""

import argparse
import logging
import sys
from dataclasses import replace
from typing import List, Optional

from gotags import __version__
from gotags.config import DEFAULT_OUTPUT
from gotags.delegate import DelegateError
from gotags.dispatcher import generate_tags
from gotags.inputs import STDIN_SENTINEL, iter_input_names
from shared.settings import ConfigValidationError, resolve_settings
from shared.structured_logging import configure_structured_logging, set_run_id

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line argument parser."""
    parser = argparse.ArgumentParser(
        prog="gotags",
        description="Generate an etags-style tag file for Go source.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "If the only input file name is '-', input file names are read from\n"
            "standard input, one per line.\n"
            "\n"
            "Examples:\n"
            "  gotags *.go\n"
            "  git ls-files | gotags -o TAGS -\n"
        ),
    )

    parser.add_argument(
        "inputs",
        nargs="*",
        metavar="filename",
        help="Input files, or '-' to read names from standard input.",
    )
    parser.add_argument(
        "-o",
        "--output",
        default=DEFAULT_OUTPUT,
        help=f"Output file, '-' for standard output. Default: {DEFAULT_OUTPUT}",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        default=False,
        help="Only report errors.",
    )
    verbosity.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Report progress and debug information.",
    )
    parser.add_argument(
        "--members",
        dest="members",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Tag struct fields (and let the delegate tag members). Default: on.",
    )
    parser.add_argument(
        "-e",
        "--etags",
        dest="delegate_program",
        default=None,
        metavar="PROGRAM",
        help="Program for non-Go files; empty string disables delegation. Default: etags",
    )
    parser.add_argument(
        "--config",
        default=None,
        metavar="FILE",
        help="YAML settings file.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def _log_level(args: argparse.Namespace) -> int:
    if args.quiet:
        return logging.ERROR
    if args.verbose:
        return logging.DEBUG
    return logging.WARNING


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point; returns the process exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.inputs:
        parser.error("no input files")

    configure_structured_logging(_log_level(args))
    set_run_id()

    try:
        settings = resolve_settings(args.config)
    except ConfigValidationError as e:
        logger.error(f"Configuration error: {e}")
        return 2
    overrides = {}
    if args.members is not None:
        overrides["members"] = args.members
    if args.delegate_program is not None:
        overrides["delegate_program"] = args.delegate_program
    if overrides:
        settings = replace(settings, **overrides)

    if args.inputs == [STDIN_SENTINEL]:
        logger.debug("Reading input names from standard input")
    inputs = iter_input_names(args.inputs)

    if args.output == "-":
        sink = sys.stdout.buffer
        close_sink = False
    else:
        try:
            sink = open(args.output, "wb")
        except OSError as e:
            logger.error(f"Cannot create {args.output}: {e}")
            return 1
        close_sink = True

    try:
        stats = generate_tags(inputs, sink, settings=settings, quiet=args.quiet)
    except DelegateError as e:
        logger.error(f"{e}")
        return e.status
    finally:
        sink.flush()
        if close_sink:
            sink.close()

    logger.info(f"Done: {stats}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
