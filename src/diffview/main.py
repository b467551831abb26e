"""Main CLI entry point for diffview."""

import argparse
import logging
import sys
from typing import List, Optional

from . import __version__
from .config import DIFF_MODES, OUTPUT_FORMATS, SCROLL_MODES, STYLES, SUMMARY_MODES, RenderConfig
from .errors import DiffViewError
from .inputs import INPUT_TYPES, get_input
from .logging_utils import configure_logging
from .output import POST_TYPES, preview, publish, write_output_file
from .render import get_output

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create command line argument parser."""
    parser = argparse.ArgumentParser(
        prog="diffview",
        description="Turn unified diffs into pretty HTML or a JSON diff model",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  diffview                                  # working tree vs HEAD, opened in the browser
  diffview -s side -- -M HEAD~1             # side-by-side diff of the last commit
  diffview -i file -- changes.diff          # read the diff from a file
  git diff | diffview -i stdin -f json -o stdout
  diffview -u pbcopy -- origin/main         # publish and copy the link
        """,
    )

    # Rendering options
    parser.add_argument(
        "-s",
        "--style",
        choices=STYLES,
        default="line",
        help="Output style (default: line)",
    )
    parser.add_argument(
        "--su",
        "--summary",
        dest="summary",
        choices=SUMMARY_MODES,
        default="closed",
        help="Show files summary (default: closed)",
    )
    parser.add_argument(
        "-d",
        "--diff",
        choices=DIFF_MODES,
        default="word",
        help="Diff granularity highlighted inside changed lines (default: word)",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=OUTPUT_FORMATS,
        default="html",
        help="Output format (default: html)",
    )
    parser.add_argument(
        "--synchronised-scroll",
        choices=SCROLL_MODES,
        default="disabled",
        help="Synchronise horizontal scroll in side-by-side mode (default: disabled)",
    )
    parser.add_argument(
        "--hwt",
        "--html-wrapper-template",
        dest="template",
        help="Use a custom HTML wrapper template",
    )
    parser.add_argument(
        "--max-line-length-highlight",
        type=int,
        default=10_000,
        help="Skip inline highlights for lines longer than this (default: 10000)",
    )

    # Input options
    parser.add_argument(
        "-i",
        "--input",
        choices=INPUT_TYPES,
        default="command",
        help="Diff input source (default: command)",
    )
    parser.add_argument(
        "--ig",
        "--ignore",
        dest="ignore",
        nargs="+",
        default=[],
        metavar="PATH",
        help="Paths excluded from the git diff",
    )

    # Output options
    parser.add_argument(
        "-o",
        "--output",
        choices=("preview", "stdout"),
        default="preview",
        help="Output destination (default: preview)",
    )
    parser.add_argument(
        "-u",
        "--diffy",
        choices=POST_TYPES,
        help="Publish the diff to diffy.org and open, copy or print the link",
    )
    parser.add_argument(
        "-F",
        "--file",
        help="Write the rendered document to this file",
    )
    parser.add_argument(
        "--log-level",
        help="Logging level (default: LOG_LEVEL env var or WARNING)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "extra",
        nargs="*",
        help="git diff arguments, or the input file path with --input file",
    )

    return parser


def create_config(args: argparse.Namespace) -> RenderConfig:
    """Create render configuration from command line arguments."""
    return RenderConfig(
        diff=args.diff,
        format=args.format,
        style=args.style,
        summary=args.summary,
        synchronised_scroll=args.synchronised_scroll,
        template=args.template,
        max_line_length_highlight=args.max_line_length_highlight,
    )


def run(args: argparse.Namespace) -> int:
    """Run the input, render and output stages in order."""
    config = create_config(args)

    raw_diff = get_input(args.input, args.extra, args.ignore)
    if not raw_diff:
        print("The input is empty. Try again.", file=sys.stderr)
        return 1

    if args.diffy:
        publish(raw_diff, args.diffy)
        return 0

    content = get_output(config, raw_diff)

    if args.file:
        write_output_file(args.file, content)
    elif args.output == "preview":
        preview(content, config.format)
    else:
        print(content)

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    try:
        return run(args)

    except DiffViewError as e:
        logger.debug("diffview failed", extra={"code": e.code, "details": e.details})
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cli() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    cli()
