"""Version control command assembly for diffview."""

import logging
from typing import Iterable, Optional, Sequence

from .executor import run_command

logger = logging.getLogger(__name__)

DEFAULT_DIFF_ARGS = "-M -C HEAD"
NO_COLOR_FLAG = "--no-color"


def build_diff_command(
    args: Optional[Sequence[str]] = None,
    ignore: Optional[Iterable[str]] = None,
) -> str:
    """Build the ``git diff`` command line for the given arguments.

    Arguments are wrapped in double quotes so each one reaches git as a
    single token. Without arguments the working tree is compared to HEAD
    with rename and copy detection.
    """
    if args and args[0]:
        git_args = " ".join(f'"{arg}"' for arg in args)
    else:
        git_args = DEFAULT_DIFF_ARGS

    if NO_COLOR_FLAG not in git_args:
        git_args += f" {NO_COLOR_FLAG}"

    exclusions = [f'":(exclude){path}"' for path in ignore or ()]
    if exclusions:
        git_args += " " + " ".join(exclusions)

    return f"git diff {git_args}"


def run_git_diff(
    args: Optional[Sequence[str]] = None,
    ignore: Optional[Iterable[str]] = None,
) -> str:
    """Run ``git diff`` in the current directory and return its output."""
    command = build_diff_command(args, ignore)
    logger.info("Collecting diff from git", extra={"command": command})
    return run_command(command)
