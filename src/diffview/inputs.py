"""Input resolution: where the raw diff text comes from."""

import logging
from typing import Iterable, Optional, Sequence

from .errors import InputUnavailableError
from .executor import read_file, read_stdin
from .vcs import run_git_diff

logger = logging.getLogger(__name__)

INPUT_TYPES = ("file", "command", "stdin")


def get_input(
    input_type: str,
    input_args: Optional[Sequence[str]] = None,
    ignore: Optional[Iterable[str]] = None,
) -> str:
    """Return the raw diff for the requested input source.

    ``file`` reads the path in ``input_args[0]``, ``stdin`` drains standard
    input, and any other value runs ``git diff`` with ``input_args``.
    """
    input_args = list(input_args or [])
    logger.debug(
        "Resolving input",
        extra={"input_type": input_type, "args": input_args},
    )

    if input_type == "file":
        if not input_args:
            raise InputUnavailableError("file", "no input file given")
        return read_file(input_args[0])

    if input_type == "stdin":
        return read_stdin()

    return run_git_diff(input_args, ignore)
