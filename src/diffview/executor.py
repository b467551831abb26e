"""Process execution and file access primitives for diffview."""

import logging
import subprocess
import sys
from pathlib import Path
from typing import Optional, TextIO, Union

from .errors import InputUnavailableError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def run_command(command: str, cwd: Optional[PathLike] = None) -> str:
    """Run a shell command and return its captured standard output."""
    logger.debug("Running command", extra={"command": command})
    try:
        result = subprocess.run(
            command,
            shell=True,
            cwd=cwd,
            check=True,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
        )
    except subprocess.CalledProcessError as e:
        reason = (e.stderr or "").strip() or f"exit status {e.returncode}"
        raise InputUnavailableError(command, reason) from e
    except OSError as e:
        raise InputUnavailableError(command, str(e)) from e

    logger.debug(
        "Command finished",
        extra={"command": command, "stdout_bytes": len(result.stdout)},
    )
    return result.stdout


def read_file(path: PathLike) -> str:
    """Read a UTF-8 text file."""
    try:
        return Path(path).read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise InputUnavailableError(str(path), "file not found") from e
    except (OSError, UnicodeDecodeError) as e:
        raise InputUnavailableError(str(path), str(e)) from e


def read_stdin(stream: Optional[TextIO] = None) -> str:
    """Read standard input until end of stream."""
    stream = stream if stream is not None else sys.stdin
    try:
        content = stream.read()
    except OSError as e:
        raise InputUnavailableError("stdin", str(e)) from e
    logger.debug("Read diff from stdin", extra={"chars": len(content)})
    return content


def write_file(path: PathLike, content: str) -> Path:
    """Write text content to a file, creating parent directories."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(content, encoding="utf-8")
    logger.debug("Wrote file", extra={"path": str(target), "chars": len(content)})
    return target
