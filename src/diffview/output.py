"""Output destinations: local preview, files, clipboard and remote publish."""

import logging
import os
import shutil
import subprocess
import sys
import tempfile
import webbrowser
from pathlib import Path
from typing import Callable, List, Optional

import requests
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import (
    ClipboardUnavailableError,
    RemoteRejectedError,
    TransportFailureError,
)
from .executor import write_file
from .settings import get_http_timeout, get_publish_url

logger = logging.getLogger(__name__)

POST_TYPES = ("browser", "pbcopy", "print")

Opener = Callable[[str], object]
Clipboard = Callable[[str], object]


class PublishResponse(BaseModel):
    """JSON body returned by the paste service."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    status: str = ""
    url: Optional[str] = None
    status_code: Optional[int] = Field(None, alias="statusCode")


def open_in_viewer(target: str) -> bool:
    """Open a file URI or URL with the default application."""
    logger.debug("Opening in default viewer", extra={"target": target})
    return webbrowser.open(target)


def _clipboard_commands() -> List[List[str]]:
    if sys.platform == "darwin":
        return [["pbcopy"]]
    if os.name == "nt":
        return [["clip"]]
    return [
        ["wl-copy"],
        ["xclip", "-selection", "clipboard"],
        ["xsel", "--clipboard", "--input"],
    ]


def copy_to_clipboard(text: str) -> None:
    """Copy text to the system clipboard using the platform's tool."""
    commands = _clipboard_commands()
    for command in commands:
        if shutil.which(command[0]) is None:
            continue
        subprocess.run(command, input=text, text=True, check=True)
        logger.debug("Copied text to clipboard", extra={"tool": command[0]})
        return
    raise ClipboardUnavailableError([command[0] for command in commands])


def preview(content: str, fmt: str, *, opener: Opener = open_in_viewer) -> Path:
    """Write ``content`` to ``<tmp>/diff.<fmt>`` and open it."""
    file_path = Path(tempfile.gettempdir()) / f"diff.{fmt}"
    write_file(file_path, content)
    logger.info("Previewing diff", extra={"path": str(file_path)})
    opener(file_path.resolve().as_uri())
    return file_path


def write_output_file(path: str, content: str) -> Path:
    """Write the rendered document to a user-chosen path."""
    target = write_file(path, content)
    logger.info("Wrote rendered diff", extra={"path": str(target)})
    return target


def publish(
    diff: str,
    post_type: str,
    *,
    url: Optional[str] = None,
    opener: Opener = open_in_viewer,
    clipboard: Clipboard = copy_to_clipboard,
    post: Optional[Callable[..., requests.Response]] = None,
) -> str:
    """Publish the raw diff to the paste service and return its URL.

    ``post_type`` decides what happens with the URL after it is printed:
    ``browser`` opens it, ``pbcopy`` copies it to the clipboard and ``print``
    does nothing more. ``post`` defaults to ``requests.post``.
    """
    endpoint = url or get_publish_url()
    post = post or requests.post
    logger.info("Publishing diff", extra={"url": endpoint, "chars": len(diff)})

    try:
        response = post(endpoint, json={"udiff": diff}, timeout=get_http_timeout())
        body = PublishResponse.model_validate(response.json())
    except (requests.RequestException, ValueError, ValidationError) as e:
        logger.error("Publish request failed: %s", e)
        raise TransportFailureError(endpoint, str(e)) from e

    if body.status == "error" or not body.url:
        logger.error("Error: %s", body.status_code)
        raise RemoteRejectedError(endpoint, body.status_code)

    print("Link powered by diffy.org:")
    print(body.url)

    if post_type == "browser":
        opener(body.url)
    elif post_type == "pbcopy":
        clipboard(body.url)

    return body.url
