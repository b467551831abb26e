"""Error definitions and handling for diffview."""

from typing import Any, Dict, List, Optional


class DiffViewError(Exception):
    """Base exception for diffview errors."""

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        """Initialize error with code, message, and optional details."""
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for JSON serialization."""
        result = {
            "code": self.code,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result


class InputUnavailableError(DiffViewError):
    """The raw diff could not be obtained from its source."""

    def __init__(self, source: str, reason: str):
        super().__init__(
            code="INPUT_UNAVAILABLE",
            message=f"Unable to read diff from {source}: {reason}",
            details={"source": source, "reason": reason},
        )


class TemplateNotFoundError(DiffViewError):
    """The HTML wrapper template does not exist."""

    def __init__(self, template: str):
        super().__init__(
            code="CONFIGURATION_INVALID",
            message=f"Template (`{template}`) not found!",
            details={"template": template},
        )


class UnsupportedFormatError(DiffViewError):
    """Requested output format is neither html nor json."""

    def __init__(self, output_format: str):
        super().__init__(
            code="UNSUPPORTED_FORMAT",
            message=f"Wrong output format `{output_format}`!",
            details={"format": output_format, "supported": ["html", "json"]},
        )


class TransportFailureError(DiffViewError):
    """The publish request could not complete."""

    def __init__(self, url: str, reason: str):
        super().__init__(
            code="TRANSPORT_FAILURE",
            message=f"Failed to publish diff to {url}: {reason}",
            details={"url": url, "reason": reason},
        )


class RemoteRejectedError(DiffViewError):
    """The publish service answered with an error status."""

    def __init__(self, url: str, status_code: Optional[int]):
        super().__init__(
            code="REMOTE_REJECTED",
            message=f"Publish rejected with status {status_code}",
            details={"url": url, "status_code": status_code},
        )


class ClipboardUnavailableError(DiffViewError):
    """No clipboard tool is available on this system."""

    def __init__(self, tried: List[str]):
        super().__init__(
            code="CLIPBOARD_UNAVAILABLE",
            message="No clipboard command found (tried: " + ", ".join(tried) + ")",
            details={"tried": tried},
        )
