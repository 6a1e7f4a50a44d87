"""
Preview specific exceptions.

Only PreviewsDisabled, InvalidParameter and AccessDenied are meant to reach the
HTTP layer. RenderError and its subclasses describe a failed generation attempt;
the cache manager turns them into a negative cache entry and a fallback icon.
"""

from typing import Optional


class PreviewError(Exception):
    """Base class for all preview errors."""


class PreviewsDisabled(PreviewError):
    def __init__(self, message: str = "Previews not configured"):
        super().__init__(message)


class InvalidParameter(PreviewError):
    """Raised when width or height is not a positive integer."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"incorrect {name} value")


class AccessDenied(PreviewError):
    """Raised when the drive refuses or fails to resolve a file."""

    def __init__(self, file_id: str, reason: Optional[str] = None):
        self.file_id = file_id
        self.reason = reason
        super().__init__("Access denied")


class RenderError(PreviewError):
    """A renderer could not produce a preview."""


class UnsupportedPreview(RenderError):
    """No renderer applies to this file type."""


class DecodeError(RenderError):
    pass


class EncodeError(RenderError):
    pass


class SourceStreamError(RenderError):
    """The source stream failed while it was being sent to the render service."""


class RenderServiceUnavailable(RenderError):
    """Transport failure or timeout talking to the render service."""


class RenderServiceError(RenderError):
    """The render service answered with a non-2xx status."""

    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"preview service {status_code}, {body}")


class WriteError(RenderError):
    """The rendered image could not be persisted."""
