"""
Error Types
===========

Exception hierarchy for request validation and rendering failures.
Every error carries a machine-readable code and the HTTP status it maps to.
"""


class OGImageError(Exception):
    """Base exception for the image renderer."""

    code: str = "UNEXPECTED_ERROR"
    http_status: int = 500


class RenderRequestError(OGImageError):
    """Query parameters were rejected before any browser work started."""

    http_status = 400


class MissingUrlError(RenderRequestError):
    code = "MISSING_URL"


class InvalidUrlError(RenderRequestError):
    code = "INVALID_URL"


class RenderError(OGImageError):
    """A failure after validation, while producing the image."""

    code = "UNEXPECTED_ERROR"
    http_status = 500


class BrowserLaunchError(RenderError):
    """Chromium could not be started."""


class NavigationError(RenderError):
    """The target page failed to load or never reached network idle."""


class ElementNotFoundError(RenderError):
    """The target element did not appear on the page."""


class ImageEncodingError(RenderError):
    """The element screenshot could not be captured or encoded."""


def describe_error(error: BaseException) -> str:
    """Render an exception as ``"<ClassName>: <message>"``."""
    message = str(error)
    if not message:
        return error.__class__.__name__
    return f"{error.__class__.__name__}: {message}"
