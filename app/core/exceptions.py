"""
app/core/exceptions.py

Custom exception hierarchy for the application.

Raising typed exceptions from services lets controllers catch specific
cases and return the correct HTTP status code without leaking internals.
"""


class AppBaseException(Exception):
    """Root exception — catch-all for any application-level error."""


# ── Client input errors (4xx) ──────────────────────────────────────────────────

class ClientInputError(AppBaseException):
    """The request was rejected because of what the client sent."""


class RequestTooLargeError(ClientInputError):
    """Raised when the request body exceeds the configured upload limit."""


class MalformedUploadError(ClientInputError):
    """Raised when the multipart/form-data body cannot be parsed."""


class WrongFileCountError(ClientInputError):
    """Raised when the number of uploaded files is not the required count."""


class DisallowedFileTypeError(ClientInputError):
    """Raised when an uploaded file's extension is not whitelisted."""


# ── Internal failures (5xx) ────────────────────────────────────────────────────

class InternalFailure(AppBaseException):
    """A server-side failure; details are logged, never sent to the client."""


class ArchiveWriteError(InternalFailure):
    """Raised when reading an upload or writing the ZIP archive fails."""


class TemplateRenderError(InternalFailure):
    """Raised when the index page template cannot be loaded or rendered."""
