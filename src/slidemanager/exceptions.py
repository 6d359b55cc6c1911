"""Exceptions raised by slidemanager operations."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager


class SlideManagerError(Exception):
    """Base exception for all slidemanager errors.

    ``operation`` is a short description of what was being attempted
    (e.g. "adding slide"). It is stamped by :func:`describe` and prefixed
    to the message when the error is rendered.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
        self.operation: str | None = None

    def __str__(self) -> str:
        if self.operation:
            return f"error {self.operation}: {self.message}"
        return self.message


class OutOfRangeError(SlideManagerError):
    """Raised when an ordinal falls outside the fetched snapshot."""

    def __init__(self, kind: str, index: int, count: int) -> None:
        self.kind = kind
        self.index = index
        self.count = count
        super().__init__(
            f"{kind} index {index} out of range (presentation has {count})"
        )


class MalformedInputError(SlideManagerError):
    """Raised for unparsable indices, colors, or missing required values."""


class NotesUnavailableError(SlideManagerError):
    """Raised when a slide has no usable notes page."""

    def __init__(self, slide_index: int) -> None:
        self.slide_index = slide_index
        super().__init__(f"notes page not available for slide {slide_index}")


class NotesShapeNotFoundError(SlideManagerError):
    """Raised when no element of the notes page carries a text body."""

    def __init__(self, slide_index: int) -> None:
        self.slide_index = slide_index
        super().__init__(f"notes shape not found for slide {slide_index}")


class ObjectNotFoundError(SlideManagerError):
    """Raised when an object ID is not present in the fetched snapshot."""

    def __init__(self, object_id: str) -> None:
        self.object_id = object_id
        super().__init__(f"object {object_id!r} not found in presentation")


class CredentialsError(SlideManagerError):
    """Raised when credentials cannot be obtained or refreshed."""


class LocalWriteError(SlideManagerError):
    """Raised when writing an export or token file fails."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"cannot write {path}: {reason}")


class TransportError(SlideManagerError):
    """Base exception for transport errors."""


class AuthenticationError(TransportError):
    """Raised when authentication fails (401/403)."""


class NotFoundError(TransportError):
    """Raised when the presentation or file is not found (404)."""


class APIError(TransportError):
    """Raised when the API returns an error."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


class RejectedError(APIError):
    """Raised when the service refuses a batch. No request was applied."""


class ExportError(TransportError):
    """Raised when the export service cannot produce the requested format."""


@contextmanager
def describe(operation: str) -> Iterator[None]:
    """Stamp ``operation`` on any SlideManagerError raised inside the block.

    The innermost description wins; the exception is re-raised unchanged.
    """
    try:
        yield
    except SlideManagerError as e:
        if e.operation is None:
            e.operation = operation
        raise
