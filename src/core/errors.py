"""Bytepipe exception hierarchy.

This module defines traceable pipeline errors with clear boundaries.
Every failure a pipeline surfaces is an ``OSError`` so callers can
handle source, transform, and sink failures uniformly.
"""

from __future__ import annotations

import errno
from enum import Enum


class IOErrorKind(str, Enum):
    """Category of a pipeline I/O failure."""

    OTHER = "other"
    INVALID_DATA = "invalid_data"
    INVALID_INPUT = "invalid_input"
    UNEXPECTED_EOF = "unexpected_eof"
    BROKEN_PIPE = "broken_pipe"


_KIND_ERRNO = {
    IOErrorKind.OTHER: errno.EIO,
    IOErrorKind.INVALID_DATA: errno.EILSEQ,
    IOErrorKind.INVALID_INPUT: errno.EINVAL,
    IOErrorKind.UNEXPECTED_EOF: errno.EIO,
    IOErrorKind.BROKEN_PIPE: errno.EPIPE,
}


class PipeError(Exception):
    """Base exception for all Bytepipe failures."""


class PipeConfigError(PipeError):
    """Raised for invalid runtime configuration."""


class PipeStateError(PipeError, RuntimeError):
    """Raised when a stage or pipeline is used outside its lifecycle."""


class PipeIOError(PipeError, OSError):
    """Generic I/O error kind surfaced by a pipeline invocation.

    Attributes:
        kind: Failure category.
    """

    def __init__(self, message: str, kind: IOErrorKind = IOErrorKind.OTHER) -> None:
        super().__init__(_KIND_ERRNO[kind], message)
        self.kind = kind

    def __str__(self) -> str:
        return f"{self.strerror} ({self.kind.value})"


class PipeTransformError(PipeIOError):
    """Raised when a transform function fails on a chunk."""
