"""Stable, platform-independent labels for filesystem failure causes.

The strings produced by ``str(OSError)`` depend on the platform's C library
and locale, so they are not suitable for output that users or scripts match
against. This module reduces an exception to an :class:`ErrorKind` and maps
the kind to a fixed label.
"""

from __future__ import annotations

import errno
from enum import Enum
from typing import Final


class ErrorKind(Enum):
    """Closed set of failure causes understood by the classifier."""

    NOT_FOUND = "not-found"
    PERMISSION_DENIED = "permission-denied"
    CONNECTION_REFUSED = "connection-refused"
    CONNECTION_RESET = "connection-reset"
    CONNECTION_ABORTED = "connection-aborted"
    NOT_CONNECTED = "not-connected"
    ADDR_IN_USE = "addr-in-use"
    ADDR_NOT_AVAILABLE = "addr-not-available"
    BROKEN_PIPE = "broken-pipe"
    ALREADY_EXISTS = "already-exists"
    WOULD_BLOCK = "would-block"
    INVALID_INPUT = "invalid-input"
    INVALID_DATA = "invalid-data"
    TIMED_OUT = "timed-out"
    WRITE_ZERO = "write-zero"
    INTERRUPTED = "interrupted"
    OTHER = "other"
    UNEXPECTED_EOF = "unexpected-eof"


UNKNOWN_LABEL: Final[str] = "Unknown error"

LABELS: Final[dict[ErrorKind, str]] = {
    ErrorKind.NOT_FOUND: "Entity not found",
    ErrorKind.PERMISSION_DENIED: "Permission denied",
    ErrorKind.CONNECTION_REFUSED: "Connection refused",
    ErrorKind.CONNECTION_RESET: "Connection reset",
    ErrorKind.CONNECTION_ABORTED: "Connection aborted",
    ErrorKind.NOT_CONNECTED: "Not connected",
    ErrorKind.ADDR_IN_USE: "Address in use",
    ErrorKind.ADDR_NOT_AVAILABLE: "Address not available",
    ErrorKind.BROKEN_PIPE: "Broken pipe",
    ErrorKind.ALREADY_EXISTS: "Entity already exists",
    ErrorKind.WOULD_BLOCK: "Operation would block",
    ErrorKind.INVALID_INPUT: "Invalid input parameter",
    ErrorKind.INVALID_DATA: "Invalid data",
    ErrorKind.TIMED_OUT: "Timed out",
    ErrorKind.WRITE_ZERO: "Write zero",
    ErrorKind.INTERRUPTED: "Operation interrupted",
    ErrorKind.OTHER: "Other os error",
    ErrorKind.UNEXPECTED_EOF: "Unexpected end of file",
}

# Checked in order; subclasses must precede their bases.
_EXCEPTION_KINDS: Final[tuple[tuple[type[BaseException], ErrorKind], ...]] = (
    (FileNotFoundError, ErrorKind.NOT_FOUND),
    (PermissionError, ErrorKind.PERMISSION_DENIED),
    (ConnectionRefusedError, ErrorKind.CONNECTION_REFUSED),
    (ConnectionResetError, ErrorKind.CONNECTION_RESET),
    (ConnectionAbortedError, ErrorKind.CONNECTION_ABORTED),
    (BrokenPipeError, ErrorKind.BROKEN_PIPE),
    (FileExistsError, ErrorKind.ALREADY_EXISTS),
    (BlockingIOError, ErrorKind.WOULD_BLOCK),
    (TimeoutError, ErrorKind.TIMED_OUT),
    (InterruptedError, ErrorKind.INTERRUPTED),
    (EOFError, ErrorKind.UNEXPECTED_EOF),
    (UnicodeError, ErrorKind.INVALID_DATA),
)

_ERRNO_KINDS: Final[dict[int, ErrorKind]] = {
    errno.ENOENT: ErrorKind.NOT_FOUND,
    errno.EACCES: ErrorKind.PERMISSION_DENIED,
    errno.EPERM: ErrorKind.PERMISSION_DENIED,
    errno.ECONNREFUSED: ErrorKind.CONNECTION_REFUSED,
    errno.ECONNRESET: ErrorKind.CONNECTION_RESET,
    errno.ECONNABORTED: ErrorKind.CONNECTION_ABORTED,
    errno.ENOTCONN: ErrorKind.NOT_CONNECTED,
    errno.EADDRINUSE: ErrorKind.ADDR_IN_USE,
    errno.EADDRNOTAVAIL: ErrorKind.ADDR_NOT_AVAILABLE,
    errno.EPIPE: ErrorKind.BROKEN_PIPE,
    errno.EEXIST: ErrorKind.ALREADY_EXISTS,
    errno.EAGAIN: ErrorKind.WOULD_BLOCK,
    errno.EINVAL: ErrorKind.INVALID_INPUT,
    errno.ETIMEDOUT: ErrorKind.TIMED_OUT,
    errno.EINTR: ErrorKind.INTERRUPTED,
}

# Causes that have no stable label of their own.
_UNLABELLED_ERRNOS: Final[frozenset[int]] = frozenset({errno.ELOOP})


def classify(kind: ErrorKind | None) -> str:
    """Return the stable label for ``kind``.

    Args:
        kind: Failure cause, or ``None`` when the cause is unknown.

    Returns:
        str: Human-readable label. Anything outside :class:`ErrorKind`
        maps to ``"Unknown error"``.
    """
    if not isinstance(kind, ErrorKind):
        return UNKNOWN_LABEL
    return LABELS.get(kind, UNKNOWN_LABEL)


def kind_of(exc: BaseException) -> ErrorKind | None:
    """Reduce an exception to its failure cause.

    ``OSError`` values are matched by subclass first and then by ``errno``;
    an ``OSError`` with an unrecognised errno is ``OTHER``. Exceptions that
    are not filesystem failures yield ``None``.

    Args:
        exc: Exception raised by a filesystem call.

    Returns:
        ErrorKind | None: The cause, or ``None`` when it cannot be named.
    """
    for exc_type, kind in _EXCEPTION_KINDS:
        if isinstance(exc, exc_type):
            return kind

    if isinstance(exc, OSError):
        if exc.errno in _UNLABELLED_ERRNOS:
            return None
        if exc.errno is None:
            return ErrorKind.OTHER
        return _ERRNO_KINDS.get(exc.errno, ErrorKind.OTHER)

    if isinstance(exc, ValueError):
        return ErrorKind.INVALID_INPUT
    return None


def describe(exc: BaseException) -> str:
    """Return the stable label for an exception."""
    return classify(kind_of(exc))
