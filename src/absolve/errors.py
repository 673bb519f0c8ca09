"""Resolution errors.

Three flat kinds. Every failure raised by the resolver is a ResolveError
subclass whose ``kind`` tells callers which condition occurred.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .parts import Prefix


class ErrorKind(Enum):
    CURRENT_IS_RELATIVE = "current_is_relative"
    UNSUPPORTED_PREFIX = "unsupported_prefix"
    IO = "io"


class ResolveError(Exception):
    """Base class for path resolution failures."""

    kind: ErrorKind


class CurrentIsRelativeError(ResolveError):
    """Raised when the base directory handed to the resolver is relative."""

    kind = ErrorKind.CURRENT_IS_RELATIVE

    def __init__(self, current: str) -> None:
        super().__init__("the path specified as current directory was relative path.")
        self.current = current


class UnsupportedPrefixError(ResolveError):
    """Raised when a canonical path starts with a prefix that is not a whitelisted drive."""

    kind = ErrorKind.UNSUPPORTED_PREFIX

    def __init__(self, path: str, prefix: Prefix) -> None:
        super().__init__(
            f"the path specified has the prefix that isn't supported: {prefix.text!r} ({prefix.kind.value})"
        )
        self.path = path
        self.prefix = prefix


class ResolveIOError(ResolveError):
    """Raised when the filesystem or the process environment fails.

    Wraps the original OSError, which is also chained as ``__cause__``.
    """

    kind = ErrorKind.IO

    def __init__(self, error: OSError) -> None:
        super().__init__(f"io error happened: {error}")
        self.error = error
        self.errno = error.errno
        self.filename = error.filename
