"""absolve: resolve relative paths into canonical absolute paths."""

from __future__ import annotations

from .errors import CurrentIsRelativeError, ErrorKind, ResolveError, ResolveIOError, UnsupportedPrefixError
from .parts import DRIVE_PREFIXES, PrefixKind
from .resolver import canonicalize, to_absolute, to_absolute_from_current_dir, to_absolute_path

__version__ = "0.1.0"

__all__ = [
    "DRIVE_PREFIXES",
    "CurrentIsRelativeError",
    "ErrorKind",
    "PrefixKind",
    "ResolveError",
    "ResolveIOError",
    "UnsupportedPrefixError",
    "canonicalize",
    "to_absolute",
    "to_absolute_from_current_dir",
    "to_absolute_path",
]
