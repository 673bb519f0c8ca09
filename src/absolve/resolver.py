"""Resolve a possibly-relative path against a base directory.

The relative branch joins the base and the path, then hands the result to
os.path.realpath(strict=True), which requires the target to exist and
resolves ``.``, ``..`` and symlinks. The canonical path it returns is walked
component by component and re-encoded so that a drive prefix is always the
two-character ``X:`` form.

On Windows, realpath() may hand back verbatim paths (``\\\\?\\C:\\...``),
and it resolves mapped network drive letters to their UNC share. Verbatim
drives fold back to ``C:``. UNC shares, device paths and the other verbatim
forms are rejected with UnsupportedPrefixError rather than passed through.

An input that is already absolute is returned unchanged: no existence
check, no symlink resolution.
"""

from __future__ import annotations

import errno
import logging
import ntpath
import os
import posixpath
import sys
from pathlib import Path

from .errors import CurrentIsRelativeError, ResolveIOError, UnsupportedPrefixError
from .parts import (
    DRIVE_PREFIXES,
    Component,
    ComponentKind,
    PrefixKind,
    components,
    is_absolute,
    join_parts,
    parse_prefix,
)

logger = logging.getLogger(__name__)

_IS_WINDOWS = sys.platform == "win32"


def _check_allowed_prefixes(allowed_prefixes: frozenset[PrefixKind]) -> None:
    stray = set(allowed_prefixes) - DRIVE_PREFIXES
    if stray:
        names = ", ".join(sorted(kind.value for kind in stray))
        raise ValueError(f"Prefix kinds cannot be re-encoded as a drive designator: {names}")


def _encode_component(component: Component, canonical: str, allowed_prefixes: frozenset[PrefixKind]) -> str:
    if component.kind is not ComponentKind.PREFIX:
        return component.text
    prefix = component.prefix
    if prefix is None:
        raise ValueError(f"Prefix component {component.text!r} carries no parsed prefix")
    if prefix.kind in DRIVE_PREFIXES and prefix.kind in allowed_prefixes:
        return f"{prefix.drive}:"
    raise UnsupportedPrefixError(canonical, prefix)


def _join(current: str, relative: str) -> str:
    if not _IS_WINDOWS:
        return posixpath.join(current, relative)
    # A drive-relative path (C:foo) replaces the base rather than extending it
    if parse_prefix(relative) is not None:
        return relative
    return ntpath.join(current, relative)


def canonicalize(
    path: str | os.PathLike[str],
    *,
    allowed_prefixes: frozenset[PrefixKind] = DRIVE_PREFIXES,
) -> str:
    """Canonicalize an existing absolute path and re-encode its prefix.

    Raises ResolveIOError if the path does not exist or cannot be read,
    and UnsupportedPrefixError if the canonical form starts with a prefix
    outside *allowed_prefixes*.
    """
    _check_allowed_prefixes(allowed_prefixes)
    path = os.fspath(path)

    # Reject null bytes up front; os.lstat() raises ValueError, not OSError, for them
    if "\x00" in path:
        raise ResolveIOError(OSError(errno.EINVAL, "Path contains null bytes", path))

    try:
        canonical = os.path.realpath(path, strict=True)
    except OSError as e:
        raise ResolveIOError(e) from e

    parts = [_encode_component(c, canonical, allowed_prefixes) for c in components(canonical, windows=_IS_WINDOWS)]
    resolved = join_parts(parts, windows=_IS_WINDOWS)
    logger.debug("Canonicalized %s -> %s", path, resolved)
    return resolved


def to_absolute(
    current: str | os.PathLike[str],
    relative: str | os.PathLike[str],
    *,
    allowed_prefixes: frozenset[PrefixKind] = DRIVE_PREFIXES,
) -> str:
    """Return the absolute path of *relative*, resolved against *current*.

    The target must exist unless *relative* is already absolute, in which
    case it is returned as-is and *current* is not inspected.
    """
    relative = os.fspath(relative)
    if is_absolute(relative, windows=_IS_WINDOWS):
        logger.debug("Path already absolute, returning unchanged: %s", relative)
        return relative

    current = os.fspath(current)
    if not is_absolute(current, windows=_IS_WINDOWS):
        raise CurrentIsRelativeError(current)

    joined = _join(current, relative)
    logger.debug("Joined %s + %s -> %s", current, relative, joined)
    return canonicalize(joined, allowed_prefixes=allowed_prefixes)


def to_absolute_from_current_dir(
    relative: str | os.PathLike[str],
    *,
    allowed_prefixes: frozenset[PrefixKind] = DRIVE_PREFIXES,
) -> str:
    """Resolve *relative* against the process's current working directory."""
    try:
        current = os.getcwd()
    except OSError as e:
        raise ResolveIOError(e) from e
    return to_absolute(current, relative, allowed_prefixes=allowed_prefixes)


def to_absolute_path(
    current: str | os.PathLike[str],
    relative: str | os.PathLike[str],
    *,
    allowed_prefixes: frozenset[PrefixKind] = DRIVE_PREFIXES,
) -> Path:
    """Resolve like to_absolute() and return the result as a Path object."""
    return Path(to_absolute(current, relative, allowed_prefixes=allowed_prefixes))
