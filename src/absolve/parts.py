"""Path grammar: prefix classification and component walks.

Windows absolute paths may start with a prefix that names the root's kind:
a drive (``C:``), a network share (``\\\\server\\share``), a device
namespace (``\\\\.\\COM1``) or one of the verbatim forms (``\\\\?\\...``)
that switch off separator and ``.``/``..`` interpretation. POSIX paths have
no prefix at all.

Pure functions, no I/O.
"""

from __future__ import annotations

import string
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum

_WINDOWS_SEPS = "\\/"
_VERBATIM_SEPS = "\\"
_POSIX_SEPS = "/"

_VERBATIM_OPENER = "\\\\?\\"
_VERBATIM_UNC = "UNC\\"


class PrefixKind(Enum):
    """Kind of a Windows path prefix. Values double as config names."""

    DISK = "disk"  # C:
    VERBATIM_DISK = "verbatim_disk"  # \\?\C:
    UNC = "unc"  # \\server\share
    DEVICE_NS = "device_ns"  # \\.\COM1
    VERBATIM_UNC = "verbatim_unc"  # \\?\UNC\server\share
    VERBATIM = "verbatim"  # \\?\pictures


# Prefix kinds that carry exactly one drive letter
DRIVE_PREFIXES: frozenset[PrefixKind] = frozenset({PrefixKind.DISK, PrefixKind.VERBATIM_DISK})

_VERBATIM_KINDS = frozenset({PrefixKind.VERBATIM_DISK, PrefixKind.VERBATIM_UNC, PrefixKind.VERBATIM})


@dataclass(frozen=True)
class Prefix:
    kind: PrefixKind
    text: str
    drive: str | None = None
    server: str | None = None
    share: str | None = None
    name: str | None = None

    @property
    def is_verbatim(self) -> bool:
        return self.kind in _VERBATIM_KINDS


class ComponentKind(Enum):
    PREFIX = "prefix"
    ROOT = "root"
    CUR_DIR = "cur_dir"
    PARENT_DIR = "parent_dir"
    NORMAL = "normal"


@dataclass(frozen=True)
class Component:
    kind: ComponentKind
    text: str
    prefix: Prefix | None = None


def _next_component(path: str, seps: str) -> tuple[str, str]:
    """Split *path* at its first separator into (component, remainder)."""
    for i, ch in enumerate(path):
        if ch in seps:
            return path[:i], path[i + 1 :]
    return path, ""


def _parse_drive(path: str) -> str | None:
    if len(path) >= 2 and path[1] == ":" and path[0] in string.ascii_letters:
        return path[0]
    return None


def _parse_drive_exact(path: str) -> str | None:
    # Verbatim paths only recognize a drive that is the whole first component
    drive = _parse_drive(path)
    if drive is not None and (len(path) == 2 or path[2] in _VERBATIM_SEPS):
        return drive
    return None


def parse_prefix(path: str) -> Prefix | None:
    """Classify the Windows prefix at the start of *path*, if any."""
    if len(path) >= 2 and path[0] in _WINDOWS_SEPS and path[1] in _WINDOWS_SEPS:
        if path.startswith(_VERBATIM_OPENER) and "/" not in path[:8]:
            rest = path[len(_VERBATIM_OPENER) :]
            if rest[: len(_VERBATIM_UNC)].upper() == _VERBATIM_UNC:
                server, remainder = _next_component(rest[len(_VERBATIM_UNC) :], _VERBATIM_SEPS)
                share, _ = _next_component(remainder, _VERBATIM_SEPS)
                length = len(_VERBATIM_OPENER) + len(_VERBATIM_UNC) + len(server)
                if share:
                    length += 1 + len(share)
                return Prefix(PrefixKind.VERBATIM_UNC, path[:length], server=server, share=share)
            drive = _parse_drive_exact(rest)
            if drive is not None:
                return Prefix(PrefixKind.VERBATIM_DISK, path[: len(_VERBATIM_OPENER) + 2], drive=drive)
            name, _ = _next_component(rest, _VERBATIM_SEPS)
            return Prefix(PrefixKind.VERBATIM, path[: len(_VERBATIM_OPENER) + len(name)], name=name)

        if path[2:3] == "." and path[3:4] != "" and path[3] in _WINDOWS_SEPS:
            name, _ = _next_component(path[4:], _WINDOWS_SEPS)
            return Prefix(PrefixKind.DEVICE_NS, path[: 4 + len(name)], name=name)

        server, remainder = _next_component(path[2:], _WINDOWS_SEPS)
        share, _ = _next_component(remainder, _WINDOWS_SEPS)
        if server and share:
            length = 2 + len(server) + 1 + len(share)
            return Prefix(PrefixKind.UNC, path[:length], server=server, share=share)
        # "\\" without a usable server and share is not a prefix
        return None

    drive = _parse_drive(path)
    if drive is not None:
        return Prefix(PrefixKind.DISK, path[:2], drive=drive)
    return None


def is_absolute(path: str, *, windows: bool) -> bool:
    """Return True if *path* is absolute under the selected grammar.

    On Windows a drive prefix needs a separator right after it (``C:\\``),
    every other prefix kind has an implicit root, and a rooted path without
    a prefix (``\\foo``) is still relative to the current drive.
    """
    if not windows:
        return path.startswith(_POSIX_SEPS)
    prefix = parse_prefix(path)
    if prefix is None:
        return False
    if prefix.kind is not PrefixKind.DISK:
        return True
    rest = path[len(prefix.text) :]
    return rest[:1] != "" and rest[0] in _WINDOWS_SEPS


def components(path: str, *, windows: bool) -> Iterator[Component]:
    """Yield the components of *path* in left-to-right order.

    Empty segments are dropped. ``.`` survives only at the head of a
    relative path or inside a verbatim path, where it is a literal name.
    """
    prefix = parse_prefix(path) if windows else None
    rest = path
    verbatim = False
    if prefix is not None:
        yield Component(ComponentKind.PREFIX, prefix.text, prefix)
        rest = path[len(prefix.text) :]
        verbatim = prefix.is_verbatim

    if verbatim:
        seps = _VERBATIM_SEPS
    else:
        seps = _WINDOWS_SEPS if windows else _POSIX_SEPS

    has_root = rest[:1] != "" and rest[0] in seps
    if has_root:
        yield Component(ComponentKind.ROOT, "\\" if windows else "/")
        rest = rest[1:]

    leading_cur_dir = not has_root and (prefix is None or prefix.kind is PrefixKind.DISK)
    first = True
    while rest:
        segment, rest = _next_component(rest, seps)
        if not segment:
            continue
        if segment == "..":
            yield Component(ComponentKind.PARENT_DIR, segment)
        elif segment == ".":
            if verbatim or (first and leading_cur_dir):
                yield Component(ComponentKind.CUR_DIR, segment)
        else:
            yield Component(ComponentKind.NORMAL, segment)
        first = False


def _is_bare_drive(text: str) -> bool:
    return len(text) == 2 and _parse_drive(text) is not None


def join_parts(parts: Iterable[str], *, windows: bool) -> str:
    """Rebuild a native path string from encoded component strings.

    Separators are inserted between named segments only: never after a
    root, never after a bare drive token (``C:`` + ``foo`` is ``C:foo``),
    and never at the end.
    """
    seps = _WINDOWS_SEPS if windows else _POSIX_SEPS
    sep = seps[0]
    joined = ""
    for part in parts:
        if (
            joined
            and joined[-1] not in seps
            and part[:1] not in ("", *seps)
            and not (windows and _is_bare_drive(joined))
        ):
            joined += sep
        joined += part
    return joined
