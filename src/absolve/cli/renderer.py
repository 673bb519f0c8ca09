"""Output for the absolve command.

Resolved paths are data: they are written to stdout as raw text so a pipe
gets exactly what the resolver returned. Only diagnostics go through Rich.
"""

from __future__ import annotations

import json
import sys
from typing import Any

from rich.console import Console
from rich.markup import escape

from ..errors import ResolveError

console = Console(stderr=True, emoji=False)

MUTED = "#8b8b8b"  # error kind tag
ERROR_RED = "#CD6B6B"  # pale red for inline errors (operational, not alarming)


def _write_stdout(text: str) -> None:
    # Looked up per call so redirected streams are honoured
    sys.stdout.write(text + "\n")
    sys.stdout.flush()


def render_resolved(resolved: str) -> None:
    _write_stdout(resolved)


def render_error(original: str, error: ResolveError) -> None:
    console.print(
        f"[{ERROR_RED}]error[/{ERROR_RED}] [{MUTED}]({error.kind.value})[/{MUTED}] "
        f"{escape(original)}: {escape(str(error))}",
        highlight=False,
        emoji=False,
        soft_wrap=True,
    )


def render_json(records: list[dict[str, Any]]) -> None:
    """Print one JSON object per line."""
    for record in records:
        _write_stdout(json.dumps(record))


def result_record(original: str, resolved: str | None = None, error: ResolveError | None = None) -> dict[str, Any]:
    record: dict[str, Any] = {"path": original}
    if error is not None:
        record["error"] = str(error)
        record["kind"] = error.kind.value
    else:
        record["resolved"] = resolved
    return record
