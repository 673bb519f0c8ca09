"""Configuration loader: YAML file with environment variable fallbacks."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .parts import DRIVE_PREFIXES, PrefixKind

_DEFAULT_ALLOWED_PREFIXES = ("disk", "verbatim_disk")
_OUTPUT_MODES = ("text", "json")


@dataclass
class ResolverConfig:
    allowed_prefixes: list[str] = field(default_factory=lambda: list(_DEFAULT_ALLOWED_PREFIXES))

    def prefix_kinds(self) -> frozenset[PrefixKind]:
        return frozenset(PrefixKind(name) for name in self.allowed_prefixes)


@dataclass
class CliConfig:
    base_dir: str | None = None
    output: str = "text"


@dataclass
class AppConfig:
    resolver: ResolverConfig = field(default_factory=ResolverConfig)
    cli: CliConfig = field(default_factory=CliConfig)
    log_level: str = "WARNING"


def _get_config_path() -> Path:
    env_path = os.environ.get("ABSOLVE_CONFIG")
    if env_path:
        return Path(os.path.expanduser(env_path))
    return Path.home() / ".absolve" / "config.yaml"


def _split_names(raw: str) -> list[str]:
    return [name.strip() for name in raw.split(",") if name.strip()]


def _parse_allowed_prefixes(raw: Any, path: Path) -> list[str]:
    if isinstance(raw, str):
        raw = _split_names(raw)
    if not isinstance(raw, list):
        raise ValueError(f"'resolver.allowed_prefixes' must be a list in {path}")

    names = [str(name).strip().lower() for name in raw]
    if not names:
        raise ValueError(f"'resolver.allowed_prefixes' must name at least one prefix kind in {path}")

    known = {kind.value for kind in PrefixKind}
    unknown = [name for name in names if name not in known]
    if unknown:
        raise ValueError(
            f"Unknown prefix kind(s) {', '.join(unknown)} in {path}. Valid kinds: {', '.join(sorted(known))}"
        )

    drive_names = {kind.value for kind in DRIVE_PREFIXES}
    not_drive = [name for name in names if name not in drive_names]
    if not_drive:
        raise ValueError(
            f"Prefix kind(s) {', '.join(not_drive)} in {path} cannot be re-encoded as a drive designator. "
            f"Only {', '.join(sorted(drive_names))} may be allowed."
        )
    return list(dict.fromkeys(names))


def load_config(config_path: Path | None = None) -> AppConfig:
    raw: dict[str, Any] = {}
    path = config_path or _get_config_path()

    if path.exists():
        with open(path, encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"Config file {path} must contain a mapping at the top level")

    resolver_raw = raw.get("resolver") or {}
    if not isinstance(resolver_raw, dict):
        resolver_raw = {}
    allowed_raw = resolver_raw.get("allowed_prefixes")
    if allowed_raw is None:
        allowed_raw = _split_names(os.environ.get("ABSOLVE_ALLOWED_PREFIXES", "")) or list(_DEFAULT_ALLOWED_PREFIXES)
    resolver = ResolverConfig(allowed_prefixes=_parse_allowed_prefixes(allowed_raw, path))

    cli_raw = raw.get("cli") or {}
    if not isinstance(cli_raw, dict):
        cli_raw = {}
    base_dir = cli_raw.get("base_dir") or os.environ.get("ABSOLVE_BASE_DIR") or None
    if base_dir:
        base_dir = os.path.expanduser(str(base_dir))
    output = str(cli_raw.get("output") or os.environ.get("ABSOLVE_OUTPUT", "text")).strip().lower()
    if output not in _OUTPUT_MODES:
        raise ValueError(f"'cli.output' must be one of {', '.join(_OUTPUT_MODES)} in {path}, got {output!r}")

    log_level = str(raw.get("log_level") or os.environ.get("ABSOLVE_LOG_LEVEL", "WARNING")).strip().upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ValueError(f"Unknown log_level {log_level!r} in {path}")

    return AppConfig(
        resolver=resolver,
        cli=CliConfig(base_dir=base_dir, output=output),
        log_level=log_level,
    )
