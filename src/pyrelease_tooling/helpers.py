"""Shared helpers for pyrelease_tooling (YAML load, paths, artifact discovery, commands).

Used by config, build and publish modules.
"""

from __future__ import annotations

import logging
import shlex
import subprocess
import sys
from pathlib import Path
from typing import Any

import yaml

from pyrelease_tooling.errors import ConfigError

log = logging.getLogger(__name__)

# --- Config ---


def load_yaml_config(p: Path) -> dict[str, Any]:
    """Load a YAML mapping from path. Empty file -> {}. Raises ValueError if not a mapping."""
    with p.open(encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            msg = f"Invalid YAML in {p}: {e}"
            raise ValueError(msg) from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        msg = f"Expected a mapping at top level of {p}, got {type(data).__name__}"
        raise ValueError(msg)
    return data


# --- Paths ---


def resolve_under(root: Path, rel: str | Path) -> Path:
    """Resolve rel against root. Raises ConfigError unless the result lies strictly inside root."""
    base = root.resolve()
    target = (base / rel).resolve()
    if target == base or base not in target.parents:
        msg = f"Refusing to use {rel!r}: must be a directory inside {base}"
        raise ConfigError(msg)
    return target


# --- Artifacts ---


def find_artifacts(dist_dir: Path) -> list[Path]:
    """Files directly under dist_dir (sdists, wheels), sorted. Missing dir -> []."""
    if not dist_dir.is_dir():
        return []
    return sorted(p for p in dist_dir.iterdir() if p.is_file())


def format_size(n: int) -> str:
    """Human-readable byte count (e.g. 12.3 KiB)."""
    size = float(n)
    for unit in ("B", "KiB", "MiB"):
        if size < 1024 or unit == "MiB":
            return f"{size:.0f} {unit}" if unit == "B" else f"{size:.1f} {unit}"
        size /= 1024
    return f"{size:.1f} MiB"


# --- Commands ---


def as_command(value: str | list[str] | None) -> list[str] | None:
    """Normalize a command from config: shell-style string or list -> argv list."""
    if value is None:
        return None
    if isinstance(value, str):
        return shlex.split(value)
    return [str(v) for v in value]


def run_tool(cmd: list[str], cwd: Path) -> int:
    """Run an external tool, streaming its output. Returns its exit status (127 if not found)."""
    log.debug("Running %s in %s", shlex.join(cmd), cwd)
    try:
        r = subprocess.run(cmd, cwd=str(cwd))
    except FileNotFoundError as e:
        print(f"❌ {cmd[0]} not found: {e}", file=sys.stderr)
        return 127
    return r.returncode
