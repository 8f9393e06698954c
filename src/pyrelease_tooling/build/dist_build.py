"""Clean previous build output and run the build frontend (python -m build).

Cleaning is destructive: the dist directory, configured clean_dirs (build/) and
every *.egg-info directory at the project root are removed.
"""

from __future__ import annotations

import logging
import shutil
import sys
from pathlib import Path

from pyrelease_tooling import console
from pyrelease_tooling.config import ReleaseConfig
from pyrelease_tooling.helpers import resolve_under, run_tool

log = logging.getLogger(__name__)


def clean_build_dirs(project_root: Path, dist_dir: str = "dist", extra_dirs: list[str] | None = None) -> list[Path]:
    """Remove dist_dir, extra_dirs and *.egg-info under project_root. Returns removed paths.

    Raises ConfigError if dist_dir or an extra dir is the project root or outside it.
    """
    targets = [resolve_under(project_root, dist_dir)]
    targets.extend(resolve_under(project_root, d) for d in (extra_dirs if extra_dirs is not None else ["build"]))
    targets.extend(sorted(project_root.glob("*.egg-info")))
    targets.extend(sorted(project_root.glob("src/*.egg-info")))
    removed: list[Path] = []
    for p in targets:
        if p.is_dir():
            shutil.rmtree(p)
            removed.append(p)
        elif p.exists():
            p.unlink()
            removed.append(p)
    for p in removed:
        log.debug("Removed %s", p)
    return removed


def build_command(config: ReleaseConfig) -> list[str]:
    """Configured build_command, or python -m build --outdir <dist>."""
    if config.build_command:
        return list(config.build_command)
    return [sys.executable, "-m", "build", "--outdir", str(config.dist_path), str(config.project_root)]


def run_build(config: ReleaseConfig, *, clean: bool = True) -> int:
    """Clean (unless clean=False) and build. Returns the build tool's exit status."""
    if clean:
        console.step("🧹 Cleaning previous builds...")
        clean_build_dirs(config.project_root, config.dist_dir, config.clean_dirs)
    console.step("🔨 Building package...")
    rc = run_tool(build_command(config), config.project_root)
    if rc != 0:
        console.fail(f"Build failed (exit {rc})")
    return rc
