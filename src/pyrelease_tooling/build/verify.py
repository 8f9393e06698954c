"""Verify build output: dist directory non-empty, then twine check over every artifact."""

from __future__ import annotations

import sys
from pathlib import Path

from pyrelease_tooling import console
from pyrelease_tooling.config import ReleaseConfig
from pyrelease_tooling.helpers import find_artifacts, format_size, run_tool

EMPTY_DIST_EXIT = 1


def check_command(config: ReleaseConfig, artifacts: list[Path]) -> list[str]:
    """Configured check_command + artifacts, or python -m twine check <artifacts>."""
    base = list(config.check_command) if config.check_command else [sys.executable, "-m", "twine", "check"]
    return base + [str(a) for a in artifacts]


def verify_artifacts(config: ReleaseConfig) -> int:
    """Return 0 if dist has artifacts and the check passes; EMPTY_DIST_EXIT or the checker's status otherwise."""
    artifacts = find_artifacts(config.dist_path)
    if not artifacts:
        console.fail(f"Build failed: {config.dist_dir} directory is empty")
        return EMPTY_DIST_EXIT
    console.ok("Build completed successfully")

    console.step("📋 Package contents:")
    for a in artifacts:
        print(f"  {a.name}  ({format_size(a.stat().st_size)})")

    console.step("🔍 Checking package with twine...")
    rc = run_tool(check_command(config, artifacts), config.project_root)
    if rc != 0:
        console.fail(f"Package check failed (exit {rc})")
    return rc
