"""Upload built artifacts with twine."""

from __future__ import annotations

import sys
from pathlib import Path

from pyrelease_tooling import console
from pyrelease_tooling.config import ReleaseConfig
from pyrelease_tooling.helpers import run_tool


def upload_command(config: ReleaseConfig, artifacts: list[Path]) -> list[str]:
    """Configured upload_command + artifacts, or python -m twine upload [--repository R] <artifacts>."""
    if config.upload_command:
        base = list(config.upload_command)
    else:
        base = [sys.executable, "-m", "twine", "upload"]
        if config.repository:
            base += ["--repository", config.repository]
        if config.repository_url:
            base += ["--repository-url", config.repository_url]
    return base + [str(a) for a in artifacts]


def upload_artifacts(config: ReleaseConfig, artifacts: list[Path]) -> int:
    """Run the upload tool over artifacts. Returns its exit status."""
    console.step(f"📤 Uploading to {config.repository or 'PyPI'}...")
    rc = run_tool(upload_command(config, artifacts), config.project_root)
    if rc != 0:
        console.fail(f"Upload failed (exit {rc})")
    return rc
