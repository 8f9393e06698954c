"""Bump version in pyproject.toml and the package __version__ without building.

Source of truth: the manifest's [project].version. The metadata file is
rewritten only if it exists. Writes version=<new> to $GITHUB_OUTPUT when set.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pyrelease_tooling.config import ReleaseConfig
from pyrelease_tooling.errors import ReleaseError
from pyrelease_tooling.release.sites import default_sites
from pyrelease_tooling.release.transaction import VersionTransaction
from pyrelease_tooling.release.version import BumpKind, read_manifest_version


def run(config: ReleaseConfig, bump: str | None = None) -> int:
    """Bump version: read from manifest, rewrite every version site. Returns 0 or 1."""
    if not config.manifest_path.is_file():
        print(f"{config.manifest_path} not found", file=sys.stderr)
        return 1
    try:
        kind = BumpKind.parse(bump if bump is not None else config.default_bump)
        old = read_manifest_version(config.manifest_path)
        new = old.bump(kind)
        tx = VersionTransaction(default_sites(config))
        updated = tx.apply(str(old), str(new))
        tx.commit()
    except ReleaseError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1

    print(f"Bumped {old} -> {new} ({kind.value}); updated {len(updated)} file(s)")
    for site in updated:
        try:
            rel = site.path.relative_to(config.project_root)
        except ValueError:
            rel = site.path
        print(f"  {rel}")

    go = os.environ.get("GITHUB_OUTPUT")
    if go:
        with Path(go).open("a") as f:
            f.write(f"version={new}\n")

    return 0


def run_current(config: ReleaseConfig) -> int:
    """Print the manifest version. Returns 0 or 1."""
    try:
        print(read_manifest_version(config.manifest_path))
    except ReleaseError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1
    return 0
