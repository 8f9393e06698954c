"""Full release: bump version sites, build, verify, confirm, upload.

The version bump is held in a VersionTransaction and committed only after the
upload succeeds. Build, verification or upload failure restores the previous
version and returns the failing tool's exit status. Operator rejection restores
the previous version and returns 0.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from pyrelease_tooling import console
from pyrelease_tooling.build import run_build, verify_artifacts
from pyrelease_tooling.config import ReleaseConfig
from pyrelease_tooling.errors import ReleaseError
from pyrelease_tooling.helpers import find_artifacts
from pyrelease_tooling.publish import GateState, PublishGate, check_credentials, upload_artifacts
from pyrelease_tooling.release.sites import default_sites
from pyrelease_tooling.release.transaction import VersionTransaction
from pyrelease_tooling.release.version import BumpKind, read_manifest_version

log = logging.getLogger(__name__)

INTERRUPTED_EXIT = 130


class Outcome(str, Enum):
    PUBLISHED = "published"
    REJECTED = "rejected"
    DRY_RUN = "dry_run"
    BUILD_FAILED = "build_failed"
    VERIFY_FAILED = "verify_failed"
    UPLOAD_FAILED = "upload_failed"
    INTERRUPTED = "interrupted"


@dataclass
class ReleaseAttempt:
    """What happened during one run. Not persisted."""

    old_version: str
    new_version: str
    bump_kind: BumpKind
    build_succeeded: bool = False
    user_confirmed: bool = False
    upload_succeeded: bool = False
    rolled_back: bool = False
    outcome: Outcome | None = None
    exit_code: int = 0


def _finish(
    config: ReleaseConfig,
    attempt: ReleaseAttempt,
    tx: VersionTransaction,
    outcome: Outcome,
    rc: int,
) -> ReleaseAttempt:
    attempt.outcome = outcome
    attempt.exit_code = rc
    if outcome is Outcome.PUBLISHED:
        tx.commit()
        return attempt
    if tx.active:
        console.step("↩️ Reverting version changes...")
        for p in tx.rollback():
            try:
                rel = p.relative_to(config.project_root)
            except ValueError:
                rel = p
            print(f"  {rel}")
        attempt.rolled_back = True
    return attempt


def release(
    config: ReleaseConfig,
    bump: BumpKind | str,
    *,
    prompt: Callable[[str], str] = input,
    assume_yes: bool = False,
    dry_run: bool = False,
    clean: bool = True,
) -> ReleaseAttempt:
    """Run one release attempt. Raises ReleaseError for pre-build failures (nothing left modified)."""
    kind = BumpKind.parse(bump)
    console.step(f"📦 Version bump type: {kind.value}")

    old = read_manifest_version(config.manifest_path)
    console.step(f"📊 Current version: {old}")
    new = old.bump(kind)
    console.ok(f"New version: {new}")

    attempt = ReleaseAttempt(old_version=str(old), new_version=str(new), bump_kind=kind)
    with VersionTransaction(default_sites(config)) as tx:
        for site in tx.apply(str(old), str(new)):
            console.step(f"📝 Updated version in {site.path.name}")

        try:
            rc = run_build(config, clean=clean)
            if rc != 0:
                return _finish(config, attempt, tx, Outcome.BUILD_FAILED, rc)
            rc = verify_artifacts(config)
            if rc != 0:
                return _finish(config, attempt, tx, Outcome.VERIFY_FAILED, rc)
            attempt.build_succeeded = True

            if dry_run:
                console.step(f"[dry-run] would publish {config.package_name}@{new}; skipping upload")
                return _finish(config, attempt, tx, Outcome.DRY_RUN, 0)

            gate = PublishGate(prompt, repository=config.repository or "PyPI")
            state = gate.accept() if assume_yes else gate.ask(str(new))
        except KeyboardInterrupt:
            console.warn("Interrupted")
            return _finish(config, attempt, tx, Outcome.INTERRUPTED, INTERRUPTED_EXIT)

        if state is GateState.REJECTED:
            console.warn("Publication cancelled")
            return _finish(config, attempt, tx, Outcome.REJECTED, 0)

        attempt.user_confirmed = True
        try:
            rc = upload_artifacts(config, find_artifacts(config.dist_path))
        except KeyboardInterrupt:
            console.warn("Interrupted during upload; some artifacts may already be on the index")
            return _finish(config, attempt, tx, Outcome.INTERRUPTED, INTERRUPTED_EXIT)
        if rc != 0:
            console.warn("Some artifacts may already be on the index; check before re-running")
            return _finish(config, attempt, tx, Outcome.UPLOAD_FAILED, rc)
        attempt.upload_succeeded = True
        return _finish(config, attempt, tx, Outcome.PUBLISHED, 0)


def _summary(config: ReleaseConfig, attempt: ReleaseAttempt) -> None:
    name = config.package_name or config.project_root.name
    console.ok(f"Successfully published {name}@{attempt.new_version}")
    console.step("📋 Summary:")
    print(f"  • Version: {attempt.old_version} → {attempt.new_version}")
    print(f"  • Package: {name}@{attempt.new_version}")
    print(f"  • Registry: {config.registry_url}")


def run(
    config: ReleaseConfig,
    bump: str | None = None,
    *,
    prompt: Callable[[str], str] = input,
    assume_yes: bool = False,
    dry_run: bool = False,
    clean: bool = True,
) -> int:
    """CLI-facing release. Returns exit status (0 on publish, rejection or dry-run)."""
    console.step(f"🚀 Starting {config.package_name or 'package'} build and publish process")
    if not config.manifest_path.is_file():
        console.fail(f"{config.manifest_path} not found")
        return 1
    try:
        kind = BumpKind.parse(bump if bump is not None else config.default_bump)
    except ReleaseError as e:
        console.fail(str(e))
        return 1

    if not dry_run:
        console.step("📋 Checking PyPI authentication...")
        check_credentials()

    try:
        attempt = release(config, kind, prompt=prompt, assume_yes=assume_yes, dry_run=dry_run, clean=clean)
    except ReleaseError as e:
        console.fail(str(e))
        return 1
    except KeyboardInterrupt:
        console.warn("Interrupted")
        return INTERRUPTED_EXIT

    log.debug("Release attempt: %s", attempt)
    if attempt.outcome is Outcome.PUBLISHED:
        _summary(config, attempt)
        console.ok("Process completed successfully!")
    elif attempt.rolled_back:
        console.step(f"Version restored to {attempt.old_version}")
    return attempt.exit_code
