"""Version bump as a transaction over version sites.

apply() snapshots and rewrites every site; commit() makes the bump permanent;
rollback() reverses the rewrite and restores snapshots if the reverse rewrite
did not reproduce the original bytes. Used as a context manager, leaving the
block without commit() rolls back.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pyrelease_tooling.errors import VersionSiteError
from pyrelease_tooling.release.sites import VersionSite

log = logging.getLogger(__name__)


class VersionTransaction:
    def __init__(self, sites: list[VersionSite]) -> None:
        self.sites = list(sites)
        self.old: str | None = None
        self.new: str | None = None
        self.changed: list[VersionSite] = []
        self.committed = False
        self.rolled_back = False
        self._snapshots: dict[Path, bytes] = {}

    def __enter__(self) -> VersionTransaction:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if not self.committed:
            self.rollback()

    @property
    def active(self) -> bool:
        return bool(self.changed) and not self.committed and not self.rolled_back

    def apply(self, old: str, new: str) -> list[VersionSite]:
        """Rewrite old -> new on every site. Returns the sites that changed.

        Raises VersionSiteError if a required site fails or did not change; sites
        already rewritten are restored before raising.
        """
        if self.old is not None:
            msg = "Version transaction already applied"
            raise RuntimeError(msg)
        self.old, self.new = old, new
        for site in self.sites:
            if site.exists():
                self._snapshots[site.path] = site.path.read_bytes()
        try:
            for site in self.sites:
                if site.rewrite(old, new):
                    self.changed.append(site)
                elif not site.optional:
                    msg = f"{site.path} does not contain {site.literal(old)!r}"
                    raise VersionSiteError(msg)
                else:
                    log.debug("Optional site %s unchanged", site.path)
        except VersionSiteError:
            self.rollback()
            raise
        return list(self.changed)

    def commit(self) -> None:
        self.committed = True
        log.debug("Committed version %s -> %s", self.old, self.new)

    def rollback(self) -> list[Path]:
        """Restore old version on every changed site. Returns restored paths (no-op after commit)."""
        if self.committed or self.rolled_back or self.old is None or self.new is None:
            return []
        restored: list[Path] = []
        for site in reversed(self.changed):
            try:
                site.rewrite(self.new, self.old)
            except VersionSiteError as e:
                log.warning("Reverse rewrite failed for %s: %s", site.path, e)
            snapshot = self._snapshots.get(site.path)
            if snapshot is not None and site.path.read_bytes() != snapshot:
                log.warning("%s differs from its pre-bump content; restoring snapshot", site.path)
                site.path.write_bytes(snapshot)
            restored.append(site.path)
        self.rolled_back = True
        return restored
