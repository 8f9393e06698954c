"""Version sites: files holding a version literal that must move in lockstep.

The manifest (pyproject.toml) is required; the package metadata file
(<package>/__init__.py with __version__ = "X.Y.Z") is optional and skipped when
it does not exist. Rewrites are exact first-occurrence substitutions so the
reverse call (new -> old) restores byte-identical content. Files are handled as
bytes decoded with UTF-8 so line endings are preserved.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

import tomlkit
from tomlkit.exceptions import ParseError

from pyrelease_tooling.errors import VersionSiteError

if TYPE_CHECKING:
    from pyrelease_tooling.config import ReleaseConfig

log = logging.getLogger(__name__)

MANIFEST_TEMPLATE = 'version = "{version}"'
METADATA_TEMPLATE = '__version__ = "{version}"'


def _read(path: Path) -> str:
    return path.read_bytes().decode("utf-8")


def _write(path: Path, text: str) -> None:
    path.write_bytes(text.encode("utf-8"))


def replace_literal(path: Path, old: str, new: str) -> bool:
    """Replace the first exact occurrence of old with new in path. Returns True if changed."""
    text = _read(path)
    if old not in text:
        log.debug("%s: literal %r not found", path, old)
        return False
    _write(path, text.replace(old, new, 1))
    return True


@dataclass(frozen=True)
class VersionSite:
    """A file plus the literal template ({version} placeholder) that holds its version."""

    path: Path
    template: str
    optional: bool = False

    def literal(self, version: str) -> str:
        return self.template.format(version=version)

    def exists(self) -> bool:
        return self.path.is_file()

    def rewrite(self, old: str, new: str) -> bool:
        """Rewrite old -> new. Missing optional file is skipped; missing required file raises."""
        if not self.exists():
            if self.optional:
                log.debug("Skipping missing optional version site %s", self.path)
                return False
            msg = f"{self.path} not found"
            raise VersionSiteError(msg)
        try:
            return replace_literal(self.path, self.literal(old), self.literal(new))
        except (OSError, UnicodeDecodeError) as e:
            msg = f"Error updating {self.path}: {e}"
            raise VersionSiteError(msg) from e


class ManifestSite(VersionSite):
    """pyproject.toml version field.

    Tries the exact literal first. If that misses (other spacing or quoting)
    or hits something other than the version field, falls back to editing the
    field with tomlkit, which keeps the rest of the document as written.
    """

    def __init__(self, path: Path) -> None:
        super().__init__(path, MANIFEST_TEMPLATE, optional=False)

    def _table(self, doc: tomlkit.TOMLDocument):
        project = doc.get("project")
        if project is not None and "version" in project:
            return project
        poetry = doc.get("tool", {}).get("poetry")
        if poetry is not None and "version" in poetry:
            return poetry
        msg = f"No [project].version or [tool.poetry].version in {self.path}"
        raise VersionSiteError(msg)

    def field_value(self) -> str:
        try:
            doc = tomlkit.parse(_read(self.path))
        except (OSError, ParseError) as e:
            msg = f"Could not parse {self.path}: {e}"
            raise VersionSiteError(msg) from e
        return str(self._table(doc)["version"])

    def rewrite(self, old: str, new: str) -> bool:
        if not self.exists():
            msg = f"{self.path} not found"
            raise VersionSiteError(msg)
        current = self.field_value()
        if current != old:
            msg = f"{self.path} has version {current!r}, expected {old!r}"
            raise VersionSiteError(msg)

        original = _read(self.path)
        if super().rewrite(old, new) and self.field_value() == new:
            return True

        # literal missed or matched the wrong key; edit the field structurally
        log.debug("%s: literal rewrite did not reach the version field, using tomlkit", self.path)
        doc = tomlkit.parse(original)
        self._table(doc)["version"] = new
        _write(self.path, tomlkit.dumps(doc))
        return True


def default_sites(config: ReleaseConfig) -> list[VersionSite]:
    """Manifest (required) then metadata file (optional)."""
    sites: list[VersionSite] = [ManifestSite(config.manifest_path)]
    if config.metadata_path is not None:
        sites.append(VersionSite(config.metadata_path, METADATA_TEMPLATE, optional=True))
    return sites
