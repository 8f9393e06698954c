"""Parse X.Y.Z versions and compute the next one for a bump kind.

Only plain three-part versions are supported; there is no pre-release or
build-metadata component. The manifest version is read structurally with
tomlkit from [project].version (or [tool.poetry].version).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

import tomlkit
from tomlkit.exceptions import ParseError

from pyrelease_tooling.errors import InvalidBumpKind, InvalidVersionFormat

VERSION_RE = re.compile(r"(\d+)\.(\d+)\.(\d+)", re.ASCII)


class BumpKind(str, Enum):
    PATCH = "patch"
    MINOR = "minor"
    MAJOR = "major"

    @classmethod
    def parse(cls, value: str | BumpKind | None) -> BumpKind:
        """Return the BumpKind for value (exact, lowercase). Raises InvalidBumpKind."""
        if isinstance(value, BumpKind):
            return value
        try:
            return cls(value)
        except ValueError:
            msg = f"Invalid version type: {value}. Use patch, minor, or major."
            raise InvalidBumpKind(msg) from None


@dataclass(frozen=True, order=True)
class Version:
    major: int
    minor: int
    patch: int

    def __post_init__(self) -> None:
        for part in (self.major, self.minor, self.patch):
            if part < 0:
                msg = f"Version components must be non-negative: {self.major}.{self.minor}.{self.patch}"
                raise InvalidVersionFormat(msg)

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    def bump(self, kind: BumpKind | str) -> Version:
        b = BumpKind.parse(kind)
        if b is BumpKind.MAJOR:
            return Version(self.major + 1, 0, 0)
        if b is BumpKind.MINOR:
            return Version(self.major, self.minor + 1, 0)
        return Version(self.major, self.minor, self.patch + 1)


def parse_version(text: str) -> Version:
    """Parse "X.Y.Z" into a Version. Raises InvalidVersionFormat on any other shape."""
    m = VERSION_RE.fullmatch(str(text).strip())
    if not m:
        msg = f"Invalid version format: {text!r} (expected X.Y.Z)"
        raise InvalidVersionFormat(msg)
    major, minor, patch = (int(g) for g in m.groups())
    return Version(major, minor, patch)


def next_version(old: str, bump: BumpKind | str) -> str:
    """Compute next version string from old and a bump kind (patch, minor, major)."""
    return str(parse_version(old).bump(bump))


def _manifest_version_field(doc: tomlkit.TOMLDocument) -> object | None:
    project = doc.get("project")
    if project is not None and "version" in project:
        return project["version"]
    poetry = doc.get("tool", {}).get("poetry")
    if poetry is not None and "version" in poetry:
        return poetry["version"]
    return None


def read_manifest_version(manifest: Path) -> Version:
    """Read the version from pyproject.toml. Missing, dynamic or malformed -> InvalidVersionFormat."""
    try:
        doc = tomlkit.parse(manifest.read_text(encoding="utf-8"))
    except (ParseError, OSError) as e:
        msg = f"Could not read version from {manifest}: {e}"
        raise InvalidVersionFormat(msg) from e
    raw = _manifest_version_field(doc)
    if raw is None:
        msg = f"No [project].version or [tool.poetry].version in {manifest}"
        raise InvalidVersionFormat(msg)
    return parse_version(str(raw))
