"""Release: version parse/bump, version sites, bump transaction; full publish in release.publish."""

from .sites import ManifestSite, VersionSite, replace_literal
from .transaction import VersionTransaction
from .version import BumpKind, Version, next_version, parse_version, read_manifest_version

__all__ = [
    "BumpKind",
    "ManifestSite",
    "Version",
    "VersionSite",
    "VersionTransaction",
    "next_version",
    "parse_version",
    "read_manifest_version",
    "replace_literal",
]
