"""Exceptions raised by pyrelease_tooling. CLI entry points map them to exit status 1."""


class ReleaseError(Exception):
    """Base class for release failures that abort a run."""


class InvalidBumpKind(ReleaseError):
    """Bump kind is not one of patch, minor, major."""


class InvalidVersionFormat(ReleaseError):
    """Version string is not exactly three non-negative integers."""


class VersionSiteError(ReleaseError):
    """A required version site could not be read or rewritten."""


class ConfigError(ReleaseError):
    """Release config file is malformed or names unknown keys."""
