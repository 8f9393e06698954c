"""Release tooling: bump a package version, build, verify and publish with rollback."""

__version__ = "0.3.0"
