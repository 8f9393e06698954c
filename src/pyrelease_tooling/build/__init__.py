"""Build sdist/wheel with the build frontend and verify the artifacts with twine check."""

from .dist_build import build_command, clean_build_dirs, run_build
from .verify import EMPTY_DIST_EXIT, check_command, verify_artifacts

__all__ = [
    "EMPTY_DIST_EXIT",
    "build_command",
    "check_command",
    "clean_build_dirs",
    "run_build",
    "verify_artifacts",
]
