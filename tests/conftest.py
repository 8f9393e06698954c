"""Pytest fixtures for pyrelease tooling tests."""

from pathlib import Path

import pytest

PYPROJECT = """[build-system]
requires = ["setuptools>=68"]
build-backend = "setuptools.build_meta"

[project]
name = "demo-pkg"
version = "1.2.3"  # managed by pyrelease
description = "Demo"
dependencies = ["requests>=2.0"]
"""

INIT_PY = '"""Demo package."""\n\n__version__ = "1.2.3"\n'


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """Project with pyproject.toml (1.2.3) and demo_pkg/__init__.py. Returns the root."""
    (tmp_path / "pyproject.toml").write_text(PYPROJECT)
    (tmp_path / "demo_pkg").mkdir()
    (tmp_path / "demo_pkg" / "__init__.py").write_text(INIT_PY)
    return tmp_path


@pytest.fixture
def bare_project(tmp_path: Path) -> Path:
    """Project with pyproject.toml only (no metadata file)."""
    (tmp_path / "pyproject.toml").write_text(PYPROJECT)
    return tmp_path
