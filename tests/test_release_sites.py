"""Tests for pyrelease_tooling.release.sites (replace_literal, VersionSite, ManifestSite)."""

from pathlib import Path

import pytest

from pyrelease_tooling.config import load_config
from pyrelease_tooling.errors import VersionSiteError
from pyrelease_tooling.release.sites import (
    METADATA_TEMPLATE,
    ManifestSite,
    VersionSite,
    default_sites,
    replace_literal,
)


class TestReplaceLiteral:
    def test_replaces_first_occurrence_only(self, tmp_path: Path) -> None:
        p = tmp_path / "f.txt"
        p.write_text('a = "1.0.0"\nb = "1.0.0"\n')
        assert replace_literal(p, '"1.0.0"', '"2.0.0"') is True
        assert p.read_text() == 'a = "2.0.0"\nb = "1.0.0"\n'

    def test_no_match_is_not_an_error(self, tmp_path: Path) -> None:
        p = tmp_path / "f.txt"
        p.write_text("version='1.0.0'\n")
        assert replace_literal(p, 'version = "1.0.0"', 'version = "1.1.0"') is False
        assert p.read_text() == "version='1.0.0'\n"

    def test_preserves_crlf(self, tmp_path: Path) -> None:
        p = tmp_path / "f.txt"
        p.write_bytes(b'x = 1\r\nversion = "1.0.0"\r\n')
        replace_literal(p, 'version = "1.0.0"', 'version = "1.0.1"')
        assert p.read_bytes() == b'x = 1\r\nversion = "1.0.1"\r\n'


class TestVersionSite:
    def test_metadata_site_rewrites(self, project: Path) -> None:
        site = VersionSite(project / "demo_pkg" / "__init__.py", METADATA_TEMPLATE, optional=True)
        assert site.rewrite("1.2.3", "1.3.0") is True
        assert '__version__ = "1.3.0"' in site.path.read_text()

    def test_missing_optional_site_skipped_and_not_created(self, tmp_path: Path) -> None:
        site = VersionSite(tmp_path / "pkg" / "__init__.py", METADATA_TEMPLATE, optional=True)
        assert site.rewrite("1.2.3", "1.3.0") is False
        assert not site.path.exists()

    def test_missing_required_site_raises(self, tmp_path: Path) -> None:
        site = VersionSite(tmp_path / "nope.py", METADATA_TEMPLATE)
        with pytest.raises(VersionSiteError):
            site.rewrite("1.2.3", "1.3.0")

    def test_reverse_rewrite_is_byte_identical(self, project: Path) -> None:
        site = VersionSite(project / "demo_pkg" / "__init__.py", METADATA_TEMPLATE, optional=True)
        before = site.path.read_bytes()
        site.rewrite("1.2.3", "2.0.0")
        site.rewrite("2.0.0", "1.2.3")
        assert site.path.read_bytes() == before


class TestManifestSite:
    def test_literal_rewrite_keeps_comment(self, project: Path) -> None:
        site = ManifestSite(project / "pyproject.toml")
        assert site.rewrite("1.2.3", "1.3.0") is True
        text = site.path.read_text()
        assert 'version = "1.3.0"  # managed by pyrelease' in text
        assert site.field_value() == "1.3.0"

    def test_structured_fallback_on_other_spacing(self, tmp_path: Path) -> None:
        p = tmp_path / "pyproject.toml"
        p.write_text('[project]\nname = "x"\nversion="0.9.9"\n')
        site = ManifestSite(p)
        assert site.rewrite("0.9.9", "0.10.0") is True
        assert site.field_value() == "0.10.0"
        assert 'name = "x"' in p.read_text()

    def test_structured_fallback_when_literal_hits_other_table(self, tmp_path: Path) -> None:
        p = tmp_path / "pyproject.toml"
        p.write_text(
            '[tool.other]\nversion = "1.0.0"\n\n[project]\nname = "x"\nversion = \'1.0.0\'\n'
        )
        site = ManifestSite(p)
        site.rewrite("1.0.0", "1.0.1")
        text = p.read_text()
        assert site.field_value() == "1.0.1"
        assert '[tool.other]\nversion = "1.0.0"' in text

    def test_wrong_current_version_raises(self, project: Path) -> None:
        site = ManifestSite(project / "pyproject.toml")
        with pytest.raises(VersionSiteError) as exc_info:
            site.rewrite("9.9.9", "10.0.0")
        assert "expected '9.9.9'" in str(exc_info.value)

    def test_missing_manifest_raises(self, tmp_path: Path) -> None:
        with pytest.raises(VersionSiteError):
            ManifestSite(tmp_path / "pyproject.toml").rewrite("1.0.0", "1.0.1")


class TestDefaultSites:
    def test_manifest_then_metadata(self, project: Path) -> None:
        sites = default_sites(load_config(project))
        assert isinstance(sites[0], ManifestSite)
        assert sites[1].path == project / "demo_pkg" / "__init__.py"
        assert sites[1].optional is True
