"""Tests for pyrelease_tooling.config.load_config."""

from pathlib import Path

import pytest

from pyrelease_tooling.config import CONFIG_FILENAME, load_config
from pyrelease_tooling.errors import ConfigError, InvalidBumpKind
from pyrelease_tooling.release.version import BumpKind


class TestLoadConfigDefaults:
    def test_defaults_from_manifest(self, project: Path) -> None:
        cfg = load_config(project)
        assert cfg.package_name == "demo-pkg"
        assert cfg.metadata_file == "demo_pkg/__init__.py"
        assert cfg.manifest_path == project / "pyproject.toml"
        assert cfg.dist_path == project / "dist"
        assert cfg.clean_dirs == ["build"]
        assert cfg.default_bump is BumpKind.MINOR
        assert cfg.registry_url == "https://pypi.org/project/demo-pkg/"

    def test_src_layout_metadata_file(self, bare_project: Path) -> None:
        (bare_project / "src" / "demo_pkg").mkdir(parents=True)
        (bare_project / "src" / "demo_pkg" / "__init__.py").write_text('__version__ = "1.2.3"\n')
        cfg = load_config(bare_project)
        assert cfg.metadata_file == "src/demo_pkg/__init__.py"

    def test_no_manifest_no_metadata(self, tmp_path: Path) -> None:
        cfg = load_config(tmp_path)
        assert cfg.package_name is None
        assert cfg.metadata_path is None


class TestLoadConfigYaml:
    def test_yaml_overrides_defaults(self, project: Path) -> None:
        (project / CONFIG_FILENAME).write_text(
            "dist_dir: out\n"
            "clean_dirs: [build, .cache]\n"
            "repository: testpypi\n"
            "default_bump: patch\n"
            "build_command: echo build\n"
            "upload_command: [twine, upload, --skip-existing]\n"
        )
        cfg = load_config(project)
        assert cfg.dist_path == project / "out"
        assert cfg.clean_dirs == ["build", ".cache"]
        assert cfg.repository == "testpypi"
        assert cfg.default_bump is BumpKind.PATCH
        assert cfg.build_command == ["echo", "build"]
        assert cfg.upload_command == ["twine", "upload", "--skip-existing"]

    def test_explicit_config_path(self, project: Path, tmp_path: Path) -> None:
        other = tmp_path / "release.yaml"
        other.write_text("package_name: renamed\n")
        cfg = load_config(project, other)
        assert cfg.package_name == "renamed"
        assert cfg.metadata_file == "renamed/__init__.py"

    def test_explicit_missing_config_raises(self, project: Path) -> None:
        with pytest.raises(ConfigError):
            load_config(project, project / "missing.yaml")

    def test_unknown_key_raises(self, project: Path) -> None:
        (project / CONFIG_FILENAME).write_text("dist: out\n")
        with pytest.raises(ConfigError) as exc_info:
            load_config(project)
        assert "dist" in str(exc_info.value)

    def test_non_mapping_raises(self, project: Path) -> None:
        (project / CONFIG_FILENAME).write_text("- a\n- b\n")
        with pytest.raises(ConfigError):
            load_config(project)

    def test_invalid_yaml_raises(self, project: Path) -> None:
        (project / CONFIG_FILENAME).write_text("key: [unclosed\n")
        with pytest.raises(ConfigError):
            load_config(project)

    def test_invalid_default_bump_raises(self, project: Path) -> None:
        (project / CONFIG_FILENAME).write_text("default_bump: huge\n")
        with pytest.raises(InvalidBumpKind):
            load_config(project)

    def test_empty_file_is_defaults(self, project: Path) -> None:
        (project / CONFIG_FILENAME).write_text("")
        assert load_config(project).dist_dir == "dist"

    @pytest.mark.parametrize(
        "text", ['dist_dir: ""\n', "dist_dir: .\n", "dist_dir: ..\n", "clean_dirs: [build, ..]\n", "clean_dirs: [/]\n"]
    )
    def test_build_dirs_must_be_inside_project(self, project: Path, text: str) -> None:
        (project / CONFIG_FILENAME).write_text(text)
        with pytest.raises(ConfigError) as exc_info:
            load_config(project)
        assert "Refusing to use" in str(exc_info.value)


class TestLoadConfigOverrides:
    def test_cli_overrides_win_and_none_ignored(self, project: Path) -> None:
        (project / CONFIG_FILENAME).write_text("repository: testpypi\n")
        cfg = load_config(project, repository="pypi", dist_dir=None)
        assert cfg.repository == "pypi"
        assert cfg.dist_dir == "dist"

    def test_dist_dir_override_checked(self, project: Path) -> None:
        with pytest.raises(ConfigError):
            load_config(project, dist_dir="..")

    def test_repository_url_used_for_registry(self, project: Path) -> None:
        cfg = load_config(project, repository_url="https://example.test/simple/")
        assert cfg.registry_url == "https://example.test/simple/"

    def test_project_root_resolved(self, project: Path) -> None:
        cfg = load_config(project / "demo_pkg" / "..")
        assert cfg.project_root == project.resolve()
