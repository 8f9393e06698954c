"""Release config: defaults from pyproject.toml, then .pyrelease.yaml, then CLI overrides.

Config YAML format (all keys optional):
- package_name: distribution name (default: [project].name)
- manifest: path to the manifest (default: pyproject.toml)
- metadata_file: file with __version__ (default: src/<pkg>/__init__.py or <pkg>/__init__.py)
- dist_dir: build output directory (default: dist)
- clean_dirs: extra directories removed before building (default: [build])
- repository: twine --repository name
- repository_url: twine --repository-url, also used for the summary link
- build_command / check_command / upload_command: argv list or shell-style string
- default_bump: patch | minor | major (default: minor)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any

import tomlkit
from tomlkit.exceptions import ParseError

from pyrelease_tooling.errors import ConfigError
from pyrelease_tooling.helpers import as_command, load_yaml_config, resolve_under
from pyrelease_tooling.release.version import BumpKind

log = logging.getLogger(__name__)

CONFIG_FILENAME = ".pyrelease.yaml"
PYPI_PROJECT_URL = "https://pypi.org/project/{name}/"


@dataclass
class ReleaseConfig:
    project_root: Path
    package_name: str | None = None
    manifest: str = "pyproject.toml"
    metadata_file: str | None = None
    dist_dir: str = "dist"
    clean_dirs: list[str] = field(default_factory=lambda: ["build"])
    repository: str | None = None
    repository_url: str | None = None
    build_command: list[str] | None = None
    check_command: list[str] | None = None
    upload_command: list[str] | None = None
    default_bump: BumpKind = BumpKind.MINOR

    @property
    def manifest_path(self) -> Path:
        return self.project_root / self.manifest

    @property
    def metadata_path(self) -> Path | None:
        if self.metadata_file is None:
            return None
        return self.project_root / self.metadata_file

    @property
    def dist_path(self) -> Path:
        return self.project_root / self.dist_dir

    @property
    def registry_url(self) -> str:
        if self.repository_url:
            return self.repository_url
        return PYPI_PROJECT_URL.format(name=self.package_name or "")


_YAML_KEYS = frozenset(f.name for f in fields(ReleaseConfig)) - {"project_root"}
_COMMAND_KEYS = ("build_command", "check_command", "upload_command")


def _manifest_name(manifest: Path) -> str | None:
    """[project].name or [tool.poetry].name from manifest, None if unreadable."""
    if not manifest.is_file():
        return None
    try:
        doc = tomlkit.parse(manifest.read_text(encoding="utf-8"))
    except ParseError as e:
        log.debug("Cannot read name from %s: %s", manifest, e)
        return None
    for table in (doc.get("project"), doc.get("tool", {}).get("poetry")):
        if table is not None and "name" in table:
            return str(table["name"])
    return None


def _default_metadata_file(project_root: Path, package_name: str | None) -> str | None:
    """src/<pkg>/__init__.py when present, else <pkg>/__init__.py (may not exist)."""
    if not package_name:
        return None
    pkg = package_name.replace("-", "_").replace(".", "_")
    src_layout = Path("src") / pkg / "__init__.py"
    if (project_root / src_layout).is_file():
        return src_layout.as_posix()
    return (Path(pkg) / "__init__.py").as_posix()


def _normalize(data: dict[str, Any], source: Path) -> dict[str, Any]:
    unknown = sorted(set(data) - _YAML_KEYS)
    if unknown:
        msg = f"Unknown key(s) in {source}: {', '.join(unknown)}"
        raise ConfigError(msg)
    out = dict(data)
    for key in _COMMAND_KEYS:
        if key in out:
            out[key] = as_command(out[key])
    if "clean_dirs" in out:
        if not isinstance(out["clean_dirs"], list):
            msg = f"clean_dirs in {source} must be a list"
            raise ConfigError(msg)
        out["clean_dirs"] = [str(d) for d in out["clean_dirs"]]
    if "dist_dir" in out:
        out["dist_dir"] = str(out["dist_dir"])
    if "default_bump" in out:
        out["default_bump"] = BumpKind.parse(out["default_bump"])
    return out


def load_config(
    project_root: Path,
    config_path: Path | None = None,
    **overrides: Any,
) -> ReleaseConfig:
    """Build ReleaseConfig for project_root.

    config_path defaults to project_root/.pyrelease.yaml (skipped if absent; an
    explicit config_path must exist). overrides with value None are ignored.
    """
    project_root = Path(project_root).resolve()
    data: dict[str, Any] = {}
    explicit = config_path is not None
    path = Path(config_path) if explicit else project_root / CONFIG_FILENAME
    if path.is_file():
        try:
            data = _normalize(load_yaml_config(path), path)
        except ValueError as e:
            raise ConfigError(str(e)) from e
        log.debug("Loaded release config from %s", path)
    elif explicit:
        msg = f"Config file {path} not found"
        raise ConfigError(msg)

    cfg = ReleaseConfig(project_root=project_root, **data)
    cfg = replace(cfg, **{k: v for k, v in overrides.items() if v is not None})
    for d in (cfg.dist_dir, *cfg.clean_dirs):
        resolve_under(project_root, d)
    if cfg.package_name is None:
        cfg.package_name = _manifest_name(cfg.manifest_path)
    if cfg.metadata_file is None:
        cfg.metadata_file = _default_metadata_file(project_root, cfg.package_name)
    return cfg
