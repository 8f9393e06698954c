"""`pyrelease publish|bump|current`."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pyrelease_tooling.config import load_config
from pyrelease_tooling.errors import ConfigError, InvalidBumpKind
from pyrelease_tooling.release import publish
from pyrelease_tooling.release.bump import run as run_bump
from pyrelease_tooling.release.bump import run_current


def _parser(command: str) -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog=f"pyrelease {command}")
    if command in ("publish", "bump"):
        ap.add_argument(
            "bump",
            nargs="?",
            default=None,
            help="patch, minor, or major (default: minor, or default_bump from config)",
        )
    ap.add_argument(
        "--project-root",
        type=lambda s: Path(s).resolve(),
        default=Path.cwd(),
        help="Project root containing pyproject.toml (default: cwd)",
    )
    ap.add_argument("--config", type=Path, default=None, help="Release config YAML (default: .pyrelease.yaml)")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    if command == "publish":
        ap.add_argument("--dry-run", action="store_true", help="Build and check, then restore the version")
        ap.add_argument("--yes", "-y", action="store_true", help="Publish without asking")
        ap.add_argument("--no-clean", action="store_true", help="Keep dist/, build/, *.egg-info")
        ap.add_argument("--repository", "-r", default=None, help="twine --repository name")
    return ap


def run_release_argv(command: str, argv: list[str] | None = None) -> None:
    """Parse argv for command (publish, bump, current) and run. Exits with the command's status."""
    if argv is None:
        argv = sys.argv[2:] if len(sys.argv) > 2 else []
    args = _parser(command).parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(
            args.project_root,
            args.config,
            repository=getattr(args, "repository", None),
        )
    except (ConfigError, InvalidBumpKind) as e:
        print(f"❌ {e}", file=sys.stderr)
        sys.exit(1)

    if command == "current":
        sys.exit(run_current(config))
    if command == "bump":
        sys.exit(run_bump(config, args.bump))
    rc = publish.run(
        config,
        args.bump,
        assume_yes=args.yes,
        dry_run=args.dry_run,
        clean=not args.no_clean,
    )
    sys.exit(rc)
