"""Main CLI entry point for pyrelease."""

import sys

from pyrelease_tooling.cli import release_cmd

USAGE = """Usage: pyrelease <command> [args...]
Commands:
  publish [patch|minor|major]  - Bump, build, check, confirm and upload (default: minor)
  bump [patch|minor|major]     - Bump version in pyproject.toml and __init__.py only
  current                      - Print the current version"""


def main() -> None:
    """Main CLI entry point."""
    if len(sys.argv) < 2 or sys.argv[1] in ("-h", "--help"):
        print(USAGE, file=sys.stderr)
        sys.exit(1 if len(sys.argv) < 2 else 0)

    command = sys.argv[1]
    rest = sys.argv[2:]

    if command in ("publish", "bump", "current"):
        release_cmd.run_release_argv(command, rest)
    else:
        print(f"Error: Unknown command: {command}", file=sys.stderr)
        print(USAGE, file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
