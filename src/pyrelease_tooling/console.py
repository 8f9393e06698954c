"""Operator-facing status lines: emoji prefix, ANSI color when stdout is a TTY."""

from __future__ import annotations

import os
import sys
from typing import TextIO

RED = "\033[0;31m"
GREEN = "\033[0;32m"
YELLOW = "\033[1;33m"
BLUE = "\033[0;34m"
NC = "\033[0m"


def use_color(stream: TextIO | None = None) -> bool:
    """Color only on a TTY and when NO_COLOR is unset."""
    stream = stream or sys.stdout
    if os.environ.get("NO_COLOR"):
        return False
    return hasattr(stream, "isatty") and stream.isatty()


def _emit(color: str, text: str, *, err: bool = False) -> None:
    stream = sys.stderr if err else sys.stdout
    if use_color(stream):
        text = f"{color}{text}{NC}"
    print(text, file=stream)


def step(text: str) -> None:
    _emit(BLUE, text)


def ok(text: str) -> None:
    _emit(GREEN, f"✅ {text}")


def warn(text: str) -> None:
    _emit(YELLOW, f"⚠ {text}")


def fail(text: str) -> None:
    _emit(RED, f"❌ {text}", err=True)


def ask(text: str) -> None:
    _emit(YELLOW, text)
