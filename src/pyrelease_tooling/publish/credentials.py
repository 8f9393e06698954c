"""Advisory check for upload credentials. Never blocks a release."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import keyring
from keyring.errors import KeyringError

from pyrelease_tooling import console

log = logging.getLogger(__name__)


def _keyring_available() -> bool:
    try:
        backend = keyring.get_keyring()
    except (KeyringError, RuntimeError) as e:
        log.debug("keyring unavailable: %s", e)
        return False
    # the fail backend means no usable keyring was found
    return "fail" not in type(backend).__module__


def check_credentials(home: Path | None = None) -> bool:
    """True if TWINE_PASSWORD, ~/.pypirc or a keyring backend is available; warns otherwise."""
    if os.environ.get("TWINE_PASSWORD"):
        return True
    pypirc = (home or Path.home()) / ".pypirc"
    if pypirc.is_file() or _keyring_available():
        return True
    console.warn("PyPI credentials not found. You may be prompted for credentials during upload.")
    return False
