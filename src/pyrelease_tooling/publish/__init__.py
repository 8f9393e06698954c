"""Publish gate (operator confirmation), twine upload, advisory credential check."""

from .credentials import check_credentials
from .gate import GateState, PublishGate
from .upload import upload_artifacts, upload_command

__all__ = [
    "GateState",
    "PublishGate",
    "check_credentials",
    "upload_artifacts",
    "upload_command",
]
