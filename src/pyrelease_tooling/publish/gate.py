"""Publish gate: one yes/no question before upload.

AWAITING_CONFIRMATION -> CONFIRMED iff the answer is "y" or "Y", otherwise
REJECTED. Both outcomes are terminal; EOF on stdin counts as a rejection.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum

from pyrelease_tooling import console

CONFIRM_ANSWERS = frozenset({"y", "Y"})


class GateState(str, Enum):
    AWAITING_CONFIRMATION = "awaiting_confirmation"
    CONFIRMED = "confirmed"
    REJECTED = "rejected"


class PublishGate:
    def __init__(self, prompt: Callable[[str], str] = input, repository: str = "PyPI") -> None:
        self._prompt = prompt
        self.repository = repository
        self.state = GateState.AWAITING_CONFIRMATION

    def ask(self, new_version: str) -> GateState:
        """Show new_version and block for the operator's answer. Raises RuntimeError if already answered."""
        if self.state is not GateState.AWAITING_CONFIRMATION:
            msg = f"Publish gate already {self.state.value}"
            raise RuntimeError(msg)
        console.ask(f"❓ Ready to publish version {new_version} to {self.repository}. Continue? (y/N)")
        try:
            answer = self._prompt("")
        except EOFError:
            answer = ""
        self.state = GateState.CONFIRMED if answer.strip() in CONFIRM_ANSWERS else GateState.REJECTED
        return self.state

    def accept(self) -> GateState:
        """Confirm without prompting (--yes)."""
        if self.state is not GateState.AWAITING_CONFIRMATION:
            msg = f"Publish gate already {self.state.value}"
            raise RuntimeError(msg)
        self.state = GateState.CONFIRMED
        return self.state
