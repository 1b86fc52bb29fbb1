"""Interactive yes/no confirmation.

The confirmation gate depends on the ``Confirmer`` capability rather than on
the terminal so that tests can script the operator's answers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

__all__ = ["Confirmer", "ScriptedConfirmer", "TyperConfirmer"]


class Confirmer(Protocol):
    def ask(self, prompt: str) -> bool:
        """Block until the operator answers; True means proceed."""
        ...


class TyperConfirmer:
    """Asks on the terminal. Defaults to "no" on a bare Enter."""

    def ask(self, prompt: str) -> bool:
        import typer

        return typer.confirm(prompt, default=False)


def _no_answers() -> list[bool]:
    return []


@dataclass
class ScriptedConfirmer:
    """Replays pre-recorded answers and remembers the prompts it was shown.

    Running out of answers is a test bug and raises AssertionError.
    """

    answers: list[bool] = field(default_factory=_no_answers)
    prompts: list[str] = field(default_factory=list)

    def ask(self, prompt: str) -> bool:
        self.prompts.append(prompt)
        if not self.answers:
            raise AssertionError(f"unexpected confirmation prompt: {prompt}")
        return self.answers.pop(0)
