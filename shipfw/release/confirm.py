"""Operator sign-off between a successful build and the first remote write."""

from __future__ import annotations

from shipfw.output.console import ConsoleProtocol, Style
from shipfw.output.prompt import Confirmer
from shipfw.release.model import ReleaseSummary

CONFIRM_PROMPT = "Would you like to continue?"


class ConfirmationGate:
    def __init__(self, *, console: ConsoleProtocol, confirmer: Confirmer) -> None:
        self._console = console
        self._confirmer = confirmer

    def confirm(self, summary: ReleaseSummary, forced: bool) -> bool:
        """Show the summary; ask unless ``forced``. False means the operator declined."""
        self._render(summary)
        if forced:
            return True
        return self._confirmer.ask(CONFIRM_PROMPT)

    def _render(self, summary: ReleaseSummary) -> None:
        self._console.header("Ready to create a new release!")
        self._console.newline()
        self._console.print(
            f"App: {summary.app.display_name} ({summary.app.app_id})", Style.VALUE
        )
        self._console.print(f"Release Version: {summary.version}", Style.VALUE)
        self._console.print(f"Platform: {summary.platform}", Style.VALUE)
        self._console.newline()
