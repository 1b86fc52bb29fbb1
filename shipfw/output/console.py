"""Console output abstraction.

Every user-visible line (stage progress, release summary, failures) goes
through ``ConsoleProtocol``. Production code gets ``RichConsole``; tests get
``MockConsole`` and assert on what would have been printed.

Level helpers prefix the message the same way in both implementations::

    success  -> "OK <message>"
    error    -> "error: <message>"
    warning  -> "warning: <message>"
    info     -> "info: <message>"
    step     -> "-> <message>"
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import AbstractContextManager, contextmanager
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

__all__ = [
    "ConsoleProtocol",
    "MockConsole",
    "OutputRecord",
    "RichConsole",
    "Style",
]


class Style(Enum):
    """Semantic text styles; each console maps them to its own rendering."""

    DEFAULT = "default"
    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"
    DIM = "dim"
    HEADER = "header"
    VALUE = "value"  # highlighted value inside a summary (app name, version)

    def __str__(self) -> str:
        return self.value


# style -> (line prefix, Rich style of the prefix)
_LEVELS: dict[Style, tuple[str, str]] = {
    Style.SUCCESS: ("OK ", "green"),
    Style.ERROR: ("error: ", "red bold"),
    Style.WARNING: ("warning: ", "yellow"),
    Style.INFO: ("info: ", "cyan"),
    Style.DIM: ("-> ", "dim"),
}


class ConsoleProtocol(Protocol):
    def print(self, message: str, style: Style = Style.DEFAULT) -> None: ...

    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def info(self, message: str) -> None: ...

    def header(self, message: str) -> None: ...

    def step(self, message: str) -> None:
        """Announce a workflow stage that is about to run (e.g. "Building ios framework")."""
        ...

    def newline(self) -> None: ...

    def progress(self, message: str) -> AbstractContextManager[None]:
        """Show ``message`` as in-progress while the block runs."""
        ...


class _LevelMethods:
    """Level helpers expressed through ``_level``; subclasses render."""

    def _level(self, style: Style, message: str) -> None:
        raise NotImplementedError

    def success(self, message: str) -> None:
        self._level(Style.SUCCESS, message)

    def error(self, message: str) -> None:
        self._level(Style.ERROR, message)

    def warning(self, message: str) -> None:
        self._level(Style.WARNING, message)

    def info(self, message: str) -> None:
        self._level(Style.INFO, message)

    def step(self, message: str) -> None:
        self._level(Style.DIM, message)


class RichConsole(_LevelMethods):
    """Console backed by Rich. Messages are never parsed as Rich markup."""

    _RICH_STYLES = {
        Style.SUCCESS: "green",
        Style.ERROR: "red bold",
        Style.WARNING: "yellow",
        Style.INFO: "cyan",
        Style.DIM: "dim",
        Style.HEADER: "green bold",
        Style.VALUE: "bright_cyan",
    }

    def __init__(self, *, stderr: bool = False) -> None:
        # Rich is imported lazily so `shipfw --version` stays fast.
        from rich.console import Console

        self._console = Console(stderr=stderr, highlight=False)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self._console.print(message, style=self._RICH_STYLES.get(style), markup=False)

    def header(self, message: str) -> None:
        self._console.print()
        self.print(message, Style.HEADER)

    def newline(self) -> None:
        self._console.print()

    def _level(self, style: Style, message: str) -> None:
        from rich.text import Text

        prefix, prefix_style = _LEVELS[style]
        line = Text(prefix, style=prefix_style)
        line.append(message, style="dim" if style is Style.DIM else None)
        self._console.print(line)

    @contextmanager
    def progress(self, message: str) -> Iterator[None]:
        from rich.text import Text

        with self._console.status(Text(message)):
            yield


@dataclass
class OutputRecord:
    """A single line captured by MockConsole."""

    message: str
    style: Style


@dataclass
class MockConsole(_LevelMethods):
    """Console that records output instead of printing it."""

    outputs: list[OutputRecord] = field(default_factory=list)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self.outputs.append(OutputRecord(message, style))

    def header(self, message: str) -> None:
        self.print(message, Style.HEADER)

    def newline(self) -> None:
        self.print("")

    def _level(self, style: Style, message: str) -> None:
        prefix, _ = _LEVELS[style]
        self.print(f"{prefix}{message}", style)

    @contextmanager
    def progress(self, message: str) -> Iterator[None]:
        self.step(message)
        yield

    # Test helpers

    @property
    def messages(self) -> list[str]:
        return [o.message for o in self.outputs]

    @property
    def text(self) -> str:
        return "\n".join(self.messages)

    def has_error(self) -> bool:
        return any(o.style == Style.ERROR for o in self.outputs)

    def has_warning(self) -> bool:
        return any(o.style == Style.WARNING for o in self.outputs)

    def has_success(self) -> bool:
        return any(o.style == Style.SUCCESS for o in self.outputs)

    def find(self, substring: str) -> list[OutputRecord]:
        return [o for o in self.outputs if substring in o.message]
