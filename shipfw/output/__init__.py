"""Output abstraction layer."""

from .console import ConsoleProtocol, MockConsole, RichConsole, Style
from .prompt import Confirmer, ScriptedConfirmer, TyperConfirmer

__all__ = [
    "Confirmer",
    "ConsoleProtocol",
    "MockConsole",
    "RichConsole",
    "ScriptedConfirmer",
    "Style",
    "TyperConfirmer",
]
