"""Command table for lineshell."""

from __future__ import annotations

from typing import Dict, List, Optional

from .base import Command, HandlerScope
from .help import HelpCommand, render_help
from .history import HistoryCommand
from .quit import QuitCommand


class CommandRegistry:
    """Stores commands by name; a later registration replaces an earlier one."""

    def __init__(self) -> None:
        self._commands: Dict[str, Command] = {}

    def register(self, command: Command) -> None:
        self._commands[command.name] = command

    def get(self, name: str) -> Optional[Command]:
        return self._commands.get(name)

    def list_commands(self) -> List[Command]:
        """Commands sorted by name."""
        commands = dict(self._commands)
        return [commands[name] for name in sorted(commands)]

    def names(self) -> List[str]:
        return sorted(self._commands)

    def copy(self) -> "CommandRegistry":
        twin = CommandRegistry()
        twin._commands = dict(self._commands)
        return twin

    def __contains__(self, name: object) -> bool:
        return name in self._commands



def build_registry() -> CommandRegistry:
    registry = CommandRegistry()
    for command in (HelpCommand(), QuitCommand(), HistoryCommand()):
        registry.register(command)
    return registry


__all__ = [
    "Command",
    "CommandRegistry",
    "HandlerScope",
    "HelpCommand",
    "HistoryCommand",
    "QuitCommand",
    "build_registry",
    "render_help",
]
