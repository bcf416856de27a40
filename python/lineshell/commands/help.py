"""Help command."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable, List

from tabulate import tabulate

from .base import Command

if TYPE_CHECKING:  # pragma: no cover
    from ..shell import Shell


def render_help(commands: Iterable[Command]) -> str:
    rows = [command.help_row() for command in commands]
    if not rows:
        return ""
    return tabulate(rows, tablefmt="plain", disable_numparse=True)


class HelpCommand(Command):
    def __init__(self) -> None:
        super().__init__("help", "Print this help")

    def invoke(self, io: Any, shell: "Shell", args: List[str]) -> None:
        shell.print_help(io)
