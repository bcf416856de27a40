"""Quit command."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, List

from .base import Command
from ..errors import Quit

if TYPE_CHECKING:  # pragma: no cover
    from ..shell import Shell


class QuitCommand(Command):
    def __init__(self) -> None:
        super().__init__("quit", "Quit")

    def invoke(self, io: Any, shell: "Shell", args: List[str]) -> None:
        raise Quit()
