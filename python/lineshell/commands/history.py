"""History command: list accepted lines or replay one of them."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, List

from .base import Command
from ..errors import InvalidHistory

if TYPE_CHECKING:  # pragma: no cover
    from ..shell import Shell

LOGGER = logging.getLogger("lineshell.commands.history")


def parse_index(token: str) -> int:
    """Parse an unsigned history index, raising ValueError otherwise."""
    if not (token.isascii() and token.isdigit()):
        raise ValueError(f"invalid history index: {token!r}")
    return int(token, 10)


class HistoryCommand(Command):
    def __init__(self) -> None:
        super().__init__("history", "Print commands history or run a command from it")

    def invoke(self, io: Any, shell: "Shell", args: List[str]) -> Any:
        if not args:
            for entry in shell.history.render():
                io.writeln(entry)
            return None
        index = parse_index(args[0])
        line = shell.history.get(index)
        if line is None:
            raise InvalidHistory(index)
        LOGGER.debug("replaying history entry %d: %s", index, line)
        return shell.dispatch(line, io)
