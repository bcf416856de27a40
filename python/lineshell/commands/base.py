"""Command base classes for lineshell."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, List, Optional, Tuple

from ..errors import MissingArgs

if TYPE_CHECKING:  # pragma: no cover
    from ..shell import Shell


class HandlerScope(str, Enum):
    """What a handler receives as its second argument."""

    PAYLOAD = "payload"
    SHELL = "shell"


@dataclass
class Command:
    """A named command with a minimum argument count."""

    name: str
    description: str
    arity: int = 0
    handler: Optional[Callable[..., Any]] = None
    scope: HandlerScope = HandlerScope.SHELL

    def run(self, io: Any, shell: "Shell", args: List[str]) -> Any:
        if len(args) < self.arity:
            raise MissingArgs()
        return self.invoke(io, shell, args)

    def invoke(self, io: Any, shell: "Shell", args: List[str]) -> Any:
        if self.handler is None:
            raise NotImplementedError("Command must implement invoke()")
        if self.scope is HandlerScope.PAYLOAD:
            return self.handler(io, shell.payload, args)
        return self.handler(io, shell, args)

    def help_row(self) -> Tuple[str, str, str]:
        return (self.name, ":", self.description)
