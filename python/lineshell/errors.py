"""Outcome kinds raised while evaluating a shell line."""

from __future__ import annotations


class ExecError(Exception):
    """Base class for every non-success evaluation outcome."""

    message = "Command failed"

    def __str__(self) -> str:
        return self.message


class EmptyLine(ExecError):
    """The line contained no tokens."""

    message = "No command provided"


class Quit(ExecError):
    """Sentinel outcome that stops the owning run loop."""

    message = "Quit"


class MissingArgs(ExecError):
    message = "Not enough arguments"


class UnknownCommand(ExecError):
    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Unknown Command {self.name}"


class InvalidHistory(ExecError):
    def __init__(self, index: int) -> None:
        super().__init__(index)
        self.index = index

    def __str__(self) -> str:
        return f"Invalid history entry {self.index}"


class Other(ExecError):
    """Wraps any failure raised by a command handler."""

    def __init__(self, cause: BaseException) -> None:
        super().__init__(cause)
        self.cause = cause

    def __str__(self) -> str:
        return str(self.cause)


class TransportError(RuntimeError):
    """Raised when the underlying duplex transport cannot complete an operation."""

__all__ = [
    "ExecError",
    "EmptyLine",
    "Quit",
    "MissingArgs",
    "UnknownCommand",
    "InvalidHistory",
    "Other",
    "TransportError",
]
