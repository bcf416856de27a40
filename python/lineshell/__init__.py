"""
lineshell - embeddable line-oriented command shells.

A host registers commands on a :class:`Shell` around its own payload and runs
it over any duplex byte transport: the local console, a pipe, or one cloned
shell per network connection.  Use ``python -m lineshell`` for the demo
key/value shell.
"""

from __future__ import annotations

from .commands import Command, CommandRegistry, HandlerScope
from .config import ServerConfig, ShellConfig
from .errors import (
    EmptyLine,
    ExecError,
    InvalidHistory,
    MissingArgs,
    Other,
    Quit,
    TransportError,
    UnknownCommand,
)
from .framing import LineFramer
from .history import History
from .shell import Shell
from .shellio import AsyncSharedIO, SharedIO

__all__ = [
    "AsyncSharedIO",
    "Command",
    "CommandRegistry",
    "EmptyLine",
    "ExecError",
    "HandlerScope",
    "History",
    "InvalidHistory",
    "LineFramer",
    "MissingArgs",
    "Other",
    "Quit",
    "ServerConfig",
    "Shell",
    "ShellConfig",
    "SharedIO",
    "TransportError",
    "UnknownCommand",
]
__version__ = "0.1.0"
