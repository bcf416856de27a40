"""Shell composition: command table, I/O, history, prompts and run loops."""

from __future__ import annotations

import contextlib
import copy
import inspect
import logging
from typing import Any, AsyncIterator, Callable, Iterator, List, Optional, Union

from .commands import Command, CommandRegistry, HandlerScope, build_registry, render_help
from .config import ShellConfig
from .errors import (
    EmptyLine,
    ExecError,
    Other,
    Quit,
    TransportError,
    UnknownCommand,
)
from .framing import LineFramer
from .history import History
from .parser import command_name, split_command
from .shellio import AsyncSharedIO, SharedIO

LOGGER = logging.getLogger("lineshell.shell")

ShellIO = Union[SharedIO, AsyncSharedIO]
DefaultHandler = Callable[[Any, "Shell", str], Any]
PromptFunction = Callable[[Any], str]

_UNSET = object()


def unknown_command(io: Any, shell: "Shell", line: str) -> None:
    """Default fallback: report the first token as an unknown command."""
    raise UnknownCommand(command_name(line))


class Shell:
    """Line-oriented command shell around a host *payload*.

    Commands are looked up by the first whitespace-delimited token of each
    line.  Lines that match nothing go to the default handler, which reports
    ``UnknownCommand`` unless the host installs its own with
    :meth:`set_default`.
    """

    def __init__(
        self,
        payload: Any = None,
        *,
        config: Optional[ShellConfig] = None,
        io: Optional[ShellIO] = None,
        history: Optional[History] = None,
    ) -> None:
        self.config = config or ShellConfig()
        self.payload = payload
        self.commands: CommandRegistry = build_registry()
        self.history = history if history is not None else History(self.config.history_size)
        self.prompt = self.config.prompt
        self.unclosed_prompt = self.config.unclosed_prompt
        self.default_handler: DefaultHandler = unknown_command
        self.dynamic_prompt: Optional[PromptFunction] = None
        self._io = io

    #
    # Registration surface
    #
    def register_command(self, command: Command) -> None:
        self.commands.register(command)

    def new_shell_command(self, name: str, description: str, arity: int, func: Callable[[Any, "Shell", List[str]], Any]) -> None:
        """Register a handler called as ``func(io, shell, args)``."""
        self.register_command(Command(name, description, arity, func, HandlerScope.SHELL))

    def new_command(self, name: str, description: str, arity: int, func: Callable[[Any, Any, List[str]], Any]) -> None:
        """Register a handler called as ``func(io, payload, args)``."""
        self.register_command(Command(name, description, arity, func, HandlerScope.PAYLOAD))

    def new_command_noargs(self, name: str, description: str, func: Callable[[Any, Any], Any]) -> None:
        self.new_command(name, description, 0, lambda io, payload, _args: func(io, payload))

    def set_default(self, func: DefaultHandler) -> None:
        self.default_handler = func

    def set_prompt(self, prompt: str) -> None:
        self.prompt = prompt

    def set_unclosed_prompt(self, prompt: str) -> None:
        self.unclosed_prompt = prompt

    def set_dynamic_prompt(self, func: Optional[PromptFunction]) -> None:
        self.dynamic_prompt = func

    def current_prompt(self) -> str:
        if self.dynamic_prompt is not None:
            return self.dynamic_prompt(self.payload)
        return self.prompt

    @property
    def io(self) -> ShellIO:
        if self._io is None:
            self._io = SharedIO.stdio(encoding=self.config.encoding, read_size=self.config.read_size)
        return self._io

    def set_io(self, io: ShellIO) -> None:
        self._io = io

    def print_help(self, io: Optional[ShellIO] = None) -> None:
        io = io if io is not None else self.io
        io.writeln(render_help(self.commands.list_commands()))

    def clone(self, *, payload: Any = _UNSET, fresh_history: bool = False) -> "Shell":
        """Return a copy suitable for serving another connection.

        The command table is copied (entries are shared), the history is
        shared unless *fresh_history* is set, and the payload is shallow
        copied unless one is passed explicitly.
        """
        twin = copy.copy(self)
        twin.commands = self.commands.copy()
        twin.payload = copy.copy(self.payload) if payload is _UNSET else payload
        twin.history = History(self.history.capacity) if fresh_history else self.history
        twin._io = self._io.clone() if self._io is not None else None
        return twin

    #
    # Evaluation
    #
    def dispatch(self, line: str, io: Optional[ShellIO] = None) -> Any:
        """Resolve *line* and invoke its handler, returning the handler result.

        Raises :class:`ExecError` for every outcome other than success; any
        other exception escaping the handler is wrapped in :class:`Other`.
        """
        io = io if io is not None else self.io
        argv = split_command(line)
        if not argv:
            raise EmptyLine()
        name, *args = argv
        command = self.commands.get(name)
        LOGGER.debug("dispatch %r (%s)", name, "default" if command is None else "command")
        try:
            if command is None:
                return self.default_handler(io, self, line)
            return command.run(io, self, args)
        except (ExecError, TransportError):
            raise
        except Exception as exc:
            LOGGER.debug("command %r failed", name, exc_info=True)
            raise Other(exc) from exc

    def evaluate(self, line: str, io: Optional[ShellIO] = None) -> None:
        result = self.dispatch(line, io)
        if inspect.isawaitable(result):
            close = getattr(result, "close", None)
            if callable(close):
                close()
            raise Other(RuntimeError("asynchronous handler requires run_loop_async()"))

    async def evaluate_async(self, line: str, io: Optional[ShellIO] = None) -> None:
        result = self.dispatch(line, io)
        if not inspect.isawaitable(result):
            return
        try:
            await result
        except (ExecError, TransportError):
            raise
        except Exception as exc:
            LOGGER.debug("asynchronous command failed: %s", line, exc_info=True)
            raise Other(exc) from exc

    def process_line(self, line: str, io: Optional[ShellIO] = None) -> bool:
        """Evaluate and report one line; returns False once the shell should stop."""
        io = io if io is not None else self.io
        try:
            self.evaluate(line, io)
        except ExecError as exc:
            return self._report(io, line, exc)
        return self._report(io, line, None)

    async def process_line_async(self, line: str, io: Optional[ShellIO] = None) -> bool:
        io = io if io is not None else self.io
        try:
            await self.evaluate_async(line, io)
        except ExecError as exc:
            return self._report(io, line, exc)
        return self._report(io, line, None)

    def _report(self, io: ShellIO, line: str, error: Optional[ExecError]) -> bool:
        if isinstance(error, Quit):
            return False
        if isinstance(error, EmptyLine):
            return True
        if error is not None:
            io.writeln(f"Error : {error}")
        self.history.push(line)
        return True

    #
    # Run loops
    #
    def print_prompt(self, io: Optional[ShellIO] = None) -> None:
        io = io if io is not None else self.io
        io.write(self.current_prompt())
        io.flush()

    def run_loop(self, io: Optional[SharedIO] = None) -> None:
        """Serve lines from *io* on the calling thread until quit or end-of-stream."""
        io = io if io is not None else self.io
        if not isinstance(io, SharedIO):
            raise TypeError("run_loop() needs a SharedIO; use run_loop_async() for AsyncSharedIO")
        self.print_prompt(io)
        for line in self._read_lines(io):
            if not self.process_line(line, io):
                break
            self.print_prompt(io)

    async def run_loop_async(self, io: Optional[AsyncSharedIO] = None) -> None:
        """Cooperative run loop: waiting for input suspends only this task."""
        io = io if io is not None else self.io
        if not isinstance(io, AsyncSharedIO):
            raise TypeError("run_loop_async() needs an AsyncSharedIO")
        self.print_prompt(io)
        await io.drain()
        async with contextlib.aclosing(self._read_lines_async(io)) as lines:
            async for line in lines:
                if not await self.process_line_async(line, io):
                    break
                self.print_prompt(io)
                await io.drain()

    def _read_lines(self, io: SharedIO) -> Iterator[str]:
        framer = LineFramer(self.config.encoding, self.config.max_line_length)
        while True:
            chunk = io.read()
            if not chunk:
                break
            yield from framer.feed(chunk)
        tail = framer.flush()
        if tail is not None:
            yield tail

    async def _read_lines_async(self, io: AsyncSharedIO) -> AsyncIterator[str]:
        framer = LineFramer(self.config.encoding, self.config.max_line_length)
        while True:
            chunk = await io.read()
            if not chunk:
                break
            for line in framer.feed(chunk):
                yield line
        tail = framer.flush()
        if tail is not None:
            yield tail
