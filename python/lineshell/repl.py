"""Interactive console front-end built on prompt_toolkit."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.patch_stdout import patch_stdout

from .completion import ShellCompleter
from .errors import TransportError

if TYPE_CHECKING:  # pragma: no cover
    from .shell import Shell

LOGGER = logging.getLogger("lineshell.repl")


class ConsoleREPL:
    """Drives a shell from a terminal with line editing and completion.

    Prompt text comes from the shell (dynamic prompts included) and every line
    goes through :meth:`Shell.process_line`, so reporting and history follow
    the same rules as the byte-stream run loops.
    """

    def __init__(self, shell: "Shell", *, session: Optional[PromptSession] = None) -> None:
        self.shell = shell
        self._session = session

    def _build_session(self) -> PromptSession:
        history = InMemoryHistory()
        for entry in self.shell.history.snapshot():
            history.append_string(entry)
        return PromptSession(
            history=history,
            completer=ShellCompleter(self.shell),
            complete_while_typing=False,
        )

    def run(self) -> int:
        session = self._session or self._build_session()
        io = self.shell.io
        while True:
            try:
                with patch_stdout():
                    line = session.prompt(self.shell.current_prompt())
            except (EOFError, KeyboardInterrupt):
                print()
                return 0
            try:
                keep_going = self.shell.process_line(line, io)
                io.flush()
            except TransportError as exc:
                LOGGER.warning("console output failed: %s", exc)
                return 1
            if not keep_going:
                return 0
