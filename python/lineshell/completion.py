"""prompt_toolkit completer for lineshell consoles."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, List

from prompt_toolkit.completion import CompleteEvent, Completer, Completion
from prompt_toolkit.document import Document

if TYPE_CHECKING:  # pragma: no cover
    from .shell import Shell


def _normalise_tokens(text: str) -> List[str]:
    tokens = text.split()
    if not text or text[-1].isspace():
        tokens.append("")
    return tokens


class ShellCompleter(Completer):
    """Completes command names, and history indices after ``history``."""

    def __init__(self, shell: "Shell") -> None:
        self.shell = shell

    def get_completions(self, document: Document, complete_event: CompleteEvent) -> Iterable[Completion]:
        tokens = _normalise_tokens(document.text_before_cursor)
        prefix = tokens[-1]
        if len(tokens) == 1:
            candidates = self.shell.commands.names()
        elif len(tokens) == 2 and tokens[0] == "history" and "history" in self.shell.commands:
            candidates = [str(idx) for idx in range(len(self.shell.history))]
        else:
            return
        for entry in candidates:
            if entry.startswith(prefix):
                yield Completion(entry, start_position=-len(prefix))
