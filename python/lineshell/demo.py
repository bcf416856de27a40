"""Demo host: a small key/value shell used by the ``lineshell`` entry point."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .config import ShellConfig
from .shell import Shell


class KeyValueStore:
    """Integer-keyed map guarded by its own lock; copies share the data."""

    def __init__(self) -> None:
        self._values: Dict[int, str] = {}
        self._lock = threading.Lock()

    def put(self, key: int, value: str) -> None:
        with self._lock:
            self._values[key] = value

    def get(self, key: int) -> Optional[str]:
        with self._lock:
            return self._values.get(key)

    def remove(self, key: int) -> None:
        with self._lock:
            self._values.pop(key, None)

    def items(self) -> List[tuple[int, str]]:
        with self._lock:
            return sorted(self._values.items())

    def clear(self) -> None:
        with self._lock:
            self._values.clear()


@dataclass
class DemoState:
    store: KeyValueStore = field(default_factory=KeyValueStore)
    context: Optional[str] = None


def _put(io: Any, state: DemoState, args: List[str]) -> None:
    state.store.put(int(args[0]), args[1])


def _get(io: Any, state: DemoState, args: List[str]) -> None:
    value = state.store.get(int(args[0]))
    io.writeln(value if value is not None else "Not found")


def _remove(io: Any, state: DemoState, args: List[str]) -> None:
    state.store.remove(int(args[0]))


def _list(io: Any, state: DemoState, args: List[str]) -> None:
    for key, value in state.store.items():
        io.writeln(f"{key} = {value}")


def _enter(io: Any, state: DemoState, args: List[str]) -> None:
    state.context = args[0]


def _leave(io: Any, state: DemoState) -> None:
    state.context = None


class DemoShell(Shell):
    """Prefixes the prompt with the current context, read at print time."""

    def current_prompt(self) -> str:
        prompt = super().current_prompt()
        if self.payload.context:
            return f"[{self.payload.context}] {prompt}"
        return prompt


def _echo(io: Any, shell: Shell, line: str) -> None:
    io.writeln(f"Received: {line.strip()}")


def build_demo_shell(*, config: Optional[ShellConfig] = None, echo: bool = False) -> Shell:
    shell = DemoShell(DemoState(), config=config)
    shell.new_command("put", "Insert a value", 2, _put)
    shell.new_command("get", "Get a value", 1, _get)
    shell.new_command("remove", "Remove a value", 1, _remove)
    shell.new_command("list", "List all values", 0, _list)
    shell.new_command_noargs("clear", "Clear all values", lambda io, state: state.store.clear())
    shell.new_command("enter", "Enter context", 1, _enter)
    shell.new_command_noargs("leave", "Leave current context", _leave)
    if echo:
        shell.set_default(_echo)
    return shell
