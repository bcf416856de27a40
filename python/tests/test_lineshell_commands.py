"""Unit tests for command dispatch and the built-in commands."""

from __future__ import annotations

from typing import Any, Dict, List

import pytest

from lineshell import (
    Command,
    EmptyLine,
    HandlerScope,
    InvalidHistory,
    MissingArgs,
    Other,
    Quit,
    Shell,
    ShellConfig,
    UnknownCommand,
)
from lineshell.parser import command_name, split_command


def _map_shell() -> Shell:
    shell = Shell({})

    def put(io: Any, data: Dict[str, str], args: List[str]) -> None:
        data[args[0]] = args[1]

    def get(io: Any, data: Dict[str, str], args: List[str]) -> None:
        io.writeln(data.get(args[0], "Not found"))

    shell.new_command("put", "Insert a value", 2, put)
    shell.new_command("get", "Get a value", 1, get)
    return shell


def _output(sink) -> str:
    return sink.getvalue().decode("utf-8")


def test_split_command_is_plain_whitespace():
    assert split_command("  put   x\t1 ") == ["put", "x", "1"]
    assert split_command('say "two words"') == ["say", '"two', 'words"']
    assert split_command("") == []
    assert command_name("   ") == ""


def test_empty_line_is_reported_as_empty(memory_io):
    shell = Shell()
    io, _ = memory_io()
    for line in ("", "   ", "\t"):
        with pytest.raises(EmptyLine):
            shell.evaluate(line, io)


@pytest.mark.parametrize("argc", [0, 1, 2, 3])
def test_arity_gate(memory_io, argc):
    calls: List[List[str]] = []
    shell = Shell()
    shell.new_command("need2", "needs two", 2, lambda io, payload, args: calls.append(list(args)))
    io, _ = memory_io()
    line = " ".join(["need2"] + [f"a{idx}" for idx in range(argc)])
    if argc < 2:
        with pytest.raises(MissingArgs):
            shell.evaluate(line, io)
        assert calls == []
    else:
        shell.evaluate(line, io)
        assert calls == [[f"a{idx}" for idx in range(argc)]]


def test_payload_and_shell_scoped_handlers(memory_io):
    shell = _map_shell()
    io, sink = memory_io()

    def rename(io: Any, sh: Shell, args: List[str]) -> None:
        sh.set_prompt(args[0])

    shell.new_shell_command("prompt", "Change the prompt", 1, rename)
    shell.evaluate("put x 1", io)
    shell.evaluate("get x", io)
    shell.evaluate("prompt $", io)
    assert shell.payload == {"x": "1"}
    assert _output(sink) == "1\n"
    assert shell.current_prompt() == "$"
    assert shell.commands.get("put").scope is HandlerScope.PAYLOAD
    assert shell.commands.get("prompt").scope is HandlerScope.SHELL


def test_noargs_command_ignores_arguments(memory_io):
    shell = Shell([1, 2])
    shell.new_command_noargs("clear", "Clear all values", lambda io, data: data.clear())
    io, _ = memory_io()
    shell.evaluate("clear extra args", io)
    assert shell.payload == []


def test_registering_same_name_overwrites(memory_io):
    hits: List[str] = []
    shell = Shell()
    shell.new_command("put", "first", 0, lambda io, payload, args: hits.append("first"))
    shell.new_command("put", "second", 0, lambda io, payload, args: hits.append("second"))
    io, _ = memory_io()
    shell.evaluate("put", io)
    assert hits == ["second"]
    assert shell.commands.get("put").description == "second"


def test_builtins_can_be_shadowed(memory_io):
    shell = Shell()
    shell.new_command("quit", "Not really", 0, lambda io, payload, args: io.writeln("still here"))
    io, sink = memory_io()
    shell.evaluate("quit", io)
    assert _output(sink) == "still here\n"


def test_shell_command_can_register_new_commands(memory_io):
    shell = Shell()

    def learn(io: Any, sh: Shell, args: List[str]) -> None:
        word = args[0]
        sh.new_command(word, "learned", 0, lambda out, payload, rest: out.writeln(word))

    shell.new_shell_command("learn", "Define a command", 1, learn)
    io, sink = memory_io()
    with pytest.raises(UnknownCommand):
        shell.evaluate("hello", io)
    shell.evaluate("learn hello", io)
    shell.evaluate("hello", io)
    assert _output(sink) == "hello\n"


def test_unknown_command_routing(memory_io):
    shell = Shell()
    io, sink = memory_io()
    with pytest.raises(UnknownCommand) as excinfo:
        shell.evaluate("frobnicate now", io)
    assert excinfo.value.name == "frobnicate"
    assert str(excinfo.value) == "Unknown Command frobnicate"

    seen: List[str] = []
    shell.set_default(lambda out, sh, line: seen.append(line))
    shell.evaluate("frobnicate  now", io)
    assert seen == ["frobnicate  now"]

    def refuse(out: Any, sh: Shell, line: str) -> None:
        raise MissingArgs()

    shell.set_default(refuse)
    with pytest.raises(MissingArgs):
        shell.evaluate("frobnicate", io)


def test_handler_exceptions_are_wrapped(memory_io):
    shell = _map_shell()
    shell.new_command("num", "Parse a number", 1, lambda io, payload, args: int(args[0]))
    io, _ = memory_io()
    with pytest.raises(Other) as excinfo:
        shell.evaluate("num abc", io)
    assert isinstance(excinfo.value.cause, ValueError)
    assert excinfo.value.__cause__ is excinfo.value.cause
    assert "invalid literal" in str(excinfo.value)


def test_quit_builtin_raises_quit_without_output(memory_io):
    shell = Shell()
    io, sink = memory_io()
    with pytest.raises(Quit):
        shell.evaluate("quit", io)
    assert sink.getvalue() == b""


def test_handler_can_raise_quit(memory_io):
    shell = Shell()

    def bye(io: Any, sh: Shell, args: List[str]) -> None:
        raise Quit()

    shell.new_shell_command("bye", "Leave", 0, bye)
    io, _ = memory_io()
    with pytest.raises(Quit):
        shell.evaluate("bye", io)


def test_help_lists_commands_sorted(memory_io):
    shell = _map_shell()
    shell.register_command(Command("alpha", "First letter", 0, lambda io, sh, args: None))
    io, sink = memory_io()
    shell.evaluate("help", io)
    lines = [line for line in _output(sink).splitlines() if line.strip()]
    names = [line.split()[0] for line in lines]
    assert names == ["alpha", "get", "help", "history", "put", "quit"]
    assert all(line.split()[1] == ":" for line in lines)
    assert "Print this help" in lines[names.index("help")]


def test_history_lists_entries(memory_io):
    shell = _map_shell()
    shell.history.push("put x 1")
    shell.history.push("get x")
    io, sink = memory_io()
    shell.evaluate("history", io)
    assert _output(sink) == "0: put x 1\n1: get x\n"


def test_history_replay_matches_direct_evaluation(memory_io):
    direct = _map_shell()
    replayed = _map_shell()
    io, _ = memory_io()
    direct.evaluate("put x 1", io)
    replayed.history.push("put x 1")
    replayed.evaluate("history 0", io)
    assert replayed.payload == direct.payload == {"x": "1"}


def test_history_replay_propagates_outcome(memory_io):
    shell = _map_shell()
    shell.history.push("put x")
    shell.history.push("frobnicate")
    shell.history.push("quit")
    io, _ = memory_io()
    with pytest.raises(MissingArgs):
        shell.evaluate("history 0", io)
    with pytest.raises(UnknownCommand):
        shell.evaluate("history 1", io)
    with pytest.raises(Quit):
        shell.evaluate("history 2", io)


def test_history_replay_errors(memory_io):
    shell = Shell()
    shell.history.push("help")
    io, _ = memory_io()
    with pytest.raises(InvalidHistory) as excinfo:
        shell.evaluate("history 5", io)
    assert excinfo.value.index == 5
    assert str(excinfo.value) == "Invalid history entry 5"
    for token in ("abc", "-1", "+0"):
        with pytest.raises(Other) as parse_error:
            shell.evaluate(f"history {token}", io)
        assert isinstance(parse_error.value.cause, ValueError)


def test_history_index_must_be_plain_ascii_digits(memory_io):
    shell = Shell(config=ShellConfig(history_size=20))
    for _ in range(11):
        shell.history.push("help")
    io, _ = memory_io()
    shell.evaluate("history 10", io)
    for token in ("1_0", "٣", "²", "0x1"):
        with pytest.raises(Other) as parse_error:
            shell.evaluate(f"history {token}", io)
        assert isinstance(parse_error.value.cause, ValueError)


def test_history_replay_writes_to_current_io(memory_io):
    shell = _map_shell()
    shell.payload["x"] = "42"
    shell.history.push("get x")
    io, sink = memory_io()
    shell.evaluate("history 0", io)
    assert _output(sink) == "42\n"


def test_dynamic_prompt_follows_payload():
    shell = Shell({"ctx": None})
    shell.set_prompt("plain>")
    assert shell.current_prompt() == "plain>"
    shell.set_dynamic_prompt(lambda payload: f"[{payload['ctx']}] >" if payload["ctx"] else ">")
    assert shell.current_prompt() == ">"
    shell.payload["ctx"] = "db"
    assert shell.current_prompt() == "[db] >"
    shell.set_dynamic_prompt(None)
    assert shell.current_prompt() == "plain>"


def test_unclosed_prompt_is_configurable():
    shell = Shell()
    assert shell.unclosed_prompt == ">>"
    shell.set_unclosed_prompt("...")
    assert shell.unclosed_prompt == "..."


def test_public_exports_resolve():
    import lineshell
    import lineshell.commands as commands

    for module in (lineshell, commands):
        for name in module.__all__:
            assert getattr(module, name) is not None, name
    assert "Handler" not in commands.__all__
    assert not hasattr(lineshell.SharedIO, "from_socket")
