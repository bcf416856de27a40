"""Command line tokenizing helpers."""

from __future__ import annotations

from typing import List


def split_command(line: str) -> List[str]:
    """Split a command line into argv tokens on whitespace.

    There is no quoting or escaping: a token never contains whitespace.
    """
    if not line:
        return []
    return line.split()


def command_name(line: str) -> str:
    tokens = split_command(line)
    return tokens[0] if tokens else ""
