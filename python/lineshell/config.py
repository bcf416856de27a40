"""Configuration dataclasses for shells and listeners."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ShellConfig:
    prompt: str = ">"
    unclosed_prompt: str = ">>"
    history_size: int = 10
    read_size: int = 4096
    max_line_length: int = 65536
    encoding: str = "utf-8"


@dataclass
class ServerConfig:
    host: str = "127.0.0.1"
    port: int = 1234
    async_mode: bool = False
