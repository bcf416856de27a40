"""lineshell CLI entry point."""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from typing import List

from .config import ServerConfig, ShellConfig
from .demo import build_demo_shell
from .errors import EmptyLine, ExecError, Quit
from .repl import ConsoleREPL
from .server import ShellServer, serve_async
from .shell import Shell

LOG = logging.getLogger("lineshell.cli")


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Demo key/value command shell")
    parser.add_argument("--listen", action="store_true", help="Serve one shell per TCP connection")
    parser.add_argument("--host", default="127.0.0.1", help="Listen address (default 127.0.0.1)")
    parser.add_argument("--port", type=int, default=1234, help="Listen port (default 1234)")
    parser.add_argument("--async", dest="async_mode", action="store_true", help="Use the asyncio listener")
    parser.add_argument("--fresh-history", action="store_true", help="Give each connection its own history")
    parser.add_argument("--history-size", type=int, default=10, help="History capacity (default 10)")
    parser.add_argument("--prompt", default=">", help="Prompt shown before each line")
    parser.add_argument("--echo", action="store_true", help="Echo unknown lines instead of reporting them")
    parser.add_argument(
        "--log-level",
        default=os.environ.get("LINESHELL_LOG", "WARNING"),
        help="Logging level (default WARNING)",
    )
    parser.add_argument(
        "-c",
        "--command",
        help="Execute a single command non-interactively (quote the command string)",
    )
    return parser


def main(argv: List[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.log_level)
    config = ShellConfig(prompt=args.prompt, history_size=args.history_size)
    shell = build_demo_shell(config=config, echo=args.echo)
    if args.command:
        return _run_single_command(shell, args.command)
    if args.listen:
        server_config = ServerConfig(host=args.host, port=args.port, async_mode=args.async_mode)
        return _serve(shell, server_config, fresh_history=args.fresh_history)
    if sys.stdin.isatty():
        return ConsoleREPL(shell).run()
    shell.run_loop()
    return 0


def _run_single_command(shell: Shell, command_line: str) -> int:
    try:
        shell.evaluate(command_line)
    except (EmptyLine, Quit):
        return 0
    except ExecError as exc:
        shell.io.writeln(f"Error : {exc}")
        return 1
    finally:
        shell.io.flush()
    return 0


def _serve(shell: Shell, config: ServerConfig, *, fresh_history: bool) -> int:
    if config.async_mode:
        return asyncio.run(_serve_async(shell, config, fresh_history=fresh_history))
    with ShellServer((config.host, config.port), shell, fresh_history=fresh_history) as server:
        LOG.info("listening on %s:%d", *server.server_address[:2])
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            pass
    return 0


async def _serve_async(shell: Shell, config: ServerConfig, *, fresh_history: bool) -> int:
    server = await serve_async(shell, config.host, config.port, fresh_history=fresh_history)
    LOG.info("listening on %s", ", ".join(str(sock.getsockname()) for sock in server.sockets))
    async with server:
        try:
            await server.serve_forever()
        except asyncio.CancelledError:
            pass
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
