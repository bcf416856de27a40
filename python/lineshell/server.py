"""Fan-out listeners: one cloned shell per accepted connection."""

from __future__ import annotations

import asyncio
import logging
import socketserver
from typing import Any, Tuple

from .errors import TransportError
from .shell import Shell
from .shellio import AsyncSharedIO, SharedIO

LOGGER = logging.getLogger("lineshell.server")


class _ShellHandler(socketserver.StreamRequestHandler):
    def handle(self) -> None:
        server: ShellServer = self.server  # type: ignore[assignment]
        shell = server.template.clone(fresh_history=server.fresh_history)
        config = shell.config
        shell.set_io(SharedIO(self.rfile, self.wfile, encoding=config.encoding, read_size=config.read_size))
        LOGGER.info("client connected: %s", self.client_address)
        try:
            shell.run_loop()
        except TransportError as exc:
            LOGGER.warning("connection %s dropped: %s", self.client_address, exc)
        finally:
            LOGGER.info("client disconnected: %s", self.client_address)


class ShellServer(socketserver.ThreadingTCPServer):
    """Thread-per-connection listener running the blocking loop."""

    allow_reuse_address = True
    daemon_threads = True

    def __init__(self, server_address: Tuple[str, int], template: Shell, *, fresh_history: bool = False):
        super().__init__(server_address, _ShellHandler)
        self.template = template
        self.fresh_history = fresh_history


async def serve_async(
    template: Shell,
    host: str = "127.0.0.1",
    port: int = 0,
    *,
    fresh_history: bool = False,
) -> Any:
    """Start an asyncio listener running the cooperative loop per connection.

    Returns the ``asyncio`` server; the caller owns its lifetime.
    """

    async def _handle(reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        shell = template.clone(fresh_history=fresh_history)
        config = shell.config
        shell.set_io(AsyncSharedIO(reader, writer, encoding=config.encoding, read_size=config.read_size))
        peer = writer.get_extra_info("peername")
        LOGGER.info("client connected: %s", peer)
        try:
            await shell.run_loop_async()
        except TransportError as exc:
            LOGGER.warning("connection %s dropped: %s", peer, exc)
        finally:
            writer.close()
            try:
                await writer.wait_closed()
            except OSError as exc:
                LOGGER.debug("close failed for %s: %s", peer, exc)
            LOGGER.info("client disconnected: %s", peer)

    return await asyncio.start_server(_handle, host, port)
