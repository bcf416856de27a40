"""Cloneable, lock-guarded handles over one duplex byte transport."""

from __future__ import annotations

import asyncio
import sys
import threading
from dataclasses import dataclass, field
from typing import Any, Optional, Union

from .errors import TransportError

Data = Union[str, bytes]


@dataclass
class _Channel:
    """One direction of the physical transport and the lock serialising it."""

    stream: Any
    lock: Any = field(default_factory=threading.Lock)


class _WriterMixin:
    encoding: str
    _output: _Channel

    def _encode(self, data: Data) -> bytes:
        if isinstance(data, str):
            return data.encode(self.encoding)
        return bytes(data)

    def write(self, data: Data) -> None:
        """Write *data* as one atomic call with respect to every clone."""
        payload = self._encode(data)
        with self._output.lock:
            try:
                self._output.stream.write(payload)
            except (OSError, ValueError) as exc:
                raise TransportError(f"write failed: {exc}") from exc

    def writeln(self, text: Data = "") -> None:
        self.write(self._encode(text) + b"\n")

    def flush(self) -> None:
        flush = getattr(self._output.stream, "flush", None)
        if flush is None:
            return
        with self._output.lock:
            try:
                flush()
            except (OSError, ValueError) as exc:
                raise TransportError(f"flush failed: {exc}") from exc


class SharedIO(_WriterMixin):
    """Blocking shell I/O.

    *reader* must expose ``read1(n)`` or ``read(n)`` returning bytes (empty on
    end-of-stream); *writer* must expose ``write(bytes)`` and optionally
    ``flush()``.  :meth:`clone` returns a handle aliasing the same streams and
    locks, never a copy of buffered data.
    """

    def __init__(
        self,
        reader: Any,
        writer: Any,
        *,
        encoding: str = "utf-8",
        read_size: int = 4096,
    ) -> None:
        self._input = _Channel(reader)
        self._output = _Channel(writer)
        self.encoding = encoding
        self.read_size = read_size

    @classmethod
    def stdio(cls, **kwargs: Any) -> "SharedIO":
        return cls(sys.stdin.buffer, sys.stdout.buffer, **kwargs)

    def clone(self) -> "SharedIO":
        twin = object.__new__(type(self))
        twin._input = self._input
        twin._output = self._output
        twin.encoding = self.encoding
        twin.read_size = self.read_size
        return twin

    def shares_transport(self, other: "SharedIO") -> bool:
        return self._input is other._input and self._output is other._output

    def read(self, size: Optional[int] = None) -> bytes:
        """Block until some bytes are available; ``b""`` means end-of-stream."""
        stream = self._input.stream
        reader = getattr(stream, "read1", None) or stream.read
        with self._input.lock:
            try:
                data = reader(size or self.read_size)
            except (OSError, ValueError) as exc:
                raise TransportError(f"read failed: {exc}") from exc
        if isinstance(data, str):
            data = data.encode(self.encoding)
        return data or b""


class AsyncSharedIO(_WriterMixin):
    """Cooperative shell I/O over an ``asyncio`` reader/writer pair.

    Reads suspend the calling task instead of blocking the event loop.  Writes
    stay synchronous: they are buffered by the stream writer and pushed out by
    :meth:`drain`.
    """

    def __init__(
        self,
        reader: asyncio.StreamReader,
        writer: Any,
        *,
        encoding: str = "utf-8",
        read_size: int = 4096,
    ) -> None:
        self._input = _Channel(reader, asyncio.Lock())
        self._output = _Channel(writer)
        self.encoding = encoding
        self.read_size = read_size

    def clone(self) -> "AsyncSharedIO":
        twin = object.__new__(type(self))
        twin._input = self._input
        twin._output = self._output
        twin.encoding = self.encoding
        twin.read_size = self.read_size
        return twin

    def shares_transport(self, other: "AsyncSharedIO") -> bool:
        return self._input is other._input and self._output is other._output

    async def read(self, size: Optional[int] = None) -> bytes:
        async with self._input.lock:
            try:
                data = await self._input.stream.read(size or self.read_size)
            except (OSError, ValueError) as exc:
                raise TransportError(f"read failed: {exc}") from exc
        return data or b""

    async def drain(self) -> None:
        drain = getattr(self._output.stream, "drain", None)
        if drain is None:
            self.flush()
            return
        try:
            await drain()
        except (OSError, ValueError) as exc:
            raise TransportError(f"drain failed: {exc}") from exc


__all__ = ["SharedIO", "AsyncSharedIO"]
