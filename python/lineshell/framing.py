"""Newline framing for a continuous byte stream."""

from __future__ import annotations

from typing import List, Optional

from .errors import TransportError


class LineFramer:
    """Accumulates raw chunks and yields complete newline-delimited lines.

    Partial records are buffered across calls to :meth:`feed`; only bytes not
    scanned yet are searched for a terminator.  A trailing ``\\r`` is dropped
    so CRLF clients (telnet, netcat on Windows) work.  An unterminated record
    growing past *max_line* bytes raises :class:`TransportError`.
    """

    def __init__(self, encoding: str = "utf-8", max_line: Optional[int] = None) -> None:
        self.encoding = encoding
        self.max_line = max_line
        self._buffer = bytearray()
        self._scanned = 0

    def feed(self, chunk: bytes) -> List[str]:
        self._buffer += chunk
        lines: List[str] = []
        start = 0
        while True:
            end = self._buffer.find(b"\n", max(start, self._scanned))
            if end < 0:
                break
            lines.append(self._decode(self._buffer[start:end]))
            start = end + 1
        if start:
            del self._buffer[:start]
        self._scanned = len(self._buffer)
        if self.max_line is not None and self._scanned > self.max_line:
            self._buffer.clear()
            self._scanned = 0
            raise TransportError(f"line exceeds {self.max_line} bytes")
        return lines

    def flush(self) -> Optional[str]:
        """Return the unterminated remainder at end-of-stream, if any."""
        if not self._buffer:
            return None
        raw = bytes(self._buffer)
        self._buffer.clear()
        self._scanned = 0
        return self._decode(raw)

    @property
    def pending(self) -> bool:
        return bool(self._buffer)

    def _decode(self, raw: bytes) -> str:
        if raw.endswith(b"\r"):
            raw = raw[:-1]
        return bytes(raw).decode(self.encoding, errors="replace")
