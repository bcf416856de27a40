"""Bounded command history shared between shell clones."""

from __future__ import annotations

import threading
from typing import List, Optional


class History:
    """FIFO list of accepted lines with a fixed capacity.

    Pushing onto a full history evicts the oldest entry first.  All access is
    serialised by a single lock so clones serving different connections can
    share one instance.
    """

    def __init__(self, capacity: int = 10) -> None:
        self.capacity = max(0, int(capacity))
        self._entries: List[str] = []
        self._lock = threading.Lock()

    def push(self, line: str) -> None:
        if self.capacity == 0:
            return
        with self._lock:
            if len(self._entries) >= self.capacity:
                self._entries.pop(0)
            self._entries.append(line)

    def get(self, index: int) -> Optional[str]:
        with self._lock:
            if 0 <= index < len(self._entries):
                return self._entries[index]
            return None

    def snapshot(self) -> List[str]:
        with self._lock:
            return list(self._entries)

    def render(self) -> List[str]:
        return [f"{idx}: {line}" for idx, line in enumerate(self.snapshot())]

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
