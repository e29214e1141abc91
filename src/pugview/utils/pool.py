"""Reusable text buffers for render-time scratch space."""
from __future__ import annotations

import io
import threading
from contextlib import contextmanager
from typing import Iterator, List


class BufferPool:
    """Thread-safe pool of ``io.StringIO`` buffers.

    Buffers are cleared when returned so no render output leaks into the
    next borrower. At most ``max_size`` idle buffers are retained.
    """

    def __init__(self, max_size: int = 64) -> None:
        self.max_size = max_size
        self._free: List[io.StringIO] = []
        self._lock = threading.Lock()

    def acquire(self) -> io.StringIO:
        with self._lock:
            if self._free:
                return self._free.pop()
        return io.StringIO()

    def release(self, buf: io.StringIO) -> None:
        buf.seek(0)
        buf.truncate(0)
        with self._lock:
            if len(self._free) < self.max_size:
                self._free.append(buf)

    @contextmanager
    def buffer(self) -> Iterator[io.StringIO]:
        """Borrow a buffer for the duration of the ``with`` block."""
        buf = self.acquire()
        try:
            yield buf
        finally:
            self.release(buf)

    def __len__(self) -> int:
        with self._lock:
            return len(self._free)


__all__ = ["BufferPool"]
