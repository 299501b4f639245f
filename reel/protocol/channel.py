from __future__ import annotations

import queue
import threading
from typing import Iterator


class ChannelClosed(Exception):
    """Raised when sending on a channel that was already closed."""


class _Closed:
    def __repr__(self): return "<closed>"


_CLOSED = _Closed()


class Channel:
    """
    One-shot, unidirectional byte channel.

    Single producer, single consumer, FIFO. ``recv`` blocks until a byte is
    available and returns None once the channel is closed and drained.
    """

    def __init__(self):
        self._queue: queue.SimpleQueue = queue.SimpleQueue()
        self._lock = threading.Lock()
        self._closed = False
        self._drained = False

    @property
    def closed(self) -> bool:
        return self._closed

    def send(self, byte: int) -> None:
        with self._lock:
            if self._closed:
                raise ChannelClosed("send on closed channel")
            self._queue.put(byte & 0xFF)

    def feed(self, data: bytes) -> None:
        with self._lock:
            if self._closed:
                raise ChannelClosed("send on closed channel")
            for b in data:
                self._queue.put(b)

    def close(self) -> None:
        with self._lock:
            if not self._closed:
                self._closed = True
                self._queue.put(_CLOSED)

    def recv(self) -> int | None:
        if self._drained:
            return None
        item = self._queue.get()
        if item is _CLOSED:
            self._drained = True
            return None
        return item

    def __iter__(self) -> Iterator[int]:
        while (b := self.recv()) is not None:
            yield b
