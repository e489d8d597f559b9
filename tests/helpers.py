from __future__ import annotations

import time

import httpx


class TrackingStream(httpx.SyncByteStream):
    """Response body that counts how often it is closed."""

    def __init__(self, body: bytes = b"", *, fail_close: bool = False):
        self._body = body
        self._fail_close = fail_close
        self.close_calls = 0

    def __iter__(self):
        if self._body:
            yield self._body

    def close(self) -> None:
        self.close_calls += 1
        if self._fail_close:
            raise RuntimeError("close exploded")


class SlowStream(TrackingStream):
    """Response body that trickles out one chunk per `delay` seconds."""

    def __init__(self, chunks: list[bytes], delay: float):
        super().__init__()
        self._chunks = chunks
        self._delay = delay

    def __iter__(self):
        for chunk in self._chunks:
            time.sleep(self._delay)
            yield chunk
