"""Helpers for reading streaming responses and waiting interruptibly."""

from __future__ import annotations

import threading
from collections.abc import Iterator
from typing import BinaryIO


def stopped(done: threading.Event) -> bool:
    """Return whether ``done`` has been set."""
    return done.is_set()


def sleep_or_done(seconds: float, done: threading.Event) -> bool:
    """Wait ``seconds`` or until ``done`` is set; return True if interrupted."""
    return done.wait(seconds)


class StreamResponseBodyReader:
    """Splits a stream body into messages separated by CRLF.

    A message may contain bare ``\\n`` characters and may be of any length.
    """

    def __init__(self, body: BinaryIO) -> None:
        self._body = body

    def read_next(self) -> bytes:
        """Return the next message; raise EOFError once the body is exhausted."""
        parts: list[bytes] = []
        while True:
            line = self._body.readline()
            if not line:
                if not parts:
                    raise EOFError("end of stream")
                break
            if line.endswith(b"\r\n"):
                parts.append(line.rstrip(b"\r\n"))
                break
            parts.append(line)
        return b"".join(parts)

    def __iter__(self) -> Iterator[bytes]:
        while True:
            try:
                yield self.read_next()
            except EOFError:
                return