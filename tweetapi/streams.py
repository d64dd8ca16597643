"""Streaming API: connecting, reconnecting with back-off and reading messages."""

from __future__ import annotations

import io
import queue
import threading
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any

import requests

from .http import Requester, encode_params
from .stream_messages import get_message
from .stream_utils import StreamResponseBodyReader, sleep_or_done, stopped

USER_AGENT = "tweetapi v0.1"
PUBLIC_STREAM = "https://stream.twitter.com/1.1/"
USER_STREAM = "https://userstream.twitter.com/1.1/"
SITE_STREAM = "https://sitestream.twitter.com/1.1/"


class ExponentialBackOff:
    """Wait times growing by ``multiplier`` from ``initial`` up to ``maximum`` seconds."""

    def __init__(self, initial: float = 5.0, maximum: float = 320.0, multiplier: float = 2.0) -> None:
        if initial < 0 or maximum < 0:
            raise ValueError("back-off intervals must not be negative")
        if multiplier < 1:
            raise ValueError("back-off multiplier must be at least 1")
        self.initial = initial
        self.maximum = maximum
        self.multiplier = multiplier
        self._current = initial

    def next_backoff(self) -> float:
        """Return the next wait in seconds."""
        wait = self._current
        self._current = min(self._current * self.multiplier, self.maximum)
        return wait

    def reset(self) -> None:
        """Start again from the initial interval."""
        self._current = self.initial


def _default_backoff() -> ExponentialBackOff:
    return ExponentialBackOff(5.0, 320.0, 2.0)


def _aggressive_backoff() -> ExponentialBackOff:
    return ExponentialBackOff(60.0, 960.0, 2.0)


@dataclass
class StreamFilterParams:
    """Parameters for :meth:`StreamService.filter`."""

    filter_level: str = ""
    follow: list[str] = field(default_factory=list)
    language: list[str] = field(default_factory=list)
    locations: list[str] = field(default_factory=list)
    stall_warnings: bool | None = None
    track: list[str] = field(default_factory=list)


@dataclass
class StreamSampleParams:
    """Parameters for :meth:`StreamService.sample`."""

    stall_warnings: bool | None = None
    language: list[str] = field(default_factory=list)


@dataclass
class StreamUserParams:
    """Parameters for :meth:`StreamService.user`."""

    filter_level: str = ""
    language: list[str] = field(default_factory=list)
    locations: list[str] = field(default_factory=list)
    replies: str = ""
    stall_warnings: bool | None = None
    track: list[str] = field(default_factory=list)
    with_: str = field(default="", metadata={"query": "with"})


@dataclass
class StreamSiteParams:
    """Parameters for :meth:`StreamService.site`."""

    filter_level: str = ""
    follow: list[str] = field(default_factory=list)
    language: list[str] = field(default_factory=list)
    replies: str = ""
    stall_warnings: bool | None = None
    with_: str = field(default="", metadata={"query": "with"})


@dataclass
class StreamFirehoseParams:
    """Parameters for :meth:`StreamService.firehose`."""

    count: int = 0
    filter_level: str = ""
    language: list[str] = field(default_factory=list)
    stall_warnings: bool | None = None


class _ChunkReader(io.RawIOBase):
    """A raw binary file over an iterator of byte chunks."""

    def __init__(self, chunks: Iterable[bytes]) -> None:
        super().__init__()
        self._chunks = iter(chunks)
        self._pending = b""

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:
        while not self._pending:
            try:
                self._pending = next(self._chunks)
            except StopIteration:
                return 0
        size = min(len(buffer), len(self._pending))
        buffer[:size] = self._pending[:size]
        self._pending = self._pending[size:]
        return size


_END = object()


class Stream:
    """A connection to a streaming endpoint, read in a background thread.

    Iterating yields decoded messages; malformed messages and connection
    errors are yielded as exception instances. The connection is retried
    with back-off on 503 (``exp_backoff``) and 420/429 (``agg_backoff``) and
    given up on any other non-200 status. Call :meth:`stop` when done, or use
    the stream as a context manager.
    """

    def __init__(
        self,
        session: requests.Session,
        request: requests.Request | requests.PreparedRequest,
        exp_backoff: Any = None,
        agg_backoff: Any = None,
    ) -> None:
        if isinstance(request, requests.Request):
            request = session.prepare_request(request)
        self._session = session
        self._request = request
        self._exp_backoff = exp_backoff if exp_backoff is not None else _default_backoff()
        self._agg_backoff = agg_backoff if agg_backoff is not None else _aggressive_backoff()
        self._messages: queue.Queue = queue.Queue(maxsize=1)
        self._done = threading.Event()
        self._finished = threading.Event()
        self._response: requests.Response | None = None
        self._thread = threading.Thread(target=self._retry, daemon=True)
        self._thread.start()

    def __iter__(self) -> Iterator[Any]:
        while not self._done.is_set():
            try:
                item = self._messages.get(timeout=0.1)
            except queue.Empty:
                if self._finished.is_set() and self._messages.empty():
                    return
                continue
            if item is _END:
                return
            yield item

    def stop(self) -> None:
        """Stop receiving, close the connection and wait for the reader to end."""
        self._done.set()
        response = self._response
        if response is not None:
            response.close()
        self._thread.join()

    def __enter__(self) -> Stream:
        return self

    def __exit__(self, *args) -> None:
        self.stop()

    def _send(self, item: Any) -> bool:
        while not stopped(self._done):
            try:
                self._messages.put(item, timeout=0.1)
                return True
            except queue.Full:
                continue
        return False

    def _retry(self) -> None:
        try:
            wait: float | None = 0.0
            while not stopped(self._done):
                try:
                    response = self._session.send(self._request, stream=True)
                except requests.RequestException as exc:
                    self._send(exc)
                    return
                self._response = response
                try:
                    status = response.status_code
                    if status == 200:
                        self._receive(response)
                        self._exp_backoff.reset()
                        self._agg_backoff.reset()
                    elif status == 503:
                        wait = self._exp_backoff.next_backoff()
                    elif status in (420, 429):
                        wait = self._agg_backoff.next_backoff()
                    else:
                        return
                finally:
                    response.close()
                if wait is None:
                    return
                sleep_or_done(wait, self._done)
        finally:
            self._finished.set()
            self._send(_END)

    def _receive(self, response: requests.Response) -> None:
        body = io.BufferedReader(_ChunkReader(response.iter_content(chunk_size=None)))
        reader = StreamResponseBodyReader(body)
        while not stopped(self._done):
            try:
                data = reader.read_next()
            except (EOFError, OSError, ValueError, requests.RequestException):
                return
            if not data:
                continue
            try:
                message = get_message(data)
            except ValueError as exc:
                message = exc
            if not self._send(message):
                return


class StreamService:
    """Access to the public, user and site streaming endpoints."""

    def __init__(self, session: requests.Session) -> None:
        self._session = session
        self._public = Requester(session, PUBLIC_STREAM).with_path("statuses/")
        self._user = Requester(session, USER_STREAM)
        self._site = Requester(session, SITE_STREAM)

    def _open(self, requester: Requester, method: str, path: str, params: Any) -> Stream:
        request = requests.Request(
            method,
            requester.url(path),
            params=encode_params(params),
            headers={"User-Agent": USER_AGENT},
        )
        return Stream(self._session, request)

    def filter(self, params: StreamFilterParams | None = None) -> Stream:
        """Stream messages matching one or more filter predicates."""
        return self._open(self._public, "POST", "filter.json", params)

    def sample(self, params: StreamSampleParams | None = None) -> Stream:
        """Stream a small sample of public messages."""
        return self._open(self._public, "GET", "sample.json", params)

    def user(self, params: StreamUserParams | None = None) -> Stream:
        """Stream messages for the authenticated user."""
        return self._open(self._user, "GET", "user.json", params)

    def site(self, params: StreamSiteParams | None = None) -> Stream:
        """Stream messages for a set of users; needs special permission."""
        return self._open(self._site, "GET", "site.json", params)

    def firehose(self, params: StreamFirehoseParams | None = None) -> Stream:
        """Stream all public messages; needs special permission."""
        return self._open(self._public, "GET", "firehose.json", params)