"""Chunked media upload and media processing status."""

from __future__ import annotations

import base64
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any, Callable

from .http import Requester

CHUNK_SIZE = 1024 * 1024
"""Bytes sent per APPEND request."""

MAX_SIZE = 15 * 1024 * 1024
"""Largest upload the API accepts, in bytes."""

_UPLOAD_PATH = "upload.json"


def _value(data: dict, key: str, kind: Callable[[Any], Any], default: Any) -> Any:
    raw = data.get(key)
    return default if raw is None else kind(raw)


@dataclass
class MediaVideoInfo:
    """Details about media identified as a video."""

    video_type: str = ""


@dataclass
class MediaProcessingError:
    """Why background processing of uploaded media failed."""

    code: int = 0
    name: str = ""
    message: str = ""


@dataclass
class MediaProcessingInfo:
    """Progress of background processing of uploaded media."""

    state: str = ""
    check_after_secs: int = 0
    progress_percent: int = 0
    error: MediaProcessingError | None = None


@dataclass
class MediaUploadResult:
    """A completed upload; the media may still be processing."""

    media_id: int = 0
    media_id_string: str = ""
    size: int = 0
    expires_after_secs: int = 0
    video: MediaVideoInfo | None = None
    processing_info: MediaProcessingInfo | None = None


@dataclass
class MediaStatusResult:
    """The current status of a piece of uploaded media."""

    media_id: int = 0
    media_id_string: str = ""
    expires_after_secs: int = 0
    processing_info: MediaProcessingInfo | None = None
    video: MediaVideoInfo | None = None


@dataclass
class _InitParams:
    command: str = field(default="INIT", metadata={"omitempty": False})
    total_bytes: int = field(default=0, metadata={"omitempty": False})
    media_type: str = field(default="", metadata={"omitempty": False})


@dataclass
class _AppendParams:
    media_id: int
    media_data: str
    segment_index: int

    command: str = field(default="APPEND", metadata={"omitempty": False})

    def __post_init__(self) -> None:
        # Field order decides the order of the encoded form.
        pass


@dataclass
class _FinalizeParams:
    command: str = field(default="FINALIZE", metadata={"omitempty": False})
    media_id: int = field(default=0, metadata={"omitempty": False})


@dataclass
class _StatusParams:
    command: str = field(default="STATUS", metadata={"omitempty": False})
    media_id: int = field(default=0, metadata={"omitempty": False})


def _append_form(media_id: int, chunk: bytes, segment_index: int) -> list[tuple[str, str]]:
    return [
        ("command", "APPEND"),
        ("media_data", base64.b64encode(chunk).decode("ascii")),
        ("media_id", str(media_id)),
        ("segment_index", str(segment_index)),
    ]


def _decode_video(data: Any) -> MediaVideoInfo | None:
    if not isinstance(data, dict):
        return None
    return MediaVideoInfo(video_type=_value(data, "video_type", str, ""))


def _decode_processing(data: Any) -> MediaProcessingInfo | None:
    if not isinstance(data, dict):
        return None
    raw_error = data.get("error")
    error = None
    if isinstance(raw_error, dict):
        error = MediaProcessingError(
            code=_value(raw_error, "code", int, 0),
            name=_value(raw_error, "name", str, ""),
            message=_value(raw_error, "message", str, ""),
        )
    return MediaProcessingInfo(
        state=_value(data, "state", str, ""),
        check_after_secs=_value(data, "check_after_secs", int, 0),
        progress_percent=_value(data, "progress_percent", int, 0),
        error=error,
    )


def _decode_upload(data: dict) -> MediaUploadResult:
    return MediaUploadResult(
        media_id=_value(data, "media_id", int, 0),
        media_id_string=_value(data, "media_id_string", str, ""),
        size=_value(data, "size", int, 0),
        expires_after_secs=_value(data, "expires_after_secs", int, 0),
        video=_decode_video(data.get("video")),
        processing_info=_decode_processing(data.get("processing_info")),
    )


def _decode_status(data: dict) -> MediaStatusResult:
    return MediaStatusResult(
        media_id=_value(data, "media_id", int, 0),
        media_id_string=_value(data, "media_id_string", str, ""),
        expires_after_secs=_value(data, "expires_after_secs", int, 0),
        processing_info=_decode_processing(data.get("processing_info")),
        video=_decode_video(data.get("video")),
    )


def _segments(media: bytes) -> Iterator[tuple[int, bytes]]:
    """Yield numbered chunks; a trailing empty chunk follows an exact multiple."""
    for index in range(len(media) // CHUNK_SIZE + 1):
        yield index, media[index * CHUNK_SIZE : (index + 1) * CHUNK_SIZE]


class MediaService:
    """Access to the ``media/`` upload endpoints."""

    def __init__(self, requester: Requester) -> None:
        self._requester = requester.with_path("media/")

    def upload(self, media: bytes, media_type: str) -> MediaUploadResult:
        """Upload ``media`` in chunks (INIT, APPEND..., FINALIZE).

        Some media types are processed in the background; the result then
        carries ``processing_info`` and :meth:`status` can be polled.
        Raises ValueError when the media exceeds :data:`MAX_SIZE`.
        """
        media = bytes(media)
        if len(media) > MAX_SIZE:
            raise ValueError(f"file size of {len(media)} exceeds twitter maximum {MAX_SIZE}")

        init = self._requester.post_form(
            _UPLOAD_PATH, _InitParams(total_bytes=len(media), media_type=media_type)
        )
        media_id = _value(init or {}, "media_id", int, 0)

        for index, chunk in _segments(media):
            self._requester.post_form(_UPLOAD_PATH, _append_form(media_id, chunk, index))

        finalized = self._requester.post_form(_UPLOAD_PATH, _FinalizeParams(media_id=media_id))
        return _decode_upload(finalized or {})

    def status(self, media_id: int) -> MediaStatusResult:
        """Return the processing status of previously uploaded media."""
        payload = self._requester.get(_UPLOAD_PATH, _StatusParams(media_id=media_id))
        return _decode_status(payload or {})