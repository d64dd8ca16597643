"""Streaming API message types and the decoding of raw stream messages."""

from __future__ import annotations

import json
from dataclasses import dataclass, field, fields
from typing import Any, Callable

from .models import Tweet, User


def _matches(default: Any, value: Any) -> bool:
    if isinstance(default, bool):
        return isinstance(value, bool)
    if isinstance(default, int):
        return isinstance(value, int) and not isinstance(value, bool)
    if isinstance(default, str):
        return isinstance(value, str)
    return True


def _ints(values: Any) -> list[int]:
    if not isinstance(values, list):
        raise TypeError("expected a JSON array")
    if not all(isinstance(v, int) and not isinstance(v, bool) for v in values):
        raise TypeError("expected an array of integers")
    return list(values)


def _strings(values: Any) -> list[str]:
    if not isinstance(values, list):
        raise TypeError("expected a JSON array")
    if not all(isinstance(v, str) for v in values):
        raise TypeError("expected an array of strings")
    return list(values)


def _fill(cls, data: Any, **converters: Callable[[Any], Any]):
    """Build ``cls`` from a JSON object, keeping defaults for absent or mistyped values.

    Returns None when ``data`` is not an object.
    """
    if not isinstance(data, dict):
        return None
    values = {}
    for f in fields(cls):
        raw = data.get(f.name)
        if raw is None:
            continue
        convert = converters.get(f.name)
        if convert is not None:
            try:
                values[f.name] = convert(raw)
            except (TypeError, ValueError):
                continue
        elif _matches(f.default, raw):
            values[f.name] = raw
    return cls(**values)


@dataclass
class StatusDeletion:
    """A tweet has been deleted."""

    id: int = 0
    id_str: str = ""
    user_id: int = 0
    user_id_str: str = ""


@dataclass
class LocationDeletion:
    """Geolocation data must be stripped from a range of tweets."""

    user_id: int = 0
    user_id_str: str = ""
    up_to_status_id: int = 0
    up_to_status_id_str: str = ""


@dataclass
class StreamLimit:
    """More statuses matched than the rate limit allowed; ``track`` were undelivered."""

    track: int = 0


@dataclass
class StatusWithheld:
    """A tweet has been withheld in certain countries."""

    id: int = 0
    user_id: int = 0
    withheld_in_countries: list[str] = field(default_factory=list)


@dataclass
class UserWithheld:
    """A user has been withheld in certain countries."""

    id: int = 0
    withheld_in_countries: list[str] = field(default_factory=list)


@dataclass
class StreamDisconnect:
    """The stream has been shut down."""

    code: int = 0
    stream_name: str = ""
    reason: str = ""


@dataclass
class StallWarning:
    """The client is falling behind in the stream."""

    code: str = ""
    message: str = ""
    percent_full: int = 0


@dataclass
class FriendsList:
    """Some of a user's friends."""

    friends: list[int] = field(default_factory=list)


@dataclass
class Event:
    """A non-tweet notification such as a like, retweet or follow."""

    event: str = ""
    created_at: str = ""
    target: User | None = None
    source: User | None = None
    target_object: Tweet | None = None


def _user(value: Any) -> User:
    return User.from_dict(value)


def _tweet(value: Any) -> Tweet:
    return Tweet.from_dict(value)


def _inner(data: dict, key: str) -> Any:
    value = data.get(key)
    return value if isinstance(value, dict) else None


def decode_message(data: dict) -> Any:
    """Turn a decoded stream message into its message object.

    The type is chosen from the keys present, in a fixed order of precedence.
    A notice whose payload is missing decodes to None. Direct messages are
    returned as their inner JSON object. Unrecognised messages are returned
    as the data mapping itself.
    """
    if "retweet_count" in data:
        return Tweet.from_dict(data)
    if "direct_message" in data:
        return _inner(data, "direct_message")
    if "delete" in data:
        notice = _inner(data, "delete") or {}
        return _fill(StatusDeletion, notice.get("status"))
    if "scrub_geo" in data:
        return _fill(LocationDeletion, data.get("scrub_geo"))
    if "limit" in data:
        return _fill(StreamLimit, data.get("limit"))
    if "status_withheld" in data:
        return _fill(
            StatusWithheld, data.get("status_withheld"), withheld_in_countries=_strings
        )
    if "user_withheld" in data:
        return _fill(UserWithheld, data.get("user_withheld"), withheld_in_countries=_strings)
    if "disconnect" in data:
        return _fill(StreamDisconnect, data.get("disconnect"))
    if "warning" in data:
        return _fill(StallWarning, data.get("warning"))
    if "friends" in data:
        return _fill(FriendsList, data, friends=_ints)
    if "event" in data:
        return _fill(Event, data, target=_user, source=_user, target_object=_tweet)
    return data


def get_message(token: bytes | str) -> Any:
    """Decode one raw stream message.

    Raises ValueError (``json.JSONDecodeError`` for malformed JSON) when the
    token is not a JSON object.
    """
    data = json.loads(token)
    if not isinstance(data, dict):
        raise ValueError("stream message is not a JSON object")
    return decode_message(data)