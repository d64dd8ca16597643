"""Tweet, user and related objects decoded from API JSON."""

from __future__ import annotations

import re
from dataclasses import MISSING, dataclass, field, fields
from datetime import datetime, timedelta, timezone
from typing import Any, Callable


def _accepts(default: Any, value: Any) -> bool:
    if default is MISSING or default is None:
        return True
    if isinstance(default, bool):
        return isinstance(value, bool)
    if isinstance(default, int):
        return isinstance(value, int) and not isinstance(value, bool)
    if isinstance(default, float):
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    if isinstance(default, str):
        return isinstance(value, str)
    return True


def _decode(cls, data: Any, **converters: Callable[[Any], Any]):
    """Build ``cls`` from a JSON object; absent, null or mistyped values keep defaults."""
    if not isinstance(data, dict):
        raise TypeError(f"{cls.__name__} expects a JSON object")
    values = {}
    for f in fields(cls):
        raw = data.get(f.name)
        if raw is None:
            continue
        convert = converters.get(f.name)
        if convert is not None:
            values[f.name] = convert(raw)
        elif _accepts(f.default, raw):
            values[f.name] = raw
    return cls(**values)


def _pair(values: Any) -> tuple[float, float]:
    numbers = [float(v) for v in list(values)[:2]]
    numbers += [0.0] * (2 - len(numbers))
    return numbers[0], numbers[1]


def _indices(values: Any) -> tuple[int, ...]:
    return tuple(int(v) for v in values)


def _mapping(value: Any) -> dict | None:
    return dict(value) if isinstance(value, dict) else None


def _strings(value: Any) -> list[str]:
    return [str(v) for v in value] if isinstance(value, list) else []


@dataclass
class Coordinates:
    """A longitude, latitude pair."""

    coordinates: tuple[float, float] = (0.0, 0.0)
    type: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> Coordinates:
        return _decode(cls, data, coordinates=_pair)


@dataclass
class BoundingBox:
    """Longitude, latitude rings bounding a place."""

    coordinates: list[list[tuple[float, float]]] = field(default_factory=list)
    type: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> BoundingBox:
        return _decode(
            cls,
            data,
            coordinates=lambda rings: [[_pair(point) for point in ring] for ring in rings],
        )


@dataclass
class Place:
    """A named location."""

    attributes: dict | None = None
    bounding_box: BoundingBox | None = None
    country: str = ""
    country_code: str = ""
    full_name: str = ""
    geometry: BoundingBox | None = None
    id: str = ""
    name: str = ""
    place_type: str = ""
    polylines: list[str] = field(default_factory=list)
    url: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> Place:
        return _decode(
            cls,
            data,
            attributes=_mapping,
            bounding_box=BoundingBox.from_dict,
            geometry=BoundingBox.from_dict,
            polylines=_strings,
        )


@dataclass
class TweetIdentifier:
    """The id by which a tweet can be identified."""

    id: int = 0
    id_str: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> TweetIdentifier:
        return _decode(cls, data)


@dataclass
class ExtendedTweet:
    """Fields embedded in extended tweets served in compatibility mode."""

    full_text: str = ""
    display_text_range: tuple[int, ...] = ()
    entities: dict | None = None
    extended_entities: dict | None = None

    @classmethod
    def from_dict(cls, data: dict) -> ExtendedTweet:
        return _decode(
            cls,
            data,
            display_text_range=_indices,
            entities=_mapping,
            extended_entities=_mapping,
        )


@dataclass
class User:
    """A user account."""

    contributors_enabled: bool = False
    created_at: str = ""
    default_profile: bool = False
    default_profile_image: bool = False
    description: str = ""
    email: str = ""
    entities: dict | None = None
    favourites_count: int = 0
    follow_request_sent: bool = False
    following: bool = False
    followers_count: int = 0
    friends_count: int = 0
    geo_enabled: bool = False
    id: int = 0
    id_str: str = ""
    is_translator: bool = False
    lang: str = ""
    listed_count: int = 0
    location: str = ""
    name: str = ""
    notifications: bool = False
    profile_background_color: str = ""
    profile_background_image_url: str = ""
    profile_background_image_url_https: str = ""
    profile_background_tile: bool = False
    profile_banner_url: str = ""
    profile_image_url: str = ""
    profile_image_url_https: str = ""
    profile_link_color: str = ""
    profile_sidebar_border_color: str = ""
    profile_sidebar_fill_color: str = ""
    profile_text_color: str = ""
    profile_use_background_image: bool = False
    protected: bool = False
    screen_name: str = ""
    show_all_inline_media: bool = False
    status: Tweet | None = None
    statuses_count: int = 0
    time_zone: str = ""
    url: str = ""
    utc_offset: int = 0
    verified: bool = False
    withheld_in_countries: list[str] = field(default_factory=list)
    withheld_scope: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> User:
        return _decode(
            cls,
            data,
            entities=_mapping,
            status=Tweet.from_dict,
            withheld_in_countries=_strings,
        )


_MONTHS = {
    name: number
    for number, name in enumerate(
        ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"),
        start=1,
    )
}
_RUBY_DATE = re.compile(
    r"(?:Mon|Tue|Wed|Thu|Fri|Sat|Sun) "
    r"(Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec) "
    r"(\d{2}) (\d{2}):(\d{2}):(\d{2}) ([+-])(\d{2})(\d{2}) (\d{4})"
)


@dataclass
class Tweet:
    """A tweet, formerly called a status."""

    coordinates: Coordinates | None = None
    created_at: str = ""
    current_user_retweet: TweetIdentifier | None = None
    entities: dict | None = None
    favorite_count: int = 0
    favorited: bool = False
    filter_level: str = ""
    id: int = 0
    id_str: str = ""
    in_reply_to_screen_name: str = ""
    in_reply_to_status_id: int = 0
    in_reply_to_status_id_str: str = ""
    in_reply_to_user_id: int = 0
    in_reply_to_user_id_str: str = ""
    lang: str = ""
    possibly_sensitive: bool = False
    quote_count: int = 0
    reply_count: int = 0
    retweet_count: int = 0
    retweeted: bool = False
    retweeted_status: Tweet | None = None
    source: str = ""
    scopes: dict | None = None
    text: str = ""
    full_text: str = ""
    display_text_range: tuple[int, ...] = ()
    place: Place | None = None
    truncated: bool = False
    user: User | None = None
    withheld_copyright: bool = False
    withheld_in_countries: list[str] = field(default_factory=list)
    withheld_scope: str = ""
    extended_entities: dict | None = None
    extended_tweet: ExtendedTweet | None = None
    quoted_status_id: int = 0
    quoted_status_id_str: str = ""
    quoted_status: Tweet | None = None

    @classmethod
    def from_dict(cls, data: dict) -> Tweet:
        return _decode(
            cls,
            data,
            coordinates=Coordinates.from_dict,
            current_user_retweet=TweetIdentifier.from_dict,
            entities=_mapping,
            retweeted_status=Tweet.from_dict,
            scopes=_mapping,
            display_text_range=_indices,
            place=Place.from_dict,
            user=User.from_dict,
            withheld_in_countries=_strings,
            extended_entities=_mapping,
            extended_tweet=ExtendedTweet.from_dict,
            quoted_status=Tweet.from_dict,
        )

    def created_at_time(self) -> datetime:
        """Parse ``created_at`` (e.g. ``Mon Jan 02 15:04:05 -0700 2006``)."""
        match = _RUBY_DATE.fullmatch(self.created_at)
        if match is None:
            raise ValueError(f"cannot parse created_at {self.created_at!r}")
        month, day, hour, minute, second, sign, off_hours, off_minutes, year = match.groups()
        offset = timedelta(hours=int(off_hours), minutes=int(off_minutes))
        if sign == "-":
            offset = -offset
        return datetime(
            int(year),
            _MONTHS[month],
            int(day),
            int(hour),
            int(minute),
            int(second),
            tzinfo=timezone(offset),
        )


@dataclass
class OEmbedTweet:
    """A tweet in oEmbed format."""

    url: str = ""
    provider_url: str = ""
    provider_name: str = ""
    author_name: str = ""
    version: str = ""
    author_url: str = ""
    type: str = ""
    html: str = ""
    height: int = 0
    width: int = 0
    cache_age: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> OEmbedTweet:
        return _decode(cls, data)