"""Trends endpoints: available locations, trends by place, closest locations."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any

from .http import Requester


def _get(data: dict, key: str, default: Any) -> Any:
    value = data.get(key)
    return default if value is None else value


@dataclass
class PlaceType:
    """The kind of a trends location."""

    code: int = 0
    name: str = ""


@dataclass
class Location:
    """A location with trending topic information."""

    country: str = ""
    country_code: str = ""
    name: str = ""
    parent_id: int = 0
    place_type: PlaceType = field(default_factory=PlaceType)
    url: str = ""
    woeid: int = 0


@dataclass
class Trend:
    """A trending topic."""

    name: str = ""
    url: str = ""
    promoted_content: str = ""
    query: str = ""
    tweet_volume: int = 0


@dataclass
class TrendsLocation:
    """A location a trends list applies to."""

    name: str = ""
    woeid: int = 0


@dataclass
class TrendsList:
    """A list of trends for some locations."""

    trends: list[Trend] = field(default_factory=list)
    as_of: str = ""
    created_at: str = ""
    locations: list[TrendsLocation] = field(default_factory=list)


@dataclass
class TrendsPlaceParams:
    """Parameters for :meth:`TrendsService.place`."""

    woeid: int = field(default=0, metadata={"query": "id"})
    exclude: str = ""


@dataclass
class ClosestParams:
    """Parameters for :meth:`TrendsService.closest`; both are always sent."""

    lat: float = field(default=0.0, metadata={"omitempty": False})
    long: float = field(default=0.0, metadata={"omitempty": False})


def _decode_location(data: dict) -> Location:
    raw_type = data.get("placeType")
    place_type = PlaceType()
    if isinstance(raw_type, dict):
        place_type = PlaceType(
            code=int(_get(raw_type, "code", 0)), name=str(_get(raw_type, "name", ""))
        )
    return Location(
        country=str(_get(data, "country", "")),
        country_code=str(_get(data, "countryCode", "")),
        name=str(_get(data, "name", "")),
        parent_id=int(_get(data, "parentid", 0)),
        place_type=place_type,
        url=str(_get(data, "url", "")),
        woeid=int(_get(data, "woeid", 0)),
    )


def _decode_trend(data: dict) -> Trend:
    return Trend(
        name=str(_get(data, "name", "")),
        url=str(_get(data, "url", "")),
        promoted_content=str(_get(data, "promoted_content", "")),
        query=str(_get(data, "query", "")),
        tweet_volume=int(_get(data, "tweet_volume", 0)),
    )


def _decode_trends_list(data: dict) -> TrendsList:
    return TrendsList(
        trends=[_decode_trend(item) for item in data.get("trends") or []],
        as_of=str(_get(data, "as_of", "")),
        created_at=str(_get(data, "created_at", "")),
        locations=[
            TrendsLocation(
                name=str(_get(item, "name", "")), woeid=int(_get(item, "woeid", 0))
            )
            for item in data.get("locations") or []
        ],
    )


class TrendsService:
    """Access to the ``trends/`` endpoints."""

    def __init__(self, requester: Requester) -> None:
        self._requester = requester.with_path("trends/")

    def available(self) -> list[Location]:
        """Return the locations that have trending topic information."""
        payload = self._requester.get("available.json") or []
        return [_decode_location(item) for item in payload]

    def place(self, woeid: int, params: TrendsPlaceParams | None = None) -> list[TrendsList]:
        """Return the top trending topics for a WOEID."""
        params = dataclasses.replace(params or TrendsPlaceParams(), woeid=woeid)
        payload = self._requester.get("place.json", params) or []
        return [_decode_trends_list(item) for item in payload]

    def closest(self, params: ClosestParams | None = None) -> list[Location]:
        """Return the trend locations closest to a coordinate."""
        payload = self._requester.get("closest.json", params) or []
        return [_decode_location(item) for item in payload]