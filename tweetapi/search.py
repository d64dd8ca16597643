"""Standard and premium tweet search endpoints."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .http import Requester
from .models import Tweet


def _get(data: dict, key: str, default: Any) -> Any:
    value = data.get(key)
    return default if value is None else value


def _tweets(values: Any) -> list[Tweet]:
    return [Tweet.from_dict(item) for item in values or []]


@dataclass
class SearchMetadata:
    """Describes a search result."""

    count: int = 0
    since_id: int = 0
    since_id_str: str = ""
    max_id: int = 0
    max_id_str: str = ""
    refresh_url: str = ""
    next_results: str = ""
    completed_in: float = 0.0
    query: str = ""


@dataclass
class Search:
    """The result of a tweet search."""

    statuses: list[Tweet] = field(default_factory=list)
    metadata: SearchMetadata | None = None


@dataclass
class SearchTweetParams:
    """Parameters for :meth:`SearchService.tweets`."""

    query: str = field(default="", metadata={"query": "q"})
    geocode: str = ""
    lang: str = ""
    locale: str = ""
    result_type: str = ""
    count: int = 0
    since_id: int = 0
    max_id: int = 0
    until: str = ""
    since: str = ""
    filter: str = ""
    include_entities: bool | None = None
    tweet_mode: str = ""


def _decode_metadata(data: dict) -> SearchMetadata:
    return SearchMetadata(
        count=int(_get(data, "count", 0)),
        since_id=int(_get(data, "since_id", 0)),
        since_id_str=str(_get(data, "since_id_str", "")),
        max_id=int(_get(data, "max_id", 0)),
        max_id_str=str(_get(data, "max_id_str", "")),
        refresh_url=str(_get(data, "refresh_url", "")),
        next_results=str(_get(data, "next_results", "")),
        completed_in=float(_get(data, "completed_in", 0.0)),
        query=str(_get(data, "query", "")),
    )


def _decode_search(data: dict) -> Search:
    metadata = data.get("search_metadata")
    return Search(
        statuses=_tweets(data.get("statuses")),
        metadata=_decode_metadata(metadata) if isinstance(metadata, dict) else None,
    )


class SearchService:
    """Access to the ``search/`` endpoints."""

    def __init__(self, requester: Requester) -> None:
        self._requester = requester.with_path("search/")

    def tweets(self, params: SearchTweetParams | None = None) -> Search:
        """Return tweets matching a search query."""
        return _decode_search(self._requester.get("tweets.json", params) or {})


@dataclass
class RequestParameters:
    """Request parameters echoed back by a premium search."""

    max_results: int = 0
    from_date: str = ""
    to_date: str = ""


@dataclass
class PremiumSearch:
    """The result of a premium tweet search."""

    results: list[Tweet] = field(default_factory=list)
    next: str = ""
    request_parameters: RequestParameters | None = None


@dataclass
class RequestCountParameters:
    """Request parameters echoed back by a premium count."""

    bucket: str = ""
    from_date: str = ""
    to_date: str = ""


@dataclass
class TweetCount:
    """Number of tweets matching a query within one time period."""

    time_period: str = ""
    count: int = 0


@dataclass
class PremiumSearchCount:
    """The result of a premium search count."""

    results: list[TweetCount] = field(default_factory=list)
    total_count: int = 0
    request_parameters: RequestCountParameters | None = None


@dataclass
class PremiumSearchTweetParams:
    """Parameters for the premium search endpoints."""

    query: str = ""
    tag: str = ""
    from_date: str = field(default="", metadata={"query": "fromDate"})
    to_date: str = field(default="", metadata={"query": "toDate"})
    max_results: int = field(default=0, metadata={"query": "maxResults"})
    next: str = ""


@dataclass
class PremiumSearchCountTweetParams:
    """Parameters for the premium count endpoints."""

    query: str = ""
    tag: str = ""
    from_date: str = field(default="", metadata={"query": "fromDate"})
    to_date: str = field(default="", metadata={"query": "toDate"})
    bucket: str = ""
    next: str = ""


def _decode_premium_search(data: dict) -> PremiumSearch:
    raw = data.get("requestParameters")
    parameters = None
    if isinstance(raw, dict):
        parameters = RequestParameters(
            max_results=int(_get(raw, "maxResults", 0)),
            from_date=str(_get(raw, "fromDate", "")),
            to_date=str(_get(raw, "toDate", "")),
        )
    return PremiumSearch(
        results=_tweets(data.get("results")),
        next=str(_get(data, "next", "")),
        request_parameters=parameters,
    )


def _decode_premium_count(data: dict) -> PremiumSearchCount:
    raw = data.get("requestParameters")
    parameters = None
    if isinstance(raw, dict):
        parameters = RequestCountParameters(
            bucket=str(_get(raw, "bucket", "")),
            from_date=str(_get(raw, "fromDate", "")),
            to_date=str(_get(raw, "toDate", "")),
        )
    counts = [
        TweetCount(
            time_period=str(_get(item, "timePeriod", "")),
            count=int(_get(item, "count", 0)),
        )
        for item in data.get("results") or []
    ]
    return PremiumSearchCount(
        results=counts,
        total_count=int(_get(data, "totalCount", 0)),
        request_parameters=parameters,
    )


class PremiumSearchService:
    """Access to the premium ``tweets/search/`` endpoints."""

    def __init__(self, requester: Requester) -> None:
        self._requester = requester.with_path("tweets/search/")

    def _search(self, path: str, params: Any) -> PremiumSearch:
        return _decode_premium_search(self._requester.get(path, params) or {})

    def _count(self, path: str, params: Any) -> PremiumSearchCount:
        return _decode_premium_count(self._requester.get(path, params) or {})

    def search_full_archive(
        self, params: PremiumSearchTweetParams | None, label: str
    ) -> PremiumSearch:
        """Search tweets back to the very first tweet."""
        return self._search(f"fullarchive/{label}.json", params)

    def search_30_days(self, params: PremiumSearchTweetParams | None, label: str) -> PremiumSearch:
        """Search tweets posted within the last 30 days."""
        return self._search(f"30day/{label}.json", params)

    def count_full_archive(
        self, params: PremiumSearchCountTweetParams | None, label: str
    ) -> PremiumSearchCount:
        """Count tweets matching a query back to the very first tweet."""
        return self._count(f"fullarchive/{label}/counts.json", params)

    def count_30_days(
        self, params: PremiumSearchCountTweetParams | None, label: str
    ) -> PremiumSearchCount:
        """Count tweets matching a query within the last 30 days."""
        return self._count(f"30day/{label}/counts.json", params)