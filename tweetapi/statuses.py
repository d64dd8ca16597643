"""Status (tweet) endpoints: show, lookup, update, retweet, destroy, oEmbed."""

from __future__ import annotations

import dataclasses
import math
from dataclasses import dataclass, field

from .http import Requester, encode_params
from .models import OEmbedTweet, Tweet


@dataclass
class StatusShowParams:
    """Parameters for :meth:`StatusService.show`."""

    id: int = 0
    trim_user: bool | None = None
    include_my_retweet: bool | None = None
    include_entities: bool | None = None
    tweet_mode: str = ""


@dataclass
class StatusLookupParams:
    """Parameters for :meth:`StatusService.lookup`."""

    id: list[int] = field(default_factory=list)
    trim_user: bool | None = None
    include_entities: bool | None = None
    map: bool | None = None
    tweet_mode: str = ""


@dataclass
class StatusUpdateParams:
    """Parameters for :meth:`StatusService.update`."""

    status: str = ""
    in_reply_to_status_id: int = 0
    possibly_sensitive: bool | None = None
    lat: float | None = None
    long: float | None = None
    place_id: str = ""
    display_coordinates: bool | None = None
    trim_user: bool | None = None
    media_ids: list[int] = field(default_factory=list)
    tweet_mode: str = ""


@dataclass
class StatusRetweetParams:
    """Parameters for :meth:`StatusService.retweet`."""

    id: int = 0
    trim_user: bool | None = None
    tweet_mode: str = ""


@dataclass
class StatusUnretweetParams:
    """Parameters for :meth:`StatusService.unretweet`."""

    id: int = 0
    trim_user: bool | None = None
    tweet_mode: str = ""


@dataclass
class StatusRetweetsParams:
    """Parameters for :meth:`StatusService.retweets`."""

    id: int = 0
    count: int = 0
    trim_user: bool | None = None
    tweet_mode: str = ""


@dataclass
class StatusDestroyParams:
    """Parameters for :meth:`StatusService.destroy`."""

    id: int = 0
    trim_user: bool | None = None
    tweet_mode: str = ""


@dataclass
class StatusOEmbedParams:
    """Parameters for :meth:`StatusService.oembed`.

    ``hide_thread`` and ``omit_script`` are sent under the ``hide_media`` name,
    as the reference client does.
    """

    id: int = 0
    url: str = ""
    align: str = ""
    max_width: int = field(default=0, metadata={"query": "maxwidth"})
    hide_media: bool | None = None
    hide_thread: bool | None = field(default=None, metadata={"query": "hide_media"})
    omit_script: bool | None = field(default=None, metadata={"query": "hide_media"})
    widget_type: str = ""
    hide_tweet: bool | None = None


def _update_form(params: StatusUpdateParams) -> dict[str, str]:
    form = dict(encode_params(params))
    # A coordinate of zero is a real position and is sent when given.
    for name in ("lat", "long"):
        value = getattr(params, name)
        if value is not None and name not in form:
            form[name] = "-0" if math.copysign(1.0, value) < 0 else "0"
    return form


class StatusService:
    """Access to the ``statuses/`` endpoints."""

    def __init__(self, requester: Requester) -> None:
        self._requester = requester.with_path("statuses/")

    def show(self, tweet_id: int, params: StatusShowParams | None = None) -> Tweet:
        """Return the requested tweet."""
        params = dataclasses.replace(params or StatusShowParams(), id=tweet_id)
        return Tweet.from_dict(self._requester.get("show.json", params) or {})

    def lookup(self, ids, params: StatusLookupParams | None = None) -> list[Tweet]:
        """Return the requested tweets; ``ids`` are added to ``params.id``."""
        params = params or StatusLookupParams()
        params = dataclasses.replace(params, id=[*params.id, *ids])
        payload = self._requester.get("lookup.json", params) or []
        return [Tweet.from_dict(item) for item in payload]

    def update(self, status: str, params: StatusUpdateParams | None = None) -> Tweet:
        """Post a new status (tweet). Requires a user auth context."""
        params = dataclasses.replace(params or StatusUpdateParams(), status=status)
        payload = self._requester.post_form("update.json", _update_form(params))
        return Tweet.from_dict(payload or {})

    def retweet(self, tweet_id: int, params: StatusRetweetParams | None = None) -> Tweet:
        """Retweet a tweet and return the original with retweet details."""
        params = dataclasses.replace(params or StatusRetweetParams(), id=tweet_id)
        payload = self._requester.post_form(f"retweet/{params.id}.json", params)
        return Tweet.from_dict(payload or {})

    def unretweet(self, tweet_id: int, params: StatusUnretweetParams | None = None) -> Tweet:
        """Undo a retweet and return the original tweet."""
        params = dataclasses.replace(params or StatusUnretweetParams(), id=tweet_id)
        payload = self._requester.post_form(f"unretweet/{params.id}.json", params)
        return Tweet.from_dict(payload or {})

    def retweets(self, tweet_id: int, params: StatusRetweetsParams | None = None) -> list[Tweet]:
        """Return the most recent retweets of a tweet."""
        params = dataclasses.replace(params or StatusRetweetsParams(), id=tweet_id)
        payload = self._requester.get(f"retweets/{params.id}.json", params) or []
        return [Tweet.from_dict(item) for item in payload]

    def destroy(self, tweet_id: int, params: StatusDestroyParams | None = None) -> Tweet:
        """Delete a tweet and return it."""
        params = dataclasses.replace(params or StatusDestroyParams(), id=tweet_id)
        payload = self._requester.post_form(f"destroy/{params.id}.json", params)
        return Tweet.from_dict(payload or {})

    def oembed(self, params: StatusOEmbedParams | None = None) -> OEmbedTweet:
        """Return a tweet in oEmbed format."""
        return OEmbedTweet.from_dict(self._requester.get("oembed.json", params) or {})