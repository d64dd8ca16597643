"""Timeline endpoints: user, home, mentions and retweets of me."""

from __future__ import annotations

from dataclasses import dataclass, field

from .http import Requester
from .models import Tweet


@dataclass
class UserTimelineParams:
    """Parameters for :meth:`TimelineService.user_timeline`."""

    user_id: int = 0
    screen_name: str = ""
    count: int = 0
    since_id: int = 0
    max_id: int = 0
    trim_user: bool | None = None
    exclude_replies: bool | None = None
    include_retweets: bool | None = field(default=None, metadata={"query": "include_rts"})
    tweet_mode: str = ""


@dataclass
class HomeTimelineParams:
    """Parameters for :meth:`TimelineService.home_timeline`."""

    count: int = 0
    since_id: int = 0
    max_id: int = 0
    trim_user: bool | None = None
    exclude_replies: bool | None = None
    contributor_details: bool | None = None
    include_entities: bool | None = None
    tweet_mode: str = ""


@dataclass
class MentionTimelineParams:
    """Parameters for :meth:`TimelineService.mention_timeline`."""

    count: int = 0
    since_id: int = 0
    max_id: int = 0
    trim_user: bool | None = None
    contributor_details: bool | None = None
    include_entities: bool | None = None
    tweet_mode: str = ""


@dataclass
class RetweetsOfMeTimelineParams:
    """Parameters for :meth:`TimelineService.retweets_of_me_timeline`.

    ``include_user_entities`` is always sent, empty when unset.
    """

    count: int = 0
    since_id: int = 0
    max_id: int = 0
    trim_user: bool | None = None
    include_entities: bool | None = None
    include_user_entities: bool | None = field(default=None, metadata={"omitempty": False})
    tweet_mode: str = ""


class TimelineService:
    """Access to the ``statuses/`` timeline endpoints."""

    def __init__(self, requester: Requester) -> None:
        self._requester = requester.with_path("statuses/")

    def _tweets(self, path: str, params) -> list[Tweet]:
        payload = self._requester.get(path, params) or []
        return [Tweet.from_dict(item) for item in payload]

    def user_timeline(self, params: UserTimelineParams | None = None) -> list[Tweet]:
        """Return recent tweets from the specified user."""
        return self._tweets("user_timeline.json", params)

    def home_timeline(self, params: HomeTimelineParams | None = None) -> list[Tweet]:
        """Return recent tweets from the user and those they follow."""
        return self._tweets("home_timeline.json", params)

    def mention_timeline(self, params: MentionTimelineParams | None = None) -> list[Tweet]:
        """Return recent mentions of the authenticated user."""
        return self._tweets("mentions_timeline.json", params)

    def retweets_of_me_timeline(
        self, params: RetweetsOfMeTimelineParams | None = None
    ) -> list[Tweet]:
        """Return the user's most recent tweets retweeted by others."""
        return self._tweets("retweets_of_me.json", params)