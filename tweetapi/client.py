"""The API client bundling every service."""

from __future__ import annotations

import requests

from .http import API_URL, UPLOAD_URL, Requester
from .media import MediaService
from .rate_limits import RateLimitService
from .search import PremiumSearchService, SearchService
from .statuses import StatusService
from .streams import StreamService
from .timelines import TimelineService
from .trends import TrendsService
from .users import UserService


class Client:
    """A client for the REST, upload and streaming APIs.

    ``session`` carries authentication and transport settings; a plain
    session is created when none is given.
    """

    def __init__(self, session: requests.Session | None = None) -> None:
        self.session = session if session is not None else requests.Session()
        base = Requester(self.session, API_URL)
        upload = Requester(self.session, UPLOAD_URL)
        self.media = MediaService(upload)
        self.rate_limits = RateLimitService(base)
        self.search = SearchService(base)
        self.premium_search = PremiumSearchService(base)
        self.statuses = StatusService(base)
        self.streams = StreamService(self.session)
        self.timelines = TimelineService(base)
        self.trends = TrendsService(base)
        self.users = UserService(base)