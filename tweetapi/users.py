"""User endpoints: show, lookup and search."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field

from .http import Requester
from .models import User


@dataclass
class UserShowParams:
    """Parameters for :meth:`UserService.show`."""

    user_id: int = 0
    screen_name: str = ""
    include_entities: bool | None = None


@dataclass
class UserLookupParams:
    """Parameters for :meth:`UserService.lookup`."""

    user_id: list[int] = field(default_factory=list)
    screen_name: list[str] = field(default_factory=list)
    include_entities: bool | None = None


@dataclass
class UserSearchParams:
    """Parameters for :meth:`UserService.search`; ``page`` is 1-based."""

    query: str = field(default="", metadata={"query": "q"})
    page: int = 0
    count: int = 0
    include_entities: bool | None = None


class UserService:
    """Access to the ``users/`` endpoints."""

    def __init__(self, requester: Requester) -> None:
        self._requester = requester.with_path("users/")

    def show(self, params: UserShowParams | None = None) -> User:
        """Return the requested user."""
        return User.from_dict(self._requester.get("show.json", params) or {})

    def lookup(self, params: UserLookupParams | None = None) -> list[User]:
        """Return the requested users."""
        payload = self._requester.get("lookup.json", params) or []
        return [User.from_dict(item) for item in payload]

    def search(self, query: str, params: UserSearchParams | None = None) -> list[User]:
        """Search public user accounts. Requires a user auth context."""
        params = dataclasses.replace(params or UserSearchParams(), query=query)
        payload = self._requester.get("search.json", params) or []
        return [User.from_dict(item) for item in payload]