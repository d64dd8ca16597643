"""Rate limit status endpoint."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any

from .http import Requester


@dataclass
class RateLimitResource:
    """Limit status for a single endpoint."""

    limit: int = 0
    remaining: int = 0
    reset: int = 0


@dataclass
class RateLimitResources:
    """Limit status per endpoint, grouped by resource family."""

    application: dict[str, RateLimitResource | None] | None = None
    favorites: dict[str, RateLimitResource | None] | None = None
    followers: dict[str, RateLimitResource | None] | None = None
    friends: dict[str, RateLimitResource | None] | None = None
    friendships: dict[str, RateLimitResource | None] | None = None
    geo: dict[str, RateLimitResource | None] | None = None
    help: dict[str, RateLimitResource | None] | None = None
    lists: dict[str, RateLimitResource | None] | None = None
    search: dict[str, RateLimitResource | None] | None = None
    statuses: dict[str, RateLimitResource | None] | None = None
    trends: dict[str, RateLimitResource | None] | None = None
    users: dict[str, RateLimitResource | None] | None = None


@dataclass
class RateLimitContext:
    """The auth context the limits apply to."""

    access_token: str = ""


@dataclass
class RateLimit:
    """Current rate limits of resource families."""

    rate_limit_context: RateLimitContext | None = None
    resources: RateLimitResources | None = None


@dataclass
class RateLimitParams:
    """Parameters for :meth:`RateLimitService.status`."""

    resources: list[str] = field(default_factory=list)


def _int(data: dict, key: str) -> int:
    value = data.get(key)
    return 0 if value is None else int(value)


def _decode_resource(data: Any) -> RateLimitResource | None:
    if not isinstance(data, dict):
        return None
    return RateLimitResource(
        limit=_int(data, "limit"),
        remaining=_int(data, "remaining"),
        reset=_int(data, "reset"),
    )


def _decode_resources(data: dict) -> RateLimitResources:
    families = {}
    for f in fields(RateLimitResources):
        raw = data.get(f.name)
        if isinstance(raw, dict):
            families[f.name] = {name: _decode_resource(item) for name, item in raw.items()}
    return RateLimitResources(**families)


def _decode_rate_limit(data: dict) -> RateLimit:
    context = data.get("rate_limit_context")
    resources = data.get("resources")
    return RateLimit(
        rate_limit_context=(
            RateLimitContext(access_token=str(context.get("access_token") or ""))
            if isinstance(context, dict)
            else None
        ),
        resources=_decode_resources(resources) if isinstance(resources, dict) else None,
    )


class RateLimitService:
    """Access to the ``application/`` rate limit endpoint."""

    def __init__(self, requester: Requester) -> None:
        self._requester = requester.with_path("application/")

    def status(self, params: RateLimitParams | None = None) -> RateLimit:
        """Return the current rate limits of the requested resource families."""
        payload = self._requester.get("rate_limit_status.json", params)
        return _decode_rate_limit(payload or {})