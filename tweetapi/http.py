"""Request plumbing shared by the API services: parameter encoding,
response decoding and API error reporting."""

from __future__ import annotations

import dataclasses
import math
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from typing import Any
from urllib.parse import urljoin

import requests

API_URL = "https://api.twitter.com/1.1/"
UPLOAD_URL = "https://upload.twitter.com/1.1/"


@dataclass(frozen=True)
class ErrorDetail:
    """One entry of the ``errors`` list returned by the API."""

    message: str = ""
    code: int = 0


class APIError(Exception):
    """Raised when the API answers with a non-success status."""

    def __init__(self, errors=(), status_code: int | None = None) -> None:
        self.errors: list[ErrorDetail] = list(errors)
        self.status_code = status_code
        super().__init__(self._describe())

    def _describe(self) -> str:
        if self.errors:
            details = "; ".join(f"{e.code} {e.message}" for e in self.errors)
            return f"twitter: {details}"
        return f"twitter: HTTP {self.status_code}"


def _error_details(payload: Any) -> list[ErrorDetail]:
    if not isinstance(payload, Mapping):
        return []
    entries = payload.get("errors")
    if not isinstance(entries, list):
        return []
    return [
        ErrorDetail(message=str(entry.get("message", "")), code=int(entry.get("code", 0)))
        for entry in entries
        if isinstance(entry, Mapping)
    ]


def _format_float(value: float) -> str:
    """Format a float the way the API's reference client prints it (``%v``)."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if value == 0:
        return "-0" if math.copysign(1.0, value) < 0 else "0"
    sign, digit_tuple, exponent = Decimal(repr(value)).as_tuple()
    digits = list(digit_tuple)
    while len(digits) > 1 and digits[-1] == 0:
        digits.pop()
        exponent += 1
    text = "".join(str(d) for d in digits)
    point = len(digits) + exponent
    prefix = "-" if sign else ""
    scientific = point - 1
    if scientific < -4 or scientific >= 6:
        mantissa = text[0] + ("." + text[1:] if len(text) > 1 else "")
        return f"{prefix}{mantissa}e{scientific:+03d}"
    if point <= 0:
        return f"{prefix}0.{'0' * -point}{text}"
    if point >= len(text):
        return f"{prefix}{text}{'0' * (point - len(text))}"
    return f"{prefix}{text[:point]}.{text[point:]}"


def _format_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return _format_float(value)
    if isinstance(value, (list, tuple)):
        return ",".join(_format_value(item) for item in value)
    return str(value)


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return value == 0
    if isinstance(value, (str, list, tuple)):
        return len(value) == 0
    return False


def encode_params(params: Any) -> list[tuple[str, str]]:
    """Encode request parameters as ordered ``(name, value)`` pairs.

    ``params`` may be ``None``, a mapping or a dataclass instance. Dataclass
    fields may carry metadata: ``"query"`` gives the wire name (the field
    name otherwise) and ``"omitempty"`` (default true) drops ``None``, empty
    strings and lists and zero numbers. ``False`` is always sent. Lists are
    joined with commas.
    """
    if params is None:
        return []
    if dataclasses.is_dataclass(params) and not isinstance(params, type):
        items = [
            (
                f.metadata.get("query", f.name),
                getattr(params, f.name),
                f.metadata.get("omitempty", True),
            )
            for f in dataclasses.fields(params)
        ]
    elif isinstance(params, Mapping):
        items = [(str(name), value, True) for name, value in params.items()]
    else:
        raise TypeError(f"cannot encode parameters of type {type(params).__name__}")
    return [
        (name, _format_value(value))
        for name, value, omitempty in items
        if not (omitempty and _is_empty(value))
    ]


def _decode(response: requests.Response) -> Any:
    if not response.content:
        return None
    if "json" not in response.headers.get("Content-Type", ""):
        return None
    return response.json()


def _receive(response: requests.Response) -> Any:
    payload = _decode(response)
    if 200 <= response.status_code < 300:
        return payload
    raise APIError(_error_details(payload), response.status_code)


class Requester:
    """Sends requests relative to a base URL and decodes JSON replies."""

    def __init__(self, session: requests.Session, base_url: str) -> None:
        self.session = session
        self.base_url = base_url

    def with_path(self, path: str) -> Requester:
        """Return a requester whose base URL is extended by ``path``."""
        return Requester(self.session, urljoin(self.base_url, path))

    def url(self, path: str) -> str:
        """Resolve ``path`` against the base URL."""
        return urljoin(self.base_url, path)

    def get(self, path: str, params: Any = None) -> Any:
        """GET ``path`` with ``params`` in the query string."""
        response = self.session.get(self.url(path), params=encode_params(params))
        return _receive(response)

    def post_form(self, path: str, params: Any = None) -> Any:
        """POST ``params`` to ``path`` as a url-encoded form."""
        response = self.session.post(self.url(path), data=encode_params(params))
        return _receive(response)