from dataclasses import dataclass, field
from urllib.parse import parse_qs, urlsplit

import pytest
import requests
import responses

from tweetapi.http import (
    API_URL,
    APIError,
    ErrorDetail,
    Requester,
    encode_params,
)


@dataclass
class _Params:
    status: str = ""
    in_reply_to_status_id: int = 0
    trim_user: bool | None = None
    lat: float | None = None
    media_ids: list = field(default_factory=list)
    query: str = field(default="", metadata={"query": "q"})
    include_user_entities: bool | None = field(default=None, metadata={"omitempty": False})


@pytest.fixture
def mocked():
    with responses.RequestsMock() as rsps:
        yield rsps


@pytest.fixture
def statuses():
    return Requester(requests.Session(), API_URL).with_path("statuses/")


def test_encode_params_omits_empty_values():
    pairs = encode_params(_Params(status="very informative tweet"))
    assert pairs == [("status", "very informative tweet"), ("include_user_entities", "")]


def test_encode_params_keeps_false_and_joins_lists():
    params = _Params(trim_user=False, media_ids=[123456789, 987654321], query="news",
                     include_user_entities=False)
    assert dict(encode_params(params)) == {
        "trim_user": "false",
        "media_ids": "123456789,987654321",
        "q": "news",
        "include_user_entities": "false",
    }


@pytest.mark.parametrize(
    "value, expected",
    [
        (37.826706, "37.826706"),
        (-122.42219, "-122.42219"),
        (37.781157, "37.781157"),
        (-122.400612831116, "-122.400612831116"),
        (100.0, "100"),
        (1000000.0, "1e+06"),
    ],
)
def test_encode_params_formats_floats(value, expected):
    assert encode_params(_Params(lat=value))[0] == ("lat", expected)


def test_encode_params_mapping_and_none():
    assert encode_params({"id": 20, "count": 0, "map": True}) == [("id", "20"), ("map", "true")]
    assert encode_params(None) == []


def test_encode_params_rejects_other_types():
    with pytest.raises(TypeError):
        encode_params(42)


def test_requester_resolves_paths():
    requester = Requester(requests.Session(), API_URL).with_path("statuses/")
    assert requester.url("show.json") == "https://api.twitter.com/1.1/statuses/show.json"
    assert requester.base_url == "https://api.twitter.com/1.1/statuses/"


def test_get_sends_query_and_decodes(mocked, statuses):
    mocked.add(
        responses.GET,
        "https://api.twitter.com/1.1/statuses/show.json",
        json={"text": "hello"},
    )
    result = statuses.get("show.json", {"id": 589488862814076930, "include_entities": False})
    assert result == {"text": "hello"}
    query = parse_qs(urlsplit(mocked.calls[0].request.url).query)
    assert query == {"id": ["589488862814076930"], "include_entities": ["false"]}


def test_post_form_sends_body(mocked, statuses):
    mocked.add(
        responses.POST,
        "https://api.twitter.com/1.1/statuses/update.json",
        json={"id": 581980947630845953, "text": "very informative tweet"},
    )
    result = statuses.post_form(
        "update.json",
        _Params(status="very informative tweet", lat=37.826706, media_ids=[123456789, 987654321]),
    )
    assert result["id"] == 581980947630845953
    request = mocked.calls[0].request
    assert urlsplit(request.url).query == ""
    assert parse_qs(request.body) == {
        "status": ["very informative tweet"],
        "lat": ["37.826706"],
        "media_ids": ["123456789,987654321"],
    }


def test_api_error_is_raised(mocked, statuses):
    mocked.add(
        responses.POST,
        "https://api.twitter.com/1.1/statuses/update.json",
        json={"errors": [{"message": "Status is a duplicate", "code": 187}]},
        status=403,
    )
    with pytest.raises(APIError) as caught:
        statuses.post_form("update.json", {"status": "very informative tweet"})
    assert caught.value.errors == [ErrorDetail(message="Status is a duplicate", code=187)]
    assert caught.value.status_code == 403
    assert "Status is a duplicate" in str(caught.value)


def test_non_json_error_body(mocked, statuses):
    mocked.add(
        responses.GET,
        "https://api.twitter.com/1.1/statuses/show.json",
        body="Stream API not available!",
        status=500,
        content_type="text/plain",
    )
    with pytest.raises(APIError) as caught:
        statuses.get("show.json")
    assert caught.value.errors == []
    assert caught.value.status_code == 500


def test_connection_error_propagates(mocked, statuses):
    mocked.add(
        responses.POST,
        "https://api.twitter.com/1.1/statuses/update.json",
        body=requests.ConnectionError("connection refused"),
    )
    with pytest.raises(requests.ConnectionError, match="connection refused"):
        statuses.post_form("update.json", {"status": "very informative tweet"})


def test_empty_body_decodes_to_none(mocked, statuses):
    mocked.add(responses.GET, "https://api.twitter.com/1.1/statuses/show.json", body="")
    assert statuses.get("show.json", {"id": 589488862814076930}) is None