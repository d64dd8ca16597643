from urllib.parse import parse_qs, urlsplit

import pytest
import requests
import responses

from tweetapi.http import API_URL, APIError, Requester
from tweetapi.models import User
from tweetapi.users import UserLookupParams, UserSearchParams, UserService, UserShowParams

BASE = API_URL + "users/"


@pytest.fixture
def mocked():
    with responses.RequestsMock() as rsps:
        yield rsps


@pytest.fixture
def service():
    return UserService(Requester(requests.Session(), API_URL))


def _query(call):
    return parse_qs(urlsplit(call.request.url).query, keep_blank_values=True)


def test_show(mocked, service):
    mocked.add(
        responses.GET, BASE + "show.json", json={"name": "XKCD Comic", "favourites_count": 2}
    )
    user = service.show(UserShowParams(screen_name="xkcdComic"))
    assert mocked.calls[0].request.method == "GET"
    assert _query(mocked.calls[0]) == {"screen_name": ["xkcdComic"]}
    assert user == User(name="XKCD Comic", favourites_count=2)


def test_lookup_with_ids(mocked, service):
    mocked.add(
        responses.GET,
        BASE + "lookup.json",
        json=[{"screen_name": "gophers"}, {"screen_name": "dghubble"}],
    )
    users = service.lookup(UserLookupParams(user_id=[113419064, 623265148]))
    assert _query(mocked.calls[0]) == {"user_id": ["113419064,623265148"]}
    assert users == [User(screen_name="gophers"), User(screen_name="dghubble")]


def test_lookup_with_screen_names(mocked, service):
    mocked.add(
        responses.GET, BASE + "lookup.json", json=[{"name": "Foo"}, {"name": "Bar"}]
    )
    users = service.lookup(UserLookupParams(screen_name=["foo", "bar"]))
    assert _query(mocked.calls[0]) == {"screen_name": ["foo,bar"]}
    assert users == [User(name="Foo"), User(name="Bar")]


def test_search(mocked, service):
    mocked.add(
        responses.GET,
        BASE + "search.json",
        json=[{"name": "BBC"}, {"name": "BBC Breaking News"}],
    )
    users = service.search("news", UserSearchParams(query="override me", count=11))
    assert _query(mocked.calls[0]) == {"count": ["11"], "q": ["news"]}
    assert users == [User(name="BBC"), User(name="BBC Breaking News")]


def test_search_handles_none_params(mocked, service):
    mocked.add(responses.GET, BASE + "search.json", body="")
    users = service.search("news", None)
    assert _query(mocked.calls[0]) == {"q": ["news"]}
    assert users == []


def test_show_raises_api_error(mocked, service):
    mocked.add(
        responses.GET,
        BASE + "show.json",
        status=404,
        json={"errors": [{"message": "User not found.", "code": 50}]},
    )
    with pytest.raises(APIError) as info:
        service.show(UserShowParams(screen_name="nobody"))
    assert info.value.errors[0].code == 50