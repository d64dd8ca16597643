from urllib.parse import parse_qsl, urlsplit

import pytest
import requests
import responses

from tweetapi.http import API_URL, APIError, Requester
from tweetapi.trends import (
    ClosestParams,
    Location,
    PlaceType,
    Trend,
    TrendsList,
    TrendsLocation,
    TrendsPlaceParams,
    TrendsService,
)


@pytest.fixture
def mocked():
    with responses.RequestsMock() as rsps:
        yield rsps


@pytest.fixture
def service():
    return TrendsService(Requester(requests.Session(), API_URL))


def _query(call):
    return dict(parse_qsl(urlsplit(call.request.url).query, keep_blank_values=True))


LOCATIONS_BODY = (
    '[{"country": "Sweden","countryCode": "SE","name": "Sweden","parentid": 1,'
    '"placeType": {"code": 12,"name": "Country"},'
    '"url": "http://where.yahooapis.com/v1/place/23424954","woeid": 23424954}]'
)

SWEDEN = Location(
    country="Sweden",
    country_code="SE",
    name="Sweden",
    parent_id=1,
    place_type=PlaceType(code=12, name="Country"),
    url="http://where.yahooapis.com/v1/place/23424954",
    woeid=23424954,
)


def test_available(mocked, service):
    mocked.add(
        responses.GET,
        API_URL + "trends/available.json",
        body=LOCATIONS_BODY,
        content_type="application/json",
    )
    assert service.available() == [SWEDEN]
    assert mocked.calls[0].request.method == "GET"


PLACE_BODY = (
    '[{"trends":[{"name":"#gotwitter"}], "as_of": "2017-02-08T16:18:18Z", '
    '"created_at": "2017-02-08T16:10:33Z","locations":[{"name": "Worldwide","woeid": 1}]}]'
)

PLACE_EXPECTED = [
    TrendsList(
        trends=[Trend(name="#gotwitter")],
        as_of="2017-02-08T16:18:18Z",
        created_at="2017-02-08T16:10:33Z",
        locations=[TrendsLocation(name="Worldwide", woeid=1)],
    )
]


def test_place(mocked, service):
    mocked.add(
        responses.GET,
        API_URL + "trends/place.json",
        body=PLACE_BODY,
        content_type="application/json",
    )
    assert service.place(123456, TrendsPlaceParams()) == PLACE_EXPECTED
    assert _query(mocked.calls[0]) == {"id": "123456"}


def test_place_handles_none_params(mocked, service):
    mocked.add(
        responses.GET,
        API_URL + "trends/place.json",
        body=PLACE_BODY,
        content_type="application/json",
    )
    assert service.place(123456, None) == PLACE_EXPECTED
    assert _query(mocked.calls[0]) == {"id": "123456"}


def test_place_does_not_modify_params(mocked, service):
    mocked.add(responses.GET, API_URL + "trends/place.json", json=[])
    params = TrendsPlaceParams(exclude="hashtags")
    assert service.place(123456, params) == []
    assert params.woeid == 0
    assert _query(mocked.calls[0]) == {"id": "123456", "exclude": "hashtags"}


def test_closest(mocked, service):
    mocked.add(
        responses.GET,
        API_URL + "trends/closest.json",
        body=LOCATIONS_BODY,
        content_type="application/json",
    )
    locations = service.closest(ClosestParams(lat=37.781157, long=-122.400612831116))
    assert locations == [SWEDEN]
    assert _query(mocked.calls[0]) == {"lat": "37.781157", "long": "-122.400612831116"}


def test_closest_sends_zero_coordinates(mocked, service):
    mocked.add(responses.GET, API_URL + "trends/closest.json", json=[])
    assert service.closest(ClosestParams()) == []
    assert _query(mocked.calls[0]) == {"lat": "0", "long": "0"}


def test_available_api_error(mocked, service):
    mocked.add(
        responses.GET,
        API_URL + "trends/available.json",
        json={"errors": [{"message": "Sorry, that page does not exist", "code": 34}]},
        status=404,
    )
    with pytest.raises(APIError) as info:
        service.available()
    assert info.value.status_code == 404
    assert info.value.errors[0].code == 34