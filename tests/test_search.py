from urllib.parse import parse_qsl, urlsplit

import pytest
import requests
import responses

from tweetapi.http import API_URL, APIError, ErrorDetail, Requester
from tweetapi.models import Tweet
from tweetapi.search import (
    PremiumSearch,
    PremiumSearchCount,
    PremiumSearchCountTweetParams,
    PremiumSearchService,
    PremiumSearchTweetParams,
    RequestCountParameters,
    RequestParameters,
    Search,
    SearchMetadata,
    SearchService,
    SearchTweetParams,
    TweetCount,
)


@pytest.fixture
def mocked():
    with responses.RequestsMock() as rsps:
        yield rsps


@pytest.fixture
def requester():
    return Requester(requests.Session(), API_URL)


def _query(call):
    return dict(parse_qsl(urlsplit(call.request.url).query, keep_blank_values=True))


SEARCH_BODY = (
    '{"statuses":[{"id":781760642139250689}],"search_metadata":{"completed_in":0.043,'
    '"max_id":781760642139250689,"max_id_str":"781760642139250689",'
    '"next_results":"?max_id=781760640104828927&q=happy+birthday&count=1&include_entities=1",'
    '"query":"happy birthday",'
    '"refresh_url":"?since_id=781760642139250689&q=happy+birthday&include_entities=1",'
    '"count":1,"since_id":0,"since_id_str":"0", "since":"2012-01-01", "filter":"safe"}}'
)


def test_search_tweets(mocked, requester):
    mocked.add(
        responses.GET,
        API_URL + "search/tweets.json",
        body=SEARCH_BODY,
        content_type="application/json",
    )
    search = SearchService(requester).tweets(
        SearchTweetParams(
            query="happy birthday",
            count=1,
            result_type="popular",
            since="2012-01-01",
            filter="safe",
        )
    )
    expected = Search(
        statuses=[Tweet(id=781760642139250689)],
        metadata=SearchMetadata(
            count=1,
            since_id=0,
            since_id_str="0",
            max_id=781760642139250689,
            max_id_str="781760642139250689",
            refresh_url="?since_id=781760642139250689&q=happy+birthday&include_entities=1",
            next_results="?max_id=781760640104828927&q=happy+birthday&count=1&include_entities=1",
            completed_in=0.043,
            query="happy birthday",
        ),
    )
    assert search == expected
    assert mocked.calls[0].request.method == "GET"
    assert _query(mocked.calls[0]) == {
        "q": "happy birthday",
        "result_type": "popular",
        "count": "1",
        "since": "2012-01-01",
        "filter": "safe",
    }


def test_search_tweets_sends_false_booleans(mocked, requester):
    mocked.add(responses.GET, API_URL + "search/tweets.json", json={"statuses": []})
    search = SearchService(requester).tweets(SearchTweetParams(query="go", include_entities=False))
    assert search == Search(statuses=[], metadata=None)
    assert _query(mocked.calls[0]) == {"q": "go", "include_entities": "false"}


def test_search_tweets_api_error(mocked, requester):
    mocked.add(
        responses.GET,
        API_URL + "search/tweets.json",
        json={"errors": [{"message": "Rate limit exceeded", "code": 88}]},
        status=429,
    )
    with pytest.raises(APIError) as info:
        SearchService(requester).tweets(SearchTweetParams(query="go"))
    assert info.value.errors == [ErrorDetail(message="Rate limit exceeded", code=88)]


PREMIUM_QUERY = {
    "query": 'url:"http://example.com"',
    "tag": "8HYG54ZGTU",
    "fromDate": "201512220000",
    "toDate": "201712220000",
    "maxResults": "500",
    "next": "NTcxODIyMDMyODMwMjU1MTA0",
}


@pytest.mark.parametrize(
    "method, path",
    [
        ("search_full_archive", "tweets/search/fullarchive/test.json"),
        ("search_30_days", "tweets/search/30day/test.json"),
    ],
)
def test_premium_search(mocked, requester, method, path):
    mocked.add(
        responses.GET,
        API_URL + path,
        body='{"results":[{"id":781760642139250689}],"next":"NTcxODIyMDMyODMwMjU1MTA0",'
        '"requestParameters":{"maxResults":500,"fromDate":"201512200000","toDate":"201712200000"}}',
        content_type="application/json",
    )
    params = PremiumSearchTweetParams(
        query='url:"http://example.com"',
        tag="8HYG54ZGTU",
        from_date="201512220000",
        to_date="201712220000",
        max_results=500,
        next="NTcxODIyMDMyODMwMjU1MTA0",
    )
    service = PremiumSearchService(requester)
    search = getattr(service, method)(params, "test")
    expected = PremiumSearch(
        results=[Tweet(id=781760642139250689)],
        next="NTcxODIyMDMyODMwMjU1MTA0",
        request_parameters=RequestParameters(
            max_results=500, from_date="201512200000", to_date="201712200000"
        ),
    )
    assert search == expected
    assert mocked.calls[0].request.method == "GET"
    assert _query(mocked.calls[0]) == PREMIUM_QUERY


COUNT_QUERY = {
    "query": 'url:"http://example.com"',
    "tag": "8HYG54ZGTU",
    "fromDate": "201512220000",
    "toDate": "201712220000",
    "bucket": "day",
    "next": "NTcxODIyMDMyODMwMjU1MTA0",
}


@pytest.mark.parametrize(
    "method, path",
    [
        ("count_full_archive", "tweets/search/fullarchive/test/counts.json"),
        ("count_30_days", "tweets/search/30day/test/counts.json"),
    ],
)
def test_premium_counts(mocked, requester, method, path):
    mocked.add(
        responses.GET,
        API_URL + path,
        body='{"results":[{"timePeriod":"201701010000","count":32},'
        '{"timePeriod":"201701020000","count":45}],"totalCount":2027,'
        '"requestParameters":{"bucket":"day","fromDate":"201512200000","toDate":"201712200000"}}',
        content_type="application/json",
    )
    params = PremiumSearchCountTweetParams(
        query='url:"http://example.com"',
        tag="8HYG54ZGTU",
        from_date="201512220000",
        to_date="201712220000",
        bucket="day",
        next="NTcxODIyMDMyODMwMjU1MTA0",
    )
    service = PremiumSearchService(requester)
    counts = getattr(service, method)(params, "test")
    expected = PremiumSearchCount(
        results=[
            TweetCount(time_period="201701010000", count=32),
            TweetCount(time_period="201701020000", count=45),
        ],
        total_count=2027,
        request_parameters=RequestCountParameters(
            bucket="day", from_date="201512200000", to_date="201712200000"
        ),
    )
    assert counts == expected
    assert _query(mocked.calls[0]) == COUNT_QUERY