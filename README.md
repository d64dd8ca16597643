# tweetapi

A Python client for the Twitter v1.1 API. It covers statuses, users,
timelines, standard and premium search, trends, rate limits, chunked media
upload and the streaming endpoints.

## Installation

```
pip install .
```

`requests` is the only runtime dependency. To run the tests:

```
pip install ".[test]"
pytest
```

## Usage

`tweetapi.client.Client` takes an optional `requests.Session`. If you pass
none, it creates a plain session. The client does not sign requests. Put your
authentication on the session first, for example a bearer token header or an
auth handler.

```python
import requests
from tweetapi.client import Client

session = requests.Session()
session.headers["Authorization"] = "Bearer token"

client = Client(session)
```

The client has these services as attributes: `statuses`, `users`,
`timelines`, `search`, `premium_search`, `trends`, `rate_limits`, `media`
and `streams`.

### Parameters

Each endpoint takes a parameter dataclass, such as `StatusShowParams` or
`UserTimelineParams`. You may also pass `None`. Fields left at `None`, an
empty string, an empty list or zero are not sent. `False` is always sent.
Lists go on the wire comma-joined. A few fields are sent even when they are
empty: `ClosestParams.lat` and `long`, and
`RetweetsOfMeTimelineParams.include_user_entities`. `tweetapi.http.encode_params`
turns a dataclass or mapping into the `(name, value)` pairs that are sent.

### Tweets and users

```python
from tweetapi.statuses import StatusLookupParams, StatusShowParams, StatusUpdateParams
from tweetapi.users import UserLookupParams, UserShowParams

tweet = client.statuses.show(20, StatusShowParams(include_entities=False))
print(tweet.text, tweet.created_at_time())

tweets = client.statuses.lookup([20, 21], StatusLookupParams(trim_user=True))
client.statuses.update("hello world", StatusUpdateParams(lat=37.8, long=-122.4))
client.statuses.retweet(20)
client.statuses.destroy(20)

user = client.users.show(UserShowParams(screen_name="example"))
users = client.users.lookup(UserLookupParams(screen_name=["example", "other"]))
found = client.users.search("news")
```

The results are dataclasses from `tweetapi.models`: `Tweet`, `User`,
`Place`, `Coordinates`, `OEmbedTweet` and others. Each has a `from_dict`
class method. `Tweet.created_at_time()` parses `created_at`, in the form
`Mon Jan 02 15:04:05 -0700 2006`, into a timezone-aware `datetime`.

### Timelines, search, trends and rate limits

```python
from tweetapi.timelines import UserTimelineParams
from tweetapi.search import SearchTweetParams, PremiumSearchTweetParams
from tweetapi.trends import ClosestParams
from tweetapi.rate_limits import RateLimitParams

tweets = client.timelines.user_timeline(UserTimelineParams(screen_name="example", count=10))

result = client.search.tweets(SearchTweetParams(query="happy birthday", count=5))
for status in result.statuses:
    print(status.id, status.text)

premium = client.premium_search.search_30_days(PremiumSearchTweetParams(query="python"), "dev")
counts = client.premium_search.count_full_archive(None, "dev")

trends = client.trends.place(1)
locations = client.trends.closest(ClosestParams(lat=37.78, long=-122.40))

limits = client.rate_limits.status(RateLimitParams(resources=["statuses", "users"]))
```

### Errors

A response with a non-2xx status raises `tweetapi.http.APIError`. Its
`errors` attribute holds the `ErrorDetail` entries (`code` and `message`)
that Twitter returned. Its `status_code` attribute holds the HTTP status.
Transport errors, such as a refused connection, come through as the usual
`requests` exceptions.

```python
from tweetapi.http import APIError

try:
    client.statuses.update("duplicate")
except APIError as exc:
    for detail in exc.errors:
        print(detail.code, detail.message)
```

### Media upload

`media.upload` uses the INIT, APPEND and FINALIZE commands. It sends the data
base64-encoded in chunks of 1 MiB. Files larger than 15 MiB raise
`ValueError` before anything is sent.

```python
with open("clip.mp4", "rb") as fh:
    result = client.media.upload(fh.read(), "video/mp4")
if result.processing_info is not None:
    status = client.media.status(result.media_id)
```

### Streams

`streams.filter`, `sample`, `user`, `site` and `firehose` each return a
`Stream`. A background thread reads the stream. The thread handles HTTP
statuses as follows:

| Status | What the stream does |
| --- | --- |
| 200 | Reads messages until the connection ends, then reconnects. |
| 503 | Reconnects after an exponential back-off, starting at 5 s. |
| 420 or 429 | Reconnects after a more aggressive back-off, starting at 60 s. |
| Any other | Ends the stream. |

Iterating over a stream yields these items:

* Decoded messages from `tweetapi.stream_messages`:
  * `Tweet`
  * `StatusDeletion`
  * `LocationDeletion`
  * `StreamLimit`
  * `StatusWithheld`
  * `UserWithheld`
  * `StreamDisconnect`
  * `StallWarning`
  * `FriendsList`
  * `Event`
* Direct messages, as their raw dict.
* Messages of unknown kind, as a plain dict.
* Malformed messages and connection errors, as exception instances.

Use the stream as a context manager, or call `stop()` yourself.

```python
from tweetapi.streams import StreamFilterParams
from tweetapi.models import Tweet

with client.streams.filter(StreamFilterParams(track=["python"])) as stream:
    for message in stream:
        if isinstance(message, Tweet):
            print(message.text)
```

`tweetapi.stream_messages.get_message` decodes a single raw message outside
a stream.

## What it does not do

* It has no services for accounts, configuration, direct messages,
  favourites, followers, friends, friendships or lists.
* It does not authenticate. The session you pass must carry your credentials.
* It is a library only and has no command-line tool.