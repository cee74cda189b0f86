import json
from concurrent.futures import Future

import pytest
import requests

from core.config import Settings
from core.emotions import Emotion
from core.models import EmotionSample


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=None):
        self.status_code = status_code
        self._payload = payload
        self.text = text if text is not None else json.dumps(payload)

    @property
    def ok(self):
        return 200 <= self.status_code < 400

    def json(self):
        if self._payload is None:
            return json.loads(self.text)
        return self._payload


class FakeSession:
    """Stands in for requests.Session; replies are queued per HTTP verb."""
    def __init__(self, post=None, get=None):
        self.post_replies = list(post or [])
        self.get_replies = list(get or [])
        self.calls = []

    def _next(self, queue, method, url, kw):
        self.calls.append((method, url, kw))
        reply = queue.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply

    def post(self, url, **kw):
        return self._next(self.post_replies, "POST", url, kw)

    def get(self, url, **kw):
        return self._next(self.get_replies, "GET", url, kw)


class InlineExecutor:
    """Runs submitted work immediately, so done-callbacks fire synchronously."""
    def submit(self, fn, *args):
        f = Future()
        try:
            f.set_result(fn(*args))
        except Exception as e:
            f.set_exception(e)
        return f


def sample(label, confidence=0.9):
    return EmotionSample(label=Emotion(label), confidence=confidence)


def track_item(i, preview=True):
    return {
        "id": f"t{i}",
        "name": f"Song {i}",
        "artists": [{"name": f"Artist {i}"}, {"name": "Feat"}],
        "album": {"name": f"Album {i}", "images": [{"url": f"https://img/{i}.jpg"}]},
        "preview_url": f"https://p/{i}.mp3" if preview else None,
    }


@pytest.fixture
def configured_settings():
    return Settings(
        SPOTIFY_CLIENT_ID="client-id",
        SPOTIFY_CLIENT_SECRET="client-secret",
        OPENWEATHER_API_KEY="weather-key",
    )


@pytest.fixture
def unconfigured_settings():
    return Settings(
        SPOTIFY_CLIENT_ID=None,
        SPOTIFY_CLIENT_SECRET="your_spotify_client_secret_here",
        OPENWEATHER_API_KEY="your_openweather_api_key_here",
    )


@pytest.fixture
def token_ok():
    return FakeResponse(200, {"access_token": "abc", "token_type": "Bearer"})


@pytest.fixture
def network_down():
    return requests.ConnectionError("connection refused")
