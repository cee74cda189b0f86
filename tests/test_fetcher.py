import pytest

from core.emotions import Emotion
from core.errors import RecommendationsUnavailable
from core.fetcher import DirectFetcher, ProxyFetcher
from core.music import SpotifyClient
from conftest import FakeResponse, FakeSession


def test_proxy_fetcher_parses_tracks():
    body = [{"id": "1", "name": "Song", "artist": "A", "preview_url": "https://p/1.mp3", "emotion": "happy"}]
    session = FakeSession(get=[FakeResponse(200, body)])
    out = ProxyFetcher("http://api/", session=session)(Emotion.HAPPY)
    assert out[0].emotion == Emotion.HAPPY
    assert session.calls[0][1] == "http://api/api/spotify/recommendations/emotion/happy"


def test_proxy_fetcher_surfaces_server_message():
    body = {"detail": {"kind": "configuration", "message": "Spotify API credentials not configured."}}
    session = FakeSession(get=[FakeResponse(500, body)])
    with pytest.raises(RecommendationsUnavailable) as exc:
        ProxyFetcher("http://api", session=session)(Emotion.SAD)
    assert exc.value.message == "Spotify API credentials not configured."


def test_proxy_fetcher_unreachable(network_down):
    with pytest.raises(RecommendationsUnavailable):
        ProxyFetcher("http://api", session=FakeSession(get=[network_down]))(Emotion.SAD)


def test_direct_fetcher_wraps_provider_errors(unconfigured_settings):
    fetch = DirectFetcher(SpotifyClient(unconfigured_settings, session=FakeSession()))
    with pytest.raises(RecommendationsUnavailable) as exc:
        fetch(Emotion.NEUTRAL)
    assert exc.value.details == "configuration"


@pytest.mark.parametrize("reply", [
    FakeResponse(200, text="<html>oops</html>"),
    FakeResponse(200, [{"id": "1", "name": "Song"}]),
    FakeResponse(200, {"detail": "not a list"}),
    FakeResponse(200, [{"id": "1", "name": "Song", "artist": "A", "emotion": "bored"}]),
])
def test_proxy_fetcher_malformed_success_body(reply):
    with pytest.raises(RecommendationsUnavailable) as exc:
        ProxyFetcher("http://api", session=FakeSession(get=[reply]))(Emotion.HAPPY)
    assert exc.value.details == "malformed response"
