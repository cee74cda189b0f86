"""
Recommendation fetchers used by the live loop.

A fetcher is a callable ``fetch(emotion) -> list[TrackResult]``. Every
failure surfaces as RecommendationsUnavailable; nothing is retried.
"""
from __future__ import annotations
from typing import List, Optional
import logging

import requests

from core.emotions import Emotion
from core.errors import MoodifyError, RecommendationsUnavailable
from core.models import TrackResult
from core.music import SpotifyClient

logger = logging.getLogger(__name__)


class DirectFetcher:
    """In-process fetch through a SpotifyClient."""
    def __init__(self, client: SpotifyClient):
        self.client = client

    def __call__(self, emotion: Emotion) -> List[TrackResult]:
        try:
            return self.client.recommend_for_emotion(emotion)
        except MoodifyError as e:
            raise RecommendationsUnavailable(e.message, details=e.kind) from e


class ProxyFetcher:
    """Fetch from a running backend's recommendation endpoint."""
    def __init__(self, base_url: str, timeout: float = 15.0,
                 session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()

    def __call__(self, emotion: Emotion) -> List[TrackResult]:
        url = f"{self.base_url}/api/spotify/recommendations/emotion/{emotion.value}"
        try:
            resp = self._session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning(f"[fetcher] {url} unreachable: {e}")
            raise RecommendationsUnavailable("Recommendations unavailable", details=str(e)) from e
        if not resp.ok:
            message = "Recommendations unavailable"
            try:
                detail = resp.json().get("detail")
                if isinstance(detail, dict) and detail.get("message"):
                    message = detail["message"]
            except (ValueError, AttributeError):
                logger.debug(f"[fetcher] unstructured error body from {url}")
            raise RecommendationsUnavailable(message, details=f"HTTP {resp.status_code}")
        try:
            return [TrackResult(**item) for item in resp.json()]
        except (ValueError, TypeError) as e:
            # ValueError covers both a non-JSON body and a pydantic ValidationError
            logger.warning(f"[fetcher] malformed recommendations from {url}: {e}")
            raise RecommendationsUnavailable("Recommendations unavailable", details="malformed response") from e
