"""
Spotify catalog access and emotion-driven search queries.
"""
from __future__ import annotations

import base64
import json
import logging
import random
from typing import Dict, List, Optional

import requests

from core.config import Settings
from core.emotions import Emotion, ensure_total
from core.errors import ConfigurationError, ProviderAuthError, ProviderError
from core.models import TrackResult

logger = logging.getLogger(__name__)

TOKEN_URL = "https://accounts.spotify.com/api/token"
SEARCH_URL = "https://api.spotify.com/v1/search"

# Latest hits, classics and popular artists for each mood
SEARCH_QUERIES: Dict[Emotion, tuple[str, ...]] = {
    Emotion.HAPPY: (
        "bollywood hindi happy songs 2023 2024",
        "classic bollywood happy songs 90s 2000s",
        "hindi upbeat dance songs arijit singh",
    ),
    Emotion.SAD: (
        "bollywood hindi sad songs 2023 2024",
        "classic hindi sad songs kumar sanu udit narayan",
        "hindi emotional songs arijit singh rahat",
    ),
    Emotion.ANGRY: (
        "bollywood hindi intense songs 2023 2024",
        "classic hindi powerful songs 90s rock",
        "hindi motivational songs energetic",
    ),
    Emotion.NEUTRAL: (
        "bollywood hindi melodious songs 2023 2024",
        "classic hindi songs evergreen collection",
        "hindi chill songs lofi indian",
    ),
    Emotion.SURPRISED: (
        "bollywood hindi upbeat songs 2023 2024",
        "classic hindi exciting songs energetic",
        "hindi party songs dance bollywood",
    ),
    Emotion.FEARFUL: (
        "bollywood hindi soothing songs 2023 2024",
        "classic hindi calming songs peaceful",
        "hindi meditation relaxing instrumental",
    ),
    Emotion.DISGUSTED: (
        "bollywood hindi atmospheric songs 2023 2024",
        "classic hindi moody songs deep",
        "hindi ambient instrumental peaceful",
    ),
}
ensure_total(SEARCH_QUERIES, "SEARCH_QUERIES")

DEFAULT_QUERIES = (
    "popular bollywood hindi songs 2023 2024",
    "classic hindi songs collection evergreen",
    "best bollywood songs all time",
)

QUALIFIER_TERMS = ("popular", "trending", "hit", "top", "best", "latest")


def build_search_query(label, rng=random) -> str:
    """Pick one phrasing for the mood and append a random qualifier for variety."""
    emotion = label if isinstance(label, Emotion) else Emotion.from_label(label)
    phrasings = SEARCH_QUERIES.get(emotion, DEFAULT_QUERIES)
    return f"{rng.choice(phrasings)} {rng.choice(QUALIFIER_TERMS)}"


def _to_track(item: Dict, emotion: Emotion) -> TrackResult:
    artists = item.get("artists") or [{}]
    album = item.get("album") or {}
    images = album.get("images") or []
    return TrackResult(
        id=str(item.get("id", "")),
        name=item.get("name", ""),
        artist=(artists[0] or {}).get("name", ""),
        album=album.get("name"),
        image_url=(images[0] or {}).get("url") if images else None,
        preview_url=item.get("preview_url") or None,
        emotion=emotion,
    )


def select_tracks(items: List[Dict], emotion: Emotion, limit: int = 8) -> List[TrackResult]:
    """
    Prefer playable tracks.

    Returns up to ``limit`` items that carry a preview URL; when none of the
    items has one, the first ``limit`` items are returned as-is.
    """
    items = [it for it in (items or []) if isinstance(it, dict)]
    playable = [it for it in items if it.get("preview_url")][:limit]
    chosen = playable if playable else items[:limit]
    logger.debug(f"[spotify] {len(playable)} of {len(items)} tracks have previews")
    return [_to_track(it, emotion) for it in chosen]


def _error_message(response: requests.Response, fallback: str) -> str:
    try:
        body = response.json()
    except (ValueError, json.JSONDecodeError):
        return fallback
    err = body.get("error") if isinstance(body, dict) else None
    if isinstance(err, dict) and err.get("message"):
        return f"Spotify API error: {err['message']}"
    return fallback


class SpotifyClient:
    """Client-credentials Spotify search client."""

    def __init__(self, settings: Settings, session: Optional[requests.Session] = None):
        self.settings = settings
        self._session = session or requests.Session()

    def _require_credentials(self) -> None:
        if not self.settings.spotify_configured():
            logger.error("[spotify] credentials not configured")
            raise ConfigurationError(
                "Spotify API credentials not configured. Please check your .env file.",
                details="Missing SPOTIFY_CLIENT_ID or SPOTIFY_CLIENT_SECRET",
            )

    def access_token(self) -> str:
        self._require_credentials()
        pair = f"{self.settings.SPOTIFY_CLIENT_ID}:{self.settings.SPOTIFY_CLIENT_SECRET}"
        auth = base64.b64encode(pair.encode()).decode()
        try:
            resp = self._session.post(
                TOKEN_URL,
                headers={"Authorization": f"Basic {auth}"},
                data={"grant_type": "client_credentials"},
                timeout=self.settings.HTTP_TIMEOUT,
            )
        except requests.RequestException as e:
            logger.exception("[spotify] token request failed")
            raise ProviderAuthError("Failed to authenticate with Spotify", details=str(e)) from e
        if not resp.ok:
            logger.error(f"[spotify] token error status={resp.status_code} body={resp.text[:200]}")
            raise ProviderAuthError("Failed to authenticate with Spotify")
        try:
            body = resp.json()
        except ValueError as e:
            logger.error(f"[spotify] token response is not JSON: {resp.text[:200]}")
            raise ProviderAuthError("Failed to authenticate with Spotify") from e
        token = body.get("access_token") if isinstance(body, dict) else None
        if not token:
            raise ProviderAuthError("Failed to authenticate with Spotify")
        return token

    def search(self, q: str, type: str = "track", limit: int = 10, market: Optional[str] = None) -> Dict:
        """Provider-native search JSON."""
        token = self.access_token()
        params = {"q": q, "type": type, "limit": int(limit)}
        if market:
            params["market"] = market
        try:
            resp = self._session.get(
                SEARCH_URL,
                headers={"Authorization": f"Bearer {token}"},
                params=params,
                timeout=self.settings.HTTP_TIMEOUT,
            )
        except requests.RequestException as e:
            logger.exception("[spotify] search request failed")
            raise ProviderError("An error occurred with the Spotify API", details=str(e)) from e
        if not resp.ok:
            message = _error_message(resp, "Failed to search Spotify")
            logger.error(f"[spotify] search error status={resp.status_code}: {message}")
            raise ProviderError(message)
        try:
            data = resp.json()
        except ValueError as e:
            logger.error(f"[spotify] search response is not JSON: {resp.text[:200]}")
            raise ProviderError("Failed to search Spotify") from e
        if not isinstance(data, dict):
            raise ProviderError("Failed to search Spotify", details="unexpected response shape")
        return data

    def recommend_for_emotion(self, emotion: Emotion, rng=random) -> List[TrackResult]:
        query = build_search_query(emotion, rng)
        logger.info(f"[spotify] recommendations for {emotion.value} query={query!r}")
        data = self.search(
            query,
            type="track",
            limit=self.settings.SPOTIFY_SEARCH_LIMIT,
            market=self.settings.SPOTIFY_MARKET,
        )
        tracks = data.get("tracks")
        items = tracks.get("items") if isinstance(tracks, dict) else None
        return select_tracks(items, emotion, limit=self.settings.RECOMMENDATION_LIMIT)
