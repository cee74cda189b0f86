"""
REST endpoints: provider proxies, single-frame detection and the live loop.
"""
from datetime import datetime, timezone
from typing import List, Optional
import logging

from fastapi import APIRouter, UploadFile, File, HTTPException, Query

from core.config import Settings
from core.classifier import DeepFaceClassifier, decode_image
from core.emotions import Emotion
from core.errors import MoodifyError, NoMoodDetected
from core.fetcher import DirectFetcher
from core.live import MoodLoop
from core.models import (
    DetectionResult, LiveStatus, RecommendationRequest, ServiceStatus, TrackResult, Weather,
)
from core.music import SpotifyClient
from core.weather import WeatherClient


router = APIRouter()
settings = Settings()
logger = logging.getLogger(__name__)

spotify = SpotifyClient(settings)
weather = WeatherClient(settings)
classifier = DeepFaceClassifier(detector_backend=settings.DETECTOR_BACKEND)

# Server-side camera session, created on first /live/start
live_session = {"loop": None}


def _http_error(e: MoodifyError, status_code: int = 500) -> HTTPException:
    return HTTPException(status_code=status_code, detail=e.to_detail())


def _bad_request(message: str) -> HTTPException:
    return HTTPException(status_code=400, detail={"kind": "bad_request", "message": message})


def _get_loop() -> MoodLoop:
    loop = live_session["loop"]
    if loop is None:
        loop = MoodLoop.from_settings(settings, classifier, DirectFetcher(spotify))
        live_session["loop"] = loop
    return loop


@router.get("/api/status", response_model=ServiceStatus)
def api_status():
    """
    Report which providers are configured, without calling them.
    """
    spotify_ok = settings.spotify_configured()
    weather_ok = settings.weather_configured()
    logger.info(f"[api] status spotify={spotify_ok} weather={weather_ok}")
    return ServiceStatus(
        services={
            "spotify": "configured" if spotify_ok else "missing credentials",
            "weather": "configured" if weather_ok else "missing API key",
        },
        instructions=("All APIs are configured correctly!" if spotify_ok and weather_ok
                      else "Set SPOTIFY_CLIENT_ID, SPOTIFY_CLIENT_SECRET and OPENWEATHER_API_KEY in .env"),
        timestamp=datetime.now(timezone.utc).isoformat(),
    )


@router.get("/api/spotify/search")
def spotify_search(
    q: Optional[str] = None,
    type: str = "track",
    limit: int = Query(10, ge=1, le=50),
):
    """
    Proxy a raw Spotify search.

    Returns:
        dict: Provider-native search JSON.
    """
    if not q:
        raise _bad_request("Search query is required")
    try:
        return spotify.search(q, type=type, limit=limit)
    except MoodifyError as e:
        raise _http_error(e)


@router.get("/api/spotify/recommendations/emotion/{emotion}", response_model=List[TrackResult])
def recommendations_for_emotion(emotion: Emotion):
    """
    Up to RECOMMENDATION_LIMIT tracks for a mood, preferring tracks with previews.

    An empty list is a valid answer, not an error.
    """
    logger.debug(f"[api] recommendations emotion={emotion.value}")
    try:
        return spotify.recommend_for_emotion(emotion)
    except MoodifyError as e:
        raise _http_error(e)


@router.get("/api/weather", response_model=Weather)
def current_weather(
    lat: Optional[float] = None,
    lon: Optional[float] = None,
    city: Optional[str] = None,
):
    try:
        return weather.current(lat=lat, lon=lon, city=city)
    except ValueError as e:
        raise _bad_request(str(e))
    except MoodifyError as e:
        raise _http_error(e)


@router.post("/api/emotion/detect", response_model=DetectionResult)
def detect_emotion(file: UploadFile = File(...)):
    """
    Classify a single uploaded frame (JPEG/PNG).

    No face is a normal answer (face_found=false), not an error. A plain def, so
    inference runs on the threadpool instead of the event loop.
    """
    data = file.file.read()
    try:
        frame = decode_image(data)
    except ValueError as e:
        raise _bad_request(str(e))
    try:
        sample = classifier.classify(frame)
    except Exception:
        logger.exception("[api] classifier failed; reporting no face")
        sample = None
    return DetectionResult(face_found=sample is not None, sample=sample)


@router.post("/live/start")
def live_start():
    loop = _get_loop()
    if not loop.start(interval=settings.SAMPLE_INTERVAL):
        return {"status": "stopping" if loop.stopping else "already_running"}
    return {"status": "started"}


@router.get("/live/status", response_model=LiveStatus)
def live_status():
    loop = live_session["loop"]
    if loop is None:
        return LiveStatus(running=False)
    return loop.status()


@router.post("/live/refresh", response_model=RecommendationRequest)
def live_refresh():
    loop = _get_loop()
    try:
        return loop.refresh()
    except NoMoodDetected as e:
        raise _http_error(e, status_code=409)


@router.post("/live/stop")
def live_stop():
    loop = live_session["loop"]
    if loop is None or not loop.stop():
        return {"status": "not_running"}
    return {"status": "stopped"}
