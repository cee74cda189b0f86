"""
Configuration for the mood-to-music service.
"""
from pydantic import BaseModel
from dotenv import load_dotenv
import os

load_dotenv()

# Placeholder values shipped in the sample .env; treated as "not configured".
PLACEHOLDERS = {
    "your_spotify_client_id_here",
    "your_spotify_client_secret_here",
    "your_openweather_api_key_here",
}


def _is_set(value: str | None) -> bool:
    return bool(value) and value.strip() not in PLACEHOLDERS


class Settings(BaseModel):
    """
    Runtime settings with environment-variable overrides.
    """
    SPOTIFY_CLIENT_ID: str | None = os.getenv("SPOTIFY_CLIENT_ID")
    SPOTIFY_CLIENT_SECRET: str | None = os.getenv("SPOTIFY_CLIENT_SECRET")
    OPENWEATHER_API_KEY: str | None = os.getenv("OPENWEATHER_API_KEY")

    SPOTIFY_MARKET: str = os.getenv("SPOTIFY_MARKET", "IN")
    SPOTIFY_SEARCH_LIMIT: int = int(os.getenv("SPOTIFY_SEARCH_LIMIT", "40"))
    RECOMMENDATION_LIMIT: int = int(os.getenv("RECOMMENDATION_LIMIT", "8"))
    HTTP_TIMEOUT: float = float(os.getenv("HTTP_TIMEOUT", "10"))

    CAMERA_INDEX: int = int(os.getenv("CAMERA_INDEX", "0"))
    SAMPLE_INTERVAL: float = float(os.getenv("SAMPLE_INTERVAL", "1.0"))
    STABILITY_WINDOW: int = int(os.getenv("STABILITY_WINDOW", "5"))
    STABILITY_THRESHOLD: float = float(os.getenv("STABILITY_THRESHOLD", "0.6"))
    MIN_CONFIDENCE: float = float(os.getenv("MIN_CONFIDENCE", "0.4"))
    DETECTOR_BACKEND: str = os.getenv("DETECTOR_BACKEND", "opencv")

    API_BASE_URL: str = os.getenv("API_BASE_URL", "http://127.0.0.1:8000")

    def __init__(self, **data):
        super().__init__(**data)
        # Normalize DETECTOR_BACKEND: strip comments/extra words, lower-case
        backend = (self.DETECTOR_BACKEND or "opencv").strip().split()[0].lower()
        object.__setattr__(self, "DETECTOR_BACKEND", backend)

    def spotify_configured(self) -> bool:
        return _is_set(self.SPOTIFY_CLIENT_ID) and _is_set(self.SPOTIFY_CLIENT_SECRET)

    def weather_configured(self) -> bool:
        return _is_set(self.OPENWEATHER_API_KEY)
