"""Run the live mood loop on the local camera.

Usage:
    uvicorn api.main:app --reload                          # (separate, for API)
    python scripts/live_mood.py --proxy                    # recommendations via API_BASE_URL
    python scripts/live_mood.py --proxy http://host:8000   # recommendations via another backend
    python scripts/live_mood.py                            # recommendations straight from Spotify

Press Ctrl-C to stop.
"""
import argparse
import logging
import threading
from typing import Optional

from core.classifier import DeepFaceClassifier
from core.config import Settings
from core.fetcher import DirectFetcher, ProxyFetcher
from core.live import MoodLoop
from core.music import SpotifyClient
from core.sampler import IntervalScheduler


def build_fetcher(settings: Settings, proxy: Optional[str]):
    if proxy:
        return ProxyFetcher(proxy, timeout=settings.HTTP_TIMEOUT)
    return DirectFetcher(SpotifyClient(settings))


def parse_args(settings: Settings, argv=None):
    p = argparse.ArgumentParser()
    p.add_argument("--proxy", nargs="?", const=settings.API_BASE_URL, default=None,
                   help=f"Backend base URL (bare flag: {settings.API_BASE_URL}); omit to call Spotify directly")
    return p.parse_args(argv)


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO)
    s = Settings()
    args = parse_args(s)
    loop = MoodLoop.from_settings(s, DeepFaceClassifier(s.DETECTOR_BACKEND), build_fetcher(s, args.proxy))
    cancel = threading.Event()
    try:
        loop.run(IntervalScheduler(s.SAMPLE_INTERVAL), cancel)
    except KeyboardInterrupt:
        cancel.set()
    finally:
        loop.close()
    status = loop.status()
    print(status.model_dump_json(indent=2))
