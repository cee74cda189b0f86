# core/live.py
"""
Live (real-time) mood loop.

Wires Frame Sampler -> Classifier -> MoodSession (tracker + trigger) -> Fetcher:
- one tick per SAMPLE_INTERVAL reads a frame and ingests the classifier output
- a stable-mood transition or a manual refresh dispatches one fetch
- fetches run on an executor and may overlap; the session keeps only the
  response for the latest firing token
"""

from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Callable, List, Optional

from core.config import Settings
from core.emotions import Emotion, MOOD_PROFILES
from core.errors import MoodifyError
from core.models import LiveStatus, RecommendationRequest, TrackResult
from core.sampler import FrameSampler, IntervalScheduler, TickScheduler
from core.session import MoodSession

logger = logging.getLogger(__name__)

Fetcher = Callable[[Emotion], List[TrackResult]]


class MoodLoop:
    """Drives one camera session and its recommendation fetches."""
    def __init__(self,
                 session: MoodSession,
                 sampler: FrameSampler,
                 classifier,
                 fetcher: Fetcher,
                 executor: Optional[Executor] = None):
        self.session = session
        self.sampler = sampler
        self.classifier = classifier
        self.fetcher = fetcher
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(max_workers=2, thread_name_prefix="moodify-fetch")
        self._lock = threading.Lock()
        # one Event per background run, so a run that outlives stop() stays cancelled
        self._cancel: Optional[threading.Event] = None
        self._thread: Optional[threading.Thread] = None
        self._started_at: Optional[float] = None

    @classmethod
    def from_settings(cls, settings: Settings, classifier, fetcher: Fetcher) -> "MoodLoop":
        return cls(
            session=MoodSession.from_settings(settings),
            sampler=FrameSampler(settings.CAMERA_INDEX),
            classifier=classifier,
            fetcher=fetcher,
        )

    # ---- per-tick work ----
    def tick(self) -> Optional[RecommendationRequest]:
        frame = self.sampler.sample()
        if frame is None:
            return None
        request = self.session.ingest_frame(frame, self.classifier)
        if request is not None:
            self._dispatch(request)
        return request

    def refresh(self) -> RecommendationRequest:
        """Manual refresh; raises NoMoodDetected when nothing has been seen yet."""
        request = self.session.request_refresh()
        self._dispatch(request)
        return request

    def _dispatch(self, request: RecommendationRequest) -> None:
        self.session.begin(request)
        logger.debug(f"[live] dispatch token={request.token} emotion={request.emotion.value}")
        future = self._executor.submit(self.fetcher, request.emotion)
        future.add_done_callback(lambda f: self._complete(request, f))

    def _complete(self, request: RecommendationRequest, future: Future) -> None:
        try:
            tracks = future.result()
        except MoodifyError as e:
            logger.warning(f"[live] fetch token={request.token} failed: {e.message}")
            self.session.apply_failure(request, "Recommendations unavailable. Try refreshing.")
            return
        except Exception:
            logger.exception(f"[live] fetch token={request.token} crashed")
            self.session.apply_failure(request, "Recommendations unavailable. Try refreshing.")
            return
        self.session.apply_result(request, tracks)

    # ---- lifecycle ----
    def run(self, scheduler: TickScheduler, cancel: threading.Event) -> None:
        """Run ticks in the calling thread until ``cancel`` is set."""
        if self._started_at is None:
            self._started_at = time.time()
        try:
            scheduler.run(self.tick, cancel)
        finally:
            self.sampler.release()

    def start(self, interval: float = 1.0) -> bool:
        """
        Start sampling on a background thread.

        Returns False while a previous run is still alive, including one that
        has been stopped but is finishing its last tick.
        """
        with self._lock:
            if self._thread is not None and self._thread.is_alive():
                return False
            cancel = threading.Event()
            self._cancel = cancel
            self._started_at = time.time()
            self._thread = threading.Thread(
                target=self.run, args=(IntervalScheduler(interval), cancel),
                name="moodify-live", daemon=True,
            )
            self._thread.start()
        logger.info(f"[live] started interval={interval}s")
        return True

    def stop(self, timeout: float = 5.0) -> bool:
        with self._lock:
            if not self.running:
                return False
            self._cancel.set()
            thread = self._thread
            self._started_at = None
        thread.join(timeout)
        if thread.is_alive():
            logger.warning(f"[live] loop still finishing a tick after {timeout}s; restart refused until it exits")
        logger.info("[live] stopped")
        return True

    def close(self, timeout: float = 5.0) -> None:
        """Stop sampling and shut down the fetch executor if this loop created it."""
        self.stop(timeout)
        if self._owns_executor:
            self._executor.shutdown(wait=False)

    @property
    def running(self) -> bool:
        return (self._thread is not None and self._thread.is_alive()
                and self._cancel is not None and not self._cancel.is_set())

    @property
    def stopping(self) -> bool:
        """A stopped run whose thread has not exited yet."""
        return self._thread is not None and self._thread.is_alive() and not self.running

    def status(self) -> LiveStatus:
        stable = self.session.stable_mood
        return LiveStatus(
            running=self.running,
            started_at=self._started_at if self.running else None,
            stable_mood=stable,
            mood_description=MOOD_PROFILES[stable].description if stable else None,
            last_sample=self.session.last_sample,
            recommendations=self.session.view(),
        )
