"""
Session-scoped mood controller.

One MoodSession per camera session: it owns the stability tracker, the
recommendation trigger, the last raw sample and the recommendation view.
Ticks arrive on the sampling thread and fetch completions on worker threads,
so every public method runs under the session lock.
"""
from __future__ import annotations

import logging
import threading
from typing import List, Optional

from core.models import EmotionSample, RecommendationRequest, RecommendationView, TrackResult
from core.stability import StabilityTracker
from core.trigger import RecommendationTrigger
from core.emotions import Emotion

logger = logging.getLogger(__name__)


class MoodSession:
    def __init__(self,
                 tracker: Optional[StabilityTracker] = None,
                 trigger: Optional[RecommendationTrigger] = None):
        self.tracker = tracker or StabilityTracker()
        self.trigger = trigger or RecommendationTrigger()
        self._lock = threading.RLock()
        self._last_sample: Optional[EmotionSample] = None
        self._view = RecommendationView()
        self._seq = 0

    @classmethod
    def from_settings(cls, settings) -> "MoodSession":
        tracker = StabilityTracker(
            window_size=settings.STABILITY_WINDOW,
            threshold=settings.STABILITY_THRESHOLD,
            min_confidence=settings.MIN_CONFIDENCE,
        )
        return cls(tracker=tracker)

    # ---- mood state ----
    @property
    def stable_mood(self) -> Optional[Emotion]:
        return self.tracker.stable

    @property
    def last_sample(self) -> Optional[EmotionSample]:
        return self._last_sample

    def ingest(self, sample: Optional[EmotionSample]) -> Optional[RecommendationRequest]:
        """Record one tick's sample; fire a request only on a stable-mood transition."""
        with self._lock:
            if sample is None:
                return None
            self._seq += 1
            sample = sample.model_copy(update={"seq": self._seq})
            self._last_sample = sample
            changed = self.tracker.observe(sample)
            if changed is None:
                return None
            return self.trigger.on_transition(changed)

    def ingest_frame(self, frame, classifier) -> Optional[RecommendationRequest]:
        """
        Classify a frame and ingest the result.

        A classifier failure is a dropped tick, never an error for the loop.
        """
        try:
            sample = classifier.classify(frame)
        except Exception:
            logger.exception("[session] classifier failed; skipping tick")
            return None
        return self.ingest(sample)

    def request_refresh(self) -> RecommendationRequest:
        with self._lock:
            return self.trigger.on_refresh(self.tracker.stable, self._last_sample)

    # ---- recommendation view ----
    def begin(self, request: RecommendationRequest) -> None:
        with self._lock:
            if not self.trigger.is_current(request):
                return
            self._view = RecommendationView(
                status="loading",
                emotion=request.emotion,
                token=request.token,
                tracks=list(self._view.tracks),
            )

    def apply_result(self, request: RecommendationRequest, tracks: List[TrackResult]) -> bool:
        """Apply a completed fetch if it answers the latest firing; stale ones are dropped."""
        with self._lock:
            if not self.trigger.is_current(request):
                logger.debug(f"[session] discard stale result token={request.token} "
                             f"latest={self.trigger.latest_token}")
                return False
            tracks = list(tracks)
            self._view = RecommendationView(
                status="ready" if tracks else "empty",
                emotion=request.emotion,
                token=request.token,
                tracks=tracks,
                message=None if tracks else "No songs found for this mood. Try refreshing.",
            )
            logger.info(f"[session] applied {len(tracks)} tracks for {request.emotion.value} token={request.token}")
            return True

    def apply_failure(self, request: RecommendationRequest, message: str) -> bool:
        with self._lock:
            if not self.trigger.is_current(request):
                logger.debug(f"[session] discard stale failure token={request.token}")
                return False
            self._view = RecommendationView(
                status="unavailable",
                emotion=request.emotion,
                token=request.token,
                message=message,
            )
            return True

    def view(self) -> RecommendationView:
        with self._lock:
            return self._view.model_copy(deep=True)
