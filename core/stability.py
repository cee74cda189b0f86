# core/stability.py
"""
Debounce per-tick emotion samples into a stable mood.

The tracker keeps a rolling window of the last N qualifying samples and only
moves to ``Stable(label)`` when one label holds a majority share of the
window. A label's share is measured against the window capacity, so leaving
the unset state needs at least ``ceil(threshold * N)`` agreeing samples.
"""
from __future__ import annotations

import logging
from collections import Counter, deque
from typing import Deque, Optional

from core.emotions import Emotion
from core.models import EmotionSample

logger = logging.getLogger(__name__)

DEFAULT_WINDOW = 5
DEFAULT_THRESHOLD = 0.6
DEFAULT_MIN_CONFIDENCE = 0.4


class StabilityTracker:
    """Majority-vote debouncer over a rolling window of emotion samples."""
    def __init__(self,
                 window_size: int = DEFAULT_WINDOW,
                 threshold: float = DEFAULT_THRESHOLD,
                 min_confidence: float = DEFAULT_MIN_CONFIDENCE):
        if int(window_size) < 1:
            raise ValueError(f"window_size must be >= 1, got {window_size}")
        if not (0.0 < float(threshold) <= 1.0):
            raise ValueError(f"threshold must be in (0, 1], got {threshold}")
        if not (0.0 <= float(min_confidence) <= 1.0):
            raise ValueError(f"min_confidence must be in [0, 1], got {min_confidence}")
        self.window_size = int(window_size)
        self.threshold = float(threshold)
        self.min_confidence = float(min_confidence)
        self._window: Deque[Emotion] = deque(maxlen=self.window_size)
        self._stable: Optional[Emotion] = None

    @property
    def stable(self) -> Optional[Emotion]:
        return self._stable

    @property
    def window(self) -> tuple[Emotion, ...]:
        return tuple(self._window)

    def reset(self) -> None:
        self._window.clear()
        self._stable = None

    def observe(self, sample: Optional[EmotionSample]) -> Optional[Emotion]:
        """
        Feed one tick's classifier output.

        - None (no face) and low-confidence samples contribute nothing
        - returns the new label when a transition fires, else None
        """
        if sample is None:
            return None
        if sample.confidence < self.min_confidence:
            logger.debug(f"[tracker] drop {sample.label.value} conf={sample.confidence:.2f}")
            return None

        self._window.append(sample.label)
        leader = self._majority()
        if leader is None or leader == self._stable:
            return None

        logger.info(f"[tracker] stable mood {self._stable and self._stable.value} -> {leader.value}")
        self._stable = leader
        return leader

    def _majority(self) -> Optional[Emotion]:
        ranked = Counter(self._window).most_common(2)
        if not ranked:
            return None
        label, count = ranked[0]
        if count / self.window_size < self.threshold:
            return None
        # threshold <= 0.5 lets two labels qualify at once; a tie is no majority
        if len(ranked) > 1 and ranked[1][1] == count:
            return None
        return label
