"""
Decide when to issue a recommendation request, and for which emotion.
"""
from __future__ import annotations

import itertools
import logging
from typing import Optional

from core.emotions import Emotion
from core.errors import NoMoodDetected
from core.models import EmotionSample, RecommendationRequest

logger = logging.getLogger(__name__)


class RecommendationTrigger:
    """
    Issues firing tokens for stable-mood transitions and manual refreshes.

    Tokens strictly increase, so a consumer can discard a response whose
    request is no longer the latest one.
    """
    def __init__(self):
        self._tokens = itertools.count(1)
        self._latest: Optional[RecommendationRequest] = None

    @property
    def latest_token(self) -> Optional[int]:
        return self._latest.token if self._latest else None

    def is_current(self, request: RecommendationRequest) -> bool:
        return self._latest is not None and request.token == self._latest.token

    def on_transition(self, label: Emotion) -> RecommendationRequest:
        return self._fire(label, "transition")

    def on_refresh(self,
                   stable: Optional[Emotion],
                   last_raw: Optional[EmotionSample]) -> RecommendationRequest:
        """
        Manual refresh: stable mood first, then the latest raw sample.

        Raises:
            NoMoodDetected: nothing has been observed yet; no request is issued.
        """
        if stable is not None:
            return self._fire(stable, "refresh")
        if last_raw is not None:
            return self._fire(last_raw.label, "refresh")
        raise NoMoodDetected()

    def _fire(self, label: Emotion, reason: str) -> RecommendationRequest:
        request = RecommendationRequest(emotion=label, token=next(self._tokens), reason=reason)
        self._latest = request
        logger.debug(f"[trigger] fire token={request.token} emotion={label.value} reason={reason}")
        return request
