"""
Camera frame sampling and the tick scheduler that drives it.
"""
from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

import cv2
import numpy as np

logger = logging.getLogger(__name__)


class FrameSampler:
    """Reads one frame per tick from a camera; the only reader of the device."""
    def __init__(self, camera_index: int = 0):
        self.camera_index = camera_index
        self._cap = None

    def _ensure_open(self) -> bool:
        if self._cap is None:
            logger.debug(f"[sampler] open camera index={self.camera_index}")
            self._cap = cv2.VideoCapture(self.camera_index)
        if not self._cap.isOpened():
            # permission pending / device busy: retry on the next tick
            self._cap.release()
            self._cap = None
            return False
        return True

    def sample(self) -> Optional[np.ndarray]:
        """Return the current frame, or None when the source is not producing frames."""
        if not self._ensure_open():
            return None
        ok, frame = self._cap.read()
        if not ok or frame is None or getattr(frame, "size", 0) == 0:
            return None
        return frame

    def release(self) -> None:
        if self._cap is not None:
            self._cap.release()
            self._cap = None


class TickScheduler:
    """Calls ``tick`` repeatedly until ``cancel`` is set."""
    def run(self, tick: Callable[[], None], cancel: threading.Event) -> None:
        raise NotImplementedError


class IntervalScheduler(TickScheduler):
    def __init__(self, interval: float = 1.0):
        self.interval = max(0.01, float(interval))

    def run(self, tick: Callable[[], None], cancel: threading.Event) -> None:
        while not cancel.is_set():
            tick()
            # Event.wait returns early once stop() sets the event
            cancel.wait(self.interval)
