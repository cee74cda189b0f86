"""
Single-frame emotion classification with DeepFace.
"""
# core/classifier.py
from __future__ import annotations
from typing import Dict, Optional
import logging

import cv2
import numpy as np

from core.emotions import Emotion
from core.models import EmotionSample

logger = logging.getLogger(__name__)


def decode_image(data: bytes) -> np.ndarray:
    """Decode an uploaded JPEG/PNG into a BGR frame."""
    buf = np.frombuffer(data or b"", dtype=np.uint8)
    frame = cv2.imdecode(buf, cv2.IMREAD_COLOR) if buf.size else None
    if frame is None:
        raise ValueError("Could not decode image data")
    return frame


def _best_label(blob: Dict) -> tuple[str, float]:
    # Prefer dominant_emotion; fall back to max-prob from dict
    if not isinstance(blob, dict):
        return "", 0.0
    probs = blob.get("emotion") if isinstance(blob.get("emotion"), dict) else {}
    dom = blob.get("dominant_emotion")
    if not (isinstance(dom, str) and dom) and probs:
        dom = max(probs, key=probs.get)
    if not dom:
        return "", 0.0
    # DeepFace reports percentages
    p = float(probs.get(dom, 100.0)) / 100.0 if probs else 1.0
    return dom, max(0.0, min(1.0, p))


class DeepFaceClassifier:
    """
    Detect exactly one face, then classify its expression.

    Returns None when no face (or more than one face) is found. DeepFace
    errors propagate to the caller.
    """
    def __init__(self, detector_backend: str = "opencv", min_face_size: int = 40):
        self.detector_backend = detector_backend
        self.min_face_size = int(min_face_size)

    def _faces(self, DeepFace, frame) -> list[dict]:
        dets = DeepFace.extract_faces(
            img_path=frame,
            detector_backend=self.detector_backend,
            enforce_detection=False,
            align=True,
        )
        faces = []
        for d in dets or []:
            fa = (d or {}).get("facial_area") or {}
            reg = {"x": int(fa.get("x", 0)), "y": int(fa.get("y", 0)),
                   "w": int(fa.get("w", 0)), "h": int(fa.get("h", 0))}
            if reg["w"] >= self.min_face_size and reg["h"] >= self.min_face_size:
                faces.append(reg)
        return faces

    def classify(self, frame) -> Optional[EmotionSample]:
        # Lazy import for easier testing and to avoid loading heavy stacks too early
        from deepface import DeepFace

        faces = self._faces(DeepFace, frame)
        if len(faces) != 1:
            logger.debug(f"[classifier] faces_detected={len(faces)}; no sample")
            return None

        reg = faces[0]
        x, y, w, h = reg["x"], reg["y"], reg["w"], reg["h"]
        chip = frame[y:y+h, x:x+w]
        res = DeepFace.analyze(
            chip if chip.size else frame,
            actions=["emotion"],
            enforce_detection=False,
            detector_backend="skip",
        )
        res = res if isinstance(res, list) else [res]
        raw, confidence = _best_label(res[0] if res else {})
        label = Emotion.from_label(raw)
        if label is None:
            logger.debug(f"[classifier] unmapped label {raw!r}; no sample")
            return None
        logger.debug(f"[classifier] region=({x},{y},{w},{h}) -> {label.value} p={confidence:.2f}")
        return EmotionSample(label=label, confidence=confidence)
