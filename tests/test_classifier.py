import sys, types

import cv2
import numpy as np
import pytest

from core.classifier import DeepFaceClassifier, decode_image
from core.emotions import Emotion


def fake_deepface(faces, analysis, calls=None):
    calls = calls if calls is not None else {"analyze": 0}

    class DF:
        @staticmethod
        def extract_faces(img_path=None, detector_backend=None, enforce_detection=None, align=None):
            return [{"facial_area": f} for f in faces]

        @staticmethod
        def analyze(*args, **kwargs):
            calls["analyze"] += 1
            return analysis

    return types.SimpleNamespace(DeepFace=DF)


FRAME = np.zeros((200, 200, 3), dtype=np.uint8)
ONE_FACE = [{"x": 10, "y": 10, "w": 80, "h": 80}]


def test_single_face_yields_sample(monkeypatch):
    analysis = [{"dominant_emotion": "surprise", "emotion": {"surprise": 72.5, "happy": 20.0}}]
    monkeypatch.setitem(sys.modules, "deepface", fake_deepface(ONE_FACE, analysis))
    s = DeepFaceClassifier().classify(FRAME)
    assert s.label == Emotion.SURPRISED
    assert s.confidence == pytest.approx(0.725)


def test_no_face_returns_none(monkeypatch):
    calls = {"analyze": 0}
    monkeypatch.setitem(sys.modules, "deepface", fake_deepface([], [], calls))
    assert DeepFaceClassifier().classify(FRAME) is None
    assert calls["analyze"] == 0


def test_multiple_faces_returns_none(monkeypatch):
    faces = ONE_FACE + [{"x": 100, "y": 100, "w": 60, "h": 60}]
    calls = {"analyze": 0}
    monkeypatch.setitem(sys.modules, "deepface", fake_deepface(faces, [], calls))
    assert DeepFaceClassifier().classify(FRAME) is None
    assert calls["analyze"] == 0


def test_tiny_faces_are_ignored(monkeypatch):
    faces = [{"x": 0, "y": 0, "w": 12, "h": 12}]
    monkeypatch.setitem(sys.modules, "deepface", fake_deepface(faces, []))
    assert DeepFaceClassifier(min_face_size=40).classify(FRAME) is None


def test_label_from_probabilities_only(monkeypatch):
    analysis = {"emotion": {"sad": 55.0, "neutral": 45.0}}
    monkeypatch.setitem(sys.modules, "deepface", fake_deepface(ONE_FACE, analysis))
    s = DeepFaceClassifier().classify(FRAME)
    assert s.label == Emotion.SAD and s.confidence == pytest.approx(0.55)


def test_unknown_label_is_no_sample(monkeypatch):
    analysis = [{"dominant_emotion": "contempt", "emotion": {"contempt": 90.0}}]
    monkeypatch.setitem(sys.modules, "deepface", fake_deepface(ONE_FACE, analysis))
    assert DeepFaceClassifier().classify(FRAME) is None


def test_decode_image_roundtrip():
    ok, buf = cv2.imencode(".png", np.full((8, 8, 3), 127, dtype=np.uint8))
    assert ok
    frame = decode_image(buf.tobytes())
    assert frame.shape == (8, 8, 3)


def test_decode_image_rejects_garbage():
    with pytest.raises(ValueError):
        decode_image(b"not an image")
    with pytest.raises(ValueError):
        decode_image(b"")
