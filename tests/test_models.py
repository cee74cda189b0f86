import pytest
from pydantic import ValidationError

from core.emotions import Emotion, MOOD_PROFILES
from core.models import EmotionSample, TrackResult, RecommendationView

def test_models():
    s = EmotionSample(label="happy", confidence=0.7)
    assert s.label is Emotion.HAPPY
    t = TrackResult(id="1", name="n", artist="a", emotion="sad")
    assert t.preview_url is None
    v = RecommendationView()
    assert v.status == "idle" and v.tracks == []

def test_confidence_bounds_and_closed_set():
    with pytest.raises(ValidationError):
        EmotionSample(label="happy", confidence=1.5)
    with pytest.raises(ValidationError):
        EmotionSample(label="bored", confidence=0.5)

def test_emotion_aliases():
    assert Emotion.from_label("Surprise") is Emotion.SURPRISED
    assert Emotion.from_label("fear") is Emotion.FEARFUL
    assert Emotion.from_label("disgust") is Emotion.DISGUSTED
    assert Emotion.from_label("contempt") is None
    assert Emotion.from_label(None) is None

def test_mood_profiles_are_total():
    assert set(MOOD_PROFILES) == set(Emotion)
