"""
The closed emotion set and the per-emotion display tables.
"""
from __future__ import annotations
from enum import Enum
from typing import Dict, NamedTuple, Optional


class Emotion(str, Enum):
    HAPPY = "happy"
    SAD = "sad"
    ANGRY = "angry"
    NEUTRAL = "neutral"
    SURPRISED = "surprised"
    FEARFUL = "fearful"
    DISGUSTED = "disgusted"

    @classmethod
    def from_label(cls, raw: Optional[str]) -> Optional["Emotion"]:
        """
        Map a classifier label onto the closed set.

        DeepFace reports nouns ("surprise", "fear", "disgust") where the rest
        of the app uses adjectives; both spellings are accepted.
        """
        if not isinstance(raw, str):
            return None
        key = raw.strip().lower()
        return _ALIASES.get(key)


_ALIASES: Dict[str, Emotion] = {e.value: e for e in Emotion}
_ALIASES.update({
    "surprise": Emotion.SURPRISED,
    "fear": Emotion.FEARFUL,
    "disgust": Emotion.DISGUSTED,
})


class MoodProfile(NamedTuple):
    label: str
    description: str
    genres: tuple[str, ...]


MOOD_PROFILES: Dict[Emotion, MoodProfile] = {
    Emotion.HAPPY: MoodProfile(
        "Happy Vibes",
        "You're feeling cheerful and optimistic! We'll suggest upbeat, energetic songs that complement your mood.",
        ("Pop", "Dance", "Summer hits"),
    ),
    Emotion.SAD: MoodProfile(
        "Melancholy",
        "You seem a bit down today. We'll find some melodic, comforting tunes that might help lift your spirits.",
        ("Ballads", "Acoustic", "Indie"),
    ),
    Emotion.ANGRY: MoodProfile(
        "Intense",
        "You're feeling intense! We'll suggest tracks with powerful beats and energy to help you express yourself.",
        ("Rock", "Metal", "Punk"),
    ),
    Emotion.NEUTRAL: MoodProfile(
        "Balanced",
        "You're in a balanced state of mind. We'll recommend a mix of relaxing and moderately upbeat tracks.",
        ("Alternative", "Ambient", "Indie Pop"),
    ),
    Emotion.SURPRISED: MoodProfile(
        "Wide-eyed",
        "You look surprised! We'll find some unexpected and exciting tracks to match your mood.",
        ("Electronic", "Experimental", "Future Bass"),
    ),
    Emotion.FEARFUL: MoodProfile(
        "Calm Down",
        "You seem a bit anxious. We'll recommend some calming and reassuring music to help you relax.",
        ("Ambient", "Classical", "Lo-fi"),
    ),
    Emotion.DISGUSTED: MoodProfile(
        "Reset",
        "You're not impressed! We'll find some refreshing and cleansing tracks to reset your mood.",
        ("Jazz", "Classical", "Instrumental"),
    ),
}


def ensure_total(table: dict, name: str) -> None:
    """Fail at import time if a per-emotion table misses a label."""
    missing = [e.value for e in Emotion if e not in table]
    if missing:
        raise RuntimeError(f"{name} is missing entries for: {', '.join(missing)}")


ensure_total(MOOD_PROFILES, "MOOD_PROFILES")
