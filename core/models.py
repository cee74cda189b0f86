"""
Pydantic data models for API IO and the live session.
"""
from __future__ import annotations
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Literal, Dict

from core.emotions import Emotion


class EmotionSample(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: Emotion
    confidence: float = Field(ge=0.0, le=1.0)
    seq: int = 0


class TrackResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    artist: str
    album: Optional[str] = None
    image_url: Optional[str] = None
    preview_url: Optional[str] = None
    emotion: Emotion


class RecommendationRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    emotion: Emotion
    token: int
    reason: Literal["transition", "refresh"] = "transition"


class Weather(BaseModel):
    temperature: int
    condition: str
    location: str
    icon: str


class RecommendationView(BaseModel):
    status: Literal["idle", "loading", "ready", "empty", "unavailable"] = "idle"
    emotion: Optional[Emotion] = None
    token: Optional[int] = None
    tracks: List[TrackResult] = Field(default_factory=list)
    message: Optional[str] = None


class DetectionResult(BaseModel):
    face_found: bool
    sample: Optional[EmotionSample] = None


# live model


class LiveStatus(BaseModel):
    running: bool
    started_at: float | None = None
    stable_mood: Optional[Emotion] = None
    mood_description: Optional[str] = None
    last_sample: Optional[EmotionSample] = None
    recommendations: RecommendationView = Field(default_factory=RecommendationView)


class ServiceStatus(BaseModel):
    message: str = "API Configuration Status"
    services: Dict[str, str]
    instructions: str
    timestamp: str
