"""
Error taxonomy shared by the providers, the live loop and the API layer.

Each error carries a ``kind`` so callers can tell "not configured" apart from
"provider is down" without parsing messages.
"""
from __future__ import annotations


class MoodifyError(Exception):
    kind = "error"

    def __init__(self, message: str, details: str | None = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_detail(self) -> dict:
        detail = {"kind": self.kind, "message": self.message}
        if self.details:
            detail["details"] = self.details
        return detail


class ConfigurationError(MoodifyError):
    """Provider credentials are missing or still the placeholder values."""
    kind = "configuration"


class ProviderAuthError(MoodifyError):
    kind = "authentication"


class ProviderError(MoodifyError):
    """The provider answered with an error, or could not be reached."""
    kind = "provider"


class RecommendationsUnavailable(MoodifyError):
    kind = "recommendations_unavailable"


class NoMoodDetected(MoodifyError):
    kind = "no_mood"

    def __init__(self, message: str = "No emotion detected. Look at the camera to detect your mood first."):
        super().__init__(message)
