"""
Detection error taxonomy.

Route handlers translate these into HTTPException; the detection core never
raises HTTPException itself. A response the normalizer cannot read is not an
error; it degrades to an Unknown verdict.
"""

from typing import Optional

from app.schemas.detection import ProbeAttempt


class DetectionError(Exception):
    """Base class for every classified detection failure."""


class ConfigurationError(DetectionError):
    """A required setting (the Gemini credential) is missing."""


class UnsupportedMediaError(DetectionError):
    def __init__(self, mime_type: str):
        super().__init__(f"Unsupported media type: {mime_type or 'unknown'}")
        self.mime_type = mime_type


class UpstreamError(DetectionError):
    """Carries the probe attempts that led to the failure."""

    def __init__(self, message: str, attempts: list[ProbeAttempt]):
        super().__init__(message)
        self.attempts = list(attempts)

    @property
    def details(self) -> list[dict]:
        return [attempt.diagnostic() for attempt in self.attempts]


class UpstreamAuthError(UpstreamError):
    def __init__(self, attempts: list[ProbeAttempt]):
        last = attempts[-1]
        super().__init__(
            f"Gemini rejected the credential at {last.candidate} (status {last.status})",
            attempts,
        )
        self.candidate = last.candidate
        self.status: Optional[int] = last.status


class UpstreamExhaustedError(UpstreamError):
    def __init__(self, attempts: list[ProbeAttempt], budget_exceeded: bool = False):
        message = "All Gemini endpoints failed"
        if budget_exceeded:
            message += " (probe time budget exhausted)"
        super().__init__(message, attempts)
        self.budget_exceeded = budget_exceeded
