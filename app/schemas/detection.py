from datetime import datetime
from typing import Any, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

MediaKind = Literal["image", "video"]
VerdictLabel = Literal["Real", "Fake", "Unknown"]
ProbeOutcomeKind = Literal["success", "soft_failure", "hard_failure", "transport_error"]


class MediaAsset(BaseModel):
    """One uploaded file, owned by the request that carries it."""
    model_config = ConfigDict(frozen=True)

    data: bytes
    kind: MediaKind
    mime_type: str
    filename: str


class Verdict(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: VerdictLabel = "Unknown"
    confidence: float = 0.0
    provider_label: Optional[str] = None   # verbatim `result` text from the model


class ProbeAttempt(BaseModel):
    model_config = ConfigDict(frozen=True)

    candidate: str
    outcome: ProbeOutcomeKind
    status: Optional[int] = None
    body: Any = None
    error: Optional[str] = None     # transport error message

    def diagnostic(self) -> dict:
        """Per-candidate failure detail surfaced to operators."""
        if self.outcome == "transport_error":
            return {"url": self.candidate, "error": self.error}
        return {"url": self.candidate, "status": self.status, "data": self.body}


class DetectionOutcome(BaseModel):
    model_config = ConfigDict(frozen=True)

    filename: str
    verdict: Verdict
    media_kind: MediaKind
    raw_response: Any = None
    endpoint: Optional[str] = None
    id: Optional[Union[int, str]] = None
    created_at: Optional[datetime] = None


class DetectionResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    filename: str
    result: VerdictLabel
    confidence: float
    provider_label: Optional[str] = None
    file_type: MediaKind = Field(alias="fileType")   # key read by the web client
    raw: Any = None
    id: Optional[Union[int, str]] = None
    created_at: Optional[datetime] = None


class HistoryRow(BaseModel):
    id: Optional[Union[int, str]] = None
    file: Optional[str] = None
    result: Optional[str] = None
    confidence: Optional[float] = None
    created_at: Optional[datetime] = None


class HistoryResponse(BaseModel):
    data: List[HistoryRow] = Field(default_factory=list)


class HistoryDeleteResponse(BaseModel):
    deleted: bool
    data: Optional[List[HistoryRow]] = None
