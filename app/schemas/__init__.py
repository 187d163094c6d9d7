from app.schemas.detection import (
    DetectionOutcome,
    DetectionResponse,
    HistoryDeleteResponse,
    HistoryResponse,
    HistoryRow,
    MediaAsset,
    ProbeAttempt,
    Verdict,
)

__all__ = [
    "DetectionOutcome",
    "DetectionResponse",
    "HistoryDeleteResponse",
    "HistoryResponse",
    "HistoryRow",
    "MediaAsset",
    "ProbeAttempt",
    "Verdict",
]
