"""
Data models for the Medical Dashboard analysis client.

Pydantic models describe the normalized analysis view; plain dataclasses
hold the gateway outcomes and the mutable session aggregate.
"""
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


# --- Analysis result ---

class Confidence(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"
    UNKNOWN = "Unknown"

    @classmethod
    def parse(cls, value: Any) -> "Confidence":
        """Case-insensitive match against the known levels; anything else is UNKNOWN."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return cls.UNKNOWN
        wanted = value.strip().lower()
        for level in cls:
            if level.value.lower() == wanted:
                return level
        return cls.UNKNOWN


class Diagnosis(BaseModel):
    condition: str
    confidence: Confidence = Confidence.UNKNOWN
    explanation: str = ""


class Article(BaseModel):
    title: str = "No title"
    url: str = "#"
    journal: str = "Unknown journal"


class Entities(BaseModel):
    symptoms: list[str] = Field(default_factory=list)
    conditions: list[str] = Field(default_factory=list)
    medications: list[str] = Field(default_factory=list)


class AnalysisResult(BaseModel):
    """Canonical output of one analysis, whether live or sample data.

    Field aliases carry the camelCase keys the dashboard view consumes.
    """
    model_config = ConfigDict(populate_by_name=True)

    entities: Entities = Field(default_factory=Entities)
    follow_up_questions: list[str] = Field(default_factory=list, alias="followUpQuestions")
    differential_diagnoses: list[Diagnosis] = Field(default_factory=list, alias="differentialDiagnoses")
    literature: list[Article] = Field(default_factory=list)

    def to_view(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


# --- Backend health ---

class BackendHealthStatus(str, Enum):
    CHECKING = "checking"
    CONNECTED = "connected"
    DEGRADED = "degraded"
    DISCONNECTED = "disconnected"

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]


_STATUS_LABELS = {
    BackendHealthStatus.CHECKING: "Checking...",
    BackendHealthStatus.CONNECTED: "Backend Connected",
    BackendHealthStatus.DEGRADED: "Backend Degraded",
    BackendHealthStatus.DISCONNECTED: "Backend Disconnected",
}


class HealthOutcome(str, Enum):
    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNREACHABLE = "unreachable"

    def to_status(self) -> BackendHealthStatus:
        if self is HealthOutcome.HEALTHY:
            return BackendHealthStatus.CONNECTED
        if self is HealthOutcome.DEGRADED:
            return BackendHealthStatus.DEGRADED
        return BackendHealthStatus.DISCONNECTED


# --- Analyze outcome ---

@dataclass(frozen=True)
class AnalyzeOutcome:
    """Result of one POST /analyze attempt.

    Exactly one of `payload` (on success) or `reason` (on failure) is meaningful.
    `status_code` is kept for diagnostics only.
    """
    ok: bool
    payload: Any = None
    reason: str = ""
    status_code: Optional[int] = None

    @classmethod
    def success(cls, payload: Any) -> "AnalyzeOutcome":
        return cls(ok=True, payload=payload)

    @classmethod
    def failure(cls, reason: str, status_code: Optional[int] = None) -> "AnalyzeOutcome":
        return cls(ok=False, reason=reason, status_code=status_code)


# --- Session ---

class SessionPhase(str, Enum):
    IDLE = "idle"
    PROBING = "probing"
    ANALYZING = "analyzing"
    READY = "ready"


@dataclass
class SessionState:
    """Single-session aggregate owned by AnalysisSession."""
    input_text: str = ""
    health: BackendHealthStatus = BackendHealthStatus.CHECKING
    in_flight: bool = False
    result: Optional[AnalysisResult] = None
    last_analyzed_at: Optional[datetime] = None
