"""
Medical Dashboard - analysis client for a remote clinical NLP backend.

Submits free-text symptoms to the backend, normalizes the response into an
AnalysisResult and tracks backend health for the dashboard.
"""
from .fallback import SAMPLE_ANALYSIS, get_sample_analysis
from .gateway import BackendGateway
from .models import (
    AnalysisResult,
    AnalyzeOutcome,
    Article,
    BackendHealthStatus,
    Confidence,
    Diagnosis,
    Entities,
    HealthOutcome,
    SessionPhase,
    SessionState,
)
from .normalizer import normalize
from .session import AnalysisSession

__version__ = "0.1.0"

__all__ = [
    "AnalysisResult",
    "AnalysisSession",
    "AnalyzeOutcome",
    "Article",
    "BackendGateway",
    "BackendHealthStatus",
    "Confidence",
    "Diagnosis",
    "Entities",
    "HealthOutcome",
    "SAMPLE_ANALYSIS",
    "SessionPhase",
    "SessionState",
    "get_sample_analysis",
    "normalize",
]
