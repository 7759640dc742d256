"""
Response normalization for backend /analyze payloads.

The backend schema is loosely typed and uses snake_case keys
(suggested_questions, differential_diagnoses). normalize() maps whatever
arrives onto AnalysisResult and never raises.
"""
from typing import Any

from .models import AnalysisResult, Article, Confidence, Diagnosis, Entities

UNKNOWN_CONDITION = "Unknown condition"


def _string_list(value: Any) -> list[str]:
    """Keep the string elements of a list, in order."""
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]


def _text(value: Any, default: str) -> str:
    """Non-empty string or the default."""
    if isinstance(value, str) and value:
        return value
    return default


def _normalize_entities(value: Any) -> Entities:
    if not isinstance(value, dict):
        return Entities()
    return Entities(
        symptoms=_string_list(value.get("symptoms")),
        conditions=_string_list(value.get("conditions")),
        medications=_string_list(value.get("medications")),
    )


def _normalize_diagnoses(value: Any) -> list[Diagnosis]:
    if not isinstance(value, list):
        return []
    diagnoses = []
    for item in value:
        if not isinstance(item, dict):
            continue
        explanation = item.get("explanation")
        diagnoses.append(Diagnosis(
            condition=_text(item.get("condition"), UNKNOWN_CONDITION),
            confidence=Confidence.parse(item.get("confidence")),
            explanation=explanation if isinstance(explanation, str) else "",
        ))
    return diagnoses


def _normalize_article(item: Any) -> Article:
    if not isinstance(item, dict):
        return Article()
    defaults = Article()
    return Article(
        title=_text(item.get("title"), defaults.title),
        url=_text(item.get("url"), defaults.url),
        journal=_text(item.get("journal"), defaults.journal),
    )


def normalize(raw: Any) -> AnalysisResult:
    """Map a raw backend payload onto a fully-populated AnalysisResult."""
    if not isinstance(raw, dict):
        return AnalysisResult()

    literature = raw.get("literature")
    return AnalysisResult(
        entities=_normalize_entities(raw.get("entities")),
        follow_up_questions=_string_list(raw.get("suggested_questions")),
        differential_diagnoses=_normalize_diagnoses(raw.get("differential_diagnoses")),
        literature=[_normalize_article(a) for a in literature] if isinstance(literature, list) else [],
    )
