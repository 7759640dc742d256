"""
Sample analysis served when the backend /analyze call fails.

Keeps the dashboard renderable with no backend running (demo mode).
"""
from .models import AnalysisResult, Article, Confidence, Diagnosis, Entities

SAMPLE_ANALYSIS = AnalysisResult(
    entities=Entities(
        symptoms=["Fever", "Headache", "Fatigue", "Loss of appetite"],
        conditions=["Viral infection", "Dehydration"],
        medications=["Ibuprofen", "Acetaminophen"],
    ),
    follow_up_questions=[
        "How long have you been experiencing these symptoms?",
        "Have you had any recent travel or exposure to sick individuals?",
        "Are you experiencing any gastrointestinal symptoms?",
        "What medications are you currently taking?",
    ],
    differential_diagnoses=[
        Diagnosis(
            condition="Viral Upper Respiratory Infection",
            confidence=Confidence.HIGH,
            explanation="Common viral illness with typical symptoms including fever, headache, and fatigue.",
        ),
        Diagnosis(
            condition="Migraine",
            confidence=Confidence.MEDIUM,
            explanation="Severe headache with associated symptoms, though fever is atypical.",
        ),
        Diagnosis(
            condition="COVID-19",
            confidence=Confidence.LOW,
            explanation="Consider testing if symptoms persist or worsen.",
        ),
    ],
    literature=[
        Article(
            title="Management of Acute Viral Upper Respiratory Infections in Adults",
            url="https://pubmed.ncbi.nlm.nih.gov/sample1",
            journal="JAMA Internal Medicine",
        ),
        Article(
            title="Evidence-Based Approach to Fever Management in Adults",
            url="https://pubmed.ncbi.nlm.nih.gov/sample2",
            journal="American Family Physician",
        ),
    ],
)


def get_sample_analysis() -> AnalysisResult:
    """Fresh copy of SAMPLE_ANALYSIS; callers may mutate it freely."""
    return SAMPLE_ANALYSIS.model_copy(deep=True)
