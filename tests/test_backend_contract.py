"""
End-to-end tests against a stand-in FastAPI backend.

The stand-in exposes the same /health and /analyze routes as the analysis
service and is mounted in-process through httpx.ASGITransport.
"""
import sys
import os
import unittest
from datetime import datetime, timezone

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import httpx
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from medical_dashboard.config import Settings
from medical_dashboard.fallback import SAMPLE_ANALYSIS
from medical_dashboard.gateway import BackendGateway
from medical_dashboard.models import BackendHealthStatus, Confidence
from medical_dashboard.session import AnalysisSession


class AnalyzeRequest(BaseModel):
    text: str


def build_backend(status: str = "healthy", fail_analyze: bool = False) -> FastAPI:
    app = FastAPI()
    app.state.received = []

    @app.get("/health")
    async def health():
        return {"status": status}

    @app.post("/analyze")
    async def analyze(request: AnalyzeRequest):
        app.state.received.append(request.text)
        if fail_analyze:
            raise HTTPException(status_code=500, detail="Model not loaded")
        return {
            "entities": {
                "symptoms": ["Fever", "Headache"],
                "conditions": [],
                "medications": ["Ibuprofen"],
            },
            "suggested_questions": ["When did the fever start?"],
            "differential_diagnoses": [
                {"condition": "Influenza", "confidence": "high", "explanation": "Seasonal."},
            ],
            "literature": [{"title": "Influenza in Adults", "url": ""}],
        }

    return app


FIXED_NOW = datetime(2024, 3, 1, 9, 30, tzinfo=timezone.utc)


def make_session(app: FastAPI) -> AnalysisSession:
    gateway = BackendGateway(
        settings=Settings(api_url="http://backend.test"),
        transport=httpx.ASGITransport(app=app),
    )
    return AnalysisSession(gateway, clock=lambda: FIXED_NOW)


class TestBackendContract(unittest.IsolatedAsyncioTestCase):

    async def test_healthy_backend_round_trip(self):
        app = build_backend()
        session = make_session(app)
        try:
            self.assertEqual(await session.start(), BackendHealthStatus.CONNECTED)

            session.set_input("Fever and headache since yesterday")
            self.assertTrue(await session.submit())
        finally:
            await session.gateway.aclose()

        self.assertEqual(app.state.received, ["Fever and headache since yesterday"])
        result = session.state.result
        self.assertEqual(result.entities.symptoms, ["Fever", "Headache"])
        self.assertEqual(result.entities.medications, ["Ibuprofen"])
        self.assertEqual(result.follow_up_questions, ["When did the fever start?"])
        self.assertIs(result.differential_diagnoses[0].confidence, Confidence.HIGH)
        self.assertEqual(result.literature[0].url, "#")
        self.assertEqual(result.literature[0].journal, "Unknown journal")
        self.assertEqual(session.state.last_analyzed_at, FIXED_NOW)

    async def test_degraded_backend(self):
        session = make_session(build_backend(status="loading"))
        try:
            self.assertEqual(await session.start(), BackendHealthStatus.DEGRADED)
        finally:
            await session.gateway.aclose()

    async def test_analyze_error_falls_back(self):
        session = make_session(build_backend(fail_analyze=True))
        try:
            await session.start()
            session.set_input("chest pain")
            await session.submit()
        finally:
            await session.gateway.aclose()

        self.assertEqual(session.state.result, SAMPLE_ANALYSIS)
        self.assertEqual(session.state.health, BackendHealthStatus.CONNECTED)


if __name__ == "__main__":
    unittest.main()
