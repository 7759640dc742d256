"""Tests for the command-line entry point."""
import io
import json
import logging
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import httpx
import pytest

from medical_dashboard import __main__ as cli
from medical_dashboard.config import Settings
from medical_dashboard.fallback import SAMPLE_ANALYSIS
from medical_dashboard.gateway import BackendGateway


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def backend(monkeypatch):
    """Route the CLI's gateway to an in-memory handler; returns the request log."""
    requests = []
    state = {"analyze_status": 200}

    def handler(request):
        requests.append(request)
        if request.url.path == "/health":
            return httpx.Response(200, json={"status": "healthy"})
        if state["analyze_status"] != 200:
            return httpx.Response(state["analyze_status"])
        return httpx.Response(200, json={"entities": {"symptoms": ["Cough"]}})

    def make_gateway(settings):
        return BackendGateway(settings=settings, transport=httpx.MockTransport(handler))

    monkeypatch.setattr(cli, "get_settings", lambda: Settings(log_json=False))
    monkeypatch.setattr(cli, "BackendGateway", make_gateway)
    return requests, state


class TestCli:

    def test_health(self, backend, capsys):
        assert cli.main(["health"]) == 0
        output = json.loads(capsys.readouterr().out)
        assert output == {"backendStatus": "connected", "backendStatusLabel": "Backend Connected"}

    def test_analyze(self, backend, capsys):
        requests, _ = backend
        assert cli.main(["analyze", "dry cough for a week"]) == 0
        output = json.loads(capsys.readouterr().out)
        assert output["analysisResults"]["entities"]["symptoms"] == ["Cough"]
        assert output["inputText"] == "dry cough for a week"
        assert output["phase"] == "ready"
        assert json.loads(requests[-1].content) == {"text": "dry cough for a week"}

    def test_analyze_failure_prints_sample(self, backend, capsys):
        _, state = backend
        state["analyze_status"] = 500
        cli.main(["analyze", "fever"])
        output = json.loads(capsys.readouterr().out)
        assert output["analysisResults"] == SAMPLE_ANALYSIS.to_view()
        assert output["backendStatus"] == "connected"

    def test_analyze_stdin(self, backend, capsys, monkeypatch):
        requests, _ = backend
        monkeypatch.setattr(sys, "stdin", io.StringIO("rash on both arms\n"))
        cli.main(["analyze", "-"])
        assert json.loads(requests[-1].content) == {"text": "rash on both arms\n"}

    def test_blank_input(self, backend, capsys):
        requests, _ = backend
        cli.main(["analyze", "   "])
        captured = capsys.readouterr()
        assert "Nothing to analyze" in captured.err
        assert json.loads(captured.out)["analysisResults"] is None
        assert all(r.url.path == "/health" for r in requests)

    def test_api_url_option(self, backend, capsys):
        requests, _ = backend
        cli.main(["--api-url", "http://other.test/", "health"])
        assert str(requests[-1].url) == "http://other.test/health"

    def test_command_required(self):
        with pytest.raises(SystemExit):
            cli.main([])
