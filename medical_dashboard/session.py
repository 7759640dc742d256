"""
Analysis session - lifecycle of one dashboard session.

AnalysisSession is the only writer of its SessionState. All transitions run
on one event loop; the in-flight flag is set before the first await, so
overlapping submit() calls dispatch at most one request.

Transitions:
  start()           -> probe /health once, set backend status
  refresh_health()  -> probe again, status only
  submit()          -> POST /analyze, assign normalized or sample result
  reset()           -> clear input, result and timestamp
"""
from datetime import datetime, timezone
from typing import Callable, Optional

from .fallback import get_sample_analysis
from .gateway import BackendGateway
from .models import AnalysisResult, BackendHealthStatus, SessionPhase, SessionState
from .normalizer import normalize
from .structured_logging import StructuredLogger, new_session_id

logger = StructuredLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AnalysisSession:
    """Single-user analysis session driven by external events."""

    def __init__(
        self,
        gateway: BackendGateway,
        state: Optional[SessionState] = None,
        clock: Callable[[], datetime] = _utcnow,
        session_id: Optional[str] = None,
    ):
        self.gateway = gateway
        self.state = state if state is not None else SessionState()
        self.clock = clock
        self.session_id = session_id or new_session_id()
        self.log = logger.bind(session_id=self.session_id)
        self._started = False

    # --- Derived views ---

    @property
    def phase(self) -> SessionPhase:
        if self.state.in_flight:
            return SessionPhase.ANALYZING
        if self.state.health is BackendHealthStatus.CHECKING:
            return SessionPhase.PROBING
        if self.state.result is not None:
            return SessionPhase.READY
        return SessionPhase.IDLE

    def snapshot(self) -> dict:
        """JSON-ready view of the session for the presentation layer."""
        state = self.state
        return {
            "inputText": state.input_text,
            "backendStatus": state.health.value,
            "backendStatusLabel": state.health.label,
            "isLoading": state.in_flight,
            "analysisResults": state.result.to_view() if state.result is not None else None,
            "lastAnalysisTime": state.last_analyzed_at.isoformat() if state.last_analyzed_at else None,
            "phase": self.phase.value,
        }

    def _log(self) -> StructuredLogger:
        """Session logger tagged with the current lifecycle state."""
        return self.log.bind(
            phase=self.phase.value,
            in_flight=self.state.in_flight,
            backend_status=self.state.health.value,
        )

    # --- Health ---

    async def start(self) -> BackendHealthStatus:
        """Startup probe. Runs once per session."""
        if self._started:
            return self.state.health
        self._started = True
        self._log().info("Session started", base_url=self.gateway.base_url)
        return await self.refresh_health()

    async def refresh_health(self) -> BackendHealthStatus:
        """Re-probe the backend; touches nothing but the health status."""
        outcome = await self.gateway.probe_health()
        self.state.health = outcome.to_status()
        self._log().info("Backend status updated", outcome=outcome.value)
        return self.state.health

    # --- Analysis ---

    def set_input(self, text: str) -> None:
        self.state.input_text = text

    async def submit(self) -> bool:
        """Analyze the current input.

        Returns False without side effects when the input is blank or a
        request is already in flight; True once a result has been assigned.
        """
        text = self.state.input_text
        if not text.strip():
            return False
        if self.state.in_flight:
            self._log().debug("Submit ignored, analysis already in flight")
            return False

        self.state.in_flight = True
        try:
            outcome = await self.gateway.submit_analysis(text)
            if outcome.ok:
                result = normalize(outcome.payload)
            else:
                self._log().warning(
                    "Analysis failed, using sample data",
                    reason=outcome.reason,
                    status_code=outcome.status_code,
                )
                result = get_sample_analysis()
            self._assign(result)
        finally:
            self.state.in_flight = False
        return True

    def _assign(self, result: AnalysisResult) -> None:
        self.state.result = result
        self.state.last_analyzed_at = self.clock()

    def reset(self) -> None:
        """Clear input, result and timestamp.

        A request already in flight is not cancelled; its result is still
        assigned when it completes.
        """
        self.state.input_text = ""
        self.state.result = None
        self.state.last_analyzed_at = None
