"""
Backend Gateway - HTTP client for the analysis backend.

Wraps the two backend endpoints (GET /health, POST /analyze) and turns every
response or transport failure into a typed outcome. Nothing raised by httpx
escapes this module.
"""
import asyncio
import json
from typing import Optional

import httpx

from .config import ANALYZE_ENDPOINT, HEALTH_ENDPOINT, Settings, get_settings
from .models import AnalyzeOutcome, HealthOutcome
from .structured_logging import StructuredLogger

logger = StructuredLogger(__name__)


def encode_analyze_body(text: str) -> bytes:
    """JSON body for POST /analyze.

    ASCII-escaped, so text decoded with surrogateescape (e.g. non-UTF-8
    stdin) still encodes instead of raising UnicodeEncodeError.
    """
    return json.dumps({"text": text}).encode("ascii")


class BackendGateway:
    """Async client for the analysis backend."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
        retry_backoff: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        settings: Optional[Settings] = None,
    ):
        settings = settings or get_settings()
        self.base_url = (base_url or settings.api_url).rstrip("/")
        self.timeout = settings.timeout if timeout is None else timeout
        self.max_retries = settings.max_retries if max_retries is None else max(0, max_retries)
        self.retry_backoff = settings.retry_backoff if retry_backoff is None else retry_backoff
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(timeout=self.timeout, transport=transport)
        self.log = logger.bind(base_url=self.base_url)

    async def _send(self, method: str, path: str, **kwargs) -> httpx.Response:
        """Send one request, retrying transport errors up to max_retries times.

        HTTP error statuses are returned to the caller, never retried.
        """
        url = f"{self.base_url}{path}"
        attempt = 0
        while True:
            try:
                return await self.client.request(method, url, **kwargs)
            except httpx.TransportError as e:
                if attempt >= self.max_retries:
                    raise
                delay = self.retry_backoff * (2 ** attempt)
                attempt += 1
                self.log.info(
                    "Transport error, retrying",
                    method=method,
                    path=path,
                    error=repr(e),
                    attempt=attempt,
                    max_retries=self.max_retries,
                    delay_s=round(delay, 2),
                )
                await asyncio.sleep(delay)

    async def probe_health(self) -> HealthOutcome:
        """Classify backend reachability from GET /health."""
        try:
            response = await self._send("GET", HEALTH_ENDPOINT)
        except httpx.HTTPError as e:
            self.log.error("Backend health check failed", error=repr(e))
            return HealthOutcome.UNREACHABLE

        if not response.is_success:
            self.log.warning("Backend health check failed", status_code=response.status_code)
            return HealthOutcome.UNREACHABLE

        try:
            data = response.json()
        except ValueError:
            self.log.warning("Backend health body is not JSON", status_code=response.status_code)
            return HealthOutcome.DEGRADED

        status = data.get("status") if isinstance(data, dict) else None
        if status == "healthy":
            return HealthOutcome.HEALTHY
        self.log.warning("Backend reports degraded status", reported_status=status)
        return HealthOutcome.DEGRADED

    async def submit_analysis(self, text: str) -> AnalyzeOutcome:
        """POST the symptom text to /analyze and return the raw JSON payload."""
        try:
            response = await self._send(
                "POST",
                ANALYZE_ENDPOINT,
                content=encode_analyze_body(text),
                headers={"Content-Type": "application/json"},
            )
        except httpx.HTTPError as e:
            reason = f"Connection failed: {e!r}"
            self.log.error("Error analyzing symptoms", reason=reason)
            return AnalyzeOutcome.failure(reason)

        if not response.is_success:
            reason = f"HTTP error! status: {response.status_code}"
            self.log.error("Error analyzing symptoms", reason=reason, status_code=response.status_code)
            return AnalyzeOutcome.failure(reason, status_code=response.status_code)

        try:
            payload = response.json()
        except ValueError as e:
            reason = f"Invalid JSON response: {e}"
            self.log.error("Error analyzing symptoms", reason=reason, status_code=response.status_code)
            return AnalyzeOutcome.failure(reason, status_code=response.status_code)

        return AnalyzeOutcome.success(payload)

    async def aclose(self) -> None:
        """Close the HTTP client if this gateway created it."""
        if self._owns_client:
            await self.client.aclose()

    async def __aenter__(self) -> "BackendGateway":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
