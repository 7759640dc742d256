"""
Runtime configuration for the Medical Dashboard client.

Values come from the environment (optionally a .env file) and are read once
per process through get_settings().
"""
import logging
import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:8000"
DEFAULT_TIMEOUT = 120.0
DEFAULT_RETRY_BACKOFF = 0.5

HEALTH_ENDPOINT = "/health"
ANALYZE_ENDPOINT = "/analyze"


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError:
        logger.warning(f"Invalid {name}={value!r}, using default {default}")
        return default


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return max(0, int(value))
    except ValueError:
        logger.warning(f"Invalid {name}={value!r}, using default {default}")
        return default


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    api_url: str = DEFAULT_API_URL
    timeout: float = DEFAULT_TIMEOUT
    max_retries: int = 0  # single attempt per call
    retry_backoff: float = DEFAULT_RETRY_BACKOFF
    log_level: str = "INFO"
    log_json: bool = True

    @property
    def health_url(self) -> str:
        return f"{self.api_url}{HEALTH_ENDPOINT}"

    @property
    def analyze_url(self) -> str:
        return f"{self.api_url}{ANALYZE_ENDPOINT}"


def load_settings() -> Settings:
    """Build Settings from the current environment."""
    load_dotenv()
    api_url = (os.getenv("MEDICAL_API_URL") or DEFAULT_API_URL).strip().rstrip("/")
    return Settings(
        api_url=api_url or DEFAULT_API_URL,
        timeout=_env_float("MEDICAL_API_TIMEOUT", DEFAULT_TIMEOUT),
        max_retries=_env_int("MEDICAL_API_MAX_RETRIES", 0),
        retry_backoff=_env_float("MEDICAL_API_RETRY_BACKOFF", DEFAULT_RETRY_BACKOFF),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        log_json=_env_bool("LOG_JSON", True),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Settings resolved once at process start."""
    return load_settings()
