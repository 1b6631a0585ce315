"""Application configuration loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

DEFAULT_ENDPOINT_URL = (
    "https://belva-subarid-desiree.ngrok-free.dev/webhook-test/4dc9e45d-c64e-4a07-80b6-e320f34df0a7"
)
DEFAULT_TRANSLATION_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"


def _load_env_file(path: str = ".env") -> None:
    """Populate os.environ from the provided .env file if it exists."""

    env_path = Path(path)
    if not env_path.exists():
        return

    for line in env_path.read_text(encoding="utf-8").splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#") or "=" not in stripped:
            continue
        key, value = stripped.split("=", 1)
        os.environ.setdefault(key.strip(), value.strip())


@dataclass(frozen=True, slots=True)
class Settings:
    """Endpoint, retry and image parameters shared by the analysis clients."""

    environment: str = "dev"
    log_level: str = "INFO"

    endpoint_url: str = DEFAULT_ENDPOINT_URL
    max_retries: int = 3
    initial_delay_ms: int = 1000
    max_image_edge: int = 1024
    jpeg_quality: float = 0.7
    request_timeout: float = 60.0

    translation_api_key: str = ""
    translation_base_url: str = DEFAULT_TRANSLATION_BASE_URL
    model_identifier: str = "gemini-3-flash-preview"


def _build_settings() -> Settings:
    _load_env_file()

    return Settings(
        environment=os.getenv("ENVIRONMENT", "dev"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        endpoint_url=os.getenv("ANALYSIS_ENDPOINT_URL", DEFAULT_ENDPOINT_URL),
        max_retries=int(os.getenv("ANALYSIS_MAX_RETRIES", "3")),
        initial_delay_ms=int(os.getenv("ANALYSIS_INITIAL_DELAY_MS", "1000")),
        max_image_edge=int(os.getenv("ANALYSIS_MAX_IMAGE_EDGE", "1024")),
        jpeg_quality=float(os.getenv("ANALYSIS_JPEG_QUALITY", "0.7")),
        request_timeout=float(os.getenv("ANALYSIS_REQUEST_TIMEOUT", "60")),
        translation_api_key=os.getenv("TRANSLATION_API_KEY", os.getenv("API_KEY", "")),
        translation_base_url=os.getenv("TRANSLATION_BASE_URL", DEFAULT_TRANSLATION_BASE_URL),
        model_identifier=os.getenv("TRANSLATION_MODEL", "gemini-3-flash-preview"),
    )


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance to avoid re-reading configuration."""

    return _build_settings()
