"""Shared fixtures for the test-suite."""

from __future__ import annotations

from io import BytesIO
from typing import Callable

import pytest
from PIL import Image

from cropscan.config.settings import Settings, get_settings


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> None:
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        endpoint_url="https://webhook.test/analyze",
        translation_api_key="test-key",
        translation_base_url="https://translate.test/v1",
        model_identifier="test-model",
    )


@pytest.fixture
def make_image() -> Callable[..., bytes]:
    def _make(width: int, height: int, fmt: str = "PNG", mode: str = "RGB") -> bytes:
        color = (40, 160, 60, 255) if mode == "RGBA" else (40, 160, 60)
        buffer = BytesIO()
        Image.new(mode, (width, height), color).save(buffer, format=fmt)
        return buffer.getvalue()

    return _make
