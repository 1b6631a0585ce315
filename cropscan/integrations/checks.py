"""Connectivity checks for the analysis webhook and the translation model."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Awaitable, Callable

import httpx

from cropscan.api import TranslationClient
from cropscan.config.settings import get_settings


@dataclass(slots=True)
class IntegrationCheckResult:
    """Structured result describing the integration check outcome."""

    name: str
    success: bool
    message: str


async def _run_check(
    name: str,
    factory: Callable[[], Awaitable[bool]],
    success_message: str,
) -> IntegrationCheckResult:
    try:
        result = await factory()
    except Exception as exc:
        return IntegrationCheckResult(name=name, success=False, message=str(exc) or type(exc).__name__)

    if result:
        return IntegrationCheckResult(name=name, success=True, message=success_message)
    return IntegrationCheckResult(
        name=name,
        success=False,
        message="Service responded with non-success status.",
    )


async def check_webhook() -> IntegrationCheckResult:
    """Send an OPTIONS request to the analysis webhook."""

    settings = get_settings()

    async def _ping() -> bool:
        async with httpx.AsyncClient(timeout=settings.request_timeout) as client:
            response = await client.options(settings.endpoint_url)
        return response.status_code < 500

    return await _run_check(
        name="Analysis webhook",
        factory=_ping,
        success_message="Analysis webhook is reachable.",
    )


async def check_translation() -> IntegrationCheckResult:
    """Ping the translation model provider and return the result."""

    client = TranslationClient(get_settings())

    async def _ping() -> bool:
        try:
            return await client.ping()
        finally:
            await client.close()

    return await _run_check(
        name="Translation",
        factory=_ping,
        success_message="Translation API is reachable.",
    )


async def run_all_checks() -> list[IntegrationCheckResult]:
    """Execute all integration checks concurrently."""

    return list(await asyncio.gather(check_webhook(), check_translation()))
