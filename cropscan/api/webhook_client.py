"""Async client for the image analysis webhook."""

from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Union

import httpx

from cropscan.config.settings import Settings
from cropscan.imgproc.normalize import NormalizedImage
from cropscan.languages import ReportLanguage

logger = logging.getLogger(__name__)

NO_ERROR_BODY = "(no error body)"


class AnalysisError(RuntimeError):
    """Raised when the analysis webhook does not produce a report."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class FatalAnalysisError(AnalysisError):
    """The webhook rejected the request (4xx); repeating it will not help."""


class RetryableAnalysisError(AnalysisError):
    """A transient failure: 5xx, transport error or empty success body."""


class RetriesExhaustedError(AnalysisError):
    """Every attempt ended in a retryable failure."""

    def __init__(self, attempts: int, last_error: AnalysisError | None) -> None:
        self.attempts = attempts
        self.last_error = last_error
        reason = str(last_error) if last_error else "Unknown error"
        super().__init__(
            f"Failed to get a response from the analysis service after {attempts} attempts. "
            f"The service may be temporarily unavailable. Last error: {reason}",
            status_code=last_error.status_code if last_error else None,
        )


@dataclass(frozen=True, slots=True)
class Success:
    report_text: str


@dataclass(frozen=True, slots=True)
class RetryableFailure:
    error: RetryableAnalysisError


@dataclass(frozen=True, slots=True)
class FatalFailure:
    error: FatalAnalysisError


AttemptOutcome = Union[Success, RetryableFailure, FatalFailure]


@dataclass(frozen=True, slots=True)
class StructuredText:
    """JSON object carrying the report in its ``text`` field."""

    text: str


@dataclass(frozen=True, slots=True)
class RawText:
    """Body that is not JSON; used verbatim as the report."""

    text: str


@dataclass(frozen=True, slots=True)
class UnexpectedPayload:
    """Valid JSON without a string ``text`` field."""

    payload: Any


BodyDecodeResult = Union[StructuredText, RawText, UnexpectedPayload]


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Invalid JSON constant: {name}")


def decode_report_body(body: str) -> BodyDecodeResult:
    """Interpret a non-empty success body from the webhook."""

    try:
        payload = json.loads(body, parse_constant=_reject_constant)
    except ValueError:
        return RawText(body)
    if isinstance(payload, dict) and isinstance(payload.get("text"), str):
        return StructuredText(payload["text"])
    return UnexpectedPayload(payload)


def report_from_body(body: str) -> str:
    """Return the report text for a non-empty success body."""

    decoded = decode_report_body(body)
    if isinstance(decoded, StructuredText):
        return decoded.text
    if isinstance(decoded, RawText):
        logger.warning("Response was not valid JSON, treating as plain text.")
        return decoded.text
    logger.warning("Unexpected webhook response structure, no 'text' field: %s", decoded.payload)
    return (
        "Could not find analysis text in the response. The service returned:\n\n"
        f"{json.dumps(decoded.payload, indent=2, ensure_ascii=False)}"
    )


def classify_response(status_code: int, reason: str, body: str) -> AttemptOutcome:
    """Map one HTTP response onto the retry state machine."""

    if 400 <= status_code < 500:
        return FatalFailure(
            FatalAnalysisError(
                f"Analysis service rejected the request: {status_code} {reason} - {body or NO_ERROR_BODY}",
                status_code=status_code,
            ),
        )
    if not 200 <= status_code < 300:
        return RetryableFailure(
            RetryableAnalysisError(
                f"Webhook request failed: {status_code} {reason} - {body or NO_ERROR_BODY}",
                status_code=status_code,
            ),
        )
    if not body:
        return RetryableFailure(
            RetryableAnalysisError(
                "The analysis service returned a successful but empty response.",
                status_code=status_code,
            ),
        )
    return Success(report_from_body(body))


def backoff_delay_ms(attempt: int, initial_delay_ms: int) -> int:
    """Delay to wait after failed ``attempt`` (1-based) before the next one."""

    return initial_delay_ms * 2 ** (attempt - 1)


class WebhookClient:
    """Posts normalized images to the analysis webhook with bounded retries."""

    def __init__(
        self,
        settings: Settings,
        *,
        http_client: httpx.AsyncClient | None = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        if settings.max_retries < 1:
            raise ValueError("max_retries must be at least 1.")
        self._settings = settings
        self._client = http_client or httpx.AsyncClient(timeout=settings.request_timeout)
        self._sleep = sleep

    async def close(self) -> None:
        """Close the underlying HTTP client."""

        await self._client.aclose()

    async def submit(self, image: NormalizedImage, language: ReportLanguage = ReportLanguage.ENGLISH) -> str:
        """Send ``image`` for analysis and return the markdown report."""

        files = {"image": (image.filename, image.data, image.media_type)}
        data = {"language": ReportLanguage.parse(language).value}
        max_retries = self._settings.max_retries
        last_error: RetryableAnalysisError | None = None

        for attempt in range(1, max_retries + 1):
            if attempt > 1:
                logger.info("Analysis attempt %d...", attempt)
            outcome = await self._attempt(files, data)

            if isinstance(outcome, Success):
                return outcome.report_text
            if isinstance(outcome, FatalFailure):
                logger.error("Attempt %d rejected: %s", attempt, outcome.error)
                raise outcome.error

            last_error = outcome.error
            logger.error("Attempt %d failed: %s", attempt, last_error)
            if attempt < max_retries:
                delay_ms = backoff_delay_ms(attempt, self._settings.initial_delay_ms)
                logger.info("Retrying in %dms...", delay_ms)
                await self._sleep(delay_ms / 1000)

        raise RetriesExhaustedError(max_retries, last_error) from last_error

    async def _attempt(self, files: dict[str, tuple[str, bytes, str]], data: dict[str, str]) -> AttemptOutcome:
        try:
            response = await self._client.post(self._settings.endpoint_url, files=files, data=data)
        except httpx.TransportError as exc:
            return RetryableFailure(RetryableAnalysisError(f"Webhook request failed: {type(exc).__name__}: {exc}"))
        return classify_response(response.status_code, response.reason_phrase, response.text)
