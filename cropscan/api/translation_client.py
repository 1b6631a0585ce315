"""Report translation through an OpenAI-compatible chat endpoint."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Union

from openai import AsyncOpenAI

from cropscan.config.settings import Settings
from cropscan.languages import ReportLanguage

logger = logging.getLogger(__name__)


class TranslationError(RuntimeError):
    """Raised internally when the model returns nothing usable."""


@dataclass(frozen=True, slots=True)
class Translated:
    text: str


@dataclass(frozen=True, slots=True)
class DegradedOriginal:
    """Original text handed back because translation failed."""

    text: str
    reason: str


TranslationOutcome = Union[Translated, DegradedOriginal]


def build_translation_prompt(text: str, language: ReportLanguage) -> str:
    """Compose the instruction sent to the model."""

    target = language.value
    return (
        f"Translate the following text to {target}. "
        "Do not translate technical terms, botanical names, or proper nouns "
        f"unless it is natural to do so in {target}. "
        "Maintain the original markdown formatting (like **bold** text):"
        f"\n\n---\n\n{text}"
    )


class TranslationClient:
    """Translates analysis reports, falling back to the source text on failure."""

    def __init__(self, settings: Settings, *, openai_client: Any | None = None) -> None:
        self._settings = settings
        self._client = openai_client

    def _openai(self) -> Any:
        """Build the OpenAI client on first use; a missing key fails here."""

        if self._client is None:
            self._client = AsyncOpenAI(
                api_key=self._settings.translation_api_key or None,
                base_url=self._settings.translation_base_url.rstrip("/"),
                timeout=self._settings.request_timeout,
            )
        return self._client

    async def translate(self, text: str, target_language: ReportLanguage | str) -> str:
        """Return ``text`` in ``target_language``, or unchanged if that fails."""

        outcome = await self.translate_outcome(text, target_language)
        return outcome.text

    async def translate_outcome(self, text: str, target_language: ReportLanguage | str) -> TranslationOutcome:
        """Like :meth:`translate` but reports whether the result is degraded."""

        if not text:
            return Translated("")

        try:
            language = ReportLanguage.parse(target_language)
            response = await self._openai().chat.completions.create(
                model=self._settings.model_identifier,
                messages=[{"role": "user", "content": build_translation_prompt(text, language)}],
            )
            translated = self._first_choice_content(response)
            if not translated:
                raise TranslationError("Translation service returned an empty response.")
        except Exception as exc:
            logger.error("Error translating text to %s: %s", target_language, exc)
            return DegradedOriginal(text, str(exc))
        return Translated(translated)

    async def ping(self) -> bool:
        """Return ``True`` if the upstream service responds to a model listing call."""

        models = await self._openai().models.list()
        return bool(models.data)

    async def close(self) -> None:
        """Release HTTP resources."""

        if self._client is not None:
            await self._client.close()

    @staticmethod
    def _first_choice_content(response: Any) -> str | None:
        choices = getattr(response, "choices", None) or []
        if not choices:
            return None
        message = getattr(choices[0], "message", None)
        return getattr(message, "content", None)
