"""High-level entry points used by the web app and scripts."""

from __future__ import annotations

import asyncio
import logging

from cropscan.api import TranslationClient, WebhookClient
from cropscan.config.settings import Settings, get_settings
from cropscan.imgproc import ImageBlob, ImageNormalizer
from cropscan.languages import ReportLanguage

logger = logging.getLogger(__name__)


def _megabytes(size: int) -> str:
    return f"{size / 1024 / 1024:.2f} MB"


class AnalysisService:
    """Normalizes uploads, submits them for analysis, and translates reports."""

    def __init__(
        self,
        settings: Settings,
        *,
        normalizer: ImageNormalizer | None = None,
        webhook: WebhookClient | None = None,
        translator: TranslationClient | None = None,
    ) -> None:
        self._settings = settings
        self._normalizer = normalizer or ImageNormalizer(settings.max_image_edge, settings.jpeg_quality)
        self._webhook = webhook or WebhookClient(settings)
        self._translator = translator or TranslationClient(settings)

    async def analyze_image(
        self,
        image: ImageBlob,
        language: ReportLanguage | str = ReportLanguage.ENGLISH,
    ) -> str:
        """Return the markdown report for ``image`` in ``language``.

        Normalization errors are raised as-is; they are never retried.
        """

        language = ReportLanguage.parse(language)
        logger.info("Original image size: %s", _megabytes(image.size))
        normalized = await asyncio.to_thread(self._normalizer.normalize, image)
        logger.info(
            "Compressed image size: %s (%dx%d)",
            _megabytes(normalized.size),
            normalized.width,
            normalized.height,
        )
        return await self._webhook.submit(normalized, language)

    async def translate_text(self, text: str, target_language: ReportLanguage | str) -> str:
        """Translate a report; the original text is returned when translation fails."""

        return await self._translator.translate(text, target_language)

    async def close(self) -> None:
        await self._webhook.close()
        await self._translator.close()


async def analyze_image(image: ImageBlob, language: ReportLanguage | str = ReportLanguage.ENGLISH) -> str:
    """One-shot analysis using the environment settings."""

    service = AnalysisService(get_settings())
    try:
        return await service.analyze_image(image, language)
    finally:
        await service.close()


async def translate_text(text: str, target_language: ReportLanguage | str) -> str:
    """One-shot translation using the environment settings."""

    if not text:
        return ""
    service = AnalysisService(get_settings())
    try:
        return await service.translate_text(text, target_language)
    finally:
        await service.close()
