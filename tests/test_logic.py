"""Tests for the analysis service that ties the clients together."""

from __future__ import annotations

import pytest
import pytest_mock

from cropscan import logic
from cropscan.api import FatalAnalysisError, TranslationClient, WebhookClient
from cropscan.config.settings import Settings
from cropscan.imgproc import DecodeError, ImageBlob, NormalizedImage
from cropscan.languages import ReportLanguage
from cropscan.logic import AnalysisService


@pytest.fixture
def webhook(mocker: pytest_mock.MockerFixture):
    client = mocker.create_autospec(WebhookClient, instance=True)
    client.submit.return_value = "## Healthy leaf"
    return client


@pytest.fixture
def translator(mocker: pytest_mock.MockerFixture):
    client = mocker.create_autospec(TranslationClient, instance=True)
    client.translate.return_value = "## স্বাস্থ্যকর পাতা"
    return client


@pytest.mark.asyncio
async def test_analyze_image_submits_normalized_jpeg(settings: Settings, webhook, translator, make_image) -> None:
    service = AnalysisService(settings, webhook=webhook, translator=translator)
    blob = ImageBlob(make_image(3000, 2000), "leaf.png", "image/png")

    report = await service.analyze_image(blob, "Hindi")

    assert report == "## Healthy leaf"
    submitted, language = webhook.submit.await_args.args
    assert isinstance(submitted, NormalizedImage)
    assert (submitted.width, submitted.height) == (1024, 683)
    assert submitted.filename == "leaf.jpg"
    assert language is ReportLanguage.HINDI


@pytest.mark.asyncio
async def test_decode_errors_are_not_submitted(settings: Settings, webhook, translator) -> None:
    service = AnalysisService(settings, webhook=webhook, translator=translator)

    with pytest.raises(DecodeError):
        await service.analyze_image(ImageBlob(b"garbage", "leaf.jpg"))

    webhook.submit.assert_not_awaited()


@pytest.mark.asyncio
async def test_fatal_errors_propagate(settings: Settings, webhook, translator, make_image) -> None:
    webhook.submit.side_effect = FatalAnalysisError("Analysis service rejected the request: 413", 413)
    service = AnalysisService(settings, webhook=webhook, translator=translator)

    with pytest.raises(FatalAnalysisError, match="413"):
        await service.analyze_image(ImageBlob(make_image(50, 50), "leaf.png"))


@pytest.mark.asyncio
async def test_translate_and_close_delegate(settings: Settings, webhook, translator) -> None:
    service = AnalysisService(settings, webhook=webhook, translator=translator)

    assert await service.translate_text("## Healthy leaf", ReportLanguage.BENGALI) == "## স্বাস্থ্যকর পাতা"
    await service.close()

    translator.translate.assert_awaited_once_with("## Healthy leaf", ReportLanguage.BENGALI)
    webhook.close.assert_awaited_once()
    translator.close.assert_awaited_once()


@pytest.mark.asyncio
async def test_module_level_translate_skips_empty_text(mocker: pytest_mock.MockerFixture) -> None:
    service_cls = mocker.patch("cropscan.logic.AnalysisService", autospec=True)

    assert await logic.translate_text("", "Hindi") == ""
    service_cls.assert_not_called()


@pytest.mark.asyncio
async def test_module_level_analyze_closes_service(mocker: pytest_mock.MockerFixture, make_image) -> None:
    service_cls = mocker.patch("cropscan.logic.AnalysisService", autospec=True)
    instance = service_cls.return_value
    instance.analyze_image.return_value = "report"
    blob = ImageBlob(make_image(10, 10), "leaf.png")

    assert await logic.analyze_image(blob, "English") == "report"
    instance.analyze_image.assert_awaited_once_with(blob, "English")
    instance.close.assert_awaited_once()
