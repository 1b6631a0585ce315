"""Analyse a local photo and print the report."""

from __future__ import annotations

import argparse
import asyncio
import mimetypes
import sys
from pathlib import Path

from cropscan.api import AnalysisError
from cropscan.config.settings import get_settings
from cropscan.imgproc import ImageBlob, ImageNormalizationError
from cropscan.languages import ReportLanguage
from cropscan.logic import AnalysisService
from cropscan.monitoring.logging import configure_logging


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("image", type=Path, help="Photo of the plant or soil sample.")
    parser.add_argument(
        "--language",
        default=ReportLanguage.ENGLISH.value,
        help="Language the webhook should answer in (English, Hindi, Bengali).",
    )
    parser.add_argument(
        "--translate-to",
        default=None,
        help="Translate the returned report into this language.",
    )
    return parser.parse_args(argv)


async def run(image_path: Path, language: str, translate_to: str | None) -> str:
    blob = ImageBlob(
        data=image_path.read_bytes(),
        filename=image_path.name,
        media_type=mimetypes.guess_type(image_path.name)[0] or "application/octet-stream",
    )
    service = AnalysisService(get_settings())
    try:
        report = await service.analyze_image(blob, language)
        if translate_to:
            report = await service.translate_text(report, translate_to)
        return report
    finally:
        await service.close()


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    configure_logging()
    try:
        report = asyncio.run(run(args.image, args.language, args.translate_to))
    except (AnalysisError, ImageNormalizationError, ValueError, OSError) as exc:
        print(f"Analysis failed: {exc}", file=sys.stderr)
        return 1
    print(report)
    return 0


if __name__ == "__main__":
    sys.exit(main())
