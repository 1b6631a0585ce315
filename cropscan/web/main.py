"""FastAPI entrypoint and HTTP routes."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, File, Form, HTTPException, UploadFile
from pydantic import BaseModel

from cropscan.api import FatalAnalysisError, RetriesExhaustedError
from cropscan.config.settings import get_settings
from cropscan.imgproc import ImageBlob, ImageNormalizationError
from cropscan.languages import ReportLanguage
from cropscan.logic import AnalysisService
from cropscan.monitoring.logging import configure_logging


class ReportResponse(BaseModel):
    """Analysis or translation result returned to the browser."""

    text: str


class TranslateRequest(BaseModel):
    text: str
    target_language: str


def _parse_language(value: str) -> ReportLanguage:
    try:
        return ReportLanguage.parse(value)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


def create_app(service: AnalysisService | None = None) -> FastAPI:
    """Initialise the FastAPI application."""

    settings = get_settings()
    configure_logging()
    analysis = service or AnalysisService(settings)

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        yield
        await analysis.close()

    app = FastAPI(
        title="CropScan API",
        version="0.1.0",
        docs_url="/docs" if settings.environment != "prod" else None,
        redoc_url="/redoc" if settings.environment != "prod" else None,
        lifespan=lifespan,
    )

    @app.get("/health", tags=["system"])
    async def health_check() -> dict[str, str]:
        """Simple health endpoint used for readiness probes."""

        return {"status": "ok"}

    @app.post("/analyze", response_model=ReportResponse, tags=["analysis"])
    async def analyze(
        image: UploadFile | None = File(None),
        language: str = Form(ReportLanguage.ENGLISH.value),
    ) -> ReportResponse:
        """Analyse an uploaded plant or soil photo."""

        target = _parse_language(language)
        payload = await image.read() if image is not None else b""
        if not payload:
            raise HTTPException(status_code=400, detail="Please select an image to analyze.")

        blob = ImageBlob(
            data=payload,
            filename=image.filename or "image",
            media_type=image.content_type or "application/octet-stream",
        )
        try:
            report = await analysis.analyze_image(blob, target)
        except ImageNormalizationError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        except FatalAnalysisError as exc:
            raise HTTPException(status_code=502, detail=str(exc)) from exc
        except RetriesExhaustedError as exc:
            raise HTTPException(status_code=503, detail=str(exc)) from exc
        return ReportResponse(text=report)

    @app.post("/translate", response_model=ReportResponse, tags=["analysis"])
    async def translate(request: TranslateRequest) -> ReportResponse:
        """Translate a previously returned report."""

        target = _parse_language(request.target_language)
        translated = await analysis.translate_text(request.text, target)
        return ReportResponse(text=translated)

    return app


app = create_app()
