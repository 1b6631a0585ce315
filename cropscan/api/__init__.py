"""Clients for the analysis webhook and the translation model."""

from .translation_client import TranslationClient
from .webhook_client import (
    AnalysisError,
    FatalAnalysisError,
    RetriesExhaustedError,
    RetryableAnalysisError,
    WebhookClient,
)

__all__ = [
    "AnalysisError",
    "FatalAnalysisError",
    "RetriesExhaustedError",
    "RetryableAnalysisError",
    "TranslationClient",
    "WebhookClient",
]
