"""Integration check helpers."""

from .checks import (
    IntegrationCheckResult,
    check_translation,
    check_webhook,
    run_all_checks,
)

__all__ = [
    "IntegrationCheckResult",
    "check_translation",
    "check_webhook",
    "run_all_checks",
]
