"""Root logger setup shared by the web app and the scripts."""

from __future__ import annotations

import logging

from cropscan.config.settings import get_settings

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging() -> None:
    """Log retries, size reductions and translation fallbacks at ``LOG_LEVEL``.

    Unknown level names fall back to ``INFO``.
    """

    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format=LOG_FORMAT,
    )
