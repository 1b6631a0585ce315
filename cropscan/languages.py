"""Languages the analysis report can be produced in."""

from __future__ import annotations

from enum import Enum


class ReportLanguage(str, Enum):
    """Output languages understood by the webhook and the translator."""

    ENGLISH = "English"
    HINDI = "Hindi"
    BENGALI = "Bengali"

    @classmethod
    def parse(cls, value: str | ReportLanguage) -> ReportLanguage:
        """Accept an enum value (any case) or a UI locale code such as ``hi``."""

        if isinstance(value, cls):
            return value
        key = value.strip().lower()
        for language in cls:
            if key == language.value.lower():
                return language
        try:
            return _LOCALE_CODES[key]
        except KeyError:
            raise ValueError(f"Unsupported report language: {value!r}") from None


_LOCALE_CODES = {
    "en": ReportLanguage.ENGLISH,
    "hi": ReportLanguage.HINDI,
    "bn": ReportLanguage.BENGALI,
}
