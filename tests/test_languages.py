"""Tests for report language parsing."""

import pytest

from cropscan.languages import ReportLanguage


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("English", ReportLanguage.ENGLISH),
        ("hindi", ReportLanguage.HINDI),
        (" BENGALI ", ReportLanguage.BENGALI),
        ("bn", ReportLanguage.BENGALI),
        ("hi", ReportLanguage.HINDI),
        (ReportLanguage.ENGLISH, ReportLanguage.ENGLISH),
    ],
)
def test_parse_accepts_names_and_locale_codes(value, expected) -> None:
    assert ReportLanguage.parse(value) is expected


def test_parse_rejects_unknown_language() -> None:
    with pytest.raises(ValueError, match="Unsupported report language"):
        ReportLanguage.parse("Tamil")
