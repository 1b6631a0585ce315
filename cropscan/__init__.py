"""Plant and soil photo analysis client."""

from cropscan.languages import ReportLanguage
from cropscan.logic import AnalysisService, analyze_image, translate_text

__all__ = ["AnalysisService", "ReportLanguage", "analyze_image", "translate_text"]
