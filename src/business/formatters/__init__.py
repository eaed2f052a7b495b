"""
Formatters

Presentation boundary: reason codes to text, analysis to text / JSON.
"""

from src.business.formatters.analysis_formatter import AnalysisFormatter, to_jsonable
from src.business.formatters.reason_formatter import ReasonFormatter

__all__ = ["AnalysisFormatter", "ReasonFormatter", "to_jsonable"]
