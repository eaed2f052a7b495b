"""
Analysis Service

Snapshot loading, cached analysis and guided tour detection in one place.
"""

from src.business.analysis.pipeline import AnalysisPipeline, AnalysisReport, PortfolioSnapshot

__all__ = ["AnalysisPipeline", "AnalysisReport", "PortfolioSnapshot"]
