"""
Analysis Cache

Memoizing wrapper around the stateless analysis orchestrator.
"""

from src.business.cache.analysis_cache import CachedPortfolioAnalyzer

__all__ = ["CachedPortfolioAnalyzer"]
