"""
Guided Tour

Rules layer recommending an onboarding tour from a portfolio analysis.
"""

from src.business.tour.guided_tour import (
    GuidedTourRecommendation,
    SwapPrefill,
    TourAction,
    TourId,
    TourStep,
    detect_guided_tour,
)

__all__ = [
    "GuidedTourRecommendation",
    "SwapPrefill",
    "TourAction",
    "TourId",
    "TourStep",
    "detect_guided_tour",
]
