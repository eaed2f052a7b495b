"""Regional gap analysis against the fixed region universe."""

from src.data.models.enums import REGION_UNIVERSE, Region
from src.engine.models.params import RiskThresholds
from src.engine.models.portfolio import RegionalExposure

_DEFAULT_THRESHOLDS = RiskThresholds()


def find_missing_regions(
    regional_exposure: list[RegionalExposure] | tuple[RegionalExposure, ...],
) -> tuple[Region, ...]:
    """Universe regions with no holdings, in universe order."""
    present = {r.region for r in regional_exposure}
    return tuple(region for region in REGION_UNIVERSE if region not in present)


def find_over_exposed_regions(
    regional_exposure: list[RegionalExposure] | tuple[RegionalExposure, ...],
    thresholds: RiskThresholds = _DEFAULT_THRESHOLDS,
) -> tuple[Region, ...]:
    """Regions holding more than the over-exposure share (default 50%)."""
    return tuple(
        r.region for r in regional_exposure if r.percentage > thresholds.over_exposed
    )


def find_under_exposed_regions(
    regional_exposure: list[RegionalExposure] | tuple[RegionalExposure, ...],
    thresholds: RiskThresholds = _DEFAULT_THRESHOLDS,
) -> tuple[Region, ...]:
    """Held regions below the under-exposure share (default 10%).

    Zero-value regions are excluded; they are noise, not exposure.
    """
    return tuple(
        r.region
        for r in regional_exposure
        if r.percentage < thresholds.under_exposed and r.value_usd > 0
    )
