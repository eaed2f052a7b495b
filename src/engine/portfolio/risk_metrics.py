"""Portfolio risk metrics calculations.

Portfolio-level module for inflation risk, diversification and
concentration metrics that operate on token allocations and regional
exposure.
"""

from src.engine.models.enums import ConcentrationRisk, DiversificationRating
from src.engine.models.params import RiskThresholds
from src.engine.models.portfolio import RegionalExposure, TokenAllocation

_DEFAULT_THRESHOLDS = RiskThresholds()

# Diversity bonuses: points per token / region and their caps
TOKEN_BONUS_PER_TOKEN = 4.0
TOKEN_BONUS_CAP = 20.0
REGION_BONUS_PER_REGION = 10.0
REGION_BONUS_CAP = 30.0


def calc_weighted_inflation_risk(tokens: list[TokenAllocation] | tuple[TokenAllocation, ...]) -> float:
    """Calculate value-weighted inflation exposure.

    Formula: Σ(value_i / total × inflation_rate_i)

    Physical meaning:
    - The annual rate at which the portfolio loses purchasing power
    - A single-token portfolio carries exactly that token's rate
    - Always lies between the lowest and highest held rate

    Args:
        tokens: Token allocations.

    Returns:
        Weighted inflation rate (%). 0 when total value is 0.

    Example:
        # $500 at 2% and $500 at 8%
        # risk = 0.5 × 2 + 0.5 × 8 = 5.0
    """
    total = sum(t.value_usd for t in tokens)
    if not tokens or total == 0:
        return 0.0

    return sum(t.inflation_rate * (t.value_usd / total) for t in tokens)


def calc_regional_hhi(regional_exposure: list[RegionalExposure] | tuple[RegionalExposure, ...]) -> float:
    """Calculate Herfindahl-Hirschman Index over regional shares.

    Formula: HHI = Σ(share²) with share in 0-1

    Physical meaning:
    - HHI = 1.0: everything in one region
    - HHI = 0.5: two equal regions
    - HHI = 0.25: four equal regions

    Returns:
        HHI (0-1). 0 when there are no regions.
    """
    return sum((r.percentage / 100) ** 2 for r in regional_exposure)


def calc_diversification_score(
    tokens: list[TokenAllocation] | tuple[TokenAllocation, ...],
    regional_exposure: list[RegionalExposure] | tuple[RegionalExposure, ...],
) -> float:
    """Calculate 0-100 diversification score.

    Formula:
        concentration = clamp((1 - HHI) × 100, 0, 100)
        token_bonus = min(20, token_count × 4)
        region_bonus = min(30, region_count × 10)
        score = clamp(concentration + token_bonus + region_bonus, 0, 100)

    Args:
        tokens: Token allocations.
        regional_exposure: Regional exposure.

    Returns:
        Score in [0, 100]. 0 for an empty or zero-value portfolio.

    Example:
        # 1 token in 1 region: 0 + 4 + 10 = 14
        # 2 tokens in 2 equal regions: 50 + 8 + 20 = 78
    """
    if not tokens or sum(t.value_usd for t in tokens) == 0:
        return 0.0

    hhi = calc_regional_hhi(regional_exposure)
    concentration_score = max(0.0, min(100.0, (1 - hhi) * 100))
    token_bonus = min(TOKEN_BONUS_CAP, len(tokens) * TOKEN_BONUS_PER_TOKEN)
    region_bonus = min(REGION_BONUS_CAP, len(regional_exposure) * REGION_BONUS_PER_REGION)

    return max(0.0, min(100.0, concentration_score + token_bonus + region_bonus))


def get_diversification_rating(score: float) -> DiversificationRating:
    """Band a diversification score."""
    if score >= 80:
        return DiversificationRating.EXCELLENT
    if score >= 60:
        return DiversificationRating.GOOD
    if score >= 40:
        return DiversificationRating.FAIR
    if score >= 20:
        return DiversificationRating.POOR
    return DiversificationRating.VERY_POOR


def calc_concentration_risk(
    regional_exposure: list[RegionalExposure] | tuple[RegionalExposure, ...],
    thresholds: RiskThresholds = _DEFAULT_THRESHOLDS,
) -> ConcentrationRisk:
    """Classify concentration by the largest regional share.

    - HIGH: max share > 70
    - MEDIUM: max share > 50
    - LOW: otherwise, or no regions

    Args:
        regional_exposure: Regional exposure.
        thresholds: Concentration thresholds.

    Returns:
        ConcentrationRisk.
    """
    if not regional_exposure:
        return ConcentrationRisk.LOW

    max_share = max(r.percentage for r in regional_exposure)
    if max_share > thresholds.concentration_high:
        return ConcentrationRisk.HIGH
    if max_share > thresholds.concentration_medium:
        return ConcentrationRisk.MEDIUM
    return ConcentrationRisk.LOW
