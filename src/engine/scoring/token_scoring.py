"""Token scoring engine.

Ranks candidate tokens by a composite desirability score under the current
market context and user preferences. Independent of current holdings.

Score = yield + inflation_hedge + real_yield + performance + risk_adjusted

The deciding market variable is the real yield (treasury yield - inflation):
- Negative real yield favors non-yielding hard assets (gold)
- Positive real yield favors yield-bearing tokenized treasuries
"""

import logging
from typing import Sequence

from src.data.models.enums import AssetKind, Goal, PolicyStance, Region, RiskTolerance
from src.data.models.inflation import InflationDataset
from src.data.models.market import (
    DEFAULT_MARKET_CONTEXT,
    MarketContext,
    TokenPerformance,
    UserContext,
)
from src.data.providers.base import TokenMetricsProvider
from src.data.providers.static_provider import StaticTokenMetricsProvider
from src.engine.classifier import get_asset_kind, normalize_symbol
from src.engine.models.enums import ReasonCode
from src.engine.models.reasons import Reason
from src.engine.models.result import OpportunityCost, ScoreBreakdown, TokenScore

logger = logging.getLogger(__name__)

# Amount the opportunity cost is quoted against
DEFAULT_INVESTMENT_AMOUNT = 10000.0

# Candidates considered for the Global slot
GLOBAL_CANDIDATES: tuple[str, ...] = ("PAXG", "USDY", "SYRUPUSDC")

# Fixed representative token per region. Global only falls back to it when
# no Global candidate can be scored.
REGION_PRIMARY_TOKEN: dict[Region, str] = {
    Region.USA: "USDM",
    Region.EUROPE: "EURM",
    Region.LATAM: "BRLM",
    Region.AFRICA: "KESM",
    Region.ASIA: "PHPM",
    Region.GLOBAL: "PAXG",
}

# Neutral score reported for fixed regional picks
PRIMARY_TOKEN_SCORE = 50.0


def _default_provider() -> TokenMetricsProvider:
    return StaticTokenMetricsProvider()


def calc_real_yield(treasury_yield: float, inflation: float) -> float:
    """Calculate real yield (nominal treasury yield - inflation).

    Example:
        >>> calc_real_yield(5.0, 3.0)
        2.0
    """
    return treasury_yield - inflation


def calc_yield_score(token_apy: float, max_apy: float) -> float:
    """Score APY relative to the best candidate (0-100)."""
    if max_apy == 0:
        return 0.0
    return token_apy / max_apy * 100


def calc_inflation_hedge_score(
    performance: TokenPerformance,
    kind: AssetKind,
    market: MarketContext,
    user: UserContext,
) -> float:
    """Score inflation hedge effectiveness under the current regime.

    Rules:
    - Base: correlation_with_inflation × 20
    - Hard assets: +30 if inflation > 4, +25 if real yield < 0,
      -40 if real yield > 2, -20 under hawkish policy
    - Yield-bearing: +25 if real yield > 1, +20 more if > 2,
      +15 if inflation < 2.5
    - inflation_protection with inflation > 5: hard assets +15
    - rwa_access with real yield > 1.5: yield-bearing +20

    Args:
        performance: Token performance statistics.
        kind: Asset kind of the token.
        market: Market context.
        user: User context.

    Returns:
        Hedge score (unbounded).
    """
    real_yield = calc_real_yield(market.treasury_yield, market.inflation)
    score = performance.correlation_with_inflation * 20

    if kind == AssetKind.HARD_ASSET:
        if market.inflation > 4:
            score += 30
        if real_yield < 0:
            score += 25
        if real_yield > 2:
            score -= 40
        if market.policy_stance == PolicyStance.HAWKISH:
            score -= 20

    if kind == AssetKind.YIELD_BEARING:
        if real_yield > 1:
            score += 25
        if real_yield > 2:
            score += 20
        if market.inflation < 2.5:
            score += 15

    if user.goal == Goal.INFLATION_PROTECTION and market.inflation > 5:
        if kind == AssetKind.HARD_ASSET:
            score += 15

    if user.goal == Goal.RWA_ACCESS and real_yield > 1.5:
        if kind == AssetKind.YIELD_BEARING:
            score += 20

    return score


def calc_real_yield_score(kind: AssetKind, apy: float, market: MarketContext) -> float:
    """Score the real-yield environment.

    Non-yielding hard assets (APY 0) lose points when treasuries pay a real
    return; yield-bearing tokens gain them.

    Returns:
        -30 / -15 / +15 for non-yielding hard assets at real yield > 2 / > 1 / < 0;
        +20 / +10 for yield-bearing tokens at real yield > 2 / > 0; else 0.
    """
    real_yield = calc_real_yield(market.treasury_yield, market.inflation)

    if kind == AssetKind.HARD_ASSET and apy == 0:
        if real_yield > 2:
            return -30.0
        if real_yield > 1:
            return -15.0
        if real_yield < 0:
            return 15.0

    if kind == AssetKind.YIELD_BEARING:
        if real_yield > 2:
            return 20.0
        if real_yield > 0:
            return 10.0

    return 0.0


def calc_performance_score(performance: TokenPerformance) -> float:
    """Momentum factor: 1% YTD return = 2 points."""
    return performance.ytd_return * 2


def calc_risk_adjusted_score(performance: TokenPerformance, user: UserContext) -> float:
    """Sharpe-based score adjusted for the user's risk tolerance.

    - Base: sharpe_ratio × 10
    - Conservative: - volatility × 0.5
    - Aggressive: +10 when ytd_return > 10
    """
    score = performance.sharpe_ratio * 10

    if user.risk_tolerance == RiskTolerance.CONSERVATIVE:
        score -= performance.volatility * 0.5

    if user.risk_tolerance == RiskTolerance.AGGRESSIVE and performance.ytd_return > 10:
        score += 10

    return score


def build_reasoning(
    symbol: str,
    kind: AssetKind,
    apy: float,
    performance: TokenPerformance,
    breakdown: ScoreBreakdown,
    market: MarketContext,
) -> tuple[Reason, ...]:
    """Collect the threshold-triggered reasons for a score, in fixed order."""
    reasons: list[Reason] = []
    real_yield = calc_real_yield(market.treasury_yield, market.inflation)

    if kind == AssetKind.HARD_ASSET:
        if market.inflation > 4:
            reasons.append(Reason(ReasonCode.HARD_ASSET_HIGH_INFLATION, {"inflation": market.inflation}))
        if real_yield < 0:
            reasons.append(Reason(ReasonCode.NEGATIVE_REAL_YIELD, {"real_yield": real_yield}))
        if real_yield > 2:
            reasons.append(Reason(ReasonCode.REAL_YIELD_OPPORTUNITY_COST, {"real_yield": real_yield}))
        if market.gold_ytd_change > 10:
            reasons.append(Reason(ReasonCode.GOLD_MOMENTUM, {"gold_ytd_change": market.gold_ytd_change}))

    if kind == AssetKind.YIELD_BEARING:
        reasons.append(Reason(ReasonCode.TREASURY_APY, {"symbol": symbol, "apy": apy}))
        if real_yield > 1:
            reasons.append(Reason(ReasonCode.POSITIVE_REAL_YIELD, {"real_yield": real_yield}))
        if market.inflation < 3:
            reasons.append(Reason(ReasonCode.LOW_INFLATION_FAVORS_YIELD, {"inflation": market.inflation}))

    if breakdown.risk_adjusted_score > 50:
        reasons.append(
            Reason(ReasonCode.STRONG_RISK_ADJUSTED_RETURN, {"sharpe_ratio": performance.sharpe_ratio})
        )

    return tuple(reasons)


def calc_opportunity_cost(
    symbol: str,
    alternatives: Sequence[str],
    investment_amount: float = DEFAULT_INVESTMENT_AMOUNT,
    provider: TokenMetricsProvider | None = None,
) -> OpportunityCost | None:
    """Calculate yield given up versus the best alternative.

    The best alternative is the highest-APY symbol strictly exceeding the
    token's own APY; the first one wins among equals.

    Args:
        symbol: Token being held.
        alternatives: Candidate alternatives.
        investment_amount: Amount the difference is quoted against.
        provider: APY source. Defaults to the static tables.

    Returns:
        OpportunityCost, or None when no alternative pays more.

    Example:
        >>> calc_opportunity_cost("PAXG", ["USDY", "SYRUPUSDC"])
        OpportunityCost(vs_best_alternative='USDY', annual_difference=500.0)
    """
    provider = provider or _default_provider()
    token = normalize_symbol(symbol)
    token_apy = provider.get_apy(token)

    best_symbol: str | None = None
    best_apy = token_apy
    for alt in alternatives:
        alt_symbol = normalize_symbol(alt)
        if alt_symbol == token:
            continue
        alt_apy = provider.get_apy(alt_symbol)
        if alt_apy > best_apy:
            best_apy = alt_apy
            best_symbol = alt_symbol

    if best_symbol is None:
        return None

    return OpportunityCost(
        vs_best_alternative=best_symbol,
        annual_difference=(best_apy - token_apy) / 100 * investment_amount,
    )


def score_tokens(
    symbols: Sequence[str],
    market_context: MarketContext | None = None,
    user_context: UserContext | None = None,
    inflation_data: InflationDataset | None = None,
    provider: TokenMetricsProvider | None = None,
) -> list[TokenScore]:
    """Score and rank candidate tokens.

    Symbols the provider has no performance data for are skipped. The
    ranking is by total score descending; ties keep input order.

    Args:
        symbols: Candidate symbols (any case, legacy names accepted).
        market_context: Market snapshot. Defaults to DEFAULT_MARKET_CONTEXT.
        user_context: User preferences. Defaults to a balanced explorer.
        inflation_data: Regional inflation dataset. Accepted so callers can
            pass the same inputs as the analyzer; scoring reads the market
            context instead.
        provider: Performance / APY source. Defaults to the static tables.

    Returns:
        Ranked list of TokenScore, each with opportunity cost against the
        other candidates.

    Example:
        >>> ranked = score_tokens(["PAXG", "USDY"])
        >>> ranked[0].symbol
        'USDY'
    """
    market = market_context or DEFAULT_MARKET_CONTEXT
    user = user_context or UserContext()
    provider = provider or _default_provider()

    # One score per canonical symbol, first occurrence wins
    candidates = list(dict.fromkeys(normalize_symbol(s) for s in symbols))
    if not candidates:
        return []

    max_apy = max(provider.get_apy(s) for s in candidates)
    investment = user.portfolio_value if user.portfolio_value > 0 else DEFAULT_INVESTMENT_AMOUNT

    scores: list[TokenScore] = []
    for symbol in candidates:
        performance = provider.get_performance(symbol)
        if performance is None:
            logger.debug(f"Skipping {symbol}: no performance data from {provider.name}")
            continue

        kind = get_asset_kind(symbol)
        apy = provider.get_apy(symbol)
        breakdown = ScoreBreakdown(
            yield_score=calc_yield_score(apy, max_apy),
            inflation_hedge_score=calc_inflation_hedge_score(performance, kind, market, user),
            real_yield_score=calc_real_yield_score(kind, apy, market),
            performance_score=calc_performance_score(performance),
            risk_adjusted_score=calc_risk_adjusted_score(performance, user),
        )
        others = [s for s in candidates if s != symbol]

        scores.append(
            TokenScore(
                symbol=symbol,
                total_score=breakdown.total,
                breakdown=breakdown,
                reasoning=build_reasoning(symbol, kind, apy, performance, breakdown, market),
                opportunity_cost=calc_opportunity_cost(symbol, others, investment, provider),
            )
        )

    # sorted() is stable, so equal totals keep input order
    return sorted(scores, key=lambda s: s.total_score, reverse=True)


def get_best_token_for_region(
    region: Region | str,
    market_context: MarketContext | None = None,
    user_context: UserContext | None = None,
    inflation_data: InflationDataset | None = None,
    provider: TokenMetricsProvider | None = None,
) -> TokenScore:
    """Resolve the representative token for a region.

    Global picks the top-scored of PAXG / USDY / SYRUPUSDC under the given
    market context. Every other region gets its fixed primary stablecoin with
    a neutral score.

    Args:
        region: Region enum or name.
        market_context: Market snapshot.
        user_context: User preferences.
        inflation_data: Regional inflation dataset.
        provider: Performance / APY source.

    Returns:
        TokenScore of the chosen token.
    """
    region = Region.parse_or_unknown(region)

    if region == Region.GLOBAL:
        ranked = score_tokens(GLOBAL_CANDIDATES, market_context, user_context, inflation_data, provider)
        if ranked:
            return ranked[0]
        logger.debug("No scorable Global candidate, falling back to primary token")

    symbol = REGION_PRIMARY_TOKEN.get(region, REGION_PRIMARY_TOKEN[Region.USA])
    return TokenScore(
        symbol=symbol,
        total_score=PRIMARY_TOKEN_SCORE,
        breakdown=ScoreBreakdown(),
        reasoning=(Reason(ReasonCode.PRIMARY_REGIONAL_STABLECOIN, {"region": region.value}),),
    )
