"""Position and pool analytics over a snapshot."""

import logging
from decimal import Decimal

from lp_engine.config import DEFAULT_SETTINGS, EngineSettings
from lp_engine.core.errors import InvalidAmount
from lp_engine.core.fixed_point import (
    ONE,
    PERCENT_PLACES,
    ZERO,
    AmountLike,
    Rounding,
    absolute,
    add,
    div,
    mul,
    percent,
    quantize,
    sqrt,
    sub,
    to_decimal,
)
from lp_engine.core.pool import PoolAnalytics, PoolState, ShareValue, spot_price_change
from lp_engine.core.validation import (
    validate_amount,
    validate_non_negative,
    validate_price,
)

logger = logging.getLogger(__name__)

DAYS_PER_YEAR = Decimal("365")


def _fraction(value: AmountLike, field_name: str) -> Decimal:
    """Parse a threshold or margin fraction in [0, 1]."""
    fraction = to_decimal(value)
    if fraction < 0 or fraction > 1:
        raise InvalidAmount(f"{field_name} must be between 0 and 1, got {fraction}")
    return fraction


def share_value(
    shares: AmountLike,
    pool: PoolState,
    *,
    settings: EngineSettings = DEFAULT_SETTINGS,
) -> ShareValue:
    """Value of a share holding in each asset; zero for a pool with no shares.

    Raises:
        EmptyPoolInconsistentState: If shares exist but a reserve is zero
    """
    held = validate_non_negative(shares, "shares", settings.max_amount)
    if pool.total_shares == 0:
        zero = quantize(ZERO, settings.scale, Rounding.DOWN)
        return ShareValue(value_a=zero, value_b=zero)
    pool.require_reserves()

    ratio = div(held, pool.total_shares, Rounding.DOWN)
    return ShareValue(
        value_a=quantize(mul(ratio, pool.reserve_a), settings.scale, Rounding.DOWN),
        value_b=quantize(mul(ratio, pool.reserve_b), settings.scale, Rounding.DOWN),
    )


def break_even_price(
    initial_amount_a: AmountLike,
    initial_amount_b: AmountLike,
    *,
    settings: EngineSettings = DEFAULT_SETTINGS,
) -> Decimal:
    """Price (B per A) at which a position was entered."""
    amount_a = validate_amount(initial_amount_a, "initial_amount_a", settings.max_amount)
    amount_b = validate_amount(initial_amount_b, "initial_amount_b", settings.max_amount)
    return quantize(div(amount_b, amount_a, Rounding.DOWN), settings.scale, Rounding.DOWN)


def impermanent_loss(initial_price: AmountLike, current_price: AmountLike) -> Decimal:
    """Impermanent loss as a percentage with two digits.

    With r = current / initial: IL = |2 * sqrt(r) / (1 + r) - 1| * 100.
    A 4x price move gives 20.00, a 2x move gives 5.71.
    """
    p0 = validate_price(initial_price, "initial_price")
    p1 = validate_price(current_price, "current_price")

    ratio = div(p1, p0, Rounding.NEAREST)
    hold_ratio = div(
        mul(Decimal(2), sqrt(ratio, Rounding.NEAREST)), add(ONE, ratio), Rounding.NEAREST
    )
    return percent(absolute(sub(hold_ratio, ONE)), PERCENT_PLACES, Rounding.DOWN)


def apr_from_fees(
    fees: AmountLike,
    total_liquidity: AmountLike,
    *,
    period_days: int = 1,
) -> Decimal:
    """Annualised fee yield as a percentage with two digits.

    APR = fees / total_liquidity * (365 / period_days) * 100, where ``fees``
    were earned over ``period_days``. A pool without liquidity yields 0.00.
    """
    if isinstance(period_days, bool) or not isinstance(period_days, int) or period_days <= 0:
        raise InvalidAmount(f"period_days must be a positive integer, got {period_days!r}")
    earned = validate_non_negative(fees, "fees")
    liquidity = validate_non_negative(total_liquidity, "total_liquidity")

    if liquidity == 0:
        return quantize(ZERO, PERCENT_PLACES, Rounding.DOWN)

    yearly = div(
        mul(earned, DAYS_PER_YEAR), mul(liquidity, Decimal(period_days)), Rounding.DOWN
    )
    return percent(yearly, PERCENT_PLACES, Rounding.DOWN)


def would_impact_price(
    amount_a: AmountLike,
    amount_b: AmountLike,
    pool: PoolState,
    threshold: AmountLike = "0.01",
) -> bool:
    """True if adding both amounts to the reserves moves the price by more
    than ``threshold`` (a fraction).
    """
    deposit_a = validate_non_negative(amount_a, "amount_a")
    deposit_b = validate_non_negative(amount_b, "amount_b")
    limit = _fraction(threshold, "threshold")

    change = spot_price_change(
        pool.reserve_a,
        pool.reserve_b,
        add(pool.reserve_a, deposit_a),
        add(pool.reserve_b, deposit_b),
    )
    if change > limit:
        logger.debug("Deposit (%s, %s) moves price by %s", deposit_a, deposit_b, change)
    return change > limit


def has_sufficient_liquidity(
    required_a: AmountLike,
    required_b: AmountLike,
    pool: PoolState,
    safety_margin: AmountLike = "0.01",
) -> bool:
    """True if both reserves cover the required amounts after keeping back
    ``safety_margin`` (a fraction) of each reserve.
    """
    need_a = validate_non_negative(required_a, "required_a")
    need_b = validate_non_negative(required_b, "required_b")
    keep = sub(ONE, _fraction(safety_margin, "safety_margin"))

    return need_a <= mul(pool.reserve_a, keep) and need_b <= mul(pool.reserve_b, keep)


def pool_analytics(
    pool: PoolState,
    *,
    settings: EngineSettings = DEFAULT_SETTINGS,
) -> PoolAnalytics:
    """TVL in asset units and share price in asset A for a snapshot.

    Raises:
        EmptyPoolInconsistentState: If shares exist but a reserve is zero
    """
    pool.require_reserves()
    tvl = quantize(add(pool.reserve_a, pool.reserve_b), settings.scale, Rounding.DOWN)
    if pool.total_shares == 0:
        return PoolAnalytics(tvl=tvl, share_price=quantize(ZERO, settings.scale, Rounding.DOWN))
    share_price = quantize(
        div(pool.reserve_a, pool.total_shares, Rounding.DOWN), settings.scale, Rounding.DOWN
    )
    return PoolAnalytics(tvl=tvl, share_price=share_price)
