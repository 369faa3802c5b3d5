"""Slippage bounds and balanced deposit sizing."""

import logging
from typing import Optional

from lp_engine.config import DEFAULT_SETTINGS, EngineSettings
from lp_engine.core.fixed_point import (
    ONE,
    PERCENT_PLACES,
    AmountLike,
    Rounding,
    add,
    div,
    minimum,
    mul,
    percent,
    quantize,
    sub,
)
from lp_engine.core.pool import MinimumAmounts, OptimalDeposit, PoolState, PriceBounds
from lp_engine.core.validation import (
    validate_amount,
    validate_non_negative,
    validate_price,
    validate_slippage,
)

logger = logging.getLogger(__name__)


def minimum_amounts(
    expected_a: AmountLike,
    expected_b: AmountLike,
    slippage: AmountLike,
    *,
    settings: EngineSettings = DEFAULT_SETTINGS,
) -> MinimumAmounts:
    """Lower bounds for two expected amounts: floor7(expected * (1 - slippage))."""
    amount_a = validate_non_negative(expected_a, "expected_a", settings.max_amount)
    amount_b = validate_non_negative(expected_b, "expected_b", settings.max_amount)
    tolerance = sub(ONE, validate_slippage(slippage))

    return MinimumAmounts(
        min_amount_a=quantize(mul(amount_a, tolerance), settings.scale, Rounding.DOWN),
        min_amount_b=quantize(mul(amount_b, tolerance), settings.scale, Rounding.DOWN),
    )


def price_bounds(
    expected_price: AmountLike,
    slippage: AmountLike,
    *,
    settings: EngineSettings = DEFAULT_SETTINGS,
) -> PriceBounds:
    """Price window around ``expected_price``.

    The lower bound rounds down and the upper bound rounds up, so neither
    side is tighter than the requested tolerance.

    Example:
        price_bounds("2", "0.01") -> min 1.9800000, max 2.0200000
    """
    price = validate_price(expected_price, "expected_price")
    tolerance = validate_slippage(slippage)

    return PriceBounds(
        min_price=quantize(mul(price, sub(ONE, tolerance)), settings.scale, Rounding.DOWN),
        max_price=quantize(mul(price, add(ONE, tolerance)), settings.scale, Rounding.UP),
        spot_price=quantize(price, settings.scale, Rounding.DOWN),
        tolerance_percent=percent(tolerance, PERCENT_PLACES, Rounding.DOWN),
    )


def optimal_deposit(
    max_a: AmountLike,
    max_b: AmountLike,
    pool: PoolState,
    slippage: Optional[AmountLike] = None,
    *,
    settings: EngineSettings = DEFAULT_SETTINGS,
) -> OptimalDeposit:
    """Largest pool-balanced deposit not exceeding either maximum.

    Uses the same limiting-ratio rule as the deposit calculator. An empty
    pool accepts any ratio, so the maxima are returned as-is.

    Args:
        max_a: Most of asset A the caller will deposit
        max_b: Most of asset B the caller will deposit
        pool: Current pool snapshot
        slippage: Tolerance for the minimum amounts
            (default: settings.default_slippage)

    Raises:
        EmptyPoolInconsistentState: If shares exist but a reserve is zero
    """
    amount_a = validate_amount(max_a, "max_a", settings.max_amount)
    amount_b = validate_amount(max_b, "max_b", settings.max_amount)
    tolerance = settings.default_slippage if slippage is None else slippage

    if pool.total_shares == 0:
        optimal_a = quantize(amount_a, settings.scale, Rounding.DOWN)
        optimal_b = quantize(amount_b, settings.scale, Rounding.DOWN)
    else:
        pool.require_reserves()
        ratio = minimum(
            div(amount_a, pool.reserve_a, Rounding.DOWN),
            div(amount_b, pool.reserve_b, Rounding.DOWN),
        )
        optimal_a = quantize(mul(ratio, pool.reserve_a), settings.scale, Rounding.DOWN)
        optimal_b = quantize(mul(ratio, pool.reserve_b), settings.scale, Rounding.DOWN)

    bounds = minimum_amounts(optimal_a, optimal_b, tolerance, settings=settings)
    logger.debug(
        "Optimal deposit: (%s, %s) from maxima (%s, %s)",
        optimal_a,
        optimal_b,
        amount_a,
        amount_b,
    )

    return OptimalDeposit(
        amount_a=optimal_a,
        amount_b=optimal_b,
        min_amount_a=bounds.min_amount_a,
        min_amount_b=bounds.min_amount_b,
    )
