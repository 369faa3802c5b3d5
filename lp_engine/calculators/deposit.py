"""Share issuance for two-sided deposits."""

import logging
from decimal import Decimal

from lp_engine.config import DEFAULT_SETTINGS, EngineSettings
from lp_engine.core.errors import BelowMinimumLiquidity, EmptyPoolInconsistentState
from lp_engine.core.fixed_point import (
    ONE,
    PERCENT_PLACES,
    POOL_SHARE_PLACES,
    ZERO,
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
from lp_engine.core.pool import DepositEstimate, PoolState, spot_price_change
from lp_engine.core.validation import validate_amount, validate_minimum_liquidity

logger = logging.getLogger(__name__)


def _issue_shares(
    amount_a: Decimal,
    amount_b: Decimal,
    pool: PoolState,
    settings: EngineSettings,
) -> tuple[Decimal, Decimal, Decimal, Decimal]:
    """Return (shares, actual_a, actual_b, locked_shares) for validated amounts."""
    scale = settings.scale

    if pool.total_shares == 0:
        if pool.reserve_a != 0 or pool.reserve_b != 0:
            logger.warning(
                "Pool has reserves (%s, %s) but no shares; treating deposit as genesis",
                pool.reserve_a,
                pool.reserve_b,
            )
        amount_a = quantize(amount_a, scale, Rounding.DOWN)
        amount_b = quantize(amount_b, scale, Rounding.DOWN)
        geometric_mean = validate_minimum_liquidity(
            amount_a, amount_b, settings.min_liquidity, settings.max_amount
        )
        gross_shares = quantize(geometric_mean, scale, Rounding.DOWN)
        locked = quantize(settings.minimum_locked_shares, scale, Rounding.DOWN)
        if gross_shares <= locked:
            raise BelowMinimumLiquidity(
                f"Initial liquidity {gross_shares} does not exceed locked shares {locked}"
            )
        # Genesis always consumes the full desired amounts
        return sub(gross_shares, locked), amount_a, amount_b, locked

    try:
        pool.require_reserves()
    except EmptyPoolInconsistentState:
        logger.warning(
            "Inconsistent pool: total_shares=%s reserve_a=%s reserve_b=%s",
            pool.total_shares,
            pool.reserve_a,
            pool.reserve_b,
        )
        raise

    # The limiting asset decides the share count
    ratio_a = div(amount_a, pool.reserve_a, Rounding.DOWN)
    ratio_b = div(amount_b, pool.reserve_b, Rounding.DOWN)
    shares = quantize(mul(minimum(ratio_a, ratio_b), pool.total_shares), scale, Rounding.DOWN)
    if shares == 0:
        raise BelowMinimumLiquidity(
            f"Deposit ({amount_a}, {amount_b}) mints no shares against pool "
            f"({pool.reserve_a}, {pool.reserve_b}, {pool.total_shares})"
        )

    # Consumed amounts follow from the minted shares, so actual <= desired
    share_ratio = div(shares, pool.total_shares, Rounding.DOWN)
    actual_a = quantize(mul(share_ratio, pool.reserve_a), scale, Rounding.DOWN)
    actual_b = quantize(mul(share_ratio, pool.reserve_b), scale, Rounding.DOWN)
    if actual_a == 0 or actual_b == 0:
        raise BelowMinimumLiquidity(
            f"Deposit ({amount_a}, {amount_b}) consumes ({actual_a}, {actual_b}) "
            f"against pool ({pool.reserve_a}, {pool.reserve_b}, {pool.total_shares})"
        )

    # Cap shares at what the floored amounts pay for, so shares / total_shares
    # never exceeds actual_x / reserve_x
    paid_ratio = minimum(
        div(actual_a, pool.reserve_a, Rounding.DOWN),
        div(actual_b, pool.reserve_b, Rounding.DOWN),
    )
    shares = minimum(
        shares, quantize(mul(paid_ratio, pool.total_shares), scale, Rounding.DOWN)
    )
    if shares == 0:
        raise BelowMinimumLiquidity(
            f"Deposit ({actual_a}, {actual_b}) is too small to mint a share against pool "
            f"({pool.reserve_a}, {pool.reserve_b}, {pool.total_shares})"
        )
    return shares, actual_a, actual_b, quantize(ZERO, scale, Rounding.DOWN)


def compute_deposit_shares(
    desired_a: AmountLike,
    desired_b: AmountLike,
    pool: PoolState,
    *,
    settings: EngineSettings = DEFAULT_SETTINGS,
) -> tuple[Decimal, Decimal, Decimal]:
    """Compute shares minted and amounts consumed for a deposit.

    First deposit (no shares issued): shares = floor7(sqrt(a * b)), less
    any configured locked shares, and both desired amounts are consumed.

    Subsequent deposits: shares = floor7(min(a / reserve_a, b / reserve_b)
    * total_shares). Consumed amounts are floor7(shares / total_shares *
    reserve_x), and shares are then capped so the depositor never holds a
    larger fraction of supply than the consumed amounts bring to each
    reserve. The non-limiting asset is under-consumed; the caller decides
    what to do with the remainder.

    Args:
        desired_a: Maximum amount of asset A to deposit
        desired_b: Maximum amount of asset B to deposit
        pool: Current pool snapshot

    Returns:
        Tuple of (shares, actual_amount_a, actual_amount_b)

    Raises:
        InvalidAmount: If either amount is invalid
        BelowMinimumLiquidity: If the deposit is dust, mints no shares or
            consumes nothing of either asset
        EmptyPoolInconsistentState: If shares exist but a reserve is zero
    """
    amount_a = validate_amount(desired_a, "desired_a", settings.max_amount)
    amount_b = validate_amount(desired_b, "desired_b", settings.max_amount)
    shares, actual_a, actual_b, _ = _issue_shares(amount_a, amount_b, pool, settings)
    return shares, actual_a, actual_b


def compute_deposit(
    desired_a: AmountLike,
    desired_b: AmountLike,
    pool: PoolState,
    *,
    settings: EngineSettings = DEFAULT_SETTINGS,
) -> DepositEstimate:
    """Estimate a deposit against a pool snapshot.

    ``share_price`` is the value of one share in asset A after the deposit
    (1 on genesis). ``price_impact`` is the percentage change in the
    B-per-A spot price (0 on genesis, where no prior price exists).
    ``pool_share`` is the depositor's percentage of all shares afterwards.
    """
    amount_a = validate_amount(desired_a, "desired_a", settings.max_amount)
    amount_b = validate_amount(desired_b, "desired_b", settings.max_amount)
    shares, actual_a, actual_b, locked = _issue_shares(amount_a, amount_b, pool, settings)

    scale = settings.scale
    new_total_shares = add(add(pool.total_shares, shares), locked)

    if pool.total_shares == 0:
        share_price = quantize(ONE, scale, Rounding.DOWN)
        price_impact = quantize(ZERO, PERCENT_PLACES, Rounding.DOWN)
    else:
        new_reserve_a = add(pool.reserve_a, actual_a)
        new_reserve_b = add(pool.reserve_b, actual_b)
        share_price = quantize(
            div(new_reserve_a, new_total_shares, Rounding.DOWN), scale, Rounding.DOWN
        )
        change = spot_price_change(
            pool.reserve_a, pool.reserve_b, new_reserve_a, new_reserve_b
        )
        price_impact = percent(change, PERCENT_PLACES, Rounding.DOWN)

    pool_share = percent(
        div(shares, new_total_shares, Rounding.DOWN), POOL_SHARE_PLACES, Rounding.DOWN
    )

    logger.debug(
        "Deposit estimate: shares=%s actual_a=%s actual_b=%s locked=%s pool_share=%s%%",
        shares,
        actual_a,
        actual_b,
        locked,
        pool_share,
    )

    return DepositEstimate(
        shares=shares,
        actual_amount_a=actual_a,
        actual_amount_b=actual_b,
        share_price=share_price,
        price_impact=price_impact,
        pool_share=pool_share,
        locked_shares=locked,
    )
