"""Asset payout for share burns."""

import logging
from decimal import Decimal

from lp_engine.config import DEFAULT_SETTINGS, EngineSettings
from lp_engine.core.errors import EmptyPool, SharesExceedSupply
from lp_engine.core.fixed_point import (
    PERCENT_PLACES,
    ZERO,
    AmountLike,
    Rounding,
    div,
    mul,
    percent,
    quantize,
    sub,
)
from lp_engine.core.pool import PoolState, WithdrawEstimate, spot_price_change
from lp_engine.core.validation import validate_amount

logger = logging.getLogger(__name__)


def compute_withdraw_amounts(
    shares: AmountLike,
    pool: PoolState,
    *,
    settings: EngineSettings = DEFAULT_SETTINGS,
) -> tuple[Decimal, Decimal]:
    """Compute the assets returned for burning ``shares``.

    amount_x = floor7(shares / total_shares * reserve_x). Rounding is always
    down so the residue stays with the remaining holders.

    Returns:
        Tuple of (amount_a, amount_b)

    Raises:
        InvalidAmount: If shares is not a positive amount
        EmptyPool: If the pool has no shares outstanding
        SharesExceedSupply: If shares > total_shares
        EmptyPoolInconsistentState: If shares exist but a reserve is zero
    """
    burned = validate_amount(shares, "shares", settings.max_amount)
    if pool.total_shares == 0:
        raise EmptyPool("Cannot withdraw from empty pool")
    pool.require_reserves()
    if burned > pool.total_shares:
        raise SharesExceedSupply(burned, pool.total_shares)

    ratio = div(burned, pool.total_shares, Rounding.DOWN)
    amount_a = quantize(mul(ratio, pool.reserve_a), settings.scale, Rounding.DOWN)
    amount_b = quantize(mul(ratio, pool.reserve_b), settings.scale, Rounding.DOWN)
    return amount_a, amount_b


def compute_withdraw(
    shares: AmountLike,
    pool: PoolState,
    *,
    settings: EngineSettings = DEFAULT_SETTINGS,
) -> WithdrawEstimate:
    """Estimate a withdrawal against a pool snapshot.

    When the withdrawal drains either reserve the post-trade spot price is
    undefined, so ``price_impact`` is reported as 0.00 and
    ``will_empty_pool`` is set.
    """
    amount_a, amount_b = compute_withdraw_amounts(shares, pool, settings=settings)

    share_price = quantize(
        div(pool.reserve_a, pool.total_shares, Rounding.DOWN), settings.scale, Rounding.DOWN
    )

    new_reserve_a = sub(pool.reserve_a, amount_a)
    new_reserve_b = sub(pool.reserve_b, amount_b)
    will_empty_pool = new_reserve_a <= 0 or new_reserve_b <= 0

    if will_empty_pool:
        price_impact = quantize(ZERO, PERCENT_PLACES, Rounding.DOWN)
    else:
        change = spot_price_change(
            pool.reserve_a, pool.reserve_b, new_reserve_a, new_reserve_b
        )
        price_impact = percent(change, PERCENT_PLACES, Rounding.DOWN)

    logger.debug(
        "Withdraw estimate: shares=%s amount_a=%s amount_b=%s will_empty_pool=%s",
        shares,
        amount_a,
        amount_b,
        will_empty_pool,
    )

    return WithdrawEstimate(
        amount_a=amount_a,
        amount_b=amount_b,
        share_price=share_price,
        price_impact=price_impact,
        will_empty_pool=will_empty_pool,
    )
