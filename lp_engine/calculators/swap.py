"""Constant-product swap quotes with a basis-point fee on input."""

import logging
from decimal import Decimal
from typing import Optional

from lp_engine.config import DEFAULT_SETTINGS, EngineSettings
from lp_engine.core.errors import ZeroReserve
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
    sub,
)
from lp_engine.core.pool import PoolState, PriceImpact, SwapQuote
from lp_engine.core.validation import (
    MAX_FEE_BASIS_POINTS,
    validate_amount,
    validate_fee_basis_points,
    validate_non_negative,
    validate_slippage,
)

logger = logging.getLogger(__name__)


def _reserves(reserve_in: AmountLike, reserve_out: AmountLike) -> tuple[Decimal, Decimal]:
    r_in = validate_non_negative(reserve_in, "reserve_in")
    r_out = validate_non_negative(reserve_out, "reserve_out")
    if r_in == 0 or r_out == 0:
        raise ZeroReserve(
            f"Reserves must be greater than zero, got reserve_in={r_in} reserve_out={r_out}"
        )
    return r_in, r_out


def fee_multiplier(fee_basis_points: int) -> Decimal:
    """1 - fee/10000, e.g. 0.997 for 30 bps."""
    fee = Decimal(validate_fee_basis_points(fee_basis_points))
    return sub(ONE, div(fee, Decimal(MAX_FEE_BASIS_POINTS), Rounding.DOWN))


def compute_swap_output(
    input_amount: AmountLike,
    reserve_in: AmountLike,
    reserve_out: AmountLike,
    fee_basis_points: Optional[int] = None,
    *,
    settings: EngineSettings = DEFAULT_SETTINGS,
) -> Decimal:
    """Output of an exact-input swap.

    Solves (x + dx')(y - dy) = x * y for dy, where dx' is the input after
    the fee: dy = dx' * y / (x + dx'). The fee is taken out of the input
    before the swap and the full input is added to the reserve, so k
    strictly grows. The output is rounded down, so the trader never gets
    more than the exact formula yields.

    Args:
        input_amount: Amount of the input asset sold to the pool
        reserve_in: Pool reserve of the input asset
        reserve_out: Pool reserve of the output asset
        fee_basis_points: Pool fee (default: settings.default_fee_basis_points)

    Returns:
        Output amount, 7 fractional digits

    Raises:
        InvalidAmount: If input_amount is not a positive amount
        ZeroReserve: If either reserve is zero
        InvalidFee: If the fee is outside [0, 10000]
    """
    amount = validate_amount(input_amount, "input_amount", settings.max_amount)
    r_in, r_out = _reserves(reserve_in, reserve_out)
    if fee_basis_points is None:
        fee_basis_points = settings.default_fee_basis_points

    input_after_fee = mul(amount, fee_multiplier(fee_basis_points))
    numerator = mul(input_after_fee, r_out)
    denominator = add(r_in, input_after_fee)
    return quantize(div(numerator, denominator, Rounding.DOWN), settings.scale, Rounding.DOWN)


def compute_price_impact(
    input_amount: AmountLike,
    output_amount: AmountLike,
    reserve_in: AmountLike,
    reserve_out: AmountLike,
    *,
    slippage: Optional[AmountLike] = None,
    settings: EngineSettings = DEFAULT_SETTINGS,
) -> PriceImpact:
    """Price impact of a swap against the pre-trade spot price.

    spot = reserve_out / reserve_in, effective = output / input,
    impact = |spot - effective| / spot. ``minimum_received`` is the output
    reduced by ``slippage`` (the output itself when no slippage is given).

    Raises:
        InvalidAmount: If input is not positive or output is negative
        ZeroReserve: If either reserve is zero
        InvalidSlippage: If slippage is outside [0, 1]
    """
    amount_in = validate_amount(input_amount, "input_amount", settings.max_amount)
    amount_out = validate_non_negative(output_amount, "output_amount", settings.max_amount)
    r_in, r_out = _reserves(reserve_in, reserve_out)
    tolerance = ZERO if slippage is None else validate_slippage(slippage)

    spot = div(r_out, r_in, Rounding.DOWN)
    effective = div(amount_out, amount_in, Rounding.DOWN)
    impact = div(absolute(sub(spot, effective)), spot, Rounding.DOWN)
    is_high_impact = impact > settings.high_impact_threshold

    if is_high_impact:
        logger.warning(
            "High price impact %s for input %s against reserves (%s, %s)",
            impact,
            amount_in,
            r_in,
            r_out,
        )

    minimum_received = quantize(
        mul(amount_out, sub(ONE, tolerance)), settings.scale, Rounding.DOWN
    )

    return PriceImpact(
        input_amount=amount_in,
        output_amount=amount_out,
        price_impact=percent(impact, PERCENT_PLACES, Rounding.DOWN),
        minimum_received=minimum_received,
        effective_price=quantize(effective, settings.scale, Rounding.DOWN),
        is_high_impact=is_high_impact,
    )


def quote_swap(
    input_amount: AmountLike,
    pool: PoolState,
    *,
    asset_a_in: bool = True,
    slippage: Optional[AmountLike] = None,
    settings: EngineSettings = DEFAULT_SETTINGS,
) -> SwapQuote:
    """Quote an exact-input swap against a pool snapshot.

    Args:
        input_amount: Amount sold to the pool
        pool: Current pool snapshot; its fee is used
        asset_a_in: True to sell asset A for B, False to sell B for A
        slippage: Optional tolerance applied to ``minimum_received``

    Returns:
        SwapQuote with the output, fee taken, impact and post-trade reserves
    """
    if asset_a_in:
        reserve_in, reserve_out = pool.reserve_a, pool.reserve_b
    else:
        reserve_in, reserve_out = pool.reserve_b, pool.reserve_a

    output = compute_swap_output(
        input_amount, reserve_in, reserve_out, pool.fee_basis_points, settings=settings
    )
    amount = validate_amount(input_amount, "input_amount", settings.max_amount)
    fee_amount = quantize(
        sub(amount, mul(amount, fee_multiplier(pool.fee_basis_points))),
        settings.scale,
        Rounding.UP,
    )
    impact = compute_price_impact(
        amount, output, reserve_in, reserve_out, slippage=slippage, settings=settings
    )

    logger.debug(
        "Swap quote: input=%s output=%s fee=%s impact=%s%%",
        amount,
        output,
        fee_amount,
        impact.price_impact,
    )

    return SwapQuote(
        input_amount=amount,
        output_amount=output,
        fee_amount=fee_amount,
        impact=impact,
        new_reserve_in=add(reserve_in, amount),
        new_reserve_out=sub(reserve_out, output),
    )
