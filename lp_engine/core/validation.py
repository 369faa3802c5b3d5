"""Input guards for amounts, prices, slippage, fees and pool identifiers.

Every validator either returns the parsed value or raises the specific
``PoolEngineError`` subclass for its kind. None of them log or touch any
state; the calculators call them before doing arithmetic.
"""

import re
from decimal import Decimal
from typing import Optional

from lp_engine.core.errors import (
    BelowMinimumLiquidity,
    InsufficientShares,
    InvalidAmount,
    InvalidFee,
    InvalidPoolIdentifier,
    InvalidPrice,
    InvalidSlippage,
)
from lp_engine.core.fixed_point import (
    MAX_AMOUNT,
    AmountLike,
    Rounding,
    mul,
    sqrt,
    to_decimal,
    to_fixed,
)
from lp_engine.core.params import DepositParams, WithdrawParams

# Smallest geometric mean a deposit may have (one stroop)
MIN_LIQUIDITY = Decimal("0.0000001")

MAX_FEE_BASIS_POINTS = 10000

_POOL_ID_PATTERN = re.compile(r"^[0-9a-fA-F]{64}$")


def _parse(value: AmountLike, field_name: str, error: type) -> Decimal:
    """Parse with ``to_decimal`` and re-raise as the caller's error kind."""
    try:
        return to_decimal(value)
    except InvalidAmount as exc:
        raise error(f"{field_name}: {exc.message}") from exc


def validate_amount(
    amount: AmountLike,
    field_name: str = "amount",
    max_amount: Decimal = MAX_AMOUNT,
) -> Decimal:
    """Validate a strictly positive ledger amount.

    Args:
        amount: Decimal string, int or Decimal
        field_name: Name used in the error message
        max_amount: Largest representable amount

    Returns:
        The parsed amount

    Raises:
        InvalidAmount: If empty, non-numeric, non-finite, <= 0 or above max_amount
    """
    value = _parse(amount, field_name, InvalidAmount)
    if value <= 0:
        raise InvalidAmount(f"{field_name} must be greater than 0, got {value}")
    if value > max_amount:
        raise InvalidAmount(f"{field_name} exceeds maximum amount {max_amount}, got {value}")
    return value


def validate_non_negative(
    amount: AmountLike,
    field_name: str = "amount",
    max_amount: Decimal = MAX_AMOUNT,
) -> Decimal:
    """Like ``validate_amount`` but accepts zero."""
    value = _parse(amount, field_name, InvalidAmount)
    if value < 0:
        raise InvalidAmount(f"{field_name} must be non-negative, got {value}")
    if value > max_amount:
        raise InvalidAmount(f"{field_name} exceeds maximum amount {max_amount}, got {value}")
    return value


def validate_slippage(fraction: AmountLike) -> Decimal:
    """Validate a slippage tolerance given as a fraction (0.01 = 1%).

    Raises:
        InvalidSlippage: If not a number or outside [0, 1]
    """
    value = _parse(fraction, "slippage", InvalidSlippage)
    if value < 0 or value > 1:
        raise InvalidSlippage(f"Slippage must be between 0 and 1 (0% to 100%), got {value}")
    return value


def validate_price(price: AmountLike, field_name: str = "price") -> Decimal:
    """Validate a strictly positive, finite price."""
    value = _parse(price, field_name, InvalidPrice)
    if value <= 0:
        raise InvalidPrice(f"{field_name} must be greater than 0, got {value}")
    return value


def validate_price_range(min_price: AmountLike, max_price: AmountLike) -> tuple[Decimal, Decimal]:
    """Validate both bounds and that ``min_price < max_price``."""
    low = validate_price(min_price, "min_price")
    high = validate_price(max_price, "max_price")
    if low >= high:
        raise InvalidPrice(f"min_price must be less than max_price, got {low} >= {high}")
    return low, high


def validate_pool_id(pool_id: str) -> str:
    """Validate a pool identifier (64 hex characters, any case)."""
    if not isinstance(pool_id, str) or not pool_id:
        raise InvalidPoolIdentifier("Pool ID must be a non-empty string")
    if not _POOL_ID_PATTERN.match(pool_id):
        raise InvalidPoolIdentifier(
            f"Invalid pool ID format {pool_id!r}. Expected 64-character hexadecimal string"
        )
    return pool_id


def validate_fee_basis_points(fee_basis_points: int) -> int:
    """Validate a pool fee as an integer number of basis points."""
    if isinstance(fee_basis_points, bool) or not isinstance(fee_basis_points, int):
        raise InvalidFee(
            f"Fee must be an integer number of basis points, got {fee_basis_points!r}"
        )
    if not (0 <= fee_basis_points <= MAX_FEE_BASIS_POINTS):
        raise InvalidFee(
            f"Fee must be in [0, {MAX_FEE_BASIS_POINTS}] basis points, got {fee_basis_points}"
        )
    return fee_basis_points


def validate_minimum_liquidity(
    amount_a: AmountLike,
    amount_b: AmountLike,
    min_liquidity: Decimal = MIN_LIQUIDITY,
    max_amount: Decimal = MAX_AMOUNT,
) -> Decimal:
    """Reject dust deposits by their geometric mean.

    Returns:
        sqrt(amount_a * amount_b), rounded down

    Raises:
        BelowMinimumLiquidity: If the geometric mean is below min_liquidity
    """
    a = validate_non_negative(amount_a, "amount_a", max_amount)
    b = validate_non_negative(amount_b, "amount_b", max_amount)
    geometric_mean = sqrt(mul(a, b), Rounding.DOWN)
    if geometric_mean < min_liquidity:
        raise BelowMinimumLiquidity(
            f"Liquidity below minimum threshold. Calculated: {to_fixed(geometric_mean)}, "
            f"Minimum: {min_liquidity}"
        )
    return geometric_mean


def validate_sufficient_shares(requested: AmountLike, available: AmountLike) -> Decimal:
    """Check that an account holds at least the shares it wants to burn."""
    requested_shares = validate_amount(requested, "requested shares")
    available_shares = validate_non_negative(available, "available shares")
    if requested_shares > available_shares:
        raise InsufficientShares(requested_shares, available_shares)
    return requested_shares


def _validate_network_fee(fee: Optional[int]) -> None:
    if fee is None:
        return
    if isinstance(fee, bool) or not isinstance(fee, int) or fee < 0:
        raise InvalidFee(f"Fee must be a non-negative integer, got {fee!r}")


def validate_deposit_params(params: DepositParams) -> None:
    """Validate every field of a deposit request.

    Raises:
        PoolEngineError: The specific kind for the first invalid field
    """
    validate_pool_id(params.pool_id)
    validate_amount(params.max_amount_a, "max_amount_a")
    validate_amount(params.max_amount_b, "max_amount_b")

    if params.slippage_tolerance is not None:
        validate_slippage(params.slippage_tolerance)

    if params.min_price is not None and params.max_price is not None:
        validate_price_range(params.min_price, params.max_price)
    elif params.min_price is not None:
        validate_price(params.min_price, "min_price")
    elif params.max_price is not None:
        validate_price(params.max_price, "max_price")

    _validate_network_fee(params.fee)


def validate_withdraw_params(params: WithdrawParams) -> None:
    """Validate every field of a withdraw request."""
    validate_pool_id(params.pool_id)
    validate_amount(params.shares, "shares")

    if params.min_amount_a is not None:
        validate_amount(params.min_amount_a, "min_amount_a")
    if params.min_amount_b is not None:
        validate_amount(params.min_amount_b, "min_amount_b")

    if params.slippage_tolerance is not None:
        validate_slippage(params.slippage_tolerance)

    _validate_network_fee(params.fee)
