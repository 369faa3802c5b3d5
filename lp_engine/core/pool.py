"""Pool snapshot and calculator result types."""

from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Optional

from lp_engine.core.errors import EmptyPoolInconsistentState, InvalidPoolState, ZeroReserve
from lp_engine.core.fixed_point import (
    SCALE,
    ZERO,
    AmountLike,
    Rounding,
    absolute,
    div,
    mul,
    quantize,
    sub,
    to_decimal,
)
from lp_engine.core.validation import validate_fee_basis_points, validate_pool_id

# k is reported with twice the amount scale so it is exact
CONSTANT_PRODUCT_PLACES = 2 * SCALE


def constant_product(reserve_a: Decimal, reserve_b: Decimal) -> Decimal:
    """The constant product invariant k = reserve_a * reserve_b."""
    return quantize(mul(reserve_a, reserve_b), CONSTANT_PRODUCT_PLACES, Rounding.DOWN)


def spot_price(reserve_a: Decimal, reserve_b: Decimal, scale: int = SCALE) -> Decimal:
    """Current exchange rate (B per A) before fees, rounded down.

    Raises:
        ZeroReserve: If reserve_a is zero
    """
    if reserve_a == 0:
        raise ZeroReserve("Reserve A cannot be zero when computing spot price")
    return quantize(div(reserve_b, reserve_a, Rounding.DOWN), scale, Rounding.DOWN)


def spot_price_change(
    reserve_a: Decimal,
    reserve_b: Decimal,
    new_reserve_a: Decimal,
    new_reserve_b: Decimal,
) -> Decimal:
    """Absolute relative change of the B-per-A price, as a fraction.

    Raises:
        ZeroReserve: If either price is undefined or the old price is zero
    """
    if reserve_a == 0 or new_reserve_a == 0:
        raise ZeroReserve("Reserve A cannot be zero when comparing spot prices")
    before = div(reserve_b, reserve_a, Rounding.DOWN)
    if before == 0:
        raise ZeroReserve("Reserve B cannot be zero when comparing spot prices")
    after = div(new_reserve_b, new_reserve_a, Rounding.DOWN)
    return div(absolute(sub(after, before)), before, Rounding.DOWN)


@dataclass(frozen=True)
class PoolState:
    """Immutable snapshot of a two-asset pool.

    Supplied by the ledger layer and never mutated: calculators return new
    result objects and the caller builds the next snapshot once a
    transaction confirms. ``total_shares == 0`` with non-zero reserves (or
    the reverse) is accepted here; each calculator decides how to reject
    the inconsistent case.
    """
    reserve_a: Decimal
    reserve_b: Decimal
    total_shares: Decimal
    fee_basis_points: int = 30
    pool_id: Optional[str] = None

    def __post_init__(self) -> None:
        for name in ("reserve_a", "reserve_b", "total_shares"):
            value = to_decimal(getattr(self, name))
            if value < 0:
                raise InvalidPoolState(f"{name} must be >= 0, got {value}")
            object.__setattr__(self, name, value)
        validate_fee_basis_points(self.fee_basis_points)
        if self.pool_id is not None:
            validate_pool_id(self.pool_id)

    @classmethod
    def from_values(
        cls,
        reserve_a: AmountLike,
        reserve_b: AmountLike,
        total_shares: AmountLike,
        fee_basis_points: int = 30,
        pool_id: Optional[str] = None,
    ) -> "PoolState":
        """Build a snapshot from strings or ints as returned by the ledger."""
        return cls(
            reserve_a=to_decimal(reserve_a),
            reserve_b=to_decimal(reserve_b),
            total_shares=to_decimal(total_shares),
            fee_basis_points=fee_basis_points,
            pool_id=pool_id,
        )

    @property
    def is_empty(self) -> bool:
        """True before the first deposit (no shares issued)."""
        return self.total_shares == 0

    @property
    def is_consistent(self) -> bool:
        """True when shares exist exactly when both reserves are funded."""
        has_reserves = self.reserve_a > 0 and self.reserve_b > 0
        no_reserves = self.reserve_a == 0 and self.reserve_b == 0
        if self.total_shares == 0:
            return no_reserves
        return has_reserves

    def require_reserves(self) -> None:
        """Reject a snapshot that has shares outstanding but an empty reserve.

        Raises:
            EmptyPoolInconsistentState: If total_shares > 0 and either
                reserve is zero
        """
        if self.total_shares > 0 and (self.reserve_a == 0 or self.reserve_b == 0):
            raise EmptyPoolInconsistentState(
                f"Pool has {self.total_shares} shares outstanding but a zero reserve "
                f"(reserve_a={self.reserve_a}, reserve_b={self.reserve_b})"
            )

    @property
    def k(self) -> Decimal:
        """The constant product invariant."""
        return constant_product(self.reserve_a, self.reserve_b)

    @property
    def spot_price(self) -> Decimal:
        """B per A, rounded down to 7 digits."""
        return spot_price(self.reserve_a, self.reserve_b)

    def with_reserves(
        self,
        reserve_a: Decimal,
        reserve_b: Decimal,
        total_shares: Optional[Decimal] = None,
    ) -> "PoolState":
        """Return the snapshot a confirmed transaction would produce."""
        return replace(
            self,
            reserve_a=reserve_a,
            reserve_b=reserve_b,
            total_shares=self.total_shares if total_shares is None else total_shares,
        )


@dataclass(frozen=True)
class DepositEstimate:
    """Predicted outcome of a two-sided deposit.

    ``price_impact`` and ``pool_share`` are percentages. ``locked_shares``
    is non-zero only for a genesis deposit with the minimum-liquidity lock
    enabled.
    """
    shares: Decimal
    actual_amount_a: Decimal
    actual_amount_b: Decimal
    share_price: Decimal
    price_impact: Decimal
    pool_share: Decimal
    locked_shares: Decimal = ZERO


@dataclass(frozen=True)
class WithdrawEstimate:
    """Predicted outcome of burning shares. ``price_impact`` is a percentage."""
    amount_a: Decimal
    amount_b: Decimal
    share_price: Decimal
    price_impact: Decimal
    will_empty_pool: bool = False


@dataclass(frozen=True)
class PriceImpact:
    """Price impact of a swap.

    ``price_impact`` is a percentage with two digits; ``is_high_impact`` is
    judged on the unrounded fraction.
    """
    input_amount: Decimal
    output_amount: Decimal
    price_impact: Decimal
    minimum_received: Decimal
    effective_price: Decimal
    is_high_impact: bool


@dataclass(frozen=True)
class SwapQuote:
    """A full quote for swapping against a pool snapshot."""
    input_amount: Decimal
    output_amount: Decimal
    fee_amount: Decimal
    impact: PriceImpact
    new_reserve_in: Decimal
    new_reserve_out: Decimal

    @property
    def minimum_received(self) -> Decimal:
        return self.impact.minimum_received


@dataclass(frozen=True)
class MinimumAmounts:
    min_amount_a: Decimal
    min_amount_b: Decimal


@dataclass(frozen=True)
class PriceBounds:
    """Slippage window around an expected price.

    ``min_price`` is rounded down and ``max_price`` up, so the window is
    never narrower than the tolerance.
    """
    min_price: Decimal
    max_price: Decimal
    spot_price: Decimal
    tolerance_percent: Decimal


@dataclass(frozen=True)
class OptimalDeposit:
    amount_a: Decimal
    amount_b: Decimal
    min_amount_a: Decimal
    min_amount_b: Decimal


@dataclass(frozen=True)
class ShareValue:
    value_a: Decimal
    value_b: Decimal


@dataclass(frozen=True)
class PoolAnalytics:
    """On-snapshot analytics, in asset units (no display currency)."""
    tvl: Decimal          # reserve_a + reserve_b
    share_price: Decimal  # value of one share in asset A
