"""Accounting verification utilities for testing pool correctness.

This module provides utilities to verify the properties every snapshot
transition must keep:
- Invariant: a swap never decreases reserve_a * reserve_b
- Proportionality: deposits keep the pool's reserve ratio, and the
  depositor's fraction of supply matches the fraction of each reserve
  they add
- Conservative rounding: withdrawals never pay more than the exact share

Comparisons run through the engine's fixed-point helpers so products of
large reserves stay exact.
"""

from decimal import Decimal

from lp_engine.core.fixed_point import SCALE, Rounding, add, div, mul, sub
from lp_engine.core.pool import PoolState

STROOP = Decimal(1).scaleb(-SCALE)


def verify_invariant_non_decreasing(before: PoolState, after: PoolState) -> tuple[bool, str]:
    """Verify that k did not decrease across a swap.

    Returns:
        Tuple of (is_valid, error_message)
    """
    k_before = mul(before.reserve_a, before.reserve_b)
    k_after = mul(after.reserve_a, after.reserve_b)
    if k_after < k_before:
        return False, f"k decreased from {k_before} to {k_after}"
    return True, ""


def verify_proportional_deposit(
    pool: PoolState,
    actual_a: Decimal,
    actual_b: Decimal,
) -> tuple[bool, str]:
    """Verify actual_a / reserve_a and actual_b / reserve_b agree.

    Both amounts are floored from the same share ratio, so the cross
    products may differ by at most one stroop times the larger reserve.

    Returns:
        Tuple of (is_valid, error_message)
    """
    cross_a = mul(actual_a, pool.reserve_b)
    cross_b = mul(actual_b, pool.reserve_a)
    drift = abs(sub(cross_a, cross_b))
    bound = mul(STROOP, add(pool.reserve_a, pool.reserve_b))
    if drift > bound:
        return False, f"Deposit ({actual_a}, {actual_b}) drifts {drift} from pool ratio"
    return True, ""


def verify_share_proportionality(
    pool: PoolState,
    shares: Decimal,
    actual_a: Decimal,
    actual_b: Decimal,
) -> tuple[bool, str]:
    """Verify shares / new_total_shares against actual_x / (reserve_x + actual_x).

    The share fraction may never exceed either asset fraction, which would
    dilute existing holders. It may fall short by at most the rounding of
    one stroop on the share count and on each consumed amount.

    Returns:
        Tuple of (is_valid, error_message)
    """
    share_fraction = div(shares, add(pool.total_shares, shares), Rounding.DOWN)
    slack = add(
        div(STROOP, pool.total_shares, Rounding.UP),
        add(
            div(STROOP, pool.reserve_a, Rounding.UP),
            div(STROOP, pool.reserve_b, Rounding.UP),
        ),
    )

    for name, actual, reserve in (
        ("a", actual_a, pool.reserve_a),
        ("b", actual_b, pool.reserve_b),
    ):
        asset_fraction = div(actual, add(reserve, actual), Rounding.UP)
        if share_fraction > asset_fraction:
            return False, (
                f"Share fraction {share_fraction} exceeds asset {name} fraction "
                f"{asset_fraction} for deposit ({actual_a}, {actual_b}), shares {shares}"
            )
        if sub(asset_fraction, share_fraction) > slack:
            return False, (
                f"Share fraction {share_fraction} trails asset {name} fraction "
                f"{asset_fraction} by more than {slack}"
            )
    return True, ""


def verify_conservative_withdraw(
    pool: PoolState,
    shares: Decimal,
    amount_a: Decimal,
    amount_b: Decimal,
) -> tuple[bool, str]:
    """Verify amount_x * total_shares <= shares * reserve_x for both assets.

    Returns:
        Tuple of (is_valid, error_message)
    """
    if mul(amount_a, pool.total_shares) > mul(shares, pool.reserve_a):
        return False, f"amount_a {amount_a} exceeds the exact share of reserve A"
    if mul(amount_b, pool.total_shares) > mul(shares, pool.reserve_b):
        return False, f"amount_b {amount_b} exceeds the exact share of reserve B"
    return True, ""
