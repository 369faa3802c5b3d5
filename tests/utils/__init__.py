"""Accounting verification utilities for pool tests."""

from tests.utils.accounting_verification import (
    verify_conservative_withdraw,
    verify_invariant_non_decreasing,
    verify_proportional_deposit,
    verify_share_proportionality,
)

__all__ = [
    "verify_conservative_withdraw",
    "verify_invariant_non_decreasing",
    "verify_proportional_deposit",
    "verify_share_proportionality",
]
