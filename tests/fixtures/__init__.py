"""Test fixtures for pool accounting tests."""

from tests.fixtures.pool_fixtures import (
    PoolProfile,
    apply_deposit,
    apply_swap,
    apply_withdraw,
    create_pool,
    get_pool_reserves,
)

__all__ = [
    "PoolProfile",
    "apply_deposit",
    "apply_swap",
    "apply_withdraw",
    "create_pool",
    "get_pool_reserves",
]
