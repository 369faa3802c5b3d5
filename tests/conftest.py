"""Pytest configuration and shared fixtures for pool accounting tests.

This module provides:
- Pytest markers for test categorization
- Shared pool snapshot fixtures
- Custom assertions for accounting properties
"""

from decimal import Decimal

import pytest

from lp_engine.config import EngineSettings
from lp_engine.core.pool import PoolState
from tests.fixtures.pool_fixtures import PoolProfile, create_pool


# ============================================================================
# Pytest Hooks
# ============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "accounting: Share and reserve accounting tests (deposit, withdraw, swap)"
    )
    config.addinivalue_line(
        "markers", "edge_case: Edge case tests with empty, inconsistent or extreme pools"
    )
    config.addinivalue_line(
        "markers", "property: Property-based tests driven by hypothesis"
    )


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on location and name."""
    for item in items:
        if "edge_case" in item.nodeid or "edge_case" in item.name:
            item.add_marker(pytest.mark.edge_case)

        if "properties" in item.nodeid:
            item.add_marker(pytest.mark.property)

        if any(
            keyword in item.nodeid
            for keyword in ["deposit", "withdraw", "swap"]
        ):
            item.add_marker(pytest.mark.accounting)


# ============================================================================
# Pool Fixtures
# ============================================================================


@pytest.fixture
def empty_pool() -> PoolState:
    """Pool before its first deposit (0, 0, 0 shares)."""
    return create_pool(PoolProfile.EMPTY)


@pytest.fixture
def standard_pool() -> PoolState:
    """Pool with reserves (1000, 2000), 200 shares and a 30 bps fee.

    Spot price is 2 B per A and one share is worth 5 A + 10 B.
    """
    return create_pool(PoolProfile.STANDARD)


@pytest.fixture
def balanced_pool() -> PoolState:
    """Pool with equal reserves (10000, 10000) and 10000 shares."""
    return create_pool(PoolProfile.BALANCED)


@pytest.fixture
def inconsistent_pool() -> PoolState:
    """Pool reporting 200 shares while reserve A is empty."""
    return create_pool(PoolProfile.INCONSISTENT)


# ============================================================================
# Settings Fixtures
# ============================================================================


@pytest.fixture
def locked_settings() -> EngineSettings:
    """Settings with a 0.001 share lock on the first deposit."""
    return EngineSettings(minimum_locked_shares=Decimal("0.001"))


# ============================================================================
# Tolerance Fixtures
# ============================================================================


@pytest.fixture
def stroop() -> Decimal:
    """Smallest ledger amount.

    Returns:
        Decimal("0.0000001")
    """
    return Decimal("0.0000001")


# ============================================================================
# Custom Assertions
# ============================================================================


class AccountingAssertions:
    """Custom assertion helpers for pool accounting properties.

    Provides domain-specific assertions with clear error messages.
    """

    @staticmethod
    def assert_fixed(value: Decimal, expected: str, name: str = "value") -> None:
        """Assert a value equals ``expected`` and carries its exact digit count.

        Args:
            value: Actual value
            expected: Expected decimal string, e.g. "200.0000000"
            name: Name for error message
        """
        assert value == Decimal(expected), f"{name}: expected {expected}, got {value}"
        assert f"{value:f}" == expected, (
            f"{name}: expected representation {expected!r}, got {value:f}"
        )

    @staticmethod
    def assert_not_above(actual: Decimal, bound: Decimal, name: str = "value") -> None:
        """Assert a rounded amount never exceeds its exact bound."""
        assert actual <= bound, f"{name} {actual} exceeds bound {bound}"


@pytest.fixture
def accounting_assert() -> AccountingAssertions:
    """Fixture providing custom accounting assertions.

    Example:
        >>> def test_genesis(accounting_assert, empty_pool):
        ...     estimate = compute_deposit("100", "400", empty_pool)
        ...     accounting_assert.assert_fixed(estimate.shares, "200.0000000")
    """
    return AccountingAssertions()
