"""Error taxonomy for the pool accounting engine.

Every failure the engine can signal is a subclass of ``PoolEngineError``.
Each kind carries a short machine-readable ``code`` so the transaction
layer can map failures without parsing messages. ``PoolEngineError``
derives from ``ValueError``: all of these are rejections of bad input or
bad pool snapshots, never transient conditions.
"""


class PoolEngineError(ValueError):
    """Base error for all pool engine failures."""

    code = "pool_engine_error"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


# --- Input errors ---

class InvalidAmount(PoolEngineError):
    """Amount is empty, non-numeric, non-finite, non-positive or too large."""

    code = "invalid_amount"


class InvalidSlippage(PoolEngineError):
    """Slippage fraction outside [0, 1]."""

    code = "invalid_slippage"


class InvalidPrice(PoolEngineError):
    code = "invalid_price"


class InvalidPoolIdentifier(PoolEngineError):
    code = "invalid_pool_identifier"


class InvalidFee(PoolEngineError):
    """Fee is not an integer number of basis points in [0, 10000]."""

    code = "invalid_fee"


class InvalidPoolState(PoolEngineError):
    """Pool snapshot carries a negative reserve or share supply."""

    code = "invalid_pool_state"


# --- Pool errors ---

class ZeroReserve(PoolEngineError):
    """A calculation would divide by an empty reserve."""

    code = "zero_reserve"


class EmptyPool(PoolEngineError):
    """Withdrawal against a pool that has no issued shares."""

    code = "empty_pool"


class SharesExceedSupply(PoolEngineError):
    code = "shares_exceed_supply"

    def __init__(self, shares: object, total_shares: object) -> None:
        self.shares = shares
        self.total_shares = total_shares
        super().__init__(
            f"Withdrawal shares {shares} exceed total shares {total_shares}"
        )


class InsufficientShares(PoolEngineError):
    code = "insufficient_shares"

    def __init__(self, requested: object, available: object) -> None:
        self.requested = requested
        self.available = available
        super().__init__(
            f"Insufficient shares. Requested: {requested}, Available: {available}"
        )


class BelowMinimumLiquidity(PoolEngineError):
    """Deposit is too small to mint any meaningful share amount."""

    code = "below_minimum_liquidity"


class EmptyPoolInconsistentState(PoolEngineError):
    """Pool reports issued shares but one of its reserves is zero."""

    code = "empty_pool_inconsistent_state"


# --- Arithmetic errors ---

class DivisionByZero(PoolEngineError, ZeroDivisionError):
    """Fixed-point division with a zero divisor."""

    code = "division_by_zero"
