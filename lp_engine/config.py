"""Engine settings and environment overrides."""

from dataclasses import dataclass, replace
from decimal import Decimal
import os
from typing import Mapping, Optional

from lp_engine.core.errors import PoolEngineError
from lp_engine.core.fixed_point import MAX_AMOUNT, SCALE, to_decimal
from lp_engine.core.validation import MIN_LIQUIDITY

ENV_PREFIX = "LP_ENGINE_"


@dataclass(frozen=True)
class EngineSettings:
    """Numeric policy shared by every calculator.

    ``minimum_locked_shares`` is the share amount withheld from the first
    depositor and never issued to anyone. Zero disables the lock.
    """
    scale: int = SCALE
    max_amount: Decimal = MAX_AMOUNT
    min_liquidity: Decimal = MIN_LIQUIDITY
    high_impact_threshold: Decimal = Decimal("0.05")
    default_fee_basis_points: int = 30
    default_slippage: Decimal = Decimal("0.01")
    minimum_locked_shares: Decimal = Decimal("0")

    def __post_init__(self) -> None:
        if self.scale < 0:
            raise PoolEngineError(f"scale must be >= 0, got {self.scale}")
        if self.max_amount <= 0:
            raise PoolEngineError(f"max_amount must be > 0, got {self.max_amount}")
        if self.min_liquidity < 0:
            raise PoolEngineError(f"min_liquidity must be >= 0, got {self.min_liquidity}")
        if not (0 <= self.high_impact_threshold <= 1):
            raise PoolEngineError(
                f"high_impact_threshold must be in [0, 1], got {self.high_impact_threshold}"
            )
        if not (0 <= self.default_fee_basis_points <= 10000):
            raise PoolEngineError(
                f"default_fee_basis_points must be in [0, 10000], "
                f"got {self.default_fee_basis_points}"
            )
        if not (0 <= self.default_slippage <= 1):
            raise PoolEngineError(
                f"default_slippage must be in [0, 1], got {self.default_slippage}"
            )
        if self.minimum_locked_shares < 0:
            raise PoolEngineError(
                f"minimum_locked_shares must be >= 0, got {self.minimum_locked_shares}"
            )


DEFAULT_SETTINGS = EngineSettings()


_DECIMAL_FIELDS = (
    "max_amount",
    "min_liquidity",
    "high_impact_threshold",
    "default_slippage",
    "minimum_locked_shares",
)

_INT_FIELDS = ("scale", "default_fee_basis_points")


def load_settings(
    environ: Optional[Mapping[str, str]] = None,
    base: EngineSettings = DEFAULT_SETTINGS,
) -> EngineSettings:
    """Resolve settings from ``LP_ENGINE_*`` environment variables.

    Unset variables keep the value from ``base``. For example
    ``LP_ENGINE_MINIMUM_LOCKED_SHARES=0.0001`` turns on the genesis lock.
    """
    env = os.environ if environ is None else environ
    overrides: dict[str, object] = {}

    for name in _DECIMAL_FIELDS:
        raw = env.get(ENV_PREFIX + name.upper())
        if raw is not None:
            overrides[name] = to_decimal(raw)

    for name in _INT_FIELDS:
        key = ENV_PREFIX + name.upper()
        raw = env.get(key)
        if raw is not None:
            try:
                overrides[name] = int(raw)
            except ValueError as exc:
                raise PoolEngineError(f"{key} must be an integer, got {raw!r}") from exc

    return replace(base, **overrides)
