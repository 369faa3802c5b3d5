"""Fixed-point decimal arithmetic at the ledger's 7-digit resolution.

Amounts are plain ``Decimal`` values. Arithmetic runs in a dedicated
context wide enough that products of two maximal ledger amounts are
exact; only division and square root can be inexact, so both take a
mandatory ``Rounding`` and round in that direction. Published values are
quantized to a fixed number of fractional digits with an explicit mode.
"""

import decimal
import math
import re
from decimal import Decimal
from enum import Enum
from typing import Union

from lp_engine.core.errors import DivisionByZero, InvalidAmount

AmountLike = Union[str, int, Decimal]

# Fractional digits of a ledger amount (1 stroop = 0.0000001)
SCALE = 7

# Significant digits carried by intermediate results
WORKING_PRECISION = 60

# Fractional digits kept by sqrt before the caller quantizes
SQRT_PLACES = 30

ZERO = Decimal("0")
ONE = Decimal("1")
HUNDRED = Decimal("100")

# Fractional digits of reported percentages
PERCENT_PLACES = 2
POOL_SHARE_PLACES = 4

# Largest amount the ledger can hold: (2**63 - 1) stroops
MAX_AMOUNT = Decimal("922337203685.4775807")

_DECIMAL_PATTERN = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")


class Rounding(Enum):
    """Rounding direction, applied to the magnitude of the value."""
    DOWN = decimal.ROUND_DOWN        # toward zero
    UP = decimal.ROUND_UP            # away from zero
    NEAREST = decimal.ROUND_HALF_UP  # ties away from zero


_TRAPS = [decimal.InvalidOperation, decimal.DivisionByZero, decimal.Overflow]

_CONTEXTS = {
    rounding: decimal.Context(
        prec=WORKING_PRECISION, rounding=rounding.value, traps=_TRAPS
    )
    for rounding in Rounding
}


def context(rounding: Rounding = Rounding.DOWN) -> decimal.Context:
    """Return the working context for the given rounding direction."""
    return _CONTEXTS[rounding]


# =============================================================================
# Construction and formatting
# =============================================================================


def to_decimal(value: AmountLike) -> Decimal:
    """Parse an amount without going through floating point.

    Accepts ASCII decimal strings (optionally with an exponent), integers
    and finite ``Decimal`` values.

    Raises:
        InvalidAmount: For floats, booleans, empty or non-numeric strings,
            NaN and infinities.
    """
    if isinstance(value, bool) or isinstance(value, float):
        raise InvalidAmount(
            f"Amount must be a decimal string, int or Decimal, got {type(value).__name__}"
        )
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            raise InvalidAmount("Amount must be a non-empty string")
        if not _DECIMAL_PATTERN.match(text):
            raise InvalidAmount(f"Amount must be a valid number, got {value!r}")
        result = Decimal(text)
    else:
        raise InvalidAmount(
            f"Amount must be a decimal string, int or Decimal, got {type(value).__name__}"
        )

    if not result.is_finite():
        raise InvalidAmount(f"Amount must be a finite number, got {value!r}")
    return result


def from_scaled(units: int, scale: int = SCALE) -> Decimal:
    """Build an amount from its integer-scaled form (e.g. stroops)."""
    if isinstance(units, bool) or not isinstance(units, int):
        raise InvalidAmount(f"Scaled amount must be an int, got {type(units).__name__}")
    return Decimal(units).scaleb(-scale, context=context())


def to_scaled(value: Decimal, rounding: Rounding, scale: int = SCALE) -> int:
    """Convert an amount to integer units of ``10**-scale``."""
    return int(quantize(value, scale, rounding).scaleb(scale, context=context()))


def quantize(value: Decimal, places: int, rounding: Rounding) -> Decimal:
    """Round to exactly ``places`` fractional digits."""
    exponent = Decimal(1).scaleb(-places)
    return value.quantize(exponent, rounding=rounding.value, context=context(rounding))


def to_fixed(value: Decimal, places: int = SCALE, rounding: Rounding = Rounding.DOWN) -> str:
    """Format with exactly ``places`` fractional digits."""
    return f"{quantize(value, places, rounding):f}"


# =============================================================================
# Arithmetic
# =============================================================================


def add(a: Decimal, b: Decimal) -> Decimal:
    return context().add(a, b)


def sub(a: Decimal, b: Decimal) -> Decimal:
    return context().subtract(a, b)


def mul(a: Decimal, b: Decimal) -> Decimal:
    return context().multiply(a, b)


def div(a: Decimal, b: Decimal, rounding: Rounding) -> Decimal:
    """Divide at working precision, rounding in the given direction.

    Raises:
        DivisionByZero: If ``b`` is zero.
    """
    if b == 0:
        raise DivisionByZero(f"Division of {a} by zero")
    return context(rounding).divide(a, b)


def sqrt(value: Decimal, rounding: Rounding, places: int = SQRT_PLACES) -> Decimal:
    """Square root rounded to ``places`` fractional digits.

    ``Decimal.sqrt`` always rounds half-even, so the root is taken on the
    exact scaled integer with ``math.isqrt`` and then adjusted for the
    requested direction.

    Raises:
        InvalidAmount: If ``value`` is negative.
    """
    if value < 0:
        raise InvalidAmount(f"Cannot take square root of negative value {value}")

    # value * 10^(2*places) as an exact fraction numerator / denominator
    sign, digits, exponent = value.as_tuple()
    coefficient = int("".join(map(str, digits))) if digits else 0
    shift = exponent + 2 * places
    if shift >= 0:
        numerator, denominator = coefficient * 10 ** shift, 1
    else:
        numerator, denominator = coefficient, 10 ** -shift

    root = math.isqrt(numerator // denominator)
    if rounding is Rounding.UP:
        if root * root * denominator != numerator:
            root += 1
    elif rounding is Rounding.NEAREST:
        # round up when value >= (root + 1/2)^2
        if 4 * numerator >= (2 * root + 1) ** 2 * denominator:
            root += 1

    return Decimal(f"{root}E-{places}")


def minimum(a: Decimal, b: Decimal) -> Decimal:
    return a if a <= b else b


def maximum(a: Decimal, b: Decimal) -> Decimal:
    return a if a >= b else b


def absolute(value: Decimal) -> Decimal:
    return -value if value < 0 else value


def percent(fraction: Decimal, places: int, rounding: Rounding) -> Decimal:
    """Express a fraction as a percentage with ``places`` fractional digits."""
    return quantize(mul(fraction, HUNDRED), places, rounding)
