from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

# Currency noise below half a cent is treated as equality.
EPSILON = 0.005

CENT = Decimal("0.01")


class DomainValidationError(ValueError):
    """Raised when an input violates a calculator rule."""


def round2(value: float) -> float:
    """Round a currency amount to cents, halves away from zero."""
    return float(Decimal(repr(value)).quantize(CENT, rounding=ROUND_HALF_UP))


def is_zero(value: float) -> bool:
    return abs(value) < EPSILON


def round_half_up(value: float) -> int:
    return int(Decimal(repr(value)).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def format_dollar(amount: float) -> str:
    """Render an amount the way the calculator tables show it: ``$15`` or ``$0.50``."""
    amount = abs(round2(amount))
    if amount == int(amount):
        return f"${int(amount)}"
    return f"${amount:.2f}"


def require_non_negative(name: str, values: Iterable[float]) -> None:
    for value in values:
        if value < 0:
            raise DomainValidationError(f"{name} must be non-negative")
