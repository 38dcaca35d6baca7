"""Chip value assignment and per-player quantity allocation.

Every calculation works in "units" of the smallest chip value so the heuristics
can reason with integer-ish arithmetic; the cents are reconciled once at the end
by :func:`absorb_rounding_drift`.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from enum import Enum
from functools import partial

from .common import DomainValidationError, round2, round_half_up

logger = logging.getLogger("homegame.domain.chips")

# Multipliers of the small blind used to price chips above the big blind.
NICE_MULTIPLIERS = (1, 2, 5, 10, 20, 50, 100, 200, 500, 1000)

# Currency amounts a proportional chip value is snapped to.
NICE_VALUES = (0.01, 0.02, 0.05, 0.10, 0.20, 0.25, 0.50, 1, 2, 5, 10, 25, 50, 100)

# Chips handed out per denomination when solving proportional values; the last
# entry repeats for larger sets.
PROPORTIONAL_TEMPLATE = (20, 15, 10, 8, 5, 4, 3, 2)

SPLIT_DECAY = 0.6

CENT_TOLERANCE = 0.01


@dataclass(frozen=True)
class Blinds:
    small: float
    big: float

    def __post_init__(self) -> None:
        if self.small <= 0:
            raise DomainValidationError("small blind must be positive")
        if self.big <= self.small:
            raise DomainValidationError("big blind must be greater than small blind")


@dataclass(frozen=True)
class ChipAllocation:
    denomination: float
    quantity: int
    value_per_chip: float
    total_value: float | None = None

    def __post_init__(self) -> None:
        if self.total_value is None:
            object.__setattr__(self, "total_value", round2(self.quantity * self.value_per_chip))

    def to_dict(self) -> dict[str, float | int]:
        return {
            "denomination": self.denomination,
            "quantity": self.quantity,
            "value_per_chip": self.value_per_chip,
            "total_value": self.total_value,
        }


class AllocationStrategy(str, Enum):
    SPLIT = "split"
    BALANCED = "balanced"
    HEAVY_SMALL = "heavy_small"
    COMPACT = "compact"

    @property
    def label(self) -> str:
        return _STRATEGY_LABELS[self]


_STRATEGY_LABELS = {
    AllocationStrategy.SPLIT: "Two-Group Split",
    AllocationStrategy.BALANCED: "Balanced",
    AllocationStrategy.HEAVY_SMALL: "Heavy Small",
    AllocationStrategy.COMPACT: "Compact",
}


@dataclass(frozen=True)
class Combination:
    id: str
    name: str
    allocations: tuple[ChipAllocation, ...]
    target_total: float
    strategy: AllocationStrategy | None = None

    @property
    def actual_total(self) -> float:
        return round2(sum(allocation.total_value for allocation in self.allocations))

    @property
    def total_chips(self) -> int:
        return sum(allocation.quantity for allocation in self.allocations)

    @property
    def difference(self) -> float:
        return round2(self.actual_total - self.target_total)

    @property
    def is_exact(self) -> bool:
        return abs(self.difference) < CENT_TOLERANCE

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "strategy": self.strategy.value if self.strategy else None,
            "allocations": [allocation.to_dict() for allocation in self.allocations],
            "target_total": self.target_total,
            "actual_total": self.actual_total,
            "total_chips": self.total_chips,
            "difference": self.difference,
            "is_exact": self.is_exact,
        }


def assign_chip_values(n: int, small_blind: float, big_blind: float) -> list[float]:
    """Price ``n`` ascending chips from the blind structure.

    Chip 0 is the small blind, chip 1 the big blind, and every further chip the
    next unused nice multiple of the small blind above its predecessor.
    """
    if n <= 0:
        return []
    if n == 1:
        return [small_blind]

    values = [small_blind, big_blind]
    nice_values = [round2(multiplier * small_blind) for multiplier in NICE_MULTIPLIERS]

    previous = big_blind
    for _ in range(2, n):
        value = next((nice for nice in nice_values if nice > previous and nice not in values), None)
        if value is None:
            value = round2(previous * 2)
            if value <= previous:
                value = previous * 2
        values.append(value)
        previous = value
    return values


def snap_to_nice(value: float) -> float:
    """Closest nice currency amount by ratio, not by difference."""
    return min(NICE_VALUES, key=lambda nice: abs(math.log(value / nice)))


def assign_proportional_values(denominations: Sequence[float], buy_in: float) -> list[float]:
    """Price chips proportionally to their face value when no blinds are given."""
    if not denominations:
        return []
    if len(denominations) == 1:
        return [buy_in]

    weight = sum(_template_quantity(idx) * denomination for idx, denomination in enumerate(denominations))
    scale = buy_in / weight

    values: list[float] = []
    for denomination in denominations:
        value = snap_to_nice(denomination * scale)
        if values and value <= values[-1]:
            value = _next_nice_above(values[-1])
        values.append(value)

    logger.debug("proportional scale %.6f gives values %s", scale, values)
    return values


def _template_quantity(position: int) -> int:
    return PROPORTIONAL_TEMPLATE[min(position, len(PROPORTIONAL_TEMPLATE) - 1)]


def _next_nice_above(previous: float) -> float:
    return next((nice for nice in NICE_VALUES if nice > previous), previous * 2)


def _floor(value: float) -> int:
    return math.floor(value + 1e-9)


def _fill_from_top(
    units: Sequence[float],
    total_units: float,
    decay: float,
    absorb: Callable[[float], int],
) -> list[int]:
    """Decaying-base quantities, largest chip first, smallest chip absorbing the rest.

    At each step the base is re-solved against the units still unallocated so
    that ``sum(base * decay**i * units[i])`` covers them; the wanted quantity
    is capped so one of every lower chip still fits.
    """
    quantities = [0] * len(units)
    remaining = total_units
    for idx in range(len(units) - 1, 0, -1):
        weights = sum(decay**j * units[j] for j in range(idx + 1))
        wanted = round_half_up(remaining / weights * decay**idx)
        cap = _floor((remaining - sum(units[:idx])) / units[idx])
        quantities[idx] = max(1, min(wanted, cap))
        remaining = round(remaining - quantities[idx] * units[idx], 6)
    quantities[0] = absorb(remaining / units[0])
    return quantities


def _decaying_quantities(units: Sequence[float], total_units: float, *, decay: float) -> list[int]:
    return _fill_from_top(units, total_units, decay, round_half_up)


def _split_quantities(units: Sequence[float], total_units: float) -> list[int]:
    """Large half of the set covers half the buy-in, the small half the rest."""
    large_count = len(units) // 2
    small_units = units[: len(units) - large_count]
    large_units = units[len(units) - large_count :]

    large_quantities: list[int] = []
    covered = 0.0
    if large_units:
        large_quantities = _fill_from_top(large_units, total_units / 2, SPLIT_DECAY, _floor)
        covered = sum(quantity * unit for quantity, unit in zip(large_quantities, large_units))

    small_quantities = _fill_from_top(small_units, round(total_units - covered, 6), SPLIT_DECAY, round_half_up)
    return small_quantities + large_quantities


STRATEGIES: dict[AllocationStrategy, Callable[[Sequence[float], float], list[int]]] = {
    AllocationStrategy.SPLIT: _split_quantities,
    AllocationStrategy.BALANCED: partial(_decaying_quantities, decay=0.65),
    AllocationStrategy.HEAVY_SMALL: partial(_decaying_quantities, decay=0.5),
    AllocationStrategy.COMPACT: partial(_decaying_quantities, decay=0.9),
}


def absorb_rounding_drift(
    denominations: Sequence[float],
    values: Sequence[float],
    quantities: Sequence[int],
    buy_in: float,
) -> tuple[ChipAllocation, ...] | None:
    """Push every cent of drift into the smallest denomination.

    Returns ``None`` for degenerate patterns: a quantity below one, or nothing
    left for the smallest chip to cover.
    """
    if any(quantity < 1 for quantity in quantities):
        return None

    others = round2(sum(round2(quantity * value) for quantity, value in zip(quantities[1:], values[1:])))
    smallest_subtotal = round2(buy_in - others)
    if smallest_subtotal <= 0:
        return None

    smallest_value = values[0]
    if round2(quantities[0] * smallest_value) != smallest_subtotal:
        smallest_value = round(smallest_subtotal / quantities[0], 6)

    # The subtotal is authoritative; the back-computed value is for display.
    allocations = [ChipAllocation(denominations[0], quantities[0], smallest_value, total_value=smallest_subtotal)]
    allocations.extend(
        ChipAllocation(denomination, quantity, value)
        for denomination, quantity, value in zip(denominations[1:], quantities[1:], values[1:])
    )
    return tuple(allocations)


def compute_distribution(
    denominations: Iterable[float],
    buy_in: float,
    blinds: Blinds | None = None,
) -> list[Combination]:
    """Every feasible per-player distribution of ``buy_in`` over the chip set.

    An empty list means no strategy found a pattern using every denomination.
    """
    chips = sorted(set(denominations))
    if not chips or chips[0] <= 0 or buy_in <= 0:
        logger.debug("no distribution for denominations=%s buy_in=%s", chips, buy_in)
        return []

    if blinds is not None:
        values = assign_chip_values(len(chips), blinds.small, blinds.big)
    else:
        values = assign_proportional_values(chips, buy_in)

    units = [round(value / values[0], 6) for value in values]
    total_units = round(buy_in / values[0], 6)

    combinations: list[Combination] = []
    seen: set[tuple[int, ...]] = set()
    for strategy in AllocationStrategy:
        quantities = STRATEGIES[strategy](units, total_units)
        pattern = tuple(quantities)
        if pattern in seen:
            continue
        allocations = absorb_rounding_drift(chips, values, quantities, buy_in)
        if allocations is None:
            logger.debug("dropping degenerate %s pattern %s", strategy.value, quantities)
            continue
        seen.add(pattern)
        combinations.append(
            Combination(
                id=f"combo-{len(combinations) + 1}",
                name=strategy.label,
                allocations=allocations,
                target_total=buy_in,
                strategy=strategy,
            )
        )
    return combinations


def evaluate_allocation(rows: Iterable[tuple[float, int, float]], target_total: float) -> Combination:
    """Re-total a hand-edited distribution of ``(denomination, quantity, value_per_chip)`` rows."""
    allocations = tuple(
        ChipAllocation(denomination, max(0, int(quantity)), max(0.0, value_per_chip))
        for denomination, quantity, value_per_chip in sorted(rows, key=lambda row: row[0])
    )
    return Combination(id="custom", name="Custom", allocations=allocations, target_total=target_total)
