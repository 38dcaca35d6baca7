from .chips import (
    AllocationStrategy,
    Blinds,
    ChipAllocation,
    Combination,
    absorb_rounding_drift,
    assign_chip_values,
    assign_proportional_values,
    compute_distribution,
    evaluate_allocation,
    snap_to_nice,
)
from .common import DomainValidationError, format_dollar, round2
from .settlement import (
    Player,
    PlayerSummary,
    SettlementResult,
    Transaction,
    build_transactions,
    settle,
    summarize,
)

__all__ = [
    "AllocationStrategy",
    "Blinds",
    "ChipAllocation",
    "Combination",
    "DomainValidationError",
    "Player",
    "PlayerSummary",
    "SettlementResult",
    "Transaction",
    "absorb_rounding_drift",
    "assign_chip_values",
    "assign_proportional_values",
    "build_transactions",
    "compute_distribution",
    "evaluate_allocation",
    "format_dollar",
    "round2",
    "settle",
    "snap_to_nice",
    "summarize",
]
