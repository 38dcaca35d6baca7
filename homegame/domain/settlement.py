"""Net positions and settle-up payments for a finished home game."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from uuid import uuid4

from .common import EPSILON, format_dollar, is_zero, require_non_negative, round2

logger = logging.getLogger("homegame.domain.settlement")


@dataclass(frozen=True)
class Player:
    name: str
    buy_ins: tuple[float, ...]
    final_balance: float
    id: str = field(default_factory=lambda: uuid4().hex)

    def __post_init__(self) -> None:
        object.__setattr__(self, "buy_ins", tuple(self.buy_ins))
        require_non_negative("buy-ins", self.buy_ins)
        require_non_negative("final balance", (self.final_balance,))


@dataclass(frozen=True)
class PlayerSummary:
    name: str
    total_buy_in: float
    final_balance: float
    net: float

    @property
    def outcome(self) -> str:
        if is_zero(self.net):
            return "even"
        return "profit" if self.net > 0 else "loss"

    def to_dict(self) -> dict[str, float | str]:
        return {
            "name": self.name,
            "total_buy_in": self.total_buy_in,
            "final_balance": self.final_balance,
            "net": self.net,
            "outcome": self.outcome,
        }


@dataclass(frozen=True)
class Transaction:
    debtor: str
    creditor: str
    amount: float

    def describe(self) -> str:
        return f"{self.debtor} pays {self.creditor} {format_dollar(self.amount)}"

    def to_dict(self) -> dict[str, float | str]:
        return {"from": self.debtor, "to": self.creditor, "amount": self.amount}


@dataclass
class SettlementResult:
    summaries: list[PlayerSummary]
    transactions: list[Transaction]

    @property
    def imbalance(self) -> float:
        """Cash-outs minus buy-ins; anything but zero means the table was miscounted."""
        total_final = sum(summary.final_balance for summary in self.summaries)
        total_buy_in = sum(summary.total_buy_in for summary in self.summaries)
        return round2(total_final - total_buy_in)

    def to_dict(self) -> dict:
        return {
            "summaries": [summary.to_dict() for summary in self.summaries],
            "transactions": [transaction.to_dict() for transaction in self.transactions],
            "imbalance": self.imbalance,
        }


def display_name(player: Player, position: int) -> str:
    return player.name.strip() or f"Player {position}"


def summarize(players: Sequence[Player]) -> list[PlayerSummary]:
    summaries = []
    for position, player in enumerate(players, start=1):
        total_buy_in = round2(sum(player.buy_ins))
        summaries.append(
            PlayerSummary(
                name=display_name(player, position),
                total_buy_in=total_buy_in,
                final_balance=player.final_balance,
                net=round2(player.final_balance - total_buy_in),
            )
        )
    return summaries


def build_transactions(summaries: Sequence[PlayerSummary]) -> list[Transaction]:
    """Greedy largest-debtor-pays-largest-creditor matching.

    Produces at most ``debtors + creditors - 1`` payments. This is not always
    the global minimum number of payments.
    """
    debtors = [[summary.name, -summary.net] for summary in summaries if summary.net < -EPSILON]
    creditors = [[summary.name, summary.net] for summary in summaries if summary.net > EPSILON]
    debtors.sort(key=lambda entry: entry[1], reverse=True)
    creditors.sort(key=lambda entry: entry[1], reverse=True)

    transactions: list[Transaction] = []
    debtor_idx = creditor_idx = 0
    while debtor_idx < len(debtors) and creditor_idx < len(creditors):
        debtor = debtors[debtor_idx]
        creditor = creditors[creditor_idx]

        amount = round2(min(debtor[1], creditor[1]))
        if amount > EPSILON:
            transactions.append(Transaction(debtor=debtor[0], creditor=creditor[0], amount=amount))

        debtor[1] = round2(debtor[1] - amount)
        creditor[1] = round2(creditor[1] - amount)
        if debtor[1] < EPSILON:
            debtor_idx += 1
        if creditor[1] < EPSILON:
            creditor_idx += 1

    return transactions


def settle(players: Sequence[Player]) -> SettlementResult:
    summaries = summarize(players)
    transactions = build_transactions(summaries)
    logger.debug("settled %d players with %d transactions", len(summaries), len(transactions))
    return SettlementResult(summaries=summaries, transactions=transactions)
