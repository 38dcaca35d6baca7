from __future__ import annotations

import logging
from collections.abc import Sequence

from homegame.domain import (
    Blinds,
    Player,
    assign_chip_values,
    compute_distribution,
    evaluate_allocation,
    settle,
)

logger = logging.getLogger("homegame.service")


class CalculatorService:
    """Thin adapter between request payloads and the two calculators."""

    def chip_values(self, denominations: Sequence[float], small_blind: float, big_blind: float) -> list[dict]:
        blinds = Blinds(small=small_blind, big=big_blind)
        chips = sorted(set(denominations))
        values = assign_chip_values(len(chips), blinds.small, blinds.big)
        roles = {0: "SB", 1: "BB"}
        return [
            {"denomination": chip, "value": value, "role": roles.get(idx)}
            for idx, (chip, value) in enumerate(zip(chips, values))
        ]

    def distribution(
        self,
        denominations: Sequence[float],
        buy_in: float,
        small_blind: float | None = None,
        big_blind: float | None = None,
    ) -> dict[str, object]:
        blinds = None
        if small_blind is not None and big_blind is not None:
            blinds = Blinds(small=small_blind, big=big_blind)

        combinations = compute_distribution(denominations, buy_in, blinds)
        if not combinations:
            logger.info(
                "No distribution found for denominations=%s buy_in=%s blinds=%s",
                list(denominations),
                buy_in,
                blinds,
            )
        return {
            "found": bool(combinations),
            "combinations": [combination.to_dict() for combination in combinations],
        }

    def evaluate(self, rows: Sequence[tuple[float, int, float]], target_total: float) -> dict:
        return evaluate_allocation(rows, target_total).to_dict()

    def settlement(self, players: Sequence[dict]) -> dict:
        result = settle(
            [
                Player(
                    name=player["name"],
                    buy_ins=tuple(player["buy_ins"]),
                    final_balance=player["final_balance"],
                )
                for player in players
            ]
        )
        if result.imbalance:
            logger.info("Cash-outs do not match buy-ins (imbalance=%s)", result.imbalance)
        return result.to_dict()
