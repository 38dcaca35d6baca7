import logging

import pytest

from homegame.domain import DomainValidationError
from homegame.service import CalculatorService


def test_distribution_reports_missing_solution(caplog: pytest.LogCaptureFixture) -> None:
    service = CalculatorService()

    with caplog.at_level(logging.INFO, logger="homegame.service"):
        result = service.distribution([1, 5, 25], 0.05, small_blind=0.1, big_blind=0.2)

    assert result == {"found": False, "combinations": []}
    assert "No distribution found" in caplog.text


def test_distribution_ignores_blinds_when_incomplete() -> None:
    service = CalculatorService()

    with_blinds = service.distribution([1, 5, 25, 100], 100, small_blind=0.25, big_blind=0.5)
    without_blinds = service.distribution([1, 5, 25, 100], 100, small_blind=0.25)

    assert with_blinds["combinations"][0]["allocations"][0]["value_per_chip"] == 0.25
    assert without_blinds["combinations"][0]["allocations"][0]["value_per_chip"] == 0.1


def test_chip_values_rejects_inverted_blinds() -> None:
    with pytest.raises(DomainValidationError):
        CalculatorService().chip_values([1, 5], small_blind=0.5, big_blind=0.25)


def test_settlement_logs_imbalance(caplog: pytest.LogCaptureFixture) -> None:
    service = CalculatorService()
    players = [
        {"name": "alice", "buy_ins": [20], "final_balance": 30},
        {"name": "bob", "buy_ins": [20], "final_balance": 0},
    ]

    with caplog.at_level(logging.INFO, logger="homegame.service"):
        result = service.settlement(players)

    assert result["imbalance"] == -10.0
    assert result["transactions"] == [{"from": "bob", "to": "alice", "amount": 10.0}]
    assert "imbalance" in caplog.text
