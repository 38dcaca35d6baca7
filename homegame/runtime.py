from __future__ import annotations

from homegame.service import CalculatorService

service = CalculatorService()
