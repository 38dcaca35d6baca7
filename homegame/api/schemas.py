from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, model_validator


class ErrorResponse(BaseModel):
    code: str
    message: str
    details: Any | None = None


class BlindsMixin(BaseModel):
    small_blind: float | None = Field(default=None, gt=0, examples=[0.10])
    big_blind: float | None = Field(default=None, gt=0, examples=[0.20])

    @model_validator(mode="after")
    def validate_blinds(self) -> "BlindsMixin":
        if (self.small_blind is None) != (self.big_blind is None):
            raise ValueError("small_blind and big_blind must be given together")
        return self


def _require_positive(denominations: list[float]) -> None:
    if any(value <= 0 for value in denominations):
        raise ValueError("denominations must be positive")


class ChipValuesRequest(BaseModel):
    denominations: list[float] = Field(..., min_length=1, examples=[[1, 5, 25, 100]])
    small_blind: float = Field(..., gt=0, examples=[0.10])
    big_blind: float = Field(..., gt=0, examples=[0.20])

    @model_validator(mode="after")
    def validate_denominations(self) -> "ChipValuesRequest":
        _require_positive(self.denominations)
        return self


class ChipValue(BaseModel):
    denomination: float
    value: float
    role: str | None = None


class ChipValuesResponse(BaseModel):
    values: list[ChipValue]


class DistributionRequest(BlindsMixin):
    denominations: list[float] = Field(
        ...,
        min_length=1,
        description="Chip face values in the set",
        examples=[[1, 5, 25, 100, 500, 1000]],
    )
    buy_in: float = Field(..., gt=0, description="Buy-in per player", examples=[20])

    @model_validator(mode="after")
    def validate_denominations(self) -> "DistributionRequest":
        _require_positive(self.denominations)
        return self

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "denominations": [1, 5, 25, 100, 500, 1000],
                    "buy_in": 20,
                    "small_blind": 0.10,
                    "big_blind": 0.20,
                }
            ]
        }
    }


class ChipAllocationModel(BaseModel):
    denomination: float
    quantity: int
    value_per_chip: float
    total_value: float


class CombinationModel(BaseModel):
    id: str
    name: str
    strategy: str | None = None
    allocations: list[ChipAllocationModel]
    target_total: float
    actual_total: float
    total_chips: int
    difference: float
    is_exact: bool


class DistributionResponse(BaseModel):
    found: bool
    combinations: list[CombinationModel]


class AllocationRow(BaseModel):
    denomination: float = Field(..., gt=0)
    quantity: int = 0
    value_per_chip: float = 0


class EvaluateRequest(BaseModel):
    rows: list[AllocationRow] = Field(..., min_length=1)
    target_total: float = Field(..., gt=0)


class PlayerInput(BaseModel):
    name: str = ""
    buy_ins: list[float] = Field(default_factory=lambda: [0.0])
    final_balance: float = Field(default=0, ge=0)

    @model_validator(mode="after")
    def validate_buy_ins(self) -> "PlayerInput":
        if any(value < 0 for value in self.buy_ins):
            raise ValueError("buy-ins must be non-negative")
        return self


class SettlementRequest(BaseModel):
    players: list[PlayerInput] = Field(..., min_length=1)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "players": [
                        {"name": "alice", "buy_ins": [20], "final_balance": 35},
                        {"name": "bob", "buy_ins": [20], "final_balance": 5},
                    ]
                }
            ]
        }
    }


class PlayerSummaryModel(BaseModel):
    name: str
    total_buy_in: float
    final_balance: float
    net: float
    outcome: str


class TransactionModel(BaseModel):
    debtor: str = Field(..., alias="from")
    creditor: str = Field(..., alias="to")
    amount: float

    model_config = {"populate_by_name": True}


class SettlementResponse(BaseModel):
    summaries: list[PlayerSummaryModel]
    transactions: list[TransactionModel]
    imbalance: float
