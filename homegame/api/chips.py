from __future__ import annotations

from fastapi import APIRouter

from homegame.api.errors import invalid_input
from homegame.api.schemas import (
    ChipValuesRequest,
    ChipValuesResponse,
    CombinationModel,
    DistributionRequest,
    DistributionResponse,
    ErrorResponse,
    EvaluateRequest,
)
from homegame.domain import DomainValidationError
from homegame.runtime import service

router = APIRouter(prefix="/chips", tags=["chips"])


@router.post(
    "/values",
    response_model=ChipValuesResponse,
    summary="Price each chip from the blind structure",
    responses={400: {"model": ErrorResponse}},
)
def chip_values(payload: ChipValuesRequest) -> dict:
    try:
        values = service.chip_values(payload.denominations, payload.small_blind, payload.big_blind)
    except DomainValidationError as exc:
        raise invalid_input(exc, small_blind=payload.small_blind, big_blind=payload.big_blind) from exc
    return {"values": values}


@router.post(
    "/distribution",
    response_model=DistributionResponse,
    summary="Propose per-player chip distributions for a buy-in",
    responses={400: {"model": ErrorResponse}},
)
def chip_distribution(payload: DistributionRequest) -> dict:
    try:
        return service.distribution(
            payload.denominations,
            payload.buy_in,
            small_blind=payload.small_blind,
            big_blind=payload.big_blind,
        )
    except DomainValidationError as exc:
        raise invalid_input(exc, small_blind=payload.small_blind, big_blind=payload.big_blind) from exc


@router.post(
    "/evaluate",
    response_model=CombinationModel,
    summary="Re-total a hand-edited distribution",
)
def evaluate_distribution(payload: EvaluateRequest) -> dict:
    rows = [(row.denomination, row.quantity, row.value_per_chip) for row in payload.rows]
    return service.evaluate(rows, payload.target_total)
