from __future__ import annotations

from fastapi import APIRouter

from homegame.api.errors import invalid_input
from homegame.api.schemas import SettlementRequest, SettlementResponse
from homegame.domain import DomainValidationError
from homegame.runtime import service

router = APIRouter(prefix="/settlement", tags=["settlement"])


@router.post(
    "",
    response_model=SettlementResponse,
    summary="Net positions and the payments that settle them",
)
def settle_up(payload: SettlementRequest) -> dict:
    try:
        return service.settlement([player.model_dump() for player in payload.players])
    except DomainValidationError as exc:
        raise invalid_input(exc) from exc
