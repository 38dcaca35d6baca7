from __future__ import annotations

from typing import Any

from fastapi import HTTPException, status

from homegame.domain import DomainValidationError


def api_error(
    *,
    code: str,
    message: str,
    details: Any | None = None,
    status_code: int = status.HTTP_400_BAD_REQUEST,
) -> HTTPException:
    return HTTPException(
        status_code=status_code,
        detail={"code": code, "message": message, "details": details},
    )


def invalid_input(exc: DomainValidationError, **details: Any) -> HTTPException:
    """Map a rejected calculator input to a 400 with the shared error shape."""
    return api_error(code="invalid_input", message=str(exc), details=details or None)
