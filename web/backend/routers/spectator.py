"""Unauthenticated endpoints used by the spectator page, keyed by username."""

import sqlite3

from fastapi import APIRouter, Depends, HTTPException

from songlink.domain import accounts
from songlink.domain.exceptions import AccountNotFoundError, ValidationError

from ..deps import get_db
from ..schemas import SpectatorInfoResponse, SpectatorServiceRequest, SuccessResponse

router = APIRouter()


@router.get("/spectator/{username}/service", response_model=SpectatorInfoResponse)
def get_spectator_service(username: str, db: sqlite3.Connection = Depends(get_db)):
    """Existence probe; also returns the stored service choice."""
    try:
        account = accounts.get_spectator(db, username)
    except AccountNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return SpectatorInfoResponse(exists=True, service=account.preferred_service)


@router.post("/spectator/{username}/service", response_model=SuccessResponse)
def set_spectator_service(
    username: str,
    request: SpectatorServiceRequest,
    db: sqlite3.Connection = Depends(get_db),
):
    try:
        accounts.set_preferred_service(db, username, request.service)
    except AccountNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return SuccessResponse()
