"""Authenticated profile, settings and connection status endpoints."""

import sqlite3

from fastapi import APIRouter, Depends, HTTPException

from songlink.core.config import Config
from songlink.domain import accounts
from songlink.domain.accounts import Account
from songlink.domain.dispatch import ConnectionRegistry
from songlink.domain.exceptions import ValidationError

from ..deps import get_config, get_current_account, get_db, get_registry
from ..schemas import ProfileResponse, SettingsRequest, StatusResponse, SuccessResponse

router = APIRouter()


@router.get("/user", response_model=ProfileResponse)
def get_profile(
    account: Account = Depends(get_current_account),
    config: Config = Depends(get_config),
):
    return ProfileResponse(
        id=account.id,
        email=account.email,
        username=account.username,
        default_timestamp=account.default_timestamp,
        spectator_url=account.spectator_url(config.server.spectator_url),
    )


@router.put("/user/settings", response_model=SuccessResponse)
def update_settings(
    request: SettingsRequest,
    account: Account = Depends(get_current_account),
    db: sqlite3.Connection = Depends(get_db),
    config: Config = Depends(get_config),
):
    try:
        accounts.update_settings(
            db, account, request.default_timestamp, config.settings
        )
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return SuccessResponse()


@router.get("/status", response_model=StatusResponse)
def get_status(
    account: Account = Depends(get_current_account),
    registry: ConnectionRegistry = Depends(get_registry),
):
    return StatusResponse(
        connected=registry.is_connected(account.username),
        username=account.username,
    )
