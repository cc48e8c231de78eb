"""Registration and login endpoints."""

import sqlite3

from fastapi import APIRouter, Depends, HTTPException
from loguru import logger

from songlink.core.config import Config
from songlink.core.security import create_session_token
from songlink.domain import accounts
from songlink.domain.exceptions import (
    AuthenticationError,
    ConflictError,
    ValidationError,
)

from ..deps import get_config, get_db
from ..schemas import LoginRequest, LoginResponse, RegisterRequest, RegisterResponse

router = APIRouter()


# Sync handlers: bcrypt is CPU-bound, so these run in FastAPI's threadpool.


@router.post("/auth/register", response_model=RegisterResponse)
def register(
    request: RegisterRequest,
    db: sqlite3.Connection = Depends(get_db),
    config: Config = Depends(get_config),
):
    try:
        account = accounts.register(
            db,
            request.email,
            request.password,
            request.username,
            config.auth,
            default_timestamp=config.settings.default_timestamp,
        )
    except (ValidationError, ConflictError) as e:
        # Same status for both; only the message differs
        raise HTTPException(status_code=400, detail=str(e))

    token = create_session_token(account.id, account.username, config.auth)
    return RegisterResponse(
        token=token,
        username=account.username,
        spectator_url=account.spectator_url(config.server.spectator_url),
    )


@router.post("/auth/login", response_model=LoginResponse)
def login(
    request: LoginRequest,
    db: sqlite3.Connection = Depends(get_db),
    config: Config = Depends(get_config),
):
    try:
        account = accounts.authenticate(
            db, request.email, request.password, config.auth
        )
    except AuthenticationError as e:
        raise HTTPException(status_code=401, detail=str(e))

    logger.info(f"Login: {account.username}")
    token = create_session_token(account.id, account.username, config.auth)
    return LoginResponse(
        token=token,
        username=account.username,
        default_timestamp=account.default_timestamp,
        spectator_url=account.spectator_url(config.server.spectator_url),
    )
