import sqlite3
from functools import lru_cache
from typing import Iterator, Optional

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from songlink.core.config import Config, load_config
from songlink.core.database import get_db_connection
from songlink.core.security import decode_session_token
from songlink.domain import accounts
from songlink.domain.accounts import Account
from songlink.domain.catalog import CatalogResolver
from songlink.domain.dispatch import ConnectionRegistry, DispatchController

bearer_scheme = HTTPBearer(auto_error=False)


@lru_cache(maxsize=1)
def get_config() -> Config:
    """FastAPI dependency for configuration (loaded once per process)."""
    return load_config()


def get_db(config: Config = Depends(get_config)) -> Iterator[sqlite3.Connection]:
    """FastAPI dependency for database connections."""
    with get_db_connection(config.database.path) as conn:
        yield conn


@lru_cache(maxsize=1)
def get_registry() -> ConnectionRegistry:
    """FastAPI dependency for the process-wide connection registry."""
    db_path = get_config().database.path

    def account_exists(username: str) -> bool:
        with get_db_connection(db_path) as conn:
            return accounts.username_exists(conn, username)

    return ConnectionRegistry(account_exists)


def get_resolver(config: Config = Depends(get_config)) -> CatalogResolver:
    """FastAPI dependency for the catalog resolver."""
    return CatalogResolver(config.catalog)


def get_dispatcher(
    registry: ConnectionRegistry = Depends(get_registry),
    resolver: CatalogResolver = Depends(get_resolver),
) -> DispatchController:
    """FastAPI dependency for the dispatch controller."""
    return DispatchController(registry, resolver)


def get_current_account(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: sqlite3.Connection = Depends(get_db),
    config: Config = Depends(get_config),
) -> Account:
    """Resolve the bearer token to an account.

    401 when no token is sent, 403 for any token that fails verification.
    """
    if credentials is None:
        raise HTTPException(status_code=401, detail="No token provided")

    payload = decode_session_token(credentials.credentials, config.auth)
    if payload is None:
        raise HTTPException(status_code=403, detail="Invalid token")

    account = accounts.get_account_by_id(db, payload["id"])
    if account is None:
        raise HTTPException(status_code=403, detail="Invalid token")
    return account
