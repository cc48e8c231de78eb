"""
Password hashing and signed session tokens.

Passwords are stored as bcrypt hashes. Session tokens are stateless HS256
JWTs carrying the account id and username; there is no server-side
revocation.
"""

import base64
import hashlib
import time
from typing import Any, Dict, Optional

import bcrypt
import jwt

from .config import AuthConfig

_ALGORITHM = "HS256"


def _prehash(raw: str) -> bytes:
    # bcrypt only accepts 72 bytes; a base64 SHA-256 digest is always 44
    return base64.b64encode(hashlib.sha256(raw.encode("utf-8")).digest())


def hash_password(raw: str, rounds: int = 10) -> str:
    """Hash a plaintext password of any length with bcrypt."""
    hashed = bcrypt.hashpw(_prehash(raw), bcrypt.gensalt(rounds=rounds))
    return hashed.decode("utf-8")


def verify_password(raw: str, hashed: str) -> bool:
    """Check a plaintext password against a stored bcrypt hash."""
    if not raw or not hashed:
        return False
    try:
        return bcrypt.checkpw(_prehash(raw), hashed.encode("utf-8"))
    except ValueError:
        # Malformed stored hash
        return False


def create_session_token(account_id: int, username: str, config: AuthConfig) -> str:
    """Create a signed session token for an account."""
    now = int(time.time())
    payload: Dict[str, Any] = {"id": account_id, "username": username, "iat": now}
    if config.token_ttl_seconds:
        payload["exp"] = now + config.token_ttl_seconds
    return jwt.encode(payload, config.jwt_secret, algorithm=_ALGORITHM)


def decode_session_token(token: str, config: AuthConfig) -> Optional[Dict[str, Any]]:
    """Verify and decode a session token.

    Returns the payload on success, or None if the token is invalid,
    expired, or lacks the account claims.
    """
    try:
        payload = jwt.decode(token, config.jwt_secret, algorithms=[_ALGORITHM])
    except jwt.InvalidTokenError:
        return None

    if not isinstance(payload.get("id"), int) or not payload.get("username"):
        return None
    return payload
