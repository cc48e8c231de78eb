"""
Identity store and account workflows.
"""

from .models import Account
from .service import (
    authenticate,
    get_spectator,
    register,
    set_preferred_service,
    update_settings,
)
from .store import (
    create_account,
    get_account_by_email,
    get_account_by_id,
    get_account_by_username,
    update_default_timestamp,
    update_preferred_service,
    username_exists,
    validate_username,
)

__all__ = [
    "Account",
    "authenticate",
    "get_spectator",
    "register",
    "set_preferred_service",
    "update_settings",
    "create_account",
    "get_account_by_email",
    "get_account_by_id",
    "get_account_by_username",
    "update_default_timestamp",
    "update_preferred_service",
    "username_exists",
    "validate_username",
]
