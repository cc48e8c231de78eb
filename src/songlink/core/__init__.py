"""Core infrastructure layer - no business logic dependencies.

This module provides foundation-level services:
- Configuration management (TOML + environment)
- Logging (loguru)
- Database operations (SQLite)
- Password hashing and session tokens

Clean architecture principle: The core layer has no dependencies on
domain or web layers.
"""

# Configuration
from .config import (
    Config,
    AuthConfig,
    CatalogConfig,
    DatabaseConfig,
    LoggingConfig,
    ServerConfig,
    SettingsConfig,
    load_config,
    get_config_dir,
    get_config_path,
    get_data_dir,
)

# Database
from .database import (
    get_database_path,
    get_db_connection,
    init_database,
    migrate_database,
)

# Security
from .security import (
    create_session_token,
    decode_session_token,
    hash_password,
    verify_password,
)

__all__ = [
    # Config
    "Config",
    "AuthConfig",
    "CatalogConfig",
    "DatabaseConfig",
    "LoggingConfig",
    "ServerConfig",
    "SettingsConfig",
    "load_config",
    "get_config_dir",
    "get_config_path",
    "get_data_dir",
    # Database
    "get_database_path",
    "get_db_connection",
    "init_database",
    "migrate_database",
    # Security
    "create_session_token",
    "decode_session_token",
    "hash_password",
    "verify_password",
]
