"""
Configuration management for the SongLink backend
"""

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

DEFAULT_JWT_SECRET = "change-this-secret-in-production"
DEFAULT_TIMESTAMP = 45  # Seconds into the track where playback starts


@dataclass
class ServerConfig:
    """Configuration for the HTTP/WebSocket server."""

    host: str = "0.0.0.0"
    port: int = 3000
    spectator_url: str = "http://localhost:3001"
    allowed_origins: List[str] = field(default_factory=lambda: ["*"])


@dataclass
class AuthConfig:
    """Configuration for password hashing and session tokens."""

    jwt_secret: str = DEFAULT_JWT_SECRET
    token_ttl_seconds: int = 60 * 60 * 24 * 7  # 0 disables expiry
    bcrypt_rounds: int = 10


@dataclass
class DatabaseConfig:
    """Configuration for the account database."""

    path: Optional[str] = None  # Default: ~/.local/share/songlink/songlink.db


@dataclass
class CatalogConfig:
    """Credentials and limits for the music catalog providers."""

    spotify_client_id: str = ""
    spotify_client_secret: str = ""
    apple_music_token: str = ""
    apple_storefront: str = "us"
    youtube_api_key: str = ""
    request_timeout: float = 10.0  # Seconds per provider HTTP call


@dataclass
class SettingsConfig:
    """Bounds for user-editable settings."""

    default_timestamp: int = DEFAULT_TIMESTAMP
    max_default_timestamp: int = 86400


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_file: Optional[str] = None  # Also log to this file when set
    rotation: str = "10 MB"
    retention: int = 5


@dataclass
class Config:
    """Main configuration object."""

    server: ServerConfig = field(default_factory=ServerConfig)
    auth: AuthConfig = field(default_factory=AuthConfig)
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    catalog: CatalogConfig = field(default_factory=CatalogConfig)
    settings: SettingsConfig = field(default_factory=SettingsConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def validate(self) -> None:
        """Validate configuration values.

        Raises:
            ValueError: If configuration values are invalid
        """
        if not self.auth.jwt_secret:
            raise ValueError("auth.jwt_secret must not be empty")
        if self.auth.token_ttl_seconds < 0:
            raise ValueError("auth.token_ttl_seconds must be >= 0")
        if not 4 <= self.auth.bcrypt_rounds <= 31:
            raise ValueError("auth.bcrypt_rounds must be between 4 and 31")
        if self.catalog.request_timeout <= 0:
            raise ValueError("catalog.request_timeout must be positive")
        if self.settings.default_timestamp < 0:
            raise ValueError("settings.default_timestamp must be >= 0")
        if self.settings.max_default_timestamp < self.settings.default_timestamp:
            raise ValueError(
                "settings.max_default_timestamp must be >= settings.default_timestamp"
            )


def get_config_dir() -> Path:
    """Get the configuration directory path."""
    config_home = os.environ.get("XDG_CONFIG_HOME")
    if config_home:
        return Path(config_home) / "songlink"
    return Path.home() / ".config" / "songlink"


def get_data_dir() -> Path:
    """Get the data directory path."""
    data_home = os.environ.get("XDG_DATA_HOME")
    if data_home:
        return Path(data_home) / "songlink"
    return Path.home() / ".local" / "share" / "songlink"


def _find_project_config() -> Optional[Path]:
    """Find config.toml in project root by looking for pyproject.toml."""
    current = Path(__file__).resolve().parent
    for parent in [current] + list(current.parents):
        if (parent / "pyproject.toml").exists():
            config_path = parent / "config.toml"
            return config_path if config_path.exists() else None
    return None


def get_config_path() -> Path:
    """Get the main configuration file path.

    Checks for config.toml in the following order:
    1. SONGLINK_CONFIG environment variable
    2. Project root (detected via pyproject.toml) - for development
    3. Current working directory
    4. XDG_CONFIG_HOME/songlink (or ~/.config/songlink)
    """
    explicit = os.environ.get("SONGLINK_CONFIG")
    if explicit:
        return Path(explicit).expanduser()

    project_config = _find_project_config()
    if project_config:
        return project_config

    local_config = Path.cwd() / "config.toml"
    if local_config.exists():
        return local_config

    return get_config_dir() / "config.toml"


def _section(toml_data: dict, name: str, cls, defaults):
    """Build a config section from TOML, keeping defaults for missing keys."""
    data = toml_data.get(name, {})
    known = {k: v for k, v in data.items() if k in defaults.__dataclass_fields__}
    return cls(**{**defaults.__dict__, **known})


def _apply_env_overrides(config: Config) -> None:
    """Override configuration values with environment variables if present."""
    env = os.environ

    if env.get("HOST"):
        config.server.host = env["HOST"]
    if env.get("PORT"):
        config.server.port = int(env["PORT"])
    if env.get("SPECTATOR_URL"):
        config.server.spectator_url = env["SPECTATOR_URL"]
    if env.get("ALLOWED_ORIGINS"):
        config.server.allowed_origins = env["ALLOWED_ORIGINS"].split(",")

    if env.get("JWT_SECRET"):
        config.auth.jwt_secret = env["JWT_SECRET"]
    if env.get("TOKEN_TTL_SECONDS"):
        config.auth.token_ttl_seconds = int(env["TOKEN_TTL_SECONDS"])

    if env.get("SONGLINK_DB_PATH"):
        config.database.path = env["SONGLINK_DB_PATH"]

    if env.get("SPOTIFY_CLIENT_ID"):
        config.catalog.spotify_client_id = env["SPOTIFY_CLIENT_ID"]
    if env.get("SPOTIFY_CLIENT_SECRET"):
        config.catalog.spotify_client_secret = env["SPOTIFY_CLIENT_SECRET"]
    if env.get("APPLE_MUSIC_TOKEN"):
        config.catalog.apple_music_token = env["APPLE_MUSIC_TOKEN"]
    if env.get("APPLE_MUSIC_STOREFRONT"):
        config.catalog.apple_storefront = env["APPLE_MUSIC_STOREFRONT"]
    if env.get("YOUTUBE_API_KEY"):
        config.catalog.youtube_api_key = env["YOUTUBE_API_KEY"]
    if env.get("PROVIDER_TIMEOUT"):
        config.catalog.request_timeout = float(env["PROVIDER_TIMEOUT"])

    if env.get("LOG_LEVEL"):
        config.logging.level = env["LOG_LEVEL"].upper()


def load_config(config_path: Optional[Path] = None) -> Config:
    """Load configuration from file, .env and environment.

    A missing config file is not an error: defaults apply, then environment
    variables override both file and defaults.

    Raises:
        ValueError: If the resulting configuration is invalid
    """
    from dotenv import load_dotenv

    env_path = get_config_dir() / ".env"
    if env_path.exists():
        load_dotenv(env_path)
    # Project-local .env (development)
    load_dotenv()

    path = config_path or get_config_path()
    config = Config()

    if path.exists():
        with open(path, "rb") as f:
            toml_data = tomllib.load(f)

        config.server = _section(toml_data, "server", ServerConfig, config.server)
        config.auth = _section(toml_data, "auth", AuthConfig, config.auth)
        config.database = _section(
            toml_data, "database", DatabaseConfig, config.database
        )
        config.catalog = _section(toml_data, "catalog", CatalogConfig, config.catalog)
        config.settings = _section(
            toml_data, "settings", SettingsConfig, config.settings
        )
        config.logging = _section(toml_data, "logging", LoggingConfig, config.logging)

    if config.database.path:
        config.database.path = str(Path(config.database.path).expanduser())
    if config.logging.log_file:
        config.logging.log_file = str(Path(config.logging.log_file).expanduser())
    config.logging.level = config.logging.level.upper()

    _apply_env_overrides(config)
    config.validate()
    return config
