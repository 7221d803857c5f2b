"""
Configuration management via environment variables.

This module loads configuration from a .env file using python-dotenv.
All configuration values are accessed through the Settings class.

Feature flags live here too: FEATURE_FLAGS holds comma separated
``Name=bool`` pairs, e.g. ``FeatureB=true,FeatureC=false``.
"""
import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Dict, Optional

from dotenv import load_dotenv


PROJECT_ROOT = Path(__file__).parent.parent.parent

# Load .env file from project root
# This must happen before accessing os.environ
load_dotenv(PROJECT_ROOT / ".env")

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
VALID_LOG_FORMATS = ("text", "json")

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    frozen=True makes the dataclass immutable, preventing accidental
    modification of settings at runtime.

    Attributes:
        app_name: Application identifier for logging
        app_env: Environment name (development, staging, production)
        log_level: Logging verbosity (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: "text" for console lines, "json" for one object per line
        log_dir: Directory for daily log files
        log_level_overrides: Per-logger levels, e.g. {"sqlalchemy.engine": "INFO"}
        database_url: SQLAlchemy connection string for the bookstore
        init_db_on_startup: Drop, recreate and seed the bookstore at startup
        feature_flags: Initial state of every configured feature flag
        enable_request_logging: Install the request logging middleware
    """
    # Application settings
    app_name: str
    app_env: str
    log_level: str
    log_format: str
    log_dir: Path
    log_level_overrides: Dict[str, str] = field(default_factory=dict)

    # Database settings
    database_url: str = ""
    init_db_on_startup: bool = True

    # Feature management
    feature_flags: Dict[str, bool] = field(default_factory=dict)

    # Request logging
    enable_request_logging: bool = True

    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.app_env.lower() == "development"


def _get_env(key: str, default: Optional[str] = None) -> str:
    """
    Get environment variable with optional default.

    Args:
        key: Environment variable name
        default: Default value if not set

    Returns:
        Environment variable value

    Raises:
        ValueError: If required variable is not set and no default provided
    """
    value = os.environ.get(key, default)
    if value is None:
        raise ValueError(
            f"Required environment variable '{key}' is not set. "
            f"Please check your .env file."
        )
    return value


def parse_bool(value: str, key: str = "value") -> bool:
    """Parse a boolean environment value, rejecting anything ambiguous."""
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ValueError(f"Invalid boolean for '{key}': {value!r}")


def parse_feature_flags(raw: str) -> Dict[str, bool]:
    """
    Parse the FEATURE_FLAGS value into a name -> enabled mapping.

    Args:
        raw: Comma separated ``Name=bool`` pairs. Blank entries are skipped.

    Returns:
        Dict of flag name to enabled state, in declaration order

    Raises:
        ValueError: If a pair has no '=' or no name, or the value is not a bool

    Example:
        >>> parse_feature_flags("FeatureB=true, FeatureC=false")
        {'FeatureB': True, 'FeatureC': False}
    """
    flags: Dict[str, bool] = {}
    for pair in raw.split(","):
        pair = pair.strip()
        if not pair:
            continue
        name, sep, value = pair.partition("=")
        name = name.strip()
        if not sep or not name:
            raise ValueError(f"Invalid feature flag entry: {pair!r} (expected Name=true|false)")
        flags[name] = parse_bool(value, key=f"FEATURE_FLAGS[{name}]")
    return flags


def parse_level_overrides(raw: str) -> Dict[str, str]:
    """Parse ``logger=LEVEL`` pairs from LOG_LEVEL_OVERRIDES."""
    overrides: Dict[str, str] = {}
    for pair in raw.split(","):
        pair = pair.strip()
        if not pair:
            continue
        name, sep, level = pair.partition("=")
        level = level.strip().upper()
        if not sep or not name.strip() or level not in VALID_LOG_LEVELS:
            raise ValueError(f"Invalid log level override: {pair!r}")
        overrides[name.strip()] = level
    return overrides


def _normalize_database_url(database_url: str) -> str:
    # SQLAlchemy dropped the "postgres" dialect alias
    if database_url.startswith("postgres://"):
        database_url = database_url.replace("postgres://", "postgresql://", 1)
    return database_url


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Settings are read once; call ``get_settings.cache_clear()`` after
    changing the environment (tests do this).

    Returns:
        Settings instance with all configuration values

    Raises:
        ValueError: If any environment variable holds an invalid value
    """
    log_level = _get_env("LOG_LEVEL", "INFO").upper()
    if log_level not in VALID_LOG_LEVELS:
        raise ValueError(f"Invalid LOG_LEVEL: {log_level!r}")

    log_format = _get_env("LOG_FORMAT", "text").lower()
    if log_format not in VALID_LOG_FORMATS:
        raise ValueError(f"Invalid LOG_FORMAT: {log_format!r}")

    database_url = _normalize_database_url(
        _get_env("DATABASE_URL", f"sqlite:///{PROJECT_ROOT / 'bookstore.db'}")
    )

    return Settings(
        # Application
        app_name=_get_env("APP_NAME", "BookstoreSnippets"),
        app_env=_get_env("APP_ENV", "development"),
        log_level=log_level,
        log_format=log_format,
        log_dir=Path(_get_env("LOG_DIR", str(PROJECT_ROOT / "logs"))),
        log_level_overrides=parse_level_overrides(_get_env("LOG_LEVEL_OVERRIDES", "")),

        # Database
        database_url=database_url,
        init_db_on_startup=parse_bool(
            _get_env("BOOKSTORE_INIT_ON_STARTUP", "true"), "BOOKSTORE_INIT_ON_STARTUP"
        ),

        # Features
        feature_flags=parse_feature_flags(_get_env("FEATURE_FLAGS", "")),

        # Request logging
        enable_request_logging=parse_bool(
            _get_env("ENABLE_REQUEST_LOGGING", "true"), "ENABLE_REQUEST_LOGGING"
        ),
    )
