"""
Application configuration management.

This module handles loading and accessing GameZone configuration from multiple
sources with a clear priority order:

    1. Environment variables (highest priority) - for containerized deployments
    2. Config file (config/gamezone.ini) - for static deployments
    3. Built-in defaults (lowest priority) - sensible fallbacks

Configuration is loaded once at module import time and cached. The AppConfig
dataclass provides typed access to all settings.

Usage:
    from gamezone.config import config

    print(config.store.absolute_path)
    print(config.admin.email)
    print(config.password.min_length)

Environment Variable Mapping:
    GZ_HOST                -> server.host
    GZ_PORT                -> server.port
    GZ_STORE_PATH          -> store.path
    GZ_STORE_PREFIX        -> store.prefix
    GZ_ADMIN_EMAIL         -> admin.email
    GZ_ADMIN_PASSWORD      -> admin.password
    GZ_PASSWORD_MIN_LENGTH -> password.min_length
    GZ_LOG_LEVEL           -> logging.level
"""

import configparser
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

# =============================================================================
# PATH CONFIGURATION
# =============================================================================

# Project root directory (contains src/, config/, data/)
PROJECT_ROOT = Path(__file__).parent.parent.parent

CONFIG_DIR = PROJECT_ROOT / "config"
CONFIG_FILE = CONFIG_DIR / "gamezone.ini"
CONFIG_EXAMPLE = CONFIG_DIR / "gamezone.example.ini"


# =============================================================================
# CONFIGURATION DATACLASSES
# =============================================================================


@dataclass
class ServerSettings:
    """HTTP server configuration."""

    host: str = "127.0.0.1"
    port: int = 8000


@dataclass
class StoreSettings:
    """Durable store configuration."""

    path: str = "data/gamezone.db"
    prefix: str = "gz_"

    @property
    def absolute_path(self) -> Path:
        """Get absolute path to the store file."""
        p = Path(self.path)
        if p.is_absolute():
            return p
        return PROJECT_ROOT / p


@dataclass
class AdminSettings:
    """Seed administrator created on first startup."""

    name: str = "Admin"
    email: str = "admin@gamezone.local"
    password: str = "Admin123!"  # nosec B105 - documented seed credential
    recovery: str = "adminRecovery"


@dataclass
class PasswordSettings:
    """Minimum password rules."""

    min_length: int = 6


@dataclass
class SecuritySettings:
    """Digest service capability switches.

    Both default to ``True``; setting either to ``False`` forces the degraded
    fallback path even when the platform offers the strong primitive.
    """

    strong_hash: bool = True
    strong_rng: bool = True


@dataclass
class LoggingSettings:
    """Logging configuration."""

    level: str = "INFO"
    format: Literal["simple", "detailed"] = "detailed"


@dataclass
class AppConfig:
    """
    Complete application configuration.

    Aggregates all settings sections. Access via the module-level `config`
    singleton.
    """

    server: ServerSettings = field(default_factory=ServerSettings)
    store: StoreSettings = field(default_factory=StoreSettings)
    admin: AdminSettings = field(default_factory=AdminSettings)
    password: PasswordSettings = field(default_factory=PasswordSettings)
    security: SecuritySettings = field(default_factory=SecuritySettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)


# =============================================================================
# CONFIGURATION LOADING
# =============================================================================


def _parse_bool(value: str) -> bool:
    """Parse a string value to boolean."""
    return value.lower() in ("true", "yes", "1", "on", "enabled")


def _load_from_ini(parser: configparser.ConfigParser, cfg: AppConfig) -> None:
    """Load configuration from parsed INI file into AppConfig."""
    if parser.has_section("server"):
        if parser.has_option("server", "host"):
            cfg.server.host = parser.get("server", "host")
        if parser.has_option("server", "port"):
            cfg.server.port = parser.getint("server", "port")

    if parser.has_section("store"):
        if parser.has_option("store", "path"):
            cfg.store.path = parser.get("store", "path")
        if parser.has_option("store", "prefix"):
            cfg.store.prefix = parser.get("store", "prefix")

    if parser.has_section("admin"):
        for option in ("name", "email", "password", "recovery"):
            if parser.has_option("admin", option):
                setattr(cfg.admin, option, parser.get("admin", option))

    if parser.has_section("password"):
        if parser.has_option("password", "min_length"):
            cfg.password.min_length = parser.getint("password", "min_length")

    if parser.has_section("security"):
        if parser.has_option("security", "strong_hash"):
            cfg.security.strong_hash = _parse_bool(parser.get("security", "strong_hash"))
        if parser.has_option("security", "strong_rng"):
            cfg.security.strong_rng = _parse_bool(parser.get("security", "strong_rng"))

    if parser.has_section("logging"):
        if parser.has_option("logging", "level"):
            cfg.logging.level = parser.get("logging", "level").upper()
        if parser.has_option("logging", "format"):
            val = parser.get("logging", "format").lower()
            if val in ("simple", "detailed"):
                cfg.logging.format = val  # type: ignore[assignment]


def _apply_env_overrides(cfg: AppConfig) -> None:
    """Apply environment variable overrides to configuration."""
    if env_host := os.getenv("GZ_HOST"):
        cfg.server.host = env_host
    if env_port := os.getenv("GZ_PORT"):
        cfg.server.port = int(env_port)

    if env_store := os.getenv("GZ_STORE_PATH"):
        cfg.store.path = env_store
    if env_prefix := os.getenv("GZ_STORE_PREFIX"):
        cfg.store.prefix = env_prefix

    if env_admin_email := os.getenv("GZ_ADMIN_EMAIL"):
        cfg.admin.email = env_admin_email
    if env_admin_password := os.getenv("GZ_ADMIN_PASSWORD"):
        cfg.admin.password = env_admin_password

    if env_min_length := os.getenv("GZ_PASSWORD_MIN_LENGTH"):
        cfg.password.min_length = int(env_min_length)

    if env_log := os.getenv("GZ_LOG_LEVEL"):
        cfg.logging.level = env_log.upper()


def load_config() -> AppConfig:
    """
    Load configuration from all sources with proper priority.

    Priority (highest wins):
        1. Environment variables
        2. config/gamezone.ini
        3. config/gamezone.example.ini (fallback for development)
        4. Built-in defaults

    Returns:
        AppConfig: Fully populated configuration object.
    """
    cfg = AppConfig()

    config_file = None
    if CONFIG_FILE.exists():
        config_file = CONFIG_FILE
    elif CONFIG_EXAMPLE.exists():
        config_file = CONFIG_EXAMPLE

    if config_file:
        parser = configparser.ConfigParser()
        parser.read(config_file)
        _load_from_ini(parser, cfg)

    _apply_env_overrides(cfg)

    return cfg


def reload_config() -> "AppConfig":
    """
    Reload configuration from disk and environment.

    This updates the module-level `config` singleton. Containers that were
    already built keep the settings they were constructed with.

    Returns:
        AppConfig: The newly loaded configuration.
    """
    global config
    config = load_config()
    return config


# =============================================================================
# MODULE-LEVEL SINGLETON
# =============================================================================

config = load_config()


def get_config_status() -> dict:
    """
    Get configuration status for diagnostics.

    Returns a dictionary with configuration source information. Secrets are
    never included.
    """
    return {
        "config_file_exists": CONFIG_FILE.exists(),
        "config_file_path": str(CONFIG_FILE),
        "using_example": not CONFIG_FILE.exists() and CONFIG_EXAMPLE.exists(),
        "store_path": str(config.store.absolute_path),
        "store_prefix": config.store.prefix,
        "admin_email": config.admin.email,
    }


# =============================================================================
# TEST HELPERS
# =============================================================================


class use_test_store:
    """
    Context manager for pointing the config at a temporary store file.

    Usage:
        from gamezone.config import use_test_store

        def test_something(tmp_path):
            with use_test_store(tmp_path / "store.db"):
                app = GameZoneApp.from_config()

    Args:
        store_path: Path to the temporary store file
    """

    def __init__(self, store_path: Path | str):
        self.store_path = Path(store_path)
        self.original_path: str | None = None

    def __enter__(self) -> Path:
        """Set up test store path."""
        self.original_path = config.store.path
        config.store.path = str(self.store_path)
        return self.store_path

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Restore original store path."""
        if self.original_path is not None:
            config.store.path = self.original_path
        return None
