"""Settings built once from the environment at startup.

Only environment variables are read; there is no config file. An empty
variable counts as unset, so `DB_HOST=` still yields the default host.
"""

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

DEFAULT_DB_HOST = "database"
DEFAULT_DB_USER = "docker"
DEFAULT_DB_PASSWORD = "docker"
DEFAULT_DB_DRIVER = "mysql"

# Driver name -> default port
DB_DRIVER_PORTS = {"mysql": 3306, "postgres": 5432}

# Fixed cache endpoints (not configurable)
REDIS_HOST = "redis"
REDIS_PORT = 6379
MEMCACHED_HOST = "memcached"
MEMCACHED_PORT = 11211

DEFAULT_PROBE_TIMEOUT_SEC = 1.0
DEFAULT_SERVER_HOST = "0.0.0.0"
DEFAULT_SERVER_PORT = 8765
DEFAULT_LOG_LEVEL = "INFO"
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class SettingsError(ValueError):
    """Invalid environment value, raised at startup only."""


@dataclass(frozen=True)
class DatabaseSettings:
    driver: str = DEFAULT_DB_DRIVER
    host: str = DEFAULT_DB_HOST
    user: str = DEFAULT_DB_USER
    password: str = DEFAULT_DB_PASSWORD
    port: int = DB_DRIVER_PORTS[DEFAULT_DB_DRIVER]


@dataclass(frozen=True)
class CacheEndpoint:
    host: str
    port: int

    def __str__(self) -> str:
        return f"{self.host}:{self.port}"


@dataclass(frozen=True)
class Settings:
    """Everything the reporter and server need; passed explicitly, never re-read."""

    database: DatabaseSettings = field(default_factory=DatabaseSettings)
    redis: CacheEndpoint = field(default_factory=lambda: CacheEndpoint(REDIS_HOST, REDIS_PORT))
    memcached: CacheEndpoint = field(default_factory=lambda: CacheEndpoint(MEMCACHED_HOST, MEMCACHED_PORT))
    probe_timeout_sec: float = DEFAULT_PROBE_TIMEOUT_SEC
    server_host: str = DEFAULT_SERVER_HOST
    server_port: int = DEFAULT_SERVER_PORT
    log_level: str = DEFAULT_LOG_LEVEL


def _env(environ: Mapping[str, str], name: str, default: str) -> str:
    """Value of `name`, or `default` when unset or blank."""
    value = environ.get(name)
    if value is None or not value.strip():
        return default
    return value


def _env_int(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = _env(environ, name, str(default))
    try:
        value = int(raw)
    except ValueError:
        raise SettingsError(f"{name} must be an integer, got {raw!r}") from None
    if not 0 < value < 65536:
        raise SettingsError(f"{name} must be a TCP port (1-65535), got {value}")
    return value


def _env_float(environ: Mapping[str, str], name: str, default: float) -> float:
    raw = _env(environ, name, str(default))
    try:
        value = float(raw)
    except ValueError:
        raise SettingsError(f"{name} must be a number, got {raw!r}") from None
    if value <= 0:
        raise SettingsError(f"{name} must be positive, got {value}")
    return value


def get_database_settings(environ: Optional[Mapping[str, str]] = None) -> DatabaseSettings:
    """Return database settings from DB_DRIVER, DB_HOST, DB_USER, DB_PASSWORD, DB_PORT."""
    env = os.environ if environ is None else environ
    driver = _env(env, "DB_DRIVER", DEFAULT_DB_DRIVER).strip().lower()
    if driver not in DB_DRIVER_PORTS:
        raise SettingsError(f"DB_DRIVER must be one of {sorted(DB_DRIVER_PORTS)}, got {driver!r}")
    return DatabaseSettings(
        driver=driver,
        host=_env(env, "DB_HOST", DEFAULT_DB_HOST),
        user=_env(env, "DB_USER", DEFAULT_DB_USER),
        password=_env(env, "DB_PASSWORD", DEFAULT_DB_PASSWORD),
        port=_env_int(env, "DB_PORT", DB_DRIVER_PORTS[driver]),
    )


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from the environment (os.environ when not given).

    Raises:
        SettingsError: a variable is set to a value that cannot be used.
    """
    env = os.environ if environ is None else environ
    log_level = _env(env, "STATUS_LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().upper()
    if log_level not in LOG_LEVELS:
        raise SettingsError(f"STATUS_LOG_LEVEL must be one of {list(LOG_LEVELS)}, got {log_level!r}")
    return Settings(
        database=get_database_settings(env),
        probe_timeout_sec=_env_float(env, "PROBE_TIMEOUT_SEC", DEFAULT_PROBE_TIMEOUT_SEC),
        server_host=_env(env, "STATUS_HOST", DEFAULT_SERVER_HOST),
        server_port=_env_int(env, "STATUS_PORT", DEFAULT_SERVER_PORT),
        log_level=log_level,
    )
