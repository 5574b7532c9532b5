from __future__ import annotations

import os
from dataclasses import dataclass
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv()

# Fixed store location inside the cluster addressed by DB_CONNECTION_URL
DATABASE_NAME = "todo"
COLLECTION_NAME = "todos"

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    Env vars:
    - DB_CONNECTION_URL: MongoDB connection string (required to start the service)
    - MONGO_SERVER_SELECTION_TIMEOUT_MS: startup ping timeout in ms. Default 5000
    - HOST: bind address for the entry point. Default '0.0.0.0'
    - PORT: bind port for the entry point. Default 3001
    - CORS_ALLOW_ORIGINS: comma-separated list of allowed origins; '*' by default
    - LOG_LEVEL: root log level name. Default 'INFO'
    """

    db_connection_url: Optional[str]
    server_selection_timeout_ms: int
    host: str
    port: int
    cors_allow_origins: List[str]
    log_level: str
    database_name: str = DATABASE_NAME
    collection_name: str = COLLECTION_NAME


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name, default)
    if value is None or value.strip() == "":
        return default
    return value.strip()


def _parse_int(value: str, default: int) -> int:
    try:
        return int(value)
    except ValueError:
        return default


def _parse_origins(origins_value: str) -> List[str]:
    """
    Parse CORS origins from env. Supports:
    - '*' to allow all origins
    - Comma-separated list of origins
    """
    value = origins_value.strip()
    if value == "*":
        return ["*"]
    return [o.strip() for o in value.split(",") if o.strip()]


def _parse_log_level(value: str) -> str:
    level = value.upper()
    if level not in _LOG_LEVELS:
        return "INFO"
    return level


# PUBLIC_INTERFACE
def get_settings() -> Settings:
    """Return application settings loaded from environment variables."""
    connection_url = os.getenv("DB_CONNECTION_URL")
    if connection_url is not None and not connection_url.strip():
        connection_url = None

    return Settings(
        db_connection_url=connection_url.strip() if connection_url else None,
        server_selection_timeout_ms=_parse_int(_get_env("MONGO_SERVER_SELECTION_TIMEOUT_MS", "5000"), 5000),
        host=_get_env("HOST", "0.0.0.0"),
        port=_parse_int(_get_env("PORT", "3001"), 3001),
        cors_allow_origins=_parse_origins(_get_env("CORS_ALLOW_ORIGINS", "*")),
        log_level=_parse_log_level(_get_env("LOG_LEVEL", "INFO")),
    )
