"""Application settings read from the environment (and a local ``.env``)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from urllib.parse import urlparse

from dotenv import load_dotenv

from freelance_hub.core.exceptions import ConfigurationError

load_dotenv()

PLACEHOLDER_JWT_SECRET = "change_me_jwt_secret"
LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})
DATABASE_SCHEMES = frozenset({"sqlite", "postgresql", "postgresql+psycopg2", "postgresql+psycopg"})
_TRUE = frozenset({"1", "true", "yes", "on"})


def _str(name: str, default: str) -> str:
    return os.getenv(name, default).strip()


def _flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    return default if raw is None else raw.strip().lower() in _TRUE


def _number(name: str, default: str, kind: type[int] | type[float]):
    raw = os.getenv(name, default)
    try:
        return kind(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be a {kind.__name__}, got {raw!r}.") from exc


def _csv(name: str, default: str) -> tuple[str, ...]:
    return tuple(item.strip() for item in os.getenv(name, default).split(",") if item.strip())


@dataclass(frozen=True)
class Config:
    """Validated runtime settings. Build with ``load_config``; read with ``get_config``."""

    APP_NAME: str
    APP_VERSION: str
    ENV: str
    DEBUG: bool
    # Persistence
    DATABASE_URL: str
    DB_CONNECTIVITY_REQUIRED: bool
    # Identity
    JWT_SECRET: str
    JWT_ACCESS_TTL_MINUTES: int
    PASSWORD_HASH_ITERATIONS: int
    # HTTP
    API_HOST: str
    API_PORT: int
    API_PREFIX: str
    CORS_ORIGINS: tuple[str, ...]
    # Logging
    LOG_LEVEL: str
    LOG_FILE: str
    # Invoices
    INVOICE_STORAGE_DIR: str
    INVOICE_DEFAULT_TVA: float
    INVOICE_BRAND_NAME: str
    INVOICE_BRAND_TAGLINE: str
    INVOICE_CURRENCY: str
    INVOICE_STRICT_STATUS: bool

    @property
    def is_production(self) -> bool:
        return self.ENV == "production"

    def __post_init__(self) -> None:
        problems = list(_problems(self))
        if problems:
            raise ConfigurationError("Invalid configuration: " + " ".join(problems))


def _problems(config: Config):
    parsed = urlparse(config.DATABASE_URL)
    if parsed.scheme not in DATABASE_SCHEMES:
        yield "DATABASE_URL must be a sqlite:// or postgresql:// URL."
    elif parsed.scheme.startswith("postgresql") and not parsed.hostname:
        yield "PostgreSQL DATABASE_URL is missing a hostname."
    if config.JWT_ACCESS_TTL_MINUTES < 1:
        yield "JWT_ACCESS_TTL_MINUTES must be >= 1."
    if config.PASSWORD_HASH_ITERATIONS < 1000:
        yield "PASSWORD_HASH_ITERATIONS must be >= 1000."
    if config.is_production and config.JWT_SECRET == PLACEHOLDER_JWT_SECRET:
        yield "JWT_SECRET still uses the placeholder value in production."
    if config.LOG_LEVEL not in LOG_LEVELS:
        yield f"LOG_LEVEL must be one of {', '.join(sorted(LOG_LEVELS))}."
    if config.INVOICE_DEFAULT_TVA < 0:
        yield "INVOICE_DEFAULT_TVA must be >= 0."
    elif round(config.INVOICE_DEFAULT_TVA, 2) != config.INVOICE_DEFAULT_TVA:
        yield "INVOICE_DEFAULT_TVA must have at most 2 decimal places."
    if len(config.INVOICE_CURRENCY) != 3 or not config.INVOICE_CURRENCY.isalpha():
        yield "INVOICE_CURRENCY must be a 3-letter ISO code."


def load_config(env: str | None = None) -> Config:
    """Read settings from the process environment; ``env`` overrides ``ENV``."""
    environment = (env or _str("ENV", "development")).lower()
    production = environment == "production"
    return Config(
        APP_NAME="Freelance Hub",
        APP_VERSION=_str("APP_VERSION", "1.0.0"),
        ENV=environment,
        DEBUG=False if production else _flag("DEBUG", True),
        DATABASE_URL=_str("DATABASE_URL", "sqlite:///./freelance_hub.db"),
        DB_CONNECTIVITY_REQUIRED=_flag("DB_CONNECTIVITY_REQUIRED", production),
        JWT_SECRET=os.getenv("JWT_SECRET", PLACEHOLDER_JWT_SECRET),
        JWT_ACCESS_TTL_MINUTES=_number("JWT_ACCESS_TTL_MINUTES", "60", int),
        PASSWORD_HASH_ITERATIONS=_number("PASSWORD_HASH_ITERATIONS", "260000", int),
        API_HOST=_str("API_HOST", "0.0.0.0"),
        API_PORT=_number("API_PORT", "8000", int),
        API_PREFIX=_str("API_PREFIX", "/api/v1"),
        CORS_ORIGINS=_csv("CORS_ORIGINS", "http://localhost:3000,http://localhost:3001"),
        LOG_LEVEL=_str("LOG_LEVEL", "INFO").upper(),
        LOG_FILE=_str("LOG_FILE", ""),
        INVOICE_STORAGE_DIR=_str("INVOICE_STORAGE_DIR", "./invoices"),
        INVOICE_DEFAULT_TVA=_number("INVOICE_DEFAULT_TVA", "20.0", float),
        INVOICE_BRAND_NAME=_str("INVOICE_BRAND_NAME", "Freelance Hub"),
        INVOICE_BRAND_TAGLINE=_str("INVOICE_BRAND_TAGLINE", "Independent consulting and development"),
        INVOICE_CURRENCY=_str("INVOICE_CURRENCY", "EUR").upper(),
        INVOICE_STRICT_STATUS=_flag("INVOICE_STRICT_STATUS", False),
    )


@lru_cache(maxsize=8)
def get_config(env: str | None = None) -> Config:
    return load_config(env)
