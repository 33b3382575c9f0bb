"""
admin_api/config.py
-------------------
Central configuration module. Loads environment variables from the .env
file and exposes them as a typed ``Settings`` object that the entry point
passes into the app factory and the database handle.
"""

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv


def _split_csv(raw: str) -> list[str]:
    return [part.strip() for part in raw.split(",") if part.strip()]


def _parse_tokens(raw: str) -> dict[str, str]:
    """Parse ``token:role`` pairs; a bare token gets the admin role."""
    tokens: dict[str, str] = {}
    for entry in _split_csv(raw):
        token, _, role = entry.partition(":")
        tokens[token.strip()] = role.strip() or "admin"
    return tokens


def _as_bool(raw: str) -> bool:
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Settings:
    """
    Runtime settings for the admin API.

    Attributes:
        database_url: libpq connection string for PostgreSQL.
        db_pool_min: Minimum number of pooled connections.
        db_pool_max: Maximum number of pooled connections.
        app_env: Deployment environment ('development', 'production', ...).
        admin_tokens: Bearer token -> role mapping accepted by the API.
        auth_disabled: Skip token checks entirely (local development only).
        cors_origins: Origins allowed to call ``/api/*``.
        host: Interface the HTTP server binds to.
        port: Port the HTTP server listens on.
        log_level: Root logging level name.
        init_schema: Create missing tables on start-up.
    """
    database_url: str
    db_pool_min: int = 1
    db_pool_max: int = 10
    app_env: str = "development"
    admin_tokens: dict[str, str] = field(default_factory=dict)
    auth_disabled: bool = False
    cors_origins: list[str] = field(default_factory=list)
    host: str = "127.0.0.1"
    port: int = 5000
    log_level: str = "INFO"
    init_schema: bool = False

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"

    @property
    def dsn(self) -> str:
        """Connection string, with SSL enforced in production."""
        if self.is_production and "sslmode=" not in self.database_url:
            sep = "&" if "?" in self.database_url else "?"
            return f"{self.database_url}{sep}sslmode=require"
        return self.database_url

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the process environment (and .env file)."""
        load_dotenv()

        # ── PostgreSQL ────────────────────────────────────────
        database_url = os.getenv("DATABASE_URL", "")
        if not database_url:
            host = os.getenv("DB_HOST", "localhost")
            port = int(os.getenv("DB_PORT", "5432"))
            name = os.getenv("DB_NAME", "shop_admin")
            user = os.getenv("DB_USER", "shop_admin")
            password = os.getenv("DB_PASS", "")
            database_url = f"postgresql://{user}:{password}@{host}:{port}/{name}"

        return cls(
            database_url=database_url,
            db_pool_min=int(os.getenv("DB_POOL_MIN", "1")),
            db_pool_max=int(os.getenv("DB_POOL_MAX", "10")),
            app_env=os.getenv("APP_ENV", "development"),
            # ── Security ──────────────────────────────────────
            admin_tokens=_parse_tokens(os.getenv("ADMIN_API_TOKENS", "")),
            auth_disabled=_as_bool(os.getenv("AUTH_DISABLED", "false")),
            cors_origins=_split_csv(os.getenv("CORS_ORIGINS", "")),
            # ── HTTP server ───────────────────────────────────
            host=os.getenv("HOST", "127.0.0.1"),
            port=int(os.getenv("PORT", "5000")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            init_schema=_as_bool(os.getenv("INIT_SCHEMA", "false")),
        )
