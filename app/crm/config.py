import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Settings:
    env: str
    database_url: str
    database_echo: bool
    create_schema: bool

    reviews_base_url: str
    reviews_timeout_seconds: float

    log_level: str

    @property
    def is_production(self) -> bool:
        return self.env in ("prod", "production")


def _getenv(name: str, default: str = "") -> str:
    return (os.environ.get(name) or default).strip()


def _getenv_bool(name: str, default: bool) -> bool:
    raw = _getenv(name, "1" if default else "0").lower()
    return raw in ("1", "true", "yes", "on")


def async_database_url(url: str) -> str:
    """
    Point sync driver URLs at their asyncio drivers.
    `sqlite:///x.db` -> `sqlite+aiosqlite:///x.db`, `postgres://` -> `postgresql+asyncpg://`.
    URLs that already name a driver are returned unchanged.
    """
    if url.startswith("sqlite:"):
        return "sqlite+aiosqlite:" + url[len("sqlite:"):]
    if url.startswith("postgres://"):
        return "postgresql+asyncpg://" + url[len("postgres://"):]
    if url.startswith("postgresql://"):
        return "postgresql+asyncpg://" + url[len("postgresql://"):]
    return url


def load_settings() -> Settings:
    s = Settings(
        env=_getenv("ENV", "development"),
        database_url=async_database_url(_getenv("DATABASE_URL", "sqlite+aiosqlite:///customers.db")),
        database_echo=_getenv_bool("DATABASE_ECHO", False),
        create_schema=_getenv_bool("CREATE_SCHEMA", True),
        reviews_base_url=_getenv("REVIEWS_BASE_URL", ""),
        reviews_timeout_seconds=float(_getenv("REVIEWS_TIMEOUT_SECONDS", "30")),
        log_level=_getenv("LOG_LEVEL", "INFO").upper(),
    )
    check_settings(s)
    return s


def check_settings(s: Settings) -> None:
    # Production guardrails (fail fast with clear messages)
    if s.is_production:
        if not s.database_url:
            raise RuntimeError("DATABASE_URL is required in production.")
        if s.database_url.startswith("sqlite"):
            raise RuntimeError("DATABASE_URL must be Postgres in production (not sqlite).")
