import os


def _async_database_url(raw_url: str) -> str:
    """Point plain Postgres URLs at the asyncpg driver."""
    if raw_url.startswith("postgresql://"):
        return raw_url.replace("postgresql://", "postgresql+asyncpg://", 1)
    if raw_url.startswith("postgres://"):
        return raw_url.replace("postgres://", "postgresql+asyncpg://", 1)
    return raw_url


class Settings:
    PROJECT_NAME: str = "CeialMilk"
    PROJECT_VERSION: str = "1.0.0"

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # SECURITY
    JWT_SECRET: str = os.getenv("JWT_SECRET", "super-secret-key-change-in-production")
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRATION_SECONDS: int = int(os.getenv("JWT_EXPIRATION_SECONDS", "3600"))

    # DATABASE
    # DATABASE_URL = "postgresql://user:pass@db:5432/ceialmilk"
    DATABASE_URL: str = _async_database_url(
        os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./ceialmilk.db")
    )

    # CACHE (empty disables the fazenda response cache)
    REDIS_URL: str = os.getenv("REDIS_URL", "")
    CACHE_TTL_SECONDS: int = int(os.getenv("CACHE_TTL_SECONDS", "3600"))

    @property
    def cache_enabled(self) -> bool:
        return bool(self.REDIS_URL)


settings = Settings()
