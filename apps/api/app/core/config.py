from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    app_name: str = "Event Bulletin API"
    app_version: str = "0.1.0"
    log_level: str = "INFO"

    database_scheme: str = "sqlite+pysqlite"
    database_path: str = "event_bulletin.db"  # used by sqlite schemes only
    database_host: str = "localhost"
    database_port: int = 5432
    database_user: str = "bulletin_admin"
    database_password: str = "bulletin_password"
    database_name: str = "event_bulletin"
    database_echo: bool = False

    # Session lifecycle
    session_ttl_hours: int = 24
    session_sweep_interval_seconds: int = 3600
    session_sweep_enabled: bool = True

    # Credentials
    password_hash_rounds: int = 10
    password_min_length: int = 6

    # Bootstrap administrator seeded at startup when missing
    seed_admin_enabled: bool = True
    seed_admin_username: str = "admin"
    seed_admin_password: str = "boxo2025"
    seed_admin_email: str = "admin@boxo.com"
    seed_admin_full_name: str = "System Administrator"

    cors_allowed_origins: str | list[str] = "http://localhost:3000"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="BULLETIN_",
        extra="ignore",
    )

    @property
    def database_url(self) -> str:
        """Assemble a SQLAlchemy compatible database URL."""
        if self.database_scheme.startswith("sqlite"):
            return f"{self.database_scheme}:///{self.database_path}"
        return (
            f"{self.database_scheme}://{self.database_user}:{self.database_password}"
            f"@{self.database_host}:{self.database_port}/{self.database_name}"
        )

    @property
    def resolved_cors_allowed_origins(self) -> list[str]:
        """Return the configured CORS origins as a normalized list."""

        if isinstance(self.cors_allowed_origins, str):
            return [
                origin.strip()
                for origin in self.cors_allowed_origins.split(",")
                if origin.strip()
            ]

        return list(self.cors_allowed_origins)


@lru_cache
def get_settings() -> Settings:
    """Cache settings to avoid re-parsing environment files."""
    return Settings()
