import os
from functools import lru_cache
from pathlib import Path

from pydantic import AnyHttpUrl, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parent.parent.parent
DB_FILENAME = "time-recording.db"


class Settings(BaseSettings):
    env: str = Field(default="dev", description="Deployment environment")
    app_name: str = "Time Recording API"
    app_version: str = "1.2.0"
    database_url: str | None = Field(default=None, description="Explicit database connection string")
    shared_db_dir: Path | None = Field(default=None, description="Network share holding the team database")
    local_db_dir: Path = Field(default=BASE_DIR / "data", description="Fallback directory for the database file")
    calendar_dir: Path | None = Field(default=None, description="Directory of <year>.json calendar tables")
    daily_limit_hours: float = Field(default=10.0, gt=0)
    master_password: str | None = Field(default=None, description="Optional password accepted for every user")
    auto_init_db: bool = True
    cors_origins: list[AnyHttpUrl] = []
    log_level: str = "INFO"
    sentry_dsn: str | None = Field(default=None, description="Sentry DSN for error monitoring")
    otlp_endpoint: str | None = Field(default=None, description="OTLP endpoint for traces/metrics")

    model_config = SettingsConfigDict(env_prefix="TIMEREC_", extra="ignore")

    @field_validator("cors_origins", mode="before")
    @classmethod
    def split_origins(cls, value: str | list[AnyHttpUrl]) -> list[AnyHttpUrl]:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @property
    def is_dev(self) -> bool:
        return self.env == "dev"

    def resolved_database_url(self) -> str:
        if self.database_url:
            return self.database_url
        directory = self.local_db_dir
        if not self.is_dev and self.shared_db_dir is not None and self.shared_db_dir.is_dir():
            directory = self.shared_db_dir
        return f"sqlite:///{directory / DB_FILENAME}"


@lru_cache
def get_settings() -> Settings:
    return Settings(_env_file=get_settings_env_file())


def get_settings_env_file() -> str | None:
    """Resolve environment-specific env file if it exists."""
    env = os.getenv("TIMEREC_ENV", "dev")
    env_file = BASE_DIR / f".env.{env}"
    default_file = BASE_DIR / ".env"
    if env_file.exists():
        return str(env_file)
    if default_file.exists():
        return str(default_file)
    return None


settings = get_settings()
