# taskmanager/backend/core/config.py
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_ALLOWED_ENVS = {"dev", "prod", "test"}

DEFAULT_DATABASE_URL = "sqlite:///./tasks.db"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # app
    app_env: str = Field("dev", alias="ENV")
    app_version: str = Field("0.1.0", alias="APP_VERSION")
    api_prefix: str = Field("/api", alias="API_PREFIX")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    # DB
    database_url: str = Field(DEFAULT_DATABASE_URL, alias="DATABASE_URL")
    db_auto_create: bool = Field(True, alias="DB_AUTO_CREATE")

    # HTTP
    cors_allow_origins: str = Field(
        "http://localhost:3000,http://localhost:5173",
        alias="CORS_ALLOW_ORIGINS",
    )
    host: str = Field("0.0.0.0", alias="HOST")
    port: int = Field(3000, alias="PORT")

    @field_validator("app_env")
    @classmethod
    def _check_env(cls, v: str) -> str:
        env = v.strip().lower()
        if env not in _ALLOWED_ENVS:
            allowed = "|".join(sorted(_ALLOWED_ENVS))
            raise ValueError(f"ENV must be one of {allowed}")
        return env

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.cors_allow_origins.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()
