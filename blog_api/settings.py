from pathlib import Path
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def choose_env_file() -> str:
    return ".env.local" if Path(".env.local").exists() else ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=choose_env_file(),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # tolerate unrelated env vars
    )

    # Database (DATABASE_URL wins over the POSTGRES_* parts)
    DATABASE_URL: str = ""
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_USERNAME: str = "postgres"
    POSTGRES_PASSWORD: str = ""
    POSTGRES_DATABASE: str = "blog_db"
    DB_ECHO: bool = False
    SEED_DATABASE: bool = True

    # Logging
    LOG_LEVEL: str = "INFO"

    # API
    APP_NAME: str = "Blog API"
    APP_VERSION: str = "1.0.0"
    API_PREFIX: str = "/api/v1"
    CORS_ORIGINS: str = "http://localhost:4200,http://127.0.0.1:4200"

    # Write routes are open when empty
    BLOG_API_KEY: str = ""

    # Blog
    # excerpt column holds 500 chars, ellipsis included
    EXCERPT_MAX_LENGTH: int = Field(300, ge=1, le=497)

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return f"postgresql://{self.POSTGRES_USERNAME}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DATABASE}"

    @property
    def cors_origins(self) -> List[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


# Global settings instance (evaluated at import, but reads env on construction)
settings = Settings()
