from pathlib import Path

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

    # Database: DATABASE_URL wins, then Postgres when a host is set, else SQLite
    DATABASE_URL: str = ""
    DB_PATH: str = "./data/blog.sqlite3"

    # Postgres
    POSTGRES_HOST: str = ""
    POSTGRES_PORT: int = 5432
    POSTGRES_USERNAME: str = "postgres"
    POSTGRES_PASSWORD: str = ""
    POSTGRES_DATABASE: str = "blog"

    # Site / RSS
    SITE_NAME: str = "Teacher AI Academy"
    SITE_BASE_URL: str = "http://localhost:8080"
    RSS_TITLE: str = "Teacher AI Academy Blog"
    RSS_DESCRIPTION: str = (
        "Insights, tips, and strategies for integrating AI into your teaching practice."
    )
    FE_ORIGIN: str = "http://127.0.0.1:5500"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8080

    # Logging
    LOG_LEVEL: str = "INFO"

    # Secrets
    ADMIN_BEARER_TOKEN: str = ""
    N8N_WEBHOOK_SECRET: str = ""

    @property
    def postgres_url(self) -> str:
        return f"postgresql://{self.POSTGRES_USERNAME}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DATABASE}"

    @property
    def sqlite_url(self) -> str:
        return f"sqlite:///{Path(self.DB_PATH).resolve()}"

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        if self.POSTGRES_HOST:
            return self.postgres_url
        return self.sqlite_url


# Global settings instance (evaluated at import, but reads env on construction)
settings = Settings()
