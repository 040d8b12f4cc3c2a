
from pydantic import Field
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """Application configuration loaded from environment variables / .env file."""

    app_name: str = "Natours API"
    app_env: str = Field(default="development", alias="APP_ENV")
    app_port: int = 8000
    frontend_url: str = "http://localhost:3000"

    # Database (SQLite via aiosqlite for local dev and tests)
    database_url: str = Field(
        default="sqlite+aiosqlite:///./natours_dev.db",
        alias="DATABASE_URL",
    )
    auto_create_tables: bool = Field(
        default=True, alias="AUTO_CREATE_TABLES",
    )  # Alembic owns the schema when this is off

    # List endpoint defaults
    default_page_limit: int = Field(default=100, alias="DEFAULT_PAGE_LIMIT")
    max_page_limit: int = Field(default=1000, alias="MAX_PAGE_LIMIT")
    default_sort: str = "-createdAt"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "populate_by_name": True,
    }

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"

settings = Settings()
