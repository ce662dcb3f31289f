from typing import Optional
from urllib.parse import quote_plus
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # --- Basic configuration ---
    APP_NAME: str = "Airline Transport API"
    APP_DESCRIPTION: str = "Users and routes API secured by stateless bearer tokens"
    APP_VERSION: str = "1.0.0"
    APP_ENV: str = "development"  # development, production, testing
    DEBUG: bool = True

    # --- Database (MySQL/SQLModel) ---
    DB_HOST: str = "localhost"
    DB_PORT: int = 3306
    DB_USER: str = "root"
    DB_PASSWORD: str = "root"
    DB_NAME: str = "airline_db"
    DB_POOL_SIZE: int = 10
    DB_POOL_TIMEOUT: int = 3  # Seconds to wait for a pooled connection

    @property
    def DATABASE_URL(self) -> str:
        # Build async MySQL connection URL
        safe_password = quote_plus(self.DB_PASSWORD)
        return f"mysql+aiomysql://{self.DB_USER}:{safe_password}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"

    # --- Token auth ---
    JWT_SECRET: Optional[str] = None  # Required; startup fails without it
    JWT_EXPIRES_IN: str = "30d"  # <int><s|m|h|d>, falls back to 30 days
    JWT_ALGORITHM: str = "HS256"

    # --- Pagination ---
    DEFAULT_PAGE_SIZE: int = 10

    # --- Logging ---
    LOG_DIR: str = "logs"
    LOG_LEVEL: str = "INFO"
    LOG_RETENTION: str = "30 days"

    # --- API route prefixes (optional, overridable in private projects) ---
    API_AUTH_PREFIX: str = "/api/auth"
    API_USERS_PREFIX: str = "/api/users"
    API_ROUTES_PREFIX: str = "/api/routes"

    # --- Gunicorn process name (optional) ---
    GUNICORN_PROC_NAME: Optional[str] = None  # Fallback to APP_NAME when empty

    # --- Pydantic ---
    # Load env from project root .env; priority: env vars > .env > defaults
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_ignore_empty=True,
    )


# Singleton settings instance
settings = Settings()
