# dealership/core/config.py

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # App
    ENV: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_URL: str = "sqlite:///./dealership.db"

    # Backend API
    API_PREFIX: str = "/api"
    HOST: str = "127.0.0.1"
    PORT: int = 8080
    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    # Rate limiting
    RATE_LIMIT_ENABLED: bool = True
    SALE_CREATE_RATE_LIMIT: str = "30/minute"

    # REST client (dashboard side)
    API_BASE_URL: str = "http://localhost:8080/api"
    API_TIMEOUT_SECONDS: float = 10.0
    HEALTH_CHECK_INTERVAL_SECONDS: float = 30.0

    # Sale rules
    SALE_DATE_MAX_DAYS_AHEAD: int = 30

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="forbid",
    )


settings = Settings()
