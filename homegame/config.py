"""Application configuration using Pydantic BaseSettings."""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    APP_NAME: str = "Home Game Calculator"
    APP_VERSION: str = "1.0.0"
    LOG_LEVEL: str = "INFO"

    # Comma-separated list of allowed origins, or "*" for all origins
    CORS_ORIGINS: str = ""

    # Values the HTML page is prefilled with
    DEFAULT_BUY_IN: float = 20
    DEFAULT_SMALL_BLIND: float = 0.10
    DEFAULT_BIG_BLIND: float = 0.20
    DEFAULT_DENOMINATIONS: str = "1,5,25,100,500,1000"

    @property
    def cors_origins(self) -> list[str]:
        if not self.CORS_ORIGINS:
            return []
        if self.CORS_ORIGINS.strip() == "*":
            return ["*"]
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def default_denominations(self) -> list[float]:
        return [float(value) for value in self.DEFAULT_DENOMINATIONS.split(",") if value.strip()]


settings = Settings()
