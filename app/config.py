from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=False, extra="ignore"
    )

    HTTP_PORT: int = 8000
    LOG_LEVEL: str = "INFO"
    DOCDATA_MERCHANT_NAME: str | None = None
    DOCDATA_MERCHANT_PASSWORD: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "DOCDATA_MERCHANT_PASSWORD", "DOCDATA_PASSWORD"
        ),
    )
    DOCDATA_TEST_MODE: bool = True
    DOCDATA_WSDL_URL: str | None = None
    DOCDATA_PAYMENT_PROFILE: str = "standard"
    DOCDATA_CLIENT_LANGUAGE: str = "en"
    RETURN_URL: str = "http://localhost:8000/return"


@lru_cache
def get_settings() -> Settings:
    """Get cached Settings instance."""
    return Settings()
