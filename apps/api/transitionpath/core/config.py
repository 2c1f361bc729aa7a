import warnings

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    APP_ENV: str = "development"
    APP_DEBUG: bool = True
    APP_VERSION: str | None = None  # e.g. "1.2.3" or git SHA, used as Sentry release tag
    FRONTEND_URL: str = "http://localhost:3000"

    # Security
    MAX_REQUEST_BODY_BYTES: int = 5_242_880  # 5 MB; raw document text rides in the JSON body

    # Sentry error monitoring: set SENTRY_DSN to enable; no-op when unset
    SENTRY_DSN: str | None = None
    SENTRY_ENVIRONMENT: str = "development"

    # Assessment
    # Year the trajectory rules count "years to target" from. Pinned so that
    # scoring never depends on the wall clock.
    ASSESSMENT_REFERENCE_YEAR: int = 2025
    DFI_MATCH_LIMIT: int = 5

    # External KPI recommendation gateway. Unset uses the built-in sector library
    KPI_GATEWAY_URL: str | None = None
    KPI_GATEWAY_API_KEY: str = ""
    KPI_GATEWAY_TIMEOUT: float = 30.0

    @model_validator(mode="after")
    def _validate_production_settings(self) -> "Settings":
        if self.APP_ENV == "production":
            if not self.SENTRY_DSN:
                warnings.warn(
                    "SENTRY_DSN not set in production; errors will be invisible",
                    stacklevel=2,
                )
            if self.APP_DEBUG:
                warnings.warn(
                    "APP_DEBUG is enabled in production",
                    stacklevel=2,
                )
        return self


settings = Settings()
