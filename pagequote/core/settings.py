from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = Field(default="PageQuote API", alias="APP_NAME")
    app_env: str = Field(default="local", alias="APP_ENV")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_redaction_enabled: bool = Field(default=True, alias="LOG_REDACTION_ENABLED")

    # Pricing parameters owned by the back office, not by the estimators
    base_price_per_page: float = Field(
        default=9.00, ge=0, allow_inf_nan=False, alias="BASE_PRICE_PER_PAGE"
    )
    urgency_rate: float = Field(default=0.50, ge=0, alias="URGENCY_RATE")
    notary_fee: float = Field(default=25.00, ge=0, alias="NOTARY_FEE")
    deadline_normal_days: int = Field(default=10, ge=0, alias="DEADLINE_NORMAL_DAYS")
    deadline_urgent_days: int = Field(default=2, ge=0, alias="DEADLINE_URGENT_DAYS")

    analysis_max_workers: int = Field(default=4, ge=1, alias="ANALYSIS_MAX_WORKERS")
    max_upload_bytes: int = Field(default=50 * 1024 * 1024, ge=1, alias="MAX_UPLOAD_BYTES")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
