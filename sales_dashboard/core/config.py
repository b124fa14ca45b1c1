from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Ignore unrelated env keys so local/dev .env can include client-side settings.
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "Sales Dashboard Backend"
    environment: str = "development"
    api_prefix: str = "/api/v1"
    cors_allow_origins: str = "http://localhost:3000,http://127.0.0.1:3000,http://localhost:5173"
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    google_sheet_id: str = Field(..., alias="GOOGLE_SHEET_ID")
    google_sheet_range: str = Field(default="A1:Z", alias="GOOGLE_SHEET_RANGE")
    google_sheets_api_key: Optional[str] = Field(default=None, alias="GOOGLE_SHEETS_API_KEY")
    google_sheets_access_token: Optional[str] = Field(default=None, alias="GOOGLE_SHEETS_ACCESS_TOKEN")
    google_sheets_base_url: str = Field(
        default="https://sheets.googleapis.com/v4", alias="GOOGLE_SHEETS_BASE_URL"
    )
    google_sheets_timeout_seconds: float = Field(default=30.0, alias="GOOGLE_SHEETS_TIMEOUT_SECONDS")
    cache_ttl_seconds: float = Field(default=300.0, ge=0, alias="CACHE_TTL_SECONDS")

    fiscal_year_start_month: int = Field(default=4, ge=1, le=12, alias="FISCAL_YEAR_START_MONTH")
    fiscal_base_year: int = Field(default=2023, ge=1900, le=2100, alias="FISCAL_BASE_YEAR")
    fiscal_reference_date: str = Field(
        default="delivery_or_order",
        pattern="^(delivery_or_order|delivery|order)$",
        alias="FISCAL_REFERENCE_DATE",
    )
    default_fiscal_period: Optional[int] = Field(default=2, ge=1, alias="DEFAULT_FISCAL_PERIOD")
    default_phases: str = Field(default="納品完了,受注済み,実施確定", alias="DEFAULT_PHASES")
    default_sort_key: str = Field(
        default="total_sales",
        pattern="^(sales_rep|deal_count|total_sales|total_profit|avg_sale)$",
        alias="DEFAULT_SORT_KEY",
    )
    default_sort_direction: str = Field(
        default="descending", pattern="^(ascending|descending)$", alias="DEFAULT_SORT_DIRECTION"
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()


def get_cors_origins() -> list[str]:
    settings = get_settings()
    return [origin.strip() for origin in settings.cors_allow_origins.split(",") if origin.strip()]


def get_default_phases() -> list[str]:
    settings = get_settings()
    return [phase.strip() for phase in settings.default_phases.split(",") if phase.strip()]
