"""Configuration management using Pydantic Settings."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Priority-ordered provider ids per metric; first provider with data wins.
DEFAULT_PROVIDER_ORDER: dict[str, list[str]] = {
    "gold": ["goldapi", "gold_api_com"],
    "goldHist": ["alpha_vantage"],
    "btcHistory": ["coincap"],
    "btcSpot": ["goldapi", "coincap"],
    "cpi": ["fred", "alpha_vantage"],
    "m2": ["fred", "alpha_vantage"],
    "hpi": ["fred"],
    "dxy": ["frankfurter", "open_er_api"],
}


class Settings(BaseSettings):
    """Application settings loaded from environment variables and ``.env``."""

    model_config = SettingsConfigDict(
        env_prefix="MACROSNAP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Credentials (supplied out of band; never embedded in code)
    fred_api_key: str | None = None
    alpha_vantage_api_key: str | None = None
    goldapi_api_key: str | None = None

    # Provider endpoints
    fred_base_url: str = "https://api.stlouisfed.org/fred"
    alpha_vantage_base_url: str = "https://www.alphavantage.co"
    goldapi_base_url: str = "https://www.goldapi.io/api"
    gold_api_com_base_url: str = "https://api.gold-api.com"
    coincap_base_url: str = "https://api.coincap.io/v2"
    frankfurter_base_url: str = "https://api.frankfurter.app"
    open_er_api_base_url: str = "https://open.er-api.com/v6"

    # HTTP
    http_timeout_seconds: float = 20.0

    # Series selection and retention windows
    m2_series_id: str = "M2SL"
    cpi_series_id: str = "CPIAUCSL"
    hpi_series_id: str = "CSUSHPINSA"
    economic_limit: int = Field(default=80, gt=0)
    gold_history_limit: int = Field(default=300, gt=0)
    btc_history_months: int = Field(default=60, gt=0)
    btc_history_years: int = Field(default=5, gt=0)

    provider_order: dict[str, list[str]] = Field(
        default_factory=lambda: {k: list(v) for k, v in DEFAULT_PROVIDER_ORDER.items()}
    )

    # Output
    output_path: Path = Path("docs/data/data.json")

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "console"] = "console"

    @field_validator("provider_order")
    @classmethod
    def _merge_provider_order(cls, order: dict[str, list[str]]) -> dict[str, list[str]]:
        """Overlay configured metrics on the default order; unlisted metrics keep theirs."""
        merged = {metric: list(ids) for metric, ids in DEFAULT_PROVIDER_ORDER.items()}
        merged.update({metric: list(ids) for metric, ids in order.items()})
        return merged


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings (for testing)."""
    global _settings
    _settings = None
