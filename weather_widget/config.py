# ABOUTME: Runtime configuration for the weather widget, read from the environment.
# ABOUTME: Loads a .env file via python-dotenv and validates values into a WidgetConfig model.

import logging
import os
from typing import Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

from weather_widget.validation import validate_city

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.openweathermap.org/data/2.5"
DEFAULT_FALLBACK_CITY = "Manila"


class WidgetConfig(BaseModel):
    """Provider credentials and display policy for one widget instance."""

    model_config = ConfigDict(frozen=True)

    api_key: str = ""
    base_url: str = DEFAULT_BASE_URL
    units: Literal["metric"] = "metric"
    fallback_city: str = DEFAULT_FALLBACK_CITY
    timezone: str = "UTC"
    forecast_days: int = Field(default=5, ge=1, le=5)

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("fallback_city")
    @classmethod
    def validate_fallback_city(cls, value: str) -> str:
        return validate_city(value)

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown timezone: {value}") from exc
        return value

    @property
    def zone(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)


def load_config() -> WidgetConfig:
    """Build a WidgetConfig from environment variables, after loading any .env file."""
    load_dotenv(find_dotenv(usecwd=True))

    values: dict[str, str] = {}
    env_map = {
        "api_key": "OPENWEATHER_API_KEY",
        "base_url": "OPENWEATHER_BASE_URL",
        "units": "WEATHER_UNITS",
        "fallback_city": "WEATHER_FALLBACK_CITY",
        "timezone": "WEATHER_TIMEZONE",
        "forecast_days": "WEATHER_FORECAST_DAYS",
    }
    for field, env_name in env_map.items():
        raw = os.environ.get(env_name)
        if raw is not None and raw.strip():
            values[field] = raw.strip()
    config = WidgetConfig.model_validate(values)
    if not config.api_key:
        logger.warning("OPENWEATHER_API_KEY is not set; every weather request will be rejected by the provider")
    return config
