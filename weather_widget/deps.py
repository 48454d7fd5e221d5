# ABOUTME: Dependency container for the weather widget using Pydantic BaseModel.
# ABOUTME: Holds the httpx.AsyncClient and configuration shared by every fetch stage.

import httpx
from pydantic import BaseModel, ConfigDict

from weather_widget.config import WidgetConfig


class WeatherDeps(BaseModel):
    """Dependencies handed to the pipeline stages by the controller."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    http_client: httpx.AsyncClient
    config: WidgetConfig


def create_http_client() -> httpx.AsyncClient:
    """Create a plain httpx client.

    No retry transport and no timeout override: failed calls surface once, and
    httpx's own default timeout applies.
    """
    return httpx.AsyncClient(headers={"User-Agent": "weather-widget/0.1"})
