# ABOUTME: Shared test fixtures for the weather widget test suite.
# ABOUTME: Provides OpenWeatherMap payload builders, mock HTTP responses, and a recording view.

from datetime import datetime, timezone

import httpx
import pytest

from weather_widget.config import WidgetConfig

BASE_URL = "https://owm.test/data/2.5"


def ts(year: int, month: int, day: int, hour: int) -> int:
    """Unix seconds for a UTC wall-clock time."""
    return int(datetime(year, month, day, hour, tzinfo=timezone.utc).timestamp())


def current_payload(name="Paris", country="FR", lat=48.8534, lon=2.3488) -> dict:
    return {
        "name": name,
        "sys": {"country": country},
        "coord": {"lat": lat, "lon": lon},
        "weather": [{"icon": "04d", "description": "broken clouds"}],
        "main": {"temp": 17.5, "feels_like": 16.8, "humidity": 64, "pressure": 1014},
        "wind": {"speed": 3.5},
        "visibility": 10000,
        "clouds": {"all": 75},
    }


def forecast_item(dt: int, temp_min=10.0, temp_max=15.0, icon="10n", description="light rain") -> dict:
    return {
        "dt": dt,
        "main": {"temp_min": temp_min, "temp_max": temp_max},
        "weather": [{"icon": icon, "description": description}],
    }


# 13 samples spread unevenly over five UTC days.
FIVE_DAY_TIMESTAMPS = [
    ts(2025, 1, 15, 21),
    ts(2025, 1, 16, 0),
    ts(2025, 1, 16, 3),
    ts(2025, 1, 16, 6),
    ts(2025, 1, 17, 0),
    ts(2025, 1, 17, 9),
    ts(2025, 1, 17, 12),
    ts(2025, 1, 18, 3),
    ts(2025, 1, 18, 15),
    ts(2025, 1, 19, 0),
    ts(2025, 1, 19, 6),
    ts(2025, 1, 19, 18),
    ts(2025, 1, 19, 21),
]


def forecast_payload(timestamps=FIVE_DAY_TIMESTAMPS) -> dict:
    return {"list": [forecast_item(dt, temp_max=float(i)) for i, dt in enumerate(timestamps)]}


def json_response(json_data, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code=status_code, json=json_data, request=httpx.Request("GET", "https://test"))


class RecordingView:
    """WeatherView that keeps every Panels snapshot it is asked to render."""

    def __init__(self):
        self.rendered = []

    def render(self, panels) -> None:
        self.rendered.append(panels)

    @property
    def last(self):
        return self.rendered[-1]


@pytest.fixture
def config() -> WidgetConfig:
    return WidgetConfig(api_key="test-key", base_url=BASE_URL)


@pytest.fixture
def view() -> RecordingView:
    return RecordingView()
