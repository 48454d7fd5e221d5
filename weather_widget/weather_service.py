# ABOUTME: Service layer for OpenWeatherMap API calls and response parsing.
# ABOUTME: Handles current conditions by city or coordinates and the 3-hourly forecast series.

from datetime import datetime, timezone, tzinfo
from typing import Any

import httpx
from pydantic import ValidationError

from weather_widget.errors import FetchError, FetchFailure
from weather_widget.models import CurrentConditions, ForecastSample

CITY_NOT_FOUND_MESSAGE = "City not found. Please try again."
LOCATION_FAILED_MESSAGE = "Could not fetch weather for your location."
FORECAST_FAILED_MESSAGE = "Could not fetch forecast"
UNREACHABLE_MESSAGE = "Unable to reach the weather service."
DECODE_FAILURE_MESSAGE = "Received an unexpected response from the weather service."


async def get_current_by_city(
    client: httpx.AsyncClient,
    base_url: str,
    api_key: str,
    city: str,
    units: str = "metric",
) -> CurrentConditions:
    """Fetch current conditions for a city name from the /weather endpoint."""
    data = await _get_json(
        client,
        f"{base_url}/weather",
        {"q": city, "units": units, "appid": api_key},
        failure_message=CITY_NOT_FOUND_MESSAGE,
    )
    return parse_current(data)


async def get_current_by_coords(
    client: httpx.AsyncClient,
    base_url: str,
    api_key: str,
    latitude: float,
    longitude: float,
    units: str = "metric",
) -> CurrentConditions:
    """Fetch current conditions for a coordinate pair from the /weather endpoint."""
    data = await _get_json(
        client,
        f"{base_url}/weather",
        {"lat": latitude, "lon": longitude, "units": units, "appid": api_key},
        failure_message=LOCATION_FAILED_MESSAGE,
    )
    return parse_current(data)


async def get_forecast(
    client: httpx.AsyncClient,
    base_url: str,
    api_key: str,
    latitude: float,
    longitude: float,
    tz: tzinfo = timezone.utc,
    units: str = "metric",
) -> list[ForecastSample]:
    """Fetch the 3-hourly forecast series from the /forecast endpoint."""
    data = await _get_json(
        client,
        f"{base_url}/forecast",
        {"lat": latitude, "lon": longitude, "units": units, "appid": api_key},
        failure_message=FORECAST_FAILED_MESSAGE,
    )
    return parse_forecast_list(data.get("list"), tz)


def parse_current(data: dict) -> CurrentConditions:
    """Map an OpenWeatherMap /weather body onto CurrentConditions, all fields or nothing."""
    try:
        main = data["main"]
        weather = data["weather"][0]
        return CurrentConditions(
            name=data["name"],
            country=data.get("sys", {}).get("country"),
            latitude=data["coord"]["lat"],
            longitude=data["coord"]["lon"],
            temperature=main["temp"],
            feels_like=main["feels_like"],
            humidity=main["humidity"],
            wind_speed=data["wind"]["speed"],
            pressure=main["pressure"],
            visibility=data["visibility"],
            cloudiness=data["clouds"]["all"],
            description=weather["description"],
            icon=weather["icon"],
        )
    except (KeyError, IndexError, TypeError, AttributeError, ValidationError) as e:
        raise FetchError(FetchFailure.DECODE_FAILURE, DECODE_FAILURE_MESSAGE) from e


def parse_forecast_list(raw: Any, tz: tzinfo = timezone.utc) -> list[ForecastSample]:
    """Parse the forecast `list` into ForecastSamples, keyed by calendar day in `tz`."""
    if not isinstance(raw, list):
        raise FetchError(FetchFailure.DECODE_FAILURE, DECODE_FAILURE_MESSAGE)

    result = []
    for item in raw:
        try:
            timestamp = datetime.fromtimestamp(item["dt"], tz=timezone.utc)
            weather = item["weather"][0]
            result.append(
                ForecastSample(
                    timestamp=timestamp,
                    day_key=timestamp.astimezone(tz).date(),
                    temp_min=item["main"]["temp_min"],
                    temp_max=item["main"]["temp_max"],
                    description=weather["description"],
                    icon=weather["icon"],
                )
            )
        except (KeyError, IndexError, TypeError, ValueError, OverflowError, OSError) as e:
            raise FetchError(FetchFailure.DECODE_FAILURE, DECODE_FAILURE_MESSAGE) from e
    return result


async def _get_json(client: httpx.AsyncClient, url: str, params: dict, *, failure_message: str) -> dict:
    """Issue one GET and return the decoded JSON object.

    A non-success status is mapped to FetchError without reading the body.
    """
    try:
        resp = await client.get(url, params=params)
    except httpx.DecodingError as e:
        raise FetchError(FetchFailure.DECODE_FAILURE, DECODE_FAILURE_MESSAGE) from e
    except httpx.HTTPError as e:
        raise FetchError(FetchFailure.UNREACHABLE, UNREACHABLE_MESSAGE) from e

    if not resp.is_success:
        reason = FetchFailure.NOT_FOUND if resp.status_code == 404 else FetchFailure.UNREACHABLE
        raise FetchError(reason, failure_message)

    try:
        data = resp.json()
    except ValueError as e:
        raise FetchError(FetchFailure.DECODE_FAILURE, DECODE_FAILURE_MESSAGE) from e
    if not isinstance(data, dict):
        raise FetchError(FetchFailure.DECODE_FAILURE, DECODE_FAILURE_MESSAGE)
    return data
