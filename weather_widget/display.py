# ABOUTME: Display formatting for current conditions and daily forecast cards.
# ABOUTME: Produces the strings the host page shows, and the forecast card markup via Jinja2.

import math
from collections.abc import Sequence
from datetime import timezone, tzinfo

from jinja2 import Environment
from pydantic import BaseModel

from weather_widget.models import CurrentConditions, ForecastSample

ICON_URL_TEMPLATE = "https://openweathermap.org/img/wn/{icon}@{size}.png"

# Day labels are always en-US, independent of the process locale.
MONTH_ABBREVIATIONS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

FORECAST_CARDS_TEMPLATE = """\
{% for card in cards %}
<div class="forecast-card">
  <div class="forecast-date">{{ card.date_label }}</div>
  <img src="{{ card.icon_url }}" alt="{{ card.description }}" class="forecast-icon">
  <div class="forecast-temp">
    <span class="forecast-high">{{ card.high }}</span>
    <span class="forecast-low">{{ card.low }}</span>
  </div>
  <div class="forecast-desc">{{ card.description }}</div>
</div>
{% endfor %}"""

_env = Environment(autoescape=True, trim_blocks=True)
_cards_template = _env.from_string(FORECAST_CARDS_TEMPLATE)


class CurrentConditionsDisplay(BaseModel):
    """Text for each field of the result panel."""

    location_label: str
    description: str
    temperature: str
    feels_like: str
    icon_url: str
    humidity: str
    wind_speed: str
    pressure: str
    visibility: str
    cloudiness: str


class ForecastCard(BaseModel):
    """Text for one card in the forecast panel."""

    date_label: str
    icon_url: str
    high: str
    low: str
    description: str


def round_half_up(value: float) -> int:
    """Round .5 towards positive infinity, the way browser Math.round does."""
    return math.floor(value + 0.5)


def icon_url(icon: str, size: str = "4x") -> str:
    return ICON_URL_TEMPLATE.format(icon=icon, size=size)


def location_label(conditions: CurrentConditions) -> str:
    if conditions.country:
        return f"{conditions.name}, {conditions.country}"
    return conditions.name


def format_current(conditions: CurrentConditions) -> CurrentConditionsDisplay:
    # Provider reports wind in m/s and visibility in metres.
    return CurrentConditionsDisplay(
        location_label=location_label(conditions),
        description=conditions.description,
        temperature=f"{round_half_up(conditions.temperature)}°C",
        feels_like=f"Feels like {round_half_up(conditions.feels_like)}°C",
        icon_url=icon_url(conditions.icon, "4x"),
        humidity=f"{conditions.humidity}%",
        wind_speed=f"{conditions.wind_speed * 3.6:.1f} km/h",
        pressure=f"{conditions.pressure} hPa",
        visibility=f"{conditions.visibility / 1000:.1f} km",
        cloudiness=f"{conditions.cloudiness}%",
    )


def format_forecast_card(sample: ForecastSample, tz: tzinfo = timezone.utc) -> ForecastCard:
    local = sample.timestamp.astimezone(tz)
    return ForecastCard(
        date_label=f"{MONTH_ABBREVIATIONS[local.month - 1]} {local.day}",
        icon_url=icon_url(sample.icon, "2x"),
        high=f"{round_half_up(sample.temp_max)}°",
        low=f"{round_half_up(sample.temp_min)}°",
        description=sample.description,
    )


def render_forecast_cards(daily: Sequence[ForecastSample], tz: tzinfo = timezone.utc) -> str:
    """Render the forecast panel's card markup, escaping provider-supplied text."""
    cards = [format_forecast_card(sample, tz) for sample in daily]
    return _cards_template.render(cards=cards)
