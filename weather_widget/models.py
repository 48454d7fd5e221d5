# ABOUTME: Pydantic BaseModels for location queries, weather snapshots, and request state.
# ABOUTME: Defines the immutable records passed between resolver, client, aggregator, and controller.

from datetime import date, datetime
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from weather_widget.validation import validate_city


class CityQuery(BaseModel):
    """A free-text city search that has passed input validation."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["city"] = "city"
    name: str

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        return validate_city(value)


class CoordsQuery(BaseModel):
    """A geographic position to look weather up by."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["coords"] = "coords"
    lat: float = Field(ge=-90, le=90)
    lon: float = Field(ge=-180, le=180)


LocationQuery = Annotated[CityQuery | CoordsQuery, Field(discriminator="kind")]


class Position(BaseModel):
    """One-shot reading from a geolocation capability."""

    model_config = ConfigDict(frozen=True)

    latitude: float
    longitude: float


class CurrentConditions(BaseModel):
    """Current weather snapshot for the location the provider resolved."""

    model_config = ConfigDict(frozen=True)

    name: str
    country: str | None = None
    latitude: float
    longitude: float
    temperature: float
    feels_like: float
    humidity: int
    wind_speed: float
    pressure: int
    visibility: int
    cloudiness: int
    description: str
    icon: str


class ForecastSample(BaseModel):
    """One 3-hour slot of the provider's forecast series."""

    model_config = ConfigDict(frozen=True)

    timestamp: datetime
    day_key: date
    temp_min: float
    temp_max: float
    description: str
    icon: str


class IdleState(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["idle"] = "idle"


class LoadingState(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["loading"] = "loading"


class SuccessState(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["success"] = "success"
    conditions: CurrentConditions


class ErrorState(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["error"] = "error"
    message: str


RequestState = Annotated[
    IdleState | LoadingState | SuccessState | ErrorState,
    Field(discriminator="status"),
]
