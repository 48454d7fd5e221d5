# ABOUTME: UI state controller driving the Idle -> Loading -> Success | Error request cycle.
# ABOUTME: Receives events from the host page, runs the fetch stages, and pushes Panels to the view.

import asyncio
import logging
from typing import Literal, Protocol

from pydantic import BaseModel, ConfigDict, field_validator

from weather_widget.deps import WeatherDeps
from weather_widget.display import (
    CurrentConditionsDisplay,
    ForecastCard,
    format_current,
    format_forecast_card,
    render_forecast_cards,
)
from weather_widget.errors import FetchError, InvalidQueryError
from weather_widget.location import Geolocator, resolve_default_location
from weather_widget.models import (
    CityQuery,
    CoordsQuery,
    CurrentConditions,
    ErrorState,
    ForecastSample,
    IdleState,
    LoadingState,
    RequestState,
    SuccessState,
)
from weather_widget.pipeline import fetch_current, load_daily_forecast
from weather_widget.theme import ThemePreferences
from weather_widget.validation import validate_city

logger = logging.getLogger(__name__)

UNEXPECTED_ERROR_MESSAGE = "Something went wrong. Please try again."


class SearchSubmitted(BaseModel):
    """The user asked for a city, by clicking search or pressing Enter."""

    model_config = ConfigDict(frozen=True)

    text: str
    source: Literal["click", "enter"] = "click"


class AppStarted(BaseModel):
    model_config = ConfigDict(frozen=True)


class ThemeSelected(BaseModel):
    model_config = ConfigDict(frozen=True)

    theme: str

    @field_validator("theme")
    @classmethod
    def validate_theme(cls, value: str) -> str:
        text = value.strip()
        if not text:
            raise ValueError("theme must not be empty")
        return text


WidgetEvent = SearchSubmitted | AppStarted | ThemeSelected


class Panels(BaseModel):
    """Everything the host page needs to draw the widget for the current state."""

    theme: str
    input_text: str = ""
    loading: bool = False
    submit_enabled: bool = True
    error_message: str | None = None
    result: CurrentConditionsDisplay | None = None
    forecast: list[ForecastCard] | None = None
    forecast_html: str | None = None


class WeatherView(Protocol):
    def render(self, panels: Panels) -> None: ...


class WeatherController:
    """Owns the RequestState and is the only thing that changes it.

    A search or startup event that arrives while a request is loading is ignored.
    The forecast for a successful lookup is fetched as a background task and does
    not hold up the transition to Success.
    """

    def __init__(
        self,
        deps: WeatherDeps,
        *,
        view: WeatherView | None = None,
        geolocator: Geolocator | None = None,
        themes: ThemePreferences | None = None,
    ):
        self._deps = deps
        self._view = view
        self._geolocator = geolocator
        self._themes = themes if themes is not None else ThemePreferences()
        self._theme = self._themes.load()
        self._state: RequestState = IdleState()
        self._forecast: list[ForecastSample] | None = None
        self._input_text = ""
        self._cycle = 0
        self._pending: set[asyncio.Task] = set()

    @property
    def state(self) -> RequestState:
        return self._state

    @property
    def forecast(self) -> list[ForecastSample] | None:
        return self._forecast

    @property
    def theme(self) -> str:
        return self._theme

    @property
    def panels(self) -> Panels:
        state = self._state
        panels = Panels(theme=self._theme, input_text=self._input_text)
        if isinstance(state, LoadingState):
            panels.loading = True
            panels.submit_enabled = False
        elif isinstance(state, ErrorState):
            panels.error_message = state.message
        elif isinstance(state, SuccessState):
            panels.result = format_current(state.conditions)
            if self._forecast is not None:
                tz = self._deps.config.zone
                panels.forecast = [format_forecast_card(sample, tz) for sample in self._forecast]
                panels.forecast_html = render_forecast_cards(self._forecast, tz)
        return panels

    async def dispatch(self, event: WidgetEvent) -> RequestState:
        """Apply one event and return the resulting state.

        Returns once current conditions have resolved; the forecast may still be in flight.
        """
        if isinstance(event, ThemeSelected):
            self._change_theme(event.theme)
            return self._state

        if isinstance(self._state, LoadingState):
            logger.debug("Ignoring %s while a request is in flight", type(event).__name__)
            return self._state

        if isinstance(event, AppStarted):
            await self._start()
        elif isinstance(event, SearchSubmitted):
            await self._search(event.text)
        else:
            raise TypeError(f"Unsupported event: {event!r}")
        return self._state

    async def wait_for_forecast(self) -> None:
        """Wait until every scheduled forecast follow-up has finished."""
        while self._pending:
            await asyncio.gather(*self._pending)

    async def aclose(self) -> None:
        for task in self._pending:
            task.cancel()
        await asyncio.gather(*self._pending, return_exceptions=True)
        self._pending.clear()

    async def _start(self) -> None:
        self._change_theme(self._theme)
        self._transition(LoadingState())
        query = await resolve_default_location(self._geolocator, self._deps.config.fallback_city)
        await self._fetch(query)

    async def _search(self, text: str) -> None:
        self._input_text = text
        try:
            city = validate_city(text)
        except InvalidQueryError as e:
            self._transition(ErrorState(message=e.message))
            return

        self._transition(LoadingState())
        await self._fetch(CityQuery(name=city))

    async def _fetch(self, query: CityQuery | CoordsQuery) -> None:
        try:
            conditions = await fetch_current(self._deps, query)
        except FetchError as e:
            logger.info("Current conditions fetch failed: %s (%s)", e.message, e.reason)
            self._transition(ErrorState(message=e.message))
            return
        except Exception:
            logger.exception("Current conditions fetch failed unexpectedly")
            self._transition(ErrorState(message=UNEXPECTED_ERROR_MESSAGE))
            return

        if isinstance(query, CoordsQuery):
            self._input_text = conditions.name
        self._transition(SuccessState(conditions=conditions))
        self._schedule_forecast(conditions)

    def _schedule_forecast(self, conditions: CurrentConditions) -> None:
        task = asyncio.create_task(self._load_forecast(conditions, self._cycle))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _load_forecast(self, conditions: CurrentConditions, cycle: int) -> None:
        try:
            daily = await load_daily_forecast(self._deps, conditions)
        except FetchError as e:
            logger.warning("Forecast error: %s (%s)", e.message, e.reason)
            return
        except Exception:
            logger.exception("Forecast fetch failed unexpectedly")
            return

        if cycle != self._cycle:
            logger.debug("Discarding forecast for %s, a newer request has taken over", conditions.name)
            return
        self._forecast = daily
        self._render()

    def _change_theme(self, theme: str) -> None:
        self._theme = self._themes.save(theme)
        self._render()

    def _transition(self, state: RequestState) -> None:
        logger.debug("Request state %s -> %s", self._state.status, state.status)
        self._state = state
        self._cycle += 1
        # Any transition starts a new cycle's display; the forecast belongs to the old one.
        self._forecast = None
        self._render()

    def _render(self) -> None:
        if self._view is None:
            return
        try:
            self._view.render(self.panels)
        except Exception:
            logger.exception("Weather view failed to render")
