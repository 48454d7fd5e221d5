# ABOUTME: Entry point that wires configuration, the HTTP client, and the controller together.
# ABOUTME: Host pages open a widget, dispatch events into it, and close it when torn down.

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from weather_widget.config import WidgetConfig, load_config
from weather_widget.controller import WeatherController, WeatherView
from weather_widget.deps import WeatherDeps, create_http_client
from weather_widget.location import Geolocator
from weather_widget.theme import PreferenceStore, ThemePreferences


@asynccontextmanager
async def open_widget(
    view: WeatherView | None = None,
    *,
    geolocator: Geolocator | None = None,
    store: PreferenceStore | None = None,
    config: WidgetConfig | None = None,
) -> AsyncIterator[WeatherController]:
    """Yield a ready controller; pending forecasts and the HTTP client are closed on exit.

    Usage:
        async with open_widget(view, geolocator=geo, store=prefs) as widget:
            await widget.dispatch(AppStarted())
    """
    deps = WeatherDeps(http_client=create_http_client(), config=config or load_config())
    controller = WeatherController(deps, view=view, geolocator=geolocator, themes=ThemePreferences(store))
    try:
        yield controller
    finally:
        await controller.aclose()
        await deps.http_client.aclose()
