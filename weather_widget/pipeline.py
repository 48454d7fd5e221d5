# ABOUTME: Named fetch stages the controller runs for each request cycle.
# ABOUTME: fetch_current dispatches on the query kind; load_daily_forecast fetches and aggregates.

from weather_widget.deps import WeatherDeps
from weather_widget.forecast import aggregate
from weather_widget.models import CityQuery, CoordsQuery, CurrentConditions, ForecastSample
from weather_widget.weather_service import get_current_by_city, get_current_by_coords, get_forecast


async def fetch_current(deps: WeatherDeps, query: CityQuery | CoordsQuery) -> CurrentConditions:
    config = deps.config
    if isinstance(query, CityQuery):
        return await get_current_by_city(
            deps.http_client, config.base_url, config.api_key, query.name, units=config.units
        )
    return await get_current_by_coords(
        deps.http_client, config.base_url, config.api_key, query.lat, query.lon, units=config.units
    )


async def load_daily_forecast(deps: WeatherDeps, conditions: CurrentConditions) -> list[ForecastSample]:
    """Fetch the forecast at the provider-resolved coordinates and reduce it to daily entries.

    The coordinates come from `conditions`, not the original query, since a city
    name may resolve somewhere other than what was typed.
    """
    config = deps.config
    samples = await get_forecast(
        deps.http_client,
        config.base_url,
        config.api_key,
        conditions.latitude,
        conditions.longitude,
        tz=config.zone,
        units=config.units,
    )
    return aggregate(samples, max_days=config.forecast_days)
