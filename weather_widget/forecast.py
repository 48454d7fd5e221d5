# ABOUTME: Collapses the provider's 3-hourly forecast series into one sample per calendar day.
# ABOUTME: Keeps the first sample seen for each day, in order, capped at five days.

from collections.abc import Iterable
from datetime import date

from weather_widget.models import ForecastSample

MAX_FORECAST_DAYS = 5


def aggregate(samples: Iterable[ForecastSample], max_days: int = MAX_FORECAST_DAYS) -> list[ForecastSample]:
    """Return the earliest sample of each distinct day, in first-seen order.

    The input is assumed chronological, so the first sample per day_key is the
    earliest reading of that day. Fewer distinct days yield a shorter list.
    """
    first_per_day: dict[date, ForecastSample] = {}
    for sample in samples:
        if sample.day_key not in first_per_day:
            first_per_day[sample.day_key] = sample
    return list(first_per_day.values())[:max_days]
