# ABOUTME: Input validation for free-text city searches.
# ABOUTME: Rejects empty, too-short, or disallowed-character input before any network call.

import re

from weather_widget.errors import InvalidQueryError, InvalidQueryReason

MIN_CITY_LENGTH = 2

_ALLOWED_CITY = re.compile(r"[A-Za-z\s,-]*")

EMPTY_MESSAGE = "Please enter a city name."
TOO_SHORT_MESSAGE = "City name must be at least 2 characters."
INVALID_CHARACTERS_MESSAGE = "Invalid characters detected. Use letters, spaces, commas, or hyphens."


def validate_city(raw_input: str) -> str:
    """Return the trimmed city name, or raise InvalidQueryError.

    Rules are checked in order and the first failure wins: empty after trimming,
    shorter than two characters, then anything outside letters, whitespace,
    commas and hyphens.
    """
    city = raw_input.strip()
    if not city:
        raise InvalidQueryError(InvalidQueryReason.EMPTY, EMPTY_MESSAGE)
    if len(city) < MIN_CITY_LENGTH:
        raise InvalidQueryError(InvalidQueryReason.TOO_SHORT, TOO_SHORT_MESSAGE)
    if not _ALLOWED_CITY.fullmatch(city):
        raise InvalidQueryError(InvalidQueryReason.INVALID_CHARACTERS, INVALID_CHARACTERS_MESSAGE)
    return city
