# ABOUTME: Contract tests for city input validation.
# ABOUTME: Covers rule ordering, the character allow-list, and the user-facing messages.

import pytest

from weather_widget.errors import InvalidQueryError, InvalidQueryReason
from weather_widget.validation import validate_city


class TestValidateCity:
    def test_returns_trimmed_city(self):
        """validate_city strips surrounding whitespace from valid input.

        Implementation: Passes a padded city name.
        Passing implies: The value sent to the provider never carries stray whitespace.
        """
        assert validate_city("  Paris  ") == "Paris"

    @pytest.mark.parametrize("raw", ["New York", "Saint-Etienne", "Paris, FR", "Los\tAngeles"])
    def test_accepts_letters_spaces_commas_hyphens(self, raw):
        """validate_city accepts every allow-listed character class.

        Implementation: Validates names using spaces, hyphens, commas, and tabs.
        Passing implies: Legitimate multi-word and qualified city names are not rejected.
        """
        assert validate_city(raw) == raw.strip()

    @pytest.mark.parametrize("raw", ["", "   ", "\t\n"])
    def test_blank_input_is_empty(self, raw):
        """Whitespace-only input is rejected as empty.

        Implementation: Validates blank strings.
        Passing implies: Blank searches never reach the network.
        """
        with pytest.raises(InvalidQueryError) as exc_info:
            validate_city(raw)
        assert exc_info.value.reason == InvalidQueryReason.EMPTY
        assert exc_info.value.message == "Please enter a city name."

    @pytest.mark.parametrize("raw", ["a", " b ", "1", "!"])
    def test_single_character_is_too_short(self, raw):
        """Any one-character input is too short, even if the character is disallowed.

        Implementation: Validates single-character strings including a digit and a symbol.
        Passing implies: The length rule is checked before the character rule.
        """
        with pytest.raises(InvalidQueryError) as exc_info:
            validate_city(raw)
        assert exc_info.value.reason == InvalidQueryReason.TOO_SHORT
        assert exc_info.value.message == "City name must be at least 2 characters."

    @pytest.mark.parametrize("raw", ["NYC123", "Paris!", "São Paulo", "Köln", "Rome;", "L.A."])
    def test_disallowed_characters(self, raw):
        """Digits, punctuation other than comma and hyphen, and accented letters are rejected.

        Implementation: Validates names containing characters outside the allow-list.
        Passing implies: Only ASCII letters, whitespace, commas, and hyphens pass.
        """
        with pytest.raises(InvalidQueryError) as exc_info:
            validate_city(raw)
        assert exc_info.value.reason == InvalidQueryReason.INVALID_CHARACTERS
        assert "Invalid characters detected" in exc_info.value.message

    def test_error_is_a_value_error(self):
        """InvalidQueryError subclasses ValueError.

        Implementation: Catches the validation failure as ValueError.
        Passing implies: Pydantic field validators can reuse validate_city directly.
        """
        with pytest.raises(ValueError):
            validate_city("")
