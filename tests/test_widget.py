# ABOUTME: Tests for the widget entry point that wires config, HTTP client, and controller.
# ABOUTME: Verifies the yielded controller and cleanup of the HTTP client on exit.

import pytest

from weather_widget.controller import WeatherController
from weather_widget.models import IdleState
from weather_widget.theme import THEME_STORAGE_KEY, InMemoryPreferenceStore
from weather_widget.widget import open_widget


class TestOpenWidget:
    @pytest.mark.asyncio
    async def test_yields_idle_controller_and_closes_client(self, config, view):
        """open_widget yields an idle controller and closes its HTTP client on exit.

        Implementation: Opens a widget with explicit config, then inspects the client after exit.
        Passing implies: Host pages do not leak connections when the widget is torn down.
        """
        store = InMemoryPreferenceStore({THEME_STORAGE_KEY: "night"})

        async with open_widget(view, store=store, config=config) as widget:
            assert isinstance(widget, WeatherController)
            assert isinstance(widget.state, IdleState)
            assert widget.theme == "night"
            client = widget._deps.http_client
            assert not client.is_closed

        assert client.is_closed
