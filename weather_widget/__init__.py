# ABOUTME: Weather lookup widget core: validation, location resolution, provider client, and UI state.
# ABOUTME: Host pages typically start from weather_widget.widget.open_widget.
