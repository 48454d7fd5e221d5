# ABOUTME: Theme preference persisted across sessions through a host-supplied key-value store.
# ABOUTME: Independent of request state; read once at startup and written on every change.

from typing import Protocol

THEME_STORAGE_KEY = "weatherTheme"
DEFAULT_THEME = "day"


class PreferenceStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class InMemoryPreferenceStore:
    """PreferenceStore kept in a dict, for tests and hosts without persistence."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value


class ThemePreferences:
    def __init__(self, store: PreferenceStore | None = None, default: str = DEFAULT_THEME):
        self._store = store if store is not None else InMemoryPreferenceStore()
        self._default = default

    def load(self) -> str:
        """Return the saved theme, or the default when nothing usable is stored."""
        saved = self._store.get(THEME_STORAGE_KEY)
        if saved and saved.strip():
            return saved.strip()
        return self._default

    def save(self, theme: str) -> str:
        tag = theme.strip()
        if not tag:
            raise ValueError("theme must not be empty")
        self._store.set(THEME_STORAGE_KEY, tag)
        return tag
