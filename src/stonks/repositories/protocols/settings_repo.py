"""Settings repository protocol."""

from typing import Protocol, Optional


class SettingsRepository(Protocol):
    """Interface for the key/value portfolio settings."""

    def get(self, key: str) -> Optional[str]:
        """Return the raw stored value for key, or None."""
        ...

    def set(self, key: str, value: str) -> None:
        """Insert or overwrite a setting."""
        ...

    def set_many(self, values: dict[str, str]) -> None:
        """Insert or overwrite several settings atomically."""
        ...
