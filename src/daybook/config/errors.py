"""Errors raised while loading settings from the environment."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable


class ConfigurationError(RuntimeError):
    """A setting is present but cannot be used (e.g. a malformed boolean)."""


class MissingConfigurationError(ConfigurationError):
    """Required settings are unset or blank; ``names`` lists them alphabetically."""

    def __init__(self, names: Iterable[str]) -> None:
        self.names = tuple(sorted(names))
        super().__init__(f"Missing configuration for: {', '.join(self.names)}")
