"""Central exception hierarchy for the Stakenet node configuration."""
from __future__ import annotations

from typing import Any


class StakenetError(Exception):
    """Base exception for all custom errors raised by the Stakenet node."""


class ConfigurationError(StakenetError):
    """Raised when configuration loading or validation fails."""


class InvalidListenHostError(ConfigurationError):
    """Raised when the listen host is neither the wildcard nor an IP literal."""

    def __init__(self, value: Any) -> None:
        super().__init__(f"invalid listen host: {value}")
        self.value = value


class InvalidPortError(ConfigurationError):
    """Raised when a port is out of range or inside the reserved band."""

    def __init__(self, value: Any) -> None:
        super().__init__(f"invalid port number: {value}")
        self.value = value


class DependencyError(StakenetError):
    """Raised when dependency wiring or injection fails."""
