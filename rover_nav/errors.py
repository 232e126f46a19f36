from __future__ import annotations


class RoverNavError(Exception):
    """Base class for all rover navigation errors."""


class InvalidGridSize(RoverNavError, ValueError):
    """Grid edge length is not a positive integer."""


class InvalidCommandError(RoverNavError, ValueError):
    """Command string contains a character outside L, R, M."""


class UnknownCommandError(RoverNavError, TypeError):
    """A value that is not a Command reached the navigator."""


class NavigationError(RoverNavError):
    """Setup or parsing failure wrapped by ``navigate_rover``."""


class ConfigError(RoverNavError, ValueError):
    """Malformed configuration or map file."""
