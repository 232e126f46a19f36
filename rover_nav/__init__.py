"""
Grid rover navigation engine.

Components:
- types: headings, commands, statuses and the navigation outcome
- grid: bounds and obstacle lookups, map loading
- rover: pose state and single-step motion
- navigator: command loop with early termination
- parser: command-string parsing
- config: YAML configuration
- telemetry: JSONL run logging
- metrics: scenario batches and summaries
- ascii_map / render: text and pygame visualization
"""

from .errors import (
    ConfigError,
    InvalidCommandError,
    InvalidGridSize,
    NavigationError,
    RoverNavError,
    UnknownCommandError,
)
from .grid import Grid
from .navigator import Navigator, navigate_rover
from .parser import is_valid_commands, parse_commands
from .rover import Rover, RoverState
from .types import Command, Coordinate, Heading, NavigationOutcome, Status

__all__ = [
    "Command",
    "ConfigError",
    "Coordinate",
    "Grid",
    "Heading",
    "InvalidCommandError",
    "InvalidGridSize",
    "NavigationError",
    "NavigationOutcome",
    "Navigator",
    "Rover",
    "RoverNavError",
    "RoverState",
    "Status",
    "UnknownCommandError",
    "is_valid_commands",
    "navigate_rover",
    "parse_commands",
]
