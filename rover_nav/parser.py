from __future__ import annotations

from typing import List

from .errors import InvalidCommandError
from .types import Command


_VALID_SYMBOLS = frozenset(c.value for c in Command)


def parse_commands(text: str) -> List[Command]:
    """Parse a command string such as ``"MMRmL"`` into Commands.

    Case is ignored. The first character outside L, R, M raises
    InvalidCommandError; whitespace is not skipped.
    """
    commands: List[Command] = []
    for char in text.upper():
        if char not in _VALID_SYMBOLS:
            raise InvalidCommandError(f"Invalid command character: {char}")
        commands.append(Command(char))
    return commands


def is_valid_commands(text: str) -> bool:
    """Return True if ``text`` parses without error."""
    try:
        parse_commands(text)
    except InvalidCommandError:
        return False
    return True
