"""The two workflows offered by the UI."""

from enum import Enum


class AppMode(str, Enum):
    GENERATOR = "GENERATOR"
    CHECKER = "CHECKER"


def parse_mode(value: str | None) -> AppMode:
    """Case-insensitive mode lookup; anything unrecognised opens the generator."""
    if not value:
        return AppMode.GENERATOR
    try:
        return AppMode(value.strip().upper())
    except ValueError:
        return AppMode.GENERATOR
