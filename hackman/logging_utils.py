"""Logging utilities for the Hack Man bot.

Everything goes to stderr: stdout is the channel the match harness reads
moves from. Colors distinguish routine decisions from problems.
"""

import os
import sys
from enum import Enum


class Color(Enum):
    """Terminal colors keyed to what the bot is reporting."""

    BLUE = "\033[94m"      # Distance fields and chosen targets
    RED = "\033[91m"       # Dropped fields, configuration failures
    GREEN = "\033[92m"     # The move sent to the harness
    CYAN = "\033[96m"      # Match setup, ignored commands
    YELLOW = "\033[93m"    # Lost races and retargeting

    BOLD = "\033[1m"
    RESET = "\033[0m"


def _colors_enabled() -> bool:
    return not os.getenv("HACKMAN_NO_COLOR")


def colored(text: str, color: Color, bold: bool = False) -> str:
    """Return ``text`` wrapped in ``color`` (and bold), or unchanged when colors are off."""
    if not _colors_enabled():
        return text
    codes = (Color.BOLD.value if bold else "") + color.value
    return f"{codes}{text}{Color.RESET.value}"


def _emit(message: str, color: Color) -> None:
    print(colored(message, color), file=sys.stderr)


def log_deterministic(message: str) -> None:
    """Log a deterministic computation (blue)."""
    _emit(message, Color.BLUE)


def log_warning(message: str) -> None:
    """Log a contested or degraded decision (yellow)."""
    _emit(message, Color.YELLOW)


def log_error(message: str) -> None:
    """Log an error (red)."""
    _emit(message, Color.RED)


def log_success(message: str) -> None:
    """Log an emitted action (green)."""
    _emit(message, Color.GREEN)


def log_info(message: str) -> None:
    """Log metadata/info (cyan)."""
    _emit(message, Color.CYAN)


# Markers for operation types (color-blind accessible)
LOG_TAG_DETERMINISTIC = "[•]"
LOG_TAG_WARNING = "[~]"
LOG_TAG_ERROR = "[!]"
LOG_TAG_SUCCESS = "[✓]"
LOG_TAG_INFO = "[i]"
