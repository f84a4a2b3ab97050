"""
Hack Man Configuration

Loads runner defaults from environment variables with sensible defaults.
The engine never reads this module; values are passed in by the runner.
"""

import os

from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()


class Config:
    """Runner configuration loaded from environment variables."""

    # Field geometry used until the harness sends its own settings
    FIELD_WIDTH: int = int(os.getenv("HACKMAN_FIELD_WIDTH", "19"))
    FIELD_HEIGHT: int = int(os.getenv("HACKMAN_FIELD_HEIGHT", "15"))

    # Hostiles closer than this (Manhattan) block their neighbouring cells
    HAZARD_RADIUS: int = int(os.getenv("HACKMAN_HAZARD_RADIUS", "4"))

    # Character name answered to 'action character'
    CHARACTER: str = os.getenv("HACKMAN_CHARACTER", "bixie")

    # Diagnostics
    VERBOSE: bool = bool(os.getenv("HACKMAN_VERBOSE"))
    DEBUG_DISTANCES: bool = bool(os.getenv("HACKMAN_DEBUG_DISTANCES"))

    @classmethod
    def validate(cls) -> None:
        """Validate configuration and raise errors for unusable values."""
        if cls.FIELD_WIDTH <= 0 or cls.FIELD_HEIGHT <= 0:
            raise ValueError(
                f"Field dimensions must be positive, got {cls.FIELD_WIDTH}x{cls.FIELD_HEIGHT}. "
                "Check HACKMAN_FIELD_WIDTH / HACKMAN_FIELD_HEIGHT."
            )

        if cls.HAZARD_RADIUS < 0:
            raise ValueError(
                f"HACKMAN_HAZARD_RADIUS must be >= 0, got {cls.HAZARD_RADIUS}"
            )

    @classmethod
    def display(cls) -> str:
        """Return a formatted string showing current configuration."""
        lines = [
            "Hack Man Configuration:",
            f"  Field: {cls.FIELD_WIDTH}x{cls.FIELD_HEIGHT}",
            f"  Hazard radius: {cls.HAZARD_RADIUS}",
            f"  Character: {cls.CHARACTER}",
            f"  Verbose: {cls.VERBOSE}",
            f"  Debug distances: {cls.DEBUG_DISTANCES}",
        ]
        return "\n".join(lines)
