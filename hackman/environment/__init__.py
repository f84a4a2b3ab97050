"""Field model, hazards and shortest paths for Hack Man."""

from .grid import (
    BLOCKED_TOKEN,
    EMPTY_TOKEN,
    Collectible,
    ConfigurationError,
    Grid,
    MalformedSnapshotError,
    Position,
    manhattan,
)
from .hazards import DEFAULT_TRIGGER_RADIUS, HazardTracker
from .helpers import DistanceField, compute_distances, render_distance_field
from .schemas import GridState, MatchSettings

__all__ = [
    "BLOCKED_TOKEN",
    "EMPTY_TOKEN",
    "Collectible",
    "ConfigurationError",
    "Grid",
    "MalformedSnapshotError",
    "Position",
    "manhattan",
    "DEFAULT_TRIGGER_RADIUS",
    "HazardTracker",
    "DistanceField",
    "compute_distances",
    "render_distance_field",
    "GridState",
    "MatchSettings",
]
