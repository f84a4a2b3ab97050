"""
Hack Man - snippet-chasing bot for a wrapping grid arena.

The engine is synchronous and owns all match state. Snapshot transport is
left to the caller; ``hackman.runner`` provides a stdin/stdout adapter.
"""

__version__ = "0.1.0"

from .engine import DecisionEngine
from .moves import Direction, delta
from .environment import (
    Collectible,
    ConfigurationError,
    Grid,
    GridState,
    HazardTracker,
    MalformedSnapshotError,
    MatchSettings,
    compute_distances,
    render_distance_field,
)
from .targeting import select_target, score_collectibles, wrap_closeness
from .routing import RouteTrace, next_move_toward, trace_route

__all__ = [
    "DecisionEngine",
    "Direction",
    "delta",
    "Collectible",
    "ConfigurationError",
    "Grid",
    "GridState",
    "HazardTracker",
    "MalformedSnapshotError",
    "MatchSettings",
    "compute_distances",
    "render_distance_field",
    "select_target",
    "score_collectibles",
    "wrap_closeness",
    "RouteTrace",
    "next_move_toward",
    "trace_route",
]
