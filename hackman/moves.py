"""Move vocabulary shared by the engine, the route reducer and the runner."""

from __future__ import annotations

from enum import Enum
from typing import Dict, Tuple


class Direction(Enum):
    """Actions the bot can emit for a single tick."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    PASS = "pass"


# Screen coordinates: y grows downward, so UP decrements the row.
_DELTAS: Dict[Direction, Tuple[int, int]] = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
    Direction.PASS: (0, 0),
}


def delta(direction: Direction) -> Tuple[int, int]:
    """Return the (dx, dy) offset for ``direction``.

    Wrap transitions are not encoded here; the grid's adjacency decides where a
    LEFT/RIGHT step lands on the wrap row.
    """
    return _DELTAS[direction]
