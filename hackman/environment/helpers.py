"""Shortest-path and debugging utilities for the Hack Man field."""

from __future__ import annotations

from collections import deque
from typing import Iterable, List, Optional, Tuple

from .grid import Collectible, Grid, Position
from .hazards import HazardTracker

# distances[x][y]: 0 = unreached, otherwise 1 + hop count (origin is 1).
DistanceField = List[List[int]]


def compute_distances(
    grid: Grid,
    hazards: HazardTracker,
    origin: Position,
    forbidden: Optional[Collectible] = None,
) -> DistanceField:
    """Breadth-first hop counts from ``origin`` to every reachable cell.

    Cells are written when dequeued, so the first (shortest) arrival wins and
    later duplicates in the queue are dropped. A neighbour is only enqueued if
    the grid says it is enterable and the hazard tracker says it is safe; the
    wrap row's ends count as neighbours of each other. The origin itself is
    always recorded, even if it sits on an unsafe cell.
    """

    distances: DistanceField = [[0] * grid.height for _ in range(grid.width)]
    # Queue holds (distance, x, y). FIFO order keeps the hop counts minimal.
    queue: deque[Tuple[int, int, int]] = deque([(1, origin[0], origin[1])])

    while queue:
        value, x, y = queue.popleft()
        if distances[x][y] != 0:
            continue
        distances[x][y] = value
        for _, neighbor in grid.neighbors((x, y)):
            if grid.is_enterable(neighbor) and hazards.is_safe(neighbor, forbidden):
                queue.append((value + 1, neighbor[0], neighbor[1]))

    return distances


def render_distance_field(
    distances: DistanceField,
    self_position: Optional[Position] = None,
    hostiles: Iterable[Position] = (),
) -> str:
    """Tab-separated dump of ``distances`` for stderr debugging.

    Unreached cells render as empty columns. The bot's own position and the
    hostile list are appended on a final line.
    """

    width = len(distances)
    height = len(distances[0]) if width else 0
    lines: List[str] = []
    for y in range(height):
        row = [str(distances[x][y]) if distances[x][y] else "" for x in range(width)]
        lines.append("\t".join(row))
    hostile_text = "".join(f"({hx},{hy})" for hx, hy in hostiles)
    if self_position is not None:
        lines.append(f"({self_position[0]}, {self_position[1]}); [{hostile_text}]")
    else:
        lines.append(f"(?); [{hostile_text}]")
    return "\n".join(lines)
