"""Target selection over a distance field.

Each collectible is scored by its distance from the BFS origin, minus a small
bonus for every other collectible lying close to it. "Close" is measured three
ways and the smallest wins: straight Manhattan distance, or the Manhattan
length of going out through one end of the wrap row and coming back in
through the other. The bonus is ``2 // closeness``, so only neighbours one or
two steps away matter.

The lowest score among reachable, non-forbidden collectibles is the target.
When nothing qualifies the grid's fallback cell is returned instead.
"""

from __future__ import annotations

from typing import List, Optional

from hackman.environment import Collectible, DistanceField, Grid, Position, manhattan


def wrap_closeness(grid: Grid, s: Position, ns: Position) -> int:
    """Smallest of the direct and the two through-the-wrap Manhattan lengths."""
    row = grid.wrap_row
    direct = manhattan(s, ns)
    # Leaving through the left edge lands on the rightmost cell, and vice versa.
    via_left = manhattan(s, (-1, row)) + manhattan(ns, (grid.width - 1, row))
    via_right = manhattan(s, (grid.width, row)) + manhattan(ns, (0, row))
    return min(direct, via_left, via_right)


def score_collectibles(grid: Grid, distances: DistanceField, collectibles: List[Collectible]) -> None:
    """Rewrite ``score`` on every collectible in place."""
    for s in collectibles:
        x, y = s.position
        s.score = distances[x][y]
        # Includes s itself; that pairing has closeness 0 and adds nothing.
        for ns in collectibles:
            closeness = wrap_closeness(grid, s.position, ns.position)
            if closeness != 0:
                s.score -= 2 // closeness


def select_target(
    grid: Grid,
    distances: DistanceField,
    collectibles: List[Collectible],
    forbidden: Optional[Collectible] = None,
) -> Collectible:
    """Pick the collectible to chase, or the fallback cell if none qualifies.

    Unreached collectibles (distance 0) and ``forbidden`` are skipped. Ties go
    to whichever candidate comes first in ``collectibles``.
    """

    if not collectibles:
        return Collectible(position=grid.fallback_position, fallback=True)

    score_collectibles(grid, distances, collectibles)

    best: Optional[Collectible] = None
    for candidate in collectibles:
        x, y = candidate.position
        if distances[x][y] == 0:
            continue
        if forbidden is not None and candidate == forbidden:
            continue
        if best is None or candidate.score < best.score:
            best = candidate

    if best is None:
        return Collectible(position=grid.fallback_position, fallback=True)
    return best
