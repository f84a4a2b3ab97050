"""Hostile-proximity hazards.

A hostile only becomes dangerous once it is within ``radius`` Manhattan steps
of the bot. When that happens its four orthogonal neighbours are excluded from
traversal for the rest of the tick. The excluded ring is always the hostile's
immediate neighbourhood, no matter how close the hostile actually is.
"""

from __future__ import annotations

from typing import Iterable, Optional, Set

from .grid import Collectible, Grid, Position, manhattan

DEFAULT_TRIGGER_RADIUS = 4


class HazardTracker:
    """Per-tick set of cells the bot should not step on."""

    def __init__(self, radius: int = DEFAULT_TRIGGER_RADIUS) -> None:
        self.radius = radius
        self.unsafe: Set[Position] = set()
        self.hostiles: Set[Position] = set()

    def recompute_unsafe(
        self,
        hostile_positions: Iterable[Position],
        self_position: Optional[Position],
        grid: Optional[Grid] = None,
    ) -> Set[Position]:
        """Rebuild the unsafe set for this tick.

        With a ``grid`` the ring follows its adjacency, so a hostile at either
        end of the wrap row also blocks the cell across the edge. Without one
        the four raw offsets are used.
        """
        self.unsafe = set()
        self.hostiles = set(hostile_positions)
        # Without our own position nothing can be gated.
        if self_position is None:
            return self.unsafe
        for hx, hy in self.hostiles:
            if manhattan((hx, hy), self_position) <= self.radius:
                if grid is not None:
                    self.unsafe.update(cell for _, cell in grid.neighbors((hx, hy)))
                else:
                    self.unsafe.update(((hx + 1, hy), (hx - 1, hy), (hx, hy + 1), (hx, hy - 1)))
        return self.unsafe

    def is_safe(self, position: Position, forbidden: Optional[Collectible] = None) -> bool:
        if position in self.hostiles:
            return False
        if forbidden is not None and position == forbidden.position:
            return False
        return position not in self.unsafe
