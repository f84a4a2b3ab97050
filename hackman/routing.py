"""Reduce a distance field and a target to the move for this tick.

The walk starts at the target and repeatedly steps to a neighbour with a
strictly smaller distance until it reaches a cell at distance 2 or less, i.e.
a cell next to the bot. The move is then read off the offset between that cell
and the bot.

While walking, the cell at distance 4 records a "checkpoint" direction: the
reverse of the backward step taken from it. It is reported alongside the move
but never decides it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from hackman.environment import DistanceField, Grid, Position
from hackman.moves import Direction

CHECKPOINT_DISTANCE = 4

_OPPOSITE = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}

# Order in which predecessors are tried on the way back.
_WALK_ORDER = (Direction.UP, Direction.RIGHT, Direction.DOWN, Direction.LEFT)
_WRAP_ORDER = (Direction.RIGHT, Direction.LEFT)


@dataclass
class RouteTrace:
    """Outcome of one backward walk."""

    move: Direction
    reached: Position
    checkpoint: Optional[Direction] = None
    steps: int = 0


def _downhill_step(grid: Grid, distances: DistanceField, cell: Position) -> Optional[Tuple[Direction, Position]]:
    current = distances[cell[0]][cell[1]]

    def closer(candidate: Optional[Position]) -> bool:
        if candidate is None:
            return False
        value = distances[candidate[0]][candidate[1]]
        return value != 0 and value < current

    for direction in _WALK_ORDER:
        candidate = grid.offset(cell, direction)
        if closer(candidate):
            return direction, candidate
    for direction in _WRAP_ORDER:
        candidate = grid.wrap_partner(cell, direction)
        if closer(candidate):
            return direction, candidate
    return None


def _first_move(grid: Grid, reached: Position, self_position: Position) -> Direction:
    dx = reached[0] - self_position[0]
    dy = reached[1] - self_position[1]

    if dx == 0:
        if dy > 0:
            return Direction.DOWN
        if dy < 0:
            return Direction.UP

    span = grid.width - 1
    if span > 0 and reached[1] == self_position[1] == grid.wrap_row:
        if dx == -span:
            return Direction.RIGHT
        if dx == span:
            return Direction.LEFT

    if dx > 0:
        return Direction.RIGHT
    if dx < 0:
        return Direction.LEFT
    return Direction.PASS


def trace_route(grid: Grid, distances: DistanceField, self_position: Position, target: Position) -> RouteTrace:
    cell = target
    checkpoint: Optional[Direction] = None
    steps = 0

    while distances[cell[0]][cell[1]] > 2:
        step = _downhill_step(grid, distances, cell)
        if step is None:
            break
        direction, previous = step
        if distances[cell[0]][cell[1]] == CHECKPOINT_DISTANCE:
            checkpoint = _OPPOSITE[direction]
        cell = previous
        steps += 1

    return RouteTrace(
        move=_first_move(grid, cell, self_position),
        reached=cell,
        checkpoint=checkpoint,
        steps=steps,
    )


def next_move_toward(grid: Grid, distances: DistanceField, self_position: Position, target: Position) -> Direction:
    """Direction the bot should take this tick to head for ``target``."""
    return trace_route(grid, distances, self_position, target).move
