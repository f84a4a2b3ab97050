"""Grid model for the Hack Man field.

The field is a ``width`` x ``height`` rectangle addressed as ``cells[x][y]``
with ``y`` growing downward. It is bounded everywhere except on the wrap row,
whose leftmost and rightmost cells are adjacent. Each cell keeps the raw
descriptor it arrived with (``"x"`` for walls, ``"."`` for empty floor, or a
``;``-separated list of typed tokens); positional collections are rebuilt from
those tokens on every snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

from hackman.moves import Direction, delta

from .schemas import GridState

Position = Tuple[int, int]

BLOCKED_TOKEN = "x"
EMPTY_TOKEN = "."


class ConfigurationError(Exception):
    """Raised when the grid is used before its dimensions or ids are known."""

    def __init__(self, message: str) -> None:
        super().__init__(
            f"{message}\n\n"
            "Remediation tips:\n"
            "  - Call DecisionEngine.configure(width, height, self_id, opponent_id) first\n"
            "  - With the stdin runner, make sure 'settings field_width/field_height' arrive before the field"
        )


class MalformedSnapshotError(ValueError):
    """Raised when a serialized field cannot be mapped onto the configured grid."""

    def __init__(self, message: str, *, cell: Optional[Position] = None, token: Optional[str] = None) -> None:
        self.cell = cell
        self.token = token
        details = []
        if cell is not None:
            details.append(f"cell={cell}")
        if token is not None:
            details.append(f"token={token!r}")
        suffix = f" ({', '.join(details)})" if details else ""
        super().__init__(f"{message}{suffix}")


def manhattan(a: Position, b: Position) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


@dataclass(unsafe_hash=True)
class Collectible:
    """A code snippet on the field.

    Identity is the position only: two collectibles at the same cell compare
    equal whatever their current score. ``score`` is rewritten by the target
    selector on every scoring pass.
    """

    position: Position
    score: int = field(default=0, compare=False)
    fallback: bool = field(default=False, compare=False)


class Grid:
    """Cell storage, token classification and wrap-aware adjacency."""

    def __init__(
        self,
        width: Optional[int] = None,
        height: Optional[int] = None,
        *,
        self_id: Optional[int] = None,
        opponent_id: Optional[int] = None,
        wrap_row: Optional[int] = None,
        fallback: Optional[Position] = None,
    ) -> None:
        self.width = width
        self.height = height
        self.self_id = self_id
        self.opponent_id = opponent_id
        self._wrap_row = wrap_row
        self._fallback = fallback

        self.cells: Optional[List[List[str]]] = None
        self.self_position: Optional[Position] = None
        self.opponent_position: Optional[Position] = None
        self.hostiles: List[Position] = []
        self.previous_hostiles: List[Position] = []
        self.collectibles: List[Collectible] = []
        self.pickups: List[Position] = []
        self.ticking_hazards: List[Position] = []

    # ------------------------------------------------------------------
    # Topology
    # ------------------------------------------------------------------

    @property
    def wrap_row(self) -> int:
        if self._wrap_row is not None:
            return self._wrap_row
        if self.height is None:
            raise ConfigurationError("Grid height is not set, wrap row is undefined.")
        return self.height // 2

    @property
    def fallback_position(self) -> Position:
        """Cell targeted when no collectible qualifies."""
        if self._fallback is not None:
            return self._fallback
        return (0, self.wrap_row)

    def in_bounds(self, position: Position) -> bool:
        x, y = position
        return 0 <= x < self.width and 0 <= y < self.height

    def offset(self, position: Position, direction: Direction) -> Optional[Position]:
        """Plain orthogonal neighbour, or None when it falls off the field."""
        dx, dy = delta(direction)
        candidate = (position[0] + dx, position[1] + dy)
        if direction is Direction.PASS or not self.in_bounds(candidate):
            return None
        return candidate

    def wrap_partner(self, position: Position, direction: Direction) -> Optional[Position]:
        """Cell reached by stepping off the wrap row's edge, if ``position`` is on one."""
        x, y = position
        if y != self.wrap_row:
            return None
        if direction is Direction.LEFT and x == 0:
            return (self.width - 1, y)
        if direction is Direction.RIGHT and x == self.width - 1:
            return (0, y)
        return None

    def neighbors(self, position: Position) -> Iterator[Tuple[Direction, Position]]:
        """Yield (direction, cell) for every adjacent cell, UP/DOWN/LEFT/RIGHT order.

        Enterability and safety are not checked here.
        """
        for direction in (Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT):
            candidate = self.offset(position, direction)
            if candidate is None:
                candidate = self.wrap_partner(position, direction)
            if candidate is not None:
                yield direction, candidate

    def is_enterable(self, position: Position) -> bool:
        """False off the field or on a wall; hazards are HazardTracker's concern."""
        if self.cells is None or not self.in_bounds(position):
            return False
        x, y = position
        return BLOCKED_TOKEN not in self.cells[x][y].split(";")

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def initialize(self) -> None:
        if self.width is None or self.height is None:
            raise ConfigurationError(
                "Trying to initialize the field while the field settings have not been parsed yet."
            )
        self.cells = [["" for _ in range(self.height)] for _ in range(self.width)]
        self.clear()

    def clear(self) -> None:
        if self.cells is None:
            raise ConfigurationError("Field has not been initialized.")
        for column in self.cells:
            for y in range(self.height):
                column[y] = ""
        self.previous_hostiles = list(self.hostiles)
        self.self_position = None
        self.opponent_position = None
        self.hostiles.clear()
        self.collectibles.clear()
        self.pickups.clear()
        self.ticking_hazards.clear()

    # ------------------------------------------------------------------
    # Parsing
    # ------------------------------------------------------------------

    def ingest_snapshot(self, serialized: str) -> None:
        """Replace the grid contents with a comma-separated, row-major field."""
        if self.cells is None:
            raise ConfigurationError("Field has not been initialized.")
        descriptors = serialized.strip().split(",")
        expected = self.width * self.height
        if len(descriptors) != expected:
            raise MalformedSnapshotError(
                f"Expected {expected} cells for a {self.width}x{self.height} field, got {len(descriptors)}"
            )

        self.clear()
        for index, descriptor in enumerate(descriptors):
            x, y = index % self.width, index // self.width
            self.cells[x][y] = descriptor
            for token in descriptor.split(";"):
                self.ingest_cell_token(token, x, y)

    def ingest_cell_token(self, token: str, x: int, y: int) -> None:
        if not token:
            raise MalformedSnapshotError("Empty cell token", cell=(x, y), token=token)

        kind = token[0]
        if kind == "P":
            self._ingest_player(token, x, y)
        elif kind == "e":
            pass  # spawn marker, nothing to track
        elif kind == "E":
            if len(token) < 2:
                raise MalformedSnapshotError("Hostile token without a type", cell=(x, y), token=token)
            self.hostiles.append((x, y))
        elif kind == "B":
            # A bare "B" lies on the floor; "B<n>" explodes in n rounds.
            if len(token) == 1:
                self.pickups.append((x, y))
            else:
                self.ticking_hazards.append((x, y))
        elif kind == "C":
            self.collectibles.append(Collectible(position=(x, y)))

    def _ingest_player(self, token: str, x: int, y: int) -> None:
        try:
            player_id = int(token[1:])
        except ValueError:
            raise MalformedSnapshotError("Player token without a numeric id", cell=(x, y), token=token) from None

        if player_id == self.self_id:
            if self.self_position is not None:
                raise MalformedSnapshotError(
                    f"Self (P{player_id}) already placed at {self.self_position}", cell=(x, y), token=token
                )
            self.self_position = (x, y)
        elif player_id == self.opponent_id:
            if self.opponent_position is not None:
                raise MalformedSnapshotError(
                    f"Opponent (P{player_id}) already placed at {self.opponent_position}", cell=(x, y), token=token
                )
            self.opponent_position = (x, y)
        else:
            raise MalformedSnapshotError(
                f"Player id {player_id} matches neither self ({self.self_id}) nor opponent ({self.opponent_id})",
                cell=(x, y),
                token=token,
            )

    def to_state(self, unsafe: Optional[List[Position]] = None) -> GridState:
        return GridState(
            width=self.width,
            height=self.height,
            wrap_row=self.wrap_row,
            self_position=self.self_position,
            opponent_position=self.opponent_position,
            hostiles=list(self.hostiles),
            previous_hostiles=list(self.previous_hostiles),
            collectibles=[c.position for c in self.collectibles],
            pickups=list(self.pickups),
            ticking_hazards=list(self.ticking_hazards),
            unsafe=sorted(unsafe or []),
        )
