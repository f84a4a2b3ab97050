"""
Per-match decision engine.

Owns every piece of mutable match state (grid, hazards, last distance fields)
and turns one parsed snapshot into one move:

1. Parse the snapshot into the grid and recompute hostile hazards
2. Run BFS from our position and from the opponent's position
3. Let each side pick a target from its own distance field
4. If both want the same snippet and the opponent gets there first, forbid it
   and pick again from a fresh field that routes around it
5. Walk the chosen target back to a neighbouring cell and emit that move

No state outlives a tick except the previous hostile positions and the last
checkpoint move.
"""

import os
from typing import List, Optional

from pydantic import ValidationError

from .environment import (
    Collectible,
    ConfigurationError,
    DistanceField,
    Grid,
    GridState,
    HazardTracker,
    MalformedSnapshotError,
    MatchSettings,
    compute_distances,
    render_distance_field,
)
from .logging_utils import (
    LOG_TAG_DETERMINISTIC,
    LOG_TAG_SUCCESS,
    LOG_TAG_WARNING,
    log_deterministic,
    log_info,
    log_success,
    log_warning,
)
from .moves import Direction
from .routing import trace_route
from .targeting import select_target


class DecisionEngine:
    """Stateful Hack Man bot for a single match.

    Usage:
        engine = DecisionEngine()
        engine.configure(width=19, height=15, self_id=0, opponent_id=1)
        engine.ingest_snapshot(field_string)
        move = engine.decide_move()
    """

    def __init__(self, *, verbose: Optional[bool] = None, debug_distances: Optional[bool] = None) -> None:
        if verbose is None:
            verbose = bool(os.getenv("HACKMAN_VERBOSE"))
        if debug_distances is None:
            debug_distances = bool(os.getenv("HACKMAN_DEBUG_DISTANCES"))
        self.verbose = verbose
        self.debug_distances = debug_distances

        self.settings: Optional[MatchSettings] = None
        self.grid = Grid()
        self.hazards = HazardTracker()
        self.my_distances: Optional[DistanceField] = None
        self.opponent_distances: Optional[DistanceField] = None
        # Direction recorded at the distance-4 checkpoint of the last walk that passed one.
        self.checkpoint_move: Optional[Direction] = None
        # Our own score for the last chosen target.
        self.target_score: Optional[int] = None
        self._snapshot_ready = False

    # ------------------------------------------------------------------
    # Setup and input
    # ------------------------------------------------------------------

    def configure(self, width: int, height: int, self_id: int, opponent_id: int, **overrides) -> MatchSettings:
        """Fix the match geometry and player ids. Must precede the first snapshot.

        ``overrides`` may carry ``hazard_radius``, ``wrap_row`` and ``fallback``
        (see ``MatchSettings``).
        """
        try:
            settings = MatchSettings(
                width=width,
                height=height,
                self_id=self_id,
                opponent_id=opponent_id,
                **overrides,
            )
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid match settings: {exc}") from exc

        self.settings = settings
        self.grid = Grid(
            settings.width,
            settings.height,
            self_id=settings.self_id,
            opponent_id=settings.opponent_id,
            wrap_row=settings.wrap_row,
            fallback=settings.fallback,
        )
        self.grid.initialize()
        self.hazards = HazardTracker(radius=settings.hazard_radius)
        self.my_distances = None
        self.opponent_distances = None
        self._snapshot_ready = False

        if self.verbose:
            log_info(
                f"  [Setup] {settings.width}x{settings.height} field, wrap row {settings.wrap_row}, "
                f"self P{settings.self_id} vs P{settings.opponent_id}"
            )
        return settings

    def ingest_snapshot(self, serialized: str) -> None:
        """Parse one field update. A failure leaves the tick undecidable."""
        if self.settings is None:
            raise ConfigurationError("Snapshot received before the match was configured.")

        self._snapshot_ready = False
        self.grid.ingest_snapshot(serialized)
        self.hazards.recompute_unsafe(self.grid.hostiles, self.grid.self_position, self.grid)
        self._snapshot_ready = True

    # ------------------------------------------------------------------
    # Decision
    # ------------------------------------------------------------------

    def _require_origins(self) -> None:
        if self.settings is None:
            raise ConfigurationError("decide_move called before the match was configured.")
        if not self._snapshot_ready:
            raise MalformedSnapshotError("No successfully parsed snapshot for this tick")
        if self.grid.self_position is None:
            raise MalformedSnapshotError(f"Snapshot has no cell for self (P{self.settings.self_id})")
        if self.grid.opponent_position is None:
            raise MalformedSnapshotError(f"Snapshot has no cell for opponent (P{self.settings.opponent_id})")

    def choose_target(self) -> Collectible:
        """Resolve which collectible (or fallback cell) to head for this tick.

        Leaves ``my_distances`` holding the field that route reduction must walk.
        """
        self._require_origins()
        grid = self.grid
        collectibles = grid.collectibles

        self.my_distances = compute_distances(grid, self.hazards, grid.self_position)
        self.opponent_distances = compute_distances(grid, self.hazards, grid.opponent_position)

        my_chosen = select_target(grid, self.my_distances, collectibles)
        # Scores live on the shared collectibles; the opponent pass overwrites them.
        self.target_score = my_chosen.score
        opponent_chosen = select_target(grid, self.opponent_distances, collectibles)

        # Fallback cells are never contested.
        if my_chosen.fallback or my_chosen != opponent_chosen:
            return my_chosen

        x, y = my_chosen.position
        closer_to_me = self.my_distances[x][y] <= self.opponent_distances[x][y]
        if closer_to_me or len(collectibles) == 1:
            return my_chosen

        if self.verbose:
            log_warning(
                f"  {LOG_TAG_WARNING} [Target] Opponent reaches {my_chosen.position} first "
                f"({self.opponent_distances[x][y]} < {self.my_distances[x][y]}), retargeting"
            )
        # The forbidden cell is also impassable in the recomputed field.
        forbidden = my_chosen
        self.my_distances = compute_distances(grid, self.hazards, grid.self_position, forbidden)
        retarget = select_target(grid, self.my_distances, collectibles, forbidden)
        self.target_score = retarget.score
        return retarget

    def decide_move(self) -> Direction:
        target = self.choose_target()
        trace = trace_route(self.grid, self.my_distances, self.grid.self_position, target.position)
        if trace.checkpoint is not None:
            self.checkpoint_move = trace.checkpoint

        if self.debug_distances:
            log_deterministic(
                render_distance_field(self.my_distances, self.grid.self_position, self.grid.hostiles)
            )
        if self.verbose:
            kind = "fallback" if target.fallback else "snippet"
            log_deterministic(f"  {LOG_TAG_DETERMINISTIC} [Target] {kind} at {target.position} (score {self.target_score})")
            log_success(f"  {LOG_TAG_SUCCESS} [Move] {trace.move.value} via {trace.reached}")
        return trace.move

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def valid_moves(self) -> List[Direction]:
        """Directions that keep the bot on an enterable, safe cell."""
        self._require_origins()
        return [
            direction
            for direction, cell in self.grid.neighbors(self.grid.self_position)
            if self.grid.is_enterable(cell) and self.hazards.is_safe(cell)
        ]

    def state(self) -> GridState:
        if self.settings is None:
            raise ConfigurationError("No match configured.")
        return self.grid.to_state(unsafe=list(self.hazards.unsafe))
