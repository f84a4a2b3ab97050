"""Pydantic schemas for match settings and per-tick grid snapshots.

The grid itself keeps plain tuples and lists so the shortest-path loop stays
cheap; these models are the validated edges around it. ``MatchSettings`` is
what ``DecisionEngine.configure`` accepts, ``GridState`` is what the engine
hands back when a caller wants a serializable view of the current tick.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from pydantic import BaseModel, Field, model_validator


class MatchSettings(BaseModel):
    """Per-match constants fixed before the first snapshot is parsed."""

    width: int = Field(..., gt=0, description="Number of columns (x axis)")
    height: int = Field(..., gt=0, description="Number of rows (y axis)")
    self_id: int = Field(..., ge=0, description="Player id of this bot")
    opponent_id: int = Field(..., ge=0, description="Player id of the opponent")
    hazard_radius: int = Field(
        4,
        ge=0,
        description="Manhattan distance at which a hostile starts blocking its neighbours",
    )
    wrap_row: Optional[int] = Field(
        None,
        description="Row whose two ends are adjacent; None means height // 2",
    )
    fallback: Optional[Tuple[int, int]] = Field(
        None,
        description="Target used when no collectible qualifies; None means (0, wrap_row)",
    )

    @model_validator(mode="after")
    def _fill_topology_defaults(self) -> "MatchSettings":
        if self.self_id == self.opponent_id:
            raise ValueError("self_id and opponent_id must differ")
        if self.wrap_row is None:
            self.wrap_row = self.height // 2
        if not 0 <= self.wrap_row < self.height:
            raise ValueError(f"wrap_row {self.wrap_row} outside 0..{self.height - 1}")
        if self.fallback is None:
            self.fallback = (0, self.wrap_row)
        fx, fy = self.fallback
        if not (0 <= fx < self.width and 0 <= fy < self.height):
            raise ValueError(f"fallback {self.fallback} outside the {self.width}x{self.height} grid")
        return self


class GridState(BaseModel):
    """Positional state reconstructed from one snapshot."""

    width: int
    height: int
    wrap_row: int
    self_position: Optional[Tuple[int, int]] = None
    opponent_position: Optional[Tuple[int, int]] = None
    hostiles: List[Tuple[int, int]] = Field(default_factory=list)
    previous_hostiles: List[Tuple[int, int]] = Field(
        default_factory=list,
        description="Hostile positions from the previous tick (kept for diffing only)",
    )
    collectibles: List[Tuple[int, int]] = Field(default_factory=list)
    pickups: List[Tuple[int, int]] = Field(
        default_factory=list,
        description="Bombs lying on the field that can be picked up",
    )
    ticking_hazards: List[Tuple[int, int]] = Field(default_factory=list)
    unsafe: List[Tuple[int, int]] = Field(default_factory=list)
