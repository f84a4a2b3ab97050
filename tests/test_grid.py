"""Tests for the grid model: parsing, lifecycle and adjacency."""

import pytest

from hackman.environment import (
    Collectible,
    ConfigurationError,
    Grid,
    GridState,
    MalformedSnapshotError,
)
from hackman.moves import Direction, delta


def make_grid(width=5, height=3, self_id=0, opponent_id=1) -> Grid:
    grid = Grid(width, height, self_id=self_id, opponent_id=opponent_id)
    grid.initialize()
    return grid


def test_initialize_requires_dimensions():
    with pytest.raises(ConfigurationError):
        Grid().initialize()


def test_snapshot_before_initialize_fails():
    grid = Grid(5, 3, self_id=0, opponent_id=1)
    with pytest.raises(ConfigurationError):
        grid.ingest_snapshot(",".join(["."] * 15))


def test_ingest_snapshot_classifies_tokens(make_field):
    grid = make_grid()
    grid.ingest_snapshot(
        make_field(
            5,
            3,
            {
                (0, 0): "x",
                (0, 1): "P0",
                (4, 1): "P1",
                (2, 0): "C",
                (3, 2): "E1",
                (1, 2): "B",
                (2, 2): "B3",
                (4, 0): "e;C",
            },
        )
    )

    assert grid.self_position == (0, 1)
    assert grid.opponent_position == (4, 1)
    assert grid.hostiles == [(3, 2)]
    assert grid.pickups == [(1, 2)]
    assert grid.ticking_hazards == [(2, 2)]
    assert [c.position for c in grid.collectibles] == [(2, 0), (4, 0)]
    assert grid.cells[4][0] == "e;C"


def test_multiple_tokens_in_one_cell_are_each_dispatched(make_field):
    grid = make_grid()
    grid.ingest_snapshot(make_field(5, 3, {(0, 1): "P0", (4, 1): "P1", (2, 1): "C;E0;B"}))

    assert grid.collectibles == [Collectible(position=(2, 1))]
    assert grid.hostiles == [(2, 1)]
    assert grid.pickups == [(2, 1)]


def test_wrong_cell_count_is_rejected():
    grid = make_grid()
    with pytest.raises(MalformedSnapshotError):
        grid.ingest_snapshot(",".join(["."] * 14))


def test_unknown_player_id_is_rejected(make_field):
    grid = make_grid()
    with pytest.raises(MalformedSnapshotError) as excinfo:
        grid.ingest_snapshot(make_field(5, 3, {(1, 1): "P7"}))
    assert excinfo.value.cell == (1, 1)
    assert excinfo.value.token == "P7"


def test_empty_token_is_rejected(make_field):
    grid = make_grid()
    with pytest.raises(MalformedSnapshotError):
        grid.ingest_snapshot(make_field(5, 3, {(1, 1): "P0;"}))


def test_unrecognized_tokens_are_ignored(make_field):
    grid = make_grid()
    grid.ingest_snapshot(make_field(5, 3, {(1, 1): "S;Z9"}))
    assert grid.collectibles == []
    assert grid.hostiles == []


def test_clear_carries_previous_hostiles(make_field):
    grid = make_grid()
    grid.ingest_snapshot(make_field(5, 3, {(1, 0): "E1", (3, 0): "E2"}))
    grid.ingest_snapshot(make_field(5, 3, {(2, 0): "E1"}))

    assert grid.hostiles == [(2, 0)]
    assert grid.previous_hostiles == [(1, 0), (3, 0)]
    assert grid.self_position is None


def test_is_enterable_checks_bounds_and_walls(make_field):
    grid = make_grid()
    grid.ingest_snapshot(make_field(5, 3, {(1, 1): "x", (2, 1): "E1"}))

    assert grid.is_enterable((1, 1)) is False
    assert grid.is_enterable((-1, 0)) is False
    assert grid.is_enterable((5, 1)) is False
    assert grid.is_enterable((0, 3)) is False
    # Hostiles are a hazard concern, not a wall
    assert grid.is_enterable((2, 1)) is True


def test_wrap_row_defaults_to_middle_row():
    assert Grid(19, 15).wrap_row == 7
    assert Grid(5, 3).wrap_row == 1
    assert Grid(19, 15).fallback_position == (0, 7)
    assert Grid(19, 15, wrap_row=3, fallback=(9, 9)).fallback_position == (9, 9)


def test_neighbors_wrap_only_on_wrap_row():
    grid = make_grid()

    on_wrap = dict(grid.neighbors((0, 1)))
    assert on_wrap == {
        Direction.UP: (0, 0),
        Direction.DOWN: (0, 2),
        Direction.LEFT: (4, 1),
        Direction.RIGHT: (1, 1),
    }
    assert dict(grid.neighbors((4, 1)))[Direction.RIGHT] == (0, 1)

    corner = dict(grid.neighbors((0, 0)))
    assert Direction.LEFT not in corner
    assert Direction.UP not in corner


def test_to_state_is_serializable(make_field):
    grid = make_grid()
    grid.ingest_snapshot(make_field(5, 3, {(0, 1): "P0", (4, 1): "P1", (2, 1): "C"}))

    state = grid.to_state(unsafe=[(3, 1), (1, 1)])
    assert isinstance(state, GridState)
    dumped = state.model_dump()
    assert dumped["self_position"] == (0, 1)
    assert dumped["collectibles"] == [(2, 1)]
    assert dumped["unsafe"] == [(1, 1), (3, 1)]


def test_direction_deltas_use_screen_coordinates():
    assert delta(Direction.UP) == (0, -1)
    assert delta(Direction.DOWN) == (0, 1)
    assert delta(Direction.LEFT) == (-1, 0)
    assert delta(Direction.RIGHT) == (1, 0)
    assert delta(Direction.PASS) == (0, 0)


@pytest.mark.parametrize(
    "cells, duplicate",
    [
        ({(0, 1): "P0", (2, 2): "P0", (4, 1): "P1"}, (2, 2)),
        ({(0, 1): "P0", (4, 1): "P1", (3, 2): "P1"}, (3, 2)),
        ({(0, 1): "P0;P0", (4, 1): "P1"}, (0, 1)),
    ],
)
def test_player_placed_twice_is_rejected(make_field, cells, duplicate):
    grid = make_grid()
    with pytest.raises(MalformedSnapshotError) as excinfo:
        grid.ingest_snapshot(make_field(5, 3, cells))
    assert excinfo.value.cell == duplicate


def test_players_may_move_between_snapshots(make_field):
    grid = make_grid()
    grid.ingest_snapshot(make_field(5, 3, {(0, 1): "P0", (4, 1): "P1"}))
    grid.ingest_snapshot(make_field(5, 3, {(1, 1): "P0", (3, 1): "P1"}))

    assert grid.self_position == (1, 1)
    assert grid.opponent_position == (3, 1)


@pytest.mark.parametrize("token", ["E", "P", "Pa", "P0x"])
def test_untyped_or_unnumbered_tokens_are_rejected(make_field, token):
    grid = make_grid()
    with pytest.raises(MalformedSnapshotError) as excinfo:
        grid.ingest_snapshot(make_field(5, 3, {(2, 0): token}))
    assert excinfo.value.cell == (2, 0)
    assert excinfo.value.token == token
