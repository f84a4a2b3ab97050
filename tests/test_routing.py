"""Tests for reducing a distance field to this tick's move."""

from hackman.environment import Grid, HazardTracker, compute_distances
from hackman.moves import Direction
from hackman.routing import next_move_toward, trace_route


def open_field(make_field, width, height, origin, cells=None):
    grid = Grid(width, height, self_id=0, opponent_id=1)
    grid.initialize()
    grid.ingest_snapshot(make_field(width, height, cells))
    hazards = HazardTracker()
    hazards.recompute_unsafe(grid.hostiles, origin, grid)
    return grid, compute_distances(grid, hazards, origin)


def test_straight_line_move(make_field):
    grid, distances = open_field(make_field, 5, 3, (0, 1))
    trace = trace_route(grid, distances, (0, 1), (2, 1))

    assert trace.move is Direction.RIGHT
    assert trace.reached == (1, 1)
    assert trace.checkpoint is None


def test_target_on_self_passes(make_field):
    grid, distances = open_field(make_field, 5, 3, (2, 2))
    assert next_move_toward(grid, distances, (2, 2), (2, 2)) is Direction.PASS


def test_adjacent_target_is_the_move(make_field):
    grid, distances = open_field(make_field, 5, 3, (2, 1))
    assert next_move_toward(grid, distances, (2, 1), (2, 0)) is Direction.UP
    assert next_move_toward(grid, distances, (2, 1), (2, 2)) is Direction.DOWN
    assert next_move_toward(grid, distances, (2, 1), (1, 1)) is Direction.LEFT


def test_route_through_wrap_edge(make_field):
    grid, distances = open_field(make_field, 5, 3, (0, 1))
    trace = trace_route(grid, distances, (0, 1), (3, 1))

    assert trace.reached == (4, 1)
    assert trace.move is Direction.LEFT


def test_route_through_wrap_edge_from_the_right(make_field):
    grid, distances = open_field(make_field, 5, 3, (4, 1))
    assert next_move_toward(grid, distances, (4, 1), (1, 1)) is Direction.RIGHT


def test_checkpoint_records_reverse_of_backward_step(make_field):
    grid, distances = open_field(make_field, 7, 5, (0, 0))
    trace = trace_route(grid, distances, (0, 0), (0, 4))

    assert trace.steps == 3
    assert trace.reached == (0, 1)
    assert trace.move is Direction.DOWN
    # Stepping UP out of the distance-4 cell records DOWN
    assert trace.checkpoint is Direction.DOWN


def test_walk_routes_around_walls(make_field):
    walls = {(1, 0): "x", (1, 1): "x"}
    grid, distances = open_field(make_field, 5, 3, (0, 0), walls)

    # Only way east is down column 0 and along row 2 (or the wrap row).
    assert next_move_toward(grid, distances, (0, 0), (2, 0)) is Direction.DOWN


def test_every_reachable_target_terminates_with_a_valid_move(make_field):
    walls = {(2, 1): "x", (2, 2): "x", (4, 3): "x", (5, 0): "x"}
    origin = (1, 2)
    grid, distances = open_field(make_field, 7, 5, origin, walls)

    for x in range(7):
        for y in range(5):
            if distances[x][y] == 0:
                continue
            trace = trace_route(grid, distances, origin, (x, y))
            assert trace.move in set(Direction)
            assert distances[trace.reached[0]][trace.reached[1]] <= 2
            assert trace.steps == max(distances[x][y] - 2, 0)
            if (x, y) != origin:
                assert trace.move is not Direction.PASS


def test_walk_stops_when_no_smaller_neighbour_exists():
    grid = Grid(3, 3)
    distances = [[0] * 3 for _ in range(3)]
    distances[2][2] = 5

    trace = trace_route(grid, distances, (0, 0), (2, 2))
    assert trace.reached == (2, 2)
    assert trace.steps == 0
