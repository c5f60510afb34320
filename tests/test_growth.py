import random

from grid import OccupancyGrid
from models import GrowthStuck, Shape
from solver.growth import draw_target_size, grow, is_connected
from tests.scripted import ScriptedRandom


def test_index_zero_growth_from_corner():
    rng = ScriptedRandom()
    grid = OccupancyGrid(5)

    shape = grow((0, 0), 3, grid, rng)

    assert isinstance(shape, Shape)
    assert shape.cells == ((0, 0), (0, 1), (1, 0))
    # frontier was [(0,1), (1,0)] then [(1,0), (0,2), (1,1)]
    assert rng.randrange_calls == [2, 3]


def test_growth_does_not_touch_callers_grid():
    grid = OccupancyGrid(5)
    grid.mark_occupied((4, 4))

    grow((2, 2), 10, grid, random.Random(1))

    assert grid.occupied_count() == 1
    assert grid.is_occupied((4, 4))


def test_size_one_needs_no_random_draws():
    rng = ScriptedRandom()
    shape = grow((3, 1), 1, OccupancyGrid(5), rng)
    assert shape.cells == ((3, 1),)
    assert rng.randrange_calls == []


def test_growth_reports_stuck_when_seed_is_walled_in():
    grid = OccupancyGrid(2)
    grid.mark_occupied((0, 1))
    grid.mark_occupied((1, 0))

    result = grow((0, 0), 2, grid, ScriptedRandom())

    assert result == GrowthStuck(seed=(0, 0), target_size=2, reached=1)


def test_growth_stuck_when_region_is_smaller_than_target():
    grid = OccupancyGrid(3)
    for cell in [(0, 2), (1, 2), (2, 0), (2, 1), (2, 2)]:
        grid.mark_occupied(cell)

    result = grow((0, 0), 5, grid, random.Random(0))

    assert isinstance(result, GrowthStuck)
    assert result.reached == 4


def test_random_growth_is_connected_and_avoids_occupied_cells():
    rng = random.Random(1234)
    blocked = {(0, 4), (1, 4), (2, 4)}
    for _ in range(200):
        grid = OccupancyGrid(5)
        for cell in blocked:
            grid.mark_occupied(cell)
        free = grid.free_cells()
        seed = free[rng.randrange(len(free))]
        target = draw_target_size(rng, 1, 22)

        shape = grow(seed, target, grid, rng)

        assert isinstance(shape, Shape)
        assert shape.size == target
        assert len(set(shape.cells)) == target
        assert shape.cells[0] == seed
        assert not blocked & shape.cell_set()
        assert is_connected(shape.cells)


def test_draw_target_size_is_inclusive():
    rng = random.Random(9)
    seen = {draw_target_size(rng, 2, 4) for _ in range(300)}
    assert seen == {2, 3, 4}


def test_is_connected():
    assert is_connected([(0, 0)])
    assert is_connected([(0, 0), (0, 1), (1, 1)])
    assert not is_connected([(0, 0), (1, 1)])
    assert not is_connected([(0, 0), (0, 1), (2, 1)])
    assert not is_connected([])
