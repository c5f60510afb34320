# solver/growth.py
from collections import deque
from typing import Iterable, List, Set, Union

from grid import OccupancyGrid
from models import Cell, GrowthStuck, Shape

# right, left, down, up — frontier entries are appended in this order
DIRECTIONS = ((0, 1), (0, -1), (1, 0), (-1, 0))

GrowthResult = Union[Shape, GrowthStuck]


def draw_target_size(rng, min_size: int, max_size: int) -> int:
    return rng.randint(min_size, max_size)


def _enqueue_neighbors(cell: Cell, scratch: OccupancyGrid, frontier: List[Cell], seen: Set[Cell]) -> None:
    r, c = cell
    for dr, dc in DIRECTIONS:
        nxt = (r + dr, c + dc)
        if nxt in seen or not scratch.is_valid(nxt) or scratch.is_occupied(nxt):
            continue
        frontier.append(nxt)
        seen.add(nxt)


def grow(seed: Cell, target_size: int, grid: OccupancyGrid, rng) -> GrowthResult:
    """
    Grow one connected region of ``target_size`` cells starting at ``seed``.

    Growth runs on a private copy of ``grid``; the caller's grid is left
    untouched whether growth succeeds or not.  Each step picks a frontier cell
    uniformly at random, so every added cell touches the region built so far.

    Returns:
        the grown Shape, or GrowthStuck if the frontier empties first.
    """
    scratch = grid.copy()
    cells: List[Cell] = [seed]
    scratch.mark_occupied(seed)

    frontier: List[Cell] = []
    seen: Set[Cell] = set()
    _enqueue_neighbors(seed, scratch, frontier, seen)

    for _ in range(1, target_size):
        if not frontier:
            return GrowthStuck(seed=seed, target_size=target_size, reached=len(cells))
        nxt = frontier.pop(rng.randrange(len(frontier)))
        cells.append(nxt)
        scratch.mark_occupied(nxt)
        _enqueue_neighbors(nxt, scratch, frontier, seen)

    return Shape(tuple(cells))


def is_connected(cells: Iterable[Cell]) -> bool:
    """True when ``cells`` form a single 4-connected component."""
    remaining = set(cells)
    if not remaining:
        return False
    start = next(iter(remaining))
    queue = deque([start])
    remaining.discard(start)
    while queue:
        r, c = queue.popleft()
        for dr, dc in DIRECTIONS:
            nxt = (r + dr, c + dc)
            if nxt in remaining:
                remaining.discard(nxt)
                queue.append(nxt)
    return not remaining
