# Orchestrator: per-shape retry inside whole-board retry
from __future__ import annotations

import random
from typing import Callable, List, Optional, Set, Tuple, Union

from canonical import canonicalize
from grid import OccupancyGrid
from models import (
    Fingerprint,
    GenerationConfig,
    GenerationExhausted,
    GrowthStuck,
    PlacedShape,
    SlotExhausted,
    Solution,
)
from solver.growth import draw_target_size, grow, is_connected

EventSink = Callable[..., None]

GenerationResult = Union[Solution, GenerationExhausted]


# ---------- helpers ----------

def _emit(on_event: Optional[EventSink], event: str, **fields) -> None:
    if on_event is not None:
        on_event(event, **fields)


def place_shape(
    board: OccupancyGrid,
    seen: Set[Fingerprint],
    config: GenerationConfig,
    rng,
    slot: int = 0,
) -> Union[PlacedShape, SlotExhausted]:
    """Find one candidate for ``slot`` whose fingerprint is not in ``seen``.

    The board is only read here; committing the returned shape is the
    caller's job.
    """

    tries = 0
    while tries < config.per_shape_attempts:
        tries += 1

        free = board.free_cells()
        if not free:
            return SlotExhausted(slot=slot, tries=tries, reason="board_full")
        seed = free[rng.randrange(len(free))]
        target = draw_target_size(rng, config.min_size, config.max_size)

        grown = grow(seed, target, board, rng)
        if isinstance(grown, GrowthStuck):
            continue

        fp = canonicalize(grown.cells)
        if fp in seen:
            continue
        return PlacedShape(slot=slot, shape=grown, fingerprint=fp)

    return SlotExhausted(slot=slot, tries=tries, reason="budget")


def attempt_board(
    config: GenerationConfig,
    rng,
    attempt: int = 1,
    on_event: Optional[EventSink] = None,
) -> Optional[Tuple[PlacedShape, ...]]:
    """Run one whole-board attempt; None when any slot cannot be filled."""

    board = OccupancyGrid(config.board_size)
    seen: Set[Fingerprint] = set()
    placed: List[PlacedShape] = []

    for slot in range(config.shape_count):
        outcome = place_shape(board, seen, config, rng, slot=slot)
        if isinstance(outcome, SlotExhausted):
            _emit(on_event, "attempt_failed", attempt=attempt, slot=slot,
                  reason=outcome.reason, tries=outcome.tries)
            return None
        for cell in outcome.cells:
            board.mark_occupied(cell)
        seen.add(outcome.fingerprint)
        placed.append(outcome)
        _emit(on_event, "shape_committed", attempt=attempt, slot=slot,
              size=outcome.shape.size, occupied=board.occupied_count())

    return tuple(placed)


def generate(
    config: Optional[GenerationConfig] = None,
    rng=None,
    on_event: Optional[EventSink] = None,
) -> GenerationResult:
    """
    Partition the board into ``shape_count`` distinct connected shapes.

    Up to ``total_attempts`` fresh boards are tried; the first complete board
    wins.  Exhausting the budget is a normal outcome and comes back as
    GenerationExhausted rather than an exception.
    """
    if config is None:
        config = GenerationConfig.from_cfg()
    if rng is None:
        rng = random.Random(config.seed)

    _emit(on_event, "run_started", total_attempts=config.total_attempts,
          board_size=config.board_size, shape_count=config.shape_count)

    attempts = 0
    while attempts < config.total_attempts:
        attempts += 1
        _emit(on_event, "attempt_started", attempt=attempts)
        shapes = attempt_board(config, rng, attempt=attempts, on_event=on_event)
        if shapes is not None:
            _emit(on_event, "run_finished", ok=True, attempts=attempts)
            return Solution(shapes=shapes, board_size=config.board_size, attempts=attempts)

    result = GenerationExhausted(
        attempts=attempts,
        reason=f"No solution found after {attempts} attempts",
    )
    _emit(on_event, "run_finished", ok=False, attempts=attempts, reason=result.reason)
    return result


def validate_solution(solution: Solution, config: GenerationConfig) -> List[str]:
    """Return the list of violated solution properties (empty when valid)."""

    problems: List[str] = []
    n = solution.board_size

    if len(solution.shapes) != config.shape_count:
        problems.append(
            f"expected {config.shape_count} shapes, got {len(solution.shapes)}"
        )

    owner = {}
    fingerprints = {}
    for placed in solution.shapes:
        cells = placed.cells
        label = placed.label
        if not (config.min_size <= len(cells) <= config.max_size):
            problems.append(f"shape {label} has size {len(cells)} outside bounds")
        if len(set(cells)) != len(cells):
            problems.append(f"shape {label} repeats a cell")
        if not is_connected(cells):
            problems.append(f"shape {label} is not connected")
        for r, c in cells:
            if not (0 <= r < n and 0 <= c < n):
                problems.append(f"shape {label} has out-of-bounds cell {(r, c)}")
            elif (r, c) in owner and owner[(r, c)] != label:
                problems.append(f"cell {(r, c)} shared by {owner[(r, c)]} and {label}")
            else:
                owner[(r, c)] = label
        fp = canonicalize(cells)
        if fp in fingerprints:
            problems.append(f"shape {label} is congruent to shape {fingerprints[fp]}")
        else:
            fingerprints[fp] = label

    return problems


__all__ = ["attempt_board", "generate", "place_shape", "validate_solution"]
