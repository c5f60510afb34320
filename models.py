from dataclasses import dataclass, field, replace
from typing import FrozenSet, Iterator, List, Optional, Tuple

from config import CFG

Cell = Tuple[int, int]      # (row, col), 0-indexed
Fingerprint = str


@dataclass(frozen=True)
class GenerationConfig:
    board_size: int = 5
    shape_count: int = 4
    min_size: int = 1
    max_size: int = 19
    total_attempts: int = 200
    per_shape_attempts: int = 50
    seed: Optional[int] = None

    def __post_init__(self):
        if self.board_size < 1:
            raise ValueError(f"board_size must be positive, got {self.board_size}")
        if self.shape_count < 0:
            raise ValueError(f"shape_count must be >= 0, got {self.shape_count}")
        if self.min_size < 1:
            raise ValueError(f"min_size must be >= 1, got {self.min_size}")
        if self.min_size > self.max_size:
            raise ValueError(
                f"min_size ({self.min_size}) is larger than max_size ({self.max_size})"
            )
        if self.total_attempts < 0 or self.per_shape_attempts < 0:
            raise ValueError("attempt budgets must be >= 0")

    @classmethod
    def from_cfg(cls) -> "GenerationConfig":
        return cls(
            board_size=CFG.BOARD_SIZE,
            shape_count=CFG.SHAPE_COUNT,
            min_size=CFG.MIN_SHAPE_SIZE,
            max_size=CFG.MAX_SHAPE_SIZE,
            total_attempts=CFG.TOTAL_ATTEMPTS,
            per_shape_attempts=CFG.PER_SHAPE_ATTEMPTS,
            seed=CFG.SEED,
        )

    def with_overrides(self, **kw) -> "GenerationConfig":
        return replace(self, **{k: v for k, v in kw.items() if v is not None})


@dataclass(frozen=True)
class Shape:
    cells: Tuple[Cell, ...]   # discovery order

    @property
    def size(self) -> int:
        return len(self.cells)

    def cell_set(self) -> FrozenSet[Cell]:
        return frozenset(self.cells)

    def __len__(self) -> int:
        return len(self.cells)

    def __iter__(self) -> Iterator[Cell]:
        return iter(self.cells)


@dataclass(frozen=True)
class PlacedShape:
    slot: int
    shape: Shape
    fingerprint: Fingerprint

    @property
    def cells(self) -> Tuple[Cell, ...]:
        return self.shape.cells

    @property
    def label(self) -> str:
        return chr(65 + self.slot) if self.slot < 26 else f"#{self.slot + 1}"


@dataclass(frozen=True)
class Solution:
    shapes: Tuple[PlacedShape, ...]
    board_size: int
    attempts: int = 1
    ok: bool = field(default=True, init=False)

    def as_coords(self) -> List[List[Cell]]:
        return [list(p.cells) for p in self.shapes]

    @property
    def cell_count(self) -> int:
        return sum(p.shape.size for p in self.shapes)


@dataclass(frozen=True)
class GenerationExhausted:
    attempts: int
    reason: str = "No solution found within the attempt budget"
    ok: bool = field(default=False, init=False)


@dataclass(frozen=True)
class GrowthStuck:
    seed: Cell
    target_size: int
    reached: int


@dataclass(frozen=True)
class SlotExhausted:
    slot: int
    tries: int
    reason: str  # "budget" | "board_full"
