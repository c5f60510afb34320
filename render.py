import random
from typing import Dict, List, Optional, Tuple

from config import CFG
from models import Cell, Solution


def to_linear_index(cell: Cell, board_size: int) -> int:
    r, c = cell
    return r * board_size + c + 1


def linear_indices(solution: Solution) -> List[List[int]]:
    return [
        [to_linear_index(cell, solution.board_size) for cell in placed.cells]
        for placed in solution.shapes
    ]


def describe_shapes(solution: Solution) -> List[str]:
    lines = []
    for i, (placed, idx) in enumerate(zip(solution.shapes, linear_indices(solution)), start=1):
        lines.append(f"Shape {i} ({placed.shape.size} cells): {', '.join(str(v) for v in idx)}")
    return lines


def label_grid(solution: Solution, empty: Optional[str] = None) -> List[List[str]]:
    if empty is None:
        empty = CFG.EMPTY_SYMBOL
    n = solution.board_size
    out = [[empty] * n for _ in range(n)]
    for placed in solution.shapes:
        for r, c in placed.cells:
            if 0 <= r < n and 0 <= c < n:
                out[r][c] = placed.label
    return out


def render_text(solution: Solution, empty: Optional[str] = None) -> str:
    """One row per line; labels past ``Z`` (``#27``...) widen every column."""
    grid = label_grid(solution, empty)
    width = max((len(v) for row in grid for v in row), default=1)
    return "\n".join(" ".join(v.ljust(width) for v in row).rstrip() for row in grid)


def render_occupancy(solution: Solution) -> str:
    """0/1 dump of the board: 1 where any shape sits."""
    rows = label_grid(solution, empty="")
    return "\n".join(" ".join("1" if v else "0" for v in row) for row in rows)


def _color(name: str) -> str:
    rnd = random.Random(name)
    r = rnd.randint(40, 200)
    g = rnd.randint(40, 200)
    b = rnd.randint(40, 200)
    return f"rgb({r},{g},{b})"


def render_svg(solution: Solution, scale: int = 60) -> Tuple[str, str]:
    palette: Dict[str, str] = {}
    for p in solution.shapes:
        palette.setdefault(p.label, _color(p.label))

    n = solution.board_size
    svg_w = n * scale + 2
    svg_h = n * scale + 2

    rects = []
    for p in solution.shapes:
        for r, c in p.cells:
            x = c * scale + 1
            y = r * scale + 1
            rects.append(
                f'<rect x="{x}" y="{y}" width="{scale}" height="{scale}" fill="{palette[p.label]}" stroke="black" stroke-width="1"/>'
                f'<text x="{x+4}" y="{y+14}" font-size="12" fill="black">{p.label}{to_linear_index((r, c), n)}</text>'
            )
    grid = f'<rect x="1" y="1" width="{svg_w-2}" height="{svg_h-2}" fill="none" stroke="black" stroke-width="2"/>'
    svg = (
        f'<svg class="layout-svg" xmlns="http://www.w3.org/2000/svg" '
        f'width="{svg_w}" height="{svg_h}" '
        f'viewBox="0 0 {svg_w} {svg_h}" preserveAspectRatio="xMinYMin meet">'
        f'{grid}{"".join(rects)}</svg>'
    )

    sizes = {p.label: p.shape.size for p in solution.shapes}
    legend = "".join(
        f"<li><span class='swatch' style='background:{c}'></span>{n_} ({sizes[n_]} cells)</li>"
        for n_, c in palette.items()
    )
    return svg, legend
