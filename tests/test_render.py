from canonical import canonicalize
from models import PlacedShape, Shape, Solution
from render import (
    describe_shapes,
    label_grid,
    linear_indices,
    render_occupancy,
    render_svg,
    render_text,
    to_linear_index,
)


def _placed(slot, cells):
    return PlacedShape(slot, Shape(tuple(cells)), canonicalize(cells))


def _solution():
    return Solution(
        shapes=(
            _placed(0, [(0, 0), (0, 1), (1, 0)]),
            _placed(1, [(2, 3)]),
            _placed(2, [(4, 3), (4, 4)]),
        ),
        board_size=5,
    )


def test_linear_index_is_one_based_row_major():
    assert to_linear_index((2, 3), 5) == 14
    assert to_linear_index((0, 0), 5) == 1
    assert to_linear_index((4, 4), 5) == 25


def test_linear_indices_follow_discovery_order():
    assert linear_indices(_solution()) == [[1, 2, 6], [14], [24, 25]]


def test_describe_shapes():
    assert describe_shapes(_solution()) == [
        "Shape 1 (3 cells): 1, 2, 6",
        "Shape 2 (1 cells): 14",
        "Shape 3 (2 cells): 24, 25",
    ]


def test_render_text_labels_each_shape():
    assert render_text(_solution()) == "\n".join([
        "A A - - -",
        "A - - - -",
        "- - - B -",
        "- - - - -",
        "- - - C C",
    ])


def test_render_text_custom_placeholder():
    grid = label_grid(_solution(), empty=".")
    assert grid[3] == [".", ".", ".", ".", "."]


def test_render_occupancy():
    assert render_occupancy(_solution()).splitlines() == [
        "1 1 0 0 0",
        "1 0 0 0 0",
        "0 0 0 1 0",
        "0 0 0 0 0",
        "0 0 0 1 1",
    ]


def test_projections_do_not_mutate_solution():
    sol = _solution()
    before = sol.as_coords()
    render_text(sol)
    render_svg(sol)
    linear_indices(sol)
    assert sol.as_coords() == before


def test_render_svg_has_one_rect_per_cell_and_legend_entry_per_shape():
    svg, legend = render_svg(_solution(), scale=10)
    assert svg.startswith("<svg")
    # 6 cells plus the outer frame
    assert svg.count("<rect") == 7
    assert legend.count("<li>") == 3
    assert "A (3 cells)" in legend


def test_labels_past_z():
    placed = PlacedShape(27, Shape(((0, 0),)), "[[0,0]]")
    assert placed.label == "#28"


def test_render_text_keeps_columns_aligned_with_wide_labels():
    sol = Solution(
        shapes=(_placed(0, [(0, 0)]), _placed(26, [(0, 1)])),
        board_size=2,
    )
    assert render_text(sol).splitlines() == [
        "A   #27",
        "-   -",
    ]
