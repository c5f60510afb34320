"""Symmetry-invariant fingerprints for grid shapes.

Two shapes are congruent when one can be turned into the other with quarter
turns and mirror flips.  The fingerprint of a shape is the smallest
serialization among its symmetric images, so congruent shapes share a
fingerprint no matter where they sit on the board or in which order their
cells were discovered.
"""

from __future__ import annotations

import json
from typing import Iterable, List, Tuple

from models import Cell, Fingerprint

Points = List[Tuple[int, int]]


def normalize_to_origin(points: Iterable[Cell]) -> Points:
    """Shift so the minimum row and column are 0, then sort row-major."""

    pts = [(int(r), int(c)) for r, c in points]
    if not pts:
        return []
    min_r = min(r for r, _ in pts)
    min_c = min(c for _, c in pts)
    return sorted((r - min_r, c - min_c) for r, c in pts)


def rotate(points: Points) -> Points:
    # (r, c) -> (c, -r)
    return normalize_to_origin((c, -r) for r, c in points)


def flip_horizontal(points: Points) -> Points:
    if not points:
        return []
    max_c = max(c for _, c in points)
    return normalize_to_origin((r, max_c - c) for r, c in points)


def flip_vertical(points: Points) -> Points:
    if not points:
        return []
    max_r = max(r for r, _ in points)
    return normalize_to_origin((max_r - r, c) for r, c in points)


def symmetries(cells: Iterable[Cell]) -> List[Points]:
    """Images of ``cells`` under the 8 symmetries of the square.

    Each rotation state contributes itself plus its horizontal and vertical
    mirror, so the list holds 12 entries covering all 8 distinct images.
    """

    images: List[Points] = []
    current = normalize_to_origin(cells)
    for _ in range(4):
        images.append(current)
        images.append(flip_horizontal(current))
        images.append(flip_vertical(current))
        current = rotate(current)
    return images


def _serialize(points: Points) -> str:
    return json.dumps([[r, c] for r, c in points], separators=(",", ":"))


def canonical_cells(cells: Iterable[Cell]) -> Points:
    """The normalized image whose serialization is the fingerprint."""

    best: Points = []
    best_key = None
    for image in symmetries(cells):
        key = _serialize(image)
        if best_key is None or key < best_key:
            best, best_key = image, key
    return best


def canonicalize(cells: Iterable[Cell]) -> Fingerprint:
    return _serialize(canonical_cells(cells))


def fingerprint_to_cells(fingerprint: Fingerprint) -> Points:
    return [(int(r), int(c)) for r, c in json.loads(fingerprint)]


def is_congruent(a: Iterable[Cell], b: Iterable[Cell]) -> bool:
    return canonicalize(a) == canonicalize(b)


__all__ = [
    "canonicalize",
    "canonical_cells",
    "fingerprint_to_cells",
    "flip_horizontal",
    "flip_vertical",
    "is_congruent",
    "normalize_to_origin",
    "rotate",
    "symmetries",
]
