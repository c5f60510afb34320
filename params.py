# params.py — tolerant request parameter parser
from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from config import CFG
from models import GenerationConfig

# field -> accepted request keys, first match wins
_FIELD_KEYS: Dict[str, Tuple[str, ...]] = {
    "board_size": ("board_size", "grid_size", "size", "n"),
    "shape_count": ("shape_count", "shapes", "count", "k"),
    "min_size": ("min_size", "min_shape_size", "min"),
    "max_size": ("max_size", "max_shape_size", "max"),
    "total_attempts": ("total_attempts", "max_total_attempts", "attempts"),
    "per_shape_attempts": ("per_shape_attempts", "max_attempts_per_shape"),
    "seed": ("seed",),
}


# request-supplied values above these are rejected before any grid is built
def _request_caps() -> Dict[str, int]:
    return {
        "board_size": CFG.REQUEST_MAX_BOARD_SIZE,
        "shape_count": CFG.REQUEST_MAX_SHAPE_COUNT,
        "total_attempts": CFG.REQUEST_MAX_ATTEMPTS,
        "per_shape_attempts": CFG.REQUEST_MAX_ATTEMPTS,
    }


def _to_int(x: Any) -> Optional[int]:
    try:
        return int(float(x))
    except (TypeError, ValueError, OverflowError):
        return None


def _as_listish(val: Any) -> List[Any]:
    if val is None:
        return []
    if isinstance(val, (list, tuple)):
        return list(val)
    return [val]


def _first(container: Any, key: str) -> Any:
    if container is None:
        return None
    if isinstance(container, dict):
        vals = _as_listish(container.get(key))
    elif hasattr(container, "getlist"):
        vals = list(container.getlist(key))
    else:
        return None
    for v in vals:
        if v is None or str(v).strip() == "":
            continue
        return v
    return None


def parse_generation_params(form_like: Any) -> Tuple[Dict[str, int], Optional[str]]:
    """
    Return (overrides, error_message_or_None).
    Accepts JSON objects, form/query multi-dicts and plain dicts; unknown keys
    are ignored and blank values fall back to the configured defaults.
    """
    overrides: Dict[str, int] = {}
    bad: List[str] = []

    for field, keys in _FIELD_KEYS.items():
        for key in keys:
            raw = _first(form_like, key)
            if raw is None:
                continue
            val = _to_int(raw)
            if val is None:
                bad.append(f"{key}={raw!r}")
            else:
                overrides[field] = val
            break

    if bad:
        return overrides, "not an integer: " + ", ".join(bad)
    return overrides, None


def build_config(form_like: Any, base: Optional[GenerationConfig] = None) -> Tuple[Optional[GenerationConfig], Optional[str]]:
    """Parse ``form_like`` and apply it to ``base`` (defaults from CFG)."""

    overrides, err = parse_generation_params(form_like)
    if err:
        return None, err
    too_big = [
        f"{field}={overrides[field]} (max {cap})"
        for field, cap in _request_caps().items()
        if field in overrides and overrides[field] > cap
    ]
    if too_big:
        return None, "over the request limit: " + ", ".join(too_big)
    base = base or GenerationConfig.from_cfg()
    try:
        return base.with_overrides(**overrides), None
    except ValueError as e:
        return None, str(e)


__all__ = ["build_config", "parse_generation_params"]
