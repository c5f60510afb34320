# config.py
import os

# ======= Board / shape bounds =======
BOARD_SIZE     = int(os.getenv("PS_BOARD_SIZE", "5"))
SHAPE_COUNT    = int(os.getenv("PS_SHAPE_COUNT", "4"))
MIN_SHAPE_SIZE = int(os.getenv("PS_MIN_SHAPE_SIZE", "1"))
# 19 on a 25-cell board leaves only 6 cells for the other three shapes in the
# worst case.  Kept configurable so callers can trade difficulty for speed.
MAX_SHAPE_SIZE = int(os.getenv("PS_MAX_SHAPE_SIZE", "19"))

# ======= Search budgets =======
TOTAL_ATTEMPTS     = int(os.getenv("PS_TOTAL_ATTEMPTS", "200"))
PER_SHAPE_ATTEMPTS = int(os.getenv("PS_PER_SHAPE_ATTEMPTS", "50"))

# ======= Request caps (web front end only) =======
REQUEST_MAX_BOARD_SIZE  = int(os.getenv("PS_REQUEST_MAX_BOARD_SIZE", "64"))
REQUEST_MAX_SHAPE_COUNT = int(os.getenv("PS_REQUEST_MAX_SHAPE_COUNT", "256"))
REQUEST_MAX_ATTEMPTS    = int(os.getenv("PS_REQUEST_MAX_ATTEMPTS", "10000"))

# Empty means "seed from the OS".
_SEED_RAW = os.getenv("PS_SEED", "").strip()
SEED = int(_SEED_RAW) if _SEED_RAW else None

# ======= Presentation =======
EMPTY_SYMBOL = os.getenv("PS_EMPTY_SYMBOL", "-")

# ======= Output names =======
COORDS_OUT  = os.getenv("PS_COORDS_OUT", "coords.txt")
LAYOUT_HTML = os.getenv("PS_LAYOUT_HTML", "layout_view.html")


class CFG:
    BOARD_SIZE     = BOARD_SIZE
    SHAPE_COUNT    = SHAPE_COUNT
    MIN_SHAPE_SIZE = MIN_SHAPE_SIZE
    MAX_SHAPE_SIZE = MAX_SHAPE_SIZE

    TOTAL_ATTEMPTS     = TOTAL_ATTEMPTS
    PER_SHAPE_ATTEMPTS = PER_SHAPE_ATTEMPTS

    REQUEST_MAX_BOARD_SIZE  = REQUEST_MAX_BOARD_SIZE
    REQUEST_MAX_SHAPE_COUNT = REQUEST_MAX_SHAPE_COUNT
    REQUEST_MAX_ATTEMPTS    = REQUEST_MAX_ATTEMPTS
    SEED               = SEED

    EMPTY_SYMBOL = EMPTY_SYMBOL

    COORDS_OUT  = COORDS_OUT
    LAYOUT_HTML = LAYOUT_HTML


__all__ = ["CFG"]
