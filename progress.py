from __future__ import annotations

import json
import logging
import os
import time
import threading
from pathlib import Path
from typing import Any, Callable, Dict, Optional

# ------------------------------
# Thread-safe global progress state
# ------------------------------

PROGRESS_LOCK = threading.Lock()


def _state_file_path() -> Path:
    configured = os.environ.get("PROGRESS_STATE_FILE")
    if configured:
        return Path(configured)
    return Path(__file__).resolve().parent / "logs" / "progress_state.json"


def _log_file_path() -> Path:
    configured = os.environ.get("PROGRESS_LOG_FILE")
    if configured:
        return Path(configured)
    return Path(__file__).resolve().parent / "logs" / "generator_attempts.log"


STATE_FILE = _state_file_path()
STATE_FILE_TMP = STATE_FILE.with_name(STATE_FILE.name + ".tmp")
_LAST_STATE_MTIME: float = 0.0


def _init_logger() -> logging.Logger:
    logger = logging.getLogger("generator.attempt_log")
    if logger.handlers:
        return logger

    log_path = _log_file_path()
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_path, encoding="utf-8")
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
        logger.propagate = False
    except OSError:
        # Progress tracking keeps working without a log file.
        logger.handlers.clear()
    return logger


ATTEMPT_LOGGER = _init_logger()


def _fmt_seconds(seconds: Optional[float]) -> Optional[str]:
    if seconds is None:
        return None
    return f"{float(seconds):.2f}s"


def _emit_log(event: str, level: int = logging.INFO, **fields: Any) -> None:
    if not ATTEMPT_LOGGER.handlers:
        return
    extras = [
        f"{key}={value}"
        for key, value in fields.items()
        if value is not None and value != ""
    ]
    try:
        if extras:
            ATTEMPT_LOGGER.log(level, "%s | %s", event, " ".join(extras))
        else:
            ATTEMPT_LOGGER.log(level, "%s", event)
    except Exception:
        # Logging failures must never bubble back to callers.
        pass


# Single source of truth for the status endpoint
PROGRESS: Dict[str, Any] = {
    "status": "Idle",          # Idle | Solving | Solved | Error
    "attempt": 0,              # current board attempt (1-based)
    "total_attempts": 0,       # board attempt budget
    "shape_count": 0,          # shapes required per board
    "shapes_placed": 0,        # shapes committed on the current board
    "board_size": 0,
    "percent": 0.0,            # 0..100, share of the attempt budget used
    "elapsed_start": None,     # t0 (float) when generation started
    "elapsed": 0.0,            # seconds snapshot
    "message": "",             # optional note
    "done": False,             # run completed
    "ok": None,                # success flag if known
    "result_url": "",          # optional navigation target
    "run_id": 0,               # monotonically increasing identifier
}

_RESET_VALUES: Dict[str, Any] = {
    "status": "Idle",
    "attempt": 0,
    "total_attempts": 0,
    "shape_count": 0,
    "shapes_placed": 0,
    "board_size": 0,
    "percent": 0.0,
    "elapsed_start": None,
    "elapsed": 0.0,
    "message": "",
    "done": False,
    "ok": None,
    "result_url": "",
}


def _persist_locked() -> None:
    global _LAST_STATE_MTIME
    try:
        STATE_FILE.parent.mkdir(parents=True, exist_ok=True)
        with STATE_FILE_TMP.open("w", encoding="utf-8") as fh:
            json.dump(PROGRESS, fh, ensure_ascii=False, separators=(",", ":"))
        STATE_FILE_TMP.replace(STATE_FILE)
        try:
            _LAST_STATE_MTIME = STATE_FILE.stat().st_mtime
        except OSError:
            _LAST_STATE_MTIME = time.time()
    except OSError:
        # Persistence must never break progress updates.
        pass


def _load_persisted_locked(force: bool = False) -> None:
    global _LAST_STATE_MTIME
    try:
        stat = STATE_FILE.stat()
    except OSError:
        return
    if not force and stat.st_mtime <= _LAST_STATE_MTIME:
        return
    try:
        with STATE_FILE.open("r", encoding="utf-8") as fh:
            data = json.load(fh)
    except (OSError, ValueError):
        return
    if not isinstance(data, dict):
        return
    for key in PROGRESS.keys():
        if key in data:
            PROGRESS[key] = data[key]
    _LAST_STATE_MTIME = stat.st_mtime


# ------------------------------
# Helpers
# ------------------------------

def _now() -> float:
    return time.time()


def _fmt_elapsed(seconds: float) -> str:
    seconds = max(0.0, float(seconds))
    if seconds < 60:
        return f"{int(seconds)}s"
    m, s = divmod(int(seconds), 60)
    if m < 60:
        return f"{m}m {s}s"
    h, m = divmod(m, 60)
    return f"{h}h {m}m"


def _touch_elapsed_locked() -> None:
    t0 = PROGRESS.get("elapsed_start")
    if t0 is not None:
        PROGRESS["elapsed"] = _now() - float(t0)


def reset() -> None:
    with PROGRESS_LOCK:
        new_run_id = int(PROGRESS.get("run_id") or 0) + 1
        PROGRESS.update(_RESET_VALUES)
        PROGRESS["run_id"] = new_run_id
        _emit_log("Progress reset", run_id=new_run_id)
        _persist_locked()


def start_timer() -> None:
    with PROGRESS_LOCK:
        PROGRESS["elapsed_start"] = _now()
        PROGRESS["elapsed"] = 0.0
        _persist_locked()


# ------------------------------
# Setters
# ------------------------------

def set_status(v: Any) -> None:
    with PROGRESS_LOCK:
        PROGRESS["status"] = str(v)
        _persist_locked()


def set_message(msg: Any) -> None:
    with PROGRESS_LOCK:
        PROGRESS["message"] = "" if msg is None else str(msg)
        _persist_locked()


def set_result_url(url: Any) -> None:
    with PROGRESS_LOCK:
        PROGRESS["result_url"] = "" if url is None else str(url)
        _persist_locked()


def set_elapsed(seconds: float) -> None:
    with PROGRESS_LOCK:
        PROGRESS["elapsed"] = max(0.0, float(seconds))
        _persist_locked()


def set_run(total_attempts: int, board_size: int, shape_count: int) -> None:
    with PROGRESS_LOCK:
        PROGRESS.update({
            "status": "Solving",
            "total_attempts": int(total_attempts),
            "board_size": int(board_size),
            "shape_count": int(shape_count),
        })
        _emit_log(
            "Run started",
            board=f"{board_size}x{board_size}",
            shapes=shape_count,
            budget=total_attempts,
        )
        _persist_locked()


def set_attempt(attempt: int) -> None:
    with PROGRESS_LOCK:
        PROGRESS["attempt"] = int(attempt)
        PROGRESS["shapes_placed"] = 0
        total = PROGRESS.get("total_attempts") or 0
        if total:
            PROGRESS["percent"] = max(0.0, min(100.0, 100.0 * attempt / total))
        _touch_elapsed_locked()
        _persist_locked()


def set_shapes_placed(n: int) -> None:
    with PROGRESS_LOCK:
        PROGRESS["shapes_placed"] = max(0, int(n))
        _persist_locked()


def set_done(ok: Any = None, *, reason: Any = None) -> None:
    """Mark the run complete.

    ``ok`` picks the final status (``Solved``/``Error``); when omitted the
    status is left alone unless nothing was ever reported, in which case the
    run counts as solved.  ``reason`` is surfaced through ``message``.
    """

    with PROGRESS_LOCK:
        _touch_elapsed_locked()
        if ok is not None:
            ok_flag = bool(ok)
            PROGRESS["status"] = "Solved" if ok_flag else "Error"
        elif PROGRESS.get("status") in ("", "Idle", None):
            ok_flag = True
            PROGRESS["status"] = "Solved"
        else:
            ok_flag = PROGRESS.get("status") == "Solved"
        PROGRESS["percent"] = 100.0
        if reason is not None:
            PROGRESS["message"] = str(reason)
        PROGRESS["done"] = True
        PROGRESS["ok"] = ok_flag
        _emit_log(
            "Run finished",
            level=logging.INFO if ok_flag else logging.WARNING,
            status=PROGRESS.get("status"),
            attempts=PROGRESS.get("attempt"),
            duration=_fmt_seconds(PROGRESS.get("elapsed")),
            message=PROGRESS.get("message"),
        )
        _persist_locked()


# ------------------------------
# Orchestrator events
# ------------------------------

def record_event(event: str, **fields: Any) -> None:
    """Feed one orchestrator event into the progress state and attempt log."""

    if event == "run_started":
        set_run(fields.get("total_attempts", 0), fields.get("board_size", 0),
                fields.get("shape_count", 0))
    elif event == "attempt_started":
        set_attempt(fields.get("attempt", 0))
    elif event == "shape_committed":
        set_shapes_placed(int(fields.get("slot", 0)) + 1)
        _emit_log("Shape committed", **fields)
    elif event == "attempt_failed":
        _emit_log("Attempt failed", **fields)
    elif event == "run_finished":
        set_done(fields.get("ok"), reason=fields.get("reason"))


def event_sink() -> Callable[..., None]:
    return record_event


# ------------------------------
# Snapshots for the UI
# ------------------------------

def snapshot() -> Dict[str, Any]:
    with PROGRESS_LOCK:
        _load_persisted_locked()
        _touch_elapsed_locked()
        out = {k: v for k, v in PROGRESS.items() if k != "elapsed_start"}
        out["elapsed_str"] = _fmt_elapsed(PROGRESS["elapsed"])
        return out


def as_json() -> Dict[str, Any]:
    # Alias used by /progress
    return snapshot()


with PROGRESS_LOCK:
    _load_persisted_locked(force=True)
