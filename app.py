# app.py — web front end for the shape generator
from __future__ import annotations
import os
import time
from typing import Any, Dict, Tuple, Union

from flask import Flask, request, render_template, send_from_directory, jsonify, url_for

from config import CFG
from io_files import write_coords, write_layout_view_html
from models import GenerationConfig, GenerationExhausted, Solution
from params import build_config
from render import describe_shapes, linear_indices, render_svg, render_text
from solver.orchestrator import generate

from progress import (
    reset as progress_reset,
    as_json as progress_json,
    start_timer as progress_start,
    event_sink,
    set_status, set_done, set_elapsed, set_result_url,
)

BASE_DIR = os.path.dirname(os.path.abspath(__file__))


def _resolve_output_paths(configured: str, fallback: str) -> Tuple[str, str, str]:
    name = (configured or "").strip() or fallback
    if os.path.isabs(name):
        full_path = name
    else:
        full_path = os.path.abspath(os.path.join(BASE_DIR, name))
    directory = os.path.dirname(full_path) or BASE_DIR
    filename = os.path.basename(full_path) or fallback
    return full_path, directory, filename


_COORDS_FULL_PATH, COORDS_DIR, COORDS_FILENAME = _resolve_output_paths(
    CFG.COORDS_OUT, "coords.txt"
)
_LAYOUT_FULL_PATH, LAYOUT_DIR, LAYOUT_FILENAME = _resolve_output_paths(
    CFG.LAYOUT_HTML, "layout_view.html"
)

LAST_RESULT: Dict[str, Any] = {
    "ok": False,
    "reason": "Nothing generated yet.",
    "board_size": 0,
    "attempts": 0,
    "shapes": [],
    "linear": [],
    "lines": [],
    "text_grid": "",
    "elapsed_str": "0s",
    "svg": "",
    "legend": "",
    "coords_filename": COORDS_FILENAME,
    "layout_filename": LAYOUT_FILENAME,
}

app = Flask(__name__, static_folder=None, template_folder="templates")


@app.after_request
def _no_cache_progress(resp):
    if request.path == "/progress":
        resp.headers["Cache-Control"] = "no-store, max-age=0"
        resp.headers["Pragma"] = "no-cache"
        resp.headers["Expires"] = "0"
    return resp


@app.route("/")
def index():
    return render_template("index.html", defaults=GenerationConfig.from_cfg())


@app.route("/result/latest")
def result_latest():
    return render_template("result.html", **LAST_RESULT)


def _fmt_elapsed(seconds: float) -> str:
    if seconds < 1:
        return "0s"
    m, s = divmod(int(seconds), 60)
    if m == 0:
        return f"{s}s"
    h, m = divmod(m, 60)
    if h == 0:
        return f"{m}m {s}s"
    return f"{h}h {m}m {s}s"


def _merge_like_mapping() -> Dict[str, Any]:
    merged: Dict[str, Any] = {}
    payload = request.get_json(silent=True)
    if isinstance(payload, dict):
        merged.update(payload)

    for k, v in request.form.to_dict(flat=False).items():
        merged.setdefault(k, v)

    for k, v in request.args.to_dict(flat=False).items():
        merged.setdefault(k, v)

    return merged


def _wants_json() -> bool:
    if request.is_json:
        return True
    if request.args.get("format") == "json":
        return True
    return request.accept_mimetypes.best == "application/json"


def _result_payload(result: Union[Solution, GenerationExhausted], elapsed: float) -> Dict[str, Any]:
    out: Dict[str, Any] = {
        "ok": result.ok,
        "attempts": result.attempts,
        "elapsed_str": _fmt_elapsed(elapsed),
    }
    if isinstance(result, Solution):
        out.update({
            "reason": f"Solved on attempt {result.attempts}",
            "board_size": result.board_size,
            "shapes": [[list(cell) for cell in cells] for cells in result.as_coords()],
            "linear": linear_indices(result),
            "lines": describe_shapes(result),
            "text_grid": render_text(result),
        })
    else:
        out.update({
            "reason": result.reason,
            "board_size": 0,
            "shapes": [],
            "linear": [],
            "lines": [],
            "text_grid": "",
        })
    return out


def _fail(reason: str, status: int):
    set_status("error")
    set_done(False, reason=reason)
    LAST_RESULT.update({
        "ok": False, "reason": reason, "board_size": 0, "attempts": 0,
        "shapes": [], "linear": [], "lines": [], "text_grid": "",
        "svg": "", "legend": "", "elapsed_str": "0s",
    })
    set_result_url(url_for("result_latest"))
    if _wants_json():
        return jsonify({"ok": False, "reason": reason}), status
    return render_template("result.html", **LAST_RESULT), status


@app.route("/generate", methods=["GET", "POST"])
def generate_view():
    progress_reset()
    progress_start()

    like = _merge_like_mapping()
    config, err = build_config(like)
    if err or config is None:
        seen_keys = ", ".join(list(like.keys())[:8]) or "—"
        return _fail(f"Bad parameters: {err} (saw keys: {seen_keys})", 400)

    t0 = time.time()
    try:
        result = generate(config, on_event=event_sink())
    except Exception as e:
        app.logger.exception("generator crashed")
        return _fail(f"generator exception: {type(e).__name__}: {e}", 500)
    elapsed = time.time() - t0
    set_elapsed(elapsed)

    payload = _result_payload(result, elapsed)
    svg_markup = legend_html = ""
    coords_name = COORDS_FILENAME
    layout_name = LAYOUT_FILENAME

    try:
        coords_name = os.path.basename(write_coords(result, BASE_DIR)) or COORDS_FILENAME
    except OSError:
        app.logger.warning("could not write %s", COORDS_FILENAME)

    if isinstance(result, Solution):
        svg_markup, legend_html = render_svg(result)
        grid_label = f"{result.board_size} × {result.board_size} cells, {len(result.shapes)} shapes"
    else:
        # overwrite so the download never shows an older run's layout
        grid_label = f"No solution: {result.reason}"
    try:
        layout_path = write_layout_view_html(svg_markup, legend_html, BASE_DIR, grid_label=grid_label)
        layout_name = os.path.basename(layout_path) or LAYOUT_FILENAME
    except OSError:
        app.logger.warning("could not write %s", LAYOUT_FILENAME)

    LAST_RESULT.update(payload)
    LAST_RESULT.update({
        "svg": svg_markup,
        "legend": legend_html,
        "coords_filename": coords_name,
        "layout_filename": layout_name,
    })
    set_result_url(url_for("result_latest"))

    if _wants_json():
        return jsonify(payload)
    return render_template("result.html", **LAST_RESULT)


@app.route("/download/coords")
def download_coords():
    return send_from_directory(COORDS_DIR, COORDS_FILENAME, as_attachment=True)


@app.route("/download/html")
def download_html():
    return send_from_directory(LAYOUT_DIR, LAYOUT_FILENAME, as_attachment=True)


@app.route("/progress")
def progress():
    return jsonify(progress_json())


if __name__ == "__main__":
    app.run(debug=False)
