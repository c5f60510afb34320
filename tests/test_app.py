import pytest

import app as app_module


@pytest.fixture
def client(tmp_path, monkeypatch):
    monkeypatch.setattr(app_module, "BASE_DIR", str(tmp_path))
    monkeypatch.setattr(app_module, "COORDS_DIR", str(tmp_path))
    monkeypatch.setattr(app_module, "LAYOUT_DIR", str(tmp_path))
    monkeypatch.setattr(app_module.CFG, "COORDS_OUT", "coords.txt", raising=False)
    monkeypatch.setattr(app_module.CFG, "LAYOUT_HTML", "layout_view.html", raising=False)
    monkeypatch.setattr(app_module, "COORDS_FILENAME", "coords.txt")
    monkeypatch.setattr(app_module, "LAYOUT_FILENAME", "layout_view.html")
    app_module.app.config["TESTING"] = True
    with app_module.app.test_client() as c:
        yield c


def test_index_renders_form(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert b"Generate" in resp.data


def test_generate_json_returns_solution(client):
    resp = client.post("/generate", json={
        "board_size": 5, "shape_count": 3, "min_size": 1, "max_size": 6, "seed": 3,
    })
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["ok"] is True
    assert body["board_size"] == 5
    assert len(body["shapes"]) == 3
    for cells, linear in zip(body["shapes"], body["linear"]):
        assert linear == [r * 5 + c + 1 for r, c in cells]
    assert len(body["text_grid"].splitlines()) == 5


def test_generate_reports_exhaustion_as_normal_result(client):
    resp = client.post("/generate", json={
        "shape_count": 4, "min_size": 20, "max_size": 25,
        "total_attempts": 3, "per_shape_attempts": 2, "seed": 1,
    })
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["ok"] is False
    assert body["attempts"] == 3
    assert body["shapes"] == []


def test_generate_rejects_bad_parameters(client):
    resp = client.get("/generate?format=json&min_size=9&max_size=2")
    assert resp.status_code == 400
    body = resp.get_json()
    assert body["ok"] is False
    assert "Bad parameters" in body["reason"]


def test_form_post_renders_result_page_and_files(client, tmp_path):
    resp = client.post("/generate", data={
        "board_size": "4", "shape_count": "2", "min_size": "1", "max_size": "4", "seed": "2",
    })
    assert resp.status_code == 200
    assert b"<svg" in resp.data

    latest = client.get("/result/latest")
    assert latest.status_code == 200
    assert b"Solved" in latest.data

    coords = client.get("/download/coords")
    assert coords.status_code == 200
    assert b"Shape 1" in coords.data
    assert (tmp_path / "layout_view.html").exists()


def test_progress_is_not_cached(client):
    client.post("/generate", json={"board_size": 3, "shape_count": 1, "seed": 0, "max_size": 9})
    resp = client.get("/progress")
    assert resp.status_code == 200
    assert resp.headers["Cache-Control"] == "no-store, max-age=0"
    body = resp.get_json()
    assert body["done"] is True
    assert body["status"] in ("Solved", "Error")


def test_generate_rejects_infinite_board_size(client):
    resp = client.get("/generate?format=json&board_size=inf")
    assert resp.status_code == 400
    body = resp.get_json()
    assert body["ok"] is False
    assert "board_size='inf'" in body["reason"]


def test_generate_rejects_oversized_board(client):
    resp = client.get("/generate?format=json&board_size=100000")
    assert resp.status_code == 400
    assert "over the request limit" in resp.get_json()["reason"]


def test_exhausted_run_replaces_previous_layout(client, tmp_path):
    client.post("/generate", json={"board_size": 4, "shape_count": 2, "max_size": 4, "seed": 2})
    layout = tmp_path / "layout_view.html"
    assert "<svg" in layout.read_text(encoding="utf-8")

    client.post("/generate", json={
        "shape_count": 4, "min_size": 20, "max_size": 25,
        "total_attempts": 2, "per_shape_attempts": 2, "seed": 1,
    })

    contents = layout.read_text(encoding="utf-8")
    assert "<svg" not in contents
    assert "No solution" in contents
    assert (tmp_path / "coords.txt").read_text(encoding="utf-8") == "No solution\n"
