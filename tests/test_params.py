from config import CFG
from models import GenerationConfig
from params import build_config, parse_generation_params


def test_parse_json_payload():
    overrides, err = parse_generation_params({"board_size": 6, "shape_count": "3", "seed": 11})
    assert err is None
    assert overrides == {"board_size": 6, "shape_count": 3, "seed": 11}


def test_parse_form_lists_and_aliases():
    form = {"grid_size": ["7"], "shapes": ["5"], "min": [""], "max_shape_size": ["9.0"]}
    overrides, err = parse_generation_params(form)
    assert err is None
    assert overrides == {"board_size": 7, "shape_count": 5, "max_size": 9}


def test_parse_reports_non_numeric_values():
    overrides, err = parse_generation_params({"board_size": "big", "shape_count": 2})
    assert err is not None
    assert "board_size='big'" in err
    assert overrides == {"shape_count": 2}


def test_unknown_keys_are_ignored():
    overrides, err = parse_generation_params({"colour": "red"})
    assert overrides == {}
    assert err is None


def test_build_config_applies_overrides_to_base():
    base = GenerationConfig(board_size=5, shape_count=4, min_size=1, max_size=19)
    config, err = build_config({"max_size": 6, "total_attempts": 10}, base=base)
    assert err is None
    assert config == GenerationConfig(board_size=5, shape_count=4, min_size=1, max_size=6,
                                      total_attempts=10)


def test_build_config_surfaces_invalid_bounds():
    config, err = build_config({"min_size": 9, "max_size": 2}, base=GenerationConfig())
    assert config is None
    assert "larger than max_size" in err


def test_infinite_and_huge_numbers_are_reported_not_raised():
    for raw in ("inf", "-inf", "1e400"):
        overrides, err = parse_generation_params({"board_size": raw})
        assert overrides == {}
        assert err == f"not an integer: board_size={raw!r}"


def test_build_config_rejects_values_over_request_caps(monkeypatch):
    monkeypatch.setattr(CFG, "REQUEST_MAX_BOARD_SIZE", 10, raising=False)
    monkeypatch.setattr(CFG, "REQUEST_MAX_ATTEMPTS", 100, raising=False)

    config, err = build_config({"board_size": 100000, "total_attempts": 101}, base=GenerationConfig())

    assert config is None
    assert "board_size=100000 (max 10)" in err
    assert "total_attempts=101 (max 100)" in err


def test_build_config_accepts_values_at_request_caps(monkeypatch):
    monkeypatch.setattr(CFG, "REQUEST_MAX_BOARD_SIZE", 10, raising=False)

    config, err = build_config({"board_size": 10}, base=GenerationConfig())

    assert err is None
    assert config.board_size == 10
