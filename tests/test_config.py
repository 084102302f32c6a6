import json

import pytest

from threebody.config import (
    PROFILES,
    SimulationConfig,
    format_hex_color,
    get_profile,
    gravity_range_from_slider,
    gravity_strength_from_slider,
    load_config,
    next_cycle_color,
    parse_hex_color,
    slider_from_gravity_strength,
)


def test_profiles_share_one_config_type():
    classic = get_profile("classic")
    web = get_profile("web")
    assert classic.force_cap == 200000.0
    assert web.force_cap == 10000.0
    assert web.gravity_strength == 0.4
    assert set(PROFILES) == {"classic", "web"}


def test_unknown_profile():
    with pytest.raises(ValueError):
        get_profile("mobile")


@pytest.mark.parametrize("kwargs", [
    {"reset_policy": "sometimes"},
    {"trail_capacity": 0},
    {"min_distance": 0.0},
    {"easing": 1.0},
    {"colors": ((1, 2, 3),)},
    {"colors": ("#ff0000", "#00ff00", "#0000ff")},
    {"colors": ((256, 0, 0), (0, 0, 0), (0, 0, 0))},
    {"trail_capacity": 10.5},
    {"satellite_trail_capacity": True},
])
def test_invalid_config_rejected(kwargs):
    with pytest.raises(ValueError):
        SimulationConfig(**kwargs)


def test_config_is_immutable():
    config = SimulationConfig()
    with pytest.raises(AttributeError):
        config.gravity_strength = 3.0


def test_with_color_returns_new_config():
    config = SimulationConfig()
    updated = config.with_color(1, "#ff0000")
    assert updated.colors[1] == (255, 0, 0)
    assert config.colors[1] == (0, 255, 255)


def test_hex_colors():
    assert parse_hex_color("#ffc72e") == (255, 199, 46)
    assert parse_hex_color("00ffff") == (0, 255, 255)
    assert format_hex_color((255, 199, 46)) == "#ffc72e"
    with pytest.raises(ValueError):
        parse_hex_color("#fff")


def test_slider_mappings():
    assert gravity_strength_from_slider(0) == pytest.approx(0.01)
    assert gravity_strength_from_slider(100) == pytest.approx(100.0)
    assert gravity_strength_from_slider(50) == pytest.approx(50.005)
    assert gravity_range_from_slider(0) == pytest.approx(0.1)
    assert gravity_range_from_slider(100) == pytest.approx(1000.0)
    assert slider_from_gravity_strength(gravity_strength_from_slider(37)) == pytest.approx(37)


def test_color_cycle_wraps():
    index, color = next_cycle_color(0, 0)
    assert (index, color) == (1, (255, 0, 0))
    index, color = next_cycle_color(0, 3)
    assert (index, color) == (0, (255, 199, 46))


def test_load_config_overrides(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({
        "gravity_strength": 0.6,
        "colors": ["#ff0000", [0, 300, 0], "#0000ff"],
        "satellite_enabled": True,
        "bogus": 1,
    }))
    config = load_config(str(path), base=get_profile("web"))
    assert config.gravity_strength == 0.6
    assert config.colors == ((255, 0, 0), (0, 255, 0), (0, 0, 255))
    assert config.satellite_enabled is True
    assert config.force_cap == 10000.0


def test_load_config_falls_back_on_bad_file(tmp_path):
    base = SimulationConfig(gravity_strength=1.5)
    missing = tmp_path / "missing.json"
    assert load_config(str(missing), base=base) is base
    bad = tmp_path / "bad.json"
    bad.write_text("[1, 2, 3]")
    assert load_config(str(bad), base=base) is base
    invalid = tmp_path / "invalid.json"
    invalid.write_text(json.dumps({"reset_policy": "never"}))
    assert load_config(str(invalid), base=base) is base


def test_load_config_rejects_fractional_trail_capacity(tmp_path):
    base = SimulationConfig()
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"trail_capacity": 10.5}))
    assert load_config(str(path), base=base) is base
