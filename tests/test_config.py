import pytest

from falconwatch.config import Config, load_config
from falconwatch.errors import CalibrationError, ConfigError
from falconwatch.visibility.calibration import DEFAULT_CALIBRATION


def _write(tmp_path, text):
    path = tmp_path / "config.toml"
    path.write_text(text)
    return path


def test_missing_default_config_is_empty(isolated_config):
    config = load_config()
    assert config.default_site_id == "vandenberg"
    assert config.viewer_location() is None
    assert config.calibration() is DEFAULT_CALIBRATION


def test_missing_explicit_config_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.toml")


def test_invalid_toml(tmp_path):
    with pytest.raises(ConfigError):
        load_config(_write(tmp_path, "[viewer\nlatitude_deg = "))


def test_viewer_and_site(tmp_path):
    config = load_config(
        _write(
            tmp_path,
            """
[launch]
site = "cape-canaveral"

[viewer]
name = "Titusville"
latitude_deg = 28.61
longitude_deg = -80.81
elevation_m = 5
urban = true
""",
        )
    )
    assert config.default_site_id == "cape-canaveral"
    viewer = config.viewer_location()
    assert viewer.name == "Titusville"
    assert viewer.latitude_deg == 28.61
    assert viewer.elevation_m == 5
    assert viewer.is_urban


def test_viewer_defaults_name():
    viewer = Config({"viewer": {"latitude_deg": 33, "longitude_deg": -112}}).viewer_location()
    assert viewer.name == "Home"
    assert viewer.latitude_deg == 33.0
    assert not viewer.is_urban


def test_viewer_needs_both_coordinates():
    with pytest.raises(ConfigError):
        Config({"viewer": {"latitude_deg": 33}}).viewer_location()


def test_calibration_overrides(tmp_path):
    config = load_config(
        _write(
            tmp_path,
            """
[calibration]
plume_altitude_km = 35

[calibration.max_visible_distance.night]
falcon9 = 500
""",
        )
    )
    cal = config.calibration()
    assert cal.plume_altitude_km == 35
    assert cal.max_distance_km("night", "falcon9") == 500.0


def test_bad_calibration_override():
    config = Config({"calibration": {"weights": {"cloud": "lots"}}})
    with pytest.raises(CalibrationError):
        config.calibration()


def test_weights_that_do_not_sum_are_rejected():
    with pytest.raises(CalibrationError, match="sum to 1.0"):
        Config({"calibration": {"weights": {"cloud": 0.5}}}).calibration()


def test_distance_override_must_be_a_table():
    with pytest.raises(CalibrationError, match="max_visible_distance.twilight"):
        Config({"calibration": {"max_visible_distance": {"twilight": 900}}}).calibration()


def test_unknown_calibration_key_is_rejected():
    with pytest.raises(CalibrationError, match="weight"):
        Config({"calibration": {"weight": {"cloud": 0.35}}}).calibration()


def test_optimal_boost_override_applies():
    assert Config({"calibration": {"optimal_boost": 1.2}}).calibration().optimal_boost == 1.2
