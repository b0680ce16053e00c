import pytest

from falconwatch.visibility import ViewingLocation, WeatherSnapshot

# 2024-07-02T00:00:00Z, early evening in California.
LAUNCH_TIME = 1719878400

VANDENBERG_LAT = 34.6321
VANDENBERG_LON = -120.6107
KM_PER_DEG_LAT = 111.19492664455873


@pytest.fixture
def launch_time():
    return LAUNCH_TIME


@pytest.fixture
def viewer_north():
    """Factory for a viewer due north of Vandenberg at a given distance."""

    def _make(km: float, **kwargs) -> ViewingLocation:
        kwargs.setdefault("name", f"{km:.0f} km north")
        return ViewingLocation(
            latitude_deg=VANDENBERG_LAT + km / KM_PER_DEG_LAT,
            longitude_deg=VANDENBERG_LON,
            **kwargs,
        )

    return _make


@pytest.fixture
def clear_weather():
    return WeatherSnapshot(cloud_cover_pct=0.0, cloud_base_m=None, surface_visibility_km=40.0)


@pytest.fixture
def overcast_weather():
    return WeatherSnapshot(cloud_cover_pct=95.0, cloud_base_m=2000.0, surface_visibility_km=20.0)


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    monkeypatch.setattr("falconwatch.config.DEFAULT_CONFIG_PATH", tmp_path / "missing.toml")
    return tmp_path


@pytest.fixture
def sun_at(monkeypatch):
    """Pin the viewer's solar elevation seen by the engine."""

    def _pin(elevation_deg: float) -> None:
        monkeypatch.setattr(
            "falconwatch.visibility.engine.solar_elevation_deg",
            lambda lat, lon, ts: elevation_deg,
        )

    return _pin
