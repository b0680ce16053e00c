from pathlib import Path
from typing import TYPE_CHECKING

from falconwatch.errors import CalibrationError, ConfigError
from falconwatch.visibility.calibration import DEFAULT_CALIBRATION, Calibration
from falconwatch.visibility.sites import DEFAULT_SITE_ID
from falconwatch.visibility.types import ViewingLocation

if TYPE_CHECKING:
    import tomli as tomllib
else:
    try:
        import tomllib
    except ModuleNotFoundError:  # Python < 3.11
        import tomli as tomllib

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "falconwatch" / "config.toml"


class Config:
    def __init__(self, data: dict):
        self._data = data

    @property
    def default_site_id(self) -> str:
        return self._data.get("launch", {}).get("site", DEFAULT_SITE_ID)

    def _viewer_data(self) -> dict:
        return self._data.get("viewer", {})

    @property
    def viewer_latitude_deg(self):
        return self._viewer_data().get("latitude_deg", None)

    @property
    def viewer_longitude_deg(self):
        return self._viewer_data().get("longitude_deg", None)

    @property
    def viewer_name(self):
        return self._viewer_data().get("name", "Home")

    @property
    def viewer_elevation_m(self):
        return self._viewer_data().get("elevation_m", None)

    @property
    def viewer_urban(self) -> bool:
        return bool(self._viewer_data().get("urban", False))

    def viewer_location(self) -> ViewingLocation | None:
        lat = self.viewer_latitude_deg
        lon = self.viewer_longitude_deg
        if lat is None and lon is None:
            return None
        if lat is None or lon is None:
            raise ConfigError("viewer.latitude_deg and viewer.longitude_deg must be set together")
        return ViewingLocation(
            latitude_deg=float(lat),
            longitude_deg=float(lon),
            name=self.viewer_name,
            elevation_m=self.viewer_elevation_m,
            is_urban=self.viewer_urban,
        )

    def calibration(self) -> Calibration:
        overrides = self._data.get("calibration", None)
        if not overrides:
            return DEFAULT_CALIBRATION
        try:
            return DEFAULT_CALIBRATION.with_overrides(overrides)
        except (TypeError, ValueError) as e:
            raise CalibrationError(f"invalid calibration override: {e}") from e


def load_config(path: Path | None = None) -> Config:
    explicit_path = path
    path = path or DEFAULT_CONFIG_PATH

    if not path.exists():
        if explicit_path is not None:
            raise FileNotFoundError(f"Config file not found: {path}")
        # Return default config if default file missing
        return Config({})

    with open(path, "rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"invalid config {path}: {e}") from e

    return Config(data)
