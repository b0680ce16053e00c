from dataclasses import dataclass
from typing import Any, Mapping

DEFAULT_CLOUD_COVER_PCT = 50.0
DEFAULT_SURFACE_VISIBILITY_KM = 10.0


@dataclass(frozen=True)
class WeatherSnapshot:
    """Weather at one place and time, as handed over by a forecast provider.

    Every field may be missing; the engine substitutes defaults rather
    than failing.
    """

    cloud_cover_pct: float | None = None
    cloud_base_m: float | None = None
    surface_visibility_km: float | None = None
    aqi: float | None = None
    upper_wind_speed_ms: float | None = None
    upper_humidity_pct: float | None = None

    @property
    def effective_cloud_cover_pct(self) -> float:
        if self.cloud_cover_pct is None:
            return DEFAULT_CLOUD_COVER_PCT
        return self.cloud_cover_pct

    @property
    def effective_visibility_km(self) -> float:
        if self.surface_visibility_km is None:
            return DEFAULT_SURFACE_VISIBILITY_KM
        return self.surface_visibility_km

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "WeatherSnapshot":
        """Build a snapshot from a provider-style dict.

        Accepts ``visibility`` in metres or ``surface_visibility`` in km.
        When ``cloud_base`` is absent but cloud layers and a WMO weather
        code are present, the cloud base is estimated.
        """
        if not data:
            return cls()
        visibility_km = _float_or_none(data.get("surface_visibility"))
        if visibility_km is None:
            metres = _float_or_none(data.get("visibility"))
            visibility_km = metres / 1000.0 if metres is not None else None
        cloud_base = _float_or_none(data.get("cloud_base"))
        if cloud_base is None and "weather_code" in data:
            cloud_base = estimate_cloud_base_m(
                int(data["weather_code"]),
                low_clouds=_float_or_none(data.get("cloud_cover_low")) or 0.0,
                mid_clouds=_float_or_none(data.get("cloud_cover_mid")) or 0.0,
                high_clouds=_float_or_none(data.get("cloud_cover_high")) or 0.0,
                humidity_pct=_float_or_none(data.get("humidity")),
            )
        return cls(
            cloud_cover_pct=_float_or_none(data.get("clouds")),
            cloud_base_m=cloud_base,
            surface_visibility_km=visibility_km,
            aqi=_float_or_none(data.get("aqi")),
            upper_wind_speed_ms=_float_or_none(data.get("upper_wind_speed")),
            upper_humidity_pct=_float_or_none(data.get("upper_humidity")),
        )


def _float_or_none(value: Any) -> float | None:
    if value is None:
        return None
    return float(value)


def estimate_cloud_base_m(
    weather_code: int,
    *,
    low_clouds: float = 0.0,
    mid_clouds: float = 0.0,
    high_clouds: float = 0.0,
    humidity_pct: float | None = None,
) -> float | None:
    """Rough cloud-base altitude in metres from a WMO code and cloud layers.

    Returns None for clear skies.
    """
    if weather_code <= 1 and low_clouds < 20 and mid_clouds < 20:
        return None
    if 45 <= weather_code <= 48:
        return 100.0
    if 51 <= weather_code <= 67:
        return 600.0 if low_clouds > 30 else 1200.0
    if 71 <= weather_code <= 77:
        return 800.0
    if weather_code >= 95:
        return 1000.0
    # Lifted condensation level, roughly (100 - RH) * 25 m.
    if humidity_pct is not None and humidity_pct > 0 and low_clouds > 40:
        return max(300.0, min((100.0 - humidity_pct) * 25.0, 2000.0))
    if low_clouds > 60:
        return 800.0 + (100.0 - low_clouds) * 10.0
    if low_clouds > 30:
        return 1200.0 + (60.0 - low_clouds) * 15.0
    if mid_clouds > 60:
        return 3000.0
    if mid_clouds > 30:
        return 4500.0
    if high_clouds > 50:
        return 8000.0
    if low_clouds > 10 or mid_clouds > 10:
        return 2500.0
    return None
