from dataclasses import dataclass

from .classify import (
    FALCON_9,
    FALCON_HEAVY,
    SMALL_ROCKET,
    STARSHIP,
)
from .geo import angular_offset_deg

ROCKET_BRIGHTNESS = {
    FALCON_9: 0.85,
    FALCON_HEAVY: 0.95,
    STARSHIP: 1.0,
    SMALL_ROCKET: 0.4,
}
STARLINK_BRIGHTNESS = 0.8
CREWED_BONUS = 0.1


@dataclass(frozen=True)
class CloudAssessment:
    score: float
    is_fatal: bool
    reason: str | None


def score_cloud(
    cloud_cover_pct: float,
    cloud_base_m: float | None,
    plume_altitude_m: float = 40_000.0,
) -> CloudAssessment:
    frac = _clamp(cloud_cover_pct / 100.0)
    if frac > 0.8 and cloud_base_m is not None and cloud_base_m < plume_altitude_m:
        return CloudAssessment(
            score=0.0,
            is_fatal=True,
            reason="Overcast conditions with low cloud ceiling blocking view",
        )
    if cloud_base_m is not None and cloud_base_m < 3000 and frac > 0.6:
        return CloudAssessment(
            score=_clamp(0.2 * (1.0 - frac)),
            is_fatal=False,
            reason="Low cloud cover significantly reducing visibility",
        )
    return CloudAssessment(
        score=1.0 - frac,
        is_fatal=False,
        reason="Moderate cloud cover may affect visibility" if frac > 0.5 else None,
    )


def score_sun(solar_elevation: float) -> float:
    # Nautical twilight: observer in darkness, plume sunlit at 80-200 km.
    if -12.0 <= solar_elevation <= -6.0:
        return 1.0
    if -6.0 < solar_elevation <= -3.0:
        return 0.95
    if -3.0 < solar_elevation <= 0.0:
        return 0.85
    if -18.0 <= solar_elevation < -12.0:
        return 0.85
    if solar_elevation < -18.0:
        return 0.65
    if solar_elevation <= 10.0:
        return 0.30
    if solar_elevation <= 40.0:
        return 0.15
    return 0.05


def score_distance(
    distance_km: float,
    max_visible_km: float,
    *,
    optimal_min_km: float = 130.0,
    optimal_max_km: float = 800.0,
    optimal_boost: float = 1.1,
) -> float:
    if distance_km <= 0 or distance_km > max_visible_km:
        return 0.0
    base = 1.0 - distance_km / max_visible_km
    if optimal_min_km <= distance_km <= optimal_max_km:
        return min(1.0, base * optimal_boost)
    return _clamp(base)


def score_bearing(bearing_to_site_deg: float, trajectory_azimuth_deg: float) -> float:
    offset = angular_offset_deg(bearing_to_site_deg, trajectory_azimuth_deg)
    if 45.0 <= offset <= 135.0:
        return 1.0
    along = min(offset, 180.0 - offset)
    return 0.6 + 0.4 * (along / 45.0)


def score_clarity(
    surface_visibility_km: float,
    aqi: float | None,
    humidity_penalty: float = 0.0,
) -> float:
    if surface_visibility_km >= 40.0:
        score = 1.0
    elif surface_visibility_km <= 5.0:
        score = 0.0
    else:
        score = (surface_visibility_km - 5.0) / 35.0
    score *= _aqi_factor(aqi)
    if humidity_penalty > 0:
        score *= 1.0 - humidity_penalty
    return _clamp(score)


def _aqi_factor(aqi: float | None) -> float:
    if aqi is None or aqi <= 50:
        return 1.0
    if aqi <= 100:
        return 0.9
    if aqi <= 150:
        return 0.7
    if aqi <= 200:
        return 0.4
    return 0.2


def score_plume(upper_humidity_pct: float | None, upper_wind_speed_ms: float | None) -> float:
    if upper_humidity_pct is None and upper_wind_speed_ms is None:
        return 0.6
    humidity_factor = 0.5
    wind_factor = 0.5
    if upper_humidity_pct is not None:
        if upper_humidity_pct >= 60:
            humidity_factor = 0.9
        elif upper_humidity_pct >= 40:
            humidity_factor = 0.7
        elif upper_humidity_pct >= 20:
            humidity_factor = 0.5
        else:
            humidity_factor = 0.3
    if upper_wind_speed_ms is not None:
        if upper_wind_speed_ms <= 10:
            wind_factor = 0.9
        elif upper_wind_speed_ms <= 25:
            wind_factor = 1.0
        elif upper_wind_speed_ms <= 50:
            wind_factor = 0.7
        else:
            wind_factor = 0.4
    return (humidity_factor + wind_factor) / 2.0


def score_brightness(rocket_type: str, *, starlink: bool = False, crewed: bool = False) -> float:
    score = ROCKET_BRIGHTNESS.get(rocket_type, ROCKET_BRIGHTNESS[FALCON_9])
    if starlink:
        score = STARLINK_BRIGHTNESS
    if crewed:
        score = min(1.0, score + CREWED_BONUS)
    return score


def score_obstruction(
    is_urban: bool = False,
    viewer_elevation_m: float | None = None,
    light_pollution_base: float = 0.0,
) -> float:
    score = 1.0
    if is_urban:
        score -= 0.2
    score -= light_pollution_base
    elevation = viewer_elevation_m or 0.0
    if elevation > 1000:
        score = min(1.0, score + 0.1)
    elif elevation < 100:
        score -= 0.05
    return _clamp(score)


def _clamp(value: float) -> float:
    return max(0.0, min(1.0, value))
