"""Visibility radius lookups for callers that only need a map circle."""

from dataclasses import dataclass

from .astro import lighting_condition, solar_elevation_deg
from .calibration import DEFAULT_CALIBRATION, Calibration
from .classify import detect_rocket_type
from .geo import km_to_miles

LIGHTING_LABELS = {
    "twilight": "twilight",
    "night": "night",
    "day": "daytime",
}


@dataclass(frozen=True)
class RadiusEstimate:
    solar_elevation_deg: float
    lighting: str
    rocket_type: str
    radius_km: float
    radius_miles: float


def lighting_label(condition: str) -> str:
    return LIGHTING_LABELS.get(condition, condition)


def max_visible_radius_km(
    solar_elevation: float,
    rocket_type: str,
    calibration: Calibration = DEFAULT_CALIBRATION,
) -> float:
    return calibration.max_distance_km(lighting_condition(solar_elevation), rocket_type)


def estimate_radius(
    launch_time_unix: float,
    mission_name: str,
    latitude_deg: float,
    longitude_deg: float,
    calibration: Calibration = DEFAULT_CALIBRATION,
) -> RadiusEstimate:
    elevation = solar_elevation_deg(latitude_deg, longitude_deg, launch_time_unix)
    rocket_type = detect_rocket_type(mission_name)
    radius = max_visible_radius_km(elevation, rocket_type, calibration)
    return RadiusEstimate(
        solar_elevation_deg=elevation,
        lighting=lighting_condition(elevation),
        rocket_type=rocket_type,
        radius_km=radius,
        radius_miles=km_to_miles(radius),
    )
