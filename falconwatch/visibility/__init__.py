from .astro import lighting_condition, solar_elevation_deg, twilight_type
from .calibration import DEFAULT_CALIBRATION, Calibration, VisibilityTiming
from .classify import MissionProfile, classify_mission, detect_launch_azimuth, detect_rocket_type
from .engine import VisibilityEngine, calculate_visibility
from .geo import distance_km, distance_miles, initial_bearing_deg
from .radius import estimate_radius, lighting_label, max_visible_radius_km
from .sites import LAUNCH_SITES, SiteRegistry, get_launch_site, site_for_pad
from .types import (
    LaunchSite,
    LimitingFactor,
    SubScores,
    ViewingLocation,
    VisibilityModifiers,
    VisibilityResult,
    VisibilityWindow,
)
from .weather import WeatherSnapshot, estimate_cloud_base_m

__all__ = [
    "Calibration",
    "DEFAULT_CALIBRATION",
    "LAUNCH_SITES",
    "LaunchSite",
    "LimitingFactor",
    "MissionProfile",
    "SiteRegistry",
    "SubScores",
    "ViewingLocation",
    "VisibilityEngine",
    "VisibilityModifiers",
    "VisibilityResult",
    "VisibilityTiming",
    "VisibilityWindow",
    "WeatherSnapshot",
    "calculate_visibility",
    "classify_mission",
    "detect_launch_azimuth",
    "detect_rocket_type",
    "distance_km",
    "distance_miles",
    "estimate_cloud_base_m",
    "estimate_radius",
    "get_launch_site",
    "initial_bearing_deg",
    "lighting_condition",
    "lighting_label",
    "max_visible_radius_km",
    "site_for_pad",
    "solar_elevation_deg",
    "twilight_type",
]
