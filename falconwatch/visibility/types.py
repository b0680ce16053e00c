from dataclasses import dataclass
import datetime
from typing import Mapping, Sequence


FACTORS = (
    "cloud",
    "sun",
    "distance",
    "bearing",
    "clarity",
    "plume",
    "brightness",
    "obstruction",
)


@dataclass(frozen=True)
class VisibilityModifiers:
    humidity_penalty: float
    typical_cloud_cover: float
    coastal_fog_factor: float
    light_pollution_base: float


@dataclass(frozen=True)
class LaunchSite:
    id: str
    name: str
    short_name: str
    latitude_deg: float
    longitude_deg: float
    elevation_m: float
    timezone: str
    default_azimuth_deg: float
    mission_azimuths: Mapping[str, float]
    modifiers: VisibilityModifiers
    direction_hint: str
    ll2_location_ids: tuple[int, ...] = ()
    ll2_pad_ids: tuple[int, ...] = ()
    pad_name_patterns: tuple[str, ...] = ()
    trajectory_points: tuple[tuple[float, float], ...] = ()
    map_center: tuple[float, float] | None = None
    map_zoom: int = 5


@dataclass(frozen=True)
class ViewingLocation:
    latitude_deg: float
    longitude_deg: float
    name: str = "Custom Location"
    elevation_m: float | None = None
    is_urban: bool = False


@dataclass(frozen=True)
class SubScores:
    cloud: float
    sun: float
    distance: float
    bearing: float
    clarity: float
    plume: float
    brightness: float
    obstruction: float

    def total(self, weights: Mapping[str, float]) -> float:
        return (
            self.cloud * weights["cloud"]
            + self.sun * weights["sun"]
            + self.distance * weights["distance"]
            + self.bearing * weights["bearing"]
            + self.clarity * weights["clarity"]
            + self.plume * weights["plume"]
            + self.brightness * weights["brightness"]
            + self.obstruction * weights["obstruction"]
        )

    def as_dict(self) -> dict[str, float]:
        return {name: getattr(self, name) for name in FACTORS}


@dataclass(frozen=True)
class RawData:
    cloud_fraction_pct: float
    cloud_base_m: float | None
    solar_elevation_deg: float
    twilight: str
    lighting: str
    distance_km: float
    bearing_deg: float
    max_visible_distance_km: float
    trajectory_azimuth_deg: float
    surface_visibility_km: float
    aqi: float | None
    upper_wind_speed_ms: float | None
    upper_humidity_pct: float | None
    rocket_type: str
    obstruction_factor: float


@dataclass(frozen=True)
class VisibilityFactors:
    sub_scores: SubScores
    weights: Mapping[str, float]
    raw: RawData


@dataclass(frozen=True)
class LimitingFactor:
    factor: str
    description: str
    severity: str  # critical | major | minor


@dataclass(frozen=True)
class VisibilityWindow:
    start_utc: datetime.datetime | None
    end_utc: datetime.datetime | None
    start_formatted: str | None
    end_formatted: str | None
    duration_min: int
    description: str


@dataclass(frozen=True)
class Confidence:
    low: int
    high: int


@dataclass(frozen=True)
class ResolvedViewer:
    name: str
    distance_miles: int
    distance_km: int
    bearing_deg: int


@dataclass(frozen=True)
class VisibilityResult:
    percentage: int
    rating: str
    confidence: Confidence
    factors: VisibilityFactors
    limiting_factors: Sequence[LimitingFactor]
    optimal_window: VisibilityWindow
    recommendations: Sequence[str]
    viewing_location: ResolvedViewer
    site_id: str
    fatal_blocker: str | None = None
