"""Calibration tables for the visibility model.

The constants are fit to documented sightings:

- Twilight Falcon 9: SAOCOM-1A (Oct 2018) seen from Phoenix, with further
  reports out to ~1000 km.
- Twilight Falcon Heavy: Arabsat-6A (Apr 2019) seen across the south-east US.
- Twilight Starship: no twilight flight yet; scaled from plume volume
  (33 Raptors) and Space Shuttle twilight sightings.
- Night: exhaust glow only, roughly half the twilight range.
- Day: community reports, easy within ~80 km, possible to ~200 km.
"""

from dataclasses import dataclass, field, replace
import math
from types import MappingProxyType
from typing import Mapping

from falconwatch.errors import CalibrationError
from .types import FACTORS


LIGHTING_CONDITIONS = ("twilight", "night", "day")
ROCKET_TYPES = ("falcon9", "falconHeavy", "starship", "smallRocket")
DEFAULT_ROCKET_KEY = "default"


@dataclass(frozen=True)
class VisibilityTiming:
    time_to_altitude_s: float
    first_stage_s: float
    second_stage_s: float
    total_duration_s: float


def _frozen(mapping: Mapping) -> Mapping:
    return MappingProxyType(dict(mapping))


DEFAULT_WEIGHTS = _frozen(
    {
        "cloud": 0.35,
        "sun": 0.25,
        "distance": 0.15,
        "clarity": 0.10,
        "plume": 0.05,
        "bearing": 0.04,
        "brightness": 0.04,
        "obstruction": 0.02,
    }
)

DEFAULT_MAX_VISIBLE_DISTANCE_KM = _frozen(
    {
        "twilight": _frozen(
            {
                "falcon9": 1000.0,
                "falconHeavy": 1200.0,
                "starship": 1500.0,
                "smallRocket": 350.0,
                "default": 1000.0,
            }
        ),
        "night": _frozen(
            {
                "falcon9": 450.0,
                "falconHeavy": 550.0,
                "starship": 700.0,
                "smallRocket": 200.0,
                "default": 450.0,
            }
        ),
        "day": _frozen(
            {
                "falcon9": 200.0,
                "falconHeavy": 250.0,
                "starship": 300.0,
                "smallRocket": 80.0,
                "default": 200.0,
            }
        ),
    }
)

# Falcon 9 MECO at T+2:30-2:40, SES-1 at T+2:46-2:53; Super Heavy MECO
# at T+2:40-2:50 with hot-staging.
DEFAULT_TIMING = _frozen(
    {
        "falcon9": VisibilityTiming(60.0, 150.0, 240.0, 360.0),
        "falconHeavy": VisibilityTiming(60.0, 150.0, 300.0, 420.0),
        "starship": VisibilityTiming(60.0, 165.0, 360.0, 480.0),
        "smallRocket": VisibilityTiming(120.0, 120.0, 180.0, 240.0),
        "default": VisibilityTiming(60.0, 150.0, 240.0, 360.0),
    }
)

DEFAULT_RATING_THRESHOLDS = ((75, "excellent"), (50, "good"), (30, "fair"))


@dataclass(frozen=True)
class Calibration:
    weights: Mapping[str, float] = field(default_factory=lambda: DEFAULT_WEIGHTS)
    max_visible_distance_km: Mapping[str, Mapping[str, float]] = field(
        default_factory=lambda: DEFAULT_MAX_VISIBLE_DISTANCE_KM
    )
    timing: Mapping[str, VisibilityTiming] = field(default_factory=lambda: DEFAULT_TIMING)
    optimal_min_km: float = 130.0
    optimal_max_km: float = 800.0
    optimal_boost: float = 1.1
    plume_altitude_km: float = 40.0
    confidence_band: int = 10
    variable_weather_band: int = 15
    variable_weather_cloud_cover: float = 0.35
    rating_thresholds: tuple[tuple[int, str], ...] = DEFAULT_RATING_THRESHOLDS

    def max_distance_km(self, lighting: str, rocket_type: str) -> float:
        table = self.max_visible_distance_km[lighting]
        return table.get(rocket_type, table[DEFAULT_ROCKET_KEY])

    def timing_for(self, rocket_type: str) -> VisibilityTiming:
        return self.timing.get(rocket_type, self.timing[DEFAULT_ROCKET_KEY])

    def band_for(self, typical_cloud_cover: float) -> int:
        if typical_cloud_cover > self.variable_weather_cloud_cover:
            return self.variable_weather_band
        return self.confidence_band

    def rating_for(self, percentage: int) -> str:
        for threshold, rating in self.rating_thresholds:
            if percentage >= threshold:
                return rating
        return "poor"

    def validate(self) -> "Calibration":
        if set(self.weights) != set(FACTORS):
            missing = sorted(set(FACTORS) - set(self.weights))
            extra = sorted(set(self.weights) - set(FACTORS))
            raise CalibrationError(
                f"Weights must cover exactly {', '.join(FACTORS)} "
                f"(missing: {missing or 'none'}, unexpected: {extra or 'none'})"
            )
        for name, w in self.weights.items():
            _require_number(w, f"weight {name}")
        if any(w < 0 for w in self.weights.values()):
            raise CalibrationError("Weights must be non-negative")
        total = sum(self.weights.values())
        if not math.isclose(total, 1.0, abs_tol=1e-6):
            raise CalibrationError(f"Weights must sum to 1.0, got {total:.6f}")
        for lighting in LIGHTING_CONDITIONS:
            table = self.max_visible_distance_km.get(lighting)
            if table is None:
                raise CalibrationError(f"Missing max visible distance table for {lighting}")
            if DEFAULT_ROCKET_KEY not in table:
                raise CalibrationError(f"Max visible distance table for {lighting} needs a default")
            for rocket, km in table.items():
                if km <= 0:
                    raise CalibrationError(
                        f"Max visible distance for {lighting}/{rocket} must be positive"
                    )
        if DEFAULT_ROCKET_KEY not in self.timing:
            raise CalibrationError("Timing table needs a default entry")
        for rocket, timing in self.timing.items():
            if timing.time_to_altitude_s < 0 or timing.total_duration_s <= 0:
                raise CalibrationError(f"Invalid timing for {rocket}")
        if not 0 < self.optimal_min_km < self.optimal_max_km:
            raise CalibrationError("optimal_min_km must be positive and below optimal_max_km")
        if self.plume_altitude_km <= 0:
            raise CalibrationError("plume_altitude_km must be positive")
        if self.optimal_boost <= 0:
            raise CalibrationError("optimal_boost must be positive")
        if not 0 <= self.variable_weather_cloud_cover <= 1:
            raise CalibrationError("variable_weather_cloud_cover must be between 0 and 1")
        if self.confidence_band < 0 or self.variable_weather_band < 0:
            raise CalibrationError("Confidence bands must be non-negative")
        return self

    def with_overrides(self, overrides: Mapping) -> "Calibration":
        _require_table(overrides, "calibration")
        unknown = set(overrides) - set(OVERRIDE_KEYS)
        if unknown:
            raise CalibrationError(
                f"Unknown calibration key(s): {', '.join(sorted(unknown))} "
                f"(expected: {', '.join(OVERRIDE_KEYS)})"
            )
        changes: dict = {}
        if "weights" in overrides:
            _require_table(overrides["weights"], "calibration.weights")
            changes["weights"] = _frozen({**self.weights, **overrides["weights"]})
        if "max_visible_distance" in overrides:
            distances = overrides["max_visible_distance"]
            _require_table(distances, "calibration.max_visible_distance")
            unknown = set(distances) - set(self.max_visible_distance_km)
            if unknown:
                raise CalibrationError(f"Unknown lighting condition(s): {', '.join(sorted(unknown))}")
            merged = {}
            for lighting, table in self.max_visible_distance_km.items():
                extra = distances.get(lighting, {})
                _require_table(extra, f"calibration.max_visible_distance.{lighting}")
                merged[lighting] = _frozen({**table, **{k: float(v) for k, v in extra.items()}})
            changes["max_visible_distance_km"] = _frozen(merged)
        for key in SCALAR_OVERRIDE_KEYS:
            if key in overrides:
                _require_number(overrides[key], f"calibration.{key}")
                changes[key] = overrides[key]
        return replace(self, **changes).validate()


# Timing and rating tables are fixed; everything else can come from config.
SCALAR_OVERRIDE_KEYS = (
    "optimal_min_km",
    "optimal_max_km",
    "optimal_boost",
    "plume_altitude_km",
    "confidence_band",
    "variable_weather_band",
    "variable_weather_cloud_cover",
)
OVERRIDE_KEYS = ("weights", "max_visible_distance") + SCALAR_OVERRIDE_KEYS


def _require_table(value, name: str) -> None:
    if not isinstance(value, Mapping):
        raise CalibrationError(f"{name} must be a table, got {type(value).__name__}")


def _require_number(value, name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise CalibrationError(f"{name} must be a number, got {type(value).__name__}")


DEFAULT_CALIBRATION = Calibration()
