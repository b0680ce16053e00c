import logging
from typing import Sequence

from falconwatch.util.format import round_half_up
from .advice import limiting_factors, recommendations, viewing_window
from .astro import lighting_condition, solar_elevation_deg, twilight_type
from .blockers import DEFAULT_RULES, BlockerContext, BlockerRule, find_blocker
from .calibration import DEFAULT_CALIBRATION, Calibration
from .classify import MissionClassifier, classify_mission
from .geo import distance_km, initial_bearing_deg, km_to_miles
from .scoring import (
    score_bearing,
    score_brightness,
    score_clarity,
    score_cloud,
    score_distance,
    score_obstruction,
    score_plume,
    score_sun,
)
from .sites import LAUNCH_SITES, SiteRegistry
from .types import (
    Confidence,
    LimitingFactor,
    RawData,
    ResolvedViewer,
    SubScores,
    ViewingLocation,
    VisibilityFactors,
    VisibilityResult,
)
from .weather import WeatherSnapshot

logger = logging.getLogger(__name__)

BLOCKED_MAX_PERCENTAGE = 5


class VisibilityEngine:
    """Scores how likely a launch is to be seen from a viewing location.

    The engine holds only immutable calibration and site data, so a single
    instance can be shared across threads.
    """

    def __init__(
        self,
        calibration: Calibration | None = None,
        sites: SiteRegistry | None = None,
        classifier: MissionClassifier | None = None,
        blocker_rules: Sequence[BlockerRule] = DEFAULT_RULES,
    ):
        self._calibration = (calibration or DEFAULT_CALIBRATION).validate()
        self._sites = sites or LAUNCH_SITES
        self._classify = classifier or classify_mission
        self._blocker_rules = tuple(blocker_rules)

    @property
    def calibration(self) -> Calibration:
        return self._calibration

    @property
    def sites(self) -> SiteRegistry:
        return self._sites

    def calculate(
        self,
        launch_time_unix: float,
        mission_name: str,
        weather_launch_site: WeatherSnapshot | None,
        weather_viewing: WeatherSnapshot | None,
        viewing_location: ViewingLocation | None = None,
        site_id: str | None = None,
    ) -> VisibilityResult:
        cal = self._calibration
        site = self._sites.resolve(site_id)
        viewer = viewing_location or ViewingLocation(
            latitude_deg=site.latitude_deg,
            longitude_deg=site.longitude_deg,
            name=site.name,
            elevation_m=site.elevation_m,
            is_urban=False,
        )
        # Without a viewer the viewer is the pad, so the pad weather applies.
        weather = weather_viewing
        if weather is None and viewing_location is None:
            weather = weather_launch_site
        weather = weather or WeatherSnapshot()

        dist_km = distance_km(viewer.latitude_deg, viewer.longitude_deg, site.latitude_deg, site.longitude_deg)
        bearing = initial_bearing_deg(viewer.latitude_deg, viewer.longitude_deg, site.latitude_deg, site.longitude_deg)
        solar_elev = solar_elevation_deg(viewer.latitude_deg, viewer.longitude_deg, launch_time_unix)

        mission = self._classify(mission_name, site)
        lighting = lighting_condition(solar_elev)
        max_km = cal.max_distance_km(lighting, mission.rocket_type)

        cloud_cover = weather.effective_cloud_cover_pct
        visibility_km = weather.effective_visibility_km

        cloud = score_cloud(cloud_cover, weather.cloud_base_m, cal.plume_altitude_km * 1000.0)
        sub_scores = SubScores(
            cloud=cloud.score,
            sun=score_sun(solar_elev),
            distance=score_distance(
                dist_km,
                max_km,
                optimal_min_km=cal.optimal_min_km,
                optimal_max_km=cal.optimal_max_km,
                optimal_boost=cal.optimal_boost,
            ),
            bearing=score_bearing(bearing, mission.azimuth_deg),
            clarity=score_clarity(visibility_km, weather.aqi, site.modifiers.humidity_penalty),
            plume=score_plume(weather.upper_humidity_pct, weather.upper_wind_speed_ms),
            brightness=score_brightness(
                mission.rocket_type,
                starlink=mission.is_starlink,
                crewed=mission.is_crewed,
            ),
            obstruction=score_obstruction(
                viewer.is_urban,
                viewer.elevation_m,
                site.modifiers.light_pollution_base,
            ),
        )

        blocker = find_blocker(
            BlockerContext(
                cloud=cloud,
                sun_score=sub_scores.sun,
                distance_score=sub_scores.distance,
                distance_km=dist_km,
                max_visible_km=max_km,
                lighting=lighting,
                site_name=site.name,
            ),
            self._blocker_rules,
        )
        blocker_message = blocker.message if blocker else None

        percentage = max(0, min(100, round_half_up(sub_scores.total(cal.weights) * 100.0)))
        if blocker:
            percentage = min(percentage, BLOCKED_MAX_PERCENTAGE)
            rating = "poor"
        else:
            rating = cal.rating_for(percentage)

        band = cal.band_for(site.modifiers.typical_cloud_cover)
        confidence = Confidence(low=max(0, percentage - band), high=min(100, percentage + band))

        if blocker:
            factors = [LimitingFactor(factor="fatal", description=blocker.message, severity="critical")]
        else:
            factors = limiting_factors(
                sub_scores=sub_scores,
                weights=cal.weights,
                cloud=cloud,
                cloud_cover_pct=cloud_cover,
                solar_elevation=solar_elev,
                distance_km=dist_km,
                surface_visibility_km=visibility_km,
                site=site,
            )

        window = viewing_window(
            launch_time_unix,
            solar_elev,
            sub_scores.sun,
            cal.timing_for(mission.rocket_type),
            site.timezone,
        )
        recs = recommendations(
            lighting=lighting,
            solar_elevation=solar_elev,
            sub_scores=sub_scores,
            distance_km=dist_km,
            aqi=weather.aqi,
            site=site,
            mission_name=mission_name,
            rocket_type=mission.rocket_type,
            blocker=blocker_message,
        )

        logger.debug(
            "site=%s distance_km=%.1f solar_elevation=%.2f rocket=%s score=%d blocker=%s",
            site.id,
            dist_km,
            solar_elev,
            mission.rocket_type,
            percentage,
            blocker.name if blocker else None,
        )

        raw = RawData(
            cloud_fraction_pct=cloud_cover,
            cloud_base_m=weather.cloud_base_m,
            solar_elevation_deg=solar_elev,
            twilight=twilight_type(solar_elev),
            lighting=lighting,
            distance_km=dist_km,
            bearing_deg=bearing,
            max_visible_distance_km=max_km,
            trajectory_azimuth_deg=mission.azimuth_deg,
            surface_visibility_km=visibility_km,
            aqi=weather.aqi,
            upper_wind_speed_ms=weather.upper_wind_speed_ms,
            upper_humidity_pct=weather.upper_humidity_pct,
            rocket_type=mission.rocket_type,
            obstruction_factor=1.0 - sub_scores.obstruction,
        )
        return VisibilityResult(
            percentage=percentage,
            rating=rating,
            confidence=confidence,
            factors=VisibilityFactors(sub_scores=sub_scores, weights=dict(cal.weights), raw=raw),
            limiting_factors=tuple(factors),
            optimal_window=window,
            recommendations=tuple(recs),
            viewing_location=ResolvedViewer(
                name=viewer.name,
                distance_miles=round_half_up(km_to_miles(dist_km)),
                distance_km=round_half_up(dist_km),
                bearing_deg=round_half_up(bearing) % 360,
            ),
            site_id=site.id,
            fatal_blocker=blocker_message,
        )


_DEFAULT_ENGINE: VisibilityEngine | None = None


def default_engine() -> VisibilityEngine:
    global _DEFAULT_ENGINE
    if _DEFAULT_ENGINE is None:
        _DEFAULT_ENGINE = VisibilityEngine()
    return _DEFAULT_ENGINE


def calculate_visibility(
    launch_time_unix: float,
    mission_name: str,
    weather_launch_site: WeatherSnapshot | None,
    weather_viewing: WeatherSnapshot | None,
    viewing_location: ViewingLocation | None = None,
    site_id: str | None = None,
) -> VisibilityResult:
    return default_engine().calculate(
        launch_time_unix,
        mission_name,
        weather_launch_site,
        weather_viewing,
        viewing_location,
        site_id,
    )
