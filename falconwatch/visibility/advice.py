import datetime
from typing import Mapping

from falconwatch.util.format import format_clock, round_half_up
from .astro import twilight_type
from .calibration import VisibilityTiming
from .classify import SMALL_ROCKET, STARSHIP
from .geo import km_to_miles
from .scoring import CloudAssessment
from .types import LaunchSite, LimitingFactor, SubScores, VisibilityWindow

RANKED_FACTORS = ("cloud", "sun", "distance", "clarity", "plume")
AT_PAD_KM = 5.0

BLOCKED_FOLLOW_UP = "Consider a different viewing location or wait for better conditions."

SITE_DIRECTIONS = {
    "cape-canaveral": "Look east-northeast over the Atlantic",
    "boca-chica": "Look east over the Gulf of Mexico",
    "vandenberg": "Look south along the coast",
}


def limiting_factors(
    *,
    sub_scores: SubScores,
    weights: Mapping[str, float],
    cloud: CloudAssessment,
    cloud_cover_pct: float,
    solar_elevation: float,
    distance_km: float,
    surface_visibility_km: float,
    site: LaunchSite,
) -> list[LimitingFactor]:
    descriptions = {
        "cloud": f"Cloud cover at {cloud_cover_pct:.0f}% is reducing visibility",
        "sun": (
            f"Solar angle of {solar_elevation:.1f}° is not optimal "
            f"({twilight_type(solar_elevation)})"
        ),
        "distance": f"Distance of {round_half_up(km_to_miles(distance_km))} miles from {site.name}",
        "clarity": (
            f"Atmospheric clarity is limited "
            f"({round_half_up(km_to_miles(surface_visibility_km))} miles visibility)"
        ),
        "plume": "Atmospheric conditions may cause plume to disperse quickly",
    }
    ranked = sorted(
        RANKED_FACTORS,
        key=lambda name: getattr(sub_scores, name) * weights[name],
    )
    factors: list[LimitingFactor] = []
    for name in ranked[:2]:
        score = getattr(sub_scores, name)
        if score < 0.5:
            factors.append(
                LimitingFactor(
                    factor=name,
                    description=descriptions[name],
                    severity="major" if score < 0.3 else "minor",
                )
            )
    if cloud.reason and not cloud.is_fatal:
        factors.insert(
            0,
            LimitingFactor(
                factor="cloud",
                description=cloud.reason,
                severity="major" if sub_scores.cloud < 0.3 else "minor",
            ),
        )
    return factors


def viewing_window(
    launch_time_unix: float,
    solar_elevation: float,
    sun_score: float,
    timing: VisibilityTiming,
    tz_name: str,
) -> VisibilityWindow:
    if sun_score < 0.2:
        return VisibilityWindow(
            start_utc=None,
            end_utc=None,
            start_formatted=None,
            end_formatted=None,
            duration_min=0,
            description=(
                "Daytime launch - rocket exhaust will be very difficult to see "
                "against bright sky"
            ),
        )
    launch = datetime.datetime.fromtimestamp(launch_time_unix, tz=datetime.timezone.utc)
    start = launch + datetime.timedelta(seconds=timing.time_to_altitude_s)
    end = start + datetime.timedelta(seconds=timing.total_duration_s)
    start_fmt = format_clock(start, tz_name)
    end_fmt = format_clock(end, tz_name)
    band = twilight_type(solar_elevation)
    if band in ("civil", "nautical"):
        description = (
            f"Optimal twilight viewing {start_fmt} - {end_fmt}. "
            "Plume will be illuminated against dark sky."
        )
    elif band in ("astronomical", "night"):
        description = (
            f"Night launch visible {start_fmt} - {end_fmt}. "
            "Exhaust plume will glow against dark sky."
        )
    else:
        description = (
            f"Estimated visible {start_fmt} - {end_fmt}. "
            "Sun angle may reduce contrast."
        )
    return VisibilityWindow(
        start_utc=start,
        end_utc=end,
        start_formatted=start_fmt,
        end_formatted=end_fmt,
        duration_min=round_half_up(timing.total_duration_s / 60.0),
        description=description,
    )


def site_direction_text(site: LaunchSite) -> str:
    return SITE_DIRECTIONS.get(site.id, f"Look {site.direction_hint}")


def site_tips(site: LaunchSite, mission_name: str) -> list[str]:
    name = mission_name.lower()
    tips: list[str] = []
    if site.id == "cape-canaveral":
        tips.append(
            "Florida humidity (annual mean 74-78% RH) can create haze that reduces "
            "clarity, especially in summer."
        )
    elif site.id == "boca-chica":
        if "starship" in name:
            tips.append(
                "Starship's 33 Raptor engines produce the largest plume of any active "
                "rocket, visible from much farther than Falcon 9."
            )
        tips.append("Gulf moisture may create haze; spring months typically offer the clearest viewing.")
    elif site.id == "vandenberg":
        tips.append(
            "Marine fog (65-85 days/yr) may affect the launch site, but typically "
            "clears by afternoon for evening launches."
        )
        if "starlink" in name:
            tips.append(
                "Vandenberg Starlink missions are polar-orbit (97.6° inclination), "
                "heading south along the coast."
            )
    return tips


def trust_note(lighting: str, rocket_type: str) -> str:
    if rocket_type == SMALL_ROCKET:
        return (
            "Small launchers are far dimmer than Falcon 9; this score assumes you "
            "know where to look and expect a faint moving point of light."
        )
    if lighting == "twilight":
        if rocket_type == STARSHIP:
            return (
                "Starship has not yet flown at twilight; its range is scaled from plume "
                "size and Space Shuttle twilight sightings at 500-600 miles."
            )
        return (
            "This estimate is grounded in documented twilight sightings, such as "
            "SAOCOM-1A seen from Phoenix at roughly 500 miles."
        )
    if lighting == "night":
        return (
            "Night estimates follow observer reports of exhaust glow, which carries "
            "about half as far as a sunlit twilight plume."
        )
    return (
        "Daytime estimates follow community reports: easy to spot within ~50 miles, "
        "possible with effort out to ~125 miles."
    )


def recommendations(
    *,
    lighting: str,
    solar_elevation: float,
    sub_scores: SubScores,
    distance_km: float,
    aqi: float | None,
    site: LaunchSite,
    mission_name: str,
    rocket_type: str,
    blocker: str | None,
) -> list[str]:
    if blocker:
        return [blocker, BLOCKED_FOLLOW_UP]

    recs: list[str] = []
    if lighting == "twilight":
        if -12.0 <= solar_elevation <= -6.0:
            recs.append(
                "Optimal twilight timing! Look for the 'space jellyfish' effect - the "
                "plume will glow brilliantly against the dark sky."
            )
        else:
            recs.append(
                "Good twilight conditions. The rocket plume should be clearly visible, "
                "potentially illuminated by sunlight at altitude."
            )
    elif lighting == "night":
        recs.append(
            "Night launch - look for the rocket's exhaust glow against the dark sky. "
            "Less dramatic than twilight but still visible."
        )
    else:
        recs.append(
            "Daytime launch has limited visibility due to bright sky. Twilight launches "
            "(30-60 min after sunset) are visible 5-10x farther."
        )

    if sub_scores.cloud < 0.5:
        recs.append("Cloud cover may obstruct viewing. Check conditions closer to launch time.")

    miles = round_half_up(km_to_miles(distance_km))
    direction = site_direction_text(site)
    if distance_km < AT_PAD_KM:
        recs.append(
            f"You are at {site.short_name} itself. Set a viewing location for a "
            f"personalised estimate; from the pad, watch {site.direction_hint} after liftoff."
        )
    elif miles <= 200:
        recs.append(
            f"At {miles} miles, you're very close. The rocket should be clearly visible "
            "rising from the horizon."
        )
    elif miles <= 500:
        recs.append(f"At {miles} miles, you're at an optimal viewing distance. {direction}.")
    elif sub_scores.distance > 0:
        recs.append(
            f"At {miles} miles, binoculars or a camera with zoom will help spot the rocket. "
            f"{direction}, low on the horizon."
        )

    if sub_scores.clarity < 0.5 and aqi is not None and aqi > 100:
        recs.append("Air quality is reducing visibility. Consider a higher elevation viewing spot.")

    recs.extend(site_tips(site, mission_name))
    recs.append(trust_note(lighting, rocket_type))
    return recs
