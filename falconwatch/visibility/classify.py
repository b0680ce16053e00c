"""Mission-name heuristics.

Launch schedules do not carry the ground-track direction or the vehicle
variant, so both are inferred from naming conventions. Everything here is
``str -> classification`` so a lookup table can replace it later.
"""

from dataclasses import dataclass
from typing import Callable

from .types import LaunchSite

FALCON_9 = "falcon9"
FALCON_HEAVY = "falconHeavy"
STARSHIP = "starship"
SMALL_ROCKET = "smallRocket"

# (keywords, site mission-azimuth key), first match with a site override wins.
AZIMUTH_RULES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("starlink",), "starlink"),
    (("nrol", "usa-"), "nrol"),
    (("transporter",), "sso"),
    (("sda ", "tranche"), "sso"),
    (("crew", "dragon"), "crew"),
    (("iss",), "iss"),
    (("worldview", "planet", "iceye", "capella"), "sso"),
    (("iridium",), "polar"),
    (("starship",), "starship"),
)

ROCKET_RULES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("falcon heavy", "fh"), FALCON_HEAVY),
    (("starship",), STARSHIP),
    (("electron", "rocket lab"), SMALL_ROCKET),
)


@dataclass(frozen=True)
class MissionProfile:
    rocket_type: str
    azimuth_deg: float
    is_starlink: bool
    is_crewed: bool


def detect_rocket_type(mission_name: str) -> str:
    name = mission_name.lower()
    for keywords, rocket_type in ROCKET_RULES:
        if any(k in name for k in keywords):
            return rocket_type
    return FALCON_9


def detect_launch_azimuth(mission_name: str, site: LaunchSite) -> float:
    name = mission_name.lower()
    for keywords, key in AZIMUTH_RULES:
        if key in site.mission_azimuths and any(k in name for k in keywords):
            return site.mission_azimuths[key]
    return site.default_azimuth_deg


def is_starlink(mission_name: str) -> bool:
    return "starlink" in mission_name.lower()


def is_crewed(mission_name: str) -> bool:
    name = mission_name.lower()
    return "crew" in name or "dragon" in name


def classify_mission(mission_name: str, site: LaunchSite) -> MissionProfile:
    return MissionProfile(
        rocket_type=detect_rocket_type(mission_name),
        azimuth_deg=detect_launch_azimuth(mission_name, site),
        is_starlink=is_starlink(mission_name),
        is_crewed=is_crewed(mission_name),
    )


MissionClassifier = Callable[[str, LaunchSite], MissionProfile]
