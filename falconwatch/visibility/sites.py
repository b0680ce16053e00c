"""Launch site registry.

Azimuths follow azimuth = arcsin(cos(inclination) / cos(latitude)) checked
against NOTAM closure corridors. Visibility modifiers come from NOAA
1991-2020 climate normals (KVBG, KXMR, KBRO) and the Falchi et al. 2016
light pollution atlas. Pad coordinates are from FAA licensing documents.
"""

import logging
from types import MappingProxyType
from typing import Iterable, Mapping

from falconwatch.errors import UnknownSiteError
from .types import LaunchSite, VisibilityModifiers

logger = logging.getLogger(__name__)

DEFAULT_SITE_ID = "vandenberg"


VANDENBERG = LaunchSite(
    id="vandenberg",
    name="Vandenberg SFB",
    short_name="Vandenberg",
    latitude_deg=34.6321,
    longitude_deg=-120.6107,
    elevation_m=112.0,
    timezone="America/Los_Angeles",
    # SSO at 97.6 deg inclination flies 188-192 deg per FCC filings.
    default_azimuth_deg=190.0,
    mission_azimuths=MappingProxyType(
        {
            "polar": 180.0,
            "sso": 190.0,
            "retrograde": 190.0,
            "starlink": 190.0,
            "nrol": 190.0,
        }
    ),
    # Clean Pacific air, Bortle 3-4, but 65-85 marine fog days a year.
    modifiers=VisibilityModifiers(
        humidity_penalty=0.05,
        typical_cloud_cover=0.25,
        coastal_fog_factor=0.15,
        light_pollution_base=0.05,
    ),
    direction_hint="south-southwest",
    ll2_location_ids=(11,),
    ll2_pad_ids=(16, 11),
    pad_name_patterns=("slc-4", "vandenberg"),
    trajectory_points=(
        (34.632, -120.611),
        (34.579, -120.622),
        (34.190, -120.705),
        (33.791, -120.790),
        (32.951, -120.968),
        (31.889, -121.194),
    ),
    map_center=(34.6321, -120.6107),
)

CAPE_CANAVERAL = LaunchSite(
    id="cape-canaveral",
    name="Cape Canaveral SFS",
    short_name="Cape Canaveral",
    latitude_deg=28.5620,
    longitude_deg=-80.5772,
    elevation_m=3.0,
    timezone="America/New_York",
    # Starlink 53 deg shell dominates the Cape manifest.
    default_azimuth_deg=43.0,
    mission_azimuths=MappingProxyType(
        {
            "iss": 45.0,
            "crew": 45.0,
            "starlink": 43.0,
            "starlink_v2": 56.0,
            "gto": 90.0,
            "geo": 90.0,
            "polar": 180.0,
        }
    ),
    # Subtropical maritime humidity and the Orlando light dome (Bortle 5-6).
    modifiers=VisibilityModifiers(
        humidity_penalty=0.20,
        typical_cloud_cover=0.40,
        coastal_fog_factor=0.05,
        light_pollution_base=0.10,
    ),
    direction_hint="east-northeast",
    ll2_location_ids=(12,),
    ll2_pad_ids=(87, 80),
    pad_name_patterns=("slc-40", "lc-39", "cape canaveral", "kennedy"),
    trajectory_points=(
        (28.562, -80.577),
        (28.601, -80.535),
        (28.923, -80.194),
        (29.219, -79.880),
        (29.745, -79.323),
        (30.862, -78.139),
    ),
    map_center=(28.5620, -80.5772),
)

BOCA_CHICA = LaunchSite(
    id="boca-chica",
    name="Starbase",
    short_name="Starbase",
    latitude_deg=25.9972,
    longitude_deg=-97.1571,
    elevation_m=2.0,
    timezone="America/Chicago",
    # 7 deg south of due east per the FAA Starship/Super Heavy EIS.
    default_azimuth_deg=97.0,
    mission_azimuths=MappingProxyType(
        {
            "orbital": 97.0,
            "starship": 97.0,
        }
    ),
    modifiers=VisibilityModifiers(
        humidity_penalty=0.15,
        typical_cloud_cover=0.35,
        coastal_fog_factor=0.08,
        light_pollution_base=0.05,
    ),
    direction_hint="east-southeast",
    ll2_location_ids=(143,),
    ll2_pad_ids=(187, 188),
    pad_name_patterns=("starbase", "boca chica"),
    trajectory_points=(
        (25.997, -97.157),
        (25.994, -97.127),
        (25.959, -96.810),
        (25.909, -96.364),
        (25.810, -95.470),
        (25.712, -94.578),
    ),
    map_center=(25.9972, -97.1571),
)


class SiteRegistry:
    def __init__(self, sites: Iterable[LaunchSite], default_id: str = DEFAULT_SITE_ID):
        self._sites: Mapping[str, LaunchSite] = MappingProxyType({s.id: s for s in sites})
        if default_id not in self._sites:
            raise UnknownSiteError(f"Default site not registered: {default_id}")
        self._default_id = default_id

    @property
    def default(self) -> LaunchSite:
        return self._sites[self._default_id]

    def ids(self) -> list[str]:
        return list(self._sites)

    def get(self, site_id: str | None) -> LaunchSite | None:
        if not site_id:
            return None
        return self._sites.get(site_id)

    def require(self, site_id: str) -> LaunchSite:
        site = self.get(site_id)
        if site is None:
            raise UnknownSiteError(f"Unknown launch site: {site_id}")
        return site

    def resolve(self, site_id: str | None) -> LaunchSite:
        site = self.get(site_id)
        if site is None:
            if site_id:
                logger.warning(
                    "Unknown launch site %r, falling back to %s", site_id, self._default_id
                )
            return self.default
        return site

    def for_pad(self, pad_id: int | None, pad_name: str | None = None) -> LaunchSite | None:
        if pad_id is not None:
            for site in self._sites.values():
                if pad_id in site.ll2_pad_ids:
                    return site
        if pad_name:
            name = pad_name.lower()
            # Longest pattern wins: "slc-40" must not resolve via "slc-4".
            matches = [
                (len(p), site)
                for site in self._sites.values()
                for p in site.pad_name_patterns
                if p in name
            ]
            if matches:
                return max(matches, key=lambda m: m[0])[1]
        return None

    def __iter__(self):
        return iter(self._sites.values())

    def __len__(self) -> int:
        return len(self._sites)


LAUNCH_SITES = SiteRegistry((VANDENBERG, CAPE_CANAVERAL, BOCA_CHICA))


def get_launch_site(site_id: str | None) -> LaunchSite | None:
    return LAUNCH_SITES.get(site_id)


def site_for_pad(pad_id: int | None, pad_name: str | None = None) -> LaunchSite | None:
    return LAUNCH_SITES.for_pad(pad_id, pad_name)


def all_site_ids() -> list[str]:
    return LAUNCH_SITES.ids()
