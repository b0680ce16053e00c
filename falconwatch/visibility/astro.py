import math

UNIX_EPOCH_JD = 2440587.5
J2000_JD = 2451545.0


def julian_date(timestamp: float) -> float:
    return timestamp / 86400.0 + UNIX_EPOCH_JD


def _normalize_angle_rad(angle: float) -> float:
    return angle % (2.0 * math.pi)


def _gmst_rad(timestamp: float) -> float:
    d = julian_date(timestamp) - J2000_JD
    gmst_hours = 18.697374558 + 24.06570982441908 * d
    return _normalize_angle_rad(math.radians((gmst_hours % 24.0) * 15.0))


def local_sidereal_time_rad(timestamp: float, longitude_deg: float) -> float:
    return _normalize_angle_rad(_gmst_rad(timestamp) + math.radians(longitude_deg))


def sun_ra_dec_rad(timestamp: float) -> tuple[float, float]:
    n = julian_date(timestamp) - J2000_JD
    l = math.radians((280.460 + 0.9856474 * n) % 360.0)
    g = math.radians((357.528 + 0.9856003 * n) % 360.0)
    lam = l + math.radians(1.915) * math.sin(g) + math.radians(0.020) * math.sin(2 * g)
    eps = math.radians(23.439 - 0.0000004 * n)
    ra = math.atan2(math.cos(eps) * math.sin(lam), math.cos(lam))
    dec = math.asin(math.sin(eps) * math.sin(lam))
    return _normalize_angle_rad(ra), dec


def ra_dec_to_alt_az(
    ra_rad: float,
    dec_rad: float,
    lat_rad: float,
    lon_deg: float,
    timestamp: float,
) -> tuple[float, float]:
    lst = local_sidereal_time_rad(timestamp, lon_deg)
    ha = _normalize_angle_rad(lst - ra_rad)
    sin_alt = math.sin(dec_rad) * math.sin(lat_rad) + math.cos(dec_rad) * math.cos(lat_rad) * math.cos(ha)
    alt = math.asin(max(-1.0, min(1.0, sin_alt)))
    az = math.atan2(
        -math.sin(ha),
        math.tan(dec_rad) * math.cos(lat_rad) - math.sin(lat_rad) * math.cos(ha),
    )
    return alt, _normalize_angle_rad(az)


def solar_elevation_deg(latitude_deg: float, longitude_deg: float, timestamp: float) -> float:
    """Low-precision solar elevation in degrees for a unix timestamp.

    Good to a few tenths of a degree, which is plenty for twilight bands.
    """
    ra, dec = sun_ra_dec_rad(timestamp)
    alt, _ = ra_dec_to_alt_az(ra, dec, math.radians(latitude_deg), longitude_deg, timestamp)
    return math.degrees(alt)


def twilight_type(solar_elevation: float) -> str:
    if solar_elevation > 0:
        return "day"
    if solar_elevation > -6:
        return "civil"
    if solar_elevation > -12:
        return "nautical"
    if solar_elevation > -18:
        return "astronomical"
    return "night"


def lighting_condition(solar_elevation: float) -> str:
    if -18.0 <= solar_elevation <= 0.0:
        return "twilight"
    if solar_elevation < -18.0:
        return "night"
    return "day"
