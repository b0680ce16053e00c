import datetime
from zoneinfo import ZoneInfo

COMPASS_POINTS = (
    "N", "NNE", "NE", "ENE", "E", "ESE", "SE", "SSE",
    "S", "SSW", "SW", "WSW", "W", "WNW", "NW", "NNW",
)


def round_half_up(value: float) -> int:
    if value >= 0:
        return int(value + 0.5)
    return -int(-value + 0.5)


def compass_point(bearing_deg: float) -> str:
    idx = int(((bearing_deg % 360.0) + 11.25) // 22.5) % 16
    return COMPASS_POINTS[idx]


def format_bearing(bearing_deg: float, precision: int = 0) -> str:
    return f"{bearing_deg % 360.0:.{precision}f}° {compass_point(bearing_deg)}"


def format_distance(km: float, miles: float) -> str:
    return f"{round_half_up(miles)} mi ({round_half_up(km)} km)"


def format_clock(dt: datetime.datetime, tz_name: str | None = None) -> str:
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=datetime.timezone.utc)
    tz = ZoneInfo(tz_name) if tz_name else datetime.timezone.utc
    local = dt.astimezone(tz)
    hour = local.hour % 12 or 12
    suffix = "AM" if local.hour < 12 else "PM"
    return f"{hour}:{local.minute:02d} {suffix}"


def format_elevation(deg: float, precision: int = 1) -> str:
    return f"{deg:+.{precision}f}°"
