import datetime
import json
import logging
import sys
from pathlib import Path

from falconwatch.config import load_config
from falconwatch.errors import FalconwatchError
from falconwatch.util.format import round_half_up
from falconwatch.visibility import (
    ViewingLocation,
    VisibilityEngine,
    WeatherSnapshot,
    estimate_radius,
    lighting_label,
)
from falconwatch.visibility.formatters import format_text, result_to_dict


def _json_envelope(command: str, ok: bool, data=None, error=None) -> dict:
    return {
        "ok": ok,
        "command": command,
        "timestamp_utc": datetime.datetime.now(datetime.timezone.utc).isoformat(),
        "data": data,
        "error": error,
    }


def _init_logging(level: str | None) -> None:
    if not level:
        return
    level_map = {
        "debug": logging.DEBUG,
        "info": logging.INFO,
        "warn": logging.WARNING,
        "error": logging.ERROR,
    }
    logging.basicConfig(level=level_map.get(level, logging.INFO))


def _handle_error(command: str, args, code: str, exc: Exception) -> int:
    if args is not None and getattr(args, "json", False):
        payload = _json_envelope(
            command=command,
            ok=False,
            data=None,
            error={
                "code": code,
                "message": str(exc),
                "details": None,
            },
        )
        print(json.dumps(payload, indent=2))
    else:
        print(str(exc), file=sys.stderr)
    return 2


def _config_path_from_args(args) -> Path | None:
    if args is None:
        return None
    path = getattr(args, "config", None)
    return Path(path) if path else None


def _parse_launch_time(value: str | None) -> float:
    if not value:
        raise ValueError("Launch time is required (unix timestamp or ISO-8601)")
    try:
        return float(value)
    except ValueError:
        pass
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    try:
        dt = datetime.datetime.fromisoformat(value)
    except ValueError as e:
        raise ValueError(f"Invalid launch time: {value}") from e
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=datetime.timezone.utc)
    return dt.timestamp()


def _parse_location_args(args, config) -> ViewingLocation | None:
    lat = getattr(args, "latitude_deg", None)
    lon = getattr(args, "longitude_deg", None)
    if lat is None and lon is None:
        return config.viewer_location()
    if lat is None or lon is None:
        raise ValueError("Both latitude and longitude are required when specifying location")
    if not -90.0 <= lat <= 90.0 or not -180.0 <= lon <= 180.0:
        raise ValueError("Latitude must be -90 to 90, longitude -180 to 180")
    return ViewingLocation(
        latitude_deg=lat,
        longitude_deg=lon,
        name=getattr(args, "location_name", None) or "Custom Location",
        elevation_m=getattr(args, "elevation_m", None),
        is_urban=bool(getattr(args, "urban", False)),
    )


def _parse_weather_args(args) -> WeatherSnapshot | None:
    values = {
        "cloud_cover_pct": getattr(args, "cloud", None),
        "cloud_base_m": getattr(args, "cloud_base_m", None),
        "surface_visibility_km": getattr(args, "visibility_km", None),
        "aqi": getattr(args, "aqi", None),
        "upper_wind_speed_ms": getattr(args, "upper_wind", None),
        "upper_humidity_pct": getattr(args, "upper_humidity", None),
    }
    if all(v is None for v in values.values()):
        return None
    return WeatherSnapshot(**values)


def run_visibility(args) -> int:
    _init_logging(getattr(args, "log_level", None))
    try:
        config = load_config(_config_path_from_args(args))
        engine = VisibilityEngine(calibration=config.calibration())
        launch_time = _parse_launch_time(args.launch_time)
        location = _parse_location_args(args, config)
        weather = _parse_weather_args(args)
        result = engine.calculate(
            launch_time,
            args.mission,
            None,
            weather,
            viewing_location=location,
            site_id=args.site or config.default_site_id,
        )
    except FileNotFoundError as e:
        return _handle_error("visibility", args, "config_not_found", e)
    except ValueError as e:
        return _handle_error("visibility", args, "invalid_input", e)
    except FalconwatchError as e:
        return _handle_error("visibility", args, "config_error", e)

    if getattr(args, "json", False):
        payload = _json_envelope(
            command="visibility",
            ok=True,
            data=result_to_dict(result),
            error=None,
        )
        print(json.dumps(payload, indent=2, default=str))
    else:
        print(format_text(result, mission_name=args.mission, verbose=getattr(args, "verbose", False)))
    return 0


def run_radius(args) -> int:
    _init_logging(getattr(args, "log_level", None))
    try:
        config = load_config(_config_path_from_args(args))
        engine = VisibilityEngine(calibration=config.calibration())
        launch_time = _parse_launch_time(args.launch_time)
        location = _parse_location_args(args, config)
        site = engine.sites.resolve(args.site or config.default_site_id)
        lat = location.latitude_deg if location else site.latitude_deg
        lon = location.longitude_deg if location else site.longitude_deg
        estimate = estimate_radius(launch_time, args.mission, lat, lon, engine.calibration)
    except FileNotFoundError as e:
        return _handle_error("radius", args, "config_not_found", e)
    except ValueError as e:
        return _handle_error("radius", args, "invalid_input", e)
    except FalconwatchError as e:
        return _handle_error("radius", args, "config_error", e)

    data = {
        "site_id": site.id,
        "center": [site.latitude_deg, site.longitude_deg],
        "solar_elevation_deg": estimate.solar_elevation_deg,
        "lighting": estimate.lighting,
        "rocket_type": estimate.rocket_type,
        "radius_km": estimate.radius_km,
        "radius_miles": estimate.radius_miles,
    }
    if getattr(args, "json", False):
        print(json.dumps(_json_envelope(command="radius", ok=True, data=data), indent=2))
    else:
        print(
            f"{site.name}: {estimate.rocket_type} visible up to "
            f"{round_half_up(estimate.radius_km)} km ({round_half_up(estimate.radius_miles)} mi) "
            f"in {lighting_label(estimate.lighting)} conditions"
        )
    return 0


def _site_to_dict(site) -> dict:
    return {
        "id": site.id,
        "name": site.name,
        "latitude_deg": site.latitude_deg,
        "longitude_deg": site.longitude_deg,
        "elevation_m": site.elevation_m,
        "timezone": site.timezone,
        "default_azimuth_deg": site.default_azimuth_deg,
        "mission_azimuths": dict(site.mission_azimuths),
        "direction_hint": site.direction_hint,
        "modifiers": {
            "humidity_penalty": site.modifiers.humidity_penalty,
            "typical_cloud_cover": site.modifiers.typical_cloud_cover,
            "coastal_fog_factor": site.modifiers.coastal_fog_factor,
            "light_pollution_base": site.modifiers.light_pollution_base,
        },
    }


def run_sites(args) -> int:
    _init_logging(getattr(args, "log_level", None))
    engine = VisibilityEngine()
    sites = list(engine.sites)
    if getattr(args, "json", False):
        data = {"sites": [_site_to_dict(s) for s in sites]}
        print(json.dumps(_json_envelope(command="sites", ok=True, data=data), indent=2))
        return 0
    print("Launch Sites")
    print("============")
    for site in sites:
        print(
            f"{site.id:16} {site.name:22} lat {site.latitude_deg:8.4f}  "
            f"lon {site.longitude_deg:9.4f}  heads {site.direction_hint}"
        )
    return 0
