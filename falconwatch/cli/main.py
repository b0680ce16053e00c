import argparse
import sys

from falconwatch import __version__
from falconwatch.cli.commands import run_radius, run_sites, run_visibility


def _add_common_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--config", help="Path to config.toml")
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warn", "error"],
        help="Enable logging at the given level",
    )
    parser.add_argument("--json", action="store_true", help="Output result as JSON")


def _add_launch_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--launch-time",
        required=True,
        help="Launch time as a unix timestamp or ISO-8601 (UTC if no offset)",
    )
    parser.add_argument("--mission", default="Unknown Mission", help="Mission name")
    parser.add_argument("--site", default=None, help="Launch site id (default from config)")
    parser.add_argument("--lat", dest="latitude_deg", type=float, help="Viewer latitude")
    parser.add_argument("--lon", dest="longitude_deg", type=float, help="Viewer longitude")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="falconwatch")
    parser.add_argument("--version", action="store_true", help="Show version and exit")

    subparsers = parser.add_subparsers(dest="command")

    vis_parser = subparsers.add_parser("visibility", help="Score launch visibility for a viewer")
    _add_common_args(vis_parser)
    _add_launch_args(vis_parser)
    vis_parser.add_argument("--location-name", help="Display name for the viewing location")
    vis_parser.add_argument("--elevation-m", type=float, help="Viewer elevation in metres")
    vis_parser.add_argument("--urban", action="store_true", help="Viewer is in an urban area")
    vis_parser.add_argument("--cloud", type=float, help="Cloud cover percentage (0-100)")
    vis_parser.add_argument("--cloud-base-m", type=float, help="Cloud base altitude in metres")
    vis_parser.add_argument("--visibility-km", type=float, help="Surface visibility in km")
    vis_parser.add_argument("--aqi", type=float, help="Air quality index")
    vis_parser.add_argument("--upper-wind", type=float, help="Wind speed at ~10 km in m/s")
    vis_parser.add_argument("--upper-humidity", type=float, help="Relative humidity at ~10 km (%%)")
    vis_parser.add_argument("--verbose", action="store_true", help="Show every factor score")

    radius_parser = subparsers.add_parser("radius", help="Show the maximum visible radius")
    _add_common_args(radius_parser)
    _add_launch_args(radius_parser)

    sites_parser = subparsers.add_parser("sites", help="List known launch sites")
    _add_common_args(sites_parser)
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(f"Falconwatch {__version__}")
        return 0

    if args.command == "visibility":
        return run_visibility(args)

    if args.command == "radius":
        return run_radius(args)

    if args.command == "sites":
        return run_sites(args)

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
