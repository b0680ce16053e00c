from dataclasses import asdict

from falconwatch.util.format import format_bearing, format_distance, format_elevation, round_half_up
from .geo import km_to_miles
from .types import VisibilityResult

SCORE_BAR_WIDTH = 20


def result_to_dict(result: VisibilityResult) -> dict:
    return asdict(result)


def format_text(result: VisibilityResult, mission_name: str | None = None, verbose: bool = False) -> str:
    lines: list[str] = []
    raw = result.factors.raw
    title = f"Launch Visibility: {mission_name}" if mission_name else "Launch Visibility"
    lines.append(title)
    lines.append("=" * len(title))
    lines.append(f"Score: {result.percentage}% ({result.rating})")
    lines.append(f"Confidence: {result.confidence.low}-{result.confidence.high}%")
    viewer = result.viewing_location
    lines.append(
        f"Viewer: {viewer.name}, {format_distance(raw.distance_km, km_to_miles(raw.distance_km))} "
        f"from {result.site_id}, site bearing {format_bearing(raw.bearing_deg)}"
    )
    lines.append(
        f"Sky: sun {format_elevation(raw.solar_elevation_deg)} ({raw.twilight}), "
        f"max range {round_half_up(raw.max_visible_distance_km)} km for {raw.rocket_type}"
    )
    if result.fatal_blocker:
        lines.append("")
        lines.append(f"Blocked: {result.fatal_blocker}")

    window = result.optimal_window
    lines.append("")
    lines.append("Viewing window")
    lines.append("--------------")
    lines.append(window.description)

    if result.limiting_factors:
        lines.append("")
        lines.append("Limiting factors")
        lines.append("----------------")
        for factor in result.limiting_factors:
            lines.append(f" - [{factor.severity}] {factor.description}")

    if verbose:
        weights = result.factors.weights
        lines.append("")
        lines.append("Factors")
        lines.append("-------")
        for name, score in result.factors.sub_scores.as_dict().items():
            filled = round_half_up(score * SCORE_BAR_WIDTH)
            bar = "#" * filled + "." * (SCORE_BAR_WIDTH - filled)
            lines.append(f"{name:12} {bar}  {score:.2f} x {weights[name]:.2f}")

    if result.recommendations:
        lines.append("")
        lines.append("Recommendations")
        lines.append("---------------")
        for rec in result.recommendations:
            lines.append(f" * {rec}")
    return "\n".join(lines)
