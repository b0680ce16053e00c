from dataclasses import dataclass
from typing import Callable, Sequence

from falconwatch.util.format import round_half_up
from .geo import km_to_miles
from .radius import lighting_label
from .scoring import CloudAssessment


@dataclass(frozen=True)
class BlockerContext:
    cloud: CloudAssessment
    sun_score: float
    distance_score: float
    distance_km: float
    max_visible_km: float
    lighting: str
    site_name: str


@dataclass(frozen=True)
class BlockerRule:
    name: str
    applies: Callable[[BlockerContext], bool]
    message: Callable[[BlockerContext], str]


@dataclass(frozen=True)
class Blocker:
    name: str
    message: str


def _cloud_message(ctx: BlockerContext) -> str:
    return ctx.cloud.reason or "Heavy cloud or fog blocking the view"


def _out_of_range(ctx: BlockerContext) -> bool:
    return ctx.distance_score == 0 and ctx.distance_km > ctx.max_visible_km


def _range_message(ctx: BlockerContext) -> str:
    miles = round_half_up(km_to_miles(ctx.distance_km))
    limit = round_half_up(km_to_miles(ctx.max_visible_km))
    return (
        f"Location is {miles} miles from {ctx.site_name}, beyond the "
        f"~{limit}-mile {lighting_label(ctx.lighting)} visibility limit"
    )


def _midday_message(ctx: BlockerContext) -> str:
    return (
        "Midday sun makes rocket visibility very difficult - daytime launches "
        "are only visible within ~125 miles. Try a twilight launch instead."
    )


# Evaluated in order; the first matching rule is the only blocker reported.
DEFAULT_RULES: tuple[BlockerRule, ...] = (
    BlockerRule("cloud", lambda ctx: ctx.cloud.is_fatal, _cloud_message),
    BlockerRule("distance", _out_of_range, _range_message),
    BlockerRule("sun", lambda ctx: ctx.sun_score < 0.1, _midday_message),
)


def find_blocker(ctx: BlockerContext, rules: Sequence[BlockerRule] = DEFAULT_RULES) -> Blocker | None:
    for rule in rules:
        if rule.applies(ctx):
            return Blocker(name=rule.name, message=rule.message(ctx))
    return None
