from .format import (
    compass_point,
    format_bearing,
    format_clock,
    format_distance,
    format_elevation,
    round_half_up,
)

__all__ = [
    "compass_point",
    "format_bearing",
    "format_clock",
    "format_distance",
    "format_elevation",
    "round_half_up",
]
