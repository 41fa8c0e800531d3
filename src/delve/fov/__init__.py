from .explored import (
    ExploredDelta,
    VisibilityState,
    diff_explored,
    initial_visibility,
    positions_in,
    update_explored,
)
from .shadowcast import bresenham_line, compute, has_line_of_sight, within_radius

__all__ = [
    "ExploredDelta",
    "VisibilityState",
    "diff_explored",
    "initial_visibility",
    "positions_in",
    "update_explored",
    "bresenham_line",
    "compute",
    "has_line_of_sight",
    "within_radius",
]
