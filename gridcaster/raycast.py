"""Raycasting and projection helpers.

``cast_ray`` walks cell-boundary crossings instead of fixed-size steps: every
iteration finds the next constant-x line and the next constant-y line the ray
reaches and moves to whichever is closer. Each crossing is recorded as a
``RayStep`` so the camera can both find the first wall and lay fog over every
cell boundary the ray passed.
"""

from __future__ import annotations

import math
from typing import Optional, Protocol

from .constants import BLOCKED, MIN_CELL_STEP, SHADE_BACK, SHADE_X, SHADE_Y
from .grid import Grid
from .models import ProjectedWall, RayStep

# (x, y, squared length) of a crossing that never happens
_NO_CROSSING = (math.inf, math.inf, math.inf)


class Point(Protocol):
    x: float
    y: float


def _boundary(coord: float, positive: bool) -> float:
    """Next integer grid line from ``coord`` in the direction of travel."""
    return math.floor(coord) + 1.0 if positive else math.ceil(coord) - 1.0


def _step_x(x: float, y: float, sin: float, cos: float) -> tuple[float, float, float]:
    if cos == 0:
        return _NO_CROSSING
    bx = _boundary(x, cos > 0)
    dx = bx - x
    dy = dx * (sin / cos)
    return bx, y + dy, dx * dx + dy * dy


def _step_y(x: float, y: float, sin: float, cos: float) -> tuple[float, float, float]:
    if sin == 0:
        return _NO_CROSSING
    by = _boundary(y, sin > 0)
    dy = by - y
    dx = dy * (cos / sin)
    return x + dx, by, dx * dx + dy * dy


def _step_limit(grid: Grid, max_range: float) -> int:
    # A ray that starts inside the grid leaves it after at most size+1
    # crossings per axis; the range gives a tighter bound for short rays.
    limit = 2 * grid.size + 2
    if math.isfinite(max_range):
        limit = min(limit, math.ceil(max_range / MIN_CELL_STEP))
    return limit + 4


def next_crossing(grid: Grid, x: float, y: float, distance: float, sin: float, cos: float) -> RayStep:
    """The nearer of the next constant-x and constant-y crossings from (x, y).

    The x crossing only wins when strictly nearer, so a ray through a grid
    corner is recorded as crossing the y line.
    """
    x_x, x_y, x_len2 = _step_x(x, y, sin, cos)
    y_x, y_y, y_len2 = _step_y(x, y, sin, cos)

    if x_len2 < y_len2:
        return RayStep(
            x=x_x,
            y=x_y,
            height=grid.cell_value(x_x + (0.5 if cos > 0 else -0.5), x_y),
            distance=distance + math.sqrt(x_len2),
            shading=SHADE_BACK if cos < 0 else SHADE_X,
            offset=x_y - math.floor(x_y),
        )
    return RayStep(
        x=y_x,
        y=y_y,
        height=grid.cell_value(y_x, y_y + (0.5 if sin > 0 else -0.5)),
        distance=distance + math.sqrt(y_len2),
        shading=SHADE_BACK if sin < 0 else SHADE_Y,
        offset=y_x - math.floor(y_x),
    )


def cast_ray(grid: Grid, origin: Point, angle: float, max_range: float) -> list[RayStep]:
    """Trace a ray from ``origin`` and return its boundary crossings in order.

    The first element is the origin itself (height 0, distance 0). The ray
    ends before the first crossing farther than ``max_range``, or right
    after the crossing that leaves the grid. Walls do not stop it.
    """
    start = RayStep(x=origin.x, y=origin.y, height=0, distance=0.0)
    steps = [start]
    if not (math.isfinite(angle) and math.isfinite(origin.x) and math.isfinite(origin.y)):
        return steps
    if not max_range > 0:
        return steps

    sin = math.sin(angle)
    cos = math.cos(angle)
    x, y, distance = origin.x, origin.y, 0.0

    for _ in range(_step_limit(grid, max_range)):
        step = next_crossing(grid, x, y, distance, sin, cos)
        if step.distance > max_range:
            break
        steps.append(step)
        if step.height == BLOCKED:
            break
        x, y, distance = step.x, step.y, step.distance

    return steps


def first_hit(ray: list[RayStep]) -> int:
    """Index of the first step that entered a wall, or -1."""
    for i, step in enumerate(ray):
        if step.height > 0:
            return i
    return -1


def project_wall(view_height: float, height: int, angle: float, distance: float) -> Optional[ProjectedWall]:
    """Screen-space strip for a wall ``distance`` away along a ray ``angle``
    off the camera axis. Returns None when the wall is not in front."""
    # perpendicular distance keeps walls flat across the view
    z = distance * math.cos(angle)
    if not z > 0:
        return None
    wall_height = view_height * height / z
    bottom = view_height / 2.0 * (1.0 + 1.0 / z)
    return ProjectedWall(top=bottom - wall_height, height=wall_height)
