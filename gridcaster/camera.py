"""Column renderer: one ray per screen column, turned into draw commands."""

from __future__ import annotations

import logging
import math
from typing import Optional

from .commands import Blit, DrawCommand, FillRect
from .constants import (
    BLACK,
    FOCAL_LENGTH_DEFAULT,
    FOG_ALPHA_DEFAULT,
    LIGHT_RANGE_DEFAULT,
    RANGE_DEFAULT,
    WHITE,
)
from .grid import Grid
from .models import RayStep, Viewer
from .raycast import cast_ray, first_hit, project_wall
from .texture import Texture, brick_texture
from .util import clamp

log = logging.getLogger(__name__)


class Camera:
    """Projects the view of a ``Viewer`` onto a ``width`` x ``height`` surface.

    The surface is split into ``resolution`` columns of ``width/resolution``
    units each; every column gets its own ray. The camera only produces
    draw commands, it never touches a real display.
    """

    def __init__(
        self,
        width: int,
        height: int,
        resolution: int,
        focal_length: float = FOCAL_LENGTH_DEFAULT,
        range: float = RANGE_DEFAULT,
        light_range: float = LIGHT_RANGE_DEFAULT,
        fog_alpha: float = FOG_ALPHA_DEFAULT,
        texture: Optional[Texture] = None,
    ) -> None:
        if not resolution > 0:
            raise ValueError(f"resolution must be positive, got {resolution}")
        if not focal_length > 0:
            raise ValueError(f"focal length must be positive, got {focal_length}")
        if not (width > 0 and height > 0):
            raise ValueError(f"viewport must be non-empty, got {width}x{height}")
        if not range > 0:
            raise ValueError(f"range must be positive, got {range}")
        if not light_range > 0:
            raise ValueError(f"light range must be positive, got {light_range}")

        self.width = width
        self.height = height
        self.resolution = int(resolution)
        self.spacing = width / self.resolution
        self.focal_length = focal_length
        self.range = range
        self.light_range = light_range
        self.fog_alpha = fog_alpha
        self.texture = texture if texture is not None else brick_texture()
        log.debug(
            "camera %sx%s, %d columns, focal %.2f, range %.1f",
            width, height, self.resolution, focal_length, range,
        )

    def column_angle(self, column: int) -> float:
        """Angle of a column's ray relative to the view direction.

        Taken from the focal plane rather than stepped linearly, so it pairs
        with the perpendicular distance used in ``project_wall``.
        """
        x = column / self.resolution - 0.5
        return math.atan2(x, self.focal_length)

    def render(self, viewer: Viewer, grid: Grid) -> list[DrawCommand]:
        commands: list[DrawCommand] = []
        for column in range(self.resolution):
            angle = self.column_angle(column)
            ray = cast_ray(grid, viewer, viewer.direction + angle, self.range)
            commands.extend(self.render_column(column, ray, angle))
        return commands

    def render_column(self, column: int, ray: list[RayStep], angle: float) -> list[DrawCommand]:
        """Draw commands for one column, farthest step first.

        The hit step gets a texture column and a dark overlay scaled by
        distance and wall orientation. Every step, hit or not, adds a faint
        full-column light overlay, so the more boundaries a ray crossed the
        more washed out the column ends up.
        """
        texture = self.texture
        left = math.floor(column * self.spacing)
        width = math.ceil(self.spacing)
        hit = first_hit(ray)
        out: list[DrawCommand] = []

        for s in range(len(ray) - 1, -1, -1):
            step = ray[s]
            if s == hit:
                wall = project_wall(self.height, step.height, angle, step.distance)
                if wall is not None:
                    texture_x = math.floor(texture.width * step.offset)
                    out.append(Blit(texture, texture_x, left, wall.top, width, wall.height))
                    alpha = clamp((step.distance + step.shading) / self.light_range, 0.0, 1.0)
                    out.append(FillRect(left, wall.top, width, wall.height, BLACK, alpha))

            out.append(FillRect(left, 0, width, self.height, WHITE, self.fog_alpha))

        return out
