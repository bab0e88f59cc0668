# -*- coding: utf-8 -*-
"""Viewer movement between frames."""
from __future__ import annotations

import math

from .constants import MOVE_SPEED, ROT_SPEED
from .grid import Grid
from .models import Controls, Viewer
from .util import normalize_angle


def rotate_viewer(viewer: Viewer, angle: float) -> None:
    viewer.direction = normalize_angle(viewer.direction + angle)


def walk_viewer(viewer: Viewer, distance: float, grid: Grid) -> None:
    # x and y are checked one at a time so the viewer slides along walls
    dx = math.cos(viewer.direction) * distance
    dy = math.sin(viewer.direction) * distance
    if not grid.occupied(viewer.x + dx, viewer.y):
        viewer.x += dx
    if not grid.occupied(viewer.x, viewer.y + dy):
        viewer.y += dy


def update_viewer(viewer: Viewer, controls: Controls, grid: Grid, seconds: float) -> None:
    if controls.left:
        rotate_viewer(viewer, -ROT_SPEED * seconds)
    if controls.right:
        rotate_viewer(viewer, ROT_SPEED * seconds)
    if controls.forward:
        walk_viewer(viewer, MOVE_SPEED * seconds, grid)
    if controls.backward:
        walk_viewer(viewer, -MOVE_SPEED * seconds, grid)
