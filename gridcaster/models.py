# -*- coding: utf-8 -*-
"""Core data models (viewer state, ray steps, configuration)."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .constants import (
    FOCAL_LENGTH_DEFAULT,
    FOG_ALPHA_DEFAULT,
    GRID_SIZE_DEFAULT,
    LIGHT_RANGE_DEFAULT,
    RANGE_DEFAULT,
    WALL_PROBABILITY_DEFAULT,
    MapKind,
    OnOffAuto,
)


@dataclass
class Viewer:
    x: float
    y: float
    direction: float  # radians, kept in [0, 2π)


@dataclass(frozen=True)
class RayStep:
    """One cell-boundary crossing along a ray."""

    x: float
    y: float
    height: int       # value of the cell just entered, -1 outside the grid
    distance: float   # along the ray, not perpendicular
    shading: int = 0
    offset: float = 0.0  # texture U in [0, 1)


@dataclass(frozen=True)
class ProjectedWall:
    top: float
    height: float


@dataclass
class Controls:
    """Held movement intents for the current tick."""

    left: bool = False
    right: bool = False
    forward: bool = False
    backward: bool = False


@dataclass
class Settings:
    grid_size: int = GRID_SIZE_DEFAULT
    wall_probability: float = WALL_PROBABILITY_DEFAULT
    map_kind: MapKind = "random"
    seed: Optional[int] = None

    resolution: int = 0  # 0: one column per terminal cell
    focal_length: float = FOCAL_LENGTH_DEFAULT
    range: float = RANGE_DEFAULT
    light_range: float = LIGHT_RANGE_DEFAULT
    fog_alpha: float = FOG_ALPHA_DEFAULT

    colors: OnOffAuto = "auto"
    unicode: OnOffAuto = "auto"
    hud: bool = True

    log_file: Optional[str] = None
    log_level: str = "INFO"
