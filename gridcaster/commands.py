# -*- coding: utf-8 -*-
"""Backend-free draw commands emitted by the camera."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .texture import Texture


@dataclass(frozen=True)
class Blit:
    """Scale one texture column onto ``[top, top + height)``."""

    texture: Texture
    texture_x: int
    left: int
    top: float
    width: int
    height: float


@dataclass(frozen=True)
class FillRect:
    left: int
    top: float
    width: int
    height: float
    color: float  # grey level, 0 black .. 1 white
    alpha: float


DrawCommand = Union[Blit, FillRect]
