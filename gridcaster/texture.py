# -*- coding: utf-8 -*-
"""Procedural wall texture (grey levels, row-major)."""
from __future__ import annotations

import random
from dataclasses import dataclass, field

from .constants import BRICK_COLS, BRICK_ROWS, TEXTURE_SIZE
from .util import clamp

BRICK_GREY = 0.72
MORTAR_GREY = 0.38
NOISE = 0.08


@dataclass
class Texture:
    width: int
    height: int
    pixels: list[float] = field(repr=False)

    def texel(self, tx: int, ty: int) -> float:
        tx = int(clamp(tx, 0, self.width - 1))
        ty = int(clamp(ty, 0, self.height - 1))
        return self.pixels[ty * self.width + tx]

    def column(self, tx: int) -> list[float]:
        """Texels of column ``tx`` from top to bottom; ``tx`` is clamped."""
        return [self.texel(tx, ty) for ty in range(self.height)]


def brick_texture(size: int = TEXTURE_SIZE, seed: int = 0) -> Texture:
    """Staggered brick courses with one-texel mortar joints and a little
    per-brick noise so neighbouring columns are told apart."""
    rng = random.Random(seed)
    course_h = max(2, size // BRICK_ROWS)
    brick_w = max(2, size // BRICK_COLS)
    pixels = [0.0] * (size * size)
    tints: dict[tuple[int, int], float] = {}

    for ty in range(size):
        course = ty // course_h
        shift = (brick_w // 2) if course % 2 else 0
        for tx in range(size):
            sx = tx + shift
            if ty % course_h == 0 or sx % brick_w == 0:
                grey = MORTAR_GREY
            else:
                key = (course, sx // brick_w)
                if key not in tints:
                    tints[key] = rng.uniform(-NOISE, NOISE)
                grey = BRICK_GREY + tints[key] + rng.uniform(-NOISE, NOISE) * 0.5
            pixels[ty * size + tx] = clamp(grey, 0.0, 1.0)

    return Texture(size, size, pixels)
