"""Software render surface.

Rasterises the camera's draw commands into a grid of grey levels. The
terminal renderer reads the result cell by cell; nothing here depends on
curses.
"""

from __future__ import annotations

import math
from collections.abc import Iterable

from .commands import Blit, DrawCommand, FillRect


class Framebuffer:
    def __init__(self, width: int, height: int, background: float = 0.0) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"framebuffer must be non-empty, got {width}x{height}")
        self.width = width
        self.height = height
        self.background = background
        self.pixels = [background] * (width * height)

    def clear(self) -> None:
        self.pixels = [self.background] * (self.width * self.height)

    def get(self, x: int, y: int) -> float:
        return self.pixels[y * self.width + x]

    def row(self, y: int) -> list[float]:
        return self.pixels[y * self.width:(y + 1) * self.width]

    def draw(self, commands: Iterable[DrawCommand]) -> None:
        for cmd in commands:
            if isinstance(cmd, Blit):
                self.blit(cmd)
            elif isinstance(cmd, FillRect):
                self.fill(cmd)
            else:
                raise TypeError(f"unknown draw command {cmd!r}")

    def _span(self, left: float, top: float, width: float, height: float) -> tuple[int, int, int, int]:
        """Clip a rectangle to the buffer; a pixel is covered when its centre is."""
        if not (math.isfinite(top) and math.isfinite(height)):
            return 0, 0, 0, 0
        x0 = max(0, math.ceil(left - 0.5))
        x1 = min(self.width, math.ceil(left + width - 0.5))
        y0 = max(0, math.ceil(top - 0.5))
        y1 = min(self.height, math.ceil(top + height - 0.5))
        return x0, x1, y0, y1

    def blit(self, cmd: Blit) -> None:
        if cmd.height <= 0:
            return
        x0, x1, y0, y1 = self._span(cmd.left, cmd.top, cmd.width, cmd.height)
        strip = cmd.texture.column(cmd.texture_x)
        last = len(strip) - 1
        for y in range(y0, y1):
            # nearest texel for the pixel centre
            v = (y + 0.5 - cmd.top) / cmd.height
            grey = strip[min(max(int(v * len(strip)), 0), last)]
            base = y * self.width
            for x in range(x0, x1):
                self.pixels[base + x] = grey

    def fill(self, cmd: FillRect) -> None:
        a = cmd.alpha
        if a <= 0 or cmd.height <= 0:
            return
        a = min(a, 1.0)
        keep = 1.0 - a
        add = cmd.color * a
        x0, x1, y0, y1 = self._span(cmd.left, cmd.top, cmd.width, cmd.height)
        px = self.pixels
        for y in range(y0, y1):
            base = y * self.width
            for x in range(x0, x1):
                px[base + x] = px[base + x] * keep + add
