"""Occupancy grid and the procedures that populate it."""

from __future__ import annotations

import logging
import math
import random
from collections.abc import Iterable, Iterator
from typing import Optional

from .constants import BLOCKED, WALL_PROBABILITY_DEFAULT

log = logging.getLogger(__name__)

WALL_CHAR = "#"
OPEN_CHARS = " ."


class Grid:
    """Square, row-major occupancy store.

    A cell value of 0 is passable, anything greater is a wall marker.
    Everything outside ``[0, size)`` on either axis reads as ``BLOCKED``,
    which makes the grid edge behave like a wall.
    """

    def __init__(self, size: int, cells: Optional[Iterable[int]] = None) -> None:
        size = int(size)
        if size <= 0:
            raise ValueError(f"grid size must be positive, got {size}")
        self.size = size
        if cells is None:
            self.cells = bytearray(size * size)
        else:
            self.cells = bytearray(cells)
            if len(self.cells) != size * size:
                raise ValueError(
                    f"expected {size * size} cells for size {size}, got {len(self.cells)}"
                )

    @classmethod
    def from_rows(cls, rows: list[str]) -> "Grid":
        """Build a grid from text rows: ``#`` is a wall, digits are wall
        markers, space or ``.`` is open. Short rows are padded with open
        cells."""
        size = max([len(rows)] + [len(r) for r in rows])
        grid = cls(size)
        for y, row in enumerate(rows):
            for x, ch in enumerate(row):
                if ch == WALL_CHAR:
                    grid.cells[y * size + x] = 1
                elif ch.isdigit():
                    grid.cells[y * size + x] = int(ch)
                elif ch not in OPEN_CHARS:
                    raise ValueError(f"unknown map character {ch!r} at ({x}, {y})")
        return grid

    def cell_value(self, x: float, y: float) -> int:
        try:
            ix = math.floor(x)
            iy = math.floor(y)
        except (ValueError, OverflowError):
            # NaN / inf coordinates never name a cell
            return BLOCKED
        if ix < 0 or ix >= self.size or iy < 0 or iy >= self.size:
            return BLOCKED
        return self.cells[iy * self.size + ix]

    def occupied(self, x: float, y: float) -> bool:
        v = self.cell_value(x, y)
        return v > 0 or v == BLOCKED

    def set_cell(self, x: int, y: int, value: int) -> None:
        if not (0 <= x < self.size and 0 <= y < self.size):
            raise IndexError(f"cell ({x}, {y}) outside {self.size}x{self.size} grid")
        self.cells[y * self.size + x] = value

    def randomize(self, rng: random.Random, probability: float = WALL_PROBABILITY_DEFAULT) -> None:
        for i in range(self.size * self.size):
            self.cells[i] = 1 if rng.random() < probability else 0
        log.debug("randomized %dx%d grid, p=%.2f", self.size, self.size, probability)

    def carve_maze(self, rng: random.Random) -> None:
        """Fill the grid with a perfect maze.

        Passages sit on odd indices, so an even size leaves its last row and
        column solid.
        """
        n = self.size
        for i in range(n * n):
            self.cells[i] = 1
        cells = max(1, (n - 1) // 2)
        if n < 3:
            log.warning("grid of size %d too small for a maze, left solid", n)
            return

        visited = [[False] * cells for _ in range(cells)]

        def cell_to_map(cx: int, cy: int) -> tuple[int, int]:
            return 2 * cx + 1, 2 * cy + 1

        stack = [(0, 0)]
        visited[0][0] = True
        sx, sy = cell_to_map(0, 0)
        self.set_cell(sx, sy, 0)

        while stack:
            cx, cy = stack[-1]
            neigh = []
            for dx, dy in ((-1, 0), (1, 0), (0, -1), (0, 1)):
                nx, ny = cx + dx, cy + dy
                if 0 <= nx < cells and 0 <= ny < cells and not visited[ny][nx]:
                    neigh.append((nx, ny))
            if neigh:
                nx, ny = rng.choice(neigh)
                visited[ny][nx] = True
                x1, y1 = cell_to_map(cx, cy)
                x2, y2 = cell_to_map(nx, ny)
                self.set_cell(x2, y2, 0)
                self.set_cell((x1 + x2) // 2, (y1 + y2) // 2, 0)
                stack.append((nx, ny))
            else:
                stack.pop()
        log.debug("carved %dx%d maze", n, n)

    def open_cells(self) -> Iterator[tuple[int, int]]:
        for i, v in enumerate(self.cells):
            if v == 0:
                yield i % self.size, i // self.size

    def find_spawn(self, rng: random.Random) -> tuple[float, float]:
        """Centre of a random open cell; clears the middle cell if none is open."""
        free = list(self.open_cells())
        if not free:
            mid = self.size // 2
            log.warning("no open cell, clearing (%d, %d) for the spawn", mid, mid)
            self.set_cell(mid, mid, 0)
            free = [(mid, mid)]
        cx, cy = rng.choice(free)
        return cx + 0.5, cy + 0.5

    def to_rows(self) -> list[str]:
        rows = []
        for y in range(self.size):
            row = self.cells[y * self.size:(y + 1) * self.size]
            rows.append("".join(WALL_CHAR if v else " " for v in row))
        return rows
