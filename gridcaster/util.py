# -*- coding: utf-8 -*-
"""Small helpers used across modules."""
from __future__ import annotations

import curses

from .constants import CIRCLE


def safe_addstr(stdscr, y: int, x: int, s: str, attr: int = 0) -> None:
    try:
        stdscr.addstr(y, x, s, attr)
    except curses.error:
        pass


def clamp(v: float, lo: float, hi: float) -> float:
    return lo if v < lo else hi if v > hi else v


def normalize_angle(a: float) -> float:
    """Wrap an angle into [0, 2π)."""
    a = a % CIRCLE
    # -tiny % CIRCLE rounds up to CIRCLE itself
    return 0.0 if a >= CIRCLE else a
