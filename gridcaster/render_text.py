# -*- coding: utf-8 -*-
"""Paints a framebuffer to a curses window, one character per cell."""
from __future__ import annotations

import curses
from typing import Optional

from .style import Style
from .surface import Framebuffer
from .util import safe_addstr

MSG_TOO_SMALL = "Terminal too small. Enlarge it."
MIN_H = 4
MIN_W = 16


def view_size(stdscr, hud_visible: bool) -> Optional[tuple[int, int]]:
    """(width, height) available for the 3D view, or None if too small."""
    h, w = stdscr.getmaxyx()
    if h < MIN_H or w < MIN_W:
        return None
    hud_lines = 1 if hud_visible else 0
    # last column stays empty, curses errors on the bottom-right cell
    return max(1, w - 1), max(1, h - hud_lines)


def render_frame(stdscr, fb: Framebuffer, style: Style, hud_text: Optional[str] = None) -> None:
    h, w = stdscr.getmaxyx()
    if h < MIN_H or w < MIN_W:
        stdscr.erase()
        safe_addstr(stdscr, 0, 0, MSG_TOO_SMALL[: max(0, w - 1)])
        return

    rows = min(fb.height, h)
    cols = min(fb.width, w - 1)

    for y in range(rows):
        row = fb.row(y)
        x = 0
        while x < cols:
            attr = style.shade_attr(row[x])
            start = x
            buf = [style.shade_char(row[x])]
            x += 1
            while x < cols:
                attr2 = style.shade_attr(row[x])
                if attr2 != attr:
                    break
                buf.append(style.shade_char(row[x]))
                x += 1
            safe_addstr(stdscr, y, start, "".join(buf), attr)

    if hud_text:
        draw_hud(stdscr, hud_text, style)


def draw_hud(stdscr, text: str, style: Style) -> None:
    h, w = stdscr.getmaxyx()
    attr = curses.A_BOLD
    if style.colors_ok and style.hud_pair:
        attr |= curses.color_pair(style.hud_pair)
    safe_addstr(stdscr, h - 1, 0, text[: max(0, w - 1)], attr)
