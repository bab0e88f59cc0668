"""Terminal capabilities and styling (unicode, colors, shade ramps)."""

from __future__ import annotations

import curses
import locale
import logging
import os
import sys
from dataclasses import dataclass, field

from .constants import ASCII_SHADES, UNICODE_SHADES
from .models import Settings
from .util import clamp

log = logging.getLogger(__name__)


@dataclass
class Style:
    unicode_ok: bool
    colors_ok: bool
    grey_pairs: list[int] = field(default_factory=list)  # dark to light
    hud_pair: int = 0

    @property
    def shades(self) -> str:
        return UNICODE_SHADES if self.unicode_ok else ASCII_SHADES

    def shade_char(self, grey: float) -> str:
        shades = self.shades
        t = clamp(grey, 0.0, 1.0)
        return shades[int(t * (len(shades) - 1) + 0.5)]

    def shade_attr(self, grey: float) -> int:
        if not self.colors_ok or not self.grey_pairs:
            return curses.A_BOLD if grey > 0.85 else curses.A_NORMAL
        t = clamp(grey, 0.0, 1.0)
        idx = int(t * (len(self.grey_pairs) - 1) + 0.5)
        return curses.color_pair(self.grey_pairs[idx])


def _grey_ramp() -> list[int]:
    """Foreground colours for the grey pairs, dark to light."""
    colors = getattr(curses, "COLORS", 0) or 0
    pairs = getattr(curses, "COLOR_PAIRS", 0) or 0
    if colors >= 256 and pairs >= 32:
        return list(range(232, 256))  # xterm 24-step grey ramp
    return [curses.COLOR_BLUE, curses.COLOR_CYAN, curses.COLOR_WHITE]


def _start_colors() -> bool:
    if not curses.has_colors():
        return False
    try:
        curses.start_color()
    except curses.error:
        return False
    try:
        curses.use_default_colors()
    except curses.error:
        pass
    return True


def _init_pair(pid: int, fg: int) -> bool:
    try:
        curses.init_pair(pid, fg, -1)
    except curses.error:
        return False
    return True


def init_style(stdscr) -> Style:
    style = Style(unicode_ok=prefer_utf8(), colors_ok=_start_colors())

    if style.colors_ok:
        pairs = getattr(curses, "COLOR_PAIRS", 0) or 0
        pid = 1
        for fg in _grey_ramp():
            if pid >= pairs - 1:
                break
            if _init_pair(pid, fg):
                style.grey_pairs.append(pid)
                pid += 1
        if pid < pairs and _init_pair(pid, curses.COLOR_YELLOW):
            style.hud_pair = pid

    log.info(
        "terminal: unicode=%s colors=%s, %d grey pairs",
        style.unicode_ok, style.colors_ok, len(style.grey_pairs),
    )
    return style


def effective_style(base: Style, settings: Settings) -> Style:
    unicode_ok = base.unicode_ok
    if settings.unicode == "on":
        unicode_ok = True
    elif settings.unicode == "off":
        unicode_ok = False

    colors_ok = base.colors_ok
    if settings.colors == "off":
        colors_ok = False

    return Style(
        unicode_ok=unicode_ok,
        colors_ok=colors_ok,
        grey_pairs=base.grey_pairs if colors_ok else [],
        hud_pair=base.hud_pair if colors_ok else 0,
    )


def prefer_utf8() -> bool:
    """True when any of the encoding hints names UTF-8."""
    sources = [
        sys.stdout.encoding,
        locale.getpreferredencoding(False),
        os.environ.get("LC_ALL"),
        os.environ.get("LANG"),
    ]
    names = "|".join(s for s in sources if s).upper().replace("-", "")
    return "UTF8" in names
