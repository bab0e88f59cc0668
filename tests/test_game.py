import locale
import logging
import random
import sys
from types import SimpleNamespace

import pytest

from gridcaster.game import (
    ControlState,
    World,
    build_grid,
    configure_logging,
    fit_camera,
    new_world,
    parse_args,
    render_world,
)
from gridcaster.constants import CIRCLE
from gridcaster.grid import Grid
from gridcaster.models import Controls, Settings, Viewer
from gridcaster.render_text import MSG_TOO_SMALL, render_frame, view_size
from gridcaster.style import Style, effective_style, prefer_utf8
from gridcaster.surface import Framebuffer


class FakeScreen:
    """Just enough of a curses window to record output."""

    def __init__(self, h: int, w: int) -> None:
        self.h = h
        self.w = w
        self.calls: list[tuple[int, int, str, int]] = []

    def getmaxyx(self) -> tuple[int, int]:
        return self.h, self.w

    def addstr(self, y: int, x: int, s: str, attr: int = 0) -> None:
        self.calls.append((y, x, s, attr))

    def erase(self) -> None:
        self.calls.clear()

    def text(self, y: int) -> str:
        return "".join(s for (yy, _x, s, _a) in sorted(self.calls) if yy == y)


def plain_style(*, unicode_ok: bool = False) -> Style:
    # Colors stay off so tests don't require curses initialization.
    return Style(unicode_ok=unicode_ok, colors_ok=False)


def test_parse_args_defaults() -> None:
    assert parse_args([]) == Settings()


def test_parse_args_overrides() -> None:
    s = parse_args(["--map", "maze", "--size", "21", "--seed", "7", "--fog", "0.2", "--no-hud"])
    assert s.map_kind == "maze"
    assert s.grid_size == 21
    assert s.seed == 7
    assert s.fog_alpha == pytest.approx(0.2)
    assert s.hud is False


@pytest.mark.parametrize(
    "argv",
    [
        ["--walls", "1.5"],
        ["--size", "0"],
        ["--focal-length", "0"],
        ["--resolution", "-1"],
        ["--map", "cave"],
    ],
)
def test_parse_args_rejects_bad_values(argv: list[str]) -> None:
    with pytest.raises(SystemExit):
        parse_args(argv)


def test_build_grid_kinds() -> None:
    maze = build_grid(Settings(grid_size=11, map_kind="maze"), random.Random(1))
    assert maze.to_rows()[0] == "#" * 11
    empty = build_grid(Settings(grid_size=6, wall_probability=0.0), random.Random(1))
    assert set(empty.cells) == {0}


def test_new_world_spawns_viewer_in_open_cell() -> None:
    world = new_world(Settings(grid_size=12, seed=4), random.Random(4))
    v = world.viewer
    assert not world.grid.occupied(v.x, v.y)
    assert 0.0 <= v.direction < CIRCLE


def test_new_world_logs_the_map_at_debug(caplog) -> None:
    logger = logging.getLogger("gridcaster")
    logger.addHandler(caplog.handler)
    try:
        with caplog.at_level(logging.DEBUG, logger="gridcaster"):
            world = new_world(Settings(grid_size=9, map_kind="maze", seed=2), random.Random(2))
    finally:
        logger.removeHandler(caplog.handler)
    record = next(r for r in caplog.records if r.getMessage().startswith("map:"))
    assert record.getMessage().splitlines()[1:] == world.grid.to_rows()


def test_control_state_holds_then_expires() -> None:
    ctrl = ControlState(move_dir=1, rot_dir=-1, move_until=1.0, rot_until=0.5)
    c = ctrl.controls()
    assert (c.forward, c.backward, c.left, c.right) == (True, False, True, False)
    ctrl.expire(0.75)
    c = ctrl.controls()
    assert (c.forward, c.left) == (True, False)
    ctrl.expire(2.0)
    assert ctrl.controls() == Controls()


def test_render_world_fills_the_framebuffer() -> None:
    grid = Grid.from_rows(["#####", "#   #", "#   #", "#   #", "#####"])
    world = World(grid=grid, viewer=Viewer(2.5, 2.5, 0.0))
    fit_camera(world, Settings(), 20, 10)
    assert world.camera.resolution == 20
    render_world(world)
    fb = world.framebuffer
    # Above the wall only the four fog overlays of the centre ray remain.
    assert fb.get(10, 0) == pytest.approx(1 - 0.85 ** 4)
    assert fb.get(10, 4) != pytest.approx(fb.get(10, 0))

    cam = world.camera
    fit_camera(world, Settings(), 20, 10)
    assert world.camera is cam
    fit_camera(world, Settings(), 30, 10)
    assert world.camera is not cam
    assert world.framebuffer.width == 30


def test_render_frame_writes_shades_and_hud() -> None:
    fb = Framebuffer(4, 2)
    fb.pixels = [0.0, 0.0, 1.0, 1.0, 0.5, 0.5, 0.5, 0.5]
    scr = FakeScreen(h=6, w=20)
    render_frame(scr, fb, plain_style(), hud_text="hello")
    assert scr.text(0) == "  @@"
    assert len(scr.text(1)) == 4
    assert scr.text(5) == "hello"


def test_render_frame_too_small() -> None:
    scr = FakeScreen(h=2, w=10)
    render_frame(scr, Framebuffer(1, 1), plain_style())
    assert scr.text(0) == MSG_TOO_SMALL[:9]
    assert view_size(scr, True) is None
    assert view_size(FakeScreen(h=20, w=40), True) == (39, 19)


def test_configure_logging_writes_to_file(tmp_path) -> None:
    path = tmp_path / "caster.log"
    logger = logging.getLogger("gridcaster")
    before = list(logger.handlers)
    level, propagate = logger.level, logger.propagate
    try:
        configure_logging(Settings(log_file=str(path), log_level="DEBUG"))
        logging.getLogger("gridcaster.test").info("frame done")
        for h in logger.handlers:
            h.flush()
        assert "frame done" in path.read_text(encoding="utf-8")
    finally:
        for h in list(logger.handlers):
            if h not in before:
                logger.removeHandler(h)
                h.close()
        logger.setLevel(level)
        logger.propagate = propagate


def test_effective_style_applies_overrides() -> None:
    base = Style(unicode_ok=False, colors_ok=True, grey_pairs=[1, 2, 3], hud_pair=4)
    same = effective_style(base, Settings())
    assert same == base

    forced = effective_style(base, Settings(unicode="on", colors="off"))
    assert forced.unicode_ok is True
    assert forced.colors_ok is False
    assert (forced.grey_pairs, forced.hud_pair) == ([], 0)


@pytest.mark.parametrize(
    "lang, expected",
    [("en_US.UTF-8", True), ("de_DE.utf8", True), ("C", False), (None, False)],
)
def test_prefer_utf8_reads_encoding_hints(monkeypatch, lang, expected) -> None:
    monkeypatch.setattr(sys, "stdout", SimpleNamespace(encoding=None))
    monkeypatch.setattr(locale, "getpreferredencoding", lambda do_setlocale=True: "ANSI_X3.4-1968")
    monkeypatch.delenv("LC_ALL", raising=False)
    if lang is None:
        monkeypatch.delenv("LANG", raising=False)
    else:
        monkeypatch.setenv("LANG", lang)
    assert prefer_utf8() is expected
