"""Main game loop and curses entrypoint.

Every tick has three phases:
- input: read keys and refresh the held-key state
- update: move the viewer through the grid
- render: cast the frame into a framebuffer and paint it
"""

from __future__ import annotations

import argparse
import curses
import locale
import logging
import math
import random
import time
from dataclasses import dataclass
from typing import Optional, Sequence

from .camera import Camera
from .constants import CIRCLE, FRAME_SLEEP, HOLD_TIMEOUT, MAX_FRAME_DT
from .grid import Grid
from .models import Controls, Settings, Viewer
from .movement import update_viewer
from .render_text import render_frame, view_size
from .style import Style, effective_style, init_style
from .surface import Framebuffer
from .texture import brick_texture

log = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
HUD_TEXT = "W/S:walk  A/D:turn  N:new map  H:hud  Q:quit   x={x:5.1f} y={y:5.1f}  dir={deg:5.1f}"


@dataclass
class ControlState:
    """Key holds; curses only reports presses, so each one lasts HOLD_TIMEOUT."""

    move_dir: int = 0
    rot_dir: int = 0

    move_until: float = 0.0
    rot_until: float = 0.0

    def expire(self, now: float) -> None:
        if now > self.move_until:
            self.move_dir = 0
        if now > self.rot_until:
            self.rot_dir = 0

    def controls(self) -> Controls:
        return Controls(
            left=self.rot_dir < 0,
            right=self.rot_dir > 0,
            forward=self.move_dir > 0,
            backward=self.move_dir < 0,
        )


@dataclass
class World:
    """Everything a frame reads: owned here, passed down explicitly."""

    grid: Grid
    viewer: Viewer
    camera: Optional[Camera] = None
    framebuffer: Optional[Framebuffer] = None
    show_hud: bool = True
    last_tick: float = 0.0


def build_grid(settings: Settings, rng: random.Random) -> Grid:
    grid = Grid(settings.grid_size)
    if settings.map_kind == "maze":
        grid.carve_maze(rng)
    else:
        grid.randomize(rng, settings.wall_probability)
    return grid


def new_world(settings: Settings, rng: random.Random) -> World:
    grid = build_grid(settings, rng)
    x, y = grid.find_spawn(rng)
    viewer = Viewer(x=x, y=y, direction=rng.uniform(0.0, CIRCLE))
    log.info(
        "new %s map %dx%d, viewer at (%.1f, %.1f)",
        settings.map_kind, grid.size, grid.size, x, y,
    )
    log.debug("map:\n%s", "\n".join(grid.to_rows()))
    return World(grid=grid, viewer=viewer, show_hud=settings.hud, last_tick=time.monotonic())


def fit_camera(world: World, settings: Settings, width: int, height: int) -> None:
    """(Re)build camera and framebuffer when the view size changes."""
    cam = world.camera
    if cam is not None and cam.width == width and cam.height == height:
        return
    resolution = settings.resolution or width
    world.camera = Camera(
        width,
        height,
        resolution,
        focal_length=settings.focal_length,
        range=settings.range,
        light_range=settings.light_range,
        fog_alpha=settings.fog_alpha,
        texture=cam.texture if cam is not None else brick_texture(),
    )
    world.framebuffer = Framebuffer(width, height)
    log.info("view resized to %dx%d, %d columns", width, height, resolution)


def render_world(world: World) -> None:
    """Cast one frame into the world's framebuffer."""
    assert world.camera is not None and world.framebuffer is not None
    commands = world.camera.render(world.viewer, world.grid)
    world.framebuffer.clear()
    world.framebuffer.draw(commands)


def _read_input(stdscr, ctrl: ControlState, world: World, now: float) -> str:
    """Consume pending keys. Returns "continue", "new" or "quit"."""
    while True:
        chkey = stdscr.getch()
        if chkey == -1:
            break

        if chkey in (ord("q"), ord("Q")):
            return "quit"
        if chkey in (ord("n"), ord("N")):
            return "new"
        if chkey in (ord("h"), ord("H")):
            world.show_hud = not world.show_hud
            continue

        if chkey in (curses.KEY_LEFT, ord("a"), ord("A")):
            ctrl.rot_dir = -1
            ctrl.rot_until = now + HOLD_TIMEOUT
            continue
        if chkey in (curses.KEY_RIGHT, ord("d"), ord("D")):
            ctrl.rot_dir = 1
            ctrl.rot_until = now + HOLD_TIMEOUT
            continue
        if chkey in (curses.KEY_UP, ord("w"), ord("W")):
            ctrl.move_dir = 1
            ctrl.move_until = now + HOLD_TIMEOUT
            continue
        if chkey in (curses.KEY_DOWN, ord("s"), ord("S")):
            ctrl.move_dir = -1
            ctrl.move_until = now + HOLD_TIMEOUT
            continue

    return "continue"


def _hud_text(world: World) -> str:
    v = world.viewer
    return HUD_TEXT.format(x=v.x, y=v.y, deg=math.degrees(v.direction))


def _render_frame(stdscr, world: World, settings: Settings, style: Style) -> None:
    stdscr.erase()
    size = view_size(stdscr, world.show_hud)
    if size is None:
        render_frame(stdscr, Framebuffer(1, 1), style)
    else:
        fit_camera(world, settings, *size)
        render_world(world)
        hud = _hud_text(world) if world.show_hud else None
        render_frame(stdscr, world.framebuffer, style, hud)
    stdscr.refresh()


def main(stdscr, settings: Settings) -> None:
    # curses setup
    curses.curs_set(0)
    stdscr.keypad(True)
    curses.noecho()
    curses.cbreak()
    stdscr.nodelay(True)

    style = effective_style(init_style(stdscr), settings)
    rng = random.Random(settings.seed)

    while True:
        world = new_world(settings, rng)
        ctrl = ControlState()

        while True:
            now = time.monotonic()
            dt = now - world.last_tick
            world.last_tick = now

            action = _read_input(stdscr, ctrl, world, now)
            if action == "quit":
                log.info("quit")
                return
            if action == "new":
                break

            ctrl.expire(now)
            if dt < MAX_FRAME_DT:
                update_viewer(world.viewer, ctrl.controls(), world.grid, dt)
                _render_frame(stdscr, world, settings, style)
            else:
                log.debug("skipping tick, %.3fs since last", dt)

            time.sleep(FRAME_SLEEP)


def _positive(kind):
    def parse(text: str):
        value = kind(text)
        if not value > 0:
            raise argparse.ArgumentTypeError(f"must be positive, got {text}")
        return value
    return parse


def _fraction(text: str) -> float:
    value = float(text)
    if not 0.0 <= value <= 1.0:
        raise argparse.ArgumentTypeError(f"must be within [0, 1], got {text}")
    return value


def build_parser() -> argparse.ArgumentParser:
    d = Settings()
    p = argparse.ArgumentParser(prog="gridcaster", description="Grid raycaster in the terminal")
    p.add_argument("--size", dest="grid_size", type=_positive(int), default=d.grid_size,
                   help="grid edge length in cells (default: %(default)s)")
    p.add_argument("--walls", dest="wall_probability", type=_fraction, default=d.wall_probability,
                   help="wall probability for random maps (default: %(default)s)")
    p.add_argument("--map", dest="map_kind", choices=["random", "maze"], default=d.map_kind)
    p.add_argument("--seed", type=int, default=d.seed)
    p.add_argument("--resolution", type=int, default=d.resolution,
                   help="rays per frame, 0 for one per terminal column")
    p.add_argument("--focal-length", type=_positive(float), default=d.focal_length)
    p.add_argument("--range", type=_positive(float), default=d.range,
                   help="maximum ray length in cells (default: %(default)s)")
    p.add_argument("--light-range", type=_positive(float), default=d.light_range)
    p.add_argument("--fog", dest="fog_alpha", type=_fraction, default=d.fog_alpha,
                   help="light overlay alpha per crossed cell boundary")
    p.add_argument("--colors", choices=["auto", "on", "off"], default=d.colors)
    p.add_argument("--unicode", choices=["auto", "on", "off"], default=d.unicode)
    p.add_argument("--no-hud", dest="hud", action="store_false")
    p.add_argument("--log-file", default=d.log_file)
    p.add_argument("--log-level", default=d.log_level,
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p


def parse_args(argv: Optional[Sequence[str]] = None) -> Settings:
    parser = build_parser()
    ns = parser.parse_args(argv)
    if ns.resolution < 0:
        parser.error("--resolution must not be negative")
    return Settings(**vars(ns))


def configure_logging(settings: Settings) -> None:
    """Log to a file if asked; curses owns the terminal otherwise."""
    root = logging.getLogger("gridcaster")
    root.setLevel(settings.log_level)
    if settings.log_file:
        fh = logging.FileHandler(settings.log_file, mode="a", encoding="utf-8")
        fh.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S"))
        root.addHandler(fh)
    else:
        root.addHandler(logging.NullHandler())
    root.propagate = False


def run(argv: Optional[Sequence[str]] = None) -> None:
    settings = parse_args(argv)
    configure_logging(settings)
    try:
        locale.setlocale(locale.LC_ALL, "")
    except locale.Error:
        pass
    log.info("starting with %s", settings)
    curses.wrapper(main, settings)
