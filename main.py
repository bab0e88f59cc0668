#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Grid raycaster in the terminal.

Controls:
  W/S or Up/Down     walk
  A/D or Left/Right  turn
  N                  new map
  H                  toggle HUD
  Q                  quit

Run:
  python3 main.py [--map maze] [--size 21] [--seed 7] [--log-file caster.log]
"""

from gridcaster.game import run

if __name__ == "__main__":
    run()
