#!/usr/bin/env python3

# Copyright (c) 2026 pong contributors
# SPDX-License-Identifier: ISC

"""
Overview
========

A rectangle bouncing around the terminal. Runs until 'q' is pressed.

Keys:

  q : Quit
  n : Back to normal mode
  r : Resize mode (from normal mode), then w/s to grow/shrink
  s : Speed mode (from normal mode), then w/s to speed up/slow down

The bottom line shows the size of the drawable region, the current mode, and
the entity's velocity and corners. Resizing the terminal window is picked
up on the next frame.

The terminal must support 24-bit colors. The exit status is 0 after quitting
with 'q', and 1 if the terminal could not be used.


Color
=====

The color of the rectangle can be set with the PONG_COLOR environment
variable. It accepts

  - An HTML-style #RRGGBB value

  - One of the color names black, red, green, yellow, blue, magenta, cyan,
    white, or purple, optionally prefixed with 'bright' (e.g. brightred)

  - A number in the range 0..255 (decimal or 0x hex), selecting a color from
    the terminal's 256-color palette

Example:

  $ PONG_COLOR='#ff8800' pong

Invalid values generate a warning, and the default (white) is used instead.
"""

import os
import re
import sys

import rawterm
from command import Mode, handle_command
from entity import DEFAULT_COLOR, DEFAULT_ENTITY
from rawterm import NAMED_COLORS, Color, TerminalError
from vec2 import Vec2


def _main():
    color = _entity_color()
    try:
        rawterm.run(lambda term: play(term, color))
    except (TerminalError, OSError) as e:
        sys.exit(f"pong: {e}")


def play(term, color=DEFAULT_COLOR, entity=DEFAULT_ENTITY):
    """
    Runs the animation on 'term' until the mode becomes Mode.QUIT, returning
    the entity as it was in the last frame.

    term:
      rawterm.Terminal instance, or anything with the same 'screen',
      'bounds', check_resize() and read_key()

    color:
      rawterm.Color the entity is painted with
    """
    screen = term.screen
    mode = Mode.NORMAL

    while True:
        # A pending resize refreshes the bounds before anything is drawn
        term.check_resize()
        bounds = term.bounds

        screen.clear()
        entity = entity.update(screen, bounds, color)
        _draw_info_line(screen, bounds, entity, mode)
        screen.flush()

        mode, entity = handle_command(mode, term.read_key(), entity, bounds)
        if mode is Mode.QUIT:
            return entity


def info_line(bounds, entity, mode):
    """Returns the text of the status line.

    The display size and mode come first, then the velocity, then the
    entity's corners, so that cutting the line on a narrow terminal only
    loses coordinates.
    """
    pos = entity.pos
    end = entity.end
    delta = entity.delta
    return (
        f"display: {bounds.width} x {bounds.height} ({mode}) "
        f"delta({delta.x:g}, {delta.y:g}) "
        f"entity(({pos.x:g}, {pos.y:g}), ({end.x:g}, {end.y:g}))"
    )


def _draw_info_line(screen, bounds, entity, mode):
    # The status line goes on the row below the drawable region. It is cut
    # short of the last column to keep the terminal from wrapping/scrolling.
    screen.move_cursor(Vec2(1, bounds.height + 1))
    screen.write(info_line(bounds, entity, mode)[: bounds.width])
    screen.clear_line()


def _entity_color():
    # Returns the entity color from PONG_COLOR. Unset, empty, and invalid
    # values give the default.

    color_def = os.environ.get("PONG_COLOR", "").strip().lower()
    if not color_def:
        return DEFAULT_COLOR

    color = _parse_color(color_def)
    if color is None:
        return DEFAULT_COLOR
    return color


_RGB_RE = re.compile(r"#([0-9a-f]{2})([0-9a-f]{2})([0-9a-f]{2})")


def _parse_color(color_def):
    """
    Returns the rawterm.Color for a lowercase color definition: #rrggbb, a
    name from rawterm.NAMED_COLORS, or a palette index. Returns None and
    warns if 'color_def' is none of those.
    """
    match = _RGB_RE.fullmatch(color_def)
    if match:
        return Color.rgb(*(int(component, 16) for component in match.groups()))

    if color_def in NAMED_COLORS:
        return NAMED_COLORS[color_def]

    try:
        num = int(color_def, 0)
    except ValueError:
        _warn("Ignoring color", color_def, "that's neither predefined nor a number")
        return None

    if not 0 <= num <= 255:
        _warn(f"Ignoring color {color_def} outside range 0..255")
        return None

    return Color.index(num)


def _warn(*args):
    # Prints a warning to stderr. Only called before the terminal is put in
    # raw mode, where the warning would get mangled.
    print("pong warning: ", end="", file=sys.stderr)
    print(*args, file=sys.stderr)


if __name__ == "__main__":
    _main()
