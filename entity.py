# Copyright (c) 2026 pong contributors
# SPDX-License-Identifier: ISC

"""
The bouncing entity: a rectangle of cells moving with a constant velocity
and reflecting off the edges of the drawable region.

Positions are continuous and measured in cells, 1-indexed. 'bounds' arguments
are rawterm.Bounds instances (or anything with 'width' and 'height'), always
read fresh from the terminal so a resize takes effect on the next step.
"""

from collections import namedtuple

from rawterm import Color
from vec2 import Vec2

# Glyph painted in every cell of the entity. The color does the drawing.
GLYPH = " "

DEFAULT_COLOR = Color.rgb(0xFF, 0xFF, 0xFF)


def collides(c, extent):
    """True if coordinate 'c' touches or crosses either edge of an axis with
    the given extent. Both edges belong to the collision zone."""
    return c <= 1 or c >= extent


def out_of_bounds(c, extent):
    return c < 1 or c >= extent


def constrain(c, extent):
    """Pin 'c' into the axis: below 1 becomes 1, at or past the extent
    becomes extent - 1."""
    if c < 1:
        return 1
    if c >= extent:
        return extent - 1
    return c


def _constrain_vec(v, bounds):
    return Vec2(constrain(v.x, bounds.width), constrain(v.y, bounds.height))


def _collision(v, bounds):
    return collides(v.x, bounds.width) or collides(v.y, bounds.height)


def _reflect(delta, corner, bounds):
    # x takes priority when both axes collide
    if collides(corner.x, bounds.width):
        return Vec2(-delta.x, delta.y)
    return Vec2(delta.x, -delta.y)


def _fit(c, size, extent):
    # Slide a span of 'size' cells starting at 'c' back inside [1, extent]
    if c + size > extent:
        c = extent - size
    if c < 1:
        c = 1
    return c


class Entity(namedtuple("Entity", ("pos", "size", "delta"))):
    """
    pos:
      Top-left corner (Vec2), continuous.

    size:
      Width and height in cells (Vec2 of whole numbers, each at least 1).

    delta:
      Velocity in cells per frame (Vec2). May be zero or negative.

    Entities are immutable. move() and the command handlers return new ones.
    """

    __slots__ = ()

    @property
    def end(self):
        """The corner opposite 'pos'."""
        return self.pos + self.size

    def move(self, bounds):
        """Advance one step, bouncing off the edges of 'bounds'.

        The corner at 'pos' is checked before the opposite corner. When a
        corner collides, the velocity is reflected on the colliding axis and
        that corner is pinned to the edge.
        """
        delta = self.delta

        new_pos = self.pos + delta
        new_end = self.end + delta

        if _collision(new_pos, bounds):
            delta = _reflect(delta, new_pos, bounds)
            pos = _constrain_vec(new_pos, bounds)
        elif _collision(new_end, bounds):
            delta = _reflect(delta, new_end, bounds)
            pos = _constrain_vec(new_end, bounds) - self.size
        else:
            pos = new_pos

        # Pinning one corner can leave the other outside, e.g. after a large
        # jump or when the terminal shrank under the entity
        pos = Vec2(
            _fit(pos.x, self.size.x, bounds.width),
            _fit(pos.y, self.size.y, bounds.height),
        )

        return self._replace(pos=pos, delta=delta)

    def cells(self, bounds):
        """Yield every whole cell covered by the entity that lies inside the
        drawable region."""
        y = int(self.pos.y)
        while y < self.pos.y + self.size.y:
            x = int(self.pos.x)
            while x < self.pos.x + self.size.x:
                if not (
                    out_of_bounds(x, bounds.width) or out_of_bounds(y, bounds.height)
                ):
                    yield Vec2(x, y)
                x += 1
            y += 1

    def draw(self, screen, bounds, color=DEFAULT_COLOR):
        for cell in self.cells(bounds):
            screen.draw_cell(cell, color, GLYPH)

    def update(self, screen, bounds, color=DEFAULT_COLOR):
        """Move, then draw at the new position. Returns the moved entity."""
        moved = self.move(bounds)
        moved.draw(screen, bounds, color)
        return moved


DEFAULT_ENTITY = Entity(
    pos=Vec2(1, 60),
    size=Vec2(2, 1),
    delta=Vec2(0.005, 0.005),
)
