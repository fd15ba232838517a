# Copyright (c) 2026 pong contributors
# SPDX-License-Identifier: ISC

"""
2D vectors in terminal cell space.
"""

import math
from collections import namedtuple


def _round(v):
    # Halfway cases round away from zero
    return math.copysign(math.floor(abs(v) + 0.5), v)


class Vec2(namedtuple("Vec2", ("x", "y"))):
    """Immutable 2D point/vector with real-valued components."""

    __slots__ = ()

    def __add__(self, other):
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other):
        return Vec2(self.x - other.x, self.y - other.y)

    def __neg__(self):
        return Vec2(-self.x, -self.y)

    def length(self):
        return math.hypot(self.x, self.y)

    def rotate(self, degrees):
        """Rotate counterclockwise by 'degrees', rounding each component to
        the nearest whole cell."""
        radians = math.radians(degrees)
        cos = math.cos(radians)
        sin = math.sin(radians)
        return Vec2(
            _round(cos * self.x - sin * self.y),
            _round(sin * self.x + cos * self.y),
        )

    def __repr__(self):
        return f"Vec2({self.x}, {self.y})"
