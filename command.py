# Copyright (c) 2026 pong contributors
# SPDX-License-Identifier: ISC

"""
Keyboard commands.

One key is handled per frame. What a key does depends on the current mode:

  q : quit (any mode)
  n : back to normal mode (any mode)

  normal mode
    r : enter resize mode
    s : enter speed mode

  resize mode
    w : grow the entity by one cell in each direction
    s : shrink the entity by one cell in each direction

  speed mode
    w : double the speed
    s : halve the speed

Other keys are ignored.
"""

from enum import Enum

from vec2 import Vec2

MIN_ENTITY_WIDTH = 1
MIN_ENTITY_HEIGHT = 1

MIN_ENTITY_DELTA_X = 0
MIN_ENTITY_DELTA_Y = 0

# A stalled axis restarts from this speed when sped up
DELTA_SEED = 0.005


class Mode(Enum):
    NORMAL = "normal"
    RESIZE = "resize"
    SPEED = "speed"
    QUIT = "quit"

    def __str__(self):
        return self.value


def max_size(bounds):
    """Largest entity size for the drawable region: half of it, rounded
    down."""
    return Vec2(bounds.width // 2, bounds.height // 2)


def max_delta(bounds):
    return Vec2(bounds.width, bounds.height)


def _unreachable(func):
    raise AssertionError(f"unreachable ({func})")


def handle_command(mode, key, entity, bounds):
    """
    Apply 'key' in 'mode' to 'entity'. Returns a (mode, entity) tuple with the
    mode for the next frame and the possibly changed entity.

    key:
      One-character string, or None if no key was pressed this frame

    bounds:
      Current drawable region, for the size and speed limits
    """
    if key is None:
        return mode, entity

    if key == "q":
        return Mode.QUIT, entity
    if key == "n":
        return Mode.NORMAL, entity

    if mode is Mode.QUIT:
        return mode, entity

    if mode is Mode.NORMAL:
        if key == "r":
            return Mode.RESIZE, entity
        if key == "s":
            return Mode.SPEED, entity
        return mode, entity

    if mode is Mode.RESIZE:
        if key == "w":
            return mode, grow(entity, bounds)
        if key == "s":
            return mode, shrink(entity)
        return mode, entity

    if mode is Mode.SPEED:
        if key == "w":
            return mode, speed_up(entity, bounds)
        if key == "s":
            return mode, slow_down(entity)
        return mode, entity

    _unreachable("handle_command")


def grow(entity, bounds):
    # Blocked on both axes as soon as either one is at the limit
    size = entity.size
    limit = max_size(bounds)
    if size.x < limit.x and size.y < limit.y:
        return entity._replace(size=Vec2(size.x + 1, size.y + 1))
    return entity


def shrink(entity):
    size = entity.size
    if size.x > MIN_ENTITY_WIDTH and size.y > MIN_ENTITY_HEIGHT:
        return entity._replace(size=Vec2(size.x - 1, size.y - 1))
    return entity


def speed_up(entity, bounds):
    """Double both velocity components, keeping their signs. Zero components
    restart from DELTA_SEED. Nothing changes if either component would end
    up faster than the region is wide/high."""
    delta = Vec2(
        2 * (entity.delta.x or DELTA_SEED),
        2 * (entity.delta.y or DELTA_SEED),
    )
    limit = max_delta(bounds)
    if abs(delta.x) <= limit.x and abs(delta.y) <= limit.y:
        return entity._replace(delta=delta)
    return entity


def slow_down(entity):
    delta = entity.delta
    if abs(delta.x) > MIN_ENTITY_DELTA_X and abs(delta.y) > MIN_ENTITY_DELTA_Y:
        return entity._replace(delta=Vec2(delta.x / 2, delta.y / 2))
    return entity
