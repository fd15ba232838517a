# Copyright (c) 2026 pong contributors
# SPDX-License-Identifier: ISC
#
# Shared fixtures and helpers for the pong pytest suite.

import fcntl
import os
import struct
import sys
import termios

import pytest

# Ensure the modules are importable from the project root
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from rawterm import Bounds, Screen  # noqa: E402

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def set_winsize(fd, rows, columns):
    """Set the window size of the tty behind 'fd'."""
    fcntl.ioctl(fd, termios.TIOCSWINSZ, struct.pack("HHHH", rows, columns, 0, 0))


def assert_contained(entity, bounds):
    """Verify that the entity's box lies inside the drawable region."""
    pos, end = entity.pos, entity.end
    assert 1 <= pos.x and end.x <= bounds.width, f"{entity} sticks out of {bounds}"
    assert 1 <= pos.y and end.y <= bounds.height, f"{entity} sticks out of {bounds}"


class FakeTerminal:
    """Just enough of rawterm.Terminal for the main loop, fed with a fixed
    sequence of keys. None entries stand for frames without a key press."""

    def __init__(self, keys, columns=80, rows=24, screen=None):
        self.keys = list(keys)
        self.size = (columns, rows)
        self.screen = screen or Screen(_NoFlushOutput())
        self.frames = 0
        self.resizes = []

    @property
    def bounds(self):
        return Bounds.from_size(*self.size)

    def resize(self, columns, rows):
        # Delivered at the start of the next frame, like SIGWINCH
        self.resizes.append((columns, rows))

    def check_resize(self):
        self.frames += 1
        if not self.resizes:
            return False
        self.size = self.resizes.pop(0)
        self.screen.clear()
        self.screen.flush()
        return True

    def read_key(self):
        if not self.keys:
            return "q"
        return self.keys.pop(0)


class _NoFlushOutput:
    # Records every flushed chunk separately

    def __init__(self):
        self.chunks = []

    def fileno(self):
        raise OSError("no file descriptor")

    def write(self, s):
        self.chunks.append(s)
        return len(s)

    def flush(self):
        pass


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def bounds():
    """The drawable region of a 79x23 terminal."""
    return Bounds(78, 22)


@pytest.fixture
def pty():
    """A pseudo-terminal pair as (master_fd, slave_file_in, slave_file_out),
    with the window set to 80x24."""
    try:
        master, slave = os.openpty()
    except OSError:
        pytest.skip("no pseudo-terminals available")

    set_winsize(master, 24, 80)
    infile = os.fdopen(slave, "rb", buffering=0)
    outfile = os.fdopen(os.dup(slave), "w", encoding="utf-8")
    try:
        yield master, infile, outfile
    finally:
        infile.close()
        outfile.close()
        os.close(master)
