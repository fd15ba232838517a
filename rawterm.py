#!/usr/bin/env python3

# Copyright (c) 2026 pong contributors
# SPDX-License-Identifier: ISC

"""
rawterm -- raw-mode terminal session and ANSI drawing for pong

A small API built from the animation's requirements: per-keystroke
non-blocking input, cell-addressed drawing with 24-bit colors, and live
window size tracking through SIGWINCH.

Zero external dependencies. Uses only Python stdlib: termios, tty, signal,
os, sys. Unix only; any VT100-capable terminal with truecolor support.
"""

import atexit
import os
import signal
import sys
from collections import namedtuple

_IS_WINDOWS = os.name == "nt"

if not _IS_WINDOWS:
    import termios
    import tty


class TerminalError(Exception):
    """
    Raised when the controlling terminal cannot be set up, queried, or
    restored. The message is a one-line description of the failed step.
    """


# ---------------------------------------------------------------------------
# Colors
# ---------------------------------------------------------------------------


class Color:
    """Terminal color: default, one of the 16 named colors, 256-color index,
    or 24-bit RGB.

    The 16 named colors are available as class attributes, e.g. Color.RED and
    Color.BRIGHT_RED.
    """

    __slots__ = ("_kind", "_value")

    # kind: "default", "named", "index", "rgb"
    def __init__(self, kind, value):
        self._kind = kind
        self._value = value

    @staticmethod
    def rgb(r, g, b):
        """Create a 24-bit RGB color."""
        for c in (r, g, b):
            if not 0 <= c <= 255:
                raise ValueError(f"RGB component {c} outside range 0..255")
        return Color("rgb", (r, g, b))

    @staticmethod
    def index(n):
        """Create a color from xterm 256-color palette index."""
        if not 0 <= n <= 255:
            raise ValueError(f"palette index {n} outside range 0..255")
        return Color("index", n)

    def _sgr(self, base):
        # 'base' is 30 for the foreground and 40 for the background
        if self._kind == "default":
            return str(base + 9)
        if self._kind == "named":
            if self._value < 8:
                return str(base + self._value)
            return str(base + 60 + self._value - 8)
        if self._kind == "index":
            return f"{base + 8};5;{self._value}"
        return "{};2;{};{};{}".format(base + 8, *self._value)

    def sgr_fg(self):
        """Return the SGR parameters selecting this foreground color."""
        return self._sgr(30)

    def sgr_bg(self):
        """Return the SGR parameters selecting this background color."""
        return self._sgr(40)

    def __eq__(self, other):
        if not isinstance(other, Color):
            return NotImplemented
        return self._kind == other._kind and self._value == other._value

    def __hash__(self):
        return hash((self._kind, self._value))

    def __repr__(self):
        if self._kind == "default":
            return "Color.DEFAULT"
        if self._kind == "named":
            return "Color." + _COLOR_NAMES[self._value]
        if self._kind == "index":
            return f"Color.index({self._value})"
        return "Color.rgb({},{},{})".format(*self._value)


# Palette order of the 8 basic colors. Bright variants follow at 8-15.
_BASIC_COLORS = ("BLACK", "RED", "GREEN", "YELLOW", "BLUE", "MAGENTA", "CYAN", "WHITE")

_COLOR_NAMES = _BASIC_COLORS + tuple("BRIGHT_" + name for name in _BASIC_COLORS)

Color.DEFAULT = Color("default", None)
for _i, _name in enumerate(_COLOR_NAMES):
    setattr(Color, _name, Color("named", _i))
del _i, _name

# Map lowercase color names to Color constants (used when parsing PONG_COLOR).
# 'bright' variants are written without the underscore, e.g. "brightred".
NAMED_COLORS = {
    name.lower().replace("_", ""): getattr(Color, name) for name in _COLOR_NAMES
}
NAMED_COLORS["purple"] = Color.MAGENTA
NAMED_COLORS["brightpurple"] = Color.BRIGHT_MAGENTA


# ---------------------------------------------------------------------------
# Drawable region
# ---------------------------------------------------------------------------


class Bounds(namedtuple("Bounds", ("width", "height"))):
    """
    Size of the drawable region: the terminal minus its last column and last
    row, which are reserved for the status line. Cells are 1-indexed.
    """

    __slots__ = ()

    @classmethod
    def from_size(cls, columns, rows):
        return cls(columns - 1, rows - 1)


# ---------------------------------------------------------------------------
# Screen -- escape sequence output
# ---------------------------------------------------------------------------


class Screen:
    """
    Writes cursor movement, colors, and text to an output stream.

    Output is collected in memory and only reaches the stream on flush(), so a
    whole frame is handed to the terminal at once.
    """

    def __init__(self, output=None):
        self._output = output if output is not None else sys.stdout
        self._buf = []

    def write(self, text):
        """Queue plain text at the current cursor position."""
        self._buf.append(text)

    def clear(self):
        """Move the cursor home and erase the display."""
        self._buf.append("\x1b[H\x1b[2J")

    def clear_line(self):
        """Erase from the cursor to the end of the line."""
        self._buf.append("\x1b[0K")

    def move_cursor(self, pos):
        """Move the cursor to the cell 'pos' (x is the column, y the row)."""
        self._buf.append(f"\x1b[{int(pos.y)};{int(pos.x)}H")

    def set_color(self, fg, bg):
        self._buf.append(f"\x1b[{fg.sgr_fg()}m\x1b[{bg.sgr_bg()}m")

    def reset_style(self):
        self._buf.append("\x1b[0m")

    def show_cursor(self):
        self._buf.append("\x1b[?25h")

    def hide_cursor(self):
        self._buf.append("\x1b[?25l")

    def draw_cell(self, pos, color, glyph):
        """Paint one cell with 'glyph' in 'color' on 'color'. The style is
        reset afterwards."""
        self.move_cursor(pos)
        self.set_color(color, color)
        self._buf.append(glyph)
        self.reset_style()

    def start_graphics(self):
        self.clear()
        self.hide_cursor()

    def end_graphics(self):
        self.reset_style()
        self.show_cursor()
        self.clear()

    def flush(self):
        """Write queued output to the stream and flush it.

        OSErrors from writing (e.g. a broken pipe) propagate.
        """
        data = "".join(self._buf)
        self._buf = []

        try:
            fd = self._output.fileno()
        except (OSError, ValueError):
            # In-memory stream
            fd = None

        # stdin's O_NONBLOCK flag is shared with stdout when both refer to
        # the same tty. Ensure blocking I/O for the write.
        was_blocking = True
        if fd is not None:
            was_blocking = os.get_blocking(fd)
            if not was_blocking:
                os.set_blocking(fd, True)
        try:
            self._output.write(data)
            self._output.flush()
        finally:
            if not was_blocking:
                os.set_blocking(fd, False)


# ---------------------------------------------------------------------------
# Terminal
# ---------------------------------------------------------------------------


class Terminal:
    """
    Owns the controlling terminal: raw mode, non-blocking input, the current
    window size, and the SIGWINCH handler.

    infile/outfile:
      Input and output streams. Default to sys.stdin and sys.stdout. Both
      must be attached to a tty.

    Raises TerminalError if any setup step fails. Steps already performed are
    undone first, so a failed Terminal() leaves the terminal as it was.
    """

    def __init__(self, infile=None, outfile=None):
        if _IS_WINDOWS:
            raise TerminalError("pong requires a Unix terminal")

        self._in = infile if infile is not None else sys.stdin
        self._out = outfile if outfile is not None else sys.stdout

        _assert_is_tty(self._in, "stdin")
        _assert_is_tty(self._out, "stdout")

        self._fd = self._in.fileno()
        self._closed = False
        self._resize_pending = False
        self.screen = Screen(self._out)

        try:
            self._old_termios = termios.tcgetattr(self._fd)
        except termios.error:
            raise TerminalError("couldn't get terminal attributes") from None

        # Undo log for a partially completed setup
        self._undo = []
        try:
            self._init_unix()
            self._size = self.query_size()

            # Enter alternate screen, then clear and hide the cursor
            self.screen.write("\x1b[?1049h")
            self.screen.start_graphics()
            self.screen.flush()
        except BaseException:
            self._rollback()
            raise

    def _init_unix(self):
        """Set up Unix terminal: non-blocking stdin, raw mode, SIGWINCH."""
        try:
            was_blocking = os.get_blocking(self._fd)
            os.set_blocking(self._fd, False)
        except OSError:
            raise TerminalError("couldn't set stdin to non-blocking") from None
        self._undo.append(lambda: os.set_blocking(self._fd, was_blocking))

        try:
            # No line buffering, no echo, no signal characters
            tty.setraw(self._fd, termios.TCSANOW)
        except termios.error:
            raise TerminalError("couldn't set terminal attributes") from None
        self._undo.append(
            lambda: termios.tcsetattr(self._fd, termios.TCSANOW, self._old_termios)
        )

        try:
            old_sigwinch = signal.signal(signal.SIGWINCH, self._sigwinch_handler)
        except (OSError, ValueError):
            raise TerminalError("couldn't set handler for resize signal") from None
        self._undo.append(lambda: signal.signal(signal.SIGWINCH, old_sigwinch))

    def _rollback(self):
        # Every step is undone even if undoing a later one fails. The first
        # error is re-raised afterwards.
        error = None
        while self._undo:
            try:
                self._undo.pop()()
            except (termios.error, OSError, ValueError) as e:
                if error is None:
                    error = e
        if error is not None:
            raise error

    def close(self):
        """Restore the terminal to its state before Terminal() was created.

        Only the first call has an effect.
        """
        if self._closed:
            return
        self._closed = True

        self.screen.end_graphics()
        # Leave alternate screen
        self.screen.write("\x1b[?1049l")
        try:
            self.screen.flush()
        finally:
            try:
                self._rollback()
            except termios.error:
                raise TerminalError("couldn't set terminal attributes") from None

    @property
    def bounds(self):
        """The current drawable region, derived from the latest window size."""
        return Bounds.from_size(*self._size)

    def query_size(self):
        """Return the terminal's (columns, rows) without changing internal
        state."""
        try:
            columns, rows = os.get_terminal_size(self._out.fileno())
        except OSError:
            raise TerminalError("unable to get window size") from None
        # Some pseudo-terminals report 0x0 until their size is first set
        return max(columns, 1), max(rows, 1)

    def _sigwinch_handler(self, signum, frame):
        """SIGWINCH: set flag, don't resize mid-frame."""
        self._resize_pending = True

    def check_resize(self):
        """Check and handle pending resize.

        Returns True if the window size was refreshed. The screen is cleared
        so that nothing drawn for the old geometry lingers.
        """
        if not self._resize_pending:
            return False

        self._resize_pending = False
        # A single assignment, so readers see either the old or the new size
        self._size = self.query_size()
        self.screen.clear()
        self.screen.flush()
        return True

    # --- Input ---

    def read_key(self):
        """Return the next pending key as a one-character string, or None if
        no key has been pressed. Never blocks."""
        try:
            data = os.read(self._fd, 1)
        except BlockingIOError:
            return None

        if not data:
            return None

        return data.decode("latin-1")


def _assert_is_tty(stream, name):
    try:
        if os.isatty(stream.fileno()):
            return
    except (OSError, ValueError):
        pass
    raise TerminalError(f"{name} is not a tty")


# ---------------------------------------------------------------------------
# Safe entry point
# ---------------------------------------------------------------------------


def run(fn, infile=None, outfile=None):
    """Safe wrapper: init terminal, call fn(terminal), restore on exit.

    Catches KeyboardInterrupt and always restores terminal state. Nothing is
    restored if the terminal could not be initialized.
    """
    term = None
    try:
        term = Terminal(infile, outfile)
        # Register atexit as safety net
        atexit.register(term.close)
        return fn(term)
    except KeyboardInterrupt:
        pass
    finally:
        if term:
            term.close()
            atexit.unregister(term.close)
