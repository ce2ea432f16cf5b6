"""Terminal abstraction for raw-mode stdin/stdout interaction.

Provides a ``Terminal`` protocol and a concrete ``ProcessTerminal``
implementation that manages raw mode, bracketed paste, cursor visibility,
and SIGWINCH-based resize detection via ANSI escape sequences.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import os
import signal
import sys
import termios
import tty
from typing import Callable, Protocol

from teleport_ui.tui.stdin_buffer import StdinBuffer

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# ANSI escape constants
# ---------------------------------------------------------------------------

_BRACKETED_PASTE_ENABLE = "\x1b[?2004h"
_BRACKETED_PASTE_DISABLE = "\x1b[?2004l"
_BRACKETED_PASTE_START = "\x1b[200~"
_BRACKETED_PASTE_END = "\x1b[201~"

_HIDE_CURSOR = "\x1b[?25l"
_SHOW_CURSOR = "\x1b[?25h"
_CLEAR_FROM_CURSOR = "\x1b[0J"
_CURSOR_UP_FMT = "\x1b[{}A"
_CURSOR_DOWN_FMT = "\x1b[{}B"


class TerminalError(RuntimeError):
    """The terminal could not be put into interactive mode."""


# ---------------------------------------------------------------------------
# Terminal protocol
# ---------------------------------------------------------------------------


class Terminal(Protocol):
    """Interface for terminal I/O operations."""

    def start(
        self,
        on_input: Callable[[str], None],
        on_resize: Callable[[], None],
        on_eof: Callable[[], None] | None = None,
    ) -> None: ...

    def stop(self) -> None: ...

    def write(self, data: str) -> None: ...

    @property
    def columns(self) -> int: ...

    @property
    def rows(self) -> int: ...

    def move_by(self, lines: int) -> None: ...

    def hide_cursor(self) -> None: ...

    def show_cursor(self) -> None: ...

    def clear_from_cursor(self) -> None: ...


# ---------------------------------------------------------------------------
# ProcessTerminal implementation
# ---------------------------------------------------------------------------


class ProcessTerminal:
    """Concrete terminal implementation backed by ``sys.stdin``/``sys.stdout``.

    Manages raw mode via :mod:`tty` and :mod:`termios`, bracketed paste
    mode, and SIGWINCH-based resize detection. Input is read through the
    running asyncio loop, so :meth:`start` must be called from a coroutine.
    """

    def __init__(self) -> None:
        self._input_handler: Callable[[str], None] | None = None
        self._resize_handler: Callable[[], None] | None = None
        self._eof_handler: Callable[[], None] | None = None
        self._stdin_buffer: StdinBuffer | None = None
        self._loop: asyncio.AbstractEventLoop | None = None
        self._original_termios: list | None = None
        self._prev_sigwinch_handler: signal.Handlers | None = None

    # -- properties ---------------------------------------------------------

    @property
    def columns(self) -> int:
        try:
            return os.get_terminal_size(sys.stdout.fileno()).columns
        except (ValueError, OSError):
            return 0

    @property
    def rows(self) -> int:
        try:
            return os.get_terminal_size(sys.stdout.fileno()).lines
        except (ValueError, OSError):
            return 0

    # -- start / stop -------------------------------------------------------

    def start(
        self,
        on_input: Callable[[str], None],
        on_resize: Callable[[], None],
        on_eof: Callable[[], None] | None = None,
    ) -> None:
        """Enable raw mode, bracketed paste, and begin reading stdin.

        Raises :class:`TerminalError` when stdin is not an interactive
        terminal. On failure nothing is left modified.
        """
        try:
            fd = sys.stdin.fileno()
        except (AttributeError, ValueError, OSError) as e:
            raise TerminalError(f"stdin is not available: {e}") from e
        if not os.isatty(fd):
            raise TerminalError("stdin is not a terminal")

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError as e:
            raise TerminalError("ProcessTerminal.start() needs a running event loop") from e

        try:
            original = termios.tcgetattr(fd)
        except termios.error as e:
            raise TerminalError(f"cannot read terminal attributes: {e}") from e

        try:
            tty.setraw(fd)
        except termios.error as e:
            termios.tcsetattr(fd, termios.TCSADRAIN, original)
            raise TerminalError(f"cannot enter raw mode: {e}") from e

        self._original_termios = original
        self._input_handler = on_input
        self._resize_handler = on_resize
        self._eof_handler = on_eof
        self._loop = loop

        try:
            self._setup_stdin_buffer()
            loop.add_reader(fd, self._on_stdin_readable)

            # Set up SIGWINCH handler for resize events
            self._prev_sigwinch_handler = signal.getsignal(signal.SIGWINCH)
            signal.signal(signal.SIGWINCH, self._on_sigwinch)

            self.write(_BRACKETED_PASTE_ENABLE)
        except BaseException:
            self.stop()
            raise
        logger.debug("terminal started (%dx%d)", self.columns, self.rows)

    def stop(self) -> None:
        """Restore terminal state and clean up all handlers.

        Safe to call more than once, and after a failed :meth:`start`.
        """
        if self._original_termios is None:
            return

        with contextlib.suppress(OSError):
            self.write(_BRACKETED_PASTE_DISABLE + _SHOW_CURSOR)

        if self._stdin_buffer is not None:
            self._stdin_buffer.destroy()
            self._stdin_buffer = None

        fd = sys.stdin.fileno()
        if self._loop is not None:
            with contextlib.suppress(ValueError, RuntimeError):
                self._loop.remove_reader(fd)
            self._loop = None

        if self._prev_sigwinch_handler is not None:
            signal.signal(signal.SIGWINCH, self._prev_sigwinch_handler)
            self._prev_sigwinch_handler = None

        termios.tcsetattr(fd, termios.TCSADRAIN, self._original_termios)
        self._original_termios = None

        self._input_handler = None
        self._resize_handler = None
        self._eof_handler = None
        logger.debug("terminal restored")

    # -- write --------------------------------------------------------------

    def write(self, data: str) -> None:
        """Write directly to stdout, bypassing buffering."""
        sys.stdout.write(data)
        sys.stdout.flush()

    # -- cursor / screen manipulation --------------------------------------

    def move_by(self, lines: int) -> None:
        """Move the cursor up (negative) or down (positive) by *lines*."""
        if lines < 0:
            self.write(_CURSOR_UP_FMT.format(-lines))
        elif lines > 0:
            self.write(_CURSOR_DOWN_FMT.format(lines))

    def hide_cursor(self) -> None:
        self.write(_HIDE_CURSOR)

    def show_cursor(self) -> None:
        self.write(_SHOW_CURSOR)

    def clear_from_cursor(self) -> None:
        self.write(_CLEAR_FROM_CURSOR)

    # -- private: stdin reading --------------------------------------------

    def _setup_stdin_buffer(self) -> None:
        """Create the :class:`StdinBuffer` and wire up handlers."""
        self._stdin_buffer = StdinBuffer(timeout=0.01)

        def _on_buffer_data(data: str) -> None:
            if self._input_handler is not None:
                self._input_handler(data)

        def _on_buffer_paste(data: str) -> None:
            # Re-wrap with bracketed paste markers and forward
            if self._input_handler is not None:
                self._input_handler(
                    _BRACKETED_PASTE_START + data + _BRACKETED_PASTE_END
                )

        self._stdin_buffer.on_data(_on_buffer_data)
        self._stdin_buffer.on_paste(_on_buffer_paste)

    def _on_stdin_readable(self) -> None:
        """Callback invoked by the event loop when stdin has data."""
        fd = sys.stdin.fileno()
        try:
            raw = os.read(fd, 4096)
        except OSError:
            return

        if not raw:
            # EOF: stop polling a descriptor that will stay readable forever.
            logger.debug("stdin closed")
            if self._loop is not None:
                self._loop.remove_reader(fd)
            if self._eof_handler is not None:
                self._eof_handler()
            return

        data = raw.decode("utf-8", errors="replace")
        if self._stdin_buffer is not None:
            self._stdin_buffer.process(data)

    # -- private: SIGWINCH -------------------------------------------------

    def _on_sigwinch(
        self,
        signum: int,
        frame: object,
    ) -> None:
        """Handle terminal resize signals on the event loop."""
        if self._resize_handler is not None and self._loop is not None:
            self._loop.call_soon_threadsafe(self._resize_handler)
