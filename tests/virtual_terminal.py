"""Virtual terminal for testing -- implements the Terminal protocol in-memory.

This module provides a ``VirtualTerminal`` class that satisfies the
``teleport_ui.tui.terminal.Terminal`` protocol without performing any real
I/O. All output is captured in a buffer for assertions.
"""

from __future__ import annotations

from typing import Callable


class VirtualTerminal:
    """In-memory terminal that records all writes for test inspection.

    Parameters
    ----------
    rows:
        Number of terminal rows (height).
    columns:
        Number of terminal columns (width).
    fail_start:
        Raise this exception from ``start`` instead of starting.
    """

    def __init__(
        self,
        rows: int = 24,
        columns: int = 80,
        fail_start: Exception | None = None,
    ) -> None:
        self._rows = rows
        self._columns = columns
        self._fail_start = fail_start
        self._buffer: list[str] = []
        self.started = False
        self.stopped = False
        self._input_handler: Callable[[str], None] | None = None
        self._resize_handler: Callable[[], None] | None = None
        self._eof_handler: Callable[[], None] | None = None
        self.cursor_visible = True

    # -- Terminal protocol: properties --------------------------------------

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def columns(self) -> int:
        return self._columns

    # -- Terminal protocol: lifecycle ---------------------------------------

    def start(
        self,
        on_input: Callable[[str], None],
        on_resize: Callable[[], None],
        on_eof: Callable[[], None] | None = None,
    ) -> None:
        if self._fail_start is not None:
            raise self._fail_start
        self._input_handler = on_input
        self._resize_handler = on_resize
        self._eof_handler = on_eof
        self.started = True

    def stop(self) -> None:
        self.stopped = True
        self._input_handler = None
        self._resize_handler = None
        self._eof_handler = None

    # -- Terminal protocol: output ------------------------------------------

    def write(self, data: str) -> None:
        """Append *data* to the internal buffer."""
        self._buffer.append(data)

    def move_by(self, lines: int) -> None:
        if lines < 0:
            self.write(f"\x1b[{-lines}A")
        elif lines > 0:
            self.write(f"\x1b[{lines}B")

    def hide_cursor(self) -> None:
        self.cursor_visible = False
        self.write("\x1b[?25l")

    def show_cursor(self) -> None:
        self.cursor_visible = True
        self.write("\x1b[?25h")

    def clear_from_cursor(self) -> None:
        self.write("\x1b[0J")

    # -- Test helpers -------------------------------------------------------

    @property
    def output(self) -> str:
        """Return everything written to the terminal as a single string."""
        return "".join(self._buffer)

    @property
    def running(self) -> bool:
        return self.started and not self.stopped

    def simulate_input(self, data: str) -> None:
        """Feed *data* into the registered input handler.

        Raises ``RuntimeError`` if no input handler has been registered
        (i.e. ``start`` was not called).
        """
        if self._input_handler is None:
            raise RuntimeError(
                "No input handler registered -- call start() first"
            )
        self._input_handler(data)

    def simulate_resize(self, rows: int | None = None, columns: int | None = None) -> None:
        """Change terminal dimensions and fire the resize callback."""
        if rows is not None:
            self._rows = rows
        if columns is not None:
            self._columns = columns
        if self._resize_handler is not None:
            self._resize_handler()

    def simulate_eof(self) -> None:
        """Signal that the input stream has closed."""
        if self._eof_handler is not None:
            self._eof_handler()
