"""StdinBuffer buffers input and emits complete key sequences.

Stdin reads can split an escape sequence across chunks (``"\\x1b["`` then
``"A"``) or join several keys in one chunk (``"ab\\x1b[B"``). The buffer
re-frames the stream so each emitted string is one key press, and collects
bracketed pastes into a single paste event.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable

logger = logging.getLogger(__name__)

ESC = "\x1b"
BRACKETED_PASTE_START = "\x1b[200~"
BRACKETED_PASTE_END = "\x1b[201~"

COMPLETE = "complete"
INCOMPLETE = "incomplete"


def sequence_status(data: str) -> str:
    """Classify *data*, which starts with ESC, as complete or incomplete."""
    if len(data) == 1:
        return INCOMPLETE

    introducer = data[1]

    # CSI: ESC [ params final-byte(0x40-0x7E)
    if introducer == "[":
        if len(data) < 3:
            return INCOMPLETE
        return COMPLETE if 0x40 <= ord(data[-1]) <= 0x7E else INCOMPLETE

    # SS3: ESC O <char>
    if introducer == "O":
        return COMPLETE if len(data) >= 3 else INCOMPLETE

    # OSC / DCS / APC: terminated by BEL or ST
    if introducer in "]P_":
        if data.endswith("\x07") or data.endswith(f"{ESC}\\"):
            return COMPLETE
        return INCOMPLETE

    # Meta key: ESC followed by one character
    return COMPLETE


def split_sequences(buffer: str) -> tuple[list[str], str]:
    """Split *buffer* into complete sequences.

    Returns ``(sequences, remainder)`` where *remainder* is a trailing
    escape sequence that still needs more data.
    """
    sequences: list[str] = []
    pos = 0

    while pos < len(buffer):
        if buffer[pos] != ESC:
            sequences.append(buffer[pos])
            pos += 1
            continue

        end = pos + 1
        while True:
            if end > len(buffer):
                return sequences, buffer[pos:]
            if sequence_status(buffer[pos:end]) == COMPLETE:
                break
            end += 1

        sequences.append(buffer[pos:end])
        pos = end

    return sequences, ""


class StdinBuffer:
    """Buffers stdin input and emits complete sequences.

    A lone trailing ESC is held for *timeout* seconds; if nothing follows it
    is emitted as a plain escape key press.
    """

    def __init__(self, *, timeout: float = 0.01) -> None:
        self._buffer: str = ""
        self._timeout: float = timeout
        self._timeout_handle: asyncio.TimerHandle | None = None
        self._paste_buffer: str | None = None

        self._on_data: Callable[[str], None] | None = None
        self._on_paste: Callable[[str], None] | None = None

    def on_data(self, callback: Callable[[str], None]) -> None:
        """Set callback for complete sequences."""
        self._on_data = callback

    def on_paste(self, callback: Callable[[str], None]) -> None:
        """Set callback for paste content."""
        self._on_paste = callback

    def process(self, data: str) -> None:
        """Feed input data into the buffer."""
        self._cancel_timeout()
        self._buffer += data

        while self._buffer:
            if self._paste_buffer is not None:
                if not self._consume_paste():
                    return
                continue

            start = self._buffer.find(BRACKETED_PASTE_START)
            head = self._buffer if start == -1 else self._buffer[:start]
            sequences, remainder = split_sequences(head)
            for sequence in sequences:
                self._emit_data(sequence)

            if start == -1:
                self._buffer = remainder
                break

            # A partial sequence before a paste marker cannot complete any more.
            if remainder:
                self._emit_data(remainder)
            self._buffer = self._buffer[start + len(BRACKETED_PASTE_START) :]
            self._paste_buffer = ""

        if self._buffer:
            self._schedule_timeout()

    def flush(self) -> list[str]:
        """Return and clear whatever is held, without emitting it."""
        self._cancel_timeout()
        if not self._buffer:
            return []
        sequences = [self._buffer]
        self._buffer = ""
        return sequences

    def clear(self) -> None:
        self._cancel_timeout()
        self._buffer = ""
        self._paste_buffer = None

    def destroy(self) -> None:
        self.clear()
        self._on_data = None
        self._on_paste = None

    # -- private -----------------------------------------------------------

    def _consume_paste(self) -> bool:
        """Move buffered text into the paste; return ``True`` once it ends."""
        assert self._paste_buffer is not None
        self._paste_buffer += self._buffer
        self._buffer = ""

        end = self._paste_buffer.find(BRACKETED_PASTE_END)
        if end == -1:
            return False

        content = self._paste_buffer[:end]
        self._buffer = self._paste_buffer[end + len(BRACKETED_PASTE_END) :]
        self._paste_buffer = None
        self._emit_paste(content)
        return True

    def _schedule_timeout(self) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No event loop - flush immediately
            self._flush_timeout()
            return
        self._timeout_handle = loop.call_later(self._timeout, self._flush_timeout)

    def _cancel_timeout(self) -> None:
        if self._timeout_handle is not None:
            self._timeout_handle.cancel()
            self._timeout_handle = None

    def _flush_timeout(self) -> None:
        self._timeout_handle = None
        for sequence in self.flush():
            self._emit_data(sequence)

    def _emit_data(self, data: str) -> None:
        if self._on_data:
            self._on_data(data)

    def _emit_paste(self, data: str) -> None:
        logger.debug("bracketed paste of %d characters", len(data))
        if self._on_paste:
            self._on_paste(data)
