"""Byte spans, source positions, and byte classification helpers."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Span:
    """Half-open byte range [start, end) into the source buffer."""

    start: int
    end: int

    def slice(self, source: bytes) -> bytes:
        return source[self.start : self.end]

    def inner(self) -> Span:
        """The span with one byte trimmed from each side (quote contents)."""
        return Span(self.start + 1, self.end - 1)


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 1-based line and column, 0-based byte offset."""

    line: int
    column: int
    offset: int


def position_at(source: bytes, offset: int) -> Position:
    """Return the line/column position of a byte offset.

    Columns count decoded characters, so multi-byte UTF-8 sequences
    occupy a single column.
    """
    offset = min(offset, len(source))
    line = source.count(b"\n", 0, offset) + 1
    line_start = source.rfind(b"\n", 0, offset) + 1
    column = len(source[line_start:offset].decode("utf-8", "replace")) + 1
    return Position(line, column, offset)


SIGIL = b"~"
QUOTE = b'"'
BACKSLASH = b"\\"
NEWLINE = b"\n"

# Opening delimiter -> closing delimiter, and the reverse.
OPENERS: dict[bytes, bytes] = {b"(": b")", b"[": b"]", b"{": b"}"}
CLOSERS: dict[bytes, bytes] = {close: open_ for open_, close in OPENERS.items()}

_WHITESPACE = frozenset({b" ", b"\t", b"\n", b"\r", b"\x0c"})


def is_alpha(ch: bytes) -> bool:
    """Return True if ch is a single ASCII letter."""
    return len(ch) == 1 and ch.isalpha()


def is_whitespace(ch: bytes) -> bool:
    """Return True if ch is a single ASCII whitespace byte."""
    return ch in _WHITESPACE


def show_byte(ch: bytes) -> str:
    """Render a single byte for use in a diagnostic message."""
    if not ch:
        return "end of input"
    if ch == NEWLINE:
        return "newline"
    return f"`{ch.decode('utf-8', 'replace')}`"
