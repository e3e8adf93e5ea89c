"""Reverie parser — converts source bytes directly into an arena AST."""

from __future__ import annotations

from reverie.ast import (
    Argument,
    Ast,
    BlockArg,
    Command,
    Group,
    IdentArg,
    InlineArg,
    NodeId,
    Paragraph,
    StringArg,
    Text,
)
from reverie.errors import ExpectedArgs, ExpectedFound, UnbalancedDelimiter
from reverie.span import (
    BACKSLASH,
    CLOSERS,
    NEWLINE,
    OPENERS,
    QUOTE,
    SIGIL,
    Span,
    is_alpha,
    is_whitespace,
)


class Parser:
    """Recursive descent parser for Reverie source bytes.

    The parser keeps a stack of open delimiters, updated every time the
    cursor crosses a bracket. Argument rules record the stack depth they
    own in `_frames`; a text run stops at a closer only when no prose
    opener sits above that depth, so brackets opened in prose may close
    on a later line.
    """

    def __init__(self, source: bytes) -> None:
        self._source = source
        self._pos = 0
        self._delims: list[bytes] = []
        self._frames: list[int] = [0]
        self._ast = Ast()

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def _at_end(self) -> bool:
        return self._pos >= len(self._source)

    def _peek(self) -> bytes:
        return self._source[self._pos : self._pos + 1]

    def _previous(self) -> bytes:
        if self._pos == 0:
            return b""
        return self._source[self._pos - 1 : self._pos]

    def _bump(self) -> None:
        ch = self._peek()
        if ch in OPENERS:
            self._delims.append(ch)
        elif ch in CLOSERS:
            opener = CLOSERS[ch]
            if not self._delims:
                raise UnbalancedDelimiter(None, ch, self._here(), self._source)
            if self._delims[-1] != opener:
                expected = OPENERS[self._delims[-1]]
                raise UnbalancedDelimiter(expected, ch, self._here(), self._source)
            self._delims.pop()
        self._pos += 1

    def _skip_raw(self) -> None:
        """Advance one byte without touching the delimiter stack."""
        self._pos += 1

    def _eat_whitespace(self) -> None:
        while not self._at_end() and is_whitespace(self._peek()):
            self._bump()

    def _expect(self, expected: bytes) -> None:
        found = self._peek()
        if found != expected:
            raise ExpectedFound(expected, found, self._here(), self._source)
        self._bump()

    def _at_frame(self) -> bool:
        """True when every open delimiter belongs to an enclosing argument."""
        return len(self._delims) == self._frames[-1]

    def _here(self) -> Span:
        """Span of the byte under the cursor (empty at end of input)."""
        return Span(self._pos, min(self._pos + 1, len(self._source)))

    # ------------------------------------------------------------------
    # Document level
    # ------------------------------------------------------------------

    def parse(self) -> Ast:
        blocks: list[NodeId] = []
        while True:
            self._eat_whitespace()
            if self._at_end():
                break
            ch = self._peek()
            if ch in CLOSERS and not self._delims:
                # Nothing is open, so this closer has no owner.
                raise UnbalancedDelimiter(None, ch, self._here(), self._source)
            blocks.append(self._parse_block())
        self._ast.root = self._ast.push(Group(tuple(blocks)))
        return self._ast

    def _parse_block(self) -> NodeId:
        if self._peek() == SIGIL:
            return self._parse_command(blocks=True)
        return self._ast.push(Paragraph(tuple(self._parse_text_section())))

    def _parse_inline(self) -> NodeId:
        if self._peek() == SIGIL:
            return self._parse_command(blocks=False)
        return self._ast.push(Group(tuple(self._parse_text_section())))

    # ------------------------------------------------------------------
    # Text
    # ------------------------------------------------------------------

    def _parse_text_section(self) -> list[NodeId]:
        nodes: list[NodeId] = []
        start = self._pos

        while not self._at_end():
            ch = self._peek()
            if ch == SIGIL:
                self._push_text(nodes, start)
                nodes.append(self._parse_command(blocks=False))
                start = self._pos
            elif ch == NEWLINE:
                end = self._pos - 1 if self._previous() == b"\r" else self._pos
                self._push_text(nodes, start, end)
                self._bump()
                return nodes
            elif ch in CLOSERS and self._at_frame():
                # Closes something opened by our caller; leave it there.
                break
            else:
                self._bump()

        self._push_text(nodes, start)
        return nodes

    def _push_text(self, nodes: list[NodeId], start: int, end: int | None = None) -> None:
        if end is None:
            end = self._pos
        if start < end:
            nodes.append(self._ast.push(Text(Span(start, end))))

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def _parse_command(self, blocks: bool) -> NodeId:
        self._bump()  # consume SIGIL
        name_start = self._pos
        while is_alpha(self._peek()):
            self._bump()
        name = Span(name_start, self._pos)

        self._eat_whitespace()

        ch = self._peek()
        args: tuple[Argument, ...]
        if ch == b"(":
            args = tuple(self._parse_parenthesized_args(blocks))
        elif ch == b"[":
            args = (self._parse_bracketed_arg(),)
        elif ch == b"{" and blocks:
            args = (self._parse_braced_arg(),)
        else:
            raise ExpectedArgs(ch, self._here(), self._source)

        return self._ast.push(Command(name, args))

    # ------------------------------------------------------------------
    # Arguments
    # ------------------------------------------------------------------

    def _parse_parenthesized_args(self, blocks: bool) -> list[Argument]:
        args: list[Argument] = []
        self._bump()  # consume (
        while not self._at_end():
            self._eat_whitespace()
            ch = self._peek()
            if ch == b")":
                break
            if ch == b"[":
                args.append(self._parse_bracketed_arg())
            elif ch == b"{" and blocks:
                args.append(self._parse_braced_arg())
            elif ch == QUOTE:
                args.append(self._parse_string_arg())
            elif is_alpha(ch):
                args.append(self._parse_ident_arg())
            else:
                raise ExpectedArgs(ch, self._here(), self._source)

            self._eat_whitespace()
            if self._peek() != b")":
                self._expect(b",")

        self._expect(b")")
        return args

    def _parse_bracketed_arg(self) -> InlineArg:
        start = self._pos
        self._bump()  # consume [
        self._frames.append(len(self._delims))
        node = self._parse_inline()
        self._frames.pop()
        self._expect(b"]")
        return InlineArg(node, Span(start, self._pos))

    def _parse_braced_arg(self) -> BlockArg:
        start = self._pos
        self._bump()  # consume {
        self._frames.append(len(self._delims))
        children: list[NodeId] = []
        while True:
            self._eat_whitespace()
            if self._at_end() or (self._peek() in CLOSERS and self._at_frame()):
                break
            children.append(self._parse_block())
        self._frames.pop()
        self._expect(b"}")
        return BlockArg(tuple(children), Span(start, self._pos))

    def _parse_ident_arg(self) -> IdentArg:
        start = self._pos
        while is_alpha(self._peek()):
            self._bump()
        return IdentArg(Span(start, self._pos))

    def _parse_string_arg(self) -> StringArg:
        start = self._pos
        self._skip_raw()  # consume opening quote
        # String contents are opaque: brackets inside quotes are not tracked.
        while not self._at_end() and (self._peek() != QUOTE or self._previous() == BACKSLASH):
            self._skip_raw()
        if self._at_end():
            raise ExpectedFound(QUOTE, b"", self._here(), self._source)
        self._skip_raw()  # consume closing quote
        return StringArg(Span(start, self._pos))


def parse(source: bytes) -> Ast:
    """Convenience function: parse source bytes and return the AST."""
    return Parser(source).parse()
