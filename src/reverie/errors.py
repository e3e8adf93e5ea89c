"""Error types with formatted source context."""

from __future__ import annotations

from reverie.span import Span, position_at, show_byte


class CompileError(Exception):
    """Raised on the first compile error, with span and source context."""

    def __init__(self, message: str, span: Span, source: bytes) -> None:
        self.message = message
        self.span = span
        self.source = source
        super().__init__(self.format())

    def format(self, filename: str = "input.rev") -> str:
        start = position_at(self.source, self.span.start)
        end = position_at(self.source, self.span.end)
        lines = self.source.split(b"\n")
        line_idx = start.line - 1
        col = start.column

        if 0 <= line_idx < len(lines):
            source_line = lines[line_idx].rstrip(b"\r").decode("utf-8", "replace")
        else:
            source_line = ""

        # Underline the full span when on one line, otherwise to end of line
        if end.line == start.line:
            underline_len = max(1, end.column - col)
        else:
            underline_len = max(1, len(source_line) - col + 1)

        pad = " " * (col - 1)
        carets = "^" * underline_len

        line_num = str(start.line)
        gutter_width = len(line_num) + 1

        blank_gutter = " " * gutter_width + "|"
        line_gutter = f"{line_num:>{gutter_width - 1}} |"

        return (
            f"error: {self.message}\n"
            f"{' ' * gutter_width}--> {filename}:{start.line}:{col}\n"
            f"{blank_gutter}\n"
            f"{line_gutter} {source_line}\n"
            f"{blank_gutter} {pad}{carets}"
        )


# ---------------------------------------------------------------------------
# Parse errors
# ---------------------------------------------------------------------------


class ParseError(CompileError):
    """Raised by the parser."""


class ExpectedFound(ParseError):
    """A specific delimiter byte was expected but another was found."""

    def __init__(self, expected: bytes, found: bytes, span: Span, source: bytes) -> None:
        self.expected = expected
        self.found = found
        super().__init__(f"expected {show_byte(expected)}, found {show_byte(found)}", span, source)


class ExpectedArgs(ParseError):
    """The byte after a command name (or in an argument list) opens no argument."""

    def __init__(self, found: bytes, span: Span, source: bytes) -> None:
        self.found = found
        super().__init__(f"expected arguments, found {show_byte(found)}", span, source)


class UnbalancedDelimiter(ParseError):
    """A closing delimiter does not match the innermost open one."""

    def __init__(self, expected: bytes | None, found: bytes, span: Span, source: bytes) -> None:
        self.expected = expected
        self.found = found
        if expected is None:
            message = f"unmatched closing {show_byte(found)}"
        else:
            message = f"mismatched closing {show_byte(found)}, expected {show_byte(expected)}"
        super().__init__(message, span, source)


# ---------------------------------------------------------------------------
# Generate errors
# ---------------------------------------------------------------------------


class GenerateError(CompileError):
    """Raised by the generator."""


class IncorrectArgCount(GenerateError):
    def __init__(self, expected: int, found: int, span: Span, source: bytes) -> None:
        self.expected = expected
        self.found = found
        noun = "argument" if expected == 1 else "arguments"
        super().__init__(f"expected {expected} {noun}, found {found}", span, source)


class ExpectedInlineArg(GenerateError):
    def __init__(self, span: Span, source: bytes) -> None:
        super().__init__("expected an inline argument", span, source)


class ExpectedBlockArg(GenerateError):
    def __init__(self, span: Span, source: bytes) -> None:
        super().__init__("expected a block argument", span, source)


class ExpectedIdentArg(GenerateError):
    def __init__(self, span: Span, source: bytes) -> None:
        super().__init__("expected an identifier argument", span, source)


class ExpectedStringArg(GenerateError):
    def __init__(self, span: Span, source: bytes) -> None:
        super().__init__("expected a string argument", span, source)


class UnknownCommand(GenerateError):
    def __init__(self, name: str, span: Span, source: bytes) -> None:
        self.name = name
        super().__init__(f"unknown command `~{name}`", span, source)


class UnknownCodeLanguage(GenerateError):
    """A code block's file name has an extension with no known language."""

    def __init__(self, extension: str, span: Span, source: bytes) -> None:
        self.extension = extension
        if extension:
            message = f"unknown code block file extension `{extension}`"
        else:
            message = "code block file name has no extension"
        super().__init__(message, span, source)
