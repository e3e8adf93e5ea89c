"""String literal processing and HTML escaping."""

from __future__ import annotations


def unescape_quotes(content: str) -> str:
    """Resolve the only string escape, backslash-quote, to a literal quote."""
    return content.replace('\\"', '"')


def split_lines(content: str) -> list[str]:
    """Split text into lines.

    Lines end at newline; a trailing carriage return is dropped from each
    line, and a final empty line (text ending in a newline) is not
    returned. Empty text has no lines.
    """
    if not content:
        return []
    lines = content.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def escape_html(text: str) -> str:
    """Escape text for HTML element content."""
    result: list[str] = []
    for ch in text:
        if ch == "&":
            result.append("&amp;")
        elif ch == "<":
            result.append("&lt;")
        elif ch == ">":
            result.append("&gt;")
        elif ch == '"':
            result.append("&quot;")
        else:
            result.append(ch)
    return "".join(result)
