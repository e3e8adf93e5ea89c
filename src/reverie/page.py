"""Standalone page wrapper — places a compiled fragment in a full HTML document."""

from __future__ import annotations

from reverie.strings import escape_html


def render_page(
    fragment: bytes,
    title: str,
    lang: str | None = None,
    css_files: list[str] | None = None,
) -> bytes:
    """Wrap an HTML fragment in a complete document with a <head>."""
    parts: list[str] = ["<!DOCTYPE html>\n"]
    if lang:
        parts.append(f'<html lang="{escape_html(lang)}">\n')
    else:
        parts.append("<html>\n")
    parts.append("<head>\n")
    parts.append('<meta charset="utf-8">\n')
    parts.append(f"<title>{escape_html(title)}</title>\n")
    for path in css_files or []:
        parts.append(f'<link rel="stylesheet" href="{escape_html(path)}">\n')
    parts.append("</head>\n")
    parts.append("<body>\n<main>\n")

    head = "".join(parts).encode("utf-8")
    return head + fragment + b"\n</main>\n</body>\n</html>\n"
