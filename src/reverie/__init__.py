"""Reverie markup language compiler."""

from __future__ import annotations

from reverie.generator import generate
from reverie.parser import parse

__version__ = "0.1.0"

__all__ = ["compile", "generate", "parse"]


def compile(source: str | bytes) -> bytes:
    """Parse and generate Reverie source, returning UTF-8 HTML bytes."""
    if isinstance(source, str):
        source = source.encode("utf-8")
    ast = parse(source)
    return generate(source, ast)
