"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from reverie import compile
from reverie.ast import Ast, Command, Group, Node, Paragraph, Text
from reverie.parser import parse


@pytest.fixture
def parse_source():
    """Return a helper that parses str source and returns (source bytes, Ast)."""

    def _parse(source: str) -> tuple[bytes, Ast]:
        data = source.encode("utf-8")
        return data, parse(data)

    return _parse


@pytest.fixture
def blocks(parse_source):
    """Return a helper that parses source and returns the root's child nodes."""

    def _blocks(source: str) -> tuple[bytes, Ast, list[Node]]:
        data, ast = parse_source(source)
        root = ast[ast.root]
        assert isinstance(root, Group)
        return data, ast, [ast[child] for child in root.children]

    return _blocks


@pytest.fixture
def html():
    """Return a helper that compiles str source and returns the HTML as str."""

    def _html(source: str) -> str:
        return compile(source).decode("utf-8")

    return _html


@pytest.fixture
def flatten():
    """Return a helper that concatenates every Text span under a node."""

    def _flatten(data: bytes, ast: Ast, node: Node) -> str:
        if isinstance(node, Text):
            return node.span.slice(data).decode("utf-8")
        if isinstance(node, (Group, Paragraph)):
            return "".join(_flatten(data, ast, ast[c]) for c in node.children)
        if isinstance(node, Command):
            return ""
        raise TypeError(f"Cannot flatten {type(node).__name__}")

    return _flatten
