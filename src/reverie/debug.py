"""--debug AST dump to stderr."""

from __future__ import annotations

import sys
from typing import TextIO

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
from reverie.span import Span


def dump_ast(source: bytes, ast: Ast, *, file: TextIO = sys.stderr) -> None:
    """Print a human-readable tree of the nodes reachable from the root."""
    _dump_node(source, ast, ast.root, 0, file)


def _indent(depth: int) -> str:
    return "  " * depth


def _excerpt(source: bytes, span: Span) -> str:
    return repr(span.slice(source).decode("utf-8", "replace"))


def _dump_node(source: bytes, ast: Ast, node_id: NodeId, depth: int, f: TextIO) -> None:
    node = ast[node_id]
    if isinstance(node, Group):
        f.write(f"{_indent(depth)}Group\n")
        for child in node.children:
            _dump_node(source, ast, child, depth + 1, f)
    elif isinstance(node, Paragraph):
        f.write(f"{_indent(depth)}Paragraph\n")
        for child in node.children:
            _dump_node(source, ast, child, depth + 1, f)
    elif isinstance(node, Text):
        f.write(f"{_indent(depth)}Text({_excerpt(source, node.span)})\n")
    elif isinstance(node, Command):
        name = node.name.slice(source).decode("ascii")
        f.write(f"{_indent(depth)}Command ~{name}\n")
        for arg in node.args:
            _dump_arg(source, ast, arg, depth + 1, f)


def _dump_arg(source: bytes, ast: Ast, arg: Argument, depth: int, f: TextIO) -> None:
    where = f"@{arg.span.start}..{arg.span.end}"
    if isinstance(arg, BlockArg):
        f.write(f"{_indent(depth)}Block {where}\n")
        for child in arg.children:
            _dump_node(source, ast, child, depth + 1, f)
    elif isinstance(arg, InlineArg):
        f.write(f"{_indent(depth)}Inline {where}\n")
        _dump_node(source, ast, arg.node, depth + 1, f)
    elif isinstance(arg, IdentArg):
        f.write(f"{_indent(depth)}Ident({_excerpt(source, arg.span)}) {where}\n")
    elif isinstance(arg, StringArg):
        f.write(f"{_indent(depth)}String({_excerpt(source, arg.span)}) {where}\n")
