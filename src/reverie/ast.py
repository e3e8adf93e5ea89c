"""AST node types and the node arena for parsed Reverie documents."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import NewType

from reverie.span import Span

NodeId = NewType("NodeId", int)


@dataclass(frozen=True, slots=True)
class Group:
    """Transparent run of nodes (inline runs and the document root)."""

    children: tuple[NodeId, ...]


@dataclass(frozen=True, slots=True)
class Paragraph:
    """Run of nodes rendered inside <p>."""

    children: tuple[NodeId, ...]


@dataclass(frozen=True, slots=True)
class Text:
    """Literal source bytes, emitted verbatim."""

    span: Span


@dataclass(frozen=True, slots=True)
class Command:
    """A ~name invocation. Argument shapes are checked by the generator."""

    name: Span
    args: tuple[Argument, ...]


@dataclass(frozen=True, slots=True)
class BlockArg:
    """Braced argument: zero or more block-level nodes."""

    children: tuple[NodeId, ...]
    span: Span


@dataclass(frozen=True, slots=True)
class InlineArg:
    """Bracketed argument: exactly one inline-level node."""

    node: NodeId
    span: Span


@dataclass(frozen=True, slots=True)
class IdentArg:
    """Bare alphabetic identifier."""

    span: Span


@dataclass(frozen=True, slots=True)
class StringArg:
    """Quoted literal. The span includes both quote characters."""

    span: Span


Node = Group | Paragraph | Text | Command
Argument = BlockArg | InlineArg | IdentArg | StringArg


class Ast:
    """Append-only node arena. Nodes are addressed by NodeId handles."""

    def __init__(self) -> None:
        self._nodes: list[Node] = []
        self.root = NodeId(0)

    def push(self, node: Node) -> NodeId:
        self._nodes.append(node)
        return NodeId(len(self._nodes) - 1)

    def __getitem__(self, node_id: NodeId) -> Node:
        return self._nodes[node_id]

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[Node]:
        return iter(self._nodes)
