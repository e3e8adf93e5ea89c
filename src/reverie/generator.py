"""HTML generator — walks the AST once, appending HTML to a byte buffer."""

from __future__ import annotations

from collections.abc import Sequence

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
from reverie.builtins import ArgKind, CommandDef, language_for, lookup_command
from reverie.errors import (
    ExpectedBlockArg,
    ExpectedIdentArg,
    ExpectedInlineArg,
    ExpectedStringArg,
    IncorrectArgCount,
    UnknownCodeLanguage,
    UnknownCommand,
)
from reverie.strings import escape_html, split_lines, unescape_quotes

_KIND_TYPES: dict[ArgKind, type] = {
    ArgKind.BLOCK: BlockArg,
    ArgKind.INLINE: InlineArg,
    ArgKind.IDENT: IdentArg,
    ArgKind.STRING: StringArg,
}

_KIND_ERRORS = {
    ArgKind.BLOCK: ExpectedBlockArg,
    ArgKind.INLINE: ExpectedInlineArg,
    ArgKind.IDENT: ExpectedIdentArg,
    ArgKind.STRING: ExpectedStringArg,
}


class Generator:
    """Render a parsed document to HTML."""

    def __init__(self, source: bytes, ast: Ast) -> None:
        self._source = source
        self._ast = ast

    def generate(self) -> bytes:
        out = bytearray()
        self._node(out, self._ast.root)
        return bytes(out)

    # ------------------------------------------------------------------
    # Nodes
    # ------------------------------------------------------------------

    def _node(self, out: bytearray, node_id: NodeId) -> None:
        node = self._ast[node_id]
        match node:
            case Group(children):
                self._group(out, children)
            case Paragraph(children):
                self._wrap(out, "p", children)
            case Text(span):
                out += span.slice(self._source)
            case Command():
                self._command(out, node)

    def _group(self, out: bytearray, nodes: Sequence[NodeId]) -> None:
        for node_id in nodes:
            self._node(out, node_id)

    def _wrap(self, out: bytearray, tag: str, nodes: Sequence[NodeId]) -> None:
        out += f"<{tag}>".encode()
        self._group(out, nodes)
        out += f"</{tag}>".encode()

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def _command(self, out: bytearray, node: Command) -> None:
        name = node.name.slice(self._source).decode("ascii")
        builtin = lookup_command(name)
        if builtin is None:
            raise UnknownCommand(name, node.name, self._source)
        args = self._check_args(builtin, node)

        match builtin.name:
            case "i" | "b" | "super" | "section" | "subsection":
                self._wrap(out, builtin.tag, [args[0].node])
            case "aside" | "blockquote":
                self._wrap(out, builtin.tag, args[0].children)
            case "code":
                self._code(out, builtin, args[0])
            case "link":
                self._link(out, builtin, args[0], args[1])
            case "codeblock":
                self._codeblock(out, builtin, args[0], args[1])

    def _check_args(self, builtin: CommandDef, node: Command) -> tuple[Argument, ...]:
        """Validate argument count, then each argument's kind, in order."""
        if len(node.args) != len(builtin.params):
            raise IncorrectArgCount(len(builtin.params), len(node.args), node.name, self._source)
        for param, arg in zip(builtin.params, node.args):
            if not isinstance(arg, _KIND_TYPES[param.kind]):
                raise _KIND_ERRORS[param.kind](arg.span, self._source)
        return node.args

    def _code(self, out: bytearray, builtin: CommandDef, code: StringArg) -> None:
        content = escape_html(self._string(code))
        out += f"<{builtin.tag}>{content}</{builtin.tag}>".encode()

    def _link(
        self, out: bytearray, builtin: CommandDef, text: InlineArg, href: StringArg
    ) -> None:
        out += f'<{builtin.tag} href="'.encode()
        out += href.span.inner().slice(self._source)
        out += b'">'
        self._node(out, text.node)
        out += f"</{builtin.tag}>".encode()

    def _codeblock(
        self, out: bytearray, builtin: CommandDef, file: StringArg, code: StringArg
    ) -> None:
        filename = self._string(file)
        language = language_for(filename)
        if language is None:
            _, dot, ext = filename.rpartition(".")
            raise UnknownCodeLanguage(ext if dot else "", file.span, self._source)

        out += f"<{builtin.tag}>".encode()
        out += f'<div class="language-tag">{language} &bull; {escape_html(filename)}</div>'.encode()
        for line in split_lines(escape_html(self._string(code))):
            out += f"<code>{line}</code>".encode()
        out += f"</{builtin.tag}>".encode()

    def _string(self, arg: StringArg) -> str:
        """Contents of a string argument, without quotes and with escapes resolved."""
        raw = arg.span.inner().slice(self._source)
        return unescape_quotes(raw.decode("utf-8", errors="replace"))


def generate(source: bytes, ast: Ast) -> bytes:
    """Convenience function: render a parsed document to HTML bytes."""
    return Generator(source, ast).generate()
