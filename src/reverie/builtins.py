"""Builtin command registry — parameter declarations and output tags."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class ArgKind(Enum):
    BLOCK = auto()  # {...}
    INLINE = auto()  # [...]
    IDENT = auto()  # bare letters
    STRING = auto()  # "..."


@dataclass(frozen=True, slots=True)
class ParamDecl:
    """Parameter declaration for a builtin command."""

    name: str
    kind: ArgKind


@dataclass(frozen=True, slots=True)
class CommandDef:
    """Definition of a builtin command."""

    name: str
    params: tuple[ParamDecl, ...]
    tag: str


def _make_commands() -> dict[str, CommandDef]:
    defs: dict[str, CommandDef] = {}

    def d(name: str, tag: str, *params: tuple[str, ArgKind]) -> None:
        defs[name] = CommandDef(name, tuple(ParamDecl(n, k) for n, k in params), tag)

    # Inline formatting
    d("i", "em", ("text", ArgKind.INLINE))
    d("b", "strong", ("text", ArgKind.INLINE))
    d("super", "sup", ("text", ArgKind.INLINE))
    d("link", "a", ("text", ArgKind.INLINE), ("href", ArgKind.STRING))
    d("code", "code", ("code", ArgKind.STRING))

    # Headings
    d("section", "h2", ("title", ArgKind.INLINE))
    d("subsection", "h3", ("title", ArgKind.INLINE))

    # Blocks
    d("aside", "aside", ("content", ArgKind.BLOCK))
    d("blockquote", "blockquote", ("content", ArgKind.BLOCK))
    d("codeblock", "pre", ("file", ArgKind.STRING), ("code", ArgKind.STRING))

    return defs


COMMANDS: dict[str, CommandDef] = _make_commands()

# Code block file extension -> display language name
LANGUAGES: dict[str, str] = {
    "rs": "Rust",
    "txt": "Text",
}


def lookup_command(name: str) -> CommandDef | None:
    return COMMANDS.get(name)


def language_for(filename: str) -> str | None:
    """Resolve a display language from a file name's extension."""
    _, dot, ext = filename.rpartition(".")
    if not dot:
        return None
    return LANGUAGES.get(ext)
