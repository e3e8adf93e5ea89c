"""Generator unit tests."""

from __future__ import annotations

import pytest

from reverie import compile
from reverie.ast import Ast, Command, Group, InlineArg, Paragraph, Text
from reverie.errors import (
    ExpectedBlockArg,
    ExpectedInlineArg,
    ExpectedStringArg,
    GenerateError,
    IncorrectArgCount,
    UnknownCodeLanguage,
    UnknownCommand,
)
from reverie.generator import Generator, generate
from reverie.span import Span


class TestNodes:
    def test_hand_built_arena(self) -> None:
        source = b"hello ~b[x]"
        ast = Ast()
        hello = ast.push(Text(Span(0, 6)))
        x = ast.push(Text(Span(9, 10)))
        inner = ast.push(Group((x,)))
        cmd = ast.push(Command(Span(7, 8), (InlineArg(inner, Span(8, 11)),)))
        para = ast.push(Paragraph((hello, cmd)))
        ast.root = ast.push(Group((para,)))
        assert generate(source, ast) == b"<p>hello <strong>x</strong></p>"

    def test_group_has_no_markup(self) -> None:
        source = b"abc"
        ast = Ast()
        text = ast.push(Text(Span(0, 3)))
        ast.root = ast.push(Group((text,)))
        assert Generator(source, ast).generate() == b"abc"

    def test_empty_document(self, html) -> None:
        assert html("") == ""

    def test_paragraph(self, html) -> None:
        assert html("Hello world") == "<p>Hello world</p>"

    def test_text_not_escaped(self, html) -> None:
        assert html("a <b>bold</b> & more") == "<p>a <b>bold</b> & more</p>"

    def test_prose_round_trip(self, html) -> None:
        paras = ["First paragraph.", "Second, with (parens).", "Third: 100% & done!"]
        assert html("\n\n".join(paras)) == "".join(f"<p>{p}</p>" for p in paras)

    def test_utf8_passthrough(self) -> None:
        assert compile("héllo ~i[wörld]") == "<p>héllo <em>wörld</em></p>".encode()

    def test_bytes_input(self) -> None:
        assert compile(b"~i[x]") == b"<em>x</em>"

    def test_paren_closed_on_next_line(self, html) -> None:
        assert html("a (b\nc) d") == "<p>a (b</p><p>c) d</p>"

    def test_paren_closed_on_next_line_in_block(self, html) -> None:
        assert html("~aside{(a\nb)}") == "<aside><p>(a</p><p>b)</p></aside>"

    def test_crlf_prose(self, html) -> None:
        assert html("one\r\ntwo ~i[x]\r\nthree") == "<p>one</p><p>two <em>x</em></p><p>three</p>"


class TestInlineCommands:
    @pytest.mark.parametrize(
        "name,tag",
        [("i", "em"), ("b", "strong"), ("super", "sup"), ("section", "h2"), ("subsection", "h3")],
    )
    def test_wrapping(self, html, name: str, tag: str) -> None:
        assert html(f"~{name}[x]") == f"<{tag}>x</{tag}>"

    def test_italic(self, html) -> None:
        assert html("~i[x]") == "<em>x</em>"

    def test_bold(self, html) -> None:
        assert html("~b[x]") == "<strong>x</strong>"

    def test_paren_form(self, html) -> None:
        assert html("~i([x])") == "<em>x</em>"

    def test_nested(self, html) -> None:
        assert html("~b[a ~i[b] c]") == "<strong>a <em>b</em> c</strong>"

    def test_inline_inside_paragraph(self, html) -> None:
        assert html("E = mc~super[2]") == "<p>E = mc<sup>2</sup></p>"


class TestCode:
    def test_escape_round_trip(self, html) -> None:
        assert html(r'~code("a \"b\" c")') == "<code>a &quot;b&quot; c</code>"

    def test_entities(self, html) -> None:
        assert html('~code("a < b && c > d")') == "<code>a &lt; b &amp;&amp; c &gt; d</code>"

    def test_empty(self, html) -> None:
        assert html('~code("")') == "<code></code>"

    def test_invalid_utf8_replaced(self) -> None:
        assert compile(b'~code("\xff")') == "<code>\ufffd</code>".encode()

    def test_invalid_utf8_in_codeblock_name(self) -> None:
        with pytest.raises(UnknownCodeLanguage):
            compile(b'~codeblock("\xff", "x")')


class TestLink:
    def test_anchor(self, html) -> None:
        result = html('~link([see], "https://e.co")')
        assert result == '<a href="https://e.co">see</a>'

    def test_href_is_raw(self, html) -> None:
        result = html('~link([q], " https://e.co/?a=1&b=2 ")')
        assert result == '<a href=" https://e.co/?a=1&b=2 ">q</a>'

    def test_rendered_text(self, html) -> None:
        result = html('~link([~i[docs]], "/d")')
        assert result == '<a href="/d"><em>docs</em></a>'


class TestBlocks:
    def test_aside(self, html) -> None:
        assert html("~aside{ one\n\ntwo }") == "<aside><p>one</p><p>two </p></aside>"

    def test_blockquote(self, html) -> None:
        result = html("~blockquote{\n  ~section[Q]\n  said\n}")
        assert result == "<blockquote><h2>Q</h2><p>said</p></blockquote>"

    def test_empty_block(self, html) -> None:
        assert html("~aside{}") == "<aside></aside>"


class TestCodeblock:
    def test_rust(self, html) -> None:
        result = html('~codeblock("f.rs", "fn main() {}")')
        assert result == (
            '<pre><div class="language-tag">Rust &bull; f.rs</div>'
            "<code>fn main() {}</code></pre>"
        )

    def test_one_code_per_line(self, html) -> None:
        result = html('~codeblock("notes.txt", "a\nb < c\n\nd\n")')
        assert result.count("<code>") == 4
        assert "<code>b &lt; c</code><code></code><code>d</code>" in result
        assert "Text &bull; notes.txt" in result

    def test_crlf_lines(self, html) -> None:
        result = html('~codeblock("a.txt", "x\r\ny")')
        assert "<code>x</code><code>y</code>" in result

    def test_unknown_extension(self, html) -> None:
        with pytest.raises(UnknownCodeLanguage) as exc_info:
            html('~codeblock("main.py", "print()")')
        assert exc_info.value.extension == "py"
        assert exc_info.value.span == Span(11, 20)

    def test_no_extension(self, html) -> None:
        with pytest.raises(UnknownCodeLanguage) as exc_info:
            html('~codeblock("Makefile", "all:")')
        assert exc_info.value.extension == ""


class TestArgumentValidation:
    def test_zero_args(self, html) -> None:
        with pytest.raises(IncorrectArgCount) as exc_info:
            html("~i()")
        err = exc_info.value
        assert (err.expected, err.found) == (1, 0)
        assert err.span == Span(1, 2)

    def test_too_many(self, html) -> None:
        with pytest.raises(IncorrectArgCount) as exc_info:
            html("~b([x], [y])")
        assert (exc_info.value.expected, exc_info.value.found) == (1, 2)

    def test_link_needs_two(self, html) -> None:
        with pytest.raises(IncorrectArgCount):
            html("~link[text]")

    def test_string_where_inline_required(self, html) -> None:
        with pytest.raises(ExpectedInlineArg) as exc_info:
            html('~i("text")')
        assert exc_info.value.span == Span(3, 9)

    def test_ident_where_inline_required(self, html) -> None:
        with pytest.raises(ExpectedInlineArg):
            html("~i(word)")

    def test_inline_where_block_required(self, html) -> None:
        with pytest.raises(ExpectedBlockArg):
            html("~aside[text]")

    def test_inline_where_string_required(self, html) -> None:
        with pytest.raises(ExpectedStringArg):
            html("~code[x]")

    def test_second_argument_checked(self, html) -> None:
        with pytest.raises(ExpectedStringArg) as exc_info:
            html("~link([a], [b])")
        assert exc_info.value.span == Span(11, 14)

    def test_count_checked_before_kind(self, html) -> None:
        with pytest.raises(IncorrectArgCount):
            html('~i("a", "b")')

    def test_no_partial_output(self) -> None:
        with pytest.raises(GenerateError):
            compile("fine\n\n~i()")


class TestUnknownCommand:
    def test_unknown(self, html) -> None:
        with pytest.raises(UnknownCommand) as exc_info:
            html("~table[x]")
        assert exc_info.value.name == "table"
        assert exc_info.value.span == Span(1, 6)

    def test_unknown_nested(self, html) -> None:
        with pytest.raises(UnknownCommand):
            html("text ~b[~bogus[x]]")

    def test_names_are_case_sensitive(self, html) -> None:
        with pytest.raises(UnknownCommand):
            html("~I[x]")


class TestDeterminism:
    def test_same_output_twice(self) -> None:
        source = "~section[A]\n\nb ~i[c] d\n~aside{ ~code(\"e\") }"
        assert compile(source) == compile(source)
