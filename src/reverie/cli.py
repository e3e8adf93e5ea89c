"""Command-line interface for Reverie."""

from __future__ import annotations

import argparse
import sys
import time
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from reverie.errors import CompileError, ParseError


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path
    output_file: Path | None
    standalone: bool
    title: str
    lang: str | None
    css_files: list[str]
    watch: bool
    debug: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="reverie",
        description="Reverie markup language compiler",
    )
    p.add_argument("input", help="Input .rev file")
    p.add_argument("-o", "--output", help="Output file (default: stdout)")
    p.add_argument(
        "--standalone",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Wrap the output in a complete HTML page",
    )
    p.add_argument("--title", help="Page title for --standalone (default: input file stem)")
    p.add_argument("--lang", help="Page language for --standalone")
    p.add_argument(
        "--css",
        action="append",
        default=[],
        metavar="FILE",
        help="Stylesheet to link from a standalone page (repeatable)",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help="Config file (default: auto-discover reverie.toml)",
    )
    p.add_argument("--watch", action="store_true", help="Watch for changes and recompile")
    p.add_argument("--debug", action="store_true", help="Dump AST to stderr")
    return p


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / "reverie.toml"

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: config file < CLI flags.
    """
    input_file = Path(args.input)
    input_dir = input_file.parent
    if not input_dir.parts:
        input_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    try:
        config = load_config(config_path, input_dir)
    except tomllib.TOMLDecodeError as exc:
        raise argparse.ArgumentTypeError(f"invalid config file: {exc}") from exc

    page = config.get("page")
    if not isinstance(page, dict):
        page = {}

    standalone = False
    if isinstance(page.get("standalone"), bool):
        standalone = page["standalone"]
    if args.standalone is not None:
        standalone = args.standalone

    title = input_file.stem
    if isinstance(page.get("title"), str):
        title = page["title"]
    if args.title is not None:
        title = args.title

    lang: str | None = None
    if isinstance(page.get("lang"), str):
        lang = page["lang"]
    if args.lang is not None:
        lang = args.lang

    # CSS files: config < CLI
    css_files: list[str] = []
    cfg_css = page.get("css")
    if isinstance(cfg_css, list):
        css_files.extend(str(f) for f in cfg_css)
    css_files.extend(args.css)

    output_file = Path(args.output) if args.output else None

    return CliOptions(
        input_file=input_file,
        output_file=output_file,
        standalone=standalone,
        title=title,
        lang=lang,
        css_files=css_files,
        watch=args.watch,
        debug=args.debug,
    )


def compile_file(options: CliOptions) -> bytes:
    """Read, parse, and generate a Reverie file to HTML."""
    from reverie.debug import dump_ast
    from reverie.generator import generate
    from reverie.page import render_page
    from reverie.parser import parse

    source = options.input_file.read_bytes()
    ast = parse(source)

    if options.debug:
        dump_ast(source, ast, file=sys.stderr)

    html = generate(source, ast)
    if options.standalone:
        html = render_page(html, options.title, options.lang, options.css_files)
    return html


def _write_output(options: CliOptions, html: bytes) -> None:
    if options.output_file:
        options.output_file.write_bytes(html)
    else:
        sys.stdout.buffer.write(html)
        sys.stdout.flush()


def watch_loop(options: CliOptions) -> None:
    """Poll input file for changes, recompile on each modification."""
    last_mtime = 0.0
    print(f"Watching {options.input_file} for changes...", file=sys.stderr)
    try:
        while True:
            try:
                mtime = options.input_file.stat().st_mtime
            except OSError:
                time.sleep(0.5)
                continue
            if mtime != last_mtime:
                last_mtime = mtime
                try:
                    _write_output(options, compile_file(options))
                    print(f"Compiled {options.input_file}", file=sys.stderr)
                except CompileError as exc:
                    print(exc.format(str(options.input_file)), file=sys.stderr)
            time.sleep(0.5)
    except KeyboardInterrupt:
        pass


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except argparse.ArgumentTypeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if options.watch:
        watch_loop(options)
        return 0

    try:
        html = compile_file(options)
    except ParseError as exc:
        print(exc.format(str(options.input_file)), file=sys.stderr)
        return 1
    except CompileError as exc:
        print(exc.format(str(options.input_file)), file=sys.stderr)
        return 2

    _write_output(options, html)
    return 0
