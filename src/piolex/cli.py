"""Command-line interface for piolex."""

from __future__ import annotations

import argparse
import io
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from piolex import is_pio_path
from piolex.errors import ConfigError
from piolex.styles import Style, category_from_name, parse_style, resolve_styles
from piolex.tokens import TokenCategory

FORMATS = ("html", "ansi", "tokens")


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path
    output_file: Path | None
    format: str
    standalone: bool
    styles: dict[TokenCategory, Style]
    debug: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="piolex",
        description="Syntax highlighter for PIO assembly (.pio) files",
    )
    p.add_argument("input", help="Input .pio file")
    p.add_argument("-o", "--output", help="Output file (default: stdout)")
    p.add_argument(
        "-f",
        "--format",
        choices=FORMATS,
        default=None,
        help="Output format (default: html)",
    )
    p.add_argument(
        "--standalone",
        action="store_true",
        default=None,
        help="Wrap HTML output in a complete document with a stylesheet",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help="Config file (default: auto-discover piolex.toml)",
    )
    p.add_argument(
        "--style",
        action="append",
        default=[],
        metavar="NAME=SPEC",
        help='Override a category style, e.g. label="#aa5500 bold" (repeatable)',
    )
    p.add_argument("--debug", action="store_true", help="Dump the token stream to stderr")
    return p


def parse_style_arg(s: str) -> tuple[str, str]:
    """Parse a NAME=SPEC string into (name, spec)."""
    if "=" not in s:
        raise argparse.ArgumentTypeError(f"invalid style format (expected NAME=SPEC): {s}")
    name, _, spec = s.partition("=")
    return name, spec


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / "piolex.toml"

    if not path.is_file():
        return {}

    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"invalid TOML: {exc}", path) from None


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: defaults < config file < CLI flags.
    """
    input_file = Path(args.input)
    input_dir = input_file.parent
    if not input_dir.parts:
        input_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, input_dir)
    source_path = config_path if config_path is not None else input_dir / "piolex.toml"

    # Format: default < config < CLI
    fmt = "html"
    cfg_format = config.get("format")
    if cfg_format is not None:
        if cfg_format not in FORMATS:
            raise ConfigError(f"unknown output format '{cfg_format}'", source_path, "format")
        fmt = cfg_format
    if args.format is not None:
        fmt = args.format

    standalone = False
    cfg_standalone = config.get("standalone")
    if isinstance(cfg_standalone, bool):
        standalone = cfg_standalone
    if args.standalone is not None:
        standalone = args.standalone

    # Styles: defaults < config < CLI
    overrides: dict[str, object] = {}
    cfg_styles = config.get("styles")
    if cfg_styles is not None:
        if not isinstance(cfg_styles, dict):
            raise ConfigError("[styles] must be a table", source_path, "styles")
        overrides.update(cfg_styles)
    styles = resolve_styles(overrides, source_path)
    for raw in args.style:
        name, spec = parse_style_arg(raw)
        styles[category_from_name(name)] = parse_style(spec)

    output_file = Path(args.output) if args.output else None

    return CliOptions(
        input_file=input_file,
        output_file=output_file,
        format=fmt,
        standalone=standalone,
        styles=styles,
        debug=args.debug,
    )


def highlight_file(options: CliOptions) -> str:
    """Read, classify, and render a PIO file."""
    from piolex.classifier import classify
    from piolex.debug import dump_tokens
    from piolex.render import render_ansi, render_html

    source = options.input_file.read_text(encoding="utf-8")
    classification = classify(source)

    if options.debug:
        dump_tokens(classification, file=sys.stderr)

    if options.format == "ansi":
        return render_ansi(classification, options.styles)
    if options.format == "tokens":
        buf = io.StringIO()
        dump_tokens(classification, file=buf)
        return buf.getvalue()
    return render_html(
        classification,
        options.styles,
        standalone=options.standalone,
        title=options.input_file.name,
    )


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except argparse.ArgumentTypeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except ConfigError as exc:
        print(exc.format(), file=sys.stderr)
        return 2

    if not is_pio_path(options.input_file):
        print(f"warning: {options.input_file} does not have a .pio suffix", file=sys.stderr)

    try:
        output = highlight_file(options)
    except (OSError, UnicodeDecodeError) as exc:
        print(f"error: cannot read {options.input_file}: {exc}", file=sys.stderr)
        return 1

    if options.output_file:
        options.output_file.write_text(output, encoding="utf-8")
    else:
        sys.stdout.write(output)

    return 0
