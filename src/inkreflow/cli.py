#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Command-line interface for inkreflow.

Renders a chapter (HTML), a Markdown document or a web page to wrapped text
on standard output.

Examples
--------
    $ inkreflow chapter.xhtml --width 72 --justify
    $ cat README.md | inkreflow --format markdown
    $ inkreflow page.html --format web --json > page.json

"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional

import yaml

from inkreflow.api import render
from inkreflow.config import load_options
from inkreflow.exceptions import ConfigError, DependencyError, InkReflowError, ValidationError
from inkreflow.logging_utils import LOG_LEVEL_NAMES, configure_logging
from inkreflow.styles import StyleDescriptor

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_DEPENDENCY_ERROR = 2
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4

_FORMAT_BY_SUFFIX = {
    ".md": "markdown",
    ".markdown": "markdown",
    ".html": "html",
    ".htm": "html",
    ".xhtml": "html",
}


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="inkreflow",
        description="Reflow EPUB chapter markup, Markdown or web pages into justified plain text.",
    )
    parser.add_argument("input", nargs="?", help="Input file (default: read standard input)")
    parser.add_argument(
        "--format",
        choices=["html", "markdown", "web"],
        default=None,
        help="Input format (default: from the file extension, else html)",
    )
    parser.add_argument("--width", type=int, default=None, help="Maximum line width in columns")
    parser.add_argument(
        "--justify",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Justify lines that nearly fill the width",
    )
    parser.add_argument("--config", help="Configuration file (.toml, .yaml, .json or pyproject.toml)")
    parser.add_argument("--no-config", action="store_true", help="Ignore discovered configuration files")
    parser.add_argument("--class-styles", help="JSON or YAML file mapping CSS class names to style descriptors")
    parser.add_argument("--json", action="store_true", help="Print the full render result as JSON")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        type=str.upper,
        choices=list(LOG_LEVEL_NAMES),
        help="Logging level (default: WARNING)",
    )
    parser.add_argument("--log-file", help="Also write log output to this file")
    parser.add_argument("--trace", action="store_true", help="Include timestamps and logger names in log output")
    return parser


def _detect_format(input_path: Optional[str], explicit: Optional[str]) -> str:
    if explicit:
        return explicit
    if input_path:
        return _FORMAT_BY_SUFFIX.get(Path(input_path).suffix.lower(), "html")
    return "html"


def load_class_styles(path: str) -> dict[str, StyleDescriptor]:
    """Load a class-style lookup from a JSON or YAML file.

    Raises
    ------
    ConfigError
        If the file cannot be read or is not a mapping of mappings.

    """
    style_path = Path(path)
    try:
        text = style_path.read_text(encoding="utf-8")
        data: Any = json.loads(text) if style_path.suffix.lower() == ".json" else yaml.safe_load(text)
    except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigError(f"Cannot read class styles from {path}: {e}", config_path=path) from e

    if not isinstance(data, dict) or not all(isinstance(value, dict) for value in data.values()):
        raise ConfigError(f"Class styles in {path} must map class names to mappings", config_path=path)
    return {str(name): StyleDescriptor.from_mapping(value) for name, value in data.items()}


def _read_input(input_path: Optional[str]) -> str:
    if input_path is None or input_path == "-":
        return sys.stdin.read()
    return Path(input_path).read_text(encoding="utf-8", errors="replace")


def main(args: list[str] | None = None) -> int:
    """Run the command-line interface and return the exit code."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    configure_logging(parsed_args.log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)

    try:
        options = load_options(parsed_args.config, discover=not parsed_args.no_config)
        overrides: dict[str, Any] = {}
        if parsed_args.width is not None:
            overrides["max_width"] = parsed_args.width
        if parsed_args.justify is not None:
            overrides["justify"] = parsed_args.justify
        if overrides:
            options = options.create_updated(**overrides)
        class_styles = load_class_styles(parsed_args.class_styles) if parsed_args.class_styles else None
    except ValidationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    try:
        source = _read_input(parsed_args.input)
    except OSError as e:
        print(f"Error: cannot read {parsed_args.input}: {e}", file=sys.stderr)
        return EXIT_FILE_ERROR

    input_format = _detect_format(parsed_args.input, parsed_args.format)
    logger.debug(f"Rendering {parsed_args.input or '<stdin>'} as {input_format}")

    try:
        result = render(source, input_format, options, class_styles)  # type: ignore[arg-type]
    except DependencyError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_DEPENDENCY_ERROR
    except InkReflowError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    if parsed_args.json:
        print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    elif result.lines:
        print(result.to_text())
    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
