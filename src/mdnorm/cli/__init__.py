#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Command-line interface for mdnorm.

Reads a Markdown file (or stdin), runs it through the parser and the
normalizer, and writes the canonical AST as JSON.

Examples
--------
    $ mdnorm guide.md --indent 2
    $ cat notebook.md | mdnorm - --breaks -o notebook.ast.json
    $ mdnorm --check-deps

"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from dataclasses import fields
from pathlib import Path
from typing import Any

from mdnorm.api import to_ast
from mdnorm.ast.serialization import ast_to_json
from mdnorm.cli.builder import add_options_arguments
from mdnorm.cli.config import discover_config_file, load_config_file
from mdnorm.cli.output import write_json
from mdnorm.constants import CONFIG_ENV_VAR
from mdnorm.dependencies import is_available, print_dependency_report
from mdnorm.exceptions import ConfigError, DependencyError, ValidationError
from mdnorm.logging_utils import configure_logging
from mdnorm.options.markdown import MarkdownParserOptions

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_DEPENDENCY_ERROR = 2
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4

__all__ = ["main", "create_parser", "build_options"]


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the ``mdnorm`` command."""
    parser = argparse.ArgumentParser(
        prog="mdnorm",
        description="Parse Markdown and write its normalized HTML-like AST as JSON.",
    )
    parser.add_argument("input", nargs="?", help="Markdown file to read, or '-' for stdin")
    parser.add_argument("-o", "--out", help="Write JSON to this file instead of stdout")
    parser.add_argument("--indent", type=int, default=None, help="Indent JSON output by this many spaces")

    add_options_arguments(parser, MarkdownParserOptions)

    config = parser.add_argument_group("configuration")
    config.add_argument("--config", help=f"Configuration file (also read from ${CONFIG_ENV_VAR})")
    config.add_argument("--no-config", action="store_true", help="Ignore discovered configuration files")

    output = parser.add_argument_group("output and logging")
    output.add_argument("--rich", action="store_true", help="Highlight JSON output when writing to a terminal")
    output.add_argument("--force-rich", action="store_true", help="Highlight JSON output even when not a TTY")
    output.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    output.add_argument("--log-file", help="Also write log output to this file")
    output.add_argument("-v", "--verbose", action="store_true", help="Shortcut for --log-level DEBUG")
    output.add_argument("--trace", action="store_true", help="Debug logging with timestamps and logger names")
    output.add_argument("--check-deps", action="store_true", help="Report parser dependency status and exit")

    return parser


def _setup_logging_level(parsed_args: argparse.Namespace) -> None:
    """Set up logging level based on command-line arguments.

    --trace takes highest precedence, then --verbose, then --log-level.
    """
    if parsed_args.trace:
        log_level = logging.DEBUG
    elif parsed_args.verbose and parsed_args.log_level == "WARNING":
        log_level = logging.DEBUG
    else:
        log_level = getattr(logging, parsed_args.log_level.upper())

    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


def _load_config(parsed_args: argparse.Namespace) -> dict[str, Any]:
    config_path = parsed_args.config or os.environ.get(CONFIG_ENV_VAR)
    if not config_path and not parsed_args.no_config:
        config_path = discover_config_file()

    if not config_path:
        return {}

    logger.debug("Loading configuration from %s", config_path)
    return load_config_file(config_path)


def build_options(parsed_args: argparse.Namespace, config: dict[str, Any]) -> MarkdownParserOptions:
    """Merge configuration file values and command line flags into parser options.

    Parameters
    ----------
    parsed_args : argparse.Namespace
        Parsed command line arguments; ``None`` means "not given"
    config : dict
        Values from a configuration file; dashed keys are accepted

    Returns
    -------
    MarkdownParserOptions
        Resolved options

    Raises
    ------
    ValidationError
        If the configuration names an unknown option

    """
    field_names = [f.name for f in fields(MarkdownParserOptions)]
    values = {key.replace("-", "_"): value for key, value in config.items()}

    for name in field_names:
        flag_value = getattr(parsed_args, name, None)
        if flag_value is not None:
            values[name] = flag_value

    if "source_file" not in values and parsed_args.input and parsed_args.input != "-":
        values["source_file"] = parsed_args.input

    return MarkdownParserOptions().create_updated(**values)


def _read_input(input_arg: str) -> str:
    if input_arg == "-":
        return sys.stdin.read()
    return Path(input_arg).read_text(encoding="utf-8")


def main(args: list[str] | None = None) -> int:
    """Execute the ``mdnorm`` command."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    _setup_logging_level(parsed_args)

    if parsed_args.check_deps:
        print(print_dependency_report())
        return EXIT_SUCCESS if is_available() else EXIT_DEPENDENCY_ERROR

    if not parsed_args.input:
        print("Error: Input file is required", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    try:
        options = build_options(parsed_args, _load_config(parsed_args))
    except (ConfigError, ValidationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    try:
        text = _read_input(parsed_args.input)
    except OSError as e:
        print(f"Error: Could not read {parsed_args.input}: {e}", file=sys.stderr)
        return EXIT_FILE_ERROR

    try:
        nodes = to_ast(text, options)
    except DependencyError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_DEPENDENCY_ERROR

    json_str = ast_to_json(nodes, indent=parsed_args.indent)

    if parsed_args.out:
        try:
            Path(parsed_args.out).write_text(json_str + "\n", encoding="utf-8")
        except OSError as e:
            print(f"Error: Could not write {parsed_args.out}: {e}", file=sys.stderr)
            return EXIT_FILE_ERROR
        logger.info("Wrote %s", parsed_args.out)
    else:
        write_json(json_str, parsed_args)

    return EXIT_SUCCESS
