#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Output helpers for the mdnorm CLI."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import TextIO

from mdnorm.utils.packages import check_package_installed

logger = logging.getLogger(__name__)


def should_use_rich_output(args: argparse.Namespace, stream: TextIO | None = None) -> bool:
    """Decide whether JSON written to ``stream`` gets Rich highlighting.

    Highlighting needs ``--rich``, the optional rich package, and either a
    terminal on the other end of ``stream`` (stdout by default) or
    ``--force-rich``. Asking for it without rich installed logs a warning
    and falls back to plain JSON.

    Parameters
    ----------
    args : argparse.Namespace
        Parsed command line arguments
    stream : TextIO, optional
        Destination of the output

    Returns
    -------
    bool

    """
    if not getattr(args, "rich", False):
        return False

    if not check_package_installed("rich"):
        logger.warning("--rich ignored: install the optional extra with: pip install mdnorm[rich]")
        return False

    if getattr(args, "force_rich", False):
        return True

    isatty = getattr(stream or sys.stdout, "isatty", None)
    return bool(callable(isatty) and isatty())


def write_json(json_str: str, args: argparse.Namespace, stream: TextIO | None = None) -> None:
    """Write serialized AST to ``stream``, highlighted when Rich output applies."""
    target = stream or sys.stdout

    if should_use_rich_output(args, stream=target):
        from rich.console import Console

        Console(file=target).print_json(json_str)
    else:
        print(json_str, file=target)
