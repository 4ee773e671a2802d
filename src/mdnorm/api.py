#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdnorm/api.py
"""Public entry points for turning Markdown into the canonical AST.

:func:`to_ast` is the whole pipeline: parse with mistune, surface the
parser's diagnostics as logging warnings, then normalize. A document with
diagnostics is still normalized and returned; warnings never stop the
pipeline.

Examples
--------
    >>> from mdnorm import to_ast
    >>> nodes = to_ast("Euler: $e^{i\\pi} + 1 = 0$")
    >>> [child.content for child in nodes[0].children]
    ['Euler: ', '$e^{i\\pi} + 1 = 0$']

"""

from __future__ import annotations

import logging
from typing import Any

from mdnorm.ast import Node, normalize
from mdnorm.dependencies import is_available
from mdnorm.options.markdown import MarkdownParserOptions
from mdnorm.parsers.base import Diagnostic
from mdnorm.parsers.markdown import MarkdownToAstConverter

logger = logging.getLogger(__name__)


def _resolve_options(options: MarkdownParserOptions | None, overrides: dict[str, Any]) -> MarkdownParserOptions:
    resolved = options or MarkdownParserOptions()
    if overrides:
        resolved = resolved.create_updated(**overrides)
    return resolved


def emit_diagnostics(messages: list[Diagnostic], source_file: str) -> None:
    """Log each parser diagnostic as a warning.

    Parameters
    ----------
    messages : list of Diagnostic
        Diagnostics in the order the parser reported them
    source_file : str
        File label attached to every warning

    """
    for severity, line, message in messages:
        logger.warning(
            "%s:%d: %s",
            source_file,
            line,
            message,
            extra={"source_file": source_file, "source_line": line, "severity": severity},
        )


def to_ast(text: str, options: MarkdownParserOptions | None = None, **overrides: Any) -> list[Node]:
    """Parse Markdown and return the normalized AST.

    Parameters
    ----------
    text : str
        Markdown source
    options : MarkdownParserOptions or None, default = None
        Parser options; defaults are used when omitted
    **overrides : Any
        Individual option fields overriding ``options`` (e.g. ``breaks=True``)

    Returns
    -------
    list of Node
        Canonical document

    Raises
    ------
    ValidationError
        If an override does not name a parser option
    InvalidOptionsError
        If ``options`` is not a MarkdownParserOptions instance
    DependencyError
        If mistune is not installed

    """
    resolved = _resolve_options(options, overrides)

    status, nodes, messages = MarkdownToAstConverter(resolved).parse(text)
    logger.debug("Parsed %s with status %s (%d diagnostics)", resolved.source_file, status, len(messages))

    emit_diagnostics(messages, resolved.source_file)
    return normalize(nodes)


__all__ = ["emit_diagnostics", "is_available", "to_ast"]
