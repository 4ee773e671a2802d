#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdnorm/parsers/base.py
"""Base classes for document parsers.

A parser turns raw text plus options into an HTML-like AST together with the
diagnostics it collected on the way. Diagnostics never abort parsing: a
parser always hands back a tree.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import NamedTuple

from mdnorm.ast import Node
from mdnorm.constants import ParseStatus, Severity
from mdnorm.exceptions import InvalidOptionsError
from mdnorm.options.base import BaseParserOptions


class Diagnostic(NamedTuple):
    """A message reported by a parser about its input.

    Attributes
    ----------
    severity : {"error", "warning"}
        How serious the problem is
    line : int
        Source line the message refers to (already offset by the start line)
    message : str
        Human-readable description

    """

    severity: Severity
    line: int
    message: str


class ParseResult(NamedTuple):
    """Outcome of a parse: a status, the tree and the diagnostics.

    The tree is usable whatever the status; ``"error"`` only signals that at
    least one diagnostic has error severity.
    """

    status: ParseStatus
    ast: list[Node]
    messages: list[Diagnostic]


class BaseParser(ABC):
    """Abstract base class for all document parsers.

    Parameters
    ----------
    options : BaseParserOptions or None, default = None
        Format-specific parsing options

    Examples
    --------
    Creating a custom parser:

        >>> class PlainParser(BaseParser):
        ...     def parse(self, text):
        ...         return ParseResult("ok", [Text(text)], [])

    """

    def __init__(self, options: BaseParserOptions | None = None):
        """Initialize the parser with optional configuration."""
        self.options = options

    @staticmethod
    def _validate_options_type(options: BaseParserOptions | None, expected_type: type, parser_name: str) -> None:
        """Validate that options are of the correct type for this parser.

        Parameters
        ----------
        options : BaseParserOptions or None
            The options object to validate
        expected_type : type
            The expected options class type
        parser_name : str
            Name of the parser (for error messages)

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                parser_name=parser_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @abstractmethod
    def parse(self, text: str) -> ParseResult:
        """Parse raw text into an AST plus diagnostics.

        Parameters
        ----------
        text : str
            Document source

        Returns
        -------
        ParseResult
            Status, tree and diagnostics

        """
        pass


def result_status(messages: list[Diagnostic]) -> ParseStatus:
    """Return ``"error"`` if any diagnostic is an error, else ``"ok"``."""
    return "error" if any(message.severity == "error" for message in messages) else "ok"
