#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Parsers producing the raw HTML-like AST."""

from mdnorm.parsers.base import BaseParser, Diagnostic, ParseResult
from mdnorm.parsers.markdown import MarkdownToAstConverter, markdown_to_ast

__all__ = ["BaseParser", "Diagnostic", "MarkdownToAstConverter", "ParseResult", "markdown_to_ast"]
