#  Copyright (c) 2025 Tom Villani, Ph.D.
"""mdnorm - canonical HTML-like ASTs from Markdown.

mdnorm parses Markdown with mistune and rewrites the result into the tree a
documentation renderer expects: math keeps its ``$`` delimiters, classed
blockquotes become accessible admonitions and notebook outputs are marked.

Examples
--------
    >>> from mdnorm import to_ast, ast_to_json
    >>> nodes = to_ast("> ### Careful {: .warning}\\n>\\n> Mind the gap.")
    >>> nodes[0].tag
    Name('div')

"""

from mdnorm.api import emit_diagnostics, is_available, to_ast
from mdnorm.ast import Comment, Element, Name, Node, Text, ast_to_json, json_to_ast, normalize
from mdnorm.exceptions import (
    ConfigError,
    DependencyError,
    InvalidOptionsError,
    MdnormError,
    ParsingError,
    ValidationError,
)
from mdnorm.options import MarkdownParserOptions

__version__ = "0.1.0"

__all__ = [
    "Comment",
    "ConfigError",
    "DependencyError",
    "Element",
    "InvalidOptionsError",
    "MarkdownParserOptions",
    "MdnormError",
    "Name",
    "Node",
    "ParsingError",
    "Text",
    "ValidationError",
    "ast_to_json",
    "emit_diagnostics",
    "is_available",
    "json_to_ast",
    "normalize",
    "to_ast",
]
