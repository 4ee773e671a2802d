#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdnorm/ast/__init__.py
"""HTML-like AST for parsed Markdown documents.

This package holds the node classes, the canonical name table, the
normalization pass and JSON serialization.

Examples
--------
    >>> from mdnorm.ast import Comment, Element, Text, normalize
    >>> doc = [
    ...     Comment(' livebook:{"output":true} ', is_output_marker=True),
    ...     Element("pre", children=[Element("code", children=[Text("42")])]),
    ... ]
    >>> normalize(doc)[0].children[0].attributes
    [(Name('class'), 'output')]

"""

from mdnorm.ast.names import Name, canonical_name, is_canonical
from mdnorm.ast.nodes import (
    Attribute,
    Comment,
    Document,
    Element,
    Node,
    Text,
    get_text_content,
    split_first_attribute,
)
from mdnorm.ast.normalize import admonition_classes, normalize
from mdnorm.ast.serialization import ast_to_dict, ast_to_json, dict_to_ast, json_to_ast

__all__ = [
    "Attribute",
    "Comment",
    "Document",
    "Element",
    "Name",
    "Node",
    "Text",
    "admonition_classes",
    "ast_to_dict",
    "ast_to_json",
    "canonical_name",
    "dict_to_ast",
    "get_text_content",
    "is_canonical",
    "json_to_ast",
    "normalize",
    "split_first_attribute",
]
