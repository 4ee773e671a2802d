#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdnorm/ast/serialization.py
"""JSON serialization and deserialization for AST nodes.

The normalized tree is handed to renderers that may live in another process,
so it needs a stable wire form. Every node becomes a JSON object with a
``node_type`` discriminator; attributes are written as ``[name, value]``
pairs to keep their order and any duplicate names.

Examples
--------
Serialize a document:

    >>> from mdnorm.ast import Element, Text
    >>> from mdnorm.ast.serialization import ast_to_json
    >>> print(ast_to_json([Element("p", children=[Text("Hi")])]))

Deserialize it again:

    >>> from mdnorm.ast.serialization import json_to_ast
    >>> doc = json_to_ast(json_str)
    >>> doc[0].tag
    'p'

"""

from __future__ import annotations

import json
from typing import Any, Sequence

from mdnorm.ast.names import canonical_name
from mdnorm.ast.nodes import Comment, Element, Node, Text


def ast_to_dict(node: Node) -> dict[str, Any]:
    """Convert a single AST node to a JSON-compatible dictionary.

    Parameters
    ----------
    node : Node
        Node to serialize

    Returns
    -------
    dict
        Dictionary representation of the node

    Raises
    ------
    ValueError
        If the node type is not serializable

    """
    if isinstance(node, Text):
        return {"node_type": "Text", "content": node.content}

    if isinstance(node, Comment):
        return {"node_type": "Comment", "content": node.content, "is_output_marker": node.is_output_marker}

    if isinstance(node, Element):
        return {
            "node_type": "Element",
            "tag": str(node.tag),
            "attributes": [[str(name), value] for name, value in node.attributes],
            "children": [ast_to_dict(child) for child in node.children],
            "metadata": node.metadata,
        }

    raise ValueError(f"Unknown node type: {type(node).__name__}")


def dict_to_ast(data: dict[str, Any]) -> Node:
    """Convert a dictionary produced by :func:`ast_to_dict` back to a node.

    Tag and attribute names are rebuilt as canonical names, so a normalized
    tree survives the round trip unchanged.

    Parameters
    ----------
    data : dict
        Dictionary representation of a node

    Returns
    -------
    Node
        Reconstructed node

    Raises
    ------
    ValueError
        If ``node_type`` is missing or unknown

    """
    node_type = data.get("node_type")

    if node_type == "Text":
        return Text(content=data.get("content", ""))

    if node_type == "Comment":
        return Comment(content=data.get("content", ""), is_output_marker=bool(data.get("is_output_marker", False)))

    if node_type == "Element":
        return Element(
            tag=canonical_name(data["tag"]),
            attributes=[(canonical_name(name), value) for name, value in data.get("attributes", [])],
            children=[dict_to_ast(child) for child in data.get("children", [])],
            metadata=dict(data.get("metadata", {})),
        )

    raise ValueError(f"Unknown node_type: {node_type!r}")


def ast_to_json(document: Sequence[Node], indent: int | None = None) -> str:
    """Serialize a document to a JSON string.

    Parameters
    ----------
    document : sequence of Node
        Document to serialize
    indent : int or None, default = None
        Indentation passed through to :func:`json.dumps`

    Returns
    -------
    str
        JSON array of node objects

    Raises
    ------
    ValueError
        If element metadata holds values JSON cannot represent

    """
    try:
        return json.dumps([ast_to_dict(node) for node in document], indent=indent, ensure_ascii=False)
    except TypeError as e:
        raise ValueError(f"Element metadata is not JSON serializable: {e}") from e


def json_to_ast(json_str: str) -> list[Node]:
    """Deserialize a JSON string produced by :func:`ast_to_json`.

    Tags and attribute names come back as canonical names.

    Raises
    ------
    ValueError
        If the JSON is not an array of node objects

    """
    data = json.loads(json_str)
    if not isinstance(data, list):
        raise ValueError(f"Expected a JSON array of nodes, got {type(data).__name__}")
    return [dict_to_ast(item) for item in data]
