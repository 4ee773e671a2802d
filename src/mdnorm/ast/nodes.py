#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdnorm/ast/nodes.py
"""AST node classes for the HTML-like document tree.

The tree has three kinds of node:

    - Text: a run of character data
    - Comment: an HTML comment, possibly the notebook output marker
    - Element: a tag with ordered attributes, children and opaque metadata

A document is simply an ordered list of nodes in reading order.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

Attribute = tuple[str, str]


class Node:
    """Base class for all AST nodes."""

    __slots__ = ()


@dataclass
class Text(Node):
    """Plain text node.

    Parameters
    ----------
    content : str
        Text content

    """

    content: str


@dataclass
class Comment(Node):
    """HTML comment node.

    Parameters
    ----------
    content : str
        Comment text without the ``<!--`` and ``-->`` markers
    is_output_marker : bool, default = False
        True for the sentinel comment notebook exports place directly in
        front of a code block that holds captured execution output

    """

    content: str
    is_output_marker: bool = False


@dataclass
class Element(Node):
    """Tagged element node.

    Parameters
    ----------
    tag : str
        Tag name (raw string from the parser, or a canonical Name)
    attributes : list of (str, str), default = empty list
        Ordered attribute pairs; names may repeat
    children : list of Node, default = empty list
        Child nodes in reading order
    metadata : dict, default = empty dict
        Parser-supplied metadata, opaque to the normalizer

    Examples
    --------
        >>> Element("p", children=[Text("Hello")])
        >>> Element("code", [("class", "math-inline")], [Text("x^2")])

    """

    tag: str
    attributes: list[Attribute] = field(default_factory=list)
    children: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def get_attribute(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Return the value of the first attribute called ``name``.

        Parameters
        ----------
        name : str
            Attribute name to look up
        default : str or None, default = None
            Value returned when the attribute is absent

        Returns
        -------
        str or None
            First matching attribute value, or ``default``

        """
        for attr_name, value in self.attributes:
            if attr_name == name:
                return value
        return default


Document = list[Node]


def split_first_attribute(attributes: list[Attribute], name: str) -> tuple[Optional[str], list[Attribute]]:
    """Separate the first attribute called ``name`` from the others.

    Later attributes with the same name stay in the remainder untouched.

    Parameters
    ----------
    attributes : list of (str, str)
        Attribute pairs to search
    name : str
        Attribute name to extract

    Returns
    -------
    tuple
        ``(value, rest)`` where ``value`` is None when no attribute matched

    """
    for index, (attr_name, value) in enumerate(attributes):
        if attr_name == name:
            return value, attributes[:index] + attributes[index + 1 :]
    return None, list(attributes)


def get_text_content(nodes: list[Node]) -> str:
    """Concatenate the text of a node list, descending into elements."""
    parts: list[str] = []
    for node in nodes:
        if isinstance(node, Text):
            parts.append(node.content)
        elif isinstance(node, Element):
            parts.append(get_text_content(node.children))
    return "".join(parts)
