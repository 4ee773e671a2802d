#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdnorm/ast/normalize.py
"""Rewrite a parsed Markdown tree into its canonical form.

The parser output is close to HTML but not quite what a documentation
renderer wants. :func:`normalize` walks the tree once and applies these
rewrites, tried in order for every node:

1. Math round-trip: ``code.math-inline`` / ``code.math-display`` elements
   become text carrying the original ``$...$`` / ``$$...$$`` delimiters, so
   a client-side math renderer sees the source syntax.
2. Admonitions: a blockquote opening with an ``h3``/``h4`` classed as
   ``warning``, ``error``, ``info``, ``tip`` or ``neutral`` becomes a
   ``div`` with ``role="note"`` for screen readers.
3. Notebook outputs: the output marker comment is dropped and the
   ``pre > code`` block that follows it gains an ``output`` class.
4. Comments and text pass through unchanged.
5. Every other element has its tag and attribute names canonicalized and
   its children normalized.

The function is pure: the input tree is never modified.

Examples
--------
    >>> from mdnorm.ast import Element, Text, normalize
    >>> normalize([Element("code", [("class", "math-inline")], [Text("x^2")])])
    [Text(content='$x^2$')]

"""

from __future__ import annotations

from typing import Optional, Sequence, cast

from mdnorm.ast.names import canonical_name
from mdnorm.ast.nodes import Attribute, Comment, Element, Node, Text, split_first_attribute
from mdnorm.constants import (
    ADMONITION_CLASSES,
    ADMONITION_HEADING_TAGS,
    MATH_DISPLAY_CLASS,
    MATH_INLINE_CLASS,
    OUTPUT_CLASS,
)


def normalize(document: Sequence[Node]) -> list[Node]:
    """Normalize a document into the canonical AST.

    Parameters
    ----------
    document : sequence of Node
        Top-level nodes as produced by the parser

    Returns
    -------
    list of Node
        New list of normalized nodes in the original reading order

    """
    return _normalize_sequence(document)


def _normalize_sequence(nodes: Sequence[Node]) -> list[Node]:
    result: list[Node] = []
    pending = list(nodes)
    index = 0

    while index < len(pending):
        node = pending[index]

        merged = _merge_output(node, pending[index + 1]) if index + 1 < len(pending) else None
        if merged is not None:
            # Marker consumed; the rebuilt block goes through the normal path
            index += 1
            pending[index] = merged
            continue

        result.extend(_normalize_node(node))
        index += 1

    return result


def _normalize_node(node: Node) -> list[Node]:
    """Normalize one node into its replacement sequence (empty drops it)."""
    if isinstance(node, Element):
        math = _round_trip_math(node)
        if math is not None:
            return [math]

        if node.tag == "blockquote" and _starts_with_heading(node):
            return [_normalize_blockquote(node)]

        return [_normalize_element(node)]

    return [node]


def _normalize_element(element: Element) -> Element:
    return Element(
        tag=canonical_name(element.tag),
        attributes=[_canonical_attribute(attr) for attr in element.attributes],
        children=_normalize_sequence(element.children),
        metadata=dict(element.metadata),
    )


def _canonical_attribute(attribute: Attribute) -> Attribute:
    name, value = attribute
    return canonical_name(name), value


def _round_trip_math(element: Element) -> Optional[Text]:
    if element.tag != "code" or len(element.attributes) != 1 or len(element.children) != 1:
        return None

    name, value = element.attributes[0]
    content = element.children[0]
    if name != "class" or not isinstance(content, Text):
        return None

    if value == MATH_INLINE_CLASS:
        return Text(f"${content.content}$")
    if value == MATH_DISPLAY_CLASS:
        return Text(f"$$\n{content.content}\n$$")
    return None


def _starts_with_heading(element: Element) -> bool:
    if not element.children:
        return False
    first = element.children[0]
    return isinstance(first, Element) and first.tag in ADMONITION_HEADING_TAGS


def admonition_classes(heading: Element) -> str:
    """Return the admonition tokens of a heading's class, space separated.

    Parameters
    ----------
    heading : Element
        The heading opening a blockquote

    Returns
    -------
    str
        Recognized tokens in their original order, or ``""`` if none

    """
    classes = heading.get_attribute("class", "") or ""
    return " ".join(token for token in classes.split() if token in ADMONITION_CLASSES)


def _normalize_blockquote(blockquote: Element) -> Element:
    heading = cast(Element, blockquote.children[0])

    tokens = admonition_classes(heading)
    if not tokens:
        # Regular blockquote: generic path only, never back into this rule
        return _normalize_element(blockquote)

    admonition_class = f"admonition {tokens}"
    existing, others = split_first_attribute(blockquote.attributes, "class")
    others = [(name, value) for name, value in others if name != "role"]

    if existing is None:
        merged_class = admonition_class
    else:
        merged_class = f"{existing.rstrip()} {admonition_class}"

    div = Element(
        tag="div",
        attributes=[("class", merged_class), ("role", "note"), *others],
        children=list(blockquote.children),
        metadata=blockquote.metadata,
    )
    return _normalize_element(div)


def _merge_output(marker: Node, block: Node) -> Optional[Element]:
    """Fold an output marker comment into the ``pre > code`` block after it.

    Returns the rebuilt ``pre`` element, or None when the pair does not match.
    """
    if not (isinstance(marker, Comment) and marker.is_output_marker):
        return None
    if not (isinstance(block, Element) and block.tag == "pre" and len(block.children) == 1):
        return None

    code = block.children[0]
    if not (isinstance(code, Element) and code.tag == "code" and len(code.children) == 1):
        return None
    if not isinstance(code.children[0], Text):
        return None

    existing, others = split_first_attribute(code.attributes, "class")
    output_class = OUTPUT_CLASS if existing is None else f"{existing} {OUTPUT_CLASS}"

    rebuilt_code = Element(
        tag=code.tag,
        attributes=[("class", output_class), *others],
        children=list(code.children),
        metadata=code.metadata,
    )
    return Element(tag=block.tag, attributes=list(block.attributes), children=[rebuilt_code], metadata=block.metadata)


__all__ = ["normalize", "admonition_classes"]
