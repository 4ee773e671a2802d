#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdnorm/parsers/markdown.py
"""Markdown to HTML-like AST converter.

This module drives the mistune parser in AST mode and reshapes its token
stream into :class:`~mdnorm.ast.Element` trees that look like the HTML a
documentation renderer will eventually emit (``p``, ``h3``, ``pre > code``,
``blockquote`` and so on). The result still needs :func:`mdnorm.ast.normalize`
before it is handed to a renderer.

"""

from __future__ import annotations

import logging
import re
from typing import Any

from mdnorm.ast import Comment, Element, Node, Text
from mdnorm.constants import DEPS_MARKDOWN, MATH_DISPLAY_CLASS, MATH_INLINE_CLASS, OUTPUT_MARKER_TEXT
from mdnorm.exceptions import ParsingError
from mdnorm.options.markdown import MarkdownParserOptions
from mdnorm.parsers._markdown_lint import lint_markdown, parse_ial
from mdnorm.parsers.base import BaseParser, ParseResult, result_status
from mdnorm.utils.decorators import debug_timer, requires_dependencies

logger = logging.getLogger(__name__)

_TRAILING_IAL = re.compile(r"\s*\{:(?P<body>[^}]*)\}\s*$")
_HTML_TAG = re.compile(r"^\s*<\s*(?P<tag>[A-Za-z][\w-]*)")


class MarkdownToAstConverter(BaseParser):
    r"""Convert Markdown to the HTML-like AST.

    Parameters
    ----------
    options : MarkdownParserOptions or None, default = None
        Parser configuration options

    Examples
    --------
    Basic parsing:

        >>> converter = MarkdownToAstConverter()
        >>> result = converter.parse("# Hello\\n\\nThis is **bold**.")
        >>> result.status
        'ok'

    With options:

        >>> options = MarkdownParserOptions(gfm=True, breaks=True)
        >>> result = MarkdownToAstConverter(options).parse(markdown_text)

    """

    def __init__(self, options: MarkdownParserOptions | None = None):
        """Initialize the Markdown parser with options."""
        BaseParser._validate_options_type(options, MarkdownParserOptions, "markdown")
        options = options or MarkdownParserOptions()
        super().__init__(options)
        self.options: MarkdownParserOptions = options

    @requires_dependencies("markdown parser", DEPS_MARKDOWN)
    def parse(self, text: str) -> ParseResult:
        """Parse Markdown text into an AST plus diagnostics.

        Parameters
        ----------
        text : str
            Markdown source

        Returns
        -------
        ParseResult
            ``("ok" | "error", nodes, diagnostics)``

        Raises
        ------
        ParsingError
            If mistune fails unexpectedly on the input
        DependencyError
            If mistune is not installed

        """
        import mistune

        markdown = mistune.create_markdown(
            renderer=None,
            hard_wrap=self.options.gfm and self.options.breaks,
            plugins=self._plugins(),
        )

        try:
            with debug_timer(logger, "Parsing (markdown)"):
                tokens, _state = markdown.parse(text)
        except Exception as e:
            raise ParsingError(
                f"Failed to parse Markdown: {e}", parsing_stage="markdown_parsing", original_error=e
            ) from e

        nodes = self._process_tokens(tokens) if isinstance(tokens, list) else []
        messages = lint_markdown(text, start_line=self.options.start_line, math=self.options.math)

        return ParseResult(result_status(messages), nodes, messages)

    def _plugins(self) -> list[str]:
        plugins = []
        if self.options.gfm:
            plugins.extend(["table", "strikethrough"])
            if self.options.pure_links:
                plugins.append("url")
        if self.options.math:
            plugins.append("math")
        return plugins

    def _process_tokens(self, tokens: list[dict[str, Any]]) -> list[Node]:
        """Process a list of mistune block tokens into AST nodes.

        Parameters
        ----------
        tokens : list of dict
            Mistune token dictionaries

        Returns
        -------
        list of Node
            AST nodes

        """
        nodes: list[Node] = []
        for token in tokens:
            nodes.extend(self._process_token(token))
        return nodes

    def _process_token(self, token: dict[str, Any]) -> list[Node]:
        token_type = token.get("type", "")

        handler_map: dict[str, Any] = {
            "heading": self._process_heading,
            "paragraph": self._process_paragraph,
            "block_text": self._process_block_text,
            "block_code": self._process_code_block,
            "block_quote": self._process_block_quote,
            "list": self._process_list,
            "table": self._process_table,
            "thematic_break": lambda _token: [Element("hr")],
            "block_html": self._process_html_block,
            "block_math": self._process_math_block,
            "blank_line": lambda _token: [],
        }

        handler = handler_map.get(token_type)
        if handler is None:
            logger.debug("Skipping unsupported markdown token type %r", token_type)
            return []
        return handler(token)

    def _process_heading(self, token: dict[str, Any]) -> list[Node]:
        """Process heading token, lifting a trailing ``{: ...}`` into attributes."""
        attrs = token.get("attrs", {})
        level = attrs.get("level", 1) if isinstance(attrs, dict) else 1
        if not isinstance(level, int) or level < 1 or level > 6:
            level = 1

        children = self._process_inline_tokens(token.get("children", []))
        attributes: list[tuple[str, str]] = []

        if children and isinstance(children[-1], Text):
            match = _TRAILING_IAL.search(children[-1].content)
            if match:
                # Illegal tokens are reported by the source lint
                attributes, _illegal = parse_ial(match.group("body"))
                remaining = children[-1].content[: match.start()]
                children = children[:-1] + ([Text(remaining)] if remaining else [])

        return [Element(f"h{level}", attributes, children)]

    def _process_paragraph(self, token: dict[str, Any]) -> list[Node]:
        return [Element("p", children=self._process_inline_tokens(token.get("children", [])))]

    def _process_block_text(self, token: dict[str, Any]) -> list[Node]:
        # Tight list items carry their inline content directly
        return self._process_inline_tokens(token.get("children", []))

    def _process_code_block(self, token: dict[str, Any]) -> list[Node]:
        """Process code block token into ``pre > code``.

        The first word of the info string becomes the code element's class.
        """
        source = token.get("raw", "")
        if source.endswith("\n"):
            source = source[:-1]

        attrs = token.get("attrs", {})
        info = (attrs.get("info") or "").strip() if isinstance(attrs, dict) else ""
        code_attributes = [("class", info.split(maxsplit=1)[0])] if info else []

        return [Element("pre", children=[Element("code", code_attributes, [Text(source)])])]

    def _process_block_quote(self, token: dict[str, Any]) -> list[Node]:
        return [Element("blockquote", children=self._process_tokens(token.get("children", [])))]

    def _process_list(self, token: dict[str, Any]) -> list[Node]:
        """Process list token into ``ul``/``ol`` with ``li`` items."""
        attrs = token.get("attrs", {})
        if not isinstance(attrs, dict):
            attrs = {}

        ordered = attrs.get("ordered", False)
        attributes: list[tuple[str, str]] = []
        start = attrs.get("start", 1)
        if ordered and start not in (None, 1):
            attributes.append(("start", str(start)))

        items = [
            Element("li", children=self._process_tokens(child.get("children", [])))
            for child in token.get("children", [])
            if isinstance(child, dict)
        ]
        return [Element("ol" if ordered else "ul", attributes, items)]

    def _process_table(self, token: dict[str, Any]) -> list[Node]:
        """Process table token into ``table > thead/tbody > tr > th/td``."""
        sections: list[Node] = []

        for section in token.get("children", []):
            section_type = section.get("type", "")
            if section_type == "table_head":
                # Header cells are direct children of table_head
                cells = [self._process_table_cell(cell, "th") for cell in section.get("children", [])]
                row = Element("tr", children=cells)
                sections.append(Element("thead", children=[row]))
            elif section_type == "table_body":
                rows: list[Node] = [
                    Element("tr", children=[self._process_table_cell(cell, "td") for cell in row.get("children", [])])
                    for row in section.get("children", [])
                ]
                sections.append(Element("tbody", children=rows))

        return [Element("table", children=sections)]

    def _process_table_cell(self, token: dict[str, Any], tag: str) -> Element:
        attrs = token.get("attrs", {})
        align = attrs.get("align") if isinstance(attrs, dict) else None
        attributes = [("style", f"text-align: {align};")] if align else []
        return Element(tag, attributes, self._process_inline_tokens(token.get("children", [])))

    def _process_html_block(self, token: dict[str, Any]) -> list[Node]:
        """Process HTML block token.

        Comments become :class:`Comment` nodes; any other HTML is kept
        verbatim inside an element named after its opening tag.
        """
        content = token.get("raw", "")

        if self._is_html_comment(content):
            return [self._make_comment(content)]

        match = _HTML_TAG.match(content)
        tag = match.group("tag").lower() if match else "div"
        return [Element(tag, children=[Text(content.rstrip("\n"))], metadata={"verbatim": True})]

    def _process_math_block(self, token: dict[str, Any]) -> list[Node]:
        content = token.get("raw", "").strip("\n")
        return [Element("p", children=[Element("code", [("class", MATH_DISPLAY_CLASS)], [Text(content)])])]

    def _process_inline_tokens(self, tokens: list[dict[str, Any]]) -> list[Node]:
        """Process inline tokens, merging adjacent text runs.

        Parameters
        ----------
        tokens : list of dict
            Inline token dictionaries

        Returns
        -------
        list of Node
            Inline AST nodes

        """
        nodes: list[Node] = []
        if not isinstance(tokens, list):
            return nodes

        for token in tokens:
            for node in self._process_inline_token(token):
                if isinstance(node, Text) and nodes and isinstance(nodes[-1], Text):
                    nodes[-1] = Text(nodes[-1].content + node.content)
                else:
                    nodes.append(node)

        return nodes

    def _process_inline_token(self, token: dict[str, Any]) -> list[Node]:
        token_type = token.get("type", "")

        handler_map: dict[str, Any] = {
            "text": lambda t: [Text(t.get("raw", ""))],
            "emphasis": lambda t: [Element("em", children=self._process_inline_tokens(t.get("children", [])))],
            "strong": lambda t: [Element("strong", children=self._process_inline_tokens(t.get("children", [])))],
            "strikethrough": lambda t: [Element("del", children=self._process_inline_tokens(t.get("children", [])))],
            "codespan": lambda t: [Element("code", [("class", "inline")], [Text(t.get("raw", ""))])],
            "linebreak": lambda _t: [Element("br")],
            "softbreak": lambda _t: [Text("\n")],
            "link": self._handle_link_token,
            "image": self._handle_image_token,
            "inline_html": self._handle_inline_html_token,
            "inline_math": lambda t: [Element("code", [("class", MATH_INLINE_CLASS)], [Text(t.get("raw", ""))])],
            # $$...$$ written inside a paragraph
            "block_math": lambda t: [Element("code", [("class", MATH_DISPLAY_CLASS)], [Text(t.get("raw", ""))])],
        }

        handler = handler_map.get(token_type)
        if handler is None:
            logger.debug("Skipping unsupported inline token type %r", token_type)
            return []
        return handler(token)

    def _handle_link_token(self, token: dict[str, Any]) -> list[Node]:
        attrs = token.get("attrs", {})
        if not isinstance(attrs, dict):
            attrs = {}

        attributes = [("href", attrs.get("url", ""))]
        if attrs.get("title"):
            attributes.append(("title", attrs["title"]))
        return [Element("a", attributes, self._process_inline_tokens(token.get("children", [])))]

    def _handle_image_token(self, token: dict[str, Any]) -> list[Node]:
        attrs = token.get("attrs", {})
        if not isinstance(attrs, dict):
            attrs = {}

        # Alt text is in children, not attrs
        alt_text = "".join(
            child.get("raw", "")
            for child in token.get("children", [])
            if isinstance(child, dict) and child.get("type") == "text"
        )
        attributes = [("src", attrs.get("url", "")), ("alt", alt_text)]
        if attrs.get("title"):
            attributes.append(("title", attrs["title"]))
        return [Element("img", attributes)]

    def _handle_inline_html_token(self, token: dict[str, Any]) -> list[Node]:
        content = token.get("raw", "")
        if self._is_html_comment(content):
            return [self._make_comment(content)]
        return [Text(content)]

    def _is_html_comment(self, content: str) -> bool:
        stripped = content.strip()
        return stripped.startswith("<!--") and stripped.endswith("-->")

    def _make_comment(self, content: str) -> Comment:
        """Build a comment node, flagging the notebook output marker.

        The comment keeps its inner text exactly, surrounding spaces included.
        """
        inner = content.strip()[4:-3]
        return Comment(inner, is_output_marker=inner.strip() == OUTPUT_MARKER_TEXT)


def markdown_to_ast(markdown_content: str, options: MarkdownParserOptions | None = None) -> ParseResult:
    r"""Parse a Markdown string in one step.

    Parameters
    ----------
    markdown_content : str
        Markdown text to parse
    options : MarkdownParserOptions or None, default = None
        Parser configuration

    Returns
    -------
    ParseResult
        Status, raw (not yet normalized) AST and diagnostics

    Examples
    --------
    >>> from mdnorm.parsers.markdown import markdown_to_ast
    >>> status, nodes, messages = markdown_to_ast("# Hello\\n\\nWorld")
    >>> len(nodes)
    2

    """
    return MarkdownToAstConverter(options).parse(markdown_content)
