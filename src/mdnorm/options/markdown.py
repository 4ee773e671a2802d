#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for Markdown parsing.

The options mirror the switches of the underlying parser and are forwarded
verbatim; the normalizer itself takes no options.
"""
# src/mdnorm/options/markdown.py

from __future__ import annotations

from dataclasses import dataclass, field

from mdnorm.constants import (
    DEFAULT_BREAKS,
    DEFAULT_GFM,
    DEFAULT_MATH,
    DEFAULT_PURE_LINKS,
    DEFAULT_SOURCE_FILE,
    DEFAULT_START_LINE,
)
from mdnorm.options.base import BaseParserOptions


@dataclass(frozen=True)
class MarkdownParserOptions(BaseParserOptions):
    """Configuration options for Markdown-to-AST parsing.

    Parameters
    ----------
    gfm : bool, default True
        Turn on GitHub Flavored Markdown extensions (tables, strikethrough,
        bare URL autolinking).
    breaks : bool, default False
        Only applicable if ``gfm`` is enabled. Makes every line break in the
        input a hard line break in the output.
    source_file : str, default "nofile"
        File label attached to diagnostics.
    start_line : int, default 1
        Line number of the first input line, used in diagnostics.
    pure_links : bool, default True
        Turn bare URLs into links (requires ``gfm``).
    math : bool, default True
        Parse ``$...$`` and ``$$...$$`` math.

    Examples
    --------
        >>> options = MarkdownParserOptions(source_file="guide.md", start_line=10)
        >>> options.create_updated(breaks=True).breaks
        True

    """

    gfm: bool = field(
        default=DEFAULT_GFM,
        metadata={"help": "GitHub Flavored Markdown extensions", "importance": "core"},
    )
    breaks: bool = field(
        default=DEFAULT_BREAKS,
        metadata={"help": "Treat single newlines as hard line breaks (GFM only)", "importance": "core"},
    )
    source_file: str = field(
        default=DEFAULT_SOURCE_FILE,
        metadata={"help": "File label used in diagnostics (the CLI uses the input path)", "importance": "advanced"},
    )
    start_line: int = field(
        default=DEFAULT_START_LINE,
        metadata={"help": "Line number of the first input line in diagnostics", "type": int, "importance": "advanced"},
    )
    pure_links: bool = field(
        default=DEFAULT_PURE_LINKS,
        metadata={"help": "Autolinking of bare URLs", "importance": "core"},
    )
    math: bool = field(
        default=DEFAULT_MATH,
        metadata={"help": "Parsing of $...$ and $$...$$ math", "importance": "core"},
    )

    def __post_init__(self) -> None:
        """Validate options by calling parent validation."""
        super().__post_init__()
