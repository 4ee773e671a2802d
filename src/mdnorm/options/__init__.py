#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Options classes for mdnorm parsers."""

from mdnorm.options.base import BaseParserOptions, CloneFrozenMixin
from mdnorm.options.markdown import MarkdownParserOptions

__all__ = ["BaseParserOptions", "CloneFrozenMixin", "MarkdownParserOptions"]
