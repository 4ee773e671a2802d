#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for mdnorm.

Shared by the parser adapter, the normalizer and the CLI.
"""

from __future__ import annotations

from typing import Literal

# Parser option defaults
DEFAULT_GFM = True
DEFAULT_BREAKS = False
DEFAULT_SOURCE_FILE = "nofile"
DEFAULT_START_LINE = 1
DEFAULT_PURE_LINKS = True
DEFAULT_MATH = True

# Heading classes that turn a blockquote into an admonition
ADMONITION_CLASSES = frozenset({"warning", "error", "info", "tip", "neutral"})
ADMONITION_HEADING_TAGS = frozenset({"h3", "h4"})

MATH_INLINE_CLASS = "math-inline"
MATH_DISPLAY_CLASS = "math-display"

# Comment text written by notebook exports in front of captured outputs
OUTPUT_MARKER_TEXT = 'livebook:{"output":true}'
OUTPUT_CLASS = "output"

Severity = Literal["error", "warning"]
ParseStatus = Literal["ok", "error"]

# (install_name, import_name, version_spec)
DEPS_MARKDOWN = [("mistune", "mistune", ">=3.0.0")]

CONFIG_ENV_VAR = "MDNORM_CONFIG"
CONFIG_FILENAMES = [".mdnorm.toml", ".mdnorm.yaml", ".mdnorm.yml", ".mdnorm.json"]
