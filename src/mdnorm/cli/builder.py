#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Build argparse arguments from options dataclass fields.

Each field of an options dataclass becomes one flag. Field metadata drives
the result:

- ``help``: argument help text
- ``cli_name``: flag name without the leading dashes; inferred from the field
  name otherwise, with a ``no-`` prefix for booleans that default to True
- ``type``: argparse type for non-boolean fields (default ``str``)
- ``importance``: ``"core"`` fields go in the main group, ``"advanced"``
  ones in a separate group

Every argument defaults to None so callers can tell flags that were given
from flags that were not, and layer configuration file values underneath.
"""

from __future__ import annotations

import argparse
import logging
from dataclasses import MISSING, Field, fields
from typing import Any, Dict, Type

logger = logging.getLogger(__name__)

IMPORTANCE_GROUPS = {
    "core": ("parser options", None),
    "advanced": ("diagnostic options", "Where diagnostics say they come from"),
}


def infer_cli_name(field_name: str, negated: bool = False) -> str:
    """Turn a field name into a flag name, e.g. ``pure_links`` -> ``--no-pure-links``."""
    kebab_name = field_name.replace("_", "-")
    if negated and not kebab_name.startswith("no-"):
        kebab_name = f"no-{kebab_name}"
    return f"--{kebab_name}"


def get_argument_kwargs(options_field: Field) -> Dict[str, Any]:
    """Return the ``add_argument`` keyword arguments for a dataclass field.

    Parameters
    ----------
    options_field : dataclasses.Field
        Field of an options dataclass

    Returns
    -------
    dict
        Keyword arguments including ``dest`` and ``default=None``

    """
    metadata = options_field.metadata
    kwargs: Dict[str, Any] = {
        "dest": options_field.name,
        "default": None,
        "help": metadata.get("help", f"Configure {options_field.name}"),
    }

    if isinstance(options_field.default, bool):
        # A flag always moves the option away from its default
        kwargs["action"] = "store_const"
        kwargs["const"] = not options_field.default
        if options_field.default:
            kwargs["help"] += " (on by default)"
    else:
        kwargs["type"] = metadata.get("type", str)
        if options_field.default is not MISSING:
            kwargs["metavar"] = type(options_field.default).__name__.upper()

    return kwargs


def add_options_arguments(parser: argparse.ArgumentParser, options_class: Type[Any]) -> None:
    """Add one flag per field of ``options_class`` to ``parser``, grouped by importance.

    Parameters
    ----------
    parser : argparse.ArgumentParser
        Parser to extend
    options_class : type
        Options dataclass, e.g. ``MarkdownParserOptions``

    """
    groups: Dict[str, argparse._ArgumentGroup] = {}

    for options_field in fields(options_class):
        importance = options_field.metadata.get("importance", "core")
        if importance not in IMPORTANCE_GROUPS:
            logger.debug("Unknown importance %r for field %s, treating as core", importance, options_field.name)
            importance = "core"
        if importance not in groups:
            title, description = IMPORTANCE_GROUPS[importance]
            groups[importance] = parser.add_argument_group(title, description)

        negated = options_field.default is True
        cli_name = options_field.metadata.get("cli_name")
        flag = f"--{cli_name}" if cli_name else infer_cli_name(options_field.name, negated)

        groups[importance].add_argument(flag, **get_argument_kwargs(options_field))
