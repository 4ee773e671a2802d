#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdnorm/ast/names.py
"""Canonical identifiers for tag and attribute names.

The parser hands over tag and attribute names as plain strings. Downstream
consumers discriminate on them, so the normalizer converts every name into a
:class:`Name`: an interned, string-backed identifier. The table is open:
any string becomes a valid name, including tags no renderer has heard of.

Examples
--------
    >>> tag = canonical_name("div")
    >>> tag == "div"
    True
    >>> tag is canonical_name("div")
    True
    >>> is_canonical(tag), is_canonical("div")
    (True, False)

"""

from __future__ import annotations

_NAMES: dict[str, Name] = {}


class Name(str):
    """Interned tag or attribute identifier.

    Behaves exactly like the string it wraps (hashing, comparison,
    formatting), so renderers can keep matching against literals.
    """

    __slots__ = ()

    def __repr__(self) -> str:
        return f"Name({str.__repr__(self)})"


def canonical_name(value: str) -> Name:
    """Return the canonical identifier for a tag or attribute name.

    Parameters
    ----------
    value : str
        Raw name as produced by the parser, or an already canonical name

    Returns
    -------
    Name
        The single shared :class:`Name` instance for ``value``

    """
    name = _NAMES.get(value)
    if name is None:
        name = _NAMES.setdefault(str(value), Name(value))
    return name


def is_canonical(value: object) -> bool:
    """Check whether a value is a canonical :class:`Name`."""
    return isinstance(value, Name)


__all__ = ["Name", "canonical_name", "is_canonical"]
