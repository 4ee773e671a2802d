#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdnorm/parsers/_markdown_lint.py
"""Source-level checks that produce parser diagnostics.

mistune never complains about its input, it just guesses. This module scans
the raw lines for the constructs that silently swallow the rest of a
document (unterminated fences, comments and display math) and for
malformed inline attribute lists, and reports them with line numbers.

"""

from __future__ import annotations

import re

from mdnorm.parsers.base import Diagnostic

_FENCE_OPEN = re.compile(r"^ {0,3}(?P<fence>`{3,}|~{3,})(?P<info>.*)$")
_FENCE_CLOSE = re.compile(r"^ {0,3}(?P<fence>`{3,}|~{3,})\s*$")
_ATX_HEADING_IAL = re.compile(r"^ {0,3}#{1,6}\s.*?\{:(?P<body>[^}]*)\}\s*$")
_BLOCKQUOTE_MARKERS = re.compile(r"^(?: {0,3}> ?)+")
_LIST_MARKER = re.compile(r"^ {0,3}(?:[-+*]|\d{1,9}[.)]) +")
_INDENTED_CODE = re.compile(r"^(?: {4}|\t)")
_CODE_SPAN = re.compile(r"(`+)(?!`).*?(?<!`)\1(?!`)")

IAL_TOKEN = re.compile(
    r"""\.(?P<cls>[\w-]+)"""
    r"""|\#(?P<id>[\w-]+)"""
    r"""|(?P<key>[\w-]+)=(?:"(?P<dq>[^"]*)"|'(?P<sq>[^']*)'|(?P<bare>[^\s"']+))"""
)


def parse_ial(body: str) -> tuple[list[tuple[str, str]], list[str]]:
    """Parse the inside of an inline attribute list (``{: ...}``).

    Parameters
    ----------
    body : str
        Text between ``{:`` and ``}``

    Returns
    -------
    tuple
        ``(attributes, illegal)``: the attribute pairs in order, with all
        classes merged into a single leading ``class`` entry, and any
        leftover tokens that could not be understood

    Examples
    --------
        >>> parse_ial(" .warning .wide #intro data-x=1")
        ([('class', 'warning wide'), ('id', 'intro'), ('data-x', '1')], [])

    """
    classes: list[str] = []
    attributes: list[tuple[str, str]] = []
    illegal: list[str] = []

    position = 0
    for match in IAL_TOKEN.finditer(body):
        illegal.extend(body[position : match.start()].split())
        position = match.end()

        if match.group("cls"):
            classes.append(match.group("cls"))
        elif match.group("id"):
            attributes.append(("id", match.group("id")))
        else:
            value = next(v for v in (match.group("dq"), match.group("sq"), match.group("bare")) if v is not None)
            attributes.append((match.group("key"), value))
    illegal.extend(body[position:].split())

    if classes:
        attributes.insert(0, ("class", " ".join(classes)))
    return attributes, illegal


def lint_markdown(text: str, start_line: int = 1, math: bool = True) -> list[Diagnostic]:
    """Scan Markdown source for unterminated constructs.

    Blockquote markers are stripped before a line is examined, and a fence
    may follow a list marker. Comment and math openers are only looked for
    outside inline code spans and indented code.

    Parameters
    ----------
    text : str
        Markdown source
    start_line : int, default 1
        Number given to the first line
    math : bool, default True
        Whether ``$$`` display math is recognized

    Returns
    -------
    list of Diagnostic
        Diagnostics in source order

    """
    messages: list[Diagnostic] = []

    fence: str | None = None
    fence_line = 0
    fence_quoted = False
    comment_line: int | None = None
    math_line: int | None = None

    for offset, raw in enumerate(text.splitlines()):
        number = start_line + offset
        quote = _BLOCKQUOTE_MARKERS.match(raw)
        line = raw[quote.end() :] if quote else raw

        if fence is not None:
            if fence_quoted and not quote:
                # The blockquote ended around the open fence
                messages.append(_unclosed_fence(fence, fence_line))
                fence = None
            else:
                close = _FENCE_CLOSE.match(line if fence_quoted else raw)
                if close and close.group("fence")[0] == fence[0] and len(close.group("fence")) >= len(fence):
                    fence = None
                continue

        if comment_line is not None:
            if "-->" in line:
                comment_line = None
            continue

        if math_line is not None:
            if line.strip().startswith("$$"):
                math_line = None
            continue

        opening = _FENCE_OPEN.match(line) or _FENCE_OPEN.match(_LIST_MARKER.sub("", line, count=1))
        if opening and not (opening.group("fence")[0] == "`" and "`" in opening.group("info")):
            fence = opening.group("fence")
            fence_line = number
            fence_quoted = quote is not None
            continue

        if _INDENTED_CODE.match(line):
            continue

        visible = _CODE_SPAN.sub("", line)
        start = visible.find("<!--")
        if start != -1 and "-->" not in visible[start + 4 :]:
            comment_line = number
            continue

        stripped = visible.strip()
        if math and stripped.startswith("$$"):
            if not (len(stripped) > 4 and stripped.endswith("$$")):
                math_line = number
            continue

        ial = _ATX_HEADING_IAL.match(line)
        if ial:
            _, illegal = parse_ial(ial.group("body"))
            if illegal:
                messages.append(Diagnostic("warning", number, f"Illegal attributes {illegal!r} ignored in IAL"))

    if fence is not None:
        messages.append(_unclosed_fence(fence, fence_line))
    if comment_line is not None:
        messages.append(Diagnostic("warning", comment_line, "Failed to find closing --> for HTML comment"))
    if math_line is not None:
        messages.append(Diagnostic("warning", math_line, "Display math opened with $$ not closed at end of input"))

    return messages


def _unclosed_fence(fence: str, line: int) -> Diagnostic:
    return Diagnostic("error", line, f"Fenced Code Block opened with {fence} not closed at end of input")
