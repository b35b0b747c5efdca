"""Label-boundary regex combinator shared by both matching strategies.

A field value runs from just after ``label:`` up to the next occurrence of
one of a closed set of boundary labels, or the end of the text. Only the
six known labels ever act as boundaries; a bare colon never does.

Block-literal fields (``content: |``) use line-anchored boundaries: inside
the body, a label only terminates the value when it starts a line, so the
body may contain text such as ``see image: above``.
"""

from __future__ import annotations

import re
from functools import lru_cache

BLOCK_MARKER = "|"

_FLAGS = re.IGNORECASE | re.DOTALL | re.MULTILINE

# A label must not be glued to a preceding word ("subtitle:", "og-image:").
_NOT_INSIDE_WORD = r"(?<![\w-])"


def _alternation(labels: tuple[str, ...]) -> str:
    return "|".join(re.escape(label) for label in labels)


def label_token(label: str) -> str:
    """Regex source for ``label:`` at a word boundary."""
    return rf"{_NOT_INSIDE_WORD}{re.escape(label)}:"


def boundary_token(labels: tuple[str, ...], *, line_start: bool = False) -> str:
    """Regex source matching any of ``labels`` followed by a colon."""
    names = _alternation(labels)
    if line_start:
        return rf"^[ \t]*(?:{names}):"
    return rf"{_NOT_INSIDE_WORD}(?:{names}):"


@lru_cache(maxsize=None)
def capture_pattern(
    label: str,
    boundaries: tuple[str, ...],
    *,
    block_marker: bool = False,
    line_start: bool = False,
    allow_end: bool = True,
) -> re.Pattern[str]:
    """Compile a pattern capturing the value of ``label`` into group ``value``.

    Args:
        label: Field label to look for (matched case-insensitively).
        boundaries: Labels that terminate the value.
        block_marker: Require the block marker after the label.
        line_start: Only honour boundaries at the start of a line.
        allow_end: Let the value run to the end of the text.

    Returns:
        Compiled pattern; the captured value is untrimmed.
    """
    if not boundaries and not allow_end:
        raise ValueError(f"capture for {label!r} needs a boundary or allow_end")

    head = label_token(label)
    if block_marker:
        head += rf"\s*{re.escape(BLOCK_MARKER)}"

    stops: list[str] = []
    if boundaries:
        stops.append(boundary_token(boundaries, line_start=line_start))
    if allow_end:
        stops.append(r"\Z")

    return re.compile(rf"{head}(?P<value>.*?)(?=(?:{'|'.join(stops)}))", _FLAGS)
