"""Display configuration read from directives inside the document.

The canvas has no settings dialog. Writing ``r.schema dark``, ``r.font
Fira Code`` or ``r.size 16`` anywhere in the text (with spaces around it)
changes the display on the next reflow pass. The last directive of each
kind wins; a missing directive means the default.

Directive forms, spaces included::

    " r.schema dark "      dark | light | auto, then a space
    " r.font Fira Code  "  any run without a newline, ended by two spaces
    " r.size 16 "          digits and dots, then a space
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .constants import EditorConstants

logger = logging.getLogger(__name__)

SCHEMA = "schema"
FONT = "font"
SIZE = "size"

_PREFIX = " r."
_SIZE_CHARS = frozenset("0123456789.")
_LINE_BREAKS = "\n\r\u2028\u2029"


@dataclass(frozen=True)
class Config:
    """Display configuration; replaced as a whole on every rescan."""
    schema: str = EditorConstants.DEFAULT_SCHEMA
    font: str = EditorConstants.DEFAULT_FONT
    size: float = EditorConstants.DEFAULT_SIZE


def _match_schema(text: str, start: int) -> Optional[tuple[str, int]]:
    for value in EditorConstants.SCHEMAS:
        end = start + len(value)
        if text.startswith(value, start) and text[end:end + 1] == " ":
            return value, end + 1
    return None


def _match_font(text: str, start: int) -> Optional[tuple[str, int]]:
    # Shortest non-empty value followed by two spaces, all on one line
    end = text.find("  ", start + 1)
    if end == -1:
        return None
    value = text[start:end]
    if any(ch in _LINE_BREAKS for ch in value):
        return None
    return value, end + 2


def _match_size(text: str, start: int) -> Optional[tuple[str, int]]:
    end = start
    while end < len(text) and text[end] in _SIZE_CHARS:
        end += 1
    if end == start or text[end:end + 1] != " ":
        return None
    return text[start:end], end + 1


_MATCHERS = {
    SCHEMA: _match_schema,
    FONT: _match_font,
    SIZE: _match_size,
}


def scan_directives(text: str) -> dict[str, str]:
    """Collect the last raw value of each directive kind.

    One left-to-right pass. Matches of one kind never overlap: after a match
    the next one of that kind must start at or after its end, just like
    consecutive regular expression matches. Kinds do not block each other.
    """
    found: dict[str, str] = {}
    resume = {kind: 0 for kind in _MATCHERS}
    pos = text.find(_PREFIX)
    while pos != -1:
        name_start = pos + len(_PREFIX)
        for kind, matcher in _MATCHERS.items():
            if pos < resume[kind]:
                continue
            keyword = kind + " "
            if not text.startswith(keyword, name_start):
                continue
            match = matcher(text, name_start + len(keyword))
            if match is not None:
                found[kind], resume[kind] = match
        pos = text.find(_PREFIX, pos + 1)
    return found


def parse_size(raw: Optional[str]) -> float:
    """Convert a size directive value, clamping it to the minimum."""
    if raw is None:
        return EditorConstants.DEFAULT_SIZE
    try:
        size = float(raw)
    except ValueError:
        logger.debug("Ignoring malformed size directive %r", raw)
        return EditorConstants.DEFAULT_SIZE
    return max(EditorConstants.MIN_SIZE, size)


def scan_config(text: str) -> Config:
    """Build a fresh Config from the directives in text."""
    found = scan_directives(text)
    config = Config(
        schema=found.get(SCHEMA, EditorConstants.DEFAULT_SCHEMA),
        font=found.get(FONT, EditorConstants.DEFAULT_FONT),
        size=parse_size(found.get(SIZE)),
    )
    logger.debug("Scanned config %s", config)
    return config
