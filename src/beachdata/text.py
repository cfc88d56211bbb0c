"""HTML entity decoding and tag stripping for scraped text."""

import re

from bs4 import Tag

_ENTITIES = {
    "&nbsp;": " ",
    "&amp;": "&",
    "&quot;": '"',
    "&#039;": "'",
    "&lt;": "<",
    "&gt;": ">",
    "\u00a0": " ",
}
_ENTITY_PATTERN = re.compile("|".join(re.escape(e) for e in _ENTITIES))
_WS_PATTERN = re.compile(r"\s+")
_TAG_PATTERN = re.compile(r"<[^>]*>")


def decode(text: str | None) -> str:
    """Replace the known entities, collapse whitespace and trim.

    Replacement repeats until stable so that ``&amp;lt;`` and friends
    end up fully decoded and ``decode(decode(x)) == decode(x)``.
    """
    if not text:
        return ""
    prev = None
    while prev != text:
        prev = text
        text = _ENTITY_PATTERN.sub(lambda m: _ENTITIES[m.group(0)], text)
    return _WS_PATTERN.sub(" ", text).strip()


def strip_tags(text: str | None) -> str:
    """Replace every tag with a space, then decode."""
    if not text:
        return ""
    return decode(_TAG_PATTERN.sub(" ", text))


def node_text(tag: Tag | None) -> str:
    """Normalized text content of a parsed node."""
    if tag is None:
        return ""
    return decode(tag.get_text(" "))
