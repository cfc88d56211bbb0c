"""Tournament detail page sanitizing and tournament code extraction.

The detail fragment is third-party markup embedded into our own output, so
scripts, inline handlers, links back to the upstream origin and
new-tab targets are removed first.  This is pattern based, not a tree
sanitizer: markup the patterns do not anticipate passes through.
"""

import re
from urllib.parse import parse_qs, urlparse

from beachdata.text import decode

_SCRIPT_PATTERN = re.compile(r"<script[\s\S]*?</script>", re.IGNORECASE)
_HANDLER_PATTERN = re.compile(r"""\s(on\w+)=("[^"]*"|'[^']*')""", re.IGNORECASE)
_ORIGIN_HREF_DQ = re.compile(r'href="https://fivb\.12ndr\.at[^"]*"', re.IGNORECASE)
_ORIGIN_HREF_SQ = re.compile(r"href='https://fivb\.12ndr\.at[^']*'", re.IGNORECASE)
_TARGET_BLANK_DQ = re.compile(r'target="_blank"', re.IGNORECASE)
_TARGET_BLANK_SQ = re.compile(r"target='_blank'", re.IGNORECASE)
_TCODE_PATTERN = re.compile(r"[?&]tcode=([^&]+)", re.IGNORECASE)


def sanitize_tournament_html(html: str) -> str:
    html = _SCRIPT_PATTERN.sub("", html)
    html = _HANDLER_PATTERN.sub("", html)
    html = _ORIGIN_HREF_DQ.sub('href="#"', html)
    html = _ORIGIN_HREF_SQ.sub("href='#'", html)
    html = _TARGET_BLANK_DQ.sub("", html)
    html = _TARGET_BLANK_SQ.sub("", html)
    return html


def extract_tcode(url: str | None) -> str | None:
    """The ``tcode`` query parameter of a tournament URL, case preserved."""
    if not url:
        return None
    normalized = decode(url)
    try:
        values = parse_qs(urlparse(normalized).query).get("tcode")
    except ValueError:
        values = None
    if values:
        return values[0]
    m = _TCODE_PATTERN.search(normalized)
    return m.group(1) if m else None
