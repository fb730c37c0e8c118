"""
Outbound string cleaning.

Every user-supplied string is passed through `clean` before it is placed in a
response. No tags survive: `<script>`/`<style>` are dropped with their
content, any other tag is removed and its text kept. The result is plain
text, not HTML: `AT&T` comes back as `AT&T`.
"""

from __future__ import annotations

import html
from typing import Any

import nh3

# Entity-encoded markup ("&lt;b&gt;") turns into real tags once unescaped,
# so cleaning repeats until the text stops changing.
_MAX_PASSES = 5


def _strip(value: str) -> str:
    return html.unescape(nh3.clean(value, tags=set(), attributes={}))


def clean(value: Any) -> Any:
    if value is None or not isinstance(value, str):
        return value
    text = value
    for _ in range(_MAX_PASSES):
        stripped = _strip(text)
        if stripped == text:
            return stripped
        text = stripped
    # Still changing: drop anything that could read as markup.
    return text.replace("<", "").replace(">", "")


def clean_fields(row: dict[str, Any], fields: tuple[str, ...]) -> dict[str, Any]:
    """
    Return a copy of `row` with `fields` cleaned.
    """
    cleaned = dict(row)
    for field in fields:
        if field in cleaned:
            cleaned[field] = clean(cleaned[field])
    return cleaned
