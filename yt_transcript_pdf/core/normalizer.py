"""Caption fragment normalization: entities, annotations, stray symbols.

WHY: YouTube caption text carries HTML entities ("&amp;#39;"), sound
annotations ("[Music]", "[Applause]"), and assorted symbols that have no
place in a reading transcript. The grammar rules downstream assume plain
words, spaces, and basic punctuation.

HOW: A fixed sequence of string rewrites — decode a small entity table,
drop bracketed spans, drop disallowed characters, collapse whitespace,
trim.

RULES:
- Only the six entities in _ENTITIES are decoded, in table order
- "[...]" spans are removed including the brackets
- Allowed characters: word chars, whitespace, . , ! ? ' " ( ) - &
- Whitespace is collapsed after character removal, so the result never
  contains double spaces and normalize() is idempotent
- Never raises; empty input gives ""
"""

from __future__ import annotations

import re

# Decoded in this order; &amp; first so "&amp;lt;" becomes "<".
_ENTITIES = (
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&#39;", "'"),
    ("&nbsp;", " "),
)

_BRACKETED_RE = re.compile(r"\[[^\]]*\]")
_DISALLOWED_RE = re.compile(r"[^\w\s.,!?'\"()&-]")
_WHITESPACE_RE = re.compile(r"\s+")


def decode_entities(text: str) -> str:
    """Replace the supported HTML entities with their literal characters."""
    for entity, literal in _ENTITIES:
        text = text.replace(entity, literal)
    return text


def normalize(raw: str) -> str:
    """Strip markup and noise from one raw caption fragment.

    Args:
        raw: Caption text as delivered by the transcript source.

    Returns:
        Single-spaced, trimmed text with only allowed characters.
    """
    if not raw:
        return ""

    text = decode_entities(raw)
    text = _BRACKETED_RE.sub("", text)
    text = _DISALLOWED_RE.sub("", text)
    text = _WHITESPACE_RE.sub(" ", text)
    return text.strip()
