"""Fragment assembly: merge timed caption snippets into paragraphs.

WHY: Caption fragments are cut by screen time, not by sentence. A
sentence often spans three or four fragments, and one fragment may end
mid-word-group. Renderers need whole, sentence-terminated paragraphs.

HOW: Walk the fragments in order with a string accumulator. Each
fragment is normalized and appended with a leading space. Whenever the
accumulator ends in sentence punctuation it is grammar-repaired and
emitted as a paragraph. Leftover text gets a terminal "." and becomes
the last paragraph. A final repair pass over the blank-line-joined
paragraphs fixes defects introduced at paragraph edges.

RULES:
- Empty normalized fragments are skipped
- Paragraph boundary: trimmed accumulator ends with ".", "!" or "?"
- Leftover text: append "." then repair
- Accumulated text without any word character (e.g. a lone ".") is
  dropped rather than emitted
- Every output paragraph is non-empty and ends with . ! or ?
- assemble([]) returns ()
"""

from __future__ import annotations

import re
from typing import Iterable, List

from yt_transcript_pdf.core.grammar import repair
from yt_transcript_pdf.core.ir import AssembledDocumentText, TranscriptFragment
from yt_transcript_pdf.core.normalizer import normalize

_SENTENCE_END = (".", "!", "?")
_PARAGRAPH_SEPARATOR = "\n\n"
_WORD_RE = re.compile(r"\w")


def _flush(accumulator: str, paragraphs: List[str]) -> None:
    """Repair a trimmed, terminated accumulator and emit it."""
    if not _WORD_RE.search(accumulator):
        return
    paragraphs.append(repair(accumulator))


def assemble(fragments: Iterable[TranscriptFragment]) -> AssembledDocumentText:
    """Merge ordered transcript fragments into repaired paragraphs.

    Args:
        fragments: Fragments in chronological order.

    Returns:
        Tuple of paragraph strings, each ending with sentence punctuation.
    """
    paragraphs: List[str] = []
    accumulator = ""

    for fragment in fragments:
        cleaned = normalize(fragment.text)
        if not cleaned:
            continue

        accumulator += " " + cleaned

        trimmed = accumulator.strip()
        if trimmed.endswith(_SENTENCE_END):
            _flush(trimmed, paragraphs)
            accumulator = ""

    residual = accumulator.strip()
    if residual:
        _flush(residual + ".", paragraphs)

    if not paragraphs:
        return ()

    # Final pass over the whole text catches defects at paragraph edges.
    repaired = repair(_PARAGRAPH_SEPARATOR.join(paragraphs))

    result: List[str] = []
    for paragraph in repaired.split(_PARAGRAPH_SEPARATOR):
        paragraph = paragraph.strip()
        if not paragraph:
            continue
        if not paragraph.endswith(_SENTENCE_END):
            paragraph += "."
        result.append(paragraph)

    return tuple(result)
