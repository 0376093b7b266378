"""Document renderer registry — pluggable output formats.

WHY: The CLI and the Slack bot need a single lookup to find a renderer
by name. Adding a format means one new module plus one line here.

HOW: RENDERERS maps string keys to renderer *classes* (not instances).
Callers instantiate with an output directory:
``renderer = RENDERERS["pdf"](output_dir)``.

RULES:
- Keys are snake_case identifiers (used in CLI flags and config)
- Values are BaseRenderer subclasses
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from yt_transcript_pdf.renderers.pdf import PdfRenderer
from yt_transcript_pdf.renderers.plain_text import PlainTextRenderer

if TYPE_CHECKING:
    from yt_transcript_pdf.renderers.base import BaseRenderer

RENDERERS: dict[str, type[BaseRenderer]] = {
    "pdf": PdfRenderer,
    "plain_text": PlainTextRenderer,
}
