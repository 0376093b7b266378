"""Plain text transcript renderer.

WHY: Some users want to paste the transcript into notes or search it;
a UTF-8 text file is the simplest artifact and keeps characters the PDF
core fonts cannot show.

HOW: Title, an underline of "=", the video ID line, a blank line, then
the paragraphs separated by blank lines.

RULES:
- Output extension: ".txt", UTF-8, trailing newline
- No page markers
"""

from __future__ import annotations

from typing import Sequence

from yt_transcript_pdf.renderers.base import BaseRenderer


class PlainTextRenderer(BaseRenderer):
    """Renderer that produces a plain UTF-8 text transcript."""

    @property
    def name(self) -> str:
        return "Plain Text"

    @property
    def extension(self) -> str:
        return "txt"

    def build(self, title: str, video_id: str, paragraphs: Sequence[str]) -> bytes:
        lines = [
            title,
            "=" * len(title),
            "Video ID: {}".format(video_id),
            "",
        ]
        body = "\n\n".join(p.strip() for p in paragraphs if p.strip())
        content = "\n".join(lines) + "\n" + body
        if not content.endswith("\n"):
            content += "\n"
        return content.encode("utf-8")
