"""PDF renderer with a title header and running page-number markers.

WHY: The transcript is delivered as a document people read on phones
and print; a paginated PDF with the video title on top is the expected
artifact.

HOW: fpdf2 lays the document out in points on a US Letter page with
50pt margins. The header is written first, then each paragraph with
FPDF.write() (which flows and wraps text and breaks pages on its own)
after a first-line indent. TranscriptPDF overrides FPDF.header(), which
fpdf2 calls on every new page, including breaks in the middle of a
paragraph, and writes a gray "- N -" marker at the top of every page
after the first.

RULES:
- Header: title centered, bold, underlined, 20pt; "Video ID: <id>"
  centered, 12pt, gray; spacing after
- Body: 12pt Helvetica, left aligned, 20pt first-line indent, 17pt line
  height, one blank line between paragraphs
- Exactly one marker per page transition, even when a single paragraph
  spans several pages
- Core fonts are Latin-1 only; other characters are replaced with "?"
"""

from __future__ import annotations

from typing import List, Sequence

from fpdf import FPDF, XPos, YPos

from yt_transcript_pdf.renderers.base import BaseRenderer

_FONT = "Helvetica"
_PAGE_FORMAT = "letter"
_MARGIN_PT = 50
_TITLE_FONT_SIZE = 20
_TITLE_LINE_HEIGHT = 24
_BODY_FONT_SIZE = 12
_BODY_LINE_HEIGHT = 17  # 12pt text plus a 5pt line gap
_PARAGRAPH_INDENT = 20
_MUTED_GRAY = 128
_BLACK = 0


def _latin1(text: str) -> str:
    return text.encode("latin-1", "replace").decode("latin-1")


class TranscriptPDF(FPDF):
    """FPDF document that marks every page after the first.

    page_markers collects the page numbers of the markers written, in
    order.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.page_markers: List[int] = []

    def header(self) -> None:
        page = self.page_no()
        if page <= 1:
            return
        self.set_font(_FONT, size=_BODY_FONT_SIZE)
        self.set_text_color(_MUTED_GRAY)
        self.cell(
            0, _BODY_LINE_HEIGHT, "- {} -".format(page),
            align="C", new_x=XPos.LMARGIN, new_y=YPos.NEXT,
        )
        self.set_text_color(_BLACK)
        self.ln(_BODY_LINE_HEIGHT)
        self.page_markers.append(page)


def new_document() -> TranscriptPDF:
    """Create an empty one-page document with the transcript page setup."""
    pdf = TranscriptPDF(orientation="portrait", unit="pt", format=_PAGE_FORMAT)
    pdf.set_margins(_MARGIN_PT, _MARGIN_PT, _MARGIN_PT)
    pdf.set_auto_page_break(auto=True, margin=_MARGIN_PT)
    pdf.add_page()
    return pdf


def _write_header(pdf: FPDF, title: str, video_id: str) -> None:
    pdf.set_font(_FONT, style="BU", size=_TITLE_FONT_SIZE)
    pdf.multi_cell(
        0, _TITLE_LINE_HEIGHT, _latin1(title),
        align="C", new_x=XPos.LMARGIN, new_y=YPos.NEXT,
    )
    pdf.ln(_BODY_LINE_HEIGHT)

    pdf.set_font(_FONT, size=_BODY_FONT_SIZE)
    pdf.set_text_color(_MUTED_GRAY)
    pdf.cell(
        0, _BODY_LINE_HEIGHT, _latin1("Video ID: {}".format(video_id)),
        align="C", new_x=XPos.LMARGIN, new_y=YPos.NEXT,
    )
    pdf.set_text_color(_BLACK)
    pdf.ln(_BODY_LINE_HEIGHT * 2)


def layout_transcript(
    pdf: TranscriptPDF,
    title: str,
    video_id: str,
    paragraphs: Sequence[str],
) -> List[int]:
    """Lay out header and body on pdf.

    Returns:
        Page numbers of the markers written, in order.
    """
    _write_header(pdf, title, video_id)
    pdf.set_font(_FONT, size=_BODY_FONT_SIZE)

    last_index = len(paragraphs) - 1

    for index, paragraph in enumerate(paragraphs):
        text = paragraph.strip()
        if not text:
            continue

        pdf.set_x(pdf.l_margin + _PARAGRAPH_INDENT)
        pdf.write(_BODY_LINE_HEIGHT, _latin1(text))
        pdf.ln(_BODY_LINE_HEIGHT)

        if index < last_index:
            pdf.ln(_BODY_LINE_HEIGHT)

    return list(pdf.page_markers)


class PdfRenderer(BaseRenderer):
    """Renderer that produces the paginated transcript PDF."""

    @property
    def name(self) -> str:
        return "PDF"

    @property
    def extension(self) -> str:
        return "pdf"

    def build(self, title: str, video_id: str, paragraphs: Sequence[str]) -> bytes:
        pdf = new_document()
        pdf.set_title(_latin1(title))
        layout_transcript(pdf, title, video_id, paragraphs)
        return bytes(pdf.output())
