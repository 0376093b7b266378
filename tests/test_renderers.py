"""Tests for document renderers, filename sanitizing, and page markers.

WHY: The renderer is the last step before delivery. Wrong file names,
a missing directory, or a marker on every paragraph are all visible to
the user; a failed write must surface as IO_ERROR.

HOW: Renderers write into pytest's tmp_path. layout_transcript() is run
on a fresh fpdf2 document so page markers can be checked against the
final page count without parsing the PDF.
"""

import pytest

from yt_transcript_pdf.core.errors import ErrorKind, TranscriptPipelineError
from yt_transcript_pdf.renderers import RENDERERS
from yt_transcript_pdf.renderers.base import BaseRenderer, sanitize_filename, write_artifact
from yt_transcript_pdf.renderers.pdf import PdfRenderer, layout_transcript, new_document
from yt_transcript_pdf.renderers.plain_text import PlainTextRenderer

VIDEO_ID = "dQw4w9WgXcQ"

LONG_BODY = tuple(
    "Sentence number {} is here to fill the page with some text.".format(i)
    for i in range(120)
)


# ---------------------------------------------------------------------------
# Tests: registry and filenames
# ---------------------------------------------------------------------------


class TestRegistry:

    def test_keys(self):
        assert set(RENDERERS) == {"pdf", "plain_text"}

    def test_values_are_renderer_classes(self):
        for cls in RENDERERS.values():
            assert issubclass(cls, BaseRenderer)


class TestSanitizeFilename:

    def test_punctuation_and_spaces(self):
        assert sanitize_filename("Hello, World! (Part 2)") == "hello_world_part_2"

    def test_collapses_underscores(self):
        assert sanitize_filename("a   --  b") == "a_b"

    def test_truncated_to_fifty(self):
        assert len(sanitize_filename("x" * 80)) == 50

    def test_non_ascii_replaced(self):
        assert sanitize_filename("Café Déjà Vu") == "caf_d_j_vu"

    def test_nothing_usable(self):
        assert sanitize_filename("!!! ???") == "transcript"
        assert sanitize_filename("") == "transcript"


# ---------------------------------------------------------------------------
# Tests: PdfRenderer
# ---------------------------------------------------------------------------


class TestPdfRenderer:

    def test_writes_pdf(self, tmp_path):
        doc = PdfRenderer(tmp_path).render("My Video", VIDEO_ID, ("Hello world.",))
        assert doc.file_path == tmp_path / "my_video.pdf"
        assert doc.title == "My Video"
        assert doc.file_path.read_bytes().startswith(b"%PDF")

    def test_creates_output_dir(self, tmp_path):
        out = tmp_path / "nested" / "scratch"
        doc = PdfRenderer(out).render("Title", VIDEO_ID, ("Text.",))
        assert doc.file_path.parent == out
        assert doc.file_path.stat().st_size > 0

    def test_overwrites_same_title(self, tmp_path):
        renderer = PdfRenderer(tmp_path)
        first = renderer.render("Same", VIDEO_ID, ("One.",))
        second = renderer.render("Same", VIDEO_ID, ("Two.",) * 200)
        assert first.file_path == second.file_path
        assert list(tmp_path.iterdir()) == [second.file_path]

    def test_non_latin_text(self, tmp_path):
        doc = PdfRenderer(tmp_path).render("Привет мир", VIDEO_ID, ("Это тест.", "naïve café."))
        assert doc.file_path.name == "transcript.pdf"
        assert doc.file_path.stat().st_size > 0

    def test_output_dir_is_a_file(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("x")
        with pytest.raises(TranscriptPipelineError) as exc_info:
            PdfRenderer(blocker / "sub").render("Title", VIDEO_ID, ("Text.",))
        assert exc_info.value.kind is ErrorKind.IO_ERROR


class TestPageMarkers:
    """One marker per page transition, not one per paragraph."""

    def test_short_body_has_no_markers(self):
        pdf = new_document()
        markers = layout_transcript(pdf, "Short", VIDEO_ID, ("Only one paragraph.",))
        assert markers == []
        assert pdf.page_no() == 1

    def test_long_body_marks_each_new_page(self):
        pdf = new_document()
        markers = layout_transcript(pdf, "Long", VIDEO_ID, LONG_BODY)
        assert pdf.page_no() >= 2
        assert markers == list(range(2, pdf.page_no() + 1))
        assert len(markers) < len(LONG_BODY)

    def test_two_page_body(self):
        pdf = new_document()
        body = LONG_BODY[:25]
        markers = layout_transcript(pdf, "Two pages", VIDEO_ID, body)
        assert pdf.page_no() == 2
        assert markers == [2]

    def test_single_paragraph_spanning_pages(self):
        # Unpunctuated captions assemble into one long paragraph
        pdf = new_document()
        body = ("word " * 3000 + ".", "Next.")
        markers = layout_transcript(pdf, "Run-on", VIDEO_ID, body)
        assert pdf.page_no() >= 3
        assert markers == list(range(2, pdf.page_no() + 1))

    def test_markers_not_repeated_across_documents(self):
        first = new_document()
        layout_transcript(first, "One", VIDEO_ID, LONG_BODY)
        second = new_document()
        assert layout_transcript(second, "Two", VIDEO_ID, ("Short.",)) == []


# ---------------------------------------------------------------------------
# Tests: PlainTextRenderer
# ---------------------------------------------------------------------------


class TestPlainTextRenderer:

    def test_content_layout(self, tmp_path):
        doc = PlainTextRenderer(tmp_path).render(
            "My Video", VIDEO_ID, ("First paragraph.", "Second one!"),
        )
        assert doc.file_path == tmp_path / "my_video.txt"
        assert doc.file_path.read_text(encoding="utf-8") == (
            "My Video\n"
            "========\n"
            "Video ID: dQw4w9WgXcQ\n"
            "\n"
            "First paragraph.\n"
            "\n"
            "Second one!\n"
        )

    def test_keeps_unicode(self, tmp_path):
        doc = PlainTextRenderer(tmp_path).render("Café", VIDEO_ID, ("Déjà vu.",))
        assert "Déjà vu." in doc.file_path.read_text(encoding="utf-8")


class TestWriteArtifact:

    def test_write_failure_is_io_error(self, tmp_path):
        target = tmp_path / "is_a_dir"
        target.mkdir()
        with pytest.raises(TranscriptPipelineError) as exc_info:
            write_artifact(target, b"data")
        assert exc_info.value.kind is ErrorKind.IO_ERROR
        assert isinstance(exc_info.value.__cause__, OSError)
