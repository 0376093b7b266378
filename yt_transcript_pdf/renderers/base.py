"""Abstract base renderer, filename sanitizing, and artifact writing.

WHY: Every output format consumes the same title, video ID, and
paragraph tuple but produces different bytes. The base class owns
everything the formats share — output naming, scratch directory
creation, and the write itself — so each renderer only lays out content.

HOW: BaseRenderer is an ABC with ``name``, ``extension`` and ``build()``.
render() is the template method: build the bytes, make sure the output
directory exists, write the file through a context manager, and return
a RenderedDocument handle.

RULES:
- Output path: <output_dir>/<sanitize_filename(title)>.<extension>
- output_dir defaults to SCRATCH_DIR from config and is created on demand
- An existing file with the same name is overwritten
- Any OSError while creating the directory or writing → IO_ERROR
- A partially written file is removed on failure
- The returned file is complete and closed; the caller deletes it
"""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Sequence, Union

from yt_transcript_pdf.config import FILENAME_MAX_CHARS, SCRATCH_DIR
from yt_transcript_pdf.core.errors import ErrorKind, TranscriptPipelineError
from yt_transcript_pdf.core.ir import RenderedDocument

logger = logging.getLogger(__name__)

_UNSAFE_CHARS_RE = re.compile(r"[^A-Za-z0-9]")
_REPEATED_UNDERSCORE_RE = re.compile(r"_+")

FALLBACK_FILENAME = "transcript"


def sanitize_filename(title: str) -> str:
    """Turn a video title into a filesystem-safe base name.

    RULES:
    - Every character outside [A-Za-z0-9] becomes "_"
    - Runs of "_" collapse to one; leading/trailing "_" are trimmed
    - Lowercased, then truncated to FILENAME_MAX_CHARS (50)
    - A title with no usable characters gives FALLBACK_FILENAME
    """
    name = _UNSAFE_CHARS_RE.sub("_", title or "")
    name = _REPEATED_UNDERSCORE_RE.sub("_", name)
    name = name.strip("_").lower()[:FILENAME_MAX_CHARS]
    return name or FALLBACK_FILENAME


def write_artifact(path: Path, content: bytes) -> None:
    """Write bytes to path, closing the file on every path.

    Raises:
        TranscriptPipelineError: IO_ERROR when the write fails.
    """
    try:
        with open(path, "wb") as fh:
            fh.write(content)
    except OSError as exc:
        logger.error("Failed to write %s: %s", path, exc)
        try:
            path.unlink()
        except OSError:
            pass  # Nothing was created, or it is already gone
        raise TranscriptPipelineError(ErrorKind.IO_ERROR, str(exc)) from exc


class BaseRenderer(ABC):
    """Abstract base for all document renderers.

    To add a new output format:
    1. Create a new module in renderers/
    2. Subclass BaseRenderer
    3. Implement name, extension and build()
    4. Register in RENDERERS in renderers/__init__.py
    """

    def __init__(self, output_dir: Optional[Union[str, Path]] = None) -> None:
        self.output_dir = Path(output_dir) if output_dir else SCRATCH_DIR

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable format name, e.g. 'PDF'."""

    @property
    @abstractmethod
    def extension(self) -> str:
        """File extension without the dot, e.g. 'pdf'."""

    @abstractmethod
    def build(self, title: str, video_id: str, paragraphs: Sequence[str]) -> bytes:
        """Lay out the document and return its complete bytes."""

    def output_path(self, title: str) -> Path:
        return self.output_dir / "{}.{}".format(sanitize_filename(title), self.extension)

    def render(self, title: str, video_id: str, paragraphs: Sequence[str]) -> RenderedDocument:
        """Render the paragraphs into a document file.

        Args:
            title: Display title for the header (also names the file).
            video_id: YouTube video ID shown under the title.
            paragraphs: Assembled, sentence-terminated paragraphs.

        Returns:
            RenderedDocument pointing at the finished file.

        Raises:
            TranscriptPipelineError: IO_ERROR on filesystem failures.
        """
        content = self.build(title, video_id, paragraphs)

        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            logger.error("Failed to create output directory %s: %s", self.output_dir, exc)
            raise TranscriptPipelineError(ErrorKind.IO_ERROR, str(exc)) from exc

        path = self.output_path(title)
        write_artifact(path, content)
        logger.info("Rendered %s document %s (%d bytes)", self.name, path, len(content))
        return RenderedDocument(file_path=path, title=title)
