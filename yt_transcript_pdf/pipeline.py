"""Pipeline orchestration: video ID in, rendered transcript document out.

WHY: The CLI and the Slack bot both need the same sequence — fetch the
transcript, assemble paragraphs, look up the title, render the file —
and the same mapping of failures onto a small set of error kinds that
they can explain to a user.

HOW: produce_transcript_document() runs the stages in order. Every
collaborator (fetcher, metadata client, renderer, output directory) is
injectable so tests can drive the whole flow without a network.

RULES:
- TRANSCRIPT_DISABLED and NO_TRANSCRIPT pass through unchanged
- Every other failure becomes PROCESSING_ERROR, logged with detail
- An assembled result with no paragraphs is a PROCESSING_ERROR
- Title is normalized; an empty result falls back to the video ID
- An unknown DEFAULT_RENDERER key is a PROCESSING_ERROR
- No retries here; the fetcher owns retrying
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

from yt_transcript_pdf.api.metadata import YouTubeMetadataClient
from yt_transcript_pdf.api.transcripts import TranscriptFetcher
from yt_transcript_pdf.config import DEFAULT_RENDERER
from yt_transcript_pdf.core.assembler import assemble
from yt_transcript_pdf.core.errors import ErrorKind, TranscriptPipelineError
from yt_transcript_pdf.core.ir import AssembledDocumentText, RenderedDocument
from yt_transcript_pdf.core.normalizer import normalize
from yt_transcript_pdf.renderers import RENDERERS
from yt_transcript_pdf.renderers.base import BaseRenderer

logger = logging.getLogger(__name__)

_PASS_THROUGH_KINDS = frozenset({ErrorKind.TRANSCRIPT_DISABLED, ErrorKind.NO_TRANSCRIPT})


def resolve_title(video_id: str, metadata: Optional[YouTubeMetadataClient] = None) -> str:
    """Fetch and normalize the display title for a video.

    Opens its own YouTubeMetadataClient when none is given.
    """
    if metadata is None:
        with YouTubeMetadataClient() as client:
            raw_title = client.fetch_title(video_id)
    else:
        raw_title = metadata.fetch_title(video_id)

    title = normalize(raw_title)
    return title or video_id


def _build_paragraphs(video_id: str, fetcher: TranscriptFetcher) -> AssembledDocumentText:
    fragments = fetcher.fetch(video_id)
    paragraphs = assemble(fragments)
    logger.info(
        "Assembled %d fragments into %d paragraphs for video %s",
        len(fragments), len(paragraphs), video_id,
    )
    if not paragraphs:
        raise TranscriptPipelineError(
            ErrorKind.PROCESSING_ERROR, "transcript produced no paragraphs",
        )
    return paragraphs


def _default_renderer(output_dir: Optional[Union[str, Path]]) -> BaseRenderer:
    try:
        renderer_cls = RENDERERS[DEFAULT_RENDERER]
    except KeyError as exc:
        raise TranscriptPipelineError(
            ErrorKind.PROCESSING_ERROR,
            "unknown renderer {!r}; expected one of {}".format(
                DEFAULT_RENDERER, ", ".join(sorted(RENDERERS)),
            ),
        ) from exc
    return renderer_cls(output_dir)


def produce_transcript_document(
    video_id: str,
    fetcher: Optional[TranscriptFetcher] = None,
    metadata: Optional[YouTubeMetadataClient] = None,
    renderer: Optional[BaseRenderer] = None,
    output_dir: Optional[Union[str, Path]] = None,
) -> RenderedDocument:
    """Produce a transcript document for one video.

    Args:
        video_id: An 11-character YouTube video ID.
        fetcher: Transcript fetcher (default: TranscriptFetcher()).
        metadata: Open metadata client; one is opened per call when None.
        renderer: Document renderer (default: DEFAULT_RENDERER from config).
        output_dir: Where the renderer writes when renderer is None.

    Returns:
        RenderedDocument; the caller owns and deletes the file.

    Raises:
        TranscriptPipelineError: With kind TRANSCRIPT_DISABLED,
            NO_TRANSCRIPT or PROCESSING_ERROR.
    """
    fetcher = fetcher or TranscriptFetcher()

    try:
        if renderer is None:
            renderer = _default_renderer(output_dir)
        paragraphs = _build_paragraphs(video_id, fetcher)
        title = resolve_title(video_id, metadata)
        document = renderer.render(title, video_id, paragraphs)
    except TranscriptPipelineError as exc:
        if exc.kind in _PASS_THROUGH_KINDS:
            raise
        logger.error("Transcript processing failed for %s: %s", video_id, exc)
        if exc.kind is ErrorKind.PROCESSING_ERROR:
            raise
        raise TranscriptPipelineError(ErrorKind.PROCESSING_ERROR, str(exc)) from exc
    except Exception as exc:
        logger.exception("Unexpected error producing transcript for %s", video_id)
        raise TranscriptPipelineError(ErrorKind.PROCESSING_ERROR, str(exc)) from exc

    logger.info("Produced %s for video %s", document.file_path, video_id)
    return document
