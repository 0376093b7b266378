"""Data model for fetched fragments, assembled text, and rendered documents.

WHY: The transcript source, the assembler, and the renderers each speak
about the same few things: timed caption fragments, the paragraphs made
from them, and the file produced at the end. Typed dataclasses make
those hand-offs explicit and keep the stages decoupled.

HOW: Five small dataclasses:
  TranscriptFragment  — one timed caption snippet from the source
  FetchStrategy       — one combination of language/region hints
  FetchAttemptRecord  — what happened on one fetch attempt (transient)
  RenderedDocument    — the file a renderer produced, plus its title
AssembledDocumentText is a plain tuple of paragraph strings.

RULES:
- Fragments are read-only once fetched (frozen dataclass)
- Times are float seconds, as returned by the transcript source
- AssembledDocumentText is immutable; every paragraph ends in . ! or ?
- RenderedDocument is owned by the caller, who deletes the file
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

AssembledDocumentText = Tuple[str, ...]
"""Ordered, immutable paragraphs produced by the assembler."""


@dataclass(frozen=True)
class TranscriptFragment:
    """One timed caption snippet as returned by the transcript source.

    RULES:
    - text: raw caption text, may contain entities and [Music]-style noise
    - start_s: offset from the start of the video in seconds
    - duration_s: how long the snippet is on screen in seconds
    """

    text: str
    start_s: float = 0.0
    duration_s: float = 0.0

    @classmethod
    def from_dict(cls, data: dict) -> TranscriptFragment:
        """Build a fragment from a ``{"text", "start", "duration"}`` dict."""
        return cls(
            text=data.get("text", ""),
            start_s=float(data.get("start", 0.0)),
            duration_s=float(data.get("duration", 0.0)),
        )


@dataclass(frozen=True)
class FetchStrategy:
    """One combination of language/region hints sent to the source.

    RULES:
    - language None and region None means "whatever the source defaults to"
    - region is only meaningful together with a language
    """

    name: str
    language: Optional[str] = None
    region: Optional[str] = None


@dataclass
class FetchAttemptRecord:
    """Outcome of a single fetch attempt.

    Used by the fetcher to decide whether to continue and for logging.
    Never leaves the fetch call.
    """

    index: int
    strategy: FetchStrategy
    fragment_count: int = 0
    error: Optional[BaseException] = None

    def describe(self) -> str:
        if self.error is not None:
            outcome = "failed: {}".format(self.error)
        else:
            outcome = "{} fragments".format(self.fragment_count)
        return "attempt {} ({}) {}".format(self.index, self.strategy.name, outcome)


@dataclass(frozen=True)
class RenderedDocument:
    """A finished, closed document file on local storage.

    RULES:
    - file_path points at a complete file; the renderer has closed it
    - title is the display title used in the document header
    - The caller deletes file_path after use
    """

    file_path: Path
    title: str
