"""Error taxonomy shared by the fetcher, renderers, pipeline, and callers.

WHY: Callers (CLI, Slack bot) must tell the user *why* a transcript could
not be produced — captions disabled, nothing available, or a generic
failure. Branching on formatted messages is brittle, so every failure
that crosses the pipeline boundary carries a stable enum tag.

HOW: ErrorKind is a str-valued Enum. TranscriptPipelineError wraps a kind
plus optional detail. TranscriptSourceError is raised by transcript
sources and carries a FailureCategory from a closed set, which is what
the fetcher's retry loop inspects.

RULES:
- ErrorKind values never change; they are compared by callers
- Only TRANSCRIPT_DISABLED and NO_TRANSCRIPT reach the end user as-is
- IO_ERROR is logged with detail and shown as a processing failure
- FailureCategory is decided from exception types, not message text
"""

from __future__ import annotations

import enum
from typing import Optional


class ErrorKind(str, enum.Enum):
    """Stable tags for every failure that leaves the pipeline."""

    TRANSCRIPT_DISABLED = "TRANSCRIPT_DISABLED"
    NO_TRANSCRIPT = "NO_TRANSCRIPT"
    IO_ERROR = "IO_ERROR"
    PROCESSING_ERROR = "PROCESSING_ERROR"


class FailureCategory(str, enum.Enum):
    """Known reasons a single transcript-source call can fail."""

    CAPTIONS_DISABLED = "captions_disabled"
    VIDEO_UNAVAILABLE = "video_unavailable"
    UNKNOWN = "unknown"


class TranscriptPipelineError(Exception):
    """Raised when a transcript document cannot be produced.

    WHY: Callers need one exception type to catch and a stable tag to
    branch on.

    HOW: ``kind`` holds the ErrorKind; ``detail`` is free text for logs.

    RULES:
    - str(exc) is the kind value when no detail is given
    - Always chain the underlying cause with ``raise ... from exc``
    """

    def __init__(self, kind: ErrorKind, detail: Optional[str] = None) -> None:
        self.kind = kind
        self.detail = detail
        message = kind.value if not detail else "{}: {}".format(kind.value, detail)
        super().__init__(message)


class TranscriptSourceError(Exception):
    """Raised by a transcript source when one fetch call fails.

    RULES:
    - category is one of FailureCategory
    - message is the underlying library's message, for logs only
    """

    def __init__(self, category: FailureCategory, message: str = "") -> None:
        self.category = category
        self.message = message
        super().__init__(message or category.value)

    @property
    def captions_disabled(self) -> bool:
        return self.category is FailureCategory.CAPTIONS_DISABLED
