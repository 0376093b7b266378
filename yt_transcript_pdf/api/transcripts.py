"""Transcript retrieval with a fixed multi-strategy fallback.

WHY: YouTube caption lookup is finicky. A video may only expose "en"
captions, only an auto-generated track in its default language, or
only an "en-US" track. "Captions disabled" reports from the source are
not always reliable either. Trying a few request strategies in a fixed
order recovers most videos.

HOW: TranscriptFetcher walks FETCH_STRATEGIES (config.py) sequentially,
calling a BaseTranscriptSource once per strategy. The first non-empty
fragment list wins. The default source, YouTubeTranscriptSource, wraps
youtube-transcript-api and translates its exception classes into a
TranscriptSourceError carrying a FailureCategory.

RULES:
- At most len(FETCH_STRATEGIES) attempts (three), no delay between them
- Non-empty result → return immediately
- A captions-disabled failure only ends the loop on the final attempt,
  where it becomes TRANSCRIPT_DISABLED
- Any other failure on the final attempt is re-raised unchanged
- No result after all attempts → NO_TRANSCRIPT
- "No transcript in the requested language" is an empty result, not a
  failure
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Sequence

from youtube_transcript_api import (
    CouldNotRetrieveTranscript,
    NoTranscriptFound,
    TranscriptsDisabled,
    VideoUnavailable,
    YouTubeTranscriptApi,
)

from yt_transcript_pdf.config import FETCH_STRATEGIES
from yt_transcript_pdf.core.errors import (
    ErrorKind,
    FailureCategory,
    TranscriptPipelineError,
    TranscriptSourceError,
)
from yt_transcript_pdf.core.ir import FetchAttemptRecord, FetchStrategy, TranscriptFragment

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Transcript sources
# ---------------------------------------------------------------------------


class BaseTranscriptSource(ABC):
    """Abstract external transcript service keyed by video ID and hints.

    To plug in another backend, subclass and implement fetch().
    """

    @abstractmethod
    def fetch(
        self,
        video_id: str,
        language: Optional[str] = None,
        region: Optional[str] = None,
    ) -> List[TranscriptFragment]:
        """Fetch fragments for one strategy.

        Returns:
            Fragments in chronological order; empty when the source has no
            transcript matching the hints.

        Raises:
            TranscriptSourceError: When the source reports a known failure.
        """


def language_candidates(language: Optional[str], region: Optional[str]) -> List[str]:
    """Turn language/region hints into youtube-transcript-api language codes.

    RULES:
    - ("en", "US") → ["en-US", "en"]
    - ("en-US", None) → ["en-US"]
    - (None, anything) → [] (source default)
    """
    if not language:
        return []
    if region:
        return ["{}-{}".format(language, region), language]
    return [language]


def classify_failure(exc: BaseException) -> FailureCategory:
    """Map a youtube-transcript-api exception onto a FailureCategory."""
    if isinstance(exc, TranscriptsDisabled):
        return FailureCategory.CAPTIONS_DISABLED
    if isinstance(exc, VideoUnavailable):
        return FailureCategory.VIDEO_UNAVAILABLE
    return FailureCategory.UNKNOWN


class YouTubeTranscriptSource(BaseTranscriptSource):
    """Transcript source backed by youtube-transcript-api.

    WHY: youtube-transcript-api talks to YouTube's caption endpoints
    without an API key and exposes typed exceptions for the cases we
    care about (captions disabled, video unavailable, language missing).

    HOW: With language hints, fetch() asks for the candidate codes in
    order. Without hints it lists the video's transcripts and takes the
    first one (manually created tracks come before generated ones).

    RULES:
    - NoTranscriptFound → [] (the strategy simply found nothing)
    - Other CouldNotRetrieveTranscript → TranscriptSourceError
    - Network errors from the underlying HTTP session propagate as-is
    """

    def __init__(self, api: Optional[YouTubeTranscriptApi] = None) -> None:
        self._api = api or YouTubeTranscriptApi()

    def fetch(
        self,
        video_id: str,
        language: Optional[str] = None,
        region: Optional[str] = None,
    ) -> List[TranscriptFragment]:
        candidates = language_candidates(language, region)
        try:
            if candidates:
                fetched = self._api.fetch(video_id, languages=candidates)
            else:
                transcript = next(iter(self._api.list(video_id)), None)
                if transcript is None:
                    return []
                fetched = transcript.fetch()
        except NoTranscriptFound:
            return []
        except CouldNotRetrieveTranscript as exc:
            raise TranscriptSourceError(classify_failure(exc), str(exc)) from exc

        return _to_fragments(fetched)


def _to_fragments(snippets: Iterable) -> List[TranscriptFragment]:
    """Convert youtube-transcript-api snippets into TranscriptFragments."""
    return [
        TranscriptFragment(
            text=snippet.text,
            start_s=float(snippet.start),
            duration_s=float(snippet.duration),
        )
        for snippet in snippets
    ]


# ---------------------------------------------------------------------------
# Fetcher
# ---------------------------------------------------------------------------


def is_captions_disabled(exc: BaseException) -> bool:
    """True when a source failure belongs to the captions-disabled category."""
    return isinstance(exc, TranscriptSourceError) and exc.captions_disabled


class TranscriptFetcher:
    """Retrieve transcript fragments, trying each strategy in turn.

    WHY: One request shape is not enough to find captions for every
    video; the fallback order lives here so callers never retry.

    HOW: Sequential loop over the strategies. Each attempt is recorded in
    a FetchAttemptRecord, logged, and used to decide whether to go on.

    RULES:
    - source defaults to YouTubeTranscriptSource()
    - strategies default to config.FETCH_STRATEGIES
    - Retries even after a captions-disabled failure on earlier attempts
    """

    def __init__(
        self,
        source: Optional[BaseTranscriptSource] = None,
        strategies: Optional[Sequence[FetchStrategy]] = None,
    ) -> None:
        self._source = source or YouTubeTranscriptSource()
        self._strategies = tuple(strategies) if strategies else FETCH_STRATEGIES

    @property
    def strategies(self) -> Sequence[FetchStrategy]:
        return self._strategies

    def fetch(self, video_id: str) -> List[TranscriptFragment]:
        """Fetch the transcript fragments for one video.

        Args:
            video_id: An already validated 11-character YouTube video ID.

        Returns:
            Non-empty list of fragments in chronological order.

        Raises:
            TranscriptPipelineError: TRANSCRIPT_DISABLED or NO_TRANSCRIPT.
            Exception: Any other failure of the final attempt, unchanged.
        """
        attempts: List[FetchAttemptRecord] = []
        final_index = len(self._strategies)

        for index, strategy in enumerate(self._strategies, start=1):
            record = FetchAttemptRecord(index=index, strategy=strategy)
            attempts.append(record)
            logger.info(
                "Attempt %d to fetch transcript for video %s (%s)",
                index, video_id, strategy.name,
            )

            try:
                fragments = self._source.fetch(
                    video_id,
                    language=strategy.language,
                    region=strategy.region,
                )
            except Exception as exc:
                record.error = exc
                logger.warning("Attempt %d failed: %s", index, exc)
                if index < final_index:
                    continue
                if is_captions_disabled(exc):
                    raise TranscriptPipelineError(
                        ErrorKind.TRANSCRIPT_DISABLED, str(exc),
                    ) from exc
                raise

            record.fragment_count = len(fragments)
            if fragments:
                logger.info(
                    "Fetched %d transcript fragments for video %s",
                    len(fragments), video_id,
                )
                return list(fragments)

        logger.warning(
            "No transcript for video %s: %s",
            video_id, "; ".join(record.describe() for record in attempts),
        )
        raise TranscriptPipelineError(ErrorKind.NO_TRANSCRIPT)
