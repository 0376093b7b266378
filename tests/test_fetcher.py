"""Tests for transcript sources and the multi-strategy fetcher.

WHY: The fallback order and the "disabled only counts on the last try"
rule decide which error a user sees. The youtube-transcript-api adapter
must translate library exceptions into the closed FailureCategory set.

HOW: ScriptedSource replays one outcome per attempt for the fetcher
tests. The adapter tests drive YouTubeTranscriptSource with a MagicMock
standing in for YouTubeTranscriptApi. No network access.
"""

from types import SimpleNamespace
from typing import List, Optional, Sequence, Union
from unittest.mock import MagicMock

import pytest
from youtube_transcript_api import NoTranscriptFound, TranscriptsDisabled, VideoUnavailable

from yt_transcript_pdf.api.transcripts import (
    BaseTranscriptSource,
    TranscriptFetcher,
    YouTubeTranscriptSource,
    classify_failure,
    is_captions_disabled,
    language_candidates,
)
from yt_transcript_pdf.config import FETCH_STRATEGIES
from yt_transcript_pdf.core.errors import (
    ErrorKind,
    FailureCategory,
    TranscriptPipelineError,
    TranscriptSourceError,
)
from yt_transcript_pdf.core.ir import FetchStrategy, TranscriptFragment

VIDEO_ID = "dQw4w9WgXcQ"

Outcome = Union[Sequence[TranscriptFragment], BaseException]


class ScriptedSource(BaseTranscriptSource):
    """Transcript source that replays scripted outcomes in order."""

    def __init__(self, outcomes: Sequence[Outcome]) -> None:
        self._outcomes = list(outcomes)
        self.calls: List[tuple] = []

    def fetch(
        self,
        video_id: str,
        language: Optional[str] = None,
        region: Optional[str] = None,
    ) -> List[TranscriptFragment]:
        self.calls.append((video_id, language, region))
        outcome = self._outcomes[len(self.calls) - 1]
        if isinstance(outcome, BaseException):
            raise outcome
        return list(outcome)


def _disabled():
    return TranscriptSourceError(FailureCategory.CAPTIONS_DISABLED, "Subtitles are disabled")


FRAGMENTS = [TranscriptFragment("hello world", 0.0, 1.5)]


# ---------------------------------------------------------------------------
# Tests: TranscriptFetcher
# ---------------------------------------------------------------------------


class TestFetcherSuccess:

    def test_first_strategy_wins(self):
        source = ScriptedSource([FRAGMENTS])
        assert TranscriptFetcher(source).fetch(VIDEO_ID) == FRAGMENTS
        assert len(source.calls) == 1

    def test_falls_back_after_empty(self):
        source = ScriptedSource([[], FRAGMENTS])
        assert TranscriptFetcher(source).fetch(VIDEO_ID) == FRAGMENTS
        assert len(source.calls) == 2

    def test_third_strategy_wins(self):
        source = ScriptedSource([[], RuntimeError("timeout"), FRAGMENTS])
        assert TranscriptFetcher(source).fetch(VIDEO_ID) == FRAGMENTS
        assert len(source.calls) == 3

    def test_strategy_hints_in_order(self):
        source = ScriptedSource([[], [], FRAGMENTS])
        TranscriptFetcher(source).fetch(VIDEO_ID)
        assert source.calls == [
            (VIDEO_ID, "en", "US"),
            (VIDEO_ID, None, None),
            (VIDEO_ID, "en-US", None),
        ]

    def test_default_strategies(self):
        fetcher = TranscriptFetcher(ScriptedSource([]))
        assert tuple(fetcher.strategies) == FETCH_STRATEGIES
        assert len(fetcher.strategies) == 3

    def test_custom_strategies(self):
        source = ScriptedSource([FRAGMENTS])
        fetcher = TranscriptFetcher(source, strategies=[FetchStrategy("de", language="de")])
        fetcher.fetch(VIDEO_ID)
        assert source.calls == [(VIDEO_ID, "de", None)]


class TestFetcherExhaustion:
    """All strategies fail or come back empty."""

    def test_all_empty_is_no_transcript(self):
        source = ScriptedSource([[], [], []])
        with pytest.raises(TranscriptPipelineError) as exc_info:
            TranscriptFetcher(source).fetch(VIDEO_ID)
        assert exc_info.value.kind is ErrorKind.NO_TRANSCRIPT
        assert len(source.calls) == 3

    def test_unknown_failures_then_empty(self):
        source = ScriptedSource([RuntimeError("a"), RuntimeError("b"), []])
        with pytest.raises(TranscriptPipelineError) as exc_info:
            TranscriptFetcher(source).fetch(VIDEO_ID)
        assert exc_info.value.kind is ErrorKind.NO_TRANSCRIPT

    def test_unknown_failure_on_final_attempt_propagates(self):
        final = TranscriptSourceError(FailureCategory.UNKNOWN, "boom")
        source = ScriptedSource([[], [], final])
        with pytest.raises(TranscriptSourceError) as exc_info:
            TranscriptFetcher(source).fetch(VIDEO_ID)
        assert exc_info.value is final


class TestFetcherDisabledSignal:
    """A disabled signal only ends the loop on the final attempt."""

    def test_disabled_first_does_not_stop(self):
        source = ScriptedSource([_disabled(), FRAGMENTS])
        assert TranscriptFetcher(source).fetch(VIDEO_ID) == FRAGMENTS
        assert len(source.calls) == 2

    def test_disabled_on_every_attempt(self):
        source = ScriptedSource([_disabled(), _disabled(), _disabled()])
        with pytest.raises(TranscriptPipelineError) as exc_info:
            TranscriptFetcher(source).fetch(VIDEO_ID)
        assert exc_info.value.kind is ErrorKind.TRANSCRIPT_DISABLED
        assert len(source.calls) == 3

    def test_disabled_only_first_then_empty(self):
        source = ScriptedSource([_disabled(), [], []])
        with pytest.raises(TranscriptPipelineError) as exc_info:
            TranscriptFetcher(source).fetch(VIDEO_ID)
        assert exc_info.value.kind is ErrorKind.NO_TRANSCRIPT

    def test_disabled_error_is_chained(self):
        last = _disabled()
        source = ScriptedSource([[], [], last])
        with pytest.raises(TranscriptPipelineError) as exc_info:
            TranscriptFetcher(source).fetch(VIDEO_ID)
        assert exc_info.value.__cause__ is last

    def test_is_captions_disabled(self):
        assert is_captions_disabled(_disabled()) is True
        assert is_captions_disabled(TranscriptSourceError(FailureCategory.UNKNOWN)) is False
        assert is_captions_disabled(RuntimeError("Subtitles are disabled")) is False


# ---------------------------------------------------------------------------
# Tests: YouTubeTranscriptSource
# ---------------------------------------------------------------------------


def _snippets(*texts):
    return [
        SimpleNamespace(text=text, start=float(i), duration=1.25)
        for i, text in enumerate(texts)
    ]


class TestLanguageCandidates:

    def test_language_and_region(self):
        assert language_candidates("en", "US") == ["en-US", "en"]

    def test_language_only(self):
        assert language_candidates("en-US", None) == ["en-US"]

    def test_no_hints(self):
        assert language_candidates(None, None) == []
        assert language_candidates(None, "US") == []


class TestClassifyFailure:

    def test_transcripts_disabled(self):
        assert classify_failure(TranscriptsDisabled(VIDEO_ID)) is FailureCategory.CAPTIONS_DISABLED

    def test_video_unavailable(self):
        assert classify_failure(VideoUnavailable(VIDEO_ID)) is FailureCategory.VIDEO_UNAVAILABLE

    def test_other(self):
        assert classify_failure(RuntimeError("nope")) is FailureCategory.UNKNOWN


class TestYouTubeTranscriptSource:

    def test_fetch_with_hints(self):
        api = MagicMock()
        api.fetch.return_value = _snippets("hello", "world")

        fragments = YouTubeTranscriptSource(api).fetch(VIDEO_ID, language="en", region="US")

        api.fetch.assert_called_once_with(VIDEO_ID, languages=["en-US", "en"])
        assert [f.text for f in fragments] == ["hello", "world"]
        assert fragments[1].start_s == 1.0
        assert fragments[1].duration_s == 1.25

    def test_fetch_without_hints_uses_first_listed(self):
        first, second = MagicMock(), MagicMock()
        first.fetch.return_value = _snippets("manual track")
        api = MagicMock()
        api.list.return_value = iter([first, second])

        fragments = YouTubeTranscriptSource(api).fetch(VIDEO_ID)

        api.fetch.assert_not_called()
        second.fetch.assert_not_called()
        assert [f.text for f in fragments] == ["manual track"]

    def test_no_listed_transcripts(self):
        api = MagicMock()
        api.list.return_value = iter([])
        assert YouTubeTranscriptSource(api).fetch(VIDEO_ID) == []

    def test_no_transcript_found_is_empty(self):
        api = MagicMock()
        api.fetch.side_effect = NoTranscriptFound(VIDEO_ID, ["en-US"], MagicMock())
        assert YouTubeTranscriptSource(api).fetch(VIDEO_ID, language="en-US") == []

    def test_disabled_is_categorized(self):
        api = MagicMock()
        api.fetch.side_effect = TranscriptsDisabled(VIDEO_ID)
        with pytest.raises(TranscriptSourceError) as exc_info:
            YouTubeTranscriptSource(api).fetch(VIDEO_ID, language="en")
        assert exc_info.value.captions_disabled
        assert isinstance(exc_info.value.__cause__, TranscriptsDisabled)

    def test_list_failure_is_categorized(self):
        api = MagicMock()
        api.list.side_effect = VideoUnavailable(VIDEO_ID)
        with pytest.raises(TranscriptSourceError) as exc_info:
            YouTubeTranscriptSource(api).fetch(VIDEO_ID)
        assert exc_info.value.category is FailureCategory.VIDEO_UNAVAILABLE

    def test_fetcher_end_to_end_with_disabled_video(self):
        api = MagicMock()
        api.fetch.side_effect = TranscriptsDisabled(VIDEO_ID)
        api.list.side_effect = TranscriptsDisabled(VIDEO_ID)
        fetcher = TranscriptFetcher(YouTubeTranscriptSource(api))

        with pytest.raises(TranscriptPipelineError) as exc_info:
            fetcher.fetch(VIDEO_ID)

        assert exc_info.value.kind is ErrorKind.TRANSCRIPT_DISABLED
        assert api.fetch.call_count == 2
        assert api.list.call_count == 1
