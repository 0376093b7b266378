"""Shared test fixtures for the yt_transcript_pdf test suite.

WHY: Several test modules need the same caption fragments, a way to
build fragment lists from plain strings, and a fake metadata client.
Centralizing them here keeps the modules focused on behavior.

HOW: Module-level sample data plus small fakes, exposed as fixtures.
make_fragments is a fixture returning a builder function so tests can
create fragment lists inline.

RULES:
- No fixture touches the network
- Fragment texts mimic real auto-generated captions (entities, [Music])
"""

from typing import Any, Dict, List

import pytest

from yt_transcript_pdf.core.ir import TranscriptFragment

SAMPLE_FRAGMENTS: List[Dict[str, Any]] = [
    {"text": "[Music]",                        "start": 0.0,  "duration": 2.5},
    {"text": "so today we&#39;re going to",    "start": 2.5,  "duration": 2.1},
    {"text": "look at apples bananas and",     "start": 4.6,  "duration": 2.4},
    {"text": "cherries.",                      "start": 7.0,  "duration": 1.2},
    {"text": "because it rained we",           "start": 8.2,  "duration": 2.0},
    {"text": "stayed inside!",                 "start": 10.2, "duration": 1.5},
    {"text": "thanks for watching",            "start": 11.7, "duration": 1.8},
]


def _make_fragments(*texts: str) -> List[TranscriptFragment]:
    """Fragments with increasing start times, one second each."""
    return [
        TranscriptFragment(text=text, start_s=float(i), duration_s=1.0)
        for i, text in enumerate(texts)
    ]


class FakeMetadata:
    """Stands in for an open YouTubeMetadataClient."""

    def __init__(self, title: str = "My Video", exists: bool = True) -> None:
        self.title = title
        self.exists = exists
        self.title_requests: List[str] = []

    def video_exists(self, video_id: str) -> bool:
        return self.exists

    def fetch_title(self, video_id: str) -> str:
        self.title_requests.append(video_id)
        return self.title


@pytest.fixture
def make_fragments():
    """Builder: make_fragments("a", "b.") -> [TranscriptFragment, ...]."""
    return _make_fragments


@pytest.fixture
def sample_fragments():
    """Caption fragments shaped like a real auto-generated transcript."""
    return [TranscriptFragment.from_dict(item) for item in SAMPLE_FRAGMENTS]


@pytest.fixture
def fake_metadata():
    return FakeMetadata()
