"""External data sources — transcript fetching and video metadata.

WHY: Everything that talks to YouTube lives here, so the core stays
network-free and tests can swap sources for fakes.

HOW: transcripts.py holds the transcript source abstraction and the
multi-strategy fetcher (youtube-transcript-api). metadata.py holds URL
parsing and the oEmbed client (httpx).

RULES:
- All YouTube HTTP calls go through this package
- Sources raise TranscriptSourceError with a FailureCategory
"""

from yt_transcript_pdf.api.metadata import (
    MetadataError,
    YouTubeMetadataClient,
    extract_video_id,
    find_youtube_link,
)
from yt_transcript_pdf.api.transcripts import (
    BaseTranscriptSource,
    TranscriptFetcher,
    YouTubeTranscriptSource,
)

__all__ = [
    "BaseTranscriptSource",
    "MetadataError",
    "TranscriptFetcher",
    "YouTubeMetadataClient",
    "YouTubeTranscriptSource",
    "extract_video_id",
    "find_youtube_link",
]
