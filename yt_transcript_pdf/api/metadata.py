"""Video URL parsing and oEmbed metadata lookups.

WHY: Callers need to turn a pasted link into a video ID, check that the
video exists before doing any real work, and fetch the title for the
document header. YouTube's oEmbed endpoint answers both questions
without an API key.

HOW: extract_video_id() is a single regex over the common URL shapes.
YouTubeMetadataClient wraps httpx.Client — enter it to open the
connection pool, exit to close it — and issues GET /oembed requests.

RULES:
- Use as: with YouTubeMetadataClient() as client: ...
- video_exists() never raises; any HTTP failure means "does not exist"
- fetch_title() raises MetadataError on non-200 or a missing title
- Video IDs are exactly 11 characters
"""

from __future__ import annotations

import logging
import re
from typing import Optional

import httpx

from yt_transcript_pdf.config import HTTP_TIMEOUT_S, YOUTUBE_OEMBED_URL, YOUTUBE_WATCH_URL

logger = logging.getLogger(__name__)

_VIDEO_ID_LENGTH = 11
_VIDEO_URL_RE = re.compile(
    r"^.*((youtu.be/)|(v/)|(/u/\w/)|(embed/)|(watch\?))\??v?=?([^#&?]*).*"
)
_YOUTUBE_LINK_RE = re.compile(r"\S*(?:youtube\.com|youtu\.be)\S*", re.IGNORECASE)


def find_youtube_link(text: str) -> Optional[str]:
    """Return the first youtube.com / youtu.be link in free text, if any.

    Slack wraps links as "<https://...|label>"; the angle brackets and
    label are stripped.
    """
    match = _YOUTUBE_LINK_RE.search(text or "")
    if not match:
        return None
    link = match.group(0).strip("<>")
    return link.split("|", 1)[0]


def extract_video_id(url: str) -> Optional[str]:
    """Extract the 11-character video ID from a YouTube URL.

    RULES:
    - Handles youtu.be/ID, /v/ID, /u/x/ID, /embed/ID, watch?v=ID
    - Returns None when no candidate is found or it is not 11 chars
    """
    match = _VIDEO_URL_RE.match(url or "")
    if not match:
        return None
    video_id = match.group(7)
    if len(video_id) != _VIDEO_ID_LENGTH:
        return None
    return video_id


class MetadataError(Exception):
    """Raised when oEmbed does not return usable metadata.

    RULES:
    - status_code is the HTTP status, or 0 when the body was unusable
    """

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__("oEmbed error {}: {}".format(status_code, message))


class YouTubeMetadataClient:
    """Sync client for YouTube's oEmbed endpoint.

    WHY: Existence checks and title lookups are single GETs; a small
    context-managed client keeps connection handling in one place and
    lets tests inject an httpx transport.

    RULES:
    - oembed_url defaults to YOUTUBE_OEMBED_URL from config
    - timeout defaults to HTTP_TIMEOUT_S from config
    - transport is for tests (httpx.MockTransport)
    """

    def __init__(
        self,
        oembed_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._oembed_url = oembed_url or YOUTUBE_OEMBED_URL
        self._timeout = timeout if timeout is not None else HTTP_TIMEOUT_S
        self._transport = transport
        self._client: Optional[httpx.Client] = None

    def __enter__(self) -> YouTubeMetadataClient:
        self._client = httpx.Client(
            timeout=httpx.Timeout(self._timeout),
            transport=self._transport,
            follow_redirects=True,
        )
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        if self._client:
            self._client.close()
            self._client = None

    def _ensure_client(self) -> httpx.Client:
        """Return the active httpx client, raising if not in context manager."""
        if self._client is None:
            raise RuntimeError(
                "YouTubeMetadataClient must be used as a context manager: "
                "with YouTubeMetadataClient() as client: ..."
            )
        return self._client

    def _oembed(self, video_id: str) -> httpx.Response:
        client = self._ensure_client()
        return client.get(
            self._oembed_url,
            params={
                "format": "json",
                "url": YOUTUBE_WATCH_URL.format(video_id=video_id),
            },
        )

    def video_exists(self, video_id: str) -> bool:
        """Check whether the video exists and is publicly embeddable."""
        try:
            resp = self._oembed(video_id)
        except httpx.HTTPError as exc:
            logger.warning("oEmbed check failed for %s: %s", video_id, exc)
            return False
        return resp.status_code == 200

    def fetch_title(self, video_id: str) -> str:
        """Fetch the raw video title.

        Raises:
            MetadataError: On non-200 responses or a body without a title.
            httpx.HTTPError: On transport failures.
        """
        resp = self._oembed(video_id)
        if resp.status_code != 200:
            raise MetadataError(resp.status_code, resp.text)

        try:
            data = resp.json()
        except ValueError as exc:
            raise MetadataError(0, "response is not JSON") from exc

        title = data.get("title") if isinstance(data, dict) else None
        if not isinstance(title, str) or not title.strip():
            raise MetadataError(0, "response has no title")
        return title
