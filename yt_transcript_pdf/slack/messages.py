"""Message texts and Block Kit builders for the Slack bot.

WHY: The bot answers with a handful of fixed texts (welcome, invalid
input, missing video, per-error apologies) plus a status message while
the transcript is produced. Keeping the wording and block layout here
keeps bot.py focused on event handling.

HOW: Texts are module constants. Builders return a list of Block Kit
block dicts ready for chat_postMessage(blocks=...); every caller also
passes the plain text as the notification fallback.

RULES:
- All builders return List[Dict[str, Any]] (Block Kit blocks)
- error_text_for() maps every ErrorKind to a user-facing sentence
- Help commands are matched case-insensitively, with or without "/"
"""

from __future__ import annotations

import re
from typing import Any, Dict, List

from yt_transcript_pdf.core.errors import ErrorKind

# ---------------------------------------------------------------------------
# Texts
# ---------------------------------------------------------------------------

WELCOME_TEXT = (
    "Welcome to YouTube Transcript Bot! :movie_camera:\n\n"
    "Send me a YouTube video URL, and I'll turn its transcript into a PDF for you.\n\n"
    "Example URLs I can handle:\n"
    "- https://www.youtube.com/watch?v=VIDEO_ID\n"
    "- https://youtu.be/VIDEO_ID\n\n"
    "Note: The video must have captions available."
)
INVALID_INPUT_TEXT = (
    "Please send a valid YouTube video URL. "
    "Send `help` to see examples of supported URL formats."
)
INVALID_URL_TEXT = "Invalid YouTube URL. Please provide a valid YouTube video link."
VIDEO_MISSING_TEXT = "This video does not exist or is not accessible."
PROCESSING_TEXT = "Processing transcript... This may take a moment."
REQUEST_ERROR_TEXT = "Sorry, there was an error processing your request. Please try again later."

ERROR_TEXTS = {
    ErrorKind.TRANSCRIPT_DISABLED: (
        "Sorry, captions are disabled for this video. "
        "Please try a video that has captions enabled."
    ),
    ErrorKind.NO_TRANSCRIPT: (
        "Sorry, no transcript is available for this video. Please try another video."
    ),
    ErrorKind.PROCESSING_ERROR: (
        "Sorry, there was an error processing the transcript. Please try again later."
    ),
}

HELP_COMMANDS = frozenset({"start", "help"})

_MENTION_RE = re.compile(r"<@[A-Z0-9]+>")


def error_text_for(kind: ErrorKind) -> str:
    """User-facing apology for a pipeline error kind.

    IO_ERROR (and anything unexpected) reads as a processing error.
    """
    return ERROR_TEXTS.get(kind, ERROR_TEXTS[ErrorKind.PROCESSING_ERROR])


def strip_mentions(text: str) -> str:
    """Remove <@U123> user mentions and surrounding whitespace."""
    return _MENTION_RE.sub("", text or "").strip()


def is_help_command(text: str) -> bool:
    return strip_mentions(text).lstrip("/").lower() in HELP_COMMANDS


def transcript_comment(title: str) -> str:
    return "Transcript for: {}".format(title)


# ---------------------------------------------------------------------------
# Block Kit builders
# ---------------------------------------------------------------------------


def build_text_blocks(text: str) -> List[Dict[str, Any]]:
    """A single mrkdwn section block."""
    return [
        {
            "type": "section",
            "text": {"type": "mrkdwn", "text": text},
        },
    ]


def build_status_blocks(video_id: str) -> List[Dict[str, Any]]:
    """Build the temporary "processing" message shown while the job runs.

    HOW: The processing sentence plus a context line naming the video.
    """
    return [
        {
            "type": "section",
            "text": {"type": "mrkdwn", "text": ":hourglass_flowing_sand: {}".format(PROCESSING_TEXT)},
        },
        {
            "type": "context",
            "elements": [
                {"type": "mrkdwn", "text": "Video ID: `{}`".format(video_id)},
            ],
        },
    ]


def build_error_blocks(kind: ErrorKind) -> List[Dict[str, Any]]:
    """Build the apology message for a failed transcript."""
    return build_text_blocks(":warning: {}".format(error_text_for(kind)))
