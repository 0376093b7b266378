"""Configuration constants, fetch strategies, and .env loading.

WHY: Centralizes all configurable values so they are easy to find,
update, and override. The fetch strategy order, scratch directory, HTTP
timeout, and Slack credentials are plain data — not buried in logic.

HOW: python-dotenv loads the .env file on import. Constants are defined
as module-level values, each overridable via an environment variable.
load_slack_tokens() gives a clear error when the bot is misconfigured.

RULES:
- FETCH_STRATEGIES order is the retry order; exactly three entries
- Scratch directory defaults to ./temp and is created on demand
- Slack tokens come from the environment, never hardcoded
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Tuple

from dotenv import load_dotenv

from yt_transcript_pdf.core.ir import FetchStrategy

# Load .env from the project root (where the script is run from)
load_dotenv()

# ---------------------------------------------------------------------------
# Transcript fetching
# ---------------------------------------------------------------------------

FETCH_STRATEGIES: Tuple[FetchStrategy, ...] = (
    FetchStrategy(name="en_us", language="en", region="US"),
    FetchStrategy(name="source_default"),
    FetchStrategy(name="en-US", language="en-US"),
)
"""Tried in order; the first non-empty result wins."""

# ---------------------------------------------------------------------------
# Video metadata (oEmbed)
# ---------------------------------------------------------------------------

YOUTUBE_OEMBED_URL = os.getenv("YOUTUBE_OEMBED_URL", "https://www.youtube.com/oembed")
YOUTUBE_WATCH_URL = "https://www.youtube.com/watch?v={video_id}"
HTTP_TIMEOUT_S = float(os.getenv("HTTP_TIMEOUT_S", "30"))

# ---------------------------------------------------------------------------
# Document output
# ---------------------------------------------------------------------------

SCRATCH_DIR = Path(os.getenv("TRANSCRIPT_SCRATCH_DIR", str(Path.cwd() / "temp")))
DEFAULT_RENDERER = os.getenv("TRANSCRIPT_FORMAT", "pdf")
FILENAME_MAX_CHARS = 50

# ---------------------------------------------------------------------------
# Slack bot
# ---------------------------------------------------------------------------

SLACK_CHANNEL_ID = os.getenv("SLACK_CHANNEL_ID", "")


def load_slack_tokens() -> Tuple[str, str]:
    """Load the Slack bot and app tokens from the environment.

    WHY: Socket Mode needs both a bot token (Web API) and an app-level
    token (WebSocket). Failing early with a clear message beats a cryptic
    auth error from slack-bolt.

    RULES:
    - Raises ValueError naming the missing variable
    - Never returns a default/placeholder value
    """
    bot_token = os.getenv("SLACK_BOT_TOKEN", "").strip()
    app_token = os.getenv("SLACK_APP_TOKEN", "").strip()
    if not bot_token:
        raise ValueError("SLACK_BOT_TOKEN environment variable is required")
    if not app_token:
        raise ValueError("SLACK_APP_TOKEN environment variable is required")
    return bot_token, app_token
