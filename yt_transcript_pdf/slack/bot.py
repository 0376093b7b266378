"""Slack bot: Socket Mode event handlers and the transcript job runner.

WHY: Users in Slack paste a YouTube link and expect the transcript
document back in the conversation. This module is the glue between
Slack events and produce_transcript_document(): it routes messages,
validates the link, shows a status message, and delivers the file.

HOW: Uses slack-bolt with Socket Mode (no public URL needed). The
``message`` and ``app_mention`` handlers route text to a link handler,
the welcome text, or an invalid-input hint. After the link checks pass,
the pipeline runs in a daemon thread so the event is acknowledged
quickly; the thread deletes the status message, uploads the document
with files_upload_v2, and removes its per-request scratch directory.

RULES:
- Heavy work runs in a background thread
- Each request renders into its own scratch subdirectory
- Uses files_upload_v2 (v1 is deprecated)
- Bot messages and message subtypes (edits, joins) are ignored
- Channel messages that mention the bot are left to the app_mention
  handler so they are not processed twice
- Bot only watches SLACK_CHANNEL_ID (if configured); DMs always work
- Runnable as: python -m yt_transcript_pdf.slack.bot
"""

from __future__ import annotations

import logging
import os
import shutil
import threading
import time
import uuid
from pathlib import Path
from typing import Any, Dict, Optional

from slack_bolt import App
from slack_bolt.adapter.socket_mode import SocketModeHandler

from yt_transcript_pdf.api.metadata import (
    YouTubeMetadataClient,
    extract_video_id,
    find_youtube_link,
)
from yt_transcript_pdf.config import (
    SCRATCH_DIR,
    SLACK_CHANNEL_ID,
    load_slack_tokens,
)
from yt_transcript_pdf.core.errors import TranscriptPipelineError
from yt_transcript_pdf.pipeline import produce_transcript_document
from yt_transcript_pdf.slack.messages import (
    INVALID_INPUT_TEXT,
    INVALID_URL_TEXT,
    PROCESSING_TEXT,
    REQUEST_ERROR_TEXT,
    VIDEO_MISSING_TEXT,
    WELCOME_TEXT,
    build_error_blocks,
    build_status_blocks,
    build_text_blocks,
    error_text_for,
    is_help_command,
    strip_mentions,
    transcript_comment,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# App setup
# ---------------------------------------------------------------------------


def create_app(bot_token: Optional[str] = None) -> App:
    """Create and configure the Slack Bolt app with all handlers.

    RULES:
    - If bot_token is None, reads from SLACK_BOT_TOKEN env var
    - All handlers are registered before returning
    """
    token = bot_token or os.environ.get("SLACK_BOT_TOKEN", "")

    app = App(token=token)

    app.event("message")(handle_message)
    app.event("app_mention")(handle_app_mention)

    return app


# ---------------------------------------------------------------------------
# Event handlers
# ---------------------------------------------------------------------------


def _is_watched_channel(channel_id: str, is_dm: bool) -> bool:
    return is_dm or not SLACK_CHANNEL_ID or channel_id == SLACK_CHANNEL_ID


def handle_message(event: Dict[str, Any], client: Any, logger: Any) -> None:
    """Handle plain messages in DMs and watched channels.

    RULES:
    - Ignores bot messages and any message with a subtype
    - In a DM, text that is neither a link nor a help command gets the
      invalid-input hint; in channels it is ignored
    - Channel messages mentioning the bot are skipped (app_mention covers them)
    """
    if event.get("bot_id") or event.get("subtype"):
        return

    channel_id = event.get("channel", "")
    is_dm = event.get("channel_type") == "im"
    if not _is_watched_channel(channel_id, is_dm):
        return

    text = event.get("text") or ""
    if not is_dm and strip_mentions(text) != text.strip():
        return

    _route_text(client, event, text, reply_to_unknown=is_dm)


def handle_app_mention(event: Dict[str, Any], client: Any, logger: Any) -> None:
    """Handle @-mentions of the bot in channels."""
    if event.get("bot_id"):
        return

    channel_id = event.get("channel", "")
    if not _is_watched_channel(channel_id, is_dm=False):
        return

    _route_text(client, event, event.get("text") or "", reply_to_unknown=True)


def _reply_thread(event: Dict[str, Any]) -> Optional[str]:
    """Channel replies go in a thread under the request; DMs reply inline."""
    if event.get("channel_type") == "im":
        return event.get("thread_ts")
    return event.get("thread_ts") or event.get("ts")


def _route_text(
    client: Any,
    event: Dict[str, Any],
    text: str,
    reply_to_unknown: bool,
) -> None:
    """Dispatch message text to the link handler, help, or the hint."""
    channel = event.get("channel", "")
    thread_ts = _reply_thread(event)

    link = find_youtube_link(text)
    if link:
        handle_youtube_link(client, channel, thread_ts, link)
    elif is_help_command(text):
        _post_text(client, channel, thread_ts, WELCOME_TEXT)
    elif reply_to_unknown:
        _post_text(client, channel, thread_ts, INVALID_INPUT_TEXT)


def handle_youtube_link(
    client: Any,
    channel: str,
    thread_ts: Optional[str],
    url: str,
) -> None:
    """Validate a YouTube link and start the transcript job.

    HOW: Extracts the video ID, checks existence through oEmbed, posts
    the status message, then hands off to a daemon thread.

    RULES:
    - Invalid ID → INVALID_URL_TEXT, no job
    - Video missing → VIDEO_MISSING_TEXT, no job
    - Any failure before the job starts → REQUEST_ERROR_TEXT
    """
    logger.info("Processing YouTube URL: %s", url)
    video_id = extract_video_id(url)
    if not video_id:
        logger.info("Invalid video ID from URL: %s", url)
        _post_text(client, channel, thread_ts, INVALID_URL_TEXT)
        return

    try:
        with YouTubeMetadataClient() as metadata:
            exists = metadata.video_exists(video_id)
        if not exists:
            logger.info("Video not accessible: %s", video_id)
            _post_text(client, channel, thread_ts, VIDEO_MISSING_TEXT)
            return

        status_resp = client.chat_postMessage(
            channel=channel,
            thread_ts=thread_ts,
            blocks=build_status_blocks(video_id),
            text=PROCESSING_TEXT,
        )
    except Exception:
        logger.exception("Failed to start transcript job for %s", video_id)
        _post_text(client, channel, thread_ts, REQUEST_ERROR_TEXT)
        return

    status_ts = status_resp.get("ts", "")

    t = threading.Thread(
        target=_run_transcript_job,
        args=(client, channel, thread_ts, video_id, status_ts),
        daemon=True,
    )
    t.start()


# ---------------------------------------------------------------------------
# Transcript job
# ---------------------------------------------------------------------------


def _run_transcript_job(
    client: Any,
    channel: str,
    thread_ts: Optional[str],
    video_id: str,
    status_ts: str,
) -> None:
    """Produce the document, replace the status message, upload, clean up.

    Runs in a background thread. The scratch subdirectory is removed on
    every path.
    """
    scratch_dir = SCRATCH_DIR / uuid.uuid4().hex
    start_time = time.time()

    try:
        try:
            document = produce_transcript_document(video_id, output_dir=scratch_dir)
        except TranscriptPipelineError as exc:
            logger.warning("Transcript job for %s failed: %s", video_id, exc)
            _delete_message(client, channel, status_ts)
            _post_blocks(
                client, channel, thread_ts,
                build_error_blocks(exc.kind),
                error_text_for(exc.kind),
            )
            return

        _delete_message(client, channel, status_ts)

        try:
            client.files_upload_v2(
                channel=channel,
                thread_ts=thread_ts,
                file=str(document.file_path),
                filename=document.file_path.name,
                title=document.title,
                initial_comment=transcript_comment(document.title),
            )
        except Exception:
            logger.exception("Failed to upload transcript %s", document.file_path)
            _post_text(client, channel, thread_ts, REQUEST_ERROR_TEXT)
            return

        logger.info(
            "Delivered transcript for %s in %.1fs", video_id, time.time() - start_time,
        )
    finally:
        _remove_scratch_dir(scratch_dir)


def _remove_scratch_dir(path: Path) -> None:
    """Delete a request's scratch directory and the document inside it."""
    try:
        shutil.rmtree(path)
    except FileNotFoundError:
        pass  # Renderer never created it
    except OSError:
        logger.exception("Failed to remove scratch directory %s", path)


# ---------------------------------------------------------------------------
# Slack message helpers
# ---------------------------------------------------------------------------


def _post_text(client: Any, channel: str, thread_ts: Optional[str], text: str) -> None:
    _post_blocks(client, channel, thread_ts, build_text_blocks(text), text)


def _post_blocks(
    client: Any,
    channel: str,
    thread_ts: Optional[str],
    blocks: Any,
    text: str,
) -> None:
    """Post a message, logging instead of raising on Slack errors."""
    try:
        client.chat_postMessage(
            channel=channel,
            thread_ts=thread_ts,
            blocks=blocks,
            text=text,
        )
    except Exception:
        logger.exception("Failed to post message to %s", channel)


def _delete_message(client: Any, channel: str, message_ts: str) -> None:
    if not message_ts:
        return
    try:
        client.chat_delete(channel=channel, ts=message_ts)
    except Exception:
        logger.exception("Failed to delete status message %s", message_ts)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main() -> None:
    """Start the Slack bot in Socket Mode.

    RULES:
    - Requires SLACK_BOT_TOKEN and SLACK_APP_TOKEN environment variables
    - Blocks on the SocketModeHandler.start() call
    """
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    bot_token, app_token = load_slack_tokens()
    app = create_app(bot_token=bot_token)

    logger.info("Starting Slack bot in Socket Mode...")
    logger.info("Scratch directory: %s", SCRATCH_DIR)
    if SLACK_CHANNEL_ID:
        logger.info("Watching channel: %s", SLACK_CHANNEL_ID)
    else:
        logger.info("Watching all channels the bot is in")

    handler = SocketModeHandler(app, app_token)
    handler.start()


if __name__ == "__main__":
    main()
