"""Command-line interface for the YouTube transcript document generator.

WHY: Users need a simple way to turn a YouTube link into a transcript
document from the terminal, without running the Slack bot. The CLI
wires together URL validation, the oEmbed existence check, and the
transcript pipeline behind a single command.

HOW: Uses argparse to accept a video URL, an output directory and an
output format. Opens one YouTubeMetadataClient for both the existence
check and the title lookup, then calls produce_transcript_document().
Status messages go to stderr; the path of the finished file goes to
stdout so the command can be piped.

RULES:
- Positional argument: YouTube video URL
- --format: a RENDERERS key (default: DEFAULT_RENDERER from config)
- --output-dir: created on demand (default: SCRATCH_DIR from config)
- Exit 0 on success, 1 on invalid input, missing video or pipeline
  error, 130 on Ctrl-C
- Status output goes to stderr (not stdout)
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from yt_transcript_pdf.api.metadata import YouTubeMetadataClient, extract_video_id
from yt_transcript_pdf.config import DEFAULT_RENDERER, SCRATCH_DIR
from yt_transcript_pdf.core.errors import ErrorKind, TranscriptPipelineError
from yt_transcript_pdf.pipeline import produce_transcript_document
from yt_transcript_pdf.renderers import RENDERERS

ERROR_MESSAGES = {
    ErrorKind.TRANSCRIPT_DISABLED: "Captions are disabled for this video.",
    ErrorKind.NO_TRANSCRIPT: "No transcript is available for this video.",
    ErrorKind.PROCESSING_ERROR: "There was an error processing the transcript.",
}


def _status(msg: str) -> None:
    """Print a status message to stderr.

    WHY: Status output must not pollute stdout so the CLI can be piped.
    """
    print(msg, file=sys.stderr, flush=True)


def _error_message(exc: TranscriptPipelineError) -> str:
    return ERROR_MESSAGES.get(exc.kind, ERROR_MESSAGES[ErrorKind.PROCESSING_ERROR])


def _run(args: argparse.Namespace) -> int:
    """Validate input, run the pipeline, and return the exit code."""
    video_id = extract_video_id(args.url)
    if not video_id:
        _status("Error: Invalid YouTube URL. Please provide a valid YouTube video link.")
        return 1

    output_dir = Path(args.output_dir).resolve() if args.output_dir else SCRATCH_DIR
    renderer = RENDERERS[args.format](output_dir)

    with YouTubeMetadataClient() as metadata:
        _status("Checking video {}...".format(video_id))
        if not metadata.video_exists(video_id):
            _status("Error: This video does not exist or is not accessible.")
            return 1

        _status("Fetching transcript...")
        try:
            document = produce_transcript_document(
                video_id,
                metadata=metadata,
                renderer=renderer,
            )
        except TranscriptPipelineError as exc:
            _status("Error: {}".format(_error_message(exc)))
            return 1

    _status("Done! Transcript for: {}".format(document.title))
    print(document.file_path)
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    WHY: Separating parser construction from main() makes the CLI
    testable; tests can inspect the parser without running the pipeline.
    """
    parser = argparse.ArgumentParser(
        prog="yt_transcript_pdf",
        description="Fetch a YouTube video's captions and produce a readable "
                    "transcript document (PDF or plain text).",
    )

    parser.add_argument(
        "url",
        help="YouTube video URL (youtube.com/watch?v=..., youtu.be/..., embed/...).",
    )

    parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory to save the document (default: {}).".format(SCRATCH_DIR),
    )

    parser.add_argument(
        "--format",
        default=DEFAULT_RENDERER,
        choices=sorted(RENDERERS.keys()),
        help="Output format (default: %(default)s).",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log pipeline progress to stderr.",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    try:
        code = _run(args)
    except KeyboardInterrupt:
        _status("\nCancelled by user.")
        code = 130
    sys.exit(code)


if __name__ == "__main__":
    main()
