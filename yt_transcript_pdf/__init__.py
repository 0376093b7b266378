"""YouTube transcript to PDF — fetch, repair, and paginate video captions.

WHY: Auto-generated YouTube captions arrive as hundreds of tiny timed
fragments with no punctuation, bracketed noise like "[Music]", and HTML
entities. Reading them is painful. This package turns a video ID into a
readable, paginated document.

HOW: Three-stage pipeline — fetch (transcript source with a fixed
fallback order), assemble (normalize + heuristic grammar repair into
paragraphs), render (pluggable document renderers, PDF by default).
pipeline.py sequences the stages; the CLI and the Slack bot are thin
callers on top.

RULES:
- All renderers consume the same paragraph tuple
- Error kinds are stable tags (core/errors.py), never formatted messages
- The caller owns the rendered file and deletes it after use
"""

__version__ = "0.1.0"
