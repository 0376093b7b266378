"""Package entry point for ``python -m yt_transcript_pdf``.

WHY: Users run the generator as ``python -m yt_transcript_pdf URL`` for
CLI mode, or ``python -m yt_transcript_pdf --bot`` to start the Slack
bot.

HOW: Checks sys.argv for the ``--bot`` flag. If present, starts the
Socket Mode bot. Otherwise, delegates to the CLI's main() function.

RULES:
- ``--bot`` starts the Slack bot (needs SLACK_BOT_TOKEN, SLACK_APP_TOKEN)
- Without ``--bot``, falls through to the CLI
"""

import sys

if __name__ == "__main__":
    if "--bot" in sys.argv:
        from yt_transcript_pdf.slack.bot import main as bot_main
        bot_main()
    else:
        from yt_transcript_pdf.cli import main
        main()
