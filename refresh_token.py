"""Helper script to refresh the Anthropic setup token stored by clawdbot.

This script opens a browser on the claude.ai OAuth page, approves the
request (log in first if the saved profile has no session), reads the
setup token from the callback page and pipes it into
``clawdbot models auth paste-token``.

Usage:
    uv run python refresh_token.py
"""

from anthropic_token_refresh.cli import main


if __name__ == "__main__":
    main()
