"""Command-line entry point for the Anthropic token refresh.

Opens a browser on the claude.ai OAuth page, waits for the setup token,
stores it with clawdbot and prints the resulting model status.

Usage:
    anthropic-token-refresh
"""

import asyncio
import sys

from .config import RefreshConfig, load_config
from .credentials import paste_token, show_status
from .extraction import mask_token
from .logger import logger, set_log_level
from .token_extractor import obtain_setup_token

MANUAL_FALLBACK = (
    "Manual fallback:",
    "  1. Run: claude setup-token",
    "  2. Complete browser auth",
    "  3. Copy the token",
    "  4. Run: clawdbot models auth paste-token --provider anthropic",
)


async def refresh_token(config: RefreshConfig) -> str:
    """Obtain a setup token through the browser and store it with the CLI."""
    token = await obtain_setup_token(config)
    logger.info(f"Token obtained: {mask_token(token)}")
    await paste_token(config.cli_path, token)
    return token


def _print_banner() -> None:
    print("=" * 60)
    print("Anthropic Token Refresh")
    print("=" * 60)
    print()
    print("This will open a browser window. If you're already logged")
    print("into claude.ai, it should auto-approve. Otherwise, log in.")
    print()


def _print_fallback(error: BaseException) -> None:
    print(file=sys.stderr)
    print(f"❌ Token refresh failed: {error}", file=sys.stderr)
    print(file=sys.stderr)
    for line in MANUAL_FALLBACK:
        print(line, file=sys.stderr)


def run(config: RefreshConfig | None = None) -> int:
    _print_banner()

    try:
        config = config or load_config()
        set_log_level(config.log_level)
        asyncio.run(refresh_token(config))

        print()
        print("✅ Token refresh complete!")
        print()

        show_status(config.cli_path)
    except KeyboardInterrupt:
        print("\n\nOperation cancelled by user.", file=sys.stderr)
        return 130
    except Exception as e:
        logger.debug("Token refresh failed", exc_info=True)
        _print_fallback(e)
        return 1

    return 0


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
