import logging
import os
import tempfile
import typing as tp
from pathlib import Path
from dotenv import load_dotenv

AUTHORIZE_URL = "https://claude.ai/oauth/authorize"
CLIENT_ID = "9d1c250a-e61b-44d9-88ed-5944d1962f5e"
REDIRECT_URI = "https://platform.claude.com/oauth/code/callback"
SCOPE = "user:inference"

PROVIDER = "anthropic"
PROFILE_ID = "anthropic:auto"

DEFAULT_CLI_PATH = Path.home() / ".nvm/versions/node/v24.13.0/bin/clawdbot"
DEFAULT_PROFILE_DIR = Path.home() / ".clawdbot/playwright-chrome-data"


class RefreshConfig(tp.NamedTuple):
    cli_path: Path
    profile_dir: Path
    screenshot_dir: Path
    timeout: float
    poll_interval: float
    headless: bool
    log_level: str


def _positive_float(name: str, default: str) -> float:
    raw = os.getenv(name, default)
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}")
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {raw!r}")
    return value


def _log_level(name: str, default: str) -> str:
    raw = os.getenv(name, default)
    level = raw.strip().upper()
    # getLevelName maps known names to their number and anything else to a string
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"{name} must be a logging level name, got {raw!r}")
    return level


def load_config() -> RefreshConfig:
    env_file = Path(".env")
    if env_file.exists():
        load_dotenv(env_file)

    cli_path = Path(os.getenv("CLAWDBOT_CLI", str(DEFAULT_CLI_PATH))).expanduser()
    profile_dir = Path(
        os.getenv("TOKEN_REFRESH_PROFILE_DIR", str(DEFAULT_PROFILE_DIR))
    ).expanduser()
    screenshot_dir = Path(
        os.getenv("TOKEN_REFRESH_SCREENSHOT_DIR", tempfile.gettempdir())
    ).expanduser()

    # Login usually needs a human, so the window is visible unless asked otherwise
    headless = os.getenv("TOKEN_REFRESH_HEADLESS", "false").lower() == "true"

    return RefreshConfig(
        cli_path=cli_path,
        profile_dir=profile_dir,
        screenshot_dir=screenshot_dir,
        timeout=_positive_float("TOKEN_REFRESH_TIMEOUT", "90"),
        poll_interval=_positive_float("TOKEN_REFRESH_POLL_INTERVAL", "3"),
        headless=headless,
        log_level=_log_level("TOKEN_REFRESH_LOG_LEVEL", "INFO"),
    )
