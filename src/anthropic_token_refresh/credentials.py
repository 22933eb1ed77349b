"""Hand the setup token to the clawdbot credential CLI."""

import asyncio
import subprocess
from pathlib import Path

from .config import PROFILE_ID, PROVIDER
from .errors import CredentialSinkError
from .logger import logger


def paste_token_command(cli_path: Path) -> list[str]:
    return [
        str(cli_path),
        "models",
        "auth",
        "paste-token",
        "--provider",
        PROVIDER,
        "--profile-id",
        PROFILE_ID,
    ]


async def paste_token(cli_path: Path, token: str) -> str:
    """Pipe the token into ``models auth paste-token``.

    Args:
        cli_path: Path to the clawdbot binary
        token: Setup token to store

    Returns:
        Combined stdout/stderr of the CLI

    Raises:
        CredentialSinkError: If the CLI exits with a non-zero status
        OSError: If the CLI cannot be started
    """
    logger.info("Saving token to Clawdbot...")
    proc = await asyncio.create_subprocess_exec(
        *paste_token_command(cli_path),
        stdin=asyncio.subprocess.PIPE,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.STDOUT,
    )
    stdout, _ = await proc.communicate(f"{token}\n".encode())
    output = stdout.decode(errors="replace") if stdout else ""

    if proc.returncode != 0:
        raise CredentialSinkError(proc.returncode, output)

    logger.info("Token saved to Clawdbot!")
    return output


def show_status(cli_path: Path) -> None:
    """Run ``models status`` with output going straight to the console."""
    logger.info("Verifying...")
    subprocess.run([str(cli_path), "models", "status"], check=True)
