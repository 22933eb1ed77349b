"""Heuristics for spotting authorization codes and setup tokens.

Everything here works on plain strings so it can be checked without a
browser; ``token_extractor`` feeds it whatever the page currently shows.
"""

import re
from urllib.parse import parse_qs, urlsplit

# "code=true" on the authorize URL is a flag, not a code
FLAG_VALUE = "true"
MIN_CODE_LENGTH = 10
MIN_DISPLAYED_CODE_LENGTH = 20
MIN_SETUP_TOKEN_LENGTH = 30
MASK_MIN_LENGTH = 70

AUTH_CODE_SELECTOR = '[data-testid="authorization-code"], .authorization-code, code, pre'
SETUP_TOKEN_SELECTOR = 'code, pre, input[readonly], .token, [data-testid="code"]'
APPROVE_LABELS = ("Allow", "Approve", "Authorize", "Continue")

SETUP_TOKEN_PATTERN = re.compile(r"([A-Za-z0-9_-]{20,}#[A-Za-z0-9_-]+)")
TOKEN_SHAPED_PATTERN = re.compile(r"\b([A-Za-z0-9_-]{30,})\b")


def is_real_code(value: str | None) -> bool:
    return bool(value) and value != FLAG_VALUE and len(value) > MIN_CODE_LENGTH


def _code_param(query: str) -> str | None:
    values = parse_qs(query).get("code")
    return values[0] if values else None


def code_from_query(url: str) -> str | None:
    """Return the ``code`` query parameter if it looks like a real code."""
    code = _code_param(urlsplit(url).query)
    return code if is_real_code(code) else None


def code_from_fragment(url: str) -> str | None:
    """Return a ``code`` parameter carried in the URL fragment, if real."""
    code = _code_param(urlsplit(url).fragment)
    return code if is_real_code(code) else None


def code_from_url(url: str) -> str | None:
    return code_from_query(url) or code_from_fragment(url)


def displayed_code(text: str | None) -> str | None:
    """Accept text shown in a code element when it is long and unbroken."""
    if not text:
        return None
    text = text.strip()
    if len(text) > MIN_DISPLAYED_CODE_LENGTH and not any(c.isspace() for c in text):
        return text
    return None


def token_shaped_run(text: str) -> str | None:
    """First long alphanumeric run in page text. Used for logging only."""
    for match in TOKEN_SHAPED_PATTERN.finditer(text or ""):
        if "http" not in match.group(1):
            return match.group(1)
    return None


def setup_token_in_text(text: str) -> str | None:
    match = SETUP_TOKEN_PATTERN.search(text or "")
    return match.group(1) if match else None


def accept_setup_token(value: str | None) -> str | None:
    if not value:
        return None
    value = value.strip()
    return value if len(value) > MIN_SETUP_TOKEN_LENGTH else None


def mask_token(token: str) -> str:
    # Below this length the head and tail would give away most of the token
    if len(token) < MASK_MIN_LENGTH:
        return f"{token[:4]}... ({len(token)} chars)"
    return f"{token[:25]}...{token[-10:]}"
