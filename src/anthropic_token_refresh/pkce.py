"""PKCE (Proof Key for Code Exchange) generation and authorization URL construction"""

import base64
import dataclasses as dc
import hashlib
import secrets
from urllib.parse import urlencode

from .config import AUTHORIZE_URL, CLIENT_ID, REDIRECT_URI, SCOPE


@dc.dataclass(frozen=True)
class PKCEChallenge:
    verifier: str
    challenge: str
    state: str


def _b64url(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def compute_challenge(verifier: str) -> str:
    """Derive the S256 code challenge for a verifier."""
    return _b64url(hashlib.sha256(verifier.encode("ascii")).digest())


def generate_pkce() -> PKCEChallenge:
    """Generate a fresh verifier, its challenge and an anti-CSRF state value.

    The verifier never leaves this process: the code exchange happens on the
    callback page, which renders the resulting setup token.
    """
    verifier = _b64url(secrets.token_bytes(32))
    return PKCEChallenge(
        verifier=verifier,
        challenge=compute_challenge(verifier),
        state=_b64url(secrets.token_bytes(32)),
    )


def build_authorize_url(
    pkce: PKCEChallenge,
    authorize_url: str = AUTHORIZE_URL,
    client_id: str = CLIENT_ID,
    redirect_uri: str = REDIRECT_URI,
    scope: str = SCOPE,
) -> str:
    """Construct the OAuth authorize URL.

    Args:
        pkce: Challenge triple for this run
        authorize_url: Authorization endpoint
        client_id: OAuth client identifier
        redirect_uri: Callback page that displays the code
        scope: Requested scope

    Returns:
        Full authorization URL
    """
    params = {
        # Asks claude.ai to show the code on the callback page
        "code": "true",
        "client_id": client_id,
        "response_type": "code",
        "redirect_uri": redirect_uri,
        "scope": scope,
        "code_challenge": pkce.challenge,
        "code_challenge_method": "S256",
        "state": pkce.state,
    }
    return f"{authorize_url}?{urlencode(params)}"
