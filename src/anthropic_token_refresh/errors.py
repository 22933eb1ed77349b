class TokenRefreshError(RuntimeError):
    """Base class for failures in the refresh chain."""


class NavigationError(TokenRefreshError):
    pass


class AuthCodeNotFoundError(TokenRefreshError):
    pass


class SetupTokenNotFoundError(TokenRefreshError):
    pass


class CredentialSinkError(TokenRefreshError):
    """The credential CLI exited with a non-zero status."""

    def __init__(self, returncode: int, output: str):
        self.returncode = returncode
        self.output = output
        super().__init__(f"paste-token failed (code {returncode}): {output}")
