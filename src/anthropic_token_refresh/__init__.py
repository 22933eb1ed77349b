"""Refresh the Anthropic setup token through a browser OAuth flow."""

__version__ = "0.2.0"
