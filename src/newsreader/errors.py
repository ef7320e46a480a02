"""Exceptions raised by the upstream adapters."""

from __future__ import annotations

__all__ = ["UpstreamError", "MissingCredentialError"]


class UpstreamError(Exception):
    """An upstream provider answered with a failure or could not be reached."""

    def __init__(self, message: str, status_code: int = 500) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class MissingCredentialError(UpstreamError):
    """A required API key is not configured."""

    def __init__(self, variable: str) -> None:
        super().__init__(f"Missing {variable}", status_code=500)
        self.variable = variable
