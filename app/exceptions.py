"""Custom exceptions for Gemini call failures."""
from __future__ import annotations

from typing import Optional


class AgentError(RuntimeError):
    """Base exception for agent failures."""
    pass


class CredentialError(AgentError):
    """Raised when no API key can be obtained."""
    pass


class TransportError(AgentError):
    """Raised on connection failures, timeouts and non-success statuses."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ResponseShapeError(AgentError):
    """Raised when a response body is not the expected generateContent envelope."""
    pass
