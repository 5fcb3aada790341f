"""HTTP transport for the generateContent endpoint."""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Protocol

import httpx

from app.config import DEFAULT_TIMEOUT_SECONDS
from app.exceptions import TransportError

logger = logging.getLogger(__name__)

JSON_HEADERS = {"Content-Type": "application/json"}


class HttpTransport(Protocol):
    def post(self, url: str, body: Dict[str, Any]) -> str:
        """POST ``body`` as JSON and return the raw response text."""
        ...


def build_generate_url(base_url: str, model: str, api_key: str) -> str:
    return f"{base_url.rstrip('/')}/models/{model}:generateContent?key={api_key}"


def _redact(url: str) -> str:
    head, sep, _ = url.partition("?key=")
    return f"{head}{sep}***" if sep else url


class HttpxTransport:
    """Blocking JSON POST over ``httpx``; every failure becomes ``TransportError``."""

    def __init__(self, timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS, client: Optional[httpx.Client] = None) -> None:
        self.timeout_seconds = timeout_seconds
        self._client = client

    def post(self, url: str, body: Dict[str, Any]) -> str:
        client = self._client or httpx.Client(timeout=self.timeout_seconds)
        try:
            response = client.post(url, json=body, headers=JSON_HEADERS)
        except httpx.TimeoutException as exc:
            raise TransportError(f"Request to {_redact(url)} timed out after {self.timeout_seconds}s") from exc
        except httpx.HTTPError as exc:
            raise TransportError(f"Request to {_redact(url)} failed: {exc}") from exc
        finally:
            if self._client is None:
                client.close()

        if not response.is_success:
            logger.debug("Error body from %s: %s", _redact(url), response.text[:500])
            raise TransportError(
                f"Request to {_redact(url)} returned HTTP {response.status_code}",
                status_code=response.status_code,
            )
        return response.text
