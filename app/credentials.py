"""API key providers injected into the Gemini components."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional, Protocol

from .config import DEFAULT_API_KEY_FILE, GeminiSettings

logger = logging.getLogger(__name__)

KeyPrompt = Callable[[str], str]


class CredentialProvider(Protocol):
    def get_api_key(self) -> Optional[str]:
        ...


class StaticCredentialProvider:
    """Always returns the key it was built with."""

    def __init__(self, api_key: Optional[str]) -> None:
        self.api_key = api_key

    def get_api_key(self) -> Optional[str]:
        return self.api_key or None


class EnvCredentialProvider:
    """Key taken from ``GEMINI_API_KEY`` via the loaded settings."""

    def __init__(self, settings: GeminiSettings) -> None:
        self.settings = settings

    def get_api_key(self) -> Optional[str]:
        key = (self.settings.api_key or "").strip()
        return key or None


class FileCredentialProvider:
    """Reads the key from a local file, optionally asking for it once.

    When the file does not exist and ``prompt`` is given, the entered key is
    stored in the file so later runs can read it.
    """

    def __init__(self, path: Path = DEFAULT_API_KEY_FILE, prompt: Optional[KeyPrompt] = None) -> None:
        self.path = Path(path)
        self.prompt = prompt

    def get_api_key(self) -> Optional[str]:
        try:
            if self.path.exists():
                return self.path.read_text(encoding="utf-8").strip() or None
            if self.prompt is None:
                return None
            key = self.prompt("Nenhuma chave API encontrada. Digite a chave API: ").strip()
            if not key:
                return None
            self.path.write_text(key, encoding="utf-8")
            return key
        except (OSError, EOFError) as exc:
            logger.error("Failed to read or store API key file %s: %s", self.path, exc)
            return None


class ChainedCredentialProvider:
    """First provider returning a non-empty key wins."""

    def __init__(self, *providers: CredentialProvider) -> None:
        self.providers = providers

    def get_api_key(self) -> Optional[str]:
        for provider in self.providers:
            key = provider.get_api_key()
            if key:
                return key
        return None
