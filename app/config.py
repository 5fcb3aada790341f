"""Environment-driven configuration helpers for the Gemini agents."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, MutableMapping, Optional

from dotenv import load_dotenv

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_MODEL = "gemini-1.5-flash"
DEFAULT_SEARCH_MODEL = "gemini-2.5-flash-preview-04-17"
DEFAULT_TEMPERATURE = 0.7
DEFAULT_TIMEOUT_SECONDS = 60.0
DEFAULT_API_KEY_FILE = Path("api_key.txt")
DEFAULT_ENV_FILE = Path(".env")


@dataclass
class ObservabilitySettings:
    """Logging toggles and the optional debug dump directory."""

    log_level: str = "INFO"
    dump_dir: Optional[Path] = None


@dataclass
class GeminiSettings:
    """Endpoint, model and credential defaults."""

    api_key: Optional[str] = None
    api_key_file: Path = DEFAULT_API_KEY_FILE
    base_url: str = DEFAULT_BASE_URL
    model: str = DEFAULT_MODEL
    search_model: str = DEFAULT_SEARCH_MODEL
    temperature: float = DEFAULT_TEMPERATURE
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS


@dataclass
class AppSettings:
    """Aggregated configuration for the application."""

    gemini: GeminiSettings = field(default_factory=GeminiSettings)
    observability: ObservabilitySettings = field(default_factory=ObservabilitySettings)


def load_settings(env: Mapping[str, str] | MutableMapping[str, str] | None = None, env_file: Optional[Path] = None) -> AppSettings:
    """Load settings from the provided environment mapping (defaults to ``os.environ``).

    When no mapping is given, a ``.env`` file is read first; real environment
    variables take precedence over its values.
    """

    if env is None:
        env_file_path = env_file or DEFAULT_ENV_FILE
        if env_file_path.exists():
            load_dotenv(env_file_path, override=False)
        env = os.environ

    dump_dir = env.get("DEBUG_DUMP_DIR")
    observability = ObservabilitySettings(
        log_level=env.get("LOG_LEVEL", "INFO"),
        dump_dir=Path(dump_dir) if dump_dir else None,
    )

    gemini = GeminiSettings(
        api_key=env.get("GEMINI_API_KEY") or None,
        api_key_file=Path(env.get("GEMINI_API_KEY_FILE", str(DEFAULT_API_KEY_FILE))),
        base_url=env.get("GEMINI_BASE_URL", DEFAULT_BASE_URL).rstrip("/"),
        model=env.get("GEMINI_MODEL", DEFAULT_MODEL),
        search_model=env.get("GEMINI_SEARCH_MODEL", DEFAULT_SEARCH_MODEL),
        temperature=float(env.get("GEMINI_TEMPERATURE", DEFAULT_TEMPERATURE)),
        timeout_seconds=float(env.get("HTTP_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS)),
    )

    return AppSettings(gemini=gemini, observability=observability)
