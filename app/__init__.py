"""Gemini completion and grounded-search agents."""

__all__ = [
    "AppSettings",
    "load_settings",
    "configure_logging",
    "MetricsEmitter",
    "CompletionClient",
    "GroundedSearchFormatter",
]

from .config import AppSettings, load_settings
from .observability import MetricsEmitter, configure_logging
from .tools.gemini_client import CompletionClient
from .tools.grounded_search import GroundedSearchFormatter
