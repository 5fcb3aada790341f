"""Single-prompt agents that write the model's answer to a Markdown file."""
from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

from app.config import DEFAULT_MODEL, DEFAULT_TEMPERATURE
from app.tools.gemini_client import CompletionClient
from app.tools.grounded_search import GroundedSearchFormatter
from grounded_search.models import ResponseFormat
from grounded_search.result import Result

logger = logging.getLogger(__name__)

DEFAULT_RESPONSE_FILE = Path("response.md")

Clock = Callable[[], datetime]


def render_response_document(text: str, generated_at: datetime) -> str:
    return f"# Resposta do Gemini em {generated_at.strftime('%Y-%m-%d %H:%M:%S')}\n\n{text}"


def _write_document(path: Path, text: str, clock: Clock) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_response_document(text, clock()), encoding="utf-8")
    logger.info("Resposta salva em %s", path)


class SimpleAgent:
    """Plain completion without search, saved under a timestamped header."""

    def __init__(
        self,
        client: CompletionClient,
        *,
        model: str = DEFAULT_MODEL,
        temperature: float = DEFAULT_TEMPERATURE,
        output_path: Path = DEFAULT_RESPONSE_FILE,
        clock: Optional[Clock] = None,
    ) -> None:
        self.client = client
        self.model = model
        self.temperature = temperature
        self.output_path = Path(output_path)
        self.clock = clock or datetime.now

    def run(self, prompt: str) -> Result:
        result = self.client.complete(self.model, self.temperature, prompt, ResponseFormat.PLAIN, False)
        if result.ok:
            _write_document(self.output_path, result.value.text, self.clock)
        return result


class SimpleSearchAgent:
    """Grounded search answer with references, saved under a timestamped header."""

    def __init__(
        self,
        formatter: GroundedSearchFormatter,
        *,
        output_path: Path = DEFAULT_RESPONSE_FILE,
        clock: Optional[Clock] = None,
    ) -> None:
        self.formatter = formatter
        self.output_path = Path(output_path)
        self.clock = clock or datetime.now

    def run(self, prompt: str) -> Result:
        result = self.formatter.search_and_format(prompt)
        if result.ok:
            _write_document(self.output_path, result.value, self.clock)
        return result
