"""Logging, lightweight metrics and debug dump helpers for the agents."""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, Optional

from .config import ObservabilitySettings

MetricSink = Callable[[str, Dict[str, Any]], None]

REQUEST_DUMP_FILE = "requestBody.json"
RESPONSE_DUMP_FILE = "responseBody.json"
SEARCH_RESPONSE_DUMP_FILE = "searchResponseBody.json"


def configure_logging(settings: ObservabilitySettings) -> None:
    """Configure structured logging according to the provided settings."""

    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logging.getLogger(__name__).debug(
        "Logging configured", extra={"level": settings.log_level.upper()}
    )


@dataclass
class MetricsEmitter:
    """Simple metrics helper that fans out to configured sinks."""

    sinks: Iterable[MetricSink] = field(default_factory=list)
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger(__name__))

    def _emit(self, name: str, payload: Dict[str, Any]) -> None:
        self.logger.info("metric.%s", name, extra={"metric": payload})
        for sink in self.sinks:
            try:
                sink(name, payload)
            except Exception:
                self.logger.exception("Metric sink failed", extra={"metric_name": name})

    def emit_token_usage(
        self,
        stage: str,
        prompt_tokens: int,
        candidates_tokens: int,
        model: Optional[str] = None,
    ) -> None:
        payload = {
            "stage": stage,
            "prompt_tokens": prompt_tokens,
            "candidates_tokens": candidates_tokens,
        }
        if model:
            payload["model"] = model
        self._emit("token_usage", payload)

    def emit_search_citations(self, count: int) -> None:
        self._emit("search_citations", {"value": count})

    def emit_call_failed(self, stage: str, error: BaseException) -> None:
        self._emit("call_failed", {"stage": stage, "error": type(error).__name__})


class ResponseDumper:
    """Writes raw request and response bodies to a directory for debugging.

    Disabled when no directory is configured. Write failures never affect the call.
    """

    def __init__(self, dump_dir: Optional[Path] = None) -> None:
        self.dump_dir = dump_dir
        self._logger = logging.getLogger(__name__)

    @property
    def enabled(self) -> bool:
        return self.dump_dir is not None

    def dump_request(self, body: Dict[str, Any]) -> None:
        self._write(REQUEST_DUMP_FILE, json.dumps(body, ensure_ascii=False))

    def dump_response(self, raw: str, *, search: bool = False) -> None:
        self._write(SEARCH_RESPONSE_DUMP_FILE if search else RESPONSE_DUMP_FILE, raw)

    def _write(self, name: str, content: str) -> None:
        if self.dump_dir is None:
            return
        try:
            self.dump_dir.mkdir(parents=True, exist_ok=True)
            (self.dump_dir / name).write_text(content, encoding="utf-8")
        except OSError as exc:
            self._logger.warning("Failed to write debug dump %s: %s", name, exc)
