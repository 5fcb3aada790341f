"""Converts raised errors into ``Failure`` results at component boundaries."""
from __future__ import annotations

import logging
from typing import Callable, Optional, TypeVar

from app.exceptions import AgentError
from app.observability import MetricsEmitter
from grounded_search.result import Failure, Result, Success

logger = logging.getLogger(__name__)

T = TypeVar("T")


def run_guarded(stage: str, func: Callable[[], T], metrics: Optional[MetricsEmitter] = None) -> Result[T]:
    """Run ``func`` and wrap its outcome; no exception escapes."""

    try:
        return Success(func())
    except AgentError as exc:
        logger.warning("%s failed: %s", stage, exc)
        error: AgentError = exc
    except Exception as exc:
        logger.exception("%s failed unexpectedly: %s", stage, exc)
        error = AgentError(f"{stage} failed unexpectedly: {exc}")
        error.__cause__ = exc
    if metrics:
        metrics.emit_call_failed(stage, error)
    return Failure(error)
