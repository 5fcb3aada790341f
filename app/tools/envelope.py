"""Extraction of text, citations and usage from generateContent responses."""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional, Tuple

from pydantic import ValidationError

from app.exceptions import ResponseShapeError
from app.schemas import Candidate, UsageMetadata
from grounded_search.models import Citation, TokenUsage

logger = logging.getLogger(__name__)


def parse_response_body(raw: str) -> Dict[str, Any]:
    """Decode the raw body; anything but a JSON object is a shape error."""

    try:
        payload = json.loads(raw)
    except (TypeError, json.JSONDecodeError) as exc:
        raise ResponseShapeError(f"Response body is not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise ResponseShapeError("Response body is not a JSON object")
    return payload


def first_candidate(payload: Dict[str, Any]) -> Candidate:
    candidates = payload.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        raise ResponseShapeError("Response has no candidates")
    try:
        return Candidate.model_validate(candidates[0])
    except ValidationError as exc:
        raise ResponseShapeError(f"Unexpected candidate shape: {exc.errors()[0]['msg']} at {_loc(exc)}") from exc


def extract_text(candidate: Candidate) -> str:
    """``candidates[0].content.parts[0].text``, which must be present."""

    if not candidate.content.parts:
        raise ResponseShapeError("Candidate content has no parts")
    text = candidate.content.parts[0].text
    if text is None:
        raise ResponseShapeError("First content part has no text")
    return text


def extract_citations(candidate: Candidate) -> Tuple[Citation, ...]:
    """Citations in chunk order; absent grounding metadata means none."""

    metadata = candidate.grounding_metadata
    if metadata is None or metadata.grounding_chunks is None:
        return ()
    return tuple(
        Citation(uri=chunk.web.uri, title=chunk.web.title)
        for chunk in metadata.grounding_chunks
    )


def extract_usage(payload: Dict[str, Any]) -> Optional[TokenUsage]:
    raw = payload.get("usageMetadata")
    if not isinstance(raw, dict):
        return None
    try:
        usage = UsageMetadata.model_validate(raw)
    except ValidationError:
        logger.debug("Ignoring malformed usageMetadata: %s", raw)
        return None
    return TokenUsage(
        prompt_tokens=usage.prompt_token_count,
        candidates_tokens=usage.candidates_token_count,
        total_tokens=usage.total_token_count,
    )


def _loc(exc: ValidationError) -> str:
    parts: List[str] = [str(item) for item in exc.errors()[0].get("loc", ())]
    return ".".join(parts) or "<root>"
