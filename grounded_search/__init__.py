"""Grounded answer data model, citation rendering and test fakes."""

from .models import Citation, CompletionRequest, CompletionResult, GroundedAnswer, ResponseFormat, TokenUsage
from .citations import REFERENCES_HEADER, format_grounded_answer, render_citations
from .result import Failure, Result, Success
from .fakes import FakeTransport, build_response

__all__ = [
    "Citation",
    "CompletionRequest",
    "CompletionResult",
    "GroundedAnswer",
    "ResponseFormat",
    "TokenUsage",
    "REFERENCES_HEADER",
    "format_grounded_answer",
    "render_citations",
    "Failure",
    "Result",
    "Success",
    "FakeTransport",
    "build_response",
]
