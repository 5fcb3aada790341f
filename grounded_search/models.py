from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from .citations import format_grounded_answer


class ResponseFormat(str, Enum):
    """MIME types the completion endpoint can be asked to answer with.

    The short names ``plain`` and ``json`` are accepted as aliases.
    """

    PLAIN = "text/plain"
    JSON = "application/json"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            return cls.__members__.get(value.strip().upper())
        return None


@dataclass(frozen=True)
class CompletionRequest:
    """One completion call: maps to exactly one HTTP request."""

    model: str
    temperature: float
    prompt: str
    response_format: ResponseFormat = ResponseFormat.PLAIN
    use_search: bool = False


@dataclass(frozen=True)
class TokenUsage:
    """Token counts reported in the response ``usageMetadata``."""

    prompt_tokens: int = 0
    candidates_tokens: int = 0
    total_tokens: int = 0


@dataclass(frozen=True)
class CompletionResult:
    text: str
    model: Optional[str] = None
    usage: Optional[TokenUsage] = None


@dataclass(frozen=True)
class Citation:
    """A web source attached to a grounded answer."""

    uri: str
    title: Optional[str] = None

    def render(self) -> str:
        """Render as a Markdown bullet, falling back to the bare URI."""

        if self.title:
            return f"- [{self.title}]({self.uri})"
        return f"- {self.uri}"


@dataclass(frozen=True)
class GroundedAnswer:
    """Answer text plus the ordered sources it was grounded on."""

    answer_text: str
    citations: Tuple[Citation, ...] = field(default_factory=tuple)
    usage: Optional[TokenUsage] = None

    def render(self) -> str:
        return format_grounded_answer(self.answer_text, self.citations)
