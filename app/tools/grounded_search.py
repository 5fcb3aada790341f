"""Search-grounded answers rendered with a Markdown reference list."""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from app.config import DEFAULT_BASE_URL, DEFAULT_SEARCH_MODEL
from app.credentials import CredentialProvider
from app.exceptions import CredentialError
from app.observability import MetricsEmitter, ResponseDumper
from app.schemas import Content, GenerateContentRequest, GenerationConfig, Part, Tool
from app.tools.boundary import run_guarded
from app.tools.envelope import extract_citations, extract_text, extract_usage, first_candidate, parse_response_body
from app.tools.transport import HttpTransport, build_generate_url
from grounded_search.models import GroundedAnswer, ResponseFormat
from grounded_search.result import Result, Success

logger = logging.getLogger(__name__)


class GroundedSearchFormatter:
    """Calls the search-enabled model once and renders answer plus references.

    Each call is independent: Idle -> Sending -> Parsing -> Done | Failed.
    """

    def __init__(
        self,
        credentials: CredentialProvider,
        transport: HttpTransport,
        *,
        base_url: str = DEFAULT_BASE_URL,
        model: str = DEFAULT_SEARCH_MODEL,
        metrics: Optional[MetricsEmitter] = None,
        dumper: Optional[ResponseDumper] = None,
    ) -> None:
        self.credentials = credentials
        self.transport = transport
        self.base_url = base_url
        self.model = model
        self.metrics = metrics or MetricsEmitter()
        self.dumper = dumper or ResponseDumper()

    def build_request_body(self, prompt: str) -> Dict[str, Any]:
        request = GenerateContentRequest(
            contents=[Content(role="user", parts=Part(text=prompt))],
            generation_config=GenerationConfig(response_mime_type=ResponseFormat.PLAIN.value),
            tools=[Tool()],
        )
        return request.to_body()

    def search(self, prompt: str) -> Result[GroundedAnswer]:
        """Return the grounded answer with its citations, or a ``Failure``."""

        return run_guarded("grounded search", lambda: self._search(prompt), self.metrics)

    def search_and_format(self, prompt: str) -> Result[str]:
        """Return the answer text followed by the ``# Referências`` section."""

        result = self.search(prompt)
        if not result.ok:
            return result
        return Success(result.value.render())

    def _search(self, prompt: str) -> GroundedAnswer:
        api_key = self.credentials.get_api_key()
        if not api_key:
            raise CredentialError("No API key available for grounded search")

        body = self.build_request_body(prompt)
        url = build_generate_url(self.base_url, self.model, api_key)
        logger.info("Sending grounded search request", extra={"model": self.model})
        raw = self.transport.post(url, body)
        self.dumper.dump_response(raw, search=True)

        payload = parse_response_body(raw)
        candidate = first_candidate(payload)
        answer = GroundedAnswer(
            answer_text=extract_text(candidate),
            citations=extract_citations(candidate),
            usage=extract_usage(payload),
        )
        if answer.usage:
            self.metrics.emit_token_usage(
                stage="grounded_search",
                prompt_tokens=answer.usage.prompt_tokens,
                candidates_tokens=answer.usage.candidates_tokens,
                model=self.model,
            )
        self.metrics.emit_search_citations(len(answer.citations))
        return answer
