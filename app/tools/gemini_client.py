"""Gemini ``generateContent`` completion client."""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from app.config import DEFAULT_BASE_URL
from app.credentials import CredentialProvider
from app.exceptions import AgentError, CredentialError
from app.observability import MetricsEmitter, ResponseDumper
from app.schemas import Content, GenerateContentRequest, GenerationConfig, Part
from app.tools.boundary import run_guarded
from app.tools.envelope import extract_text, extract_usage, first_candidate, parse_response_body
from app.tools.grounded_search import GroundedSearchFormatter
from app.tools.transport import HttpTransport, build_generate_url
from grounded_search.models import CompletionRequest, CompletionResult, ResponseFormat
from grounded_search.result import Result

logger = logging.getLogger(__name__)


class CompletionClient:
    """Produces generated text for a prompt, optionally grounded by a prior search.

    With ``use_search`` the formatted search answer is sent as a user turn
    before the prompt turn, in the same request. The search call always
    finishes before the completion call starts.
    """

    def __init__(
        self,
        credentials: CredentialProvider,
        transport: HttpTransport,
        *,
        search: Optional[GroundedSearchFormatter] = None,
        base_url: str = DEFAULT_BASE_URL,
        metrics: Optional[MetricsEmitter] = None,
        dumper: Optional[ResponseDumper] = None,
    ) -> None:
        self.credentials = credentials
        self.transport = transport
        self.base_url = base_url
        self.metrics = metrics or MetricsEmitter()
        self.dumper = dumper or ResponseDumper()
        self.search = search or GroundedSearchFormatter(
            credentials,
            transport,
            base_url=base_url,
            metrics=self.metrics,
            dumper=self.dumper,
        )

    def complete(
        self,
        model: str,
        temperature: float,
        prompt: str,
        response_format: ResponseFormat = ResponseFormat.PLAIN,
        use_search: bool = False,
    ) -> Result[CompletionResult]:
        def call() -> CompletionResult:
            try:
                mime_type = ResponseFormat(response_format)
            except ValueError as exc:
                raise AgentError(f"Unsupported response format: {response_format!r}") from exc
            request = CompletionRequest(
                model=model,
                temperature=temperature,
                prompt=prompt,
                response_format=mime_type,
                use_search=use_search,
            )
            return self._complete(request)

        return run_guarded("completion", call, self.metrics)

    def complete_request(self, request: CompletionRequest) -> Result[CompletionResult]:
        return run_guarded("completion", lambda: self._complete(request), self.metrics)

    def build_request_body(self, request: CompletionRequest, search_context: Optional[str] = None) -> Dict[str, Any]:
        contents = []
        if search_context is not None:
            contents.append(Content(role="user", parts=Part(text=search_context)))
        contents.append(Content(role="user", parts=Part(text=request.prompt)))
        body = GenerateContentRequest(
            contents=contents,
            generation_config=GenerationConfig(
                temperature=request.temperature,
                response_mime_type=request.response_format.value,
            ),
        )
        return body.to_body()

    def _complete(self, request: CompletionRequest) -> CompletionResult:
        api_key = self.credentials.get_api_key()
        if not api_key:
            raise CredentialError("No API key available for completion")

        search_context = None
        if request.use_search:
            # A failed search fails the completion; unwrap re-raises its typed error.
            search_context = self.search.search_and_format(request.prompt).unwrap()

        body = self.build_request_body(request, search_context)
        self.dumper.dump_request(body)
        url = build_generate_url(self.base_url, request.model, api_key)
        logger.info(
            "Sending completion request",
            extra={"model": request.model, "use_search": request.use_search},
        )
        raw = self.transport.post(url, body)
        self.dumper.dump_response(raw)

        payload = parse_response_body(raw)
        result = CompletionResult(
            text=extract_text(first_candidate(payload)),
            model=request.model,
            usage=extract_usage(payload),
        )
        if result.usage:
            self.metrics.emit_token_usage(
                stage="completion",
                prompt_tokens=result.usage.prompt_tokens,
                candidates_tokens=result.usage.candidates_tokens,
                model=request.model,
            )
        return result
