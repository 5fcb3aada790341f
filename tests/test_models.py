import dataclasses

import pytest

from app.exceptions import ResponseShapeError
from grounded_search.models import CompletionRequest, ResponseFormat
from grounded_search.result import Failure, Success


def test_completion_request_is_immutable():
    request = CompletionRequest(model="gemini-1.5-flash", temperature=0.7, prompt="hi")
    assert request.response_format is ResponseFormat.PLAIN
    assert request.use_search is False
    with pytest.raises(dataclasses.FrozenInstanceError):
        request.prompt = "changed"


def test_response_format_values_are_mime_types():
    assert ResponseFormat.PLAIN.value == "text/plain"
    assert ResponseFormat("application/json") is ResponseFormat.JSON


def test_response_format_accepts_short_names():
    assert ResponseFormat("json") is ResponseFormat.JSON
    assert ResponseFormat("Plain") is ResponseFormat.PLAIN
    with pytest.raises(ValueError):
        ResponseFormat("xml")


def test_success_and_failure_are_distinguishable():
    ok = Success("text")
    failed = Failure(ResponseShapeError("Response has no candidates"))

    assert ok.ok and ok.value == "text" and ok.error is None
    assert not failed.ok and failed.value is None
    assert failed.reason == "Response has no candidates"
    with pytest.raises(ResponseShapeError):
        failed.unwrap()
