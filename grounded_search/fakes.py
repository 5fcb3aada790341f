from __future__ import annotations

import json
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union

Reply = Union[str, Exception]


def build_response(
    text: Optional[str] = "answer",
    chunks: Optional[Iterable[Mapping[str, Any]]] = None,
    *,
    usage: Optional[Mapping[str, int]] = None,
) -> str:
    """Build a generateContent-shaped body.

    ``chunks`` are ``web`` objects (``{"uri": ..., "title": ...}``); ``None``
    leaves out ``groundingMetadata`` entirely.
    """

    part: Dict[str, Any] = {} if text is None else {"text": text}
    candidate: Dict[str, Any] = {"content": {"role": "model", "parts": [part]}}
    if chunks is not None:
        candidate["groundingMetadata"] = {
            "groundingChunks": [{"web": dict(chunk)} for chunk in chunks],
        }
    payload: Dict[str, Any] = {"candidates": [candidate]}
    if usage is not None:
        payload["usageMetadata"] = dict(usage)
    return json.dumps(payload, ensure_ascii=False)


class FakeTransport:
    """Deterministic transport that replays canned replies and records requests.

    Replies are consumed in order; the last one repeats once the list is
    exhausted. An exception instance in the list is raised instead of returned.
    """

    def __init__(self, replies: Union[Reply, Sequence[Reply]]) -> None:
        if isinstance(replies, (str, Exception)):
            replies = [replies]
        self.replies: List[Reply] = list(replies)
        self.requests: List[Dict[str, Any]] = []

    @property
    def calls(self) -> int:
        return len(self.requests)

    @property
    def urls(self) -> List[str]:
        return [request["url"] for request in self.requests]

    @property
    def bodies(self) -> List[Dict[str, Any]]:
        return [request["body"] for request in self.requests]

    def post(self, url: str, body: Dict[str, Any]) -> str:
        self.requests.append({"url": url, "body": json.loads(json.dumps(body))})
        index = min(len(self.requests), len(self.replies)) - 1
        reply = self.replies[index]
        if isinstance(reply, Exception):
            raise reply
        return reply


__all__ = ["FakeTransport", "build_response"]
