from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, List

if TYPE_CHECKING:
    from .models import Citation

REFERENCES_HEADER = "# Referências"


def render_citations(citations: Iterable[Citation]) -> str:
    """Render citations as a Markdown bullet list, one line per source."""

    lines: List[str] = []
    for citation in citations:
        lines.append(citation.render() + "\n")
    return "".join(lines)


def format_grounded_answer(answer_text: str, citations: Iterable[Citation]) -> str:
    """Append a reference section to ``answer_text`` when there are citations.

    Sources keep their original order and repeated URIs are not collapsed.
    """

    rendered = render_citations(citations)
    if not rendered:
        return answer_text
    return f"{answer_text}\n\n{REFERENCES_HEADER}\n{rendered}"
