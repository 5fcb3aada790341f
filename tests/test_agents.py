import json
from datetime import datetime, timezone

from app.agents.simple import SimpleAgent, SimpleSearchAgent, render_response_document
from app.agents.stocks import StockSnapshotAgent, build_stocks_prompt
from grounded_search.fakes import build_response

FIXED_NOW = datetime(2025, 5, 1, 12, 30, 0)


def test_render_response_document_header():
    assert render_response_document("body", FIXED_NOW) == "# Resposta do Gemini em 2025-05-01 12:30:00\n\nbody"


def test_simple_agent_writes_response_file(client_factory, tmp_path):
    client, transport = client_factory(build_response("3,8"))
    output = tmp_path / "response.md"

    result = SimpleAgent(client, output_path=output, clock=lambda: FIXED_NOW).run("Que número é maior?")

    assert result.ok
    assert output.read_text(encoding="utf-8") == "# Resposta do Gemini em 2025-05-01 12:30:00\n\n3,8"
    assert "tools" not in transport.bodies[0]
    assert transport.bodies[0]["generationConfig"] == {"temperature": 0.7, "response_mime_type": "text/plain"}


def test_simple_agent_does_not_write_on_failure(client_factory, tmp_path):
    client, _ = client_factory(json.dumps({"candidates": []}))
    output = tmp_path / "response.md"

    result = SimpleAgent(client, output_path=output).run("prompt")

    assert not result.ok
    assert not output.exists()


def test_simple_search_agent_writes_references(formatter, tmp_path):
    output = tmp_path / "out" / "response.md"

    result = SimpleSearchAgent(formatter, output_path=output, clock=lambda: FIXED_NOW).run("Quais os valores?")

    assert result.ok
    content = output.read_text(encoding="utf-8")
    assert content.startswith("# Resposta do Gemini em 2025-05-01 12:30:00\n\nO dólar está cotado a R$ 5,40.")
    assert "# Referências\n- [Banco Central do Brasil](https://www.bcb.gov.br)\n" in content


def test_build_stocks_prompt_lists_tickers():
    prompt = build_stocks_prompt(["AAPL", "MSFT"])
    assert "AAPL, MSFT" in prompt
    assert '{"AAPL": 100.00, "MSFT": 100.00}' in prompt


def test_stock_snapshot_appends_to_history(client_factory, tmp_path):
    client, transport = client_factory(
        [build_response("context"), build_response('{"AAPL": 190.5, "MSFT": 410.0}')]
    )
    history = tmp_path / "response.json"
    history.write_text(json.dumps([{"timestamp": "earlier", "stocks": {}}]), encoding="utf-8")
    now = datetime(2025, 5, 1, 12, 0, tzinfo=timezone.utc)

    entry = StockSnapshotAgent(client, tickers=["AAPL", "MSFT"], history_path=history, clock=lambda: now).run_once()

    assert entry == {"timestamp": "2025-05-01T12:00:00+00:00", "stocks": {"AAPL": 190.5, "MSFT": 410.0}}
    saved = json.loads(history.read_text(encoding="utf-8"))
    assert [item["timestamp"] for item in saved] == ["earlier", "2025-05-01T12:00:00+00:00"]
    assert transport.bodies[1]["generationConfig"] == {"temperature": 1.0, "response_mime_type": "application/json"}


def test_stock_snapshot_ignores_non_json_reply(client_factory, tmp_path):
    client, _ = client_factory([build_response("context"), build_response("not json")])
    history = tmp_path / "response.json"

    assert StockSnapshotAgent(client, history_path=history).run_once() is None
    assert not history.exists()


def test_stock_snapshot_returns_none_on_failed_completion(client_factory, tmp_path):
    client, _ = client_factory(json.dumps({"candidates": []}))
    history = tmp_path / "response.json"

    assert StockSnapshotAgent(client, history_path=history).run_once() is None
    assert not history.exists()


def test_stock_snapshot_leaves_corrupt_history_untouched(client_factory, tmp_path):
    client, _ = client_factory([build_response("context"), build_response('{"AAPL": 190.5}')])
    history = tmp_path / "response.json"
    history.write_text("not json", encoding="utf-8")

    assert StockSnapshotAgent(client, history_path=history).run_once() is None
    assert history.read_text(encoding="utf-8") == "not json"


def test_stock_snapshot_rejects_history_that_is_not_a_list(client_factory, tmp_path):
    client, _ = client_factory([build_response("context"), build_response('{"AAPL": 190.5}')])
    history = tmp_path / "response.json"
    history.write_text('{"timestamp": "earlier"}', encoding="utf-8")

    assert StockSnapshotAgent(client, history_path=history).run_once() is None
    assert history.read_text(encoding="utf-8") == '{"timestamp": "earlier"}'
