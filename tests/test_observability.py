import logging

from app.config import ObservabilitySettings
from app.observability import MetricsEmitter, ResponseDumper, configure_logging


def test_metrics_emitter_fans_out_to_sinks():
    events = []
    emitter = MetricsEmitter(sinks=[lambda name, payload: events.append((name, payload))])

    emitter.emit_search_citations(3)

    assert events == [("search_citations", {"value": 3})]


def test_failing_sink_does_not_break_emission(caplog):
    events = []

    def broken(_name, _payload):
        raise RuntimeError("sink down")

    emitter = MetricsEmitter(sinks=[broken, lambda name, payload: events.append(name)])

    with caplog.at_level(logging.ERROR):
        emitter.emit_call_failed("completion", ValueError("x"))

    assert events == ["call_failed"]
    assert "Metric sink failed" in caplog.text


def test_dumper_disabled_without_directory(tmp_path):
    dumper = ResponseDumper()
    dumper.dump_response("{}")
    assert not dumper.enabled
    assert list(tmp_path.iterdir()) == []


def test_configure_logging_accepts_unknown_level():
    configure_logging(ObservabilitySettings(log_level="chatty"))
