import pytest

from app.credentials import StaticCredentialProvider
from app.observability import MetricsEmitter
from app.tools.gemini_client import CompletionClient
from app.tools.grounded_search import GroundedSearchFormatter
from grounded_search.fakes import FakeTransport, build_response
from grounded_search.models import Citation


@pytest.fixture()
def credentials():
    return StaticCredentialProvider("test-key")


@pytest.fixture()
def web_chunks():
    return [
        {"title": "Banco Central do Brasil", "uri": "https://www.bcb.gov.br"},
        {"uri": "https://br.investing.com"},
        {"title": "", "uri": "https://example.com/empty-title"},
    ]


@pytest.fixture()
def fake_citations():
    return [
        Citation(title="Source One", uri="http://example.com/1"),
        Citation(title="Source Two", uri="http://example.com/2"),
    ]


@pytest.fixture()
def metric_events():
    return []


@pytest.fixture()
def metrics(metric_events):
    return MetricsEmitter(sinks=[lambda name, payload: metric_events.append((name, payload))])


@pytest.fixture()
def search_transport(web_chunks):
    return FakeTransport(build_response("O dólar está cotado a R$ 5,40.", web_chunks))


@pytest.fixture()
def formatter(credentials, search_transport, metrics):
    return GroundedSearchFormatter(credentials, search_transport, base_url="https://api.test/v1beta", metrics=metrics)


def make_client(credentials, transport, **kwargs):
    kwargs.setdefault("base_url", "https://api.test/v1beta")
    return CompletionClient(credentials, transport, **kwargs)


@pytest.fixture()
def client_factory(credentials):
    def factory(replies, **kwargs):
        transport = FakeTransport(replies)
        return make_client(kwargs.pop("credentials", credentials), transport, **kwargs), transport

    return factory
