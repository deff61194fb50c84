from typing import Any
from unittest.mock import MagicMock

import pytest
import yaml

from event_manager.api_client import EventApiClient
from event_manager.config import Config
from event_manager.models import EventSchema, EventsPage, OrganizerSchema, PaginationSchema, VenueSchema
from event_manager.query_cache import QueryCache


class NetworkAccessError(RuntimeError):
    """Raised when any code attempts to use the network during tests."""


@pytest.fixture(autouse=True)
def _block_network(monkeypatch: pytest.MonkeyPatch) -> None:
    """
    Block all outbound network access for every test.

    - Patches common socket entrypoints (connect, connect_ex, create_connection, getaddrinfo)
    - Patches requests' Session.request
    """

    def raise_network(*args: Any, **kwargs: Any) -> Any:  # pragma: no cover - trivial guard
        raise NetworkAccessError(
            "Acesso à rede está desabilitado nos testes. Use mocks/stubs."
        )

    monkeypatch.setattr("socket.socket.connect", raise_network, raising=True)
    monkeypatch.setattr("socket.socket.connect_ex", raise_network, raising=True)
    monkeypatch.setattr("socket.create_connection", raise_network, raising=True)
    monkeypatch.setattr("socket.getaddrinfo", raise_network, raising=True)
    monkeypatch.setattr("requests.sessions.Session.request", raise_network, raising=True)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove variáveis de ambiente que alteram a configuração"""
    for name in ("EVENTS_API_URL", "EVENTS_API_TOKEN", "SECRET_KEY", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def venue_payloads():
    return [
        {"id": 1, "name": "Blue Note", "location": "New York"},
        {"id": 2, "name": "Town Hall", "location": "Boston"},
    ]


@pytest.fixture
def organizer_payloads():
    return [
        {"id": 10, "name": "Jazz Society", "contact": "jazz@example.com"},
        {"id": 11, "name": "City Council", "contact": "council@example.com"},
    ]


@pytest.fixture
def event_payload(venue_payloads, organizer_payloads):
    return {
        "id": 7,
        "title": "Jazz Night",
        "description": "An evening of live jazz",
        "date": "2025-03-15T18:30:00+00:00",
        "venue_id": 1,
        "organizer_id": 10,
        "created_at": "2025-01-02T09:05:00+00:00",
        "venue": venue_payloads[0],
        "organizer": organizer_payloads[0],
        "tags": ["music", "jazz"],
    }


@pytest.fixture
def second_event_payload(venue_payloads, organizer_payloads):
    return {
        "id": 8,
        "title": "Budget Hearing",
        "description": "Public hearing on the city budget",
        "date": "2025-04-01T10:00:00+00:00",
        "venue_id": 2,
        "organizer_id": 11,
        "created_at": "2025-01-03T12:00:00+00:00",
        "venue": venue_payloads[1],
        "organizer": organizer_payloads[1],
        "tags": ["civic", "music"],
    }


@pytest.fixture
def venues(venue_payloads):
    return VenueSchema(many=True).load(venue_payloads)


@pytest.fixture
def organizers(organizer_payloads):
    return OrganizerSchema(many=True).load(organizer_payloads)


@pytest.fixture
def event(event_payload):
    return EventSchema().load(event_payload)


@pytest.fixture
def events_page(event_payload, second_event_payload):
    return EventsPage(
        events=EventSchema(many=True).load([event_payload, second_event_payload]),
        pagination=PaginationSchema().load({"page": 1, "limit": 10, "total": 2, "totalPages": 1}),
    )


def _make_response(status_code: int = 200, body: Any = None) -> MagicMock:
    """Cria uma resposta HTTP falsa no formato de requests.Response"""
    response = MagicMock()
    response.status_code = status_code
    if isinstance(body, Exception):
        response.json.side_effect = body
    else:
        response.json.return_value = body
    return response


@pytest.fixture
def make_response():
    return _make_response


@pytest.fixture
def mock_session():
    session = MagicMock()
    session.headers = {}
    return session


@pytest.fixture
def api_client(mock_session):
    return EventApiClient(base_url="http://api.test/api/", timeout=5, session=mock_session)


@pytest.fixture
def config_file(tmp_path):
    """Arquivo de configuração para testes (sem rate limiting, sem espera entre tentativas)"""
    config_data = {
        "api": {"base_url": "http://api.test/api", "timeout": 5},
        "query": {"retry": 3, "retry_delay": 0, "stale_time": 60},
        "ui": {"page_size": 10},
        "server": {"host": "127.0.0.1", "port": 5055, "debug": False, "secret_key": "test-secret"},
        "security": {"enable_cors": True, "allowed_origins": "*", "rate_limiting": {"enabled": False}},
        "logging": {"level": "WARNING"},
    }
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump(config_data), encoding="utf-8")
    return path


@pytest.fixture
def test_config(config_file):
    return Config(str(config_file))


@pytest.fixture
def mock_client(events_page, event, venues, organizers):
    """Cliente da API falso com respostas padrão"""
    client = MagicMock(spec=EventApiClient)
    client.get_events.return_value = events_page
    client.get_event.return_value = event
    client.get_venues.return_value = venues
    client.get_organizers.return_value = organizers
    client.update_event.return_value = event
    client.create_event.return_value = event
    return client


@pytest.fixture
def query_cache():
    return QueryCache(stale_time=60, sleep=lambda seconds: None)


@pytest.fixture
def app(test_config, mock_client, query_cache):
    from event_manager.web import create_app

    flask_app = create_app(test_config, client=mock_client, cache=query_cache, configure_logging=False)
    flask_app.config['TESTING'] = True
    return flask_app


@pytest.fixture
def client(app):
    return app.test_client()
