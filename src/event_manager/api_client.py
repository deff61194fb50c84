"""
Cliente da API REST de eventos.
"""
from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping
from urllib.parse import quote

import requests
from marshmallow import ValidationError

from .config import DEFAULT_API_URL
from .exceptions import ApiError, InvalidIdError, NotFoundError
from .models import (
    Event,
    EventFilters,
    EventPayload,
    EventSchema,
    EventsPage,
    Organizer,
    OrganizerSchema,
    Pagination,
    PaginationSchema,
    Venue,
    VenueSchema,
)

logger = logging.getLogger(__name__)


def _enum_value(value: Any) -> Any:
    return getattr(value, "value", value)


def build_event_params(filters: EventFilters | None) -> list[tuple[str, str]]:
    """
    Converte o estado de filtro nos parâmetros de ``GET /events``.

    Só envia valores preenchidos, sempre na mesma ordem, para que o resultado
    também sirva de chave no cache.
    """
    if filters is None:
        return []
    params: list[tuple[str, str]] = []
    if filters.search:
        params.append(("search", filters.search))
    if filters.organizer:
        params.append(("organizer", filters.organizer))
    if filters.venue:
        params.append(("venue", filters.venue))
    if filters.tags:
        params.append(("tags", ",".join(filters.tags)))
    if filters.date_from:
        params.append(("dateFrom", filters.date_from))
    if filters.date_to:
        params.append(("dateTo", filters.date_to))
    if filters.sort_by:
        params.append(("sortBy", _enum_value(filters.sort_by)))
    if filters.sort_order:
        params.append(("sortOrder", _enum_value(filters.sort_order)))
    if filters.page:
        params.append(("page", str(filters.page)))
    if filters.limit:
        params.append(("limit", str(filters.limit)))
    return params


def _to_int_id(value: Any) -> int:
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        raise InvalidIdError("Invalid venue or organizer ID")


def _unwrap(body: Any) -> Any:
    """Retorna o conteúdo de ``data`` quando a API usa esse envelope."""
    if isinstance(body, dict) and body.get("data") is not None:
        return body["data"]
    return body


def _error_message(response: requests.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        message = body.get("error") or body.get("message")
        if message:
            return str(message)
    return f"Request failed with status code {response.status_code}"


class EventApiClient:
    """Acesso tipado aos endpoints de eventos, locais e organizadores."""

    def __init__(
        self,
        base_url: str = DEFAULT_API_URL,
        timeout: float = 30,
        token: str | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update(self._make_headers(token))

    @classmethod
    def from_config(cls, config: Any) -> "EventApiClient":
        api = config.api_config
        return cls(base_url=api["base_url"], timeout=api["timeout"], token=api["token"])

    @staticmethod
    def _make_headers(token: str | None) -> dict[str, str]:
        """Cabeçalhos das requisições, incluindo o token quando configurado."""
        headers: dict[str, str] = {"Content-Type": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def _request(
        self,
        method: str,
        path: str,
        params: Iterable[tuple[str, str]] | None = None,
        payload: Mapping[str, Any] | None = None,
    ) -> Any:
        """
        Executa uma requisição e devolve o corpo JSON.

        Args:
            method: Método HTTP
            path: Caminho relativo à URL base
            params: Parâmetros da query string
            payload: Corpo JSON da requisição

        Returns:
            Corpo da resposta decodificado (vazio para 204)

        Raises:
            ApiError: Falha de transporte, status de erro ou JSON inválido
            NotFoundError: Status 404
        """
        url = f"{self.base_url}{path}"
        logger.debug("%s %s params=%s", method.upper(), url, params)
        if payload is not None:
            logger.debug("Payload: %s", payload)
        try:
            response = self.session.request(
                method,
                url,
                params=list(params) if params else None,
                json=payload,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.warning("Falha de comunicação com a API em %s %s: %s", method.upper(), url, exc)
            raise ApiError(str(exc)) from exc

        if response.status_code >= 400:
            message = _error_message(response)
            logger.warning("API retornou %s para %s %s: %s", response.status_code, method.upper(), url, message)
            error_cls = NotFoundError if response.status_code == 404 else ApiError
            raise error_cls(message, status_code=response.status_code)

        if response.status_code == 204:
            return {}
        try:
            return response.json()
        except ValueError as exc:
            raise ApiError("Invalid JSON response from API", status_code=response.status_code) from exc

    @staticmethod
    def _load(schema, data: Any, many: bool = False) -> Any:
        try:
            return schema(many=many).load(data)
        except ValidationError as exc:
            logger.error("Resposta inesperada da API: %s", exc.messages)
            raise ApiError(f"Unexpected response from API: {exc.messages}") from exc

    def get_events(self, filters: EventFilters | None = None) -> EventsPage:
        body = self._request("get", "/events", params=build_event_params(filters))
        if not isinstance(body, dict):
            body = {"events": body}
        raw_events = body.get("events") or body.get("data") or []
        raw_pagination = body.get("pagination")
        events = self._load(EventSchema, raw_events, many=True)
        pagination = self._load(PaginationSchema, raw_pagination) if raw_pagination else Pagination()
        return EventsPage(events=events, pagination=pagination)

    def get_event(self, event_id: str) -> Event:
        body = self._request("get", f"/events/{quote(str(event_id), safe='')}")
        return self._load(EventSchema, _unwrap(body))

    def create_event(self, event: EventPayload) -> Event:
        """Cria o evento; IDs de local e organizador precisam ser inteiros."""
        data = event.to_dict()
        data["venue_id"] = _to_int_id(event.venue_id)
        data["organizer_id"] = _to_int_id(event.organizer_id)

        body = self._request("post", "/events", payload=data)
        created = self._load(EventSchema, _unwrap(body))
        logger.info("Evento criado: %s (%s)", created.title, created.id)
        return created

    def update_event(self, event_id: str, changes: EventPayload | Mapping[str, Any]) -> Event:
        data = dict(changes.to_dict() if isinstance(changes, EventPayload) else changes)
        for key in ("venue_id", "organizer_id"):
            if data.get(key):
                data[key] = _to_int_id(data[key])

        body = self._request("put", f"/events/{quote(str(event_id), safe='')}", payload=data)
        updated = self._load(EventSchema, _unwrap(body))
        logger.info("Evento atualizado: %s (%s)", updated.title, updated.id)
        return updated

    def get_venues(self) -> list[Venue]:
        body = self._request("get", "/venues")
        return self._load(VenueSchema, _unwrap(body) or [], many=True)

    def get_organizers(self) -> list[Organizer]:
        body = self._request("get", "/organizers")
        return self._load(OrganizerSchema, _unwrap(body) or [], many=True)
