"""
Modelos de dados do front end de eventos.

Os registros são cópias efêmeras dos dados mantidos pela API REST. Os schemas
marshmallow convertem os payloads JSON da API nos dataclasses abaixo.
"""
from dataclasses import dataclass, field, asdict
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional, Any

from marshmallow import Schema, fields, EXCLUDE, pre_load, post_load


class SortField(str, Enum):
    TITLE = "title"
    DATE = "date"
    VENUE = "venue"
    ORGANIZER = "organizer"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass
class Venue:
    """Local onde o evento acontece"""
    id: str
    name: str
    location: str = ""


@dataclass
class Organizer:
    """Responsável pelo evento"""
    id: str
    name: str
    contact: str = ""


@dataclass
class Event:
    id: str
    title: str
    description: str = ""
    date: Optional[datetime] = None
    venue_id: str = ""
    organizer_id: str = ""
    created_at: Optional[datetime] = None
    venue: Optional[Venue] = None
    organizer: Optional[Organizer] = None
    tags: List[str] = field(default_factory=list)


@dataclass
class EventPayload:
    """Corpo das requisições de criação e atualização de eventos"""
    title: str
    description: str
    date: str
    venue_id: str
    organizer_id: str
    tags: Optional[List[str]] = None

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        if data["tags"] is None:
            data.pop("tags")
        return data


@dataclass
class Pagination:
    page: int = 1
    limit: int = 10
    total: int = 0
    total_pages: int = 0


@dataclass
class EventsPage:
    """Resposta da listagem de eventos"""
    events: List[Event]
    pagination: Pagination


@dataclass
class EventFilters:
    """Estado de filtro, ordenação e paginação da listagem"""
    search: Optional[str] = None
    organizer: Optional[str] = None
    venue: Optional[str] = None
    tags: Optional[List[str]] = None
    date_from: Optional[str] = None
    date_to: Optional[str] = None
    sort_by: Optional[SortField] = None
    sort_order: Optional[SortOrder] = None
    page: Optional[int] = None
    limit: Optional[int] = None


class IdField(fields.Field):
    """Aceita IDs numéricos ou textuais e normaliza para string."""

    def _deserialize(self, value, attr, data, **kwargs):
        if value is None:
            return ""
        return str(value)


class VenueSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    id = IdField(required=True)
    name = fields.String(load_default="")
    location = fields.String(load_default="", allow_none=True)

    @post_load
    def make_venue(self, data, **kwargs):
        data["location"] = data.get("location") or ""
        return Venue(**data)


class OrganizerSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    id = IdField(required=True)
    name = fields.String(load_default="")
    contact = fields.String(load_default="", allow_none=True)

    @post_load
    def make_organizer(self, data, **kwargs):
        data["contact"] = data.get("contact") or ""
        return Organizer(**data)


class EventSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    id = IdField(required=True)
    title = fields.String(load_default="")
    description = fields.String(load_default="", allow_none=True)
    date = fields.DateTime(load_default=None, allow_none=True)
    venue_id = IdField(load_default="", allow_none=True)
    organizer_id = IdField(load_default="", allow_none=True)
    created_at = fields.DateTime(load_default=None, allow_none=True)
    venue = fields.Nested(VenueSchema, load_default=None, allow_none=True)
    organizer = fields.Nested(OrganizerSchema, load_default=None, allow_none=True)
    tags = fields.List(fields.String(), load_default=list, allow_none=True)

    @post_load
    def make_event(self, data, **kwargs):
        # venue_id/organizer_id podem vir apenas dentro dos objetos aninhados
        if not data.get("venue_id") and data.get("venue") is not None:
            data["venue_id"] = data["venue"].id
        if not data.get("organizer_id") and data.get("organizer") is not None:
            data["organizer_id"] = data["organizer"].id
        data["venue_id"] = data.get("venue_id") or ""
        data["organizer_id"] = data.get("organizer_id") or ""
        data["description"] = data.get("description") or ""
        data["tags"] = data.get("tags") or []
        return Event(**data)


class PaginationSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    page = fields.Integer(load_default=1)
    limit = fields.Integer(load_default=10)
    total = fields.Integer(load_default=0)
    total_pages = fields.Integer(load_default=0)

    @pre_load
    def accept_camel_case(self, data, **kwargs):
        if isinstance(data, dict) and "totalPages" in data and "total_pages" not in data:
            data = dict(data)
            data["total_pages"] = data.pop("totalPages")
        return data

    @post_load
    def make_pagination(self, data, **kwargs):
        return Pagination(**data)
