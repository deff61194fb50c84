"""
Formulário de criação e edição de eventos.

Mantém o estado do formulário entre requisições, aplica as regras de
preenchimento antes do envio e converte o formulário no payload da API.
"""
from dataclasses import dataclass, field
from datetime import timezone
from typing import Any, Dict, Iterable, List

from marshmallow import Schema, fields, validate

from .models import Event, EventPayload, Organizer, Venue

FORM_DATE_FORMAT = "%Y-%m-%dT%H:%M"


@dataclass
class EventForm:
    title: str = ""
    description: str = ""
    date: str = ""
    venue_id: str = ""
    organizer_id: str = ""
    tags: List[str] = field(default_factory=list)

    def to_payload(self) -> EventPayload:
        return EventPayload(
            title=self.title.strip(),
            description=self.description.strip(),
            date=self.date,
            venue_id=self.venue_id,
            organizer_id=self.organizer_id,
            tags=list(self.tags),
        )


class EventFormSchema(Schema):
    """Regras de preenchimento obrigatório do formulário"""
    title = fields.String(
        required=True,
        validate=validate.Length(min=1, error="Title is required"),
        error_messages={"required": "Title is required"},
    )
    description = fields.String(
        required=True,
        validate=validate.Length(min=1, error="Description is required"),
        error_messages={"required": "Description is required"},
    )
    date = fields.String(
        required=True,
        validate=validate.Length(min=1, error="Date is required"),
        error_messages={"required": "Date is required"},
    )
    venue_id = fields.String(
        required=True,
        validate=validate.Length(min=1, error="Venue is required"),
        error_messages={"required": "Venue is required"},
    )
    organizer_id = fields.String(
        required=True,
        validate=validate.Length(min=1, error="Organizer is required"),
        error_messages={"required": "Organizer is required"},
    )


def form_from_event(event: Event) -> EventForm:
    """Preenche o formulário de edição com os dados atuais do evento."""
    date_value = ""
    if event.date is not None:
        date = event.date
        if date.tzinfo is not None:
            date = date.astimezone(timezone.utc)
        date_value = date.strftime(FORM_DATE_FORMAT)

    return EventForm(
        title=event.title,
        description=event.description,
        date=date_value,
        venue_id=str(event.venue_id),
        organizer_id=str(event.organizer_id),
        tags=list(event.tags or []),
    )


def form_from_request(form_data: Any) -> EventForm:
    """
    Lê o formulário HTML enviado.

    Args:
        form_data: MultiDict do Flask (request.form); as tags vêm como campos repetidos

    Returns:
        EventForm com os valores enviados
    """
    if hasattr(form_data, "getlist"):
        raw_tags = form_data.getlist("tags")
    else:
        raw_tags = form_data.get("tags") or []

    tags: List[str] = []
    for tag in raw_tags:
        tags = add_tag(tags, tag)

    return EventForm(
        title=form_data.get("title", ""),
        description=form_data.get("description", ""),
        date=form_data.get("date", ""),
        venue_id=form_data.get("venue_id", ""),
        organizer_id=form_data.get("organizer_id", ""),
        tags=tags,
    )


def validate_event_form(form: EventForm, venues: Iterable[Venue], organizers: Iterable[Organizer]) -> Dict[str, str]:
    """
    Valida o formulário contra as regras de preenchimento e as listas de referência.

    Args:
        form: Estado atual do formulário
        venues: Locais obtidos da API
        organizers: Organizadores obtidos da API

    Returns:
        Dicionário campo -> mensagem de erro (vazio se o formulário é válido)
    """
    data = {
        "title": form.title.strip(),
        "description": form.description.strip(),
        "date": form.date,
        "venue_id": form.venue_id,
        "organizer_id": form.organizer_id,
    }
    messages = EventFormSchema().validate(data)
    errors = {name: problems[0] for name, problems in messages.items()}

    if "venue_id" not in errors:
        if not any(str(venue.id) == form.venue_id for venue in venues):
            errors["venue_id"] = "Please select a valid venue"

    if "organizer_id" not in errors:
        if not any(str(organizer.id) == form.organizer_id for organizer in organizers):
            errors["organizer_id"] = "Please select a valid organizer"

    return errors


def add_tag(tags: List[str], tag: str) -> List[str]:
    """Acrescenta a tag (sem espaços nas pontas) se não for vazia nem repetida."""
    tag = (tag or "").strip()
    if not tag or tag in tags:
        return list(tags)
    return [*tags, tag]


def remove_tag(tags: List[str], tag: str) -> List[str]:
    return [t for t in tags if t != tag]
