"""
Páginas de listagem, detalhe, criação e edição de eventos.
"""
import logging

from flask import Blueprint, current_app, flash, redirect, render_template, request, url_for

from ...api_client import build_event_params
from ...exceptions import ApiError, InvalidIdError
from ...filters import (
    filters_from_args,
    has_active_filters,
    unique_names,
    unique_tags,
)
from ...forms import EventForm, add_tag, form_from_event, form_from_request, remove_tag, validate_event_form
from ...pagination import page_window
from ..utils import (
    cached_query,
    error_page,
    get_cache,
    get_client,
    is_tag_action,
    limiter,
    mutation_rate_limit,
    optional_query,
)

logger = logging.getLogger("event_manager.web")

events_bp = Blueprint('events', __name__)


def _load_reference_lists(retry: bool = False):
    client = get_client()
    venues = optional_query(("venues",), client.get_venues, retry=retry)
    organizers = optional_query(("organizers",), client.get_organizers, retry=retry)
    return venues, organizers


def _render_form(form: EventForm, errors: dict, venues, organizers, event_id=None, status_code: int = 200):
    return render_template(
        "events/form.html",
        form=form,
        errors=errors,
        venues=venues,
        organizers=organizers,
        event_id=event_id,
        editing=event_id is not None,
    ), status_code


def _handle_tag_actions(form: EventForm):
    """
    Aplica as ações de tag do formulário.

    Returns:
        True se a requisição era uma ação de tag (sem envio para a API)
    """
    if "remove_tag" in request.form:
        form.tags = remove_tag(form.tags, request.form["remove_tag"])
        return True
    if request.form.get("action") == "add_tag":
        form.tags = add_tag(form.tags, request.form.get("new_tag", ""))
        return True
    return False


def _submit_error(error: Exception, default_message: str):
    message = str(error) or default_message
    if isinstance(error, InvalidIdError):
        return message, 400
    if isinstance(error, ApiError) and error.is_client_error:
        return message, 400
    return message, 502


@events_bp.route('/')
def list_events():
    """Lista de eventos com filtros, ordenação e paginação"""
    filters = filters_from_args(request.args, current_app.config["PAGE_SIZE"])
    client = get_client()

    try:
        events_page = cached_query(
            ("events", tuple(build_event_params(filters))),
            lambda: client.get_events(filters),
            retry=True,
        )
    except ApiError as e:
        logger.error(f"Erro ao carregar eventos: {e}")
        return error_page("Something went wrong", str(e), 502)

    venues, organizers = _load_reference_lists(retry=True)

    return render_template(
        "events/list.html",
        filters=filters,
        events=events_page.events,
        pagination=page_window(events_page.pagination),
        organizer_names=unique_names(organizers),
        venue_names=unique_names(venues),
        tags=unique_tags(events_page.events),
        has_active_filters=has_active_filters(filters),
    )


@events_bp.route('/events/new', methods=['GET', 'POST'])
@limiter.limit(mutation_rate_limit, methods=['post'], exempt_when=is_tag_action)
def create_event():
    """Formulário de criação de evento"""
    venues, organizers = _load_reference_lists()

    if request.method == 'GET':
        return _render_form(EventForm(), {}, venues, organizers)

    form = form_from_request(request.form)
    if _handle_tag_actions(form):
        return _render_form(form, {}, venues, organizers)

    errors = validate_event_form(form, venues, organizers)
    if errors:
        return _render_form(form, errors, venues, organizers, status_code=400)

    try:
        event = get_client().create_event(form.to_payload())
    except (ApiError, InvalidIdError) as e:
        logger.error(f"Falha ao criar evento: {e}")
        message, status_code = _submit_error(e, "Failed to create event. Please try again.")
        return _render_form(form, {"submit": message}, venues, organizers, status_code=status_code)

    get_cache().invalidate(("events",))
    flash("Event created successfully")
    return redirect(url_for('events.event_detail', event_id=event.id))


@events_bp.route('/events/<event_id>')
def event_detail(event_id: str):
    """Página de detalhe do evento"""
    try:
        event = cached_query(("event", event_id), lambda: get_client().get_event(event_id))
    except ApiError as e:
        logger.warning(f"Evento {event_id} não carregado: {e}")
        return error_page("Event not found", "The event you're looking for doesn't exist.", 404)

    return render_template("events/detail.html", event=event)


@events_bp.route('/events/<event_id>/edit', methods=['GET', 'POST'])
@limiter.limit(mutation_rate_limit, methods=['post'], exempt_when=is_tag_action)
def edit_event(event_id: str):
    """Formulário de edição de evento"""
    try:
        event = cached_query(("event", event_id), lambda: get_client().get_event(event_id))
    except ApiError as e:
        logger.warning(f"Evento {event_id} não carregado para edição: {e}")
        return error_page("Event not found", "The event you're trying to edit doesn't exist.", 404)

    venues, organizers = _load_reference_lists()

    if request.method == 'GET':
        return _render_form(form_from_event(event), {}, venues, organizers, event_id=event_id)

    form = form_from_request(request.form)
    if _handle_tag_actions(form):
        return _render_form(form, {}, venues, organizers, event_id=event_id)

    errors = validate_event_form(form, venues, organizers)
    if errors:
        return _render_form(form, errors, venues, organizers, event_id=event_id, status_code=400)

    try:
        get_client().update_event(event_id, form.to_payload())
    except (ApiError, InvalidIdError) as e:
        logger.error(f"Falha ao atualizar evento {event_id}: {e}")
        message, status_code = _submit_error(e, "Failed to update event. Please try again.")
        return _render_form(form, {"submit": message}, venues, organizers, event_id=event_id,
                            status_code=status_code)

    cache = get_cache()
    cache.invalidate(("events",))
    cache.invalidate(("event", event_id))
    flash("Event updated successfully")
    return redirect(url_for('events.event_detail', event_id=event_id))
