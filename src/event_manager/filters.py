"""
Estado de filtro, ordenação e paginação da listagem de eventos.

Todas as funções são puras: recebem um EventFilters e devolvem um novo, sem
alterar o original. O estado viaja na query string da página usando os mesmos
nomes de parâmetro da API REST.
"""
from dataclasses import replace
from datetime import datetime
from typing import Iterable, List, Mapping, Optional, Any
from urllib.parse import urlencode

from .api_client import build_event_params
from .models import Event, EventFilters, SortField, SortOrder

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100

# Campos que contam como "filtro ativo" no indicador da barra de filtros
ACTIVE_FILTER_FIELDS = ("search", "organizer", "venue", "tags", "date_from", "date_to")


def default_filters(page_size: int = DEFAULT_PAGE_SIZE) -> EventFilters:
    """Estado inicial da listagem: primeira página, mais recentes primeiro."""
    return EventFilters(page=1, limit=page_size, sort_by=SortField.DATE, sort_order=SortOrder.DESC)


def clear_filters(page_size: int = DEFAULT_PAGE_SIZE) -> EventFilters:
    return EventFilters(page=1, limit=page_size)


def _parse_int(raw: Optional[str], default: int, minimum: int = 1, maximum: Optional[int] = None) -> int:
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return default
    if value < minimum:
        return minimum
    if maximum is not None and value > maximum:
        return maximum
    return value


def _parse_date(raw: Optional[str]) -> Optional[str]:
    if not raw:
        return None
    try:
        datetime.strptime(raw, "%Y-%m-%d")
    except ValueError:
        return None
    return raw


def _parse_enum(enum_cls, raw: Optional[str]):
    if not raw:
        return None
    try:
        return enum_cls(raw)
    except ValueError:
        return None


def filters_from_args(args: Mapping[str, Any], page_size: int = DEFAULT_PAGE_SIZE) -> EventFilters:
    """
    Lê o estado de filtro da query string da página.

    Args:
        args: Parâmetros da URL (ex: request.args)
        page_size: Tamanho de página padrão

    Returns:
        Estado de filtro; sem parâmetros, o estado padrão da listagem
    """
    if not any(args.get(key) for key in args):
        return default_filters(page_size)

    tags_raw = args.get("tags") or ""
    tags = [tag.strip() for tag in tags_raw.split(",") if tag.strip()]

    return EventFilters(
        search=(args.get("search") or "").strip() or None,
        organizer=args.get("organizer") or None,
        venue=args.get("venue") or None,
        tags=tags or None,
        date_from=_parse_date(args.get("dateFrom")),
        date_to=_parse_date(args.get("dateTo")),
        sort_by=_parse_enum(SortField, args.get("sortBy")),
        sort_order=_parse_enum(SortOrder, args.get("sortOrder")),
        page=_parse_int(args.get("page"), 1),
        limit=_parse_int(args.get("limit"), page_size, maximum=MAX_PAGE_SIZE),
    )


def filters_to_query_string(filters: EventFilters) -> str:
    """Monta a query string que reproduz o estado de filtro em um link."""
    return urlencode(build_event_params(filters))


def apply_search(filters: EventFilters, text: Optional[str]) -> EventFilters:
    return replace(filters, search=(text or "").strip() or None, page=1)


def apply_filter(filters: EventFilters, key: str, value: Any) -> EventFilters:
    """Define um filtro (valor vazio remove o filtro) e volta para a primeira página."""
    if key not in ACTIVE_FILTER_FIELDS:
        raise ValueError(f"Filtro desconhecido: {key}")
    if isinstance(value, (list, tuple)):
        value = list(value)
    return replace(filters, **{key: value or None, "page": 1})


def toggle_tag(filters: EventFilters, tag: str) -> EventFilters:
    current = list(filters.tags or [])
    if tag in current:
        current = [t for t in current if t != tag]
    else:
        current.append(tag)
    return apply_filter(filters, "tags", current)


def has_active_filters(filters: EventFilters) -> bool:
    return any(getattr(filters, name) for name in ACTIVE_FILTER_FIELDS)


def toggle_sort(filters: EventFilters, field: SortField) -> EventFilters:
    """
    Alterna a ordenação ao clicar no cabeçalho de uma coluna.

    Clicar novamente na coluna ascendente inverte para descendente; qualquer
    outro clique ordena ascendente pela coluna.
    """
    field = SortField(field)
    is_current_field = filters.sort_by == field
    if is_current_field and filters.sort_order == SortOrder.ASC:
        new_order = SortOrder.DESC
    else:
        new_order = SortOrder.ASC
    return replace(filters, sort_by=field, sort_order=new_order)


def sort_indicator(filters: EventFilters, field: SortField) -> str:
    """Retorna 'none', 'asc' ou 'desc' para o ícone do cabeçalho."""
    if filters.sort_by != SortField(field):
        return "none"
    return "desc" if filters.sort_order == SortOrder.DESC else "asc"


def with_page(filters: EventFilters, page: int) -> EventFilters:
    return replace(filters, page=max(1, int(page)))


def unique_names(items: Iterable[Any]) -> List[str]:
    """Nomes distintos, na ordem em que aparecem (locais ou organizadores)."""
    seen = {}
    for item in items:
        if item.name:
            seen.setdefault(item.name, None)
    return list(seen)


def unique_tags(events: Iterable[Event]) -> List[str]:
    seen = {}
    for event in events:
        for tag in event.tags:
            seen.setdefault(tag, None)
    return list(seen)
