"""
Utilitários da aplicação web.
"""
import logging
from typing import Any, Callable, List, Tuple

from flask import current_app, render_template, request
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

from ..api_client import EventApiClient
from ..exceptions import ApiError
from ..query_cache import QueryCache

logger = logging.getLogger("event_manager.web")

EXTENSION_KEY = "event_manager"

# Inicializado em create_app via init_app
limiter = Limiter(key_func=get_remote_address)


def mutation_rate_limit() -> str:
    return current_app.config.get("MUTATION_RATE_LIMIT", "30 per minute")


def is_tag_action() -> bool:
    """True quando o POST do formulário apenas adiciona ou remove uma tag."""
    return request.form.get("action") == "add_tag" or "remove_tag" in request.form


def get_client() -> EventApiClient:
    return current_app.extensions[EXTENSION_KEY]["client"]


def get_cache() -> QueryCache:
    return current_app.extensions[EXTENSION_KEY]["cache"]


def cached_query(key: Tuple, fn: Callable[[], Any], retry: bool = False) -> Any:
    """
    Executa uma consulta através do cache da aplicação.

    Args:
        key: Chave da consulta no cache
        fn: Função que consulta a API
        retry: Se True, usa as tentativas configuradas para a listagem

    Returns:
        Resultado da consulta
    """
    if retry:
        return get_cache().fetch(
            key,
            fn,
            retry=current_app.config["QUERY_RETRY"],
            retry_delay=current_app.config["QUERY_RETRY_DELAY"],
        )
    return get_cache().fetch(key, fn)


def optional_query(key: Tuple, fn: Callable[[], List[Any]], retry: bool = False) -> List[Any]:
    """Consulta listas de referência; uma falha resulta em lista vazia."""
    try:
        return cached_query(key, fn, retry=retry)
    except ApiError as e:
        logger.warning(f"Não foi possível carregar {key[0]}: {e}")
        return []


def error_page(heading: str, message: str, status_code: int):
    """
    Renderiza a página de erro padronizada.

    Args:
        heading: Título exibido
        message: Mensagem de erro
        status_code: Código de status HTTP

    Returns:
        Tupla (HTML, status) para o Flask
    """
    return render_template(
        "error.html",
        title=heading,
        heading=heading,
        error_message=message,
    ), status_code
