"""
Aplicação web principal.
"""
import logging
from typing import Optional

from flask import Flask, url_for
from flask_cors import CORS

from ..api_client import EventApiClient
from ..config import Config
from ..filters import (
    clear_filters,
    filters_to_query_string,
    sort_indicator,
    toggle_sort,
    toggle_tag,
    with_page,
)
from ..logging_config import setup_logging
from ..query_cache import QueryCache
from .routes.event_routes import events_bp
from .routes.health_routes import health_bp
from ..formatting import format_datetime
from .utils import EXTENSION_KEY, error_page, limiter

logger = logging.getLogger("event_manager.web")


def _list_url(filters) -> str:
    """URL da listagem que reproduz o estado de filtro informado."""
    query = filters_to_query_string(filters)
    base = url_for('events.list_events')
    return f"{base}?{query}" if query else base


def create_app(
    config: Optional[Config] = None,
    client: Optional[EventApiClient] = None,
    cache: Optional[QueryCache] = None,
    configure_logging: bool = True,
) -> Flask:
    """
    Cria e configura a aplicação Flask.

    Args:
        config: Configuração carregada (padrão: config/config.yaml)
        client: Cliente da API (padrão: criado a partir da configuração)
        cache: Cache de consultas (padrão: criado a partir da configuração)
        configure_logging: Se True, configura o logging a partir da configuração

    Returns:
        Aplicação Flask configurada
    """
    config = config or Config()

    if configure_logging:
        logging_config = config.logging_config
        setup_logging(logging_config["level"], logging_config["file"])

    app = Flask(__name__, template_folder='../templates')

    # Configurações do servidor
    server_config = config.server_config
    app.config['SECRET_KEY'] = server_config['secret_key']
    app.config['DEBUG'] = server_config['debug']

    # Configurações de consulta e paginação
    query_config = config.query_config
    app.config['QUERY_RETRY'] = query_config['retry']
    app.config['QUERY_RETRY_DELAY'] = query_config['retry_delay']
    app.config['PAGE_SIZE'] = config.ui_config['page_size']

    # Configurações de segurança
    security_config = config.security_config
    rate_limiting = security_config['rate_limiting']
    app.config['RATELIMIT_ENABLED'] = rate_limiting['enabled']
    app.config['RATELIMIT_STORAGE_URI'] = 'memory://'
    app.config['MUTATION_RATE_LIMIT'] = f"{rate_limiting['mutations_per_minute']} per minute"

    if security_config['enable_cors']:
        CORS(app, resources={r"/api/*": {"origins": security_config['allowed_origins']}})

    limiter.init_app(app)

    app.extensions[EXTENSION_KEY] = {
        'config': config,
        'client': client or EventApiClient.from_config(config),
        'cache': cache or QueryCache.from_config(config),
    }

    app.register_blueprint(events_bp)
    app.register_blueprint(health_bp)

    # Helpers de template
    app.add_template_filter(format_datetime, 'datetime')
    app.jinja_env.globals.update(
        list_url=_list_url,
        toggle_sort=toggle_sort,
        toggle_tag=toggle_tag,
        with_page=with_page,
        sort_indicator=sort_indicator,
        clear_filters=clear_filters,
    )

    @app.errorhandler(404)
    def not_found(error):
        return error_page("Page not found", "The page you're looking for doesn't exist.", 404)

    @app.errorhandler(429)
    def too_many_requests(error):
        logger.warning(f"Limite de requisições excedido: {getattr(error, 'description', error)}")
        return error_page("Too many requests", "You're saving changes too quickly. Please wait a moment and try again.",
                          429)

    @app.errorhandler(500)
    def internal_error(error):
        logger.error(f"Erro interno ao processar requisição: {getattr(error, 'original_exception', error)}")
        return error_page("Something went wrong", "An unexpected error occurred. Please try again.", 500)

    logger.info(f"Aplicação configurada para a API em {config.api_config['base_url']}")
    return app
