from typing import List, Optional

import typer
from rich.table import Table

from .api_client import EventApiClient
from .config import Config
from .exceptions import ApiError
from .formatting import format_datetime
from .logging_config import setup_logging
from .models import EventFilters, SortField, SortOrder
from .utils.ui import (
    error as ui_error,
    get_console,
    info as ui_info,
    section as ui_section,
    success as ui_success,
    warn as ui_warn,
)

# Criação da aplicação Typer
app = typer.Typer(help="Event management front end")

DEFAULT_CONFIG_FILE = "config/config.yaml"


@app.callback()
def _main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Exibe logs de depuração")) -> None:
    """Configura o logging antes de qualquer comando."""
    setup_logging("DEBUG" if verbose else "WARNING")


def _get_client(config_file: str) -> EventApiClient:
    return EventApiClient.from_config(Config(config_file))


def _fail(e: ApiError) -> None:
    ui_error(f"Erro ao consultar a API: {e}")
    raise typer.Exit(code=1)


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, help="Host do servidor (padrão: config)"),
    port: Optional[int] = typer.Option(None, help="Porta do servidor (padrão: config)"),
    debug: Optional[bool] = typer.Option(None, "--debug/--no-debug", help="Modo debug do Flask"),
    config_file: str = typer.Option(DEFAULT_CONFIG_FILE, "--config", "-c", help="Path to config file"),
):
    """Run the web front end with the development server."""
    from .web import create_app

    config = Config(config_file)
    server = config.server_config
    web_app = create_app(config)
    bind_host = host or server["host"]
    bind_port = port or server["port"]
    ui_success(f"Servidor em http://{bind_host}:{bind_port} (API: {config.api_config['base_url']})")
    web_app.run(
        host=bind_host,
        port=bind_port,
        debug=server["debug"] if debug is None else debug,
    )


@app.command("list")
def list_events(
    search: Optional[str] = typer.Option(None, "--search", "-s", help="Texto de busca"),
    organizer: Optional[str] = typer.Option(None, help="Nome do organizador"),
    venue: Optional[str] = typer.Option(None, help="Nome do local"),
    tag: Optional[List[str]] = typer.Option(None, "--tag", "-t", help="Tag (pode ser repetida)"),
    date_from: Optional[str] = typer.Option(None, "--date-from", help="Data inicial (YYYY-MM-DD)"),
    date_to: Optional[str] = typer.Option(None, "--date-to", help="Data final (YYYY-MM-DD)"),
    sort_by: SortField = typer.Option(SortField.DATE, "--sort-by", help="Campo de ordenação"),
    sort_order: SortOrder = typer.Option(SortOrder.DESC, "--sort-order", help="Direção da ordenação"),
    page: int = typer.Option(1, min=1, help="Página"),
    limit: int = typer.Option(10, min=1, max=100, help="Eventos por página"),
    config_file: str = typer.Option(DEFAULT_CONFIG_FILE, "--config", "-c", help="Path to config file"),
):
    """List a page of events."""
    filters = EventFilters(
        search=search,
        organizer=organizer,
        venue=venue,
        tags=list(tag) if tag else None,
        date_from=date_from,
        date_to=date_to,
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        limit=limit,
    )
    try:
        result = _get_client(config_file).get_events(filters)
    except ApiError as e:
        _fail(e)

    table = Table(title="Events")
    table.add_column("ID", style="dim")
    table.add_column("Title", style="bold")
    table.add_column("Date")
    table.add_column("Venue")
    table.add_column("Organizer")
    table.add_column("Tags")
    for event in result.events:
        table.add_row(
            event.id,
            event.title,
            format_datetime(event.date),
            event.venue.name if event.venue else "",
            event.organizer.name if event.organizer else "",
            ", ".join(event.tags),
        )

    console = get_console()
    if result.events:
        console.print(table)
    else:
        ui_warn("No events found")
    pagination = result.pagination
    ui_info(f"Page {pagination.page} of {pagination.total_pages} ({pagination.total} events)")


@app.command()
def show(
    event_id: str = typer.Argument(..., help="ID do evento"),
    config_file: str = typer.Option(DEFAULT_CONFIG_FILE, "--config", "-c", help="Path to config file"),
):
    """Show one event."""
    try:
        event = _get_client(config_file).get_event(event_id)
    except ApiError as e:
        _fail(e)

    console = get_console()
    ui_section(event.title)
    console.print(event.description)
    console.print(f"[bold]Date:[/bold] {format_datetime(event.date, 'long')} {format_datetime(event.date, 'time')}")
    if event.venue:
        console.print(f"[bold]Venue:[/bold] {event.venue.name} ({event.venue.location})")
    if event.organizer:
        console.print(f"[bold]Organizer:[/bold] {event.organizer.name} ({event.organizer.contact})")
    if event.tags:
        console.print(f"[bold]Tags:[/bold] {', '.join(event.tags)}")
    if event.created_at:
        console.print(f"[dim]Event created: {format_datetime(event.created_at, 'created')}[/dim]")


@app.command()
def venues(
    config_file: str = typer.Option(DEFAULT_CONFIG_FILE, "--config", "-c", help="Path to config file"),
):
    """List venues."""
    try:
        items = _get_client(config_file).get_venues()
    except ApiError as e:
        _fail(e)

    table = Table(title="Venues")
    table.add_column("ID", style="dim")
    table.add_column("Name", style="bold")
    table.add_column("Location")
    for venue in items:
        table.add_row(venue.id, venue.name, venue.location)
    get_console().print(table)


@app.command()
def organizers(
    config_file: str = typer.Option(DEFAULT_CONFIG_FILE, "--config", "-c", help="Path to config file"),
):
    """List organizers."""
    try:
        items = _get_client(config_file).get_organizers()
    except ApiError as e:
        _fail(e)

    table = Table(title="Organizers")
    table.add_column("ID", style="dim")
    table.add_column("Name", style="bold")
    table.add_column("Contact")
    for organizer in items:
        table.add_row(organizer.id, organizer.name, organizer.contact)
    get_console().print(table)


if __name__ == "__main__":
    app()
