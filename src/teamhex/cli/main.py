"""Typer CLI application for Team Hex."""

from __future__ import annotations

import json
import signal
import threading
from pathlib import Path
from types import FrameType

import typer
from rich.console import Console
from rich.table import Table

from teamhex import __version__
from teamhex.catalog.errors import LoadError, LookupFailedError
from teamhex.catalog.index import normalize_key
from teamhex.catalog.loader import VARIANT_OPTIONS, VariantOption
from teamhex.catalog.model import CatalogHolder, TeamCatalog
from teamhex.catalog.schema import AnyTeam, Team
from teamhex.config import ServerConfig, parse_addr
from teamhex.utils.logger import configure_logging, get_logger, uvicorn_log_level

app = typer.Typer(help="Team Hex sports team colors")
console = Console()
logger = get_logger("cli")

_FILE_OPTION = typer.Option(
    Path("teamhex.json"),
    "--file",
    "-f",
    envvar="TEAMHEX_FILE",
    help="Path to JSON colors file",
)
_VARIANT_OPTION = typer.Option(
    "auto",
    "--variant",
    envvar="TEAMHEX_VARIANT",
    help="Data file layout: auto | eras | classic",
)


@app.callback()
def _callback() -> None:
    """Team Hex CLI: serve and query team color palettes."""


def _check_variant(variant: str) -> VariantOption:
    if variant not in VARIANT_OPTIONS:
        console.print(f"[red]Error: --variant must be one of: {', '.join(VARIANT_OPTIONS)}[/red]")
        raise typer.Exit(code=1)
    return variant  # type: ignore[return-value]


def _load(file: Path, variant: str) -> TeamCatalog:
    """Load a catalog or exit with code 1."""
    try:
        return TeamCatalog.from_file(file, variant=_check_variant(variant))
    except LoadError as exc:
        console.print(f"[red]Error: could not load {file}: {exc}[/red]")
        raise typer.Exit(code=1) from exc


def _colors_text(team: AnyTeam) -> str:
    if isinstance(team, Team):
        if not team.eras:
            return ""
        latest = max(team.eras, key=lambda era: era.year)
        return f"{latest.year}: " + ", ".join(f"{c.name} {c.hex}" for c in latest.colors)
    return ", ".join(team.colors)


def _teams_table(title: str, teams: tuple[AnyTeam, ...] | list[AnyTeam]) -> Table:
    table = Table(title=title)
    table.add_column("Name")
    table.add_column("League")
    table.add_column("Colors")
    table.add_column("Link")
    for team in teams:
        table.add_row(team.name, team.league, _colors_text(team), team.link)
    return table


@app.command()
def serve(
    file: Path | None = typer.Option(None, "--file", "-f", help="Path to JSON colors file [env: TEAMHEX_FILE]"),
    addr: str | None = typer.Option(None, "--addr", help="Address to listen on, e.g. :5000"),
    variant: str | None = typer.Option(None, "--variant", help="Data file layout: auto | eras | classic"),
    log_level: str | None = typer.Option(None, "--log-level", help="QUIET | NORMAL | VERBOSE | DEBUG"),
) -> None:
    """Load the colors file and serve the HTTP API."""
    host = port = None
    if addr is not None:
        try:
            host, port = parse_addr(addr)
        except ValueError as exc:
            console.print(f"[red]Error: {exc}[/red]")
            raise typer.Exit(code=1) from exc

    try:
        config = ServerConfig.from_env(
            data_file=file,
            host=host,
            port=port,
            variant=variant,
            log_level=log_level,
        )
    except ValueError as exc:
        console.print(f"[red]Error: invalid configuration: {exc}[/red]")
        raise typer.Exit(code=1) from exc

    configure_logging(config.log_level)

    try:
        holder = CatalogHolder.from_file(config.data_file, variant=config.variant)
    except LoadError as exc:
        logger.critical("could not load data file: %s", exc)
        raise typer.Exit(code=1) from exc

    _install_reload_handler(holder)

    import uvicorn

    from teamhex.api.app import create_app

    logger.info("Server started on %s", config.addr)
    uvicorn.run(
        create_app(holder, config.version),
        host=config.host,
        port=config.port,
        log_level=uvicorn_log_level(config.log_level),
    )


def _reload(holder: CatalogHolder) -> None:
    try:
        holder.reload()
    except LoadError as exc:
        logger.error("Reload of %s failed, keeping current data: %s", holder.path, exc)


def _install_reload_handler(holder: CatalogHolder) -> None:
    """Reload *holder* on SIGHUP.

    The handler only starts a worker thread.  The event loop keeps serving
    while the file is read, and the holder's lock queues overlapping
    reloads.
    """
    if not hasattr(signal, "SIGHUP"):
        return

    def _on_sighup(signum: int, frame: FrameType | None) -> None:
        threading.Thread(target=_reload, args=(holder,), name="teamhex-reload", daemon=True).start()

    signal.signal(signal.SIGHUP, _on_sighup)


@app.command()
def leagues(file: Path = _FILE_OPTION, variant: str = _VARIANT_OPTION) -> None:
    """List leagues and their links."""
    catalog = _load(file, variant)
    table = Table(title="Leagues")
    table.add_column("League")
    table.add_column("Link")
    for record in catalog.leagues():
        table.add_row(record.league, record.link)
    console.print(table)


@app.command()
def teams(
    file: Path = _FILE_OPTION,
    variant: str = _VARIANT_OPTION,
    search: str | None = typer.Option(None, "--search", "-s", help="Only teams whose name contains this text"),
    league: str | None = typer.Option(None, "--league", "-l", help="Only teams in this league"),
) -> None:
    """List teams, optionally filtered by league or name."""
    catalog = _load(file, variant)
    if league is not None:
        try:
            selected = catalog.teams_by_league(league)
        except LookupFailedError as exc:
            console.print(f"[red]Error: {exc}[/red]")
            raise typer.Exit(code=1) from exc
        if search:
            league_key = normalize_key(league)
            selected = tuple(team for team in catalog.search(search) if normalize_key(team.league) == league_key)
    elif search:
        selected = tuple(catalog.search(search))
    else:
        selected = catalog.all_teams()

    if not selected:
        console.print("[yellow]No teams found.[/yellow]")
        return
    console.print(_teams_table(f"Teams ({len(selected)})", selected))


@app.command()
def team(
    league: str = typer.Argument(..., help="League name (any case)"),
    name: str = typer.Argument(..., help="Team name (any case)"),
    file: Path = _FILE_OPTION,
    variant: str = _VARIANT_OPTION,
) -> None:
    """Print one team as JSON."""
    catalog = _load(file, variant)
    try:
        found = catalog.team_by_league_and_name(league, name)
    except LookupFailedError as exc:
        console.print(f"[red]Error: {exc}[/red]")
        raise typer.Exit(code=1) from exc
    typer.echo(json.dumps(found.to_payload(), indent=2, ensure_ascii=False))


@app.command()
def check(file: Path = _FILE_OPTION, variant: str = _VARIANT_OPTION) -> None:
    """Validate a colors file and summarise its contents."""
    catalog = _load(file, variant)
    console.print(
        f"[green]OK[/green] {file}: {len(catalog.all_teams())} teams, "
        f"{len(catalog.leagues())} leagues, layout {catalog.schema_variant}, "
        f"generated {catalog.generation_timestamp()}"
    )


@app.command()
def version() -> None:
    """Print the package version."""
    typer.echo(__version__)
