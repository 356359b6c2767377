from __future__ import annotations

import logging
from contextlib import contextmanager
from enum import Enum
from pathlib import Path
from typing import Iterator, Optional, Sequence

import typer
from typing_extensions import Annotated

from .container import Container
from ..config.urls import get_crate_url
from ..core.database import AdvisoryDatabase
from ..core.domain.models import Advisory
from ..core.errors import RustsecError
from ..core.usecases.query_advisories import QueryAdvisoriesUseCase


app = typer.Typer(add_completion=False, help="RustSec advisory database client")


class LogLevel(str, Enum):
    OFF = "OFF"
    CRITICAL = "CRITICAL"
    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"
    DEBUG = "DEBUG"


@app.callback()
def main(
    ctx: typer.Context,
    log_level: Annotated[
        Optional[LogLevel],
        typer.Option("--log-level", help="Set log level (OFF, CRITICAL, ERROR, WARNING, INFO, DEBUG). Default: OFF"),
    ] = None,
    database_path: Annotated[
        Optional[Path],
        typer.Option("--db", help="Read advisories from a local Advisories.toml instead of fetching"),
    ] = None,
) -> None:
    """Root command callback: configure logging and the document source."""
    ctx.obj = {"database_path": database_path}

    if log_level in (None, LogLevel.OFF):
        return

    level = logging.getLevelNamesMapping().get(log_level.value, logging.INFO)
    package_name = __package__.split(".", 1)[0] if __package__ else "rustsec"
    logger = logging.getLogger(package_name)

    has_stream = any(isinstance(h, logging.StreamHandler) for h in logger.handlers)
    if not has_stream:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s | %(name)s | %(message)s"))
        logger.addHandler(handler)

    logger.propagate = False
    logger.setLevel(level)


@contextmanager
def provide_container(ctx: typer.Context) -> Iterator[Container]:
    container = Container()
    database_path = (ctx.obj or {}).get("database_path")
    if database_path is not None:
        container.config.database_path.from_value(database_path)
    container.init_resources()
    try:
        yield container
    finally:
        container.shutdown_resources()


def _load(container: Container) -> AdvisoryDatabase:
    try:
        return container.load_uc().execute()
    except RustsecError as e:
        typer.echo(f"Advisory data unavailable: {e}", err=True)
        raise typer.Exit(code=1)


@app.command(help="Fetch the advisory database and print a summary.")
def fetch(ctx: typer.Context) -> None:
    with provide_container(ctx) as container:
        db = _load(container)
        typer.echo(f"Loaded {len(db)} advisories for {len(db.packages())} packages")


@app.command(help="Show one advisory by id (e.g. RUSTSEC-2017-0001).")
def show(
    ctx: typer.Context,
    id: str = typer.Argument(..., help="Advisory identifier (e.g., RUSTSEC-YYYY-NNNN)"),
) -> None:
    with provide_container(ctx) as container:
        db = _load(container)
        advisory = db.find(id)
        if advisory is None:
            typer.echo("Not found")
            raise typer.Exit(code=1)
        _print_detail(advisory)


@app.command(help="List advisories for a crate, in database order.")
def package(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Crate name"),
    include_obsolete: bool = typer.Option(False, "--all", help="Include obsolete advisories"),
) -> None:
    with provide_container(ctx) as container:
        db = _load(container)
        advisories = QueryAdvisoriesUseCase(db).list(package=name, include_obsolete=include_obsolete)
        if not advisories:
            typer.echo(f"No advisories for {name} ({get_crate_url(name)})")
            return
        _print_list(advisories)


@app.command("list", help="List advisories. Columns: ID, package, date, severity, title.")
def list_cmd(
    ctx: typer.Context,
    limit: int = typer.Option(20, help="Limit number of results (default: 20)"),
    filter: str | None = typer.Option(None, "--filter", "-f", help="Filter expression (e.g., 'severity == \"CRITICAL\"', 'year >= 2023')"),
    include_obsolete: bool = typer.Option(False, "--all", help="Include obsolete advisories"),
) -> None:
    with provide_container(ctx) as container:
        db = _load(container)
        try:
            advisories = QueryAdvisoriesUseCase(db).list(include_obsolete=include_obsolete, filter_expr=filter, limit=limit)
        except ValueError as e:
            typer.echo(f"Filter error: {e}", err=True)
            raise typer.Exit(code=1)
        _print_list(advisories)


@app.command(help="Delete the cached advisory document.")
def clear(ctx: typer.Context) -> None:
    with provide_container(ctx) as container:
        container.clear_cache_uc().execute()
        typer.echo("Cache cleared")


def _print_list(advisories: Sequence[Advisory]) -> None:
    print(f"{'ID':18} {'Package':24} {'Date':10} {'Severity':9} Title")
    for a in advisories:
        sev = a.severity.name if a.severity else "-"
        if a.informational:
            sev = a.informational.value
        print(f"{str(a.id):18} {a.package:24} {a.date.isoformat():10} {sev:9} {a.title}")


def _print_detail(a: Advisory) -> None:
    print(f"ID:       {a.id}")
    print(f"Package:  {a.package}")
    print(f"Date:     {a.date.isoformat()}")
    if a.title:
        print(f"Title:    {a.title}")
    if a.collection:
        print(f"Collection: {a.collection.value}")
    if a.aliases:
        print(f"Aliases:  {', '.join(str(x) for x in a.aliases)}")
    if a.references:
        print(f"References: {', '.join(str(x) for x in a.references)}")
    if a.categories:
        print(f"Categories: {', '.join(c.value for c in a.categories)}")
    if a.keywords:
        print(f"Keywords: {', '.join(a.keywords)}")
    if a.cvss:
        print(f"CVSS:     {a.cvss} ({a.cvss_score} {a.severity.name})")
    if a.informational:
        print(f"Informational: {a.informational.value}")
    if a.obsolete:
        print("Obsolete: yes")
    if a.patched_versions:
        print(f"Patched:  {', '.join(a.patched_versions)}")
    if a.unaffected_versions:
        print(f"Unaffected: {', '.join(a.unaffected_versions)}")
    print(f"URL:      {a.url or a.id.url or '-'}")
    if a.description:
        print()
        print(a.description.strip())


if __name__ == "__main__":  # pragma: no cover
    app()
