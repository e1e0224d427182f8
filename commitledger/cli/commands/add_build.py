"""``commitledger add-build BUILD_ID``: register a build in the store."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from commitledger.cli.commands._store import open_store, require_build
from commitledger.config import settings

console = Console()


def add_build_cmd(
    build_id: str = typer.Argument(..., help="Unique id of the build."),
    previous: str = typer.Option(
        None,
        "--previous",
        "-p",
        help="Id of the previous build. Defaults to the latest build of --job.",
    ),
    job: str = typer.Option("", "--job", "-j", help="Job (lineage) the build belongs to."),
    external_id: str = typer.Option(
        "",
        "--external-id",
        help="Identifier reported when this build is a reference point.",
    ),
    store_path: Path = typer.Option(
        settings.store_path,
        "--store",
        "-s",
        help="Path to the build store SQLite database.",
    ),
) -> None:
    """Register a build, linked to its previous build.

    Without ``--previous`` the build follows the latest build of ``--job``.
    """
    store = open_store(store_path, console, create=True)
    if store.has_build(build_id):
        console.print(f"[bold red]Build already registered:[/bold red] {build_id}")
        raise typer.Exit(code=1)
    if previous:
        require_build(store, previous, console)
    elif job:
        latest = store.latest_build(job)
        previous = latest.build_id if latest else None

    record = store.add_build(build_id, previous or None, job=job, external_id=external_id)
    link = f" (after [cyan]{record.previous_build_id}[/cyan])" if record.previous_build_id else ""
    console.print(f"[green]Registered build[/green] [bold]{record.build_id}[/bold]{link}")
