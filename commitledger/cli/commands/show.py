"""``commitledger show BUILD_ID``: show the ledger entries of a build."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from commitledger.cli.commands._store import open_store, print_messages, require_build
from commitledger.config import settings

console = Console()


def show_cmd(
    build_id: str = typer.Argument(..., help="The build to show."),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Also list the commits and the recorded messages.",
    ),
    store_path: Path = typer.Option(
        settings.store_path,
        "--store",
        "-s",
        help="Path to the build store SQLite database.",
    ),
) -> None:
    """Show the commits recorded for a build, one row per repository."""
    store = open_store(store_path, console)
    require_build(store, build_id, console)

    record = store.get_build(build_id)
    entries = store.ledger_entries_of(build_id)
    if not entries:
        console.print(f"[dim]No commits recorded for {build_id}.[/dim]")
        return

    table = Table(title=f"Build {record.identifier}")
    table.add_column("Repository", style="cyan")
    table.add_column("Kind")
    table.add_column("Commits", justify="right")
    table.add_column("Latest", style="green")
    for entry in entries:
        table.add_row(
            entry.repository_key,
            entry.kind.value,
            str(entry.size()),
            entry.latest_commit,
        )
    console.print(table)

    if verbose:
        for entry in entries:
            console.print(f"\n[bold]{entry.repository_key}[/bold]")
            for commit in entry.commits:
                console.print(f"  {commit}")
            print_messages(console, entry.info_messages, entry.error_messages)
