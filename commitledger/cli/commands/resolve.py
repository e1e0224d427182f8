"""``commitledger resolve BUILD REFERENCE``: find the reference build.

Walks the ledger of BUILD and of the REFERENCE lineage backward until
their commits meet, and prints the identifier of the reference build.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from commitledger.cli.commands._store import open_store, print_messages, require_build
from commitledger.config import settings
from commitledger.core.reference_finder import ReferenceFinder

console = Console()


def resolve_cmd(
    build_id: str = typer.Argument(..., help="The build to find a reference for."),
    reference_build_id: str = typer.Argument(
        ..., help="The newest build of the reference lineage."
    ),
    max_logs: int = typer.Option(
        settings.max_logs,
        "--max-logs",
        "-m",
        min=0,
        help="Maximum number of commits examined per lineage.",
    ),
    skip_unknown_commits: bool = typer.Option(
        settings.skip_unknown_commits,
        "--skip-unknown-commits/--no-skip-unknown-commits",
        help="Ignore reference builds with commits unknown to BUILD.",
    ),
    latest_if_not_found: bool = typer.Option(
        settings.latest_build_if_not_found,
        "--latest-if-not-found/--no-latest-if-not-found",
        help="Use REFERENCE itself when no common commit is found.",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Print only the reference build identifier.",
    ),
    store_path: Path = typer.Option(
        settings.store_path,
        "--store",
        "-s",
        help="Path to the build store SQLite database.",
    ),
) -> None:
    """Find the most recent reference build sharing a commit with BUILD.

    Exits with code 1 if no reference build was found.
    """
    store = open_store(store_path, console)
    require_build(store, build_id, console)
    require_build(store, reference_build_id, console)

    finder = ReferenceFinder(
        store,
        max_logs=max_logs,
        skip_unknown_commits=skip_unknown_commits,
        latest_build_if_not_found=latest_if_not_found,
    )
    result = finder.find(build_id, reference_build_id)

    if not quiet:
        print_messages(console, result.info_messages, result.error_messages)
    if not result.found:
        if not quiet:
            console.print(f"[bold yellow]No reference build found for {build_id}.[/bold yellow]")
        raise typer.Exit(code=1)

    if quiet:
        console.print(result.reference_build_id)
    else:
        console.print(f"[bold]Reference build:[/bold] [green]{result.reference_build_id}[/green]")
