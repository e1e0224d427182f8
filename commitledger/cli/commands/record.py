"""``commitledger record BUILD_ID``: record the new commits of a build.

Looks up the previous entry of the repository, lists the commits since
its latest commit with git, and attaches the new ledger entry.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from commitledger.cli.commands._store import open_store, print_messages, require_build
from commitledger.config import settings
from commitledger.core.git_commits import GitCommitEnumerator
from commitledger.core.history import DuplicateEntryError
from commitledger.core.recorder import CommitRecorder

console = Console()


def record_cmd(
    build_id: str = typer.Argument(..., help="The build that checked out the repository."),
    repository_key: str = typer.Option(
        ...,
        "--repo",
        "-r",
        help="Key identifying the repository (e.g. its remote URL).",
    ),
    path: Path = typer.Option(
        Path("."),
        "--path",
        help="Working tree of the checked-out repository.",
    ),
    max_commits: int = typer.Option(
        settings.max_commits,
        "--max-commits",
        min=0,
        help="Maximum number of commits recorded for the build (0 = no limit).",
    ),
    store_path: Path = typer.Option(
        settings.store_path,
        "--store",
        "-s",
        help="Path to the build store SQLite database.",
    ),
) -> None:
    """Record the commits introduced by a build since its previous build."""
    store = open_store(store_path, console)
    require_build(store, build_id, console)

    recorder = CommitRecorder(store, GitCommitEnumerator(), max_commits=max_commits)
    try:
        entry = recorder.record(build_id, repository_key, path)
    except DuplicateEntryError as exc:
        console.print(f"[bold red]Already recorded:[/bold red] {exc}")
        raise typer.Exit(code=1)

    if entry is None:
        console.print(
            f"[bold red]Nothing recorded:[/bold red] could not read the head commit of {path}"
        )
        raise typer.Exit(code=1)

    kind = "[yellow]start[/yellow]" if entry.is_first_build() else "incremental"
    console.print(f"[green]{entry}[/green] ({kind})")
    print_messages(console, entry.info_messages, entry.error_messages)
