"""Shared helpers for commands that read or write the build store."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from commitledger.core.build_store import BuildStore


def open_store(store_path: Path, console: Console, *, create: bool = False) -> BuildStore:
    """Open the build store, exiting with code 1 if it does not exist."""
    if not create and not store_path.exists():
        console.print(f"[bold red]Build store not found:[/bold red] {store_path}")
        console.print("[dim]Register a build first with: commitledger add-build[/dim]")
        raise typer.Exit(code=1)
    return BuildStore(store_path)


def require_build(store: BuildStore, build_id: str, console: Console) -> None:
    """Exit with code 1 if ``build_id`` is not registered."""
    if not store.has_build(build_id):
        console.print(f"[bold red]Build not found:[/bold red] {build_id}")
        raise typer.Exit(code=1)


def print_messages(console: Console, info: tuple[str, ...], errors: tuple[str, ...]) -> None:
    for message in info:
        console.print(f"  [dim]{message}[/dim]")
    for message in errors:
        console.print(f"  [red]{message}[/red]")
