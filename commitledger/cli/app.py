"""Main Typer application: imports and registers all CLI commands.

Entry point: ``commitledger`` (configured via pyproject.toml scripts).
"""

from __future__ import annotations

import logging

import typer

from commitledger.cli.commands.add_build import add_build_cmd
from commitledger.cli.commands.record import record_cmd
from commitledger.cli.commands.resolve import resolve_cmd
from commitledger.cli.commands.show import show_cmd
from commitledger.config import LogLevel, settings

app = typer.Typer(
    name="commitledger",
    help="Commitledger: incremental commit ledger and reference build resolution.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)

# Register subcommands
app.command(name="add-build", help="Register a build in the store.")(add_build_cmd)
app.command(name="record", help="Record the new commits of a build.")(record_cmd)
app.command(name="show", help="Show the commits recorded for a build.")(show_cmd)
app.command(name="resolve", help="Find the reference build of a build.")(resolve_cmd)


@app.callback()
def configure_logging(
    log_level: LogLevel = typer.Option(
        settings.log_level,
        "--log-level",
        case_sensitive=False,
        help="Logging level.",
    ),
) -> None:
    """Configure logging for all subcommands."""
    logging.basicConfig(
        level=log_level.value,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
