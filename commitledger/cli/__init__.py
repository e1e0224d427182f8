"""Commitledger CLI: Typer-based command-line interface.

Provides the ``commitledger`` command with subcommands for registering
builds, recording their commits, showing recorded entries and resolving
reference builds.

All output uses Rich for formatted terminal display.
"""
