"""Subcommand modules for wlsdomain.

Provides register_commands() which uses deferred imports to keep
``wlsdomain --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from wlsdomain.commands.resolve import admin, replicas, scale, server, status

    cli.add_command(server)
    cli.add_command(admin)
    cli.add_command(replicas)
    cli.add_command(scale)
    cli.add_command(status)
