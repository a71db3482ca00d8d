"""Commands: resolve effective server specs, inspect and set replica counts."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

if TYPE_CHECKING:
    from wlsdomain.commands._context import AppContext


@click.command()
@click.argument("server_name")
@click.option(
    "-c", "--cluster", "cluster_name", default=None, help="Cluster the server belongs to."
)
@click.option(
    "--running",
    "current_replicas",
    type=click.IntRange(min=0),
    default=0,
    show_default=True,
    help="Cluster members already running (for the start decision).",
)
@click.pass_obj
def server(
    app: AppContext,
    server_name: str,
    cluster_name: str | None,
    current_replicas: int,
) -> None:
    """Show the effective spec of a managed server."""
    from wlsdomain.services.resolve import ResolveService

    app.emit(
        ResolveService(app.factory).resolve_server(
            server_name, cluster_name, current_replicas=current_replicas
        )
    )


@click.command()
@click.pass_obj
def admin(app: AppContext) -> None:
    """Show the effective spec of the admin server."""
    from wlsdomain.services.resolve import ResolveService

    app.emit(ResolveService(app.factory).resolve_admin())


@click.command()
@click.argument("cluster_name")
@click.pass_obj
def replicas(app: AppContext, cluster_name: str) -> None:
    """Show the resolved replica count of a cluster."""
    from wlsdomain.services.resolve import ResolveService

    app.emit(ResolveService(app.factory).replica_count(cluster_name))


@click.command(context_settings={"ignore_unknown_options": True})
@click.argument("cluster_name")
@click.argument("count", type=int)
@click.pass_obj
def scale(app: AppContext, cluster_name: str, count: int) -> None:
    """Set a cluster's replica count and print the updated domain.

    The domain file is not rewritten. A negative COUNT is passed through
    (no `--` needed) and reported as an invalid replica count.
    """
    from wlsdomain.services.resolve import ResolveService

    app.emit(ResolveService(app.factory).scale(cluster_name, count))


@click.command()
@click.pass_obj
def status(app: AppContext) -> None:
    """Summarize domain lifecycle state and cluster sizes."""
    from wlsdomain.services.resolve import ResolveService

    app.emit(ResolveService(app.factory).status())
