"""Root CLI group for wlsdomain with global flags and command registration."""

from __future__ import annotations

import click

from wlsdomain import __version__
from wlsdomain.commands import register_commands
from wlsdomain.commands._context import AppContext
from wlsdomain.config.settings import WlsSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="wlsdomain")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug logs.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option(
    "-d",
    "--domain",
    "domain_path",
    default=None,
    help="Domain resource file (default: walk up for domain.yaml).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    verbose: bool,
    log_json: bool,
    domain_path: str | None,
) -> None:
    """wlsdomain — resolve effective WebLogic server configuration."""
    ctx.ensure_object(dict)
    settings = WlsSettings.from_cli(
        domain_path=domain_path,
        json_output=json_output,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
