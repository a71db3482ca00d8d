"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Provides lazy domain loading and centralized
result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click
from pydantic import ValidationError

from wlsdomain.output.formatters import format_result
from wlsdomain.services.result import ErrorCode, ServiceResult

if TYPE_CHECKING:
    from wlsdomain.config.settings import WlsSettings
    from wlsdomain.domain.effective import EffectiveConfigurationFactory


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The domain file is loaded lazily on first use so ``--help`` and
    ``--version`` never touch the filesystem.
    """

    def __init__(self, settings: WlsSettings) -> None:
        self.settings = settings
        self._factory: EffectiveConfigurationFactory | None = None

        from wlsdomain.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def factory(self) -> EffectiveConfigurationFactory:
        """The configuration factory (domain loaded on first access).

        Load failures are emitted as error results and exit with code 1.
        """
        if self._factory is None:
            from wlsdomain.config.loader import DomainLoadError, load_domain
            from wlsdomain.config.logging import bind_domain
            from wlsdomain.domain.effective import EffectiveConfigurationFactory

            op = "load_domain"
            path = self.settings.domain_path
            if path is None or not path.is_file():
                where = str(path) if path else "domain.yaml (walk-up from cwd)"
                self.emit(
                    ServiceResult.failure(
                        op, ErrorCode.DOMAIN_NOT_FOUND, f"No domain file: {where}"
                    )
                )
            try:
                domain = load_domain(path)
            except DomainLoadError as exc:
                self.emit(ServiceResult.failure(op, ErrorCode.INVALID_DOMAIN, str(exc)))
            except ValidationError as exc:
                self.emit(
                    ServiceResult.failure(
                        op,
                        ErrorCode.INVALID_DOMAIN,
                        f"Domain {path} failed validation ({exc.error_count()} errors)",
                        errors=exc.errors(
                            include_url=False, include_context=False, include_input=False
                        ),
                    )
                )
            bind_domain(domain.domain_uid)
            self._factory = EffectiveConfigurationFactory(domain)
        return self._factory

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        output = format_result(result, json_output=self.settings.json_output)
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not self.settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
