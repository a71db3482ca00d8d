"""structlog configuration for wlsdomain.

Log records go to stderr, rendered for the console or as JSON lines
(``--log-json``). Engine modules log through ``logging.getLogger(__name__)``;
the domain and server being resolved are attached to every record from
``structlog.contextvars`` so a resolution trace can be followed per server.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager

import structlog

PACKAGE_LOGGER = "wlsdomain"


def _pre_chain() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]


def _renderer(log_json: bool) -> structlog.types.Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Route structlog and stdlib records through one stderr handler.

    Only the ``wlsdomain`` logger is raised to DEBUG by *verbose*; other
    libraries stay at WARNING. Calling this again replaces the handler and
    drops any bound context.
    """
    structlog.contextvars.clear_contextvars()
    pre_chain = _pre_chain()
    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_json),
            ],
        )
    )

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(logging.WARNING)
    logging.getLogger(PACKAGE_LOGGER).setLevel(logging.DEBUG if verbose else logging.WARNING)


def bind_domain(domain_uid: str) -> None:
    """Tag every following record with the loaded domain's UID."""
    structlog.contextvars.bind_contextvars(domain_uid=domain_uid)


@contextmanager
def resolving(server_name: str, cluster_name: str | None = None) -> Iterator[None]:
    """Tag records emitted while one server's spec is being resolved."""
    with structlog.contextvars.bound_contextvars(
        server_name=server_name, cluster_name=cluster_name
    ):
        yield
