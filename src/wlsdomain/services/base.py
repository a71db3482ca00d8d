"""BaseService — foundation for wlsdomain services.

Every service receives an :class:`EffectiveConfigurationFactory` at
construction time. The factory owns the current domain snapshot and
serializes the one write (replica count) against concurrent reads.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from wlsdomain.domain.effective import EffectiveConfigurationFactory


class BaseService:
    """Base for service-layer classes.

    Usage::

        class ResolveService(BaseService):
            def resolve_server(self, name: str) -> ServiceResult:
                spec = self._factory.get_server_spec(name)
                ...
    """

    def __init__(self, factory: EffectiveConfigurationFactory) -> None:
        self._factory = factory
