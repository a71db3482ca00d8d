"""ResolveService — effective server specs, replica counts, domain status.

Unknown server or cluster names are never errors; they resolve to the
remaining levels and add a warning so the caller can spot typos.
"""

from __future__ import annotations

import logging
from typing import Any

from wlsdomain.config.loader import domain_to_dict
from wlsdomain.config.logging import resolving
from wlsdomain.domain.effective import EffectiveServerSpec
from wlsdomain.domain.spec import InvalidReplicaCountError
from wlsdomain.services.base import BaseService
from wlsdomain.services.result import ErrorCode, ServiceResult

logger = logging.getLogger(__name__)


def spec_to_dict(spec: EffectiveServerSpec) -> dict[str, Any]:
    """Serialize an effective spec with wire names, omitting unset values."""
    return spec.model_dump(mode="json", by_alias=True, exclude_none=True)


class ResolveService(BaseService):
    """Read and scale operations over one domain resource."""

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def resolve_server(
        self,
        server_name: str,
        cluster_name: str | None = None,
        *,
        current_replicas: int = 0,
    ) -> ServiceResult:
        """Effective spec for a managed server, optionally in a cluster."""
        op = "resolve_server"
        domain = self._factory.domain
        warnings: list[str] = []

        if server_name == domain.as_name:
            warnings.append(
                f"{server_name!r} is the admin server; use the admin command for its spec"
            )
        if domain.get_server(server_name) is None:
            warnings.append(f"No override declared for server {server_name!r}")
        if cluster_name is not None and domain.get_cluster(cluster_name) is None:
            warnings.append(f"No override declared for cluster {cluster_name!r}")

        with resolving(server_name, cluster_name):
            spec = self._factory.get_server_spec(server_name, cluster_name)
        data = spec_to_dict(spec)
        data["shouldStart"] = spec.should_start(current_replicas)
        return ServiceResult.success(op, data, warnings)

    def resolve_admin(self) -> ServiceResult:
        """Effective spec for the admin server."""
        op = "resolve_admin"
        warnings: list[str] = []
        if self._factory.domain.admin_server is None:
            warnings.append("No admin server override declared; using domain defaults")

        with resolving(self._factory.domain.as_name):
            spec = self._factory.get_admin_server_spec()
        data = spec_to_dict(spec)
        data["shouldStart"] = spec.should_start(0)
        data["exportedChannels"] = self._factory.get_exported_network_access_point_names()
        return ServiceResult.success(op, data, warnings)

    def replica_count(self, cluster_name: str) -> ServiceResult:
        """Resolved replica count for a cluster."""
        op = "replica_count"
        declared = self._factory.domain.get_cluster(cluster_name) is not None
        return ServiceResult.success(
            op,
            {
                "cluster": cluster_name,
                "replicas": self._factory.get_replica_count(cluster_name),
                "declared": declared,
            },
        )

    def scale(self, cluster_name: str, replicas: int) -> ServiceResult:
        """Set a cluster's replica count (the write path)."""
        op = "scale"
        created = self._factory.domain.get_cluster(cluster_name) is None
        try:
            domain = self._factory.set_replica_count(cluster_name, replicas)
        except InvalidReplicaCountError as exc:
            logger.info("Rejected replica count %d for cluster %s", replicas, cluster_name)
            return ServiceResult.failure(
                op,
                ErrorCode.INVALID_REPLICA_COUNT,
                str(exc),
                cluster=cluster_name,
                replicas=replicas,
            )

        return ServiceResult.success(
            op,
            {
                "cluster": cluster_name,
                "replicas": replicas,
                "created": created,
                "domain": domain_to_dict(domain),
            },
        )

    def status(self) -> ServiceResult:
        """Domain-wide lifecycle summary."""
        op = "status"
        domain = self._factory.domain
        clusters = {
            cluster.cluster_name: self._factory.get_replica_count(cluster.cluster_name)
            for cluster in domain.clusters
        }
        return ServiceResult.success(
            op,
            {
                "domainUID": domain.domain_uid,
                "adminServer": domain.as_name,
                "shuttingDown": self._factory.is_shutting_down(),
                "clusters": clusters,
                "defaultReplicas": domain.replicas or self._factory.get_default_replica_limit(),
                "persistentVolumeClaim": domain.persistent_volume_claim_name,
            },
        )
