"""Effective server specs and the factory that computes them.

The factory is the engine's entry point. For a server it looks up the
server and cluster overrides, folds their pod templates over the domain
default (server → cluster → domain), and resolves start policy and the
cluster's replica limit. Every spec it returns is a fresh, frozen value.

Reads never modify the domain. :meth:`EffectiveConfigurationFactory.set_replica_count`
is the single write: it swaps in a new :class:`DomainSpec` under a lock.
"""

from __future__ import annotations

import logging
import threading

from pydantic import Field

from wlsdomain.domain.kube import LocalObjectReference, ResourceModel
from wlsdomain.domain.policies import (
    ImagePullPolicy,
    StartPolicy,
    resolve_start_policy,
    should_start,
)
from wlsdomain.domain.server_pod import ServerPod, resolve_server_pods
from wlsdomain.domain.spec import DomainSpec, resolve_replicas

logger = logging.getLogger(__name__)


class EffectiveServerSpec(ResourceModel):
    """The resolved configuration governing one server instance.

    Attributes:
        server_name: The server this spec applies to.
        cluster_name: Its cluster, or None for standalone and admin servers.
        start_policy: Resolved start policy (domain gates applied).
        cluster_limit: Resolved replica count of the cluster, or None.
        server_pod: The fully merged pod template.
    """

    server_name: str
    cluster_name: str | None = None
    is_admin: bool = False
    domain_uid: str = Field(alias="domainUID")
    image: str
    image_pull_policy: ImagePullPolicy
    image_pull_secrets: list[LocalObjectReference]
    start_policy: StartPolicy
    cluster_limit: int | None = None
    server_pod: ServerPod

    def should_start(self, current_replicas: int) -> bool:
        """Whether this server should run given *current_replicas* already running."""
        return should_start(self.start_policy, current_replicas, self.cluster_limit)


class EffectiveConfigurationFactory:
    """Computes effective server specs from one domain resource.

    Usage::

        factory = EffectiveConfigurationFactory(domain)
        spec = factory.get_server_spec("ms1", "cluster-1")
        if spec.should_start(running):
            ...
    """

    def __init__(self, domain: DomainSpec) -> None:
        self._domain = domain
        self._lock = threading.Lock()

    @property
    def domain(self) -> DomainSpec:
        """The current domain snapshot."""
        with self._lock:
            return self._domain

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def get_server_spec(
        self, server_name: str, cluster_name: str | None = None
    ) -> EffectiveServerSpec:
        """Resolve the effective spec for managed server *server_name*.

        Unknown server or cluster names are not errors: the missing level
        simply contributes nothing.
        """
        domain = self.domain
        server = domain.get_server(server_name)
        cluster = domain.get_cluster(cluster_name)
        limit = None if cluster_name is None else resolve_replicas(cluster, domain.replicas)

        pod = resolve_server_pods(
            server.server_pod if server else None,
            cluster.server_pod if cluster else None,
            domain.server_pod,
        )
        policy = resolve_start_policy(
            server.server_start_policy if server else None,
            cluster.server_start_policy if cluster else None,
            domain.server_start_policy,
        )
        logger.debug(
            "Resolved server %s (cluster=%s, policy=%s, limit=%s, server_override=%s)",
            server_name,
            cluster_name,
            policy,
            limit,
            server is not None,
        )
        return self._build(domain, server_name, cluster_name, pod, policy, limit)

    def get_admin_server_spec(self) -> EffectiveServerSpec:
        """Resolve the effective spec for the admin server."""
        domain = self.domain
        admin = domain.get_admin_server()
        pod = resolve_server_pods(admin.server_pod, domain.server_pod)
        policy = resolve_start_policy(
            admin.server_start_policy,
            None,
            domain.server_start_policy,
            admin=True,
        )
        logger.debug("Resolved admin server %s (policy=%s)", domain.as_name, policy)
        return self._build(domain, domain.as_name, None, pod, policy, None, is_admin=True)

    def is_shutting_down(self) -> bool:
        """True when even the admin server should not be running."""
        return not self.get_admin_server_spec().should_start(0)

    # ------------------------------------------------------------------
    # Replicas
    # ------------------------------------------------------------------

    def get_replica_count(self, cluster_name: str) -> int:
        domain = self.domain
        return resolve_replicas(domain.get_cluster(cluster_name), domain.replicas)

    def set_replica_count(self, cluster_name: str, replicas: int) -> DomainSpec:
        """Set a cluster's replica count, declaring the cluster if needed.

        Returns the new domain snapshot. The previous snapshot is left
        untouched.

        Raises:
            InvalidReplicaCountError: If *replicas* is negative.
        """
        with self._lock:
            created = self._domain.get_cluster(cluster_name) is None
            self._domain = self._domain.with_replica_count(cluster_name, replicas)
            domain = self._domain
        logger.info(
            "Set replicas for cluster %s to %d%s",
            cluster_name,
            replicas,
            " (cluster entry created)" if created else "",
        )
        return domain

    def get_default_replica_limit(self) -> int:
        return 0

    # ------------------------------------------------------------------
    # Admin channels
    # ------------------------------------------------------------------

    def get_exported_network_access_point_names(self) -> list[str]:
        admin = self.domain.get_admin_server()
        return [nap.channel_name for nap in admin.exported_network_access_points]

    def get_channel_service_labels(self, channel_name: str) -> dict[str, str]:
        nap = self.domain.get_admin_server().get_exported_network_access_point(channel_name)
        return {} if nap is None else dict(nap.labels)

    def get_channel_service_annotations(self, channel_name: str) -> dict[str, str]:
        nap = self.domain.get_admin_server().get_exported_network_access_point(channel_name)
        return {} if nap is None else dict(nap.annotations)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _build(
        domain: DomainSpec,
        server_name: str,
        cluster_name: str | None,
        pod: ServerPod,
        policy: StartPolicy,
        limit: int | None,
        *,
        is_admin: bool = False,
    ) -> EffectiveServerSpec:
        return EffectiveServerSpec(
            server_name=server_name,
            cluster_name=cluster_name,
            is_admin=is_admin,
            domain_uid=domain.domain_uid,
            image=domain.effective_image,
            image_pull_policy=domain.effective_image_pull_policy,
            image_pull_secrets=domain.effective_image_pull_secrets,
            start_policy=policy,
            cluster_limit=limit,
            server_pod=pod,
        )
