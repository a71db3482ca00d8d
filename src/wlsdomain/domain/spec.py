"""Domain resource models: domain defaults, cluster and server overrides.

Field names follow the Domain custom resource (``domainUID``, ``asName``,
``serverPod`` ...). The required identity fields are enforced by
validation, so a :class:`DomainSpec` that exists is always complete.

Models are frozen. The only write the engine performs (setting a
cluster's replica count) returns a new :class:`DomainSpec`.
"""

from __future__ import annotations

from pydantic import Field

from wlsdomain.domain.kube import LocalObjectReference, ResourceModel, SecretReference
from wlsdomain.domain.policies import (
    DEFAULT_IMAGE,
    PVC_NAME_PATTERN,
    ImagePullPolicy,
    StartPolicy,
    default_pull_policy,
)
from wlsdomain.domain.server_pod import ServerPod


class InvalidReplicaCountError(ValueError):
    """A replica count below zero was supplied through the write path."""


# --- Override levels ---


class BaseConfiguration(ResourceModel):
    """Settings shared by the domain, cluster, and server levels."""

    server_start_policy: StartPolicy | None = None
    server_pod: ServerPod = Field(default_factory=ServerPod)


class Server(BaseConfiguration):
    server_name: str | None = None


class ManagedServer(Server):
    """Overrides for one named managed server."""


class ExportedNetworkAccessPoint(ResourceModel):
    """A channel on the admin server exposed through its own service."""

    channel_name: str
    labels: dict[str, str] = Field(default_factory=dict)
    annotations: dict[str, str] = Field(default_factory=dict)


class AdminServer(Server):
    """Overrides for the admin server."""

    exported_network_access_points: list[ExportedNetworkAccessPoint] = Field(
        default_factory=list
    )

    def get_exported_network_access_point(
        self, channel_name: str
    ) -> ExportedNetworkAccessPoint | None:
        for nap in self.exported_network_access_points:
            if nap.channel_name == channel_name:
                return nap
        return None


NULL_ADMIN_SERVER = AdminServer()


class Cluster(BaseConfiguration):
    """Overrides for every member of one cluster."""

    cluster_name: str
    replicas: int | None = Field(default=None, ge=0)


class DomainStorage(ResourceModel):
    persistent_volume_claim_name: str | None = None


# --- Domain ---


class DomainSpec(BaseConfiguration):
    """Domain-wide identity plus the default level of every override."""

    domain_uid: str = Field(alias="domainUID")
    domain_name: str
    admin_secret: SecretReference
    as_name: str
    as_port: int

    image: str | None = None
    image_pull_policy: ImagePullPolicy | None = None
    image_pull_secret: LocalObjectReference | None = None  # superseded by image_pull_secrets
    image_pull_secrets: list[LocalObjectReference] | None = None
    export_t3_channels: list[str] = Field(default_factory=list)
    replicas: int | None = Field(default=None, ge=0)
    domain_home_in_image: bool = False
    storage: DomainStorage | None = None

    admin_server: AdminServer | None = None
    managed_servers: list[ManagedServer] = Field(default_factory=list)
    clusters: list[Cluster] = Field(default_factory=list)

    # --- Lookups ---

    def get_server(self, server_name: str | None) -> ManagedServer | None:
        for server in self.managed_servers:
            if server.server_name == server_name:
                return server
        return None

    def get_cluster(self, cluster_name: str | None) -> Cluster | None:
        for cluster in self.clusters:
            if cluster.cluster_name == cluster_name:
                return cluster
        return None

    def get_admin_server(self) -> AdminServer:
        """The declared admin server, or the all-absent sentinel."""
        return self.admin_server or NULL_ADMIN_SERVER

    # --- Derived values ---

    @property
    def effective_image(self) -> str:
        return self.image or DEFAULT_IMAGE

    @property
    def effective_image_pull_policy(self) -> ImagePullPolicy:
        return self.image_pull_policy or default_pull_policy(self.effective_image)

    @property
    def effective_image_pull_secrets(self) -> list[LocalObjectReference]:
        """``imagePullSecrets`` if any, else the deprecated single secret if named."""
        if self.image_pull_secrets:
            return list(self.image_pull_secrets)
        legacy = self.image_pull_secret
        if legacy is not None and legacy.name:
            return [legacy]
        return []

    @property
    def persistent_volume_claim_name(self) -> str | None:
        if self.storage is None:
            return None
        return self.storage.persistent_volume_claim_name or PVC_NAME_PATTERN.format(
            domain_uid=self.domain_uid
        )

    # --- Writes (each returns a new DomainSpec) ---

    def with_replica_count(self, cluster_name: str, replicas: int) -> DomainSpec:
        """Return a copy whose cluster *cluster_name* has *replicas* replicas.

        A cluster entry is created when none is declared yet.

        Raises:
            InvalidReplicaCountError: If *replicas* is negative.
        """
        if replicas < 0:
            msg = f"Replica count for cluster {cluster_name!r} must be >= 0, got {replicas}"
            raise InvalidReplicaCountError(msg)

        clusters = list(self.clusters)
        for index, cluster in enumerate(clusters):
            if cluster.cluster_name == cluster_name:
                clusters[index] = cluster.model_copy(update={"replicas": replicas})
                break
        else:
            clusters.append(Cluster(cluster_name=cluster_name, replicas=replicas))
        return self.model_copy(update={"clusters": clusters})

    def with_admin_server(self, admin_server_name: str) -> DomainSpec:
        """Return a copy with an admin server declared, keeping an existing one."""
        if self.admin_server is not None:
            return self
        return self.model_copy(
            update={"as_name": admin_server_name, "admin_server": AdminServer()}
        )


def resolve_replicas(cluster: Cluster | None, domain_default: int | None) -> int:
    """Replica count for a cluster: its own count, else the domain's, else 0."""
    if cluster is not None and cluster.replicas is not None:
        return cluster.replicas
    if domain_default is not None:
        return domain_default
    return 0
