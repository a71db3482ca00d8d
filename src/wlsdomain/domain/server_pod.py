"""Server pod templates and the rules for layering them.

A :class:`ServerPod` can be declared at the domain, cluster, and server
levels. :func:`resolve_server_pod` fills a more specific template's gaps
from a more general one; folding it over server → cluster → domain yields
the template that governs a running server.
"""

from __future__ import annotations

from pydantic import Field

from wlsdomain.domain.kube import (
    ContainerSecurityContext,
    EnvVar,
    PodSecurityContext,
    ResourceModel,
    ResourceRequirements,
    Volume,
    VolumeMount,
)
from wlsdomain.domain.merge import (
    Merger,
    absorb,
    absorb_with,
    merge_keyed_list,
    merge_map,
    merge_unique,
)


class ProbeTuning(ResourceModel):
    """Probe timing. Anything left unset falls back to the runtime defaults."""

    initial_delay_seconds: int | None = None
    timeout_seconds: int | None = None
    period_seconds: int | None = None


class ServerPod(ResourceModel):
    """The mergeable per-server pod template."""

    env: list[EnvVar] = Field(default_factory=list)
    liveness_probe: ProbeTuning = Field(default_factory=ProbeTuning)
    readiness_probe: ProbeTuning = Field(default_factory=ProbeTuning)
    node_selector: dict[str, str] = Field(default_factory=dict)
    resources: ResourceRequirements = Field(default_factory=ResourceRequirements)
    pod_security_context: PodSecurityContext = Field(default_factory=PodSecurityContext)
    container_security_context: ContainerSecurityContext = Field(
        default_factory=ContainerSecurityContext
    )
    volumes: list[Volume] = Field(default_factory=list)
    volume_mounts: list[VolumeMount] = Field(default_factory=list)
    pod_labels: dict[str, str] = Field(default_factory=dict)
    pod_annotations: dict[str, str] = Field(default_factory=dict)
    service_labels: dict[str, str] = Field(default_factory=dict)
    service_annotations: dict[str, str] = Field(default_factory=dict)


# --- Merger tables ---

_CAPABILITY_MERGERS: dict[str, Merger] = {
    "add": merge_unique,
    "drop": merge_unique,
}

_CONTAINER_SECURITY_MERGERS: dict[str, Merger] = {
    "capabilities": absorb_with(_CAPABILITY_MERGERS),
}

_RESOURCE_MERGERS: dict[str, Merger] = {
    "requests": merge_map,
    "limits": merge_map,
}

_SERVER_POD_MERGERS: dict[str, Merger] = {
    "env": merge_keyed_list,
    "liveness_probe": absorb_with({}),
    "readiness_probe": absorb_with({}),
    "node_selector": merge_map,
    "resources": absorb_with(_RESOURCE_MERGERS),
    "pod_security_context": absorb_with({}),
    "container_security_context": absorb_with(_CONTAINER_SECURITY_MERGERS),
    "volumes": merge_keyed_list,
    "volume_mounts": merge_keyed_list,
    "pod_labels": merge_map,
    "pod_annotations": merge_map,
    "service_labels": merge_map,
    "service_annotations": merge_map,
}


def resolve_server_pod(specific: ServerPod | None, general: ServerPod | None) -> ServerPod:
    """Return *specific* with every unset value absorbed from *general*.

    Neither argument is modified, and the result shares no mutable
    containers with them (nested lists and dicts such as
    ``supplementalGroups`` or an env var's ``valueFrom`` are copied).
    ``None`` on either side is treated as an empty template.
    """
    merged = absorb(specific or ServerPod(), general, _SERVER_POD_MERGERS)
    return merged.model_copy(deep=True)


def resolve_server_pods(*levels: ServerPod | None) -> ServerPod:
    """Fold templates ordered most specific first into one template."""
    result = ServerPod()
    for level in reversed(levels):
        result = resolve_server_pod(level, result)
    return result

