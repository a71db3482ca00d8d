"""Kubernetes value types carried by a server pod template.

These mirror the shape of the core/v1 objects the operator places into
generated pods. The resolution engine treats them as opaque values: it
compares entries by ``name`` and copies fields wholesale, but never looks
inside a volume source or an env var's ``valueFrom``.

All models use camelCase aliases on the wire and are frozen.
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, Field
from pydantic.alias_generators import to_camel


def _as_text(value: Any) -> Any:
    """YAML hands back ``1`` for ``cpu: 1``; quantities are always text."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    return value


Quantity = Annotated[str, BeforeValidator(_as_text)]


class ResourceModel(BaseModel):
    """Base for every wire-facing model: frozen, camelCase aliases."""

    model_config = {
        "frozen": True,
        "alias_generator": to_camel,
        "populate_by_name": True,
    }


class EnvVar(ResourceModel):
    """A container environment variable."""

    name: str
    value: Annotated[str | None, BeforeValidator(_as_text)] = None
    value_from: dict[str, Any] | None = None


class Volume(ResourceModel):
    """A pod volume. Source keys (``hostPath``, ``secret`` ...) are kept verbatim."""

    model_config = {"extra": "allow"}

    name: str


class VolumeMount(ResourceModel):
    """A container volume mount."""

    name: str
    mount_path: str
    read_only: bool | None = None
    sub_path: str | None = None
    mount_propagation: str | None = None


class SELinuxOptions(ResourceModel):
    level: str | None = None
    role: str | None = None
    type: str | None = None
    user: str | None = None


class Sysctl(ResourceModel):
    name: str
    value: Annotated[str, BeforeValidator(_as_text)]


class Capabilities(ResourceModel):
    """Linux capabilities to add to or drop from a container.

    ``None`` means "not declared"; an explicit empty list is a declared
    (empty) set.
    """

    add: list[str] | None = None
    drop: list[str] | None = None


class PodSecurityContext(ResourceModel):
    """Pod-level security attributes."""

    run_as_non_root: bool | None = None
    fs_group: int | None = None
    run_as_group: int | None = None
    run_as_user: int | None = None
    se_linux_options: SELinuxOptions | None = None
    supplemental_groups: list[int] | None = None
    sysctls: list[Sysctl] | None = None


class ContainerSecurityContext(ResourceModel):
    """Container-level security attributes.

    Fields set here take precedence over the matching pod-level fields
    once Kubernetes applies them; the engine merges the two independently.
    """

    allow_privilege_escalation: bool | None = None
    privileged: bool | None = None
    read_only_root_filesystem: bool | None = None
    run_as_non_root: bool | None = None
    capabilities: Capabilities | None = None
    run_as_group: int | None = None
    run_as_user: int | None = None
    se_linux_options: SELinuxOptions | None = None


class ResourceRequirements(ResourceModel):
    """Compute resource requests and limits, keyed by resource name."""

    requests: dict[str, Quantity] = Field(default_factory=dict)
    limits: dict[str, Quantity] = Field(default_factory=dict)


class SecretReference(ResourceModel):
    name: str
    namespace: str | None = None


class LocalObjectReference(ResourceModel):
    name: str | None = None
