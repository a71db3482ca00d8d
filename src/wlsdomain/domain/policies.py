"""Server start policies and image defaults.

Start policy is declared intent, resolved server > cluster > domain.
Two domain-level settings act as gates rather than defaults:
- NEVER at the domain level stops every server.
- ADMIN_ONLY at the domain level stops every managed server.
"""

from __future__ import annotations

from enum import StrEnum


class StartPolicy(StrEnum):
    """Whether a server should be running."""

    NEVER = "NEVER"
    IF_NEEDED = "IF_NEEDED"
    ADMIN_ONLY = "ADMIN_ONLY"
    ALWAYS = "ALWAYS"


class ImagePullPolicy(StrEnum):
    ALWAYS = "Always"
    NEVER = "Never"
    IF_NOT_PRESENT = "IfNotPresent"


DEFAULT_START_POLICY = StartPolicy.IF_NEEDED
DEFAULT_IMAGE = "store/oracle/weblogic:12.2.1.3"
LATEST_IMAGE_SUFFIX = ":latest"
PVC_NAME_PATTERN = "{domain_uid}-weblogic-domain-pvc"


def first_declared(*policies: StartPolicy | None) -> StartPolicy | None:
    """Return the first non-None policy, most specific first."""
    for policy in policies:
        if policy is not None:
            return policy
    return None


def resolve_start_policy(
    server: StartPolicy | None,
    cluster: StartPolicy | None,
    domain: StartPolicy | None,
    *,
    admin: bool = False,
) -> StartPolicy:
    """Resolve the effective start policy for one server.

    Precedence is server > cluster > domain, defaulting to IF_NEEDED.
    ADMIN_ONLY only means "start" for the admin server; any managed server
    under an ADMIN_ONLY policy resolves to NEVER.
    """
    if domain == StartPolicy.NEVER:
        return StartPolicy.NEVER
    if not admin and domain == StartPolicy.ADMIN_ONLY:
        return StartPolicy.NEVER

    policy = first_declared(server, cluster, domain) or DEFAULT_START_POLICY
    if not admin and policy == StartPolicy.ADMIN_ONLY:
        return StartPolicy.NEVER
    return policy


def should_start(policy: StartPolicy, current_replicas: int, limit: int | None) -> bool:
    """Decide whether a server under *policy* should run.

    IF_NEEDED servers run while *current_replicas* is below *limit*;
    without a limit (admin or unclustered servers) they always run.
    """
    if policy == StartPolicy.NEVER:
        return False
    if policy in (StartPolicy.ALWAYS, StartPolicy.ADMIN_ONLY):
        return True
    return limit is None or current_replicas < limit


def default_pull_policy(image: str) -> ImagePullPolicy:
    """``Always`` for ``:latest`` images, ``IfNotPresent`` otherwise."""
    if image.endswith(LATEST_IMAGE_SUFFIX):
        return ImagePullPolicy.ALWAYS
    return ImagePullPolicy.IF_NOT_PRESENT
