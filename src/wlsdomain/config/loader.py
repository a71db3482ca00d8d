"""Load Domain resources from YAML or JSON.

Accepts either a full custom resource::

    apiVersion: weblogic.oracle/v2
    kind: Domain
    metadata: {name: domain1}
    spec:
      domainUID: domain1
      ...

or the bare ``spec`` mapping. JSON files are read by the same parser.
Required identity fields are enforced by :class:`DomainSpec` validation,
so an incomplete domain surfaces as a ``pydantic.ValidationError``.
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from wlsdomain.domain.spec import DomainSpec

logger = logging.getLogger(__name__)

DOMAIN_KIND = "Domain"


class DomainLoadError(ValueError):
    """The domain file could not be read or is not a mapping."""


def _new_yaml(typ: str = "safe") -> YAML:
    """Create a fresh YAML instance; ruamel's YAML object is stateful."""
    y = YAML(typ=typ)
    y.default_flow_style = False
    return y


def parse_domain(data: Any) -> DomainSpec:
    """Validate an already-parsed resource or spec mapping."""
    if not isinstance(data, dict):
        msg = f"Domain document must be a mapping, got {type(data).__name__}"
        raise DomainLoadError(msg)
    if data.get("kind") == DOMAIN_KIND or "spec" in data:
        spec = data.get("spec")
        if not isinstance(spec, dict):
            msg = "Domain resource has no 'spec' mapping"
            raise DomainLoadError(msg)
        data = spec
    return DomainSpec.model_validate(data)


def load_domain(path: Path) -> DomainSpec:
    """Read and validate the domain resource at *path*.

    Raises:
        DomainLoadError: If the file is missing, unparsable, or not a mapping.
        pydantic.ValidationError: If required fields are missing or invalid.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        msg = f"Cannot read domain file {path}: {exc}"
        raise DomainLoadError(msg) from exc

    try:
        data = _new_yaml().load(raw)
    except YAMLError as exc:
        msg = f"Invalid YAML in {path}: {exc}"
        raise DomainLoadError(msg) from exc

    spec = parse_domain(data)
    logger.debug(
        "Loaded domain %s from %s (%d clusters, %d managed servers)",
        spec.domain_uid,
        path,
        len(spec.clusters),
        len(spec.managed_servers),
    )
    return spec


def domain_to_dict(spec: DomainSpec) -> dict[str, Any]:
    """Serialize *spec* with wire names, omitting unset values."""
    return spec.model_dump(mode="json", by_alias=True, exclude_none=True)


def dump_domain(spec: DomainSpec) -> str:
    """Render *spec* as a YAML ``spec`` document."""
    buf = io.StringIO()
    _new_yaml("rt").dump(domain_to_dict(spec), buf)
    return buf.getvalue()
