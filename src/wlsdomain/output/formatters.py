"""Render ServiceResults for the terminal or as JSON (``--json``).

Effective server specs get a dedicated layout: the start decision and
cluster limit first, then the merged pod template one concern per line.
Other payloads print as ``key: value`` lines.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from wlsdomain.services.result import ServiceResult

_POD_MAPS = ("nodeSelector", "podLabels", "podAnnotations", "serviceLabels", "serviceAnnotations")


def _pairs(mapping: dict[str, Any]) -> str:
    return ", ".join(f"{key}={value}" for key, value in mapping.items())


def _value(value: Any) -> str:
    if isinstance(value, dict) and all(not isinstance(v, (dict, list)) for v in value.values()):
        return _pairs(value)
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(",", ":"))
    return str(value)


def _env_line(var: dict[str, Any]) -> str:
    if "valueFrom" in var:
        source = next(iter(var["valueFrom"]), "valueFrom")
        return f"    {var['name']} <- {source}"
    return f"    {var['name']}={var.get('value', '')}"


def _server_spec_lines(data: dict[str, Any]) -> list[str]:
    if data.get("isAdmin"):
        where = "admin"
    elif "clusterName" in data:
        where = f"cluster {data['clusterName']}"
    else:
        where = "standalone"
    pod = data["serverPod"]
    lines = [
        f"  server: {data['serverName']} ({where})",
        f"  startPolicy: {data['startPolicy']}",
        f"  shouldStart: {data['shouldStart']}",
        f"  clusterLimit: {data.get('clusterLimit', 'none')}",
        f"  image: {data['image']} ({data['imagePullPolicy']})",
    ]
    secrets = [s["name"] for s in data.get("imagePullSecrets", []) if "name" in s]
    if secrets:
        lines.append(f"  imagePullSecrets: {', '.join(secrets)}")
    if pod.get("env"):
        lines.append("  env:")
        lines.extend(_env_line(var) for var in pod["env"])
    for field in _POD_MAPS:
        if pod.get(field):
            lines.append(f"  {field}: {_pairs(pod[field])}")
    for kind in ("requests", "limits"):
        quantities = pod.get("resources", {}).get(kind)
        if quantities:
            lines.append(f"  {kind}: {_pairs(quantities)}")
    for field in ("volumes", "volumeMounts"):
        if pod.get(field):
            lines.append(f"  {field}: {', '.join(v['name'] for v in pod[field])}")
    if data.get("exportedChannels"):
        lines.append(f"  exportedChannels: {', '.join(data['exportedChannels'])}")
    return lines


def format_result(result: ServiceResult, *, json_output: bool = False) -> str:
    """Format *result* as indented JSON or as human-readable lines."""
    if json_output:
        return result.model_dump_json(indent=2)
    if not result.ok:
        if result.error is None:
            return f"ERROR: {result.op} - Unknown error"
        return f"ERROR: {result.op} [{result.error.code}] - {result.error.message}"

    if "serverPod" in result.data:
        body = _server_spec_lines(result.data)
    else:
        body = [f"  {key}: {_value(value)}" for key, value in result.data.items()]
    return "\n".join([f"OK: {result.op}", *body])
