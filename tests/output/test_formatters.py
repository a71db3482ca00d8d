"""Tests for format_result."""

from __future__ import annotations

import json

from wlsdomain.domain.effective import EffectiveConfigurationFactory
from wlsdomain.output.formatters import format_result
from wlsdomain.services.resolve import ResolveService
from wlsdomain.services.result import ErrorCode, ServiceResult


def _err(op: str = "scale", msg: str = "fail") -> ServiceResult:
    return ServiceResult.failure(op, ErrorCode.INVALID_REPLICA_COUNT, msg)


class TestFormatResultJSON:
    def test_success(self) -> None:
        data = json.loads(
            format_result(ServiceResult.success("status", {"domainUID": "d1"}), json_output=True)
        )
        assert data["ok"] is True
        assert data["op"] == "status"
        assert data["data"]["domainUID"] == "d1"

    def test_error(self) -> None:
        data = json.loads(format_result(_err(msg="Bad"), json_output=True))
        assert data["ok"] is False
        assert data["error"]["code"] == "INVALID_REPLICA_COUNT"
        assert data["error"]["message"] == "Bad"


class TestFormatServerSpec:
    def test_clustered_server(self, sample_factory: EffectiveConfigurationFactory) -> None:
        result = ResolveService(sample_factory).resolve_server("managed-server1", "cluster-1")
        lines = format_result(result).splitlines()
        assert lines[:6] == [
            "OK: resolve_server",
            "  server: managed-server1 (cluster cluster-1)",
            "  startPolicy: IF_NEEDED",
            "  shouldStart: True",
            "  clusterLimit: 3",
            "  image: store/oracle/weblogic:12.2.1.3 (IfNotPresent)",
        ]
        assert "  env:" in lines
        env_start = lines.index("  env:")
        assert lines[env_start + 1 : env_start + 3] == [
            "    USER_MEM_ARGS=-Xms128m -Xmx1g",
            "    JAVA_OPTIONS=-Dweblogic.StdoutDebugEnabled=false",
        ]
        assert "  podLabels: tier=cluster, app=weblogic" in lines
        assert "  requests: memory=768Mi, cpu=1" in lines

    def test_standalone_server(self, sample_factory: EffectiveConfigurationFactory) -> None:
        output = format_result(ResolveService(sample_factory).resolve_server("managed-server1"))
        assert "  server: managed-server1 (standalone)" in output
        assert "  clusterLimit: none" in output

    def test_admin_server(self, sample_factory: EffectiveConfigurationFactory) -> None:
        output = format_result(ResolveService(sample_factory).resolve_admin())
        assert "  server: admin-server (admin)" in output
        assert "  exportedChannels: T3Channel" in output

    def test_secret_env_shows_source(self) -> None:
        data = {
            "serverName": "ms1",
            "isAdmin": False,
            "startPolicy": "IF_NEEDED",
            "shouldStart": True,
            "image": "wls:1",
            "imagePullPolicy": "IfNotPresent",
            "serverPod": {"env": [{"name": "PW", "valueFrom": {"secretKeyRef": {"name": "s"}}}]},
        }
        output = format_result(ServiceResult.success("resolve_server", data))
        assert "    PW <- secretKeyRef" in output


class TestFormatGeneric:
    def test_success_lines(self) -> None:
        result = ServiceResult.success("replica_count", {"cluster": "c1", "replicas": 3})
        assert format_result(result).splitlines() == [
            "OK: replica_count",
            "  cluster: c1",
            "  replicas: 3",
        ]

    def test_flat_mapping_as_pairs(self) -> None:
        output = format_result(ServiceResult.success("status", {"clusters": {"c1": 2, "c2": 0}}))
        assert "  clusters: c1=2, c2=0" in output

    def test_nested_values_compact_json(self) -> None:
        output = format_result(ServiceResult.success("scale", {"domain": {"clusters": [{"a": 1}]}}))
        assert '  domain: {"clusters":[{"a":1}]}' in output

    def test_empty_data(self) -> None:
        assert format_result(ServiceResult.success("noop", {})) == "OK: noop"


class TestFormatError:
    def test_error_line(self) -> None:
        assert format_result(_err(msg="nope")) == "ERROR: scale [INVALID_REPLICA_COUNT] - nope"

    def test_error_without_payload(self) -> None:
        assert format_result(ServiceResult(ok=False, op="x")) == "ERROR: x - Unknown error"
