"""Shared pytest fixtures and test helpers for wlsdomain tests."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from wlsdomain.config.loader import load_domain
from wlsdomain.domain.effective import EffectiveConfigurationFactory
from wlsdomain.domain.server_pod import ServerPod
from wlsdomain.domain.spec import DomainSpec

DOMAIN_YAML = """\
apiVersion: weblogic.oracle/v2
kind: Domain
metadata:
  name: domain1
  namespace: default
spec:
  domainUID: domain1
  domainName: base_domain
  adminSecret:
    name: domain1-weblogic-credentials
  asName: admin-server
  asPort: 7001
  image: "store/oracle/weblogic:12.2.1.3"
  replicas: 2
  serverStartPolicy: IF_NEEDED
  serverPod:
    env:
      - name: JAVA_OPTIONS
        value: "-Dweblogic.StdoutDebugEnabled=false"
      - name: USER_MEM_ARGS
        value: "-Xms64m -Xmx256m"
    resources:
      requests:
        memory: 768Mi
        cpu: 1
    podLabels:
      app: weblogic
  adminServer:
    serverStartPolicy: ALWAYS
    exportedNetworkAccessPoints:
      - channelName: T3Channel
        labels:
          exposed: "true"
        annotations:
          nap: t3
  managedServers:
    - serverName: managed-server1
      serverPod:
        env:
          - name: USER_MEM_ARGS
            value: "-Xms128m -Xmx1g"
  clusters:
    - clusterName: cluster-1
      replicas: 3
      serverPod:
        podLabels:
          tier: cluster
"""


def make_domain(**overrides: Any) -> DomainSpec:
    """Build a minimal valid DomainSpec; keyword overrides use field names."""
    fields: dict[str, Any] = {
        "domain_uid": "domain1",
        "domain_name": "base_domain",
        "admin_secret": {"name": "domain1-weblogic-credentials"},
        "as_name": "admin-server",
        "as_port": 7001,
    }
    fields.update(overrides)
    return DomainSpec.model_validate(fields)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def domain() -> DomainSpec:
    """A minimal domain with no overrides."""
    return make_domain()


@pytest.fixture
def factory(domain: DomainSpec) -> EffectiveConfigurationFactory:
    return EffectiveConfigurationFactory(domain)


@pytest.fixture
def domain_file(tmp_path: Path) -> Path:
    """The sample Domain resource written to ``domain.yaml``."""
    path = tmp_path / "domain.yaml"
    path.write_text(DOMAIN_YAML, encoding="utf-8")
    return path


@pytest.fixture
def _isolated_domain(domain_file: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to the directory holding ``domain.yaml`` so discovery finds it.

    Use via ``@pytest.mark.usefixtures("_isolated_domain")``.
    """
    monkeypatch.delenv("WLSDOMAIN_DOMAIN", raising=False)
    monkeypatch.chdir(domain_file.parent)


@pytest.fixture
def sample_factory(domain_file: Path) -> EffectiveConfigurationFactory:
    """A factory over the sample Domain resource."""
    return EffectiveConfigurationFactory(load_domain(domain_file))


def env_value(pod: ServerPod, name: str) -> str | None:
    """Literal value of env var *name* in *pod*, or None."""
    for var in pod.env:
        if var.name == name:
            return var.value
    return None
