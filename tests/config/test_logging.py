"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator

import pytest
import structlog

from wlsdomain.config.logging import bind_domain, configure_logging, resolving


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    pkg = logging.getLogger("wlsdomain")
    pkg_level = pkg.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    pkg.setLevel(pkg_level)
    structlog.contextvars.clear_contextvars()


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger("wlsdomain").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False, log_json=False)
        assert logging.getLogger("wlsdomain").level == logging.WARNING

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("wlsdomain.test")
        log.warning("json test", answer=42)
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "wlsdomain.test"
        assert "timestamp" in parsed

    def test_stdlib_logger_gets_structured_fields(
        self, capfd: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("wlsdomain.domain.effective").debug("Resolved server ms1")
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "Resolved server ms1"
        assert parsed["level"] == "debug"
        assert parsed["logger"] == "wlsdomain.domain.effective"

    def test_quiet_mode_hides_debug(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=False, log_json=True)
        logging.getLogger("wlsdomain.config.loader").debug("hidden")
        assert capfd.readouterr().err == ""

    def test_third_party_debug_is_suppressed(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("ruamel").debug("parser noise")
        assert capfd.readouterr().err == ""

    def test_idempotent_calls(self) -> None:
        """Multiple configure_logging calls don't stack handlers."""
        configure_logging(verbose=True, log_json=False)
        configure_logging(verbose=True, log_json=True)
        assert len(logging.getLogger().handlers) == 1


class TestResolutionContext:
    def test_domain_and_server_attached(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        bind_domain("domain1")
        with resolving("ms1", "cluster-1"):
            logging.getLogger("wlsdomain.domain.effective").debug("Resolved server ms1")
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["domain_uid"] == "domain1"
        assert parsed["server_name"] == "ms1"
        assert parsed["cluster_name"] == "cluster-1"

    def test_server_context_is_scoped(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        with resolving("ms1"):
            pass
        logging.getLogger("wlsdomain.test").debug("after")
        parsed = json.loads(capfd.readouterr().err.strip())
        assert "server_name" not in parsed

    def test_reconfigure_drops_bound_domain(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        bind_domain("old")
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("wlsdomain.test").debug("fresh")
        parsed = json.loads(capfd.readouterr().err.strip())
        assert "domain_uid" not in parsed
