"""Unified settings — CLI flags and env vars in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``WLSDOMAIN_*`` prefix
  3. Code defaults

The domain file itself is located by :func:`find_domain_file` walk-up
discovery unless ``--domain`` names one explicitly.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from wlsdomain.config.discovery import find_domain_file


class WlsSettings(BaseSettings):
    """Unified settings for the wlsdomain CLI.

    Frozen after construction and stored in ``click.Context.obj`` at the
    CLI root level.

    Attributes:
        domain_path: The domain resource file, or None if none was found.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "WLSDOMAIN_",
    }

    domain_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    verbose: bool = False
    log_json: bool = False

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Only init kwargs and env vars; no dotenv or secrets files."""
        return (init_settings, env_settings)

    @classmethod
    def from_cli(
        cls,
        *,
        domain_path: str | None = None,
        cwd: Path | None = None,
        **cli_flags: Any,
    ) -> WlsSettings:
        """Construct settings from a CLI invocation.

        An explicit *domain_path* is used as given (even if it does not
        exist, so the missing file can be reported). Otherwise the domain
        file is discovered by walking up from *cwd*.
        """
        resolved: Path | None = Path(domain_path) if domain_path else find_domain_file(cwd)
        return cls(domain_path=resolved, **cli_flags)
