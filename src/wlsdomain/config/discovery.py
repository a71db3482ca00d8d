"""Domain file discovery.

Walk-up finder locates domain.yaml, similar to how git finds .git/.
Supports the WLSDOMAIN_DOMAIN env var and the --domain CLI flag.
"""

from __future__ import annotations

import os
from pathlib import Path

DOMAIN_FILENAME = "domain.yaml"
DOMAIN_ENV_VAR = "WLSDOMAIN_DOMAIN"


def find_domain_file(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for domain.yaml.

    Returns the path to the domain file, or None if not found.
    Checks WLSDOMAIN_DOMAIN env var first.
    """
    env_path = os.environ.get(DOMAIN_ENV_VAR)
    if env_path:
        p = Path(env_path)
        if p.is_file():
            return p
        return None

    current = (start or Path.cwd()).resolve()
    while True:
        candidate = current / DOMAIN_FILENAME
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None
