"""Config file discovery.

Walk-up finder locates ``scuttle.toml``, similar to how git finds ``.git/``.
The ``SCUTTLE_CONFIG`` env var and the ``--config`` flag override it.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "scuttle.toml"
CONFIG_ENV_VAR = "SCUTTLE_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for ``scuttle.toml``.

    ``SCUTTLE_CONFIG`` wins when set; it returns None if that path is not a file.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        return p if p.is_file() else None

    current = (start or Path.cwd()).resolve()
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        if current.parent == current:
            return None
        current = current.parent
