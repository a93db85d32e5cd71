"""Config file discovery.

Walk-up finder locates polycalc.toml starting from the working directory.
The POLYCALC_CONFIG env var pins an explicit file instead.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "polycalc.toml"
CONFIG_ENV_VAR = "POLYCALC_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the nearest polycalc.toml at or above *start* (default: cwd).

    When POLYCALC_CONFIG is set, only that path is considered; a missing
    file there yields None rather than falling back to the walk-up.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        pinned = Path(env_path)
        return pinned if pinned.is_file() else None

    directory = (start or Path.cwd()).resolve()
    for candidate_dir in (directory, *directory.parents):
        candidate = candidate_dir / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
