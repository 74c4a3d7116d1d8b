"""Config file discovery and loading.

Walk-up finder locates resourcemap.toml, the way git finds .git/.
Supports the RESOURCEMAP_CONFIG env var and the --config CLI flag.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

from resourcemap.config.models import MappingConfig

CONFIG_FILENAME = "resourcemap.toml"
CONFIG_ENV_VAR = "RESOURCEMAP_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for resourcemap.toml.

    Returns the path to the config file, or None if not found.
    Checks RESOURCEMAP_CONFIG env var first.
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


def load_config(path: Path | None = None, cwd: Path | None = None) -> MappingConfig:
    """Load and validate engine config from a TOML file.

    If *path* is None, uses find_config(*cwd*) to discover the file.
    Returns the default MappingConfig if no file is found, or if *path*
    does not exist.
    """
    if path is None:
        path = find_config(cwd)
    if path is None or not path.is_file():
        return MappingConfig()

    data: dict[str, Any] = tomllib.loads(path.read_text(encoding="utf-8"))
    return MappingConfig.model_validate(data)
