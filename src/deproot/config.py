"""
deproot.config — Workspace configuration.

Workspace root candidates, in priority order:

    1. DEPROOT_PATH env var (os.pathsep separated: /ws/a:/ws/b)
    2. ~/.deproot/config.yaml

~/.deproot/config.yaml:

    workspace_roots:
      - /home/me/work
      - /srv/shared-workspace
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from deproot.errors import ConfigError


DEPROOT_HOME = Path.home() / ".deproot"

ENV_VAR = "DEPROOT_PATH"


@dataclass
class DeprootConfig:
    """Global deproot config."""
    workspace_roots: list[str] = field(default_factory=list)


def config_path() -> Path:
    return DEPROOT_HOME / "config.yaml"


def load_config() -> DeprootConfig:
    """Read ~/.deproot/config.yaml."""
    cp = config_path()
    if not cp.exists():
        return DeprootConfig()

    try:
        with open(cp) as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {cp}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read {cp}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file must be a YAML mapping: {cp}")

    roots = data.get("workspace_roots") or []
    if isinstance(roots, str):
        roots = [roots]
    if not isinstance(roots, list) or not all(isinstance(r, str) for r in roots):
        raise ConfigError(f"workspace_roots must be a list of paths: {cp}")

    return DeprootConfig(workspace_roots=[r for r in roots if r])


def save_config(cfg: DeprootConfig) -> None:
    """Write ~/.deproot/config.yaml."""
    DEPROOT_HOME.mkdir(parents=True, exist_ok=True)

    data: dict[str, Any] = {}
    if cfg.workspace_roots:
        data["workspace_roots"] = list(cfg.workspace_roots)

    with open(config_path(), "w") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False)


def split_path_list(value: str) -> list[str]:
    """Split an os.pathsep separated list, dropping empty entries."""
    return [p.strip() for p in value.split(os.pathsep) if p.strip()]


def workspace_candidates() -> list[str]:
    """Resolve the ordered list of workspace root candidates.

    Priority: env var > config file > empty
    """
    env_value = os.environ.get(ENV_VAR, "")
    candidates = split_path_list(env_value)
    if candidates:
        return candidates

    return load_config().workspace_roots
