"""Workspace and environment configuration for the grammar language server."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from .errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".collie.yml"
LOG_ENV_VAR = "COLLIE_LSP_LOG"


@dataclass
class WorkspaceConfig:
    """Settings read from ``.collie.yml`` at the workspace root."""

    path: Optional[Path] = None
    engine: Optional[str] = None
    raw: Dict[str, Any] = field(default_factory=dict)

    def is_empty(self) -> bool:
        return not self.raw


def find_config(root: Optional[Path]) -> Optional[Path]:
    """Return the configuration file below *root*, if there is one."""

    if root is None:
        return None
    candidate = root / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def read_config(path: Path) -> WorkspaceConfig:
    """Parse *path* into a :class:`WorkspaceConfig`.

    Raises:
        ConfigError: If the file cannot be read, is not valid YAML, or does
            not hold a mapping.
    """

    try:
        with path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
    except OSError as exc:
        raise ConfigError(f"Cannot read {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}", hint="Fix the syntax or delete the file.") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a YAML mapping, got {type(data).__name__}")

    engine = data.get("engine")
    if engine is not None and not isinstance(engine, str):
        raise ConfigError(f"'engine' in {path} must be a string like 'package.module:Factory'")
    return WorkspaceConfig(path=path, engine=engine, raw=dict(data))


def load_workspace_config(root: Optional[Path]) -> WorkspaceConfig:
    """Load the workspace configuration, falling back to defaults on error."""

    path = find_config(root)
    if path is None:
        return WorkspaceConfig()
    try:
        config = read_config(path)
    except ConfigError as exc:
        logger.warning("Ignoring workspace configuration: %s", exc.format())
        return WorkspaceConfig(path=path)
    logger.info("Loaded workspace configuration from %s", path)
    return config


def log_destination(environ: Optional[Mapping[str, str]] = None) -> Optional[Path]:
    """Return the log file named by ``COLLIE_LSP_LOG``, or ``None`` when unset."""

    env = os.environ if environ is None else environ
    value = env.get(LOG_ENV_VAR, "").strip()
    return Path(value) if value else None


__all__ = [
    "CONFIG_FILENAME",
    "LOG_ENV_VAR",
    "WorkspaceConfig",
    "find_config",
    "read_config",
    "load_workspace_config",
    "log_destination",
]
