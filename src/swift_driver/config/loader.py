# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/swift_driver/config/loader.py

import logging
import os
from pathlib import Path
from typing import Optional, Union

import yaml

from ..models import StorageCluster, StorageNode
from .settings import DriverSettings

log = logging.getLogger("swift_driver")

CONFIG_ENV = "SWIFT_DRIVER_CONFIG"


def _load_yaml(path: Path) -> dict:
    """Load a YAML file, expanding ${ENV_VAR} references."""
    if not path.is_file():
        raise FileNotFoundError(f"YAML file not found: {path}")
    raw = path.read_text()
    expanded = os.path.expandvars(raw)
    return yaml.safe_load(expanded) or {}


def _find_settings_file(path: Optional[Union[str, Path]]) -> Optional[Path]:
    """
    Locate the driver settings file using this priority:

    1. explicit path argument
    2. SWIFT_DRIVER_CONFIG environment variable
    """
    if path is not None:
        return Path(path)

    env = os.environ.get(CONFIG_ENV)
    if env:
        p = Path(env)
        if p.is_file():
            return p
        log.warning("%s=%s does not exist, using defaults", CONFIG_ENV, env)
    return None


def load_settings(path: Optional[Union[str, Path]] = None) -> DriverSettings:
    """
    Load and validate driver settings.

    Without a file every field keeps its built-in default. Values may use
    ``${ENV_VAR}`` placeholders, resolved at load time.
    """
    found = _find_settings_file(path)
    if found is None:
        log.debug("No settings file found, using built-in defaults")
        return DriverSettings()

    log.debug("Loading driver settings from %s", found)
    return DriverSettings.model_validate(_load_yaml(found))


def load_cluster(path: Union[str, Path]) -> StorageCluster:
    return StorageCluster.model_validate(_load_yaml(Path(path)))


def load_node(path: Union[str, Path]) -> StorageNode:
    return StorageNode.model_validate(_load_yaml(Path(path)))
