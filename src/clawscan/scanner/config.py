# SPDX-License-Identifier: MIT
"""
Scanner configuration loader for ClawScan.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Any, Optional

import yaml

from clawscan.core.exceptions import ClawScanConfigError
from clawscan.core.findings import Severity
from .discovery import DEFAULT_EXCLUDES

logger = logging.getLogger(__name__)

CONFIG_FILE_NAMES = (".clawscan.yml", ".clawscan.yaml")

DEFAULT_FAIL_ON = "high"


def load_scanner_config(config_path: Optional[str] = None, repo_root: str = ".") -> Dict[str, Any]:
    """
    Load scanner configuration following the search order.

    Args:
        config_path: Explicit config path from the --config CLI flag
        repo_root: Scan root searched for .clawscan.yml/.clawscan.yaml

    Returns:
        Dictionary containing scanner configuration

    Raises:
        ClawScanConfigError: If config file is malformed or an explicit config is missing
    """
    repo_path = Path(repo_root).resolve()

    # 1. Explicit --config
    if config_path:
        config_abs_path = Path(config_path).resolve()
        if not config_abs_path.exists():
            raise ClawScanConfigError(
                f"Specified config file not found: {config_abs_path}",
                config_path=str(config_abs_path),
            )
        config = _load_yaml_config(config_abs_path)
        logger.info("Loaded config: %s", config_abs_path)
        return config

    # 2. .clawscan.yml or .clawscan.yaml at the scan root
    for config_name in CONFIG_FILE_NAMES:
        config_file = repo_path / config_name
        if config_file.exists():
            config = _load_yaml_config(config_file)
            logger.info("Loaded config: %s", config_file)
            return config

    # 3. Built-in defaults
    logger.info("Using default scanner config")
    return get_default_scanner_config()


def _load_yaml_config(config_path: Path) -> Dict[str, Any]:
    """Load and validate a YAML config file."""
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ClawScanConfigError(
            f"Failed to parse config file: {e}", config_path=str(config_path)
        ) from e

    if config is None:
        config = {}

    if not isinstance(config, dict):
        raise ClawScanConfigError("Config must be a mapping", config_path=str(config_path))

    return _apply_scanner_defaults(config, str(config_path))


def _apply_scanner_defaults(config: Dict[str, Any], config_path: str = None) -> Dict[str, Any]:
    """Validate known sections and fill in defaults."""
    for section in ("exclude", "scanners"):
        value = config.get(section)
        if value is None:
            continue
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise ClawScanConfigError(
                f"{section} must be a list of strings", config_path=config_path, section=section
            )

    for section in ("min_severity", "fail_on"):
        value = config.get(section)
        if value is None:
            continue
        try:
            Severity.parse(value)
        except ValueError as e:
            raise ClawScanConfigError(str(e), config_path=config_path, section=section) from None

    defaults = get_default_scanner_config()
    for key, value in defaults.items():
        if config.get(key) is None:
            config[key] = value

    return config


def get_default_scanner_config() -> Dict[str, Any]:
    """
    Get the default scanner configuration.

    Returns:
        Dictionary with default scanner settings
    """
    return {
        "exclude": list(DEFAULT_EXCLUDES),
        "scanners": None,  # all, in default order
        "min_severity": None,
        "fail_on": DEFAULT_FAIL_ON,
    }


def create_default_config_template() -> str:
    """
    Create a minimal .clawscan.yml template with commented examples.

    Returns:
        YAML string with default configuration template
    """
    excludes = "\n".join(f'  - "{p}"' for p in DEFAULT_EXCLUDES)
    return f"""# ClawScan Configuration
# This file configures how ClawScan scans your repository

# Names and wildcards to skip during discovery (replaces the defaults)
exclude:
{excludes}
  # Add project-specific paths to exclude:
  # - "fixtures"

# Scanners to run, in order (default: all)
# scanners:
#   - api-keys
#   - config-secrets
#   - docker
#   - gitignore

# Only report findings at or above this severity
# min_severity: low

# Exit with code 1 when findings at or above this severity exist
fail_on: {DEFAULT_FAIL_ON}
"""
