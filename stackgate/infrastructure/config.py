"""
Configuration Module

Architectural Intent:
- Centralized configuration loading from a JSON file
- Provides typed access to all stackgate settings
- Falls back to sensible defaults when config file is absent
- Environment variables override file-based config

Design Decisions:
- Config is a frozen dataclass for immutability after load
- Nested config sections map to sub-dataclasses
- CLI flags override the loaded config, not the other way round
"""

from __future__ import annotations
import dataclasses
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import json
import logging
import os

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AWSConfig:
    """AWS session configuration."""
    region: str = ""
    profile: str = ""
    max_attempts: int = 5


@dataclass(frozen=True)
class DeploymentConfig:
    """Where the service and its packaged artifacts live."""
    service_path: str = "."
    state_file: str = ".serverless/serverless-state.json"
    packaging_dir: str = ".serverless"
    bucket: str = ""
    stage: str = ""


@dataclass(frozen=True)
class StackgateConfig:
    """Root configuration for stackgate."""
    aws: AWSConfig = field(default_factory=AWSConfig)
    deployment: DeploymentConfig = field(default_factory=DeploymentConfig)
    log_level: str = "WARNING"

    @property
    def state_file_path(self) -> Path:
        return Path(self.deployment.service_path) / self.deployment.state_file

    @property
    def packaging_dir_path(self) -> Path:
        return Path(self.deployment.service_path) / self.deployment.packaging_dir


def _env_override(data: dict, prefix: str = "STACKGATE") -> dict:
    """Override config values with environment variables.

    Environment variables follow the pattern STACKGATE_SECTION_KEY.
    For example: STACKGATE_AWS_REGION=eu-west-1, STACKGATE_DEPLOYMENT_BUCKET=my-bucket
    """
    for key, value in os.environ.items():
        if not key.startswith(f"{prefix}_"):
            continue
        parts = key[len(prefix) + 1:].lower().split("_", 1)
        if len(parts) == 2 and parts[0] in ("aws", "deployment"):
            section, field_name = parts
            if not isinstance(data.get(section), dict):
                data[section] = {}
            data[section][field_name] = value
        else:
            data["_".join(parts)] = value
    return data


def _parse_config_file(path: Path) -> dict:
    """Parse a JSON config file. Returns empty dict on failure."""
    try:
        with open(path) as f:
            return json.load(f)
    except FileNotFoundError:
        logger.debug("Config file not found: %s", path)
        return {}
    except json.JSONDecodeError as e:
        logger.warning("Invalid config file %s: %s", path, e)
        return {}


def _build_sub_config(cls, data: dict):
    """Build a sub-config dataclass from a dict, ignoring unknown keys."""
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in data.items() if k in valid_fields}

    # Convert string numbers from environment variables
    for f in dataclasses.fields(cls):
        if f.name in filtered and isinstance(filtered[f.name], str) and f.type == "int":
            filtered[f.name] = int(filtered[f.name])

    return cls(**filtered)


def load_config(
    path: Optional[str] = None,
    env_prefix: str = "STACKGATE",
) -> StackgateConfig:
    """Load configuration from file and environment variables.

    Priority (highest to lowest):
    1. Environment variables (STACKGATE_SECTION_KEY)
    2. Config file values
    3. Defaults

    Args:
        path: Path to config file (JSON). Defaults to stackgate.json in CWD.
        env_prefix: Environment variable prefix. Defaults to STACKGATE.
    """
    config_path = Path(path) if path else Path("stackgate.json")
    data = _parse_config_file(config_path)
    data = _env_override(data, env_prefix)

    return StackgateConfig(
        aws=_build_sub_config(AWSConfig, data.get("aws", {})),
        deployment=_build_sub_config(DeploymentConfig, data.get("deployment", {})),
        log_level=data.get("log_level", "WARNING"),
    )
