"""
Service Definition Loader

Architectural Intent:
- Builds the ServiceDefinition from the state file the packaging step
  writes next to the artifacts (.serverless/serverless-state.json)
- Explicit overrides (CLI flags, config) win over values in the file

State file shape (only the fields read here):
{
  "service": {
    "service": "my-service",
    "provider": {
      "stage": "dev", "region": "us-east-1",
      "deploymentBucket": "...", "deploymentPrefix": "serverless",
      "compiledCloudFormationTemplate": {...}
    },
    "functions": {"hello": {"name": "my-service-dev-hello", "events": [...]}},
    "package": {"artifact": "build/service.zip"}
  }
}
"""

from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Any, Optional

from stackgate.domain.entities.service_definition import (
    DEFAULT_DEPLOYMENT_PREFIX,
    FunctionDefinition,
    ServiceDefinition,
)
from stackgate.domain.errors import ServiceDefinitionError

logger = logging.getLogger(__name__)

DEFAULT_STAGE = "dev"
DEFAULT_REGION = "us-east-1"


def _read_state(path: Path) -> dict[str, Any]:
    try:
        with open(path) as f:
            data = json.load(f)
    except FileNotFoundError:
        raise ServiceDefinitionError(
            f"State file not found: {path}. Package the service before checking it."
        )
    except json.JSONDecodeError as e:
        raise ServiceDefinitionError(f"Invalid state file {path}: {e}")

    if not isinstance(data, dict):
        raise ServiceDefinitionError(f"Invalid state file {path}: expected an object")
    return data


def _service_name(service: dict[str, Any]) -> str:
    name = service.get("service")
    if isinstance(name, dict):
        # serviceObject form: {"name": "..."}
        name = name.get("name")
    if not name:
        name = (service.get("serviceObject") or {}).get("name")
    return name or ""


def _functions(
    raw: dict[str, Any], service: str, stage: str
) -> dict[str, FunctionDefinition]:
    functions: dict[str, FunctionDefinition] = {}
    for name, spec in raw.items():
        spec = spec or {}
        events = spec.get("events") or []
        if not isinstance(events, list):
            raise ServiceDefinitionError(f"Events of function {name} must be a list")
        functions[name] = FunctionDefinition(
            name=name,
            physical_name=spec.get("name")
            or ServiceDefinition.default_physical_name(service, stage, name),
            events=tuple(events),
        )
    return functions


def load_service_definition(
    path: Path,
    service_path: Optional[str] = None,
    stage: Optional[str] = None,
    region: Optional[str] = None,
    bucket: Optional[str] = None,
) -> ServiceDefinition:
    """Load a ServiceDefinition from a packaging state file.

    Args:
        path: Path to serverless-state.json
        service_path: Directory explicit artifacts are relative to.
            Defaults to the parent of the state file's directory.
        stage, region, bucket: Overrides for the provider settings.
    """
    data = _read_state(Path(path))
    service = data["service"] if isinstance(data.get("service"), dict) else data
    provider = service.get("provider") or {}
    package = service.get("package") or data.get("package") or {}

    name = _service_name(service)
    stage = stage or provider.get("stage") or DEFAULT_STAGE
    bucket = bucket or provider.get("deploymentBucket") or ""
    if isinstance(bucket, dict):
        bucket = bucket.get("name", "")

    if not name:
        raise ServiceDefinitionError(f"State file {path} does not name the service")
    if not bucket:
        raise ServiceDefinitionError(
            "Deployment bucket unknown. Set provider.deploymentBucket or pass --bucket."
        )

    definition = ServiceDefinition(
        service=name,
        stage=stage,
        region=region or provider.get("region") or DEFAULT_REGION,
        deployment_bucket=bucket,
        deployment_prefix=provider.get("deploymentPrefix") or DEFAULT_DEPLOYMENT_PREFIX,
        functions=_functions(service.get("functions") or {}, name, stage),
        template=provider.get("compiledCloudFormationTemplate") or {},
        artifact=package.get("artifact"),
        service_path=service_path or str(Path(path).resolve().parent.parent),
    )
    logger.debug(
        "Loaded service %s (stage=%s, %d function(s))",
        definition.service,
        definition.stage,
        len(definition.functions),
    )
    return definition
