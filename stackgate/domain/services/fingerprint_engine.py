"""
Fingerprint Engine

Architectural Intent:
- Computes the content hashes of the local deployment inputs: the compiled
  template and every packaged artifact
- Must reproduce byte-for-byte the hashes stored as `filesha256` metadata at
  upload time, otherwise every check reports a false mismatch

Domain Logic:
- Hash = base64(SHA-256(bytes))
- The template is canonicalized first: identifiers the compiler randomizes
  per build (deployment resource suffixes, artifact S3 keys) are normalized,
  then it is serialized as compact JSON in insertion order
- Artifacts are every *.zip directly inside the packaging directory (hidden
  files included, subdirectories not searched) plus an explicitly configured
  artifact, deduplicated by resolved path and hashed concurrently
"""

from __future__ import annotations
import asyncio
import base64
import copy
import hashlib
import json
import logging
from pathlib import Path
from typing import Any, Optional

from stackgate.domain.entities.service_definition import ServiceDefinition
from stackgate.domain.value_objects.fingerprint import LocalFingerprints

logger = logging.getLogger(__name__)

ARTIFACT_PATTERN = "*.zip"

_API_GATEWAY_DEPLOYMENT = "ApiGatewayDeployment"
_WEBSOCKETS_DEPLOYMENT = "WebsocketsDeployment"
_WEBSOCKETS_DEPLOYMENT_STAGE = "WebsocketsDeploymentStage"


def sha256_base64(data: bytes) -> str:
    return base64.b64encode(hashlib.sha256(data).digest()).decode("ascii")


def hash_file(path: Path) -> str:
    """Hash a file's raw bytes. The upload side stores this as `filesha256`."""
    with open(path, "rb") as f:
        return sha256_base64(f.read())


def normalize_template(template: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of the template with per-build identifiers normalized."""
    normalized = copy.deepcopy(template)
    resources = normalized.get("Resources") or {}

    for key in list(resources):
        value = resources[key]
        properties = value.get("Properties") if isinstance(value, dict) else None

        if key.startswith(_API_GATEWAY_DEPLOYMENT):
            resources[_API_GATEWAY_DEPLOYMENT] = resources.pop(key)

        if key == _WEBSOCKETS_DEPLOYMENT_STAGE and properties and properties.get("DeploymentId"):
            properties["DeploymentId"]["Ref"] = _WEBSOCKETS_DEPLOYMENT

        if key.startswith(_WEBSOCKETS_DEPLOYMENT) and key != _WEBSOCKETS_DEPLOYMENT_STAGE:
            resources[_WEBSOCKETS_DEPLOYMENT] = resources.pop(key)

        resource_type = value.get("Type") if isinstance(value, dict) else None
        if resource_type == "AWS::Lambda::Function" and properties and properties.get("Code"):
            properties["Code"]["S3Key"] = ""
        if resource_type == "AWS::Lambda::LayerVersion" and properties and properties.get("Content"):
            properties["Content"]["S3Key"] = ""

    return normalized


def canonicalize_template(template: dict[str, Any]) -> str:
    return json.dumps(
        normalize_template(template),
        separators=(",", ":"),
        ensure_ascii=False,
    )


class FingerprintEngine:
    def hash_template(self, template: dict[str, Any]) -> str:
        return sha256_base64(canonicalize_template(template).encode("utf-8"))

    def discover_artifacts(
        self,
        directory: Path,
        explicit_artifact: Optional[Path] = None,
    ) -> list[Path]:
        """Resolved, de-duplicated artifact paths in discovery order."""
        candidates: list[Path] = []
        if directory.is_dir():
            candidates.extend(sorted(directory.glob(ARTIFACT_PATTERN)))
        if explicit_artifact is not None:
            candidates.append(explicit_artifact)

        unique: dict[Path, None] = {}
        for candidate in candidates:
            unique.setdefault(candidate.resolve(), None)
        return list(unique)

    async def hash_artifacts(
        self,
        directory: Path,
        explicit_artifact: Optional[Path] = None,
    ) -> tuple[str, ...]:
        paths = self.discover_artifacts(directory, explicit_artifact)
        logger.debug("Hashing %d artifact(s): %s", len(paths), [str(p) for p in paths])

        loop = asyncio.get_event_loop()
        hashes = await asyncio.gather(
            *[loop.run_in_executor(None, hash_file, path) for path in paths]
        )
        return tuple(hashes)

    async def fingerprint(
        self, service: ServiceDefinition, packaging_dir: Path
    ) -> LocalFingerprints:
        explicit = None
        if service.artifact:
            explicit = Path(service.service_path) / service.artifact

        artifact_hashes = await self.hash_artifacts(packaging_dir, explicit)
        return LocalFingerprints(
            template_hash=self.hash_template(service.template),
            artifact_hashes=artifact_hashes,
        )
