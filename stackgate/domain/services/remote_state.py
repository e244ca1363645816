"""
Remote State Fetcher

Architectural Intent:
- Reconstructs what the last deployment left behind: the newest generation
  of uploaded objects and the modification times of every function
- Two fan-out flavours:
  - must-succeed: object metadata reads, any failure aborts the check
  - best-effort: function lookups, failures become Unavailable values

Domain Logic:
- A generation is the set of objects sharing the directory of the
  lexicographically greatest key (keys embed the upload timestamp)
- The earliest function modification is the signal used to detect a
  deployment that uploaded artifacts but never finished updating functions
"""

from __future__ import annotations
import asyncio
import logging

from stackgate.domain.entities.service_definition import ServiceDefinition
from stackgate.domain.errors import (
    FunctionAccessDenied,
    FunctionNotFound,
    StoreNotFound,
)
from stackgate.domain.ports.function_inspector_port import FunctionInspectorPort
from stackgate.domain.ports.object_store_port import ObjectStorePort
from stackgate.domain.value_objects.function_modification import (
    EarliestModification,
    FunctionModification,
    Observed,
    Unavailable,
    UnavailableReason,
)
from stackgate.domain.value_objects.remote_object import (
    DeploymentGeneration,
    RemoteObject,
)

logger = logging.getLogger(__name__)

CONTENT_HASH_METADATA_KEY = "filesha256"


class RemoteStateFetcher:
    def __init__(
        self,
        object_store: ObjectStorePort,
        function_inspector: FunctionInspectorPort,
    ):
        self._store = object_store
        self._functions = function_inspector

    async def list_latest_generation(
        self, bucket: str, prefix: str, stack_name: str = ""
    ) -> DeploymentGeneration:
        """
        List everything under prefix and keep only the newest generation.

        Raises StoreNotFound, enriched with the stack name so the operator
        knows which stack the missing bucket belonged to.
        """
        try:
            objects = await self._store.list_objects(bucket, prefix)
        except StoreNotFound as e:
            raise StoreNotFound(bucket, stack_name=stack_name or e.stack_name) from e

        generation = DeploymentGeneration.latest(objects)
        logger.debug(
            "Listed %d object(s) under s3://%s/%s, latest generation %r has %d",
            len(objects),
            bucket,
            prefix,
            generation.directory,
            len(generation),
        )
        return generation

    async def fetch_metadata(
        self, bucket: str, generation: DeploymentGeneration
    ) -> list[RemoteObject]:
        """
        Read every object's metadata concurrently.

        No partial results: the first MetadataFetchFailed propagates.
        """
        if generation.is_empty:
            return []

        heads = await asyncio.gather(
            *[self._store.head_object(bucket, obj.key) for obj in generation.objects]
        )

        return [
            RemoteObject(
                key=head.key,
                last_modified=head.last_modified,
                content_hash=head.metadata.get(CONTENT_HASH_METADATA_KEY),
            )
            for head in heads
        ]

    async def _function_modification(
        self, function_name: str, physical_name: str
    ) -> FunctionModification:
        try:
            last_modified = await self._functions.get_last_modified(physical_name)
            return Observed(function_name=function_name, last_modified=last_modified)
        except FunctionAccessDenied as e:
            return Unavailable(function_name, UnavailableReason.ACCESS_DENIED, str(e))
        except FunctionNotFound as e:
            # Never deployed, needs a deployment
            return Unavailable(function_name, UnavailableReason.NOT_FOUND, str(e))
        except Exception as e:
            # Best-effort scan: an unreadable function only blocks the skip
            return Unavailable(function_name, UnavailableReason.ERROR, str(e))

    async def earliest_function_modification(
        self, service: ServiceDefinition
    ) -> EarliestModification:
        """Gives the least recent modification across all the functions of the service."""
        modifications = await asyncio.gather(
            *[
                self._function_modification(
                    name, service.get_function(name).physical_name
                )
                for name in service.get_all_functions()
            ]
        )

        earliest = EarliestModification.reduce(list(modifications))

        if earliest.access_denied:
            logger.warning(
                "Not authorized to perform lambda:GetFunction for at least one of "
                "the lambda functions. Deployment will not be skipped even if "
                "service files did not change."
            )
        for unavailable in earliest.unavailable:
            logger.debug(
                "Function %s unavailable (%s): %s",
                unavailable.function_name,
                unavailable.reason.name,
                unavailable.details,
            )

        return earliest
