"""
S3 Adapter

Architectural Intent:
- Infrastructure adapter implementing ObjectStorePort on Amazon S3
- Blocking boto3 calls run in the event loop's default executor so
  per-object reads can be issued concurrently

Design Decisions:
- list_objects pages through list_objects_v2 so generations beyond the first
  1000 keys are still seen
- NoSuchBucket becomes StoreNotFound; every head_object failure becomes
  MetadataFetchFailed; other listing errors propagate untouched
"""

import asyncio
import logging
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from stackgate.domain.errors import MetadataFetchFailed, StoreNotFound
from stackgate.domain.ports.object_store_port import ObjectHead, ObjectStorePort
from stackgate.domain.value_objects.remote_object import RemoteObject
from stackgate.infrastructure.adapters.errors import error_code, error_message

logger = logging.getLogger(__name__)


class S3Adapter(ObjectStorePort):
    def __init__(self, client: Any):
        self._client = client

    async def list_objects(self, bucket: str, prefix: str) -> list[RemoteObject]:
        def _list():
            objects: list[RemoteObject] = []
            paginator = self._client.get_paginator("list_objects_v2")
            try:
                for page in paginator.paginate(Bucket=bucket, Prefix=prefix):
                    for item in page.get("Contents", []):
                        objects.append(
                            RemoteObject(key=item["Key"], last_modified=item["LastModified"])
                        )
            except ClientError as e:
                if error_code(e) == "NoSuchBucket":
                    raise StoreNotFound(bucket) from e
                raise
            return objects

        logger.debug("S3 list_objects_v2 (bucket=%s, prefix=%s)", bucket, prefix)
        return await asyncio.get_event_loop().run_in_executor(None, _list)

    async def head_object(self, bucket: str, key: str) -> ObjectHead:
        def _head():
            try:
                response = self._client.head_object(Bucket=bucket, Key=key)
            except ClientError as e:
                raise MetadataFetchFailed(bucket, key, error_message(e)) from e
            except BotoCoreError as e:
                raise MetadataFetchFailed(bucket, key, str(e)) from e
            return ObjectHead(
                key=key,
                last_modified=response["LastModified"],
                metadata=dict(response.get("Metadata") or {}),
            )

        logger.debug("S3 head_object (bucket=%s, key=%s)", bucket, key)
        return await asyncio.get_event_loop().run_in_executor(None, _head)
