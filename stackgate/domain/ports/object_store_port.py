"""
Object Store Port

Architectural Intent:
- Port interface for the bucket holding previously uploaded deployment artifacts
- Abstracts listing and per-object metadata reads
- Implemented by S3Adapter
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime

from stackgate.domain.value_objects.remote_object import RemoteObject


@dataclass(frozen=True)
class ObjectHead:
    """Result of a metadata read: user metadata plus modification time."""
    key: str
    last_modified: datetime
    metadata: dict[str, str] = field(default_factory=dict)


class ObjectStorePort(ABC):
    """
    Port interface for the deployment bucket.
    """

    @abstractmethod
    async def list_objects(self, bucket: str, prefix: str) -> list[RemoteObject]:
        """
        Lists every object under prefix. Raises StoreNotFound if the bucket
        does not exist.
        """
        pass

    @abstractmethod
    async def head_object(self, bucket: str, key: str) -> ObjectHead:
        """
        Reads the metadata of one object. Raises MetadataFetchFailed.
        """
        pass
