"""
Remote Object Value Objects

Architectural Intent:
- Immutable snapshots of what the deployment bucket held at query time
- A generation is derived from listed keys, never stored
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


def key_directory(key: str) -> str:
    """Return everything before the last '/' of an object key."""
    return key[: key.rfind("/")] if "/" in key else ""


@dataclass(frozen=True)
class RemoteObject:
    """
    Value Object for one uploaded deployment artifact.

    content_hash is the base64 SHA-256 stored as the object's `filesha256`
    user metadata. It is None until the object's metadata has been fetched,
    or when the object was uploaded without it.
    """
    key: str
    last_modified: datetime
    content_hash: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("Object key cannot be empty")

    @property
    def directory(self) -> str:
        return key_directory(self.key)


@dataclass(frozen=True)
class DeploymentGeneration:
    """
    The most recent batch of uploaded objects.

    All members share one directory, the directory of the lexicographically
    greatest key under the listed prefix.
    """
    directory: str = ""
    objects: tuple[RemoteObject, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        for obj in self.objects:
            if obj.directory != self.directory:
                raise ValueError(
                    f"Object {obj.key} does not belong to generation {self.directory}"
                )

    @property
    def is_empty(self) -> bool:
        return not self.objects

    def __len__(self) -> int:
        return len(self.objects)

    @staticmethod
    def latest(objects: list[RemoteObject]) -> "DeploymentGeneration":
        """Select the newest generation out of a full listing."""
        if not objects:
            return DeploymentGeneration()

        ordered = sorted(objects, key=lambda o: o.key, reverse=True)
        directory = ordered[0].directory
        return DeploymentGeneration(
            directory=directory,
            objects=tuple(o for o in ordered if o.directory == directory),
        )
