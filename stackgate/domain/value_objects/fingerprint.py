from dataclasses import dataclass, field


@dataclass(frozen=True)
class LocalFingerprints:
    """
    Value Object holding the hashes computed from local disk for one check.

    artifact_hashes keeps duplicates: two packaged files with identical
    content must be matched by two identical remote hashes.
    """
    template_hash: str
    artifact_hashes: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if not self.template_hash:
            raise ValueError("Template hash cannot be empty")

    @property
    def all_hashes(self) -> tuple[str, ...]:
        return self.artifact_hashes + (self.template_hash,)
