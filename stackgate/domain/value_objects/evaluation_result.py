"""
Evaluation Result Value Object

Architectural Intent:
- The necessity verdict is returned as a value and threaded explicitly into
  the reconciler gating, never stored as shared session state
- Every "do not skip" verdict names the gate(s) that failed
"""

from dataclasses import dataclass, field
from enum import Enum


class SkipBlocker(Enum):
    FORCED = "deployment forced"
    FRESH_DEPLOYMENT = "no previous deployment found"
    CHANGED_AFTER_DEPLOY = (
        "objects changed after the functions were last modified "
        "(probably a failed deploy)"
    )
    MODIFICATION_UNKNOWN = "function modification times could not be read"
    HASH_MISMATCH = "local and remote hashes differ"


@dataclass(frozen=True)
class EvaluationResult:
    skipped: bool
    blockers: tuple[SkipBlocker, ...] = field(default_factory=tuple)
    remote_hashes: tuple[str, ...] = field(default_factory=tuple)
    local_hashes: tuple[str, ...] = field(default_factory=tuple)
    access_denied: bool = False

    def __post_init__(self) -> None:
        if self.skipped and self.blockers:
            raise ValueError("A skipped evaluation cannot carry blockers")
        if not self.skipped and not self.blockers:
            raise ValueError("A required deployment must name at least one blocker")

    @property
    def forced(self) -> bool:
        return SkipBlocker.FORCED in self.blockers

    @property
    def should_deploy(self) -> bool:
        return not self.skipped

    @property
    def reasons(self) -> list[str]:
        return [b.value for b in self.blockers]

    @staticmethod
    def skip(
        remote_hashes: tuple[str, ...], local_hashes: tuple[str, ...]
    ) -> "EvaluationResult":
        return EvaluationResult(
            skipped=True,
            remote_hashes=remote_hashes,
            local_hashes=local_hashes,
        )

    @staticmethod
    def forced_deploy() -> "EvaluationResult":
        return EvaluationResult(skipped=False, blockers=(SkipBlocker.FORCED,))
