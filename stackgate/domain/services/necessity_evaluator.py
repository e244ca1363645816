"""
Deployment Necessity Evaluator

Architectural Intent:
- Decides whether a deployment may be skipped, from already-fetched remote
  state and local fingerprints; performs no I/O itself
- Returns an EvaluationResult naming every failed gate

Domain Logic:
- Gate A (no post-deploy drift): no remote object was modified after the
  earliest function modification. A newer object means a previous deploy
  uploaded artifacts but never finished updating the functions.
- Gate B (content identity): remote and local hashes are equal as sorted
  sequences (order-insensitive, count-sensitive)
- Skip only when both gates pass and a previous generation exists
"""

from __future__ import annotations
import logging

from stackgate.domain.value_objects.evaluation_result import (
    EvaluationResult,
    SkipBlocker,
)
from stackgate.domain.value_objects.fingerprint import LocalFingerprints
from stackgate.domain.value_objects.function_modification import EarliestModification
from stackgate.domain.value_objects.remote_object import RemoteObject

logger = logging.getLogger(__name__)


class NecessityEvaluator:

    def changed_after_deploy(
        self, objects: list[RemoteObject], earliest: EarliestModification
    ) -> bool:
        if not earliest.is_known:
            return True
        return any(obj.last_modified > earliest.timestamp for obj in objects)

    def hashes_equal(self, remote: tuple[str, ...], local: tuple[str, ...]) -> bool:
        return sorted(remote) == sorted(local)

    def evaluate(
        self,
        objects: list[RemoteObject],
        earliest: EarliestModification,
        local: LocalFingerprints,
    ) -> EvaluationResult:
        if not objects:
            logger.info("No previous deployment found, deployment required")
            return EvaluationResult(
                skipped=False,
                blockers=(SkipBlocker.FRESH_DEPLOYMENT,),
                local_hashes=local.all_hashes,
                access_denied=earliest.access_denied,
            )

        remote_hashes = tuple(obj.content_hash or "" for obj in objects)
        local_hashes = local.all_hashes

        blockers: list[SkipBlocker] = []
        if not earliest.is_known:
            blockers.append(SkipBlocker.MODIFICATION_UNKNOWN)
        elif self.changed_after_deploy(objects, earliest):
            blockers.append(SkipBlocker.CHANGED_AFTER_DEPLOY)

        if not self.hashes_equal(remote_hashes, local_hashes):
            blockers.append(SkipBlocker.HASH_MISMATCH)

        if not blockers:
            logger.info("Service files not changed. Skipping deployment...")
            return EvaluationResult.skip(remote_hashes, local_hashes)

        logger.info("Not skipping deployment")
        for blocker in blockers:
            logger.info("Reason: %s", blocker.value)
        if SkipBlocker.HASH_MISMATCH in blockers:
            logger.info("Remote hashes: %s", ",".join(sorted(remote_hashes)))
            logger.info("Local hashes: %s", ",".join(sorted(local_hashes)))

        return EvaluationResult(
            skipped=False,
            blockers=tuple(blockers),
            remote_hashes=remote_hashes,
            local_hashes=local_hashes,
            access_denied=earliest.access_denied,
        )
