"""Tests for the NecessityEvaluator gates."""

import logging

import pytest
from conftest import ts
from stackgate.domain.services.necessity_evaluator import NecessityEvaluator
from stackgate.domain.value_objects.evaluation_result import SkipBlocker
from stackgate.domain.value_objects.fingerprint import LocalFingerprints
from stackgate.domain.value_objects.function_modification import (
    EarliestModification,
    Unavailable,
    UnavailableReason,
)
from stackgate.domain.value_objects.remote_object import RemoteObject

PREFIX = "serverless/my-service/dev/1714564800000-2024-05-01T12:00:00.000Z"


def remote(name, content_hash, minute=0):
    return RemoteObject(
        key=f"{PREFIX}/{name}",
        last_modified=ts(minute),
        content_hash=content_hash,
    )


@pytest.fixture
def evaluator():
    return NecessityEvaluator()


@pytest.fixture
def local():
    return LocalFingerprints(template_hash="T", artifact_hashes=("A",))


class TestGates:
    def test_unchanged_service_is_skipped(self, evaluator, local):
        objects = [remote("app.zip", "A", 0), remote("compiled.json", "T", 0)]

        result = evaluator.evaluate(objects, EarliestModification(ts(1)), local)

        assert result.skipped
        assert sorted(result.remote_hashes) == ["A", "T"]

    def test_equal_timestamp_is_not_drift(self, evaluator, local):
        objects = [remote("app.zip", "A", 5), remote("compiled.json", "T", 5)]

        result = evaluator.evaluate(objects, EarliestModification(ts(5)), local)

        assert result.skipped

    def test_object_newer_than_functions_blocks(self, evaluator, local):
        objects = [remote("app.zip", "A", 0), remote("compiled.json", "T", 10)]

        result = evaluator.evaluate(objects, EarliestModification(ts(5)), local)

        assert not result.skipped
        assert result.blockers == (SkipBlocker.CHANGED_AFTER_DEPLOY,)

    def test_hash_mismatch_blocks(self, evaluator, local):
        objects = [remote("app.zip", "B", 0), remote("compiled.json", "T", 0)]

        result = evaluator.evaluate(objects, EarliestModification(ts(5)), local)

        assert result.blockers == (SkipBlocker.HASH_MISMATCH,)

    def test_both_gates_reported(self, evaluator, local):
        objects = [remote("app.zip", "B", 9), remote("compiled.json", "T", 0)]

        result = evaluator.evaluate(objects, EarliestModification(ts(5)), local)

        assert result.blockers == (
            SkipBlocker.CHANGED_AFTER_DEPLOY,
            SkipBlocker.HASH_MISMATCH,
        )

    def test_comparison_is_count_sensitive(self, evaluator):
        local = LocalFingerprints(template_hash="T", artifact_hashes=("A", "A"))
        objects = [remote("app.zip", "A"), remote("compiled.json", "T")]

        result = evaluator.evaluate(objects, EarliestModification(ts(5)), local)

        assert SkipBlocker.HASH_MISMATCH in result.blockers

    def test_missing_remote_hash_compares_as_empty(self, evaluator, local):
        objects = [remote("app.zip", None), remote("compiled.json", "T")]

        result = evaluator.evaluate(objects, EarliestModification(ts(5)), local)

        assert "" in result.remote_hashes
        assert SkipBlocker.HASH_MISMATCH in result.blockers

    def test_no_previous_deployment(self, evaluator, local):
        result = evaluator.evaluate([], EarliestModification(ts(5)), local)

        assert result.blockers == (SkipBlocker.FRESH_DEPLOYMENT,)
        assert result.local_hashes == ("A", "T")

    def test_unknown_modification_blocks(self, evaluator, local):
        denied = Unavailable("hello", UnavailableReason.ACCESS_DENIED)
        earliest = EarliestModification(timestamp=None, unavailable=(denied,))
        objects = [remote("app.zip", "A"), remote("compiled.json", "T")]

        result = evaluator.evaluate(objects, earliest, local)

        assert result.blockers == (SkipBlocker.MODIFICATION_UNKNOWN,)
        assert result.access_denied


class TestLogging:
    def test_skip_message(self, evaluator, local, caplog):
        objects = [remote("app.zip", "A"), remote("compiled.json", "T")]

        with caplog.at_level(logging.INFO, logger="stackgate"):
            evaluator.evaluate(objects, EarliestModification(ts(1)), local)

        assert "Service files not changed. Skipping deployment..." in caplog.text

    def test_mismatch_logs_both_hash_lists(self, evaluator, local, caplog):
        objects = [remote("app.zip", "Z"), remote("compiled.json", "T")]

        with caplog.at_level(logging.INFO, logger="stackgate"):
            evaluator.evaluate(objects, EarliestModification(ts(1)), local)

        assert "Remote hashes: T,Z" in caplog.text
        assert "Local hashes: A,T" in caplog.text
