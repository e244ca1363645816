"""Tests for the in-memory event bus."""

import logging

import pytest
from stackgate.domain.events.check_events import (
    DeploymentRequiredEvent,
    DeploymentSkippedEvent,
)
from stackgate.domain.events.event_base import DomainEvent
from stackgate.infrastructure.event_bus import EventBus


class TestEventBus:
    @pytest.mark.asyncio
    async def test_dispatch_by_type(self):
        bus = EventBus()
        received = []

        async def handler(event):
            received.append(event)

        bus.subscribe(DeploymentSkippedEvent, handler)
        skipped = DeploymentSkippedEvent(aggregate_id="svc-dev", object_count=2)

        await bus.publish([skipped, DeploymentRequiredEvent(aggregate_id="svc-dev")])

        assert received == [skipped]

    @pytest.mark.asyncio
    async def test_handlers_in_subscription_order(self):
        bus = EventBus()
        calls = []

        async def first(event):
            calls.append("first")

        async def second(event):
            calls.append("second")

        bus.subscribe(DeploymentSkippedEvent, first)
        bus.subscribe(DeploymentSkippedEvent, second)

        await bus.publish([DeploymentSkippedEvent()])

        assert calls == ["first", "second"]

    @pytest.mark.asyncio
    async def test_no_handlers(self):
        await EventBus().publish([DeploymentSkippedEvent()])

    @pytest.mark.asyncio
    async def test_base_class_subscriber_sees_every_event(self):
        bus = EventBus()
        received = []

        async def specific(event):
            received.append(("specific", event.event_type))

        async def catch_all(event):
            received.append(("all", event.event_type))

        bus.subscribe(DomainEvent, catch_all)
        bus.subscribe(DeploymentSkippedEvent, specific)

        await bus.publish([DeploymentSkippedEvent(), DeploymentRequiredEvent()])

        assert received == [
            ("specific", "DeploymentSkippedEvent"),
            ("all", "DeploymentSkippedEvent"),
            ("all", "DeploymentRequiredEvent"),
        ]

    @pytest.mark.asyncio
    async def test_published_history(self):
        bus = EventBus()
        event = DeploymentRequiredEvent(aggregate_id="svc-dev", reasons=("deployment forced",))

        await bus.publish([event])

        assert bus.published == (event,)

    @pytest.mark.asyncio
    async def test_events_logged_with_fields(self, caplog):
        bus = EventBus()

        with caplog.at_level(logging.INFO, logger="stackgate"):
            await bus.publish([DeploymentSkippedEvent(aggregate_id="svc-dev", object_count=3)])

        (record,) = caplog.records
        assert record.getMessage() == "DeploymentSkippedEvent for svc-dev"
        assert record.event["aggregate_id"] == "svc-dev"
