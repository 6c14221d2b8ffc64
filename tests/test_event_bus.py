"""Tests for the event bus."""

import pytest

from file_focus.events.domain_events import TreeChanged
from file_focus.events.event_bus import DomainEvent, EventBus


@pytest.fixture
def bus():
    return EventBus()


class TestEventBus:

    @pytest.mark.asyncio
    async def test_publish_reaches_subscribers_in_order(self, bus):
        calls = []
        bus.subscribe(TreeChanged, lambda event: calls.append("first"))
        bus.subscribe(TreeChanged, lambda event: calls.append("second"))

        await bus.publish(TreeChanged())

        assert calls == ["first", "second"]

    @pytest.mark.asyncio
    async def test_base_class_subscribers_receive_subclasses(self, bus):
        received = []
        bus.subscribe(DomainEvent, received.append)

        event = TreeChanged()
        await bus.publish(event)

        assert received == [event]

    @pytest.mark.asyncio
    async def test_failing_handler_does_not_stop_others(self, bus):
        received = []

        def broken(event):
            raise RuntimeError("boom")

        bus.subscribe(TreeChanged, broken)
        bus.subscribe(TreeChanged, received.append)

        await bus.publish(TreeChanged())

        assert len(received) == 1

    @pytest.mark.asyncio
    async def test_unsubscribe(self, bus):
        received = []
        unsubscribe = bus.subscribe(TreeChanged, received.append)
        assert bus.subscriber_count(TreeChanged) == 1

        unsubscribe()
        unsubscribe()
        await bus.publish(TreeChanged())

        assert received == []
        assert bus.subscriber_count(TreeChanged) == 0

    @pytest.mark.asyncio
    async def test_clear_removes_subscriptions(self, bus):
        received = []
        bus.subscribe(TreeChanged, received.append)

        bus.clear()
        await bus.publish(TreeChanged())

        assert received == []
        assert bus.subscriber_count(TreeChanged) == 0


class TestTreeChanged:

    def test_root_change(self):
        event = TreeChanged()

        assert event.is_root
        assert event.event_id.startswith("evt_")
        assert event.event_id != TreeChanged().event_id

    def test_subtree_change(self):
        assert not TreeChanged(node="subtree").is_root
