import unittest
from unittest.mock import AsyncMock, Mock

from ..core.count_sinks import EventBusCountSink, NullCountSink, RecordingCountSink
from ..core.event_bus import EventBus
from ..core.page_sequencer import PageSequencer
from ..events import EventType
from ..interfaces.paging_source import ListingPage


class TestEventBus(unittest.TestCase):
    def setUp(self):
        self.bus = EventBus()

    def test_publish_reaches_subscribers(self):
        callback = Mock()
        self.bus.subscribe(EventType.PAGE_LOADED, callback)

        self.bus.publish(EventType.PAGE_LOADED, page=2)

        callback.assert_called_once_with(event_type=EventType.PAGE_LOADED, page=2)

    def test_duplicate_subscription_ignored(self):
        callback = Mock()
        self.bus.subscribe(EventType.PAGE_LOADED, callback)
        self.bus.subscribe(EventType.PAGE_LOADED, callback)
        self.assertEqual(self.bus.get_subscriber_count(EventType.PAGE_LOADED), 1)

    def test_unsubscribe(self):
        callback = Mock()
        self.bus.subscribe(EventType.PAGE_LOADED, callback)
        self.assertTrue(self.bus.unsubscribe(EventType.PAGE_LOADED, callback))
        self.assertFalse(self.bus.unsubscribe(EventType.PAGE_LOADED, callback))
        self.assertEqual(self.bus.get_event_types(), set())

    def test_failing_listener_does_not_stop_others(self):
        broken = Mock(side_effect=RuntimeError("boom"))
        working = Mock()
        self.bus.subscribe(EventType.PAGE_LOAD_FAILED, broken)
        self.bus.subscribe(EventType.PAGE_LOAD_FAILED, working)

        self.bus.publish(EventType.PAGE_LOAD_FAILED, page=1)

        working.assert_called_once()

    def test_listing_subscription_only_sees_its_listing(self):
        topics = Mock()
        everything = Mock()
        self.bus.subscribe(EventType.PAGE_LOADED, topics, listing="topics")
        self.bus.subscribe(EventType.PAGE_LOADED, everything)

        self.bus.publish(EventType.PAGE_LOADED, listing="notifications", page=1)
        self.bus.publish(EventType.PAGE_LOADED, listing="topics", page=2)

        topics.assert_called_once_with(event_type=EventType.PAGE_LOADED, listing="topics", page=2)
        self.assertEqual(everything.call_count, 2)
        self.assertEqual(self.bus.get_subscriber_count(EventType.PAGE_LOADED), 2)
        self.assertEqual(self.bus.get_subscriber_count(EventType.PAGE_LOADED, listing="replies"), 1)

    def test_unsubscribe_matches_listing(self):
        callback = Mock()
        self.bus.subscribe(EventType.PAGE_LOADED, callback, listing="topics")

        self.assertFalse(self.bus.unsubscribe(EventType.PAGE_LOADED, callback))
        self.assertTrue(self.bus.unsubscribe(EventType.PAGE_LOADED, callback, listing="topics"))

    def test_sequencers_share_one_bus(self):
        loaded = Mock()
        self.bus.subscribe(EventType.PAGE_LOADED, loaded, listing="replies")
        fetch = AsyncMock(return_value=ListingPage(items=["r"], total_item_count=1))

        PageSequencer(fetch, event_bus=self.bus, name="topics").load_sync(1)
        PageSequencer(fetch, event_bus=self.bus, name="replies").load_sync(1)

        loaded.assert_called_once()
        self.assertEqual(loaded.call_args.kwargs["listing"], "replies")

    def test_clear_all_subscriptions(self):
        self.bus.subscribe(EventType.PAGE_LOADED, Mock())
        self.bus.clear_all_subscriptions()
        self.assertEqual(self.bus.get_subscriber_count(EventType.PAGE_LOADED), 0)


class TestCountSinks(unittest.TestCase):
    def test_recording_sink(self):
        sink = RecordingCountSink()
        self.assertIsNone(sink.last)
        sink.update(4)
        sink.update(0)
        self.assertEqual(sink.history, [4, 0])
        self.assertEqual(sink.last, 0)

    def test_null_sink(self):
        NullCountSink().update(12)

    def test_event_bus_sink(self):
        bus = EventBus()
        callback = Mock()
        bus.subscribe(EventType.UNREAD_COUNT_UPDATED, callback)

        EventBusCountSink(bus).update(9)

        callback.assert_called_once_with(
            event_type=EventType.UNREAD_COUNT_UPDATED, count=9, listing="notifications"
        )


if __name__ == '__main__':
    unittest.main()
