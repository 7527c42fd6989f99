from django.test import SimpleTestCase, TestCase

from common.events import (
    NullEventPublisher,
    RecordingEventPublisher,
    SignalEventPublisher,
    build_event_publisher,
    publish_on_commit,
    realtime_event,
    safe_publish,
)


class ExplodingPublisher:
    def publish(self, event_name, payload):
        raise RuntimeError("socket gone")


class EventPublisherTests(SimpleTestCase):
    def test_signal_publisher_reaches_receivers(self):
        received = []

        def receiver(sender, event_name, payload, **kwargs):
            received.append((event_name, payload))

        realtime_event.connect(receiver)
        try:
            SignalEventPublisher().publish("order_created", {"id": "1"})
        finally:
            realtime_event.disconnect(receiver)

        self.assertEqual(received, [("order_created", {"id": "1"})])

    def test_failing_receiver_does_not_raise(self):
        def receiver(sender, **kwargs):
            raise RuntimeError("boom")

        realtime_event.connect(receiver)
        try:
            with self.assertLogs("common.events", level="WARNING"):
                SignalEventPublisher().publish("order_updated", {})
        finally:
            realtime_event.disconnect(receiver)

    def test_safe_publish_swallows_errors(self):
        with self.assertLogs("common.events", level="ERROR"):
            safe_publish(ExplodingPublisher(), "order_deleted", {"id": "1"})

    def test_build_event_publisher(self):
        self.assertIsInstance(build_event_publisher("signal"), SignalEventPublisher)
        self.assertIsInstance(build_event_publisher("null"), NullEventPublisher)
        self.assertIsInstance(build_event_publisher(""), NullEventPublisher)
        with self.assertRaises(ValueError):
            build_event_publisher("kafka")


class PublishOnCommitTests(TestCase):
    def test_event_is_published_only_after_commit(self):
        publisher = RecordingEventPublisher()

        with self.captureOnCommitCallbacks(execute=True) as callbacks:
            publish_on_commit(publisher, "payment_added", {"amount": "10.00"})
            self.assertEqual(publisher.events, [])

        self.assertEqual(len(callbacks), 1)
        self.assertEqual(publisher.events, [("payment_added", {"amount": "10.00"})])
