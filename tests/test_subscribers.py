"""Tests for the subscriber registry."""

import logging

from wl_transit.data.subscribers import SubscriberRegistry


def test_publish_in_subscription_order():
    registry: SubscriberRegistry[str] = SubscriberRegistry()
    received: list[tuple[str, str]] = []

    registry.add(lambda value: received.append(("first", value)))
    registry.add(lambda value: received.append(("second", value)))
    registry.add(lambda value: received.append(("third", value)))

    delivered = registry.publish("snapshot")

    assert delivered == 3
    assert received == [("first", "snapshot"), ("second", "snapshot"), ("third", "snapshot")]


def test_remove_is_idempotent():
    registry: SubscriberRegistry[int] = SubscriberRegistry()
    received: list[int] = []

    handle = registry.add(received.append)
    registry.remove(handle)
    registry.remove(handle)

    registry.publish(1)
    assert received == []
    assert len(registry) == 0


def test_same_callback_twice_gets_separate_handles():
    registry: SubscriberRegistry[int] = SubscriberRegistry()
    received: list[int] = []

    first = registry.add(received.append)
    registry.add(received.append)
    registry.remove(first)

    registry.publish(7)
    assert received == [7]


def test_failing_subscriber_does_not_block_others(caplog):
    registry: SubscriberRegistry[str] = SubscriberRegistry()
    received: list[str] = []

    def broken(value: str) -> None:
        raise RuntimeError("subscriber bug")

    registry.add(received.append)
    registry.add(broken)
    registry.add(received.append)

    with caplog.at_level(logging.ERROR, logger="wl_transit.data.subscribers"):
        delivered = registry.publish("x")

    assert received == ["x", "x"]
    assert delivered == 2
    assert "raised during notification" in caplog.text


def test_unsubscribe_during_publish_skips_removed_subscriber():
    registry: SubscriberRegistry[str] = SubscriberRegistry()
    received: list[str] = []
    handles: dict[str, int] = {}

    def remove_second(value: str) -> None:
        received.append("first")
        registry.remove(handles["second"])

    handles["first"] = registry.add(remove_second)
    handles["second"] = registry.add(lambda value: received.append("second"))

    registry.publish("x")
    assert received == ["first"]


def test_subscribe_during_publish_waits_for_next_publish():
    registry: SubscriberRegistry[str] = SubscriberRegistry()
    received: list[str] = []

    def add_late(value: str) -> None:
        received.append(f"early:{value}")
        if len(registry) == 1:
            registry.add(lambda v: received.append(f"late:{v}"))

    registry.add(add_late)

    registry.publish("a")
    assert received == ["early:a"]

    registry.publish("b")
    assert received == ["early:a", "early:b", "late:b"]
