"""Event bus tests."""

from __future__ import annotations

import logging

import pytest

from league_sync.schemas.events import OPT_OUT_CHANGED, XP_EARNED, OptOutChanged, XPEarned
from league_sync.services.event_bus import EventBus, default_event_bus


def test_emit_delivers_to_all_subscribers(bus: EventBus) -> None:
    seen: list[tuple[str, object]] = []
    bus.on("custom", lambda payload: seen.append(("a", payload)))
    bus.on("custom", lambda payload: seen.append(("b", payload)))

    bus.emit("custom", 7)

    assert seen == [("a", 7), ("b", 7)]


def test_unsubscribe_stops_delivery(bus: EventBus) -> None:
    seen: list[object] = []
    unsubscribe = bus.on("custom", seen.append)
    unsubscribe()
    unsubscribe()

    bus.emit("custom", 1)

    assert seen == []
    assert bus.listener_count("custom") == 0


def test_off_removes_callback(bus: EventBus) -> None:
    seen: list[object] = []
    bus.on("custom", seen.append)
    bus.off("custom", seen.append)
    bus.off("missing", seen.append)

    bus.emit("custom", 1)

    assert seen == []


def test_once_listener_fires_a_single_time(bus: EventBus) -> None:
    seen: list[object] = []
    bus.once("custom", seen.append)

    bus.emit("custom", 1)
    bus.emit("custom", 2)

    assert seen == [1]
    assert bus.listener_count("custom") == 0


def test_failing_listener_does_not_block_others(
    bus: EventBus, caplog: pytest.LogCaptureFixture
) -> None:
    """A raising listener is logged and the rest still run."""
    seen: list[object] = []

    def broken(_: object) -> None:
        raise RuntimeError("boom")

    bus.on("custom", broken)
    bus.on("custom", seen.append)

    with caplog.at_level(logging.ERROR, logger="league_sync.services.event_bus"):
        bus.emit("custom", "payload")

    assert seen == ["payload"]
    assert "Error in listener" in caplog.text


def test_known_topic_dicts_are_validated(bus: EventBus) -> None:
    """Dict payloads on catalogued topics arrive as payload models."""
    seen: list[object] = []
    bus.on(XP_EARNED, seen.append)
    bus.on(OPT_OUT_CHANGED, seen.append)

    bus.emit(XP_EARNED, {"amount": 25})
    bus.emit(OPT_OUT_CHANGED, {"userId": "u1", "isOptedIn": False})

    assert seen == [XPEarned(amount=25), OptOutChanged(user_id="u1", is_opted_in=False)]


def test_fractional_xp_amount_is_delivered(bus: EventBus) -> None:
    seen: list[object] = []
    bus.on(XP_EARNED, seen.append)

    bus.emit(XP_EARNED, {"amount": 2.5})

    assert seen == [XPEarned(amount=2.5)]


def test_invalid_payload_on_known_topic_is_dropped(
    bus: EventBus, caplog: pytest.LogCaptureFixture
) -> None:
    """A malformed payload never reaches listeners and never raises into the emitter."""
    seen: list[object] = []
    bus.on(XP_EARNED, seen.append)

    with caplog.at_level(logging.WARNING, logger="league_sync.services.event_bus"):
        bus.emit(XP_EARNED, {"amount": "lots"})

    assert seen == []
    assert bus.history() == []
    assert "Dropping invalid" in caplog.text


def test_history_is_bounded() -> None:
    bus = EventBus(history_size=3)
    for value in range(5):
        bus.emit("custom", value)

    assert [event.payload for event in bus.history()] == [2, 3, 4]
    bus.clear_history()
    assert bus.history() == []


def test_registered_topics_and_remove_all(bus: EventBus) -> None:
    bus.on("a", print)
    bus.on("b", print)
    assert sorted(bus.registered_topics()) == ["a", "b"]

    bus.remove_all_listeners("a")
    assert bus.registered_topics() == ["b"]

    bus.remove_all_listeners()
    assert bus.registered_topics() == []


def test_separate_buses_do_not_cross_talk() -> None:
    first, second = EventBus(), EventBus()
    seen: list[object] = []
    first.on("custom", seen.append)

    second.emit("custom", 1)

    assert seen == []


def test_default_event_bus_is_shared() -> None:
    assert default_event_bus() is default_event_bus()
