"""Tests for BaseViewModel: pure Python, no Qt dependency."""

from dataclasses import dataclass

from listsource.events.bus import EventBus, Event
from listsource.viewmodels.base import BaseViewModel
from listsource.viewmodels.signal import Signal


@dataclass(kw_only=True)
class _FakeEvent(Event):
    payload: str = ""


class TestBaseViewModel:
    def test_subscribe_event_receives_events(self):
        bus = EventBus()
        vm = BaseViewModel()
        received = []

        vm.subscribe_event(bus, _FakeEvent, lambda e: received.append(e.payload))
        bus.publish(_FakeEvent(payload="hello"))

        assert received == ["hello"]

    def test_dispose_cancels_subscriptions(self):
        bus = EventBus()
        vm = BaseViewModel()
        received = []

        vm.subscribe_event(bus, _FakeEvent, lambda e: received.append(e.payload))
        bus.publish(_FakeEvent(payload="before"))
        vm.dispose()
        bus.publish(_FakeEvent(payload="after"))

        assert received == ["before"]

    def test_connect_signal_tracked_and_released(self):
        sig = Signal()
        vm = BaseViewModel()
        received = []

        vm.connect_signal(sig, received.append)
        sig.emit("before")
        vm.dispose()
        sig.emit("after")

        assert received == ["before"]
        assert sig.handler_count == 0

    def test_dispose_tolerates_already_disconnected(self):
        sig = Signal()
        vm = BaseViewModel()
        handler = lambda: None

        vm.connect_signal(sig, handler)
        sig.disconnect(handler)
        vm.dispose()

        assert vm._connections == []
