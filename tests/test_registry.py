"""Unit tests for the listener registry."""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from pulse_core import registry as registry_module
from pulse_core.registry import ListenerRegistry


@dataclass
class Audit:
    channel: str

    def __call__(self, _event) -> None:
        return None


def _noop(_event) -> None:
    return None


def test_listeners_are_ordered_by_priority_then_insertion() -> None:
    registry = ListenerRegistry()

    def first(_): ...
    def second(_): ...
    def high(_): ...
    def low(_): ...

    registry.attach("ready", first)
    registry.attach("ready", second)
    registry.attach("ready", high, priority=5)
    registry.attach("ready", low, priority=-1)

    assert list(registry.get_listeners_for_event("ready")) == [high, first, second, low]


def test_unknown_event_yields_nothing() -> None:
    registry = ListenerRegistry()
    assert list(registry.get_listeners_for_event("missing")) == []
    assert not registry.has_listeners("missing")


def test_reads_do_not_consume_the_stored_queue() -> None:
    registry = ListenerRegistry()
    registry.attach("ready", _noop)

    assert list(registry.get_listeners_for_event("ready")) == [_noop]
    assert list(registry.get_listeners_for_event("ready")) == [_noop]


def test_snapshot_is_taken_at_call_time() -> None:
    registry = ListenerRegistry()

    def late(_): ...

    registry.attach("ready", _noop)
    snapshot = registry.get_listeners_for_event("ready")
    registry.attach("ready", late)

    assert list(snapshot) == [_noop]
    assert list(registry.get_listeners_for_event("ready")) == [_noop, late]


def test_clear_only_affects_one_event() -> None:
    registry = ListenerRegistry()
    registry.attach("A", _noop)
    registry.attach("B", _noop)

    registry.clear("A")

    assert list(registry.get_listeners_for_event("A")) == []
    assert list(registry.get_listeners_for_event("B")) == [_noop]
    assert registry.event_names() == ("B",)


def test_clear_unknown_event_is_harmless() -> None:
    registry = ListenerRegistry()
    registry.clear("missing")
    registry.clear("missing")
    assert list(registry.get_listeners_for_event("missing")) == []


def test_detach_removes_listener_and_keeps_order() -> None:
    registry = ListenerRegistry()

    def one(_): ...
    def two(_): ...
    def three(_): ...

    registry.attach("ready", one)
    registry.attach("ready", two)
    registry.attach("ready", three)

    assert registry.detach("ready", two) is True
    assert list(registry.get_listeners_for_event("ready")) == [one, three]


def test_detach_removes_only_first_duplicate() -> None:
    registry = ListenerRegistry()
    registry.attach("ready", _noop, priority=1)
    registry.attach("ready", _noop, priority=1)

    assert registry.detach("ready", _noop) is True
    assert list(registry.get_listeners_for_event("ready")) == [_noop]


def test_attach_after_detach_stays_behind_existing_listeners() -> None:
    registry = ListenerRegistry()

    def one(_): ...
    def two(_): ...
    def three(_): ...

    registry.attach("ready", one)
    registry.attach("ready", two)
    registry.detach("ready", one)
    registry.attach("ready", three)

    assert list(registry.get_listeners_for_event("ready")) == [two, three]


def test_detach_matches_bound_methods() -> None:
    class Handler:
        def on_ready(self, _event) -> None:
            return None

    handler = Handler()
    registry = ListenerRegistry()
    registry.attach("ready", handler.on_ready)

    assert registry.detach("ready", handler.on_ready) is True
    assert not registry.has_listeners("ready")


def test_detach_unknown_listener_or_event_returns_false() -> None:
    registry = ListenerRegistry()
    assert registry.detach("missing", _noop) is False

    registry.attach("ready", _noop)
    assert registry.detach("ready", lambda _: None) is False
    assert list(registry.get_listeners_for_event("ready")) == [_noop]


def test_attach_by_class_matches_instances() -> None:
    class OrderPlaced:
        pass

    registry = ListenerRegistry()
    registry.attach(OrderPlaced, _noop)

    assert list(registry.get_listeners_for_event(OrderPlaced())) == [_noop]


def test_attach_rejects_non_callables() -> None:
    with pytest.raises(TypeError):
        ListenerRegistry().attach("ready", "not callable")  # type: ignore[arg-type]


def test_detach_matches_by_identity_not_equality() -> None:
    first = Audit("log")
    second = Audit("log")
    assert first == second

    registry = ListenerRegistry()
    registry.attach("ready", first)
    registry.attach("ready", second)

    assert registry.detach("ready", second) is True
    remaining = list(registry.get_listeners_for_event("ready"))
    assert len(remaining) == 1
    assert remaining[0] is first


def test_detach_equal_but_distinct_listener_returns_false() -> None:
    registry = ListenerRegistry()
    registry.attach("ready", Audit("log"))

    assert registry.detach("ready", Audit("log")) is False
    assert registry.has_listeners("ready")


def test_detach_bound_method_of_other_instance_does_not_match() -> None:
    class Handler:
        def on_ready(self, _event) -> None:
            return None

    registry = ListenerRegistry()
    registry.attach("ready", Handler().on_ready)

    assert registry.detach("ready", Handler().on_ready) is False


def test_failed_detach_leaves_queue_unchanged(monkeypatch: pytest.MonkeyPatch) -> None:
    def one(_): ...
    def two(_): ...

    registry = ListenerRegistry()
    registry.attach("ready", one, priority=5)
    registry.attach("ready", two)

    def broken(_candidate, _listener) -> bool:
        raise TypeError("cannot compare listeners")

    monkeypatch.setattr(registry_module, "_same_listener", broken)
    with pytest.raises(TypeError):
        registry.detach("ready", two)

    assert list(registry.get_listeners_for_event("ready")) == [one, two]


def test_detach_with_mixed_priorities_keeps_original_order() -> None:
    def low_first(_): ...
    def high_first(_): ...
    def low_second(_): ...
    def middle(_): ...
    def high_second(_): ...

    registry = ListenerRegistry()
    registry.attach("ready", low_first, priority=-3)
    registry.attach("ready", high_first, priority=10)
    registry.attach("ready", low_second, priority=-3)
    registry.attach("ready", middle, priority=2)
    registry.attach("ready", high_second, priority=10)

    assert registry.detach("ready", middle) is True
    assert list(registry.get_listeners_for_event("ready")) == [
        high_first,
        high_second,
        low_first,
        low_second,
    ]

    def late_high(_): ...

    registry.attach("ready", late_high, priority=10)
    assert list(registry.get_listeners_for_event("ready"))[:3] == [
        high_first,
        high_second,
        late_high,
    ]
