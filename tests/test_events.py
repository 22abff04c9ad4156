import pytest

from spriteforge.events import EventDispatcher, EventType


def test_listener_ids_start_at_one_and_increase():
    dispatcher = EventDispatcher()
    ids = [
        dispatcher.register_listener(EventType.SCORE_REACHED, lambda e, t: None)
        for _ in range(3)
    ]
    assert ids == [1, 2, 3]


def test_ids_are_unique_across_events():
    dispatcher = EventDispatcher()
    a = dispatcher.register_listener(EventType.ASTEROID_DESTROYED, lambda e, t: None)
    b = dispatcher.register_listener(EventType.ENEMY_DESTROYED, lambda e, t: None)
    assert a != b
    assert b > a


def test_dispatch_passes_event_and_trigger():
    dispatcher = EventDispatcher()
    received = []
    dispatcher.register_listener(
        EventType.ASTEROID_DESTROYED, lambda e, t: received.append((e, t))
    )
    trigger = object()
    dispatcher.dispatch(EventType.ASTEROID_DESTROYED, trigger)
    assert received == [(EventType.ASTEROID_DESTROYED, trigger)]


def test_dispatch_only_reaches_listeners_of_that_event():
    dispatcher = EventDispatcher()
    received = []
    dispatcher.register_listener(EventType.ENEMY_DESTROYED, lambda e, t: received.append(e))
    dispatcher.dispatch(EventType.PLAY_BUTTON_PRESSED, None)
    assert received == []


def test_listeners_run_in_registration_order():
    dispatcher = EventDispatcher()
    order = []
    dispatcher.register_listener(EventType.SCORE_REACHED, lambda e, t: order.append("a"))
    dispatcher.register_listener(EventType.SCORE_REACHED, lambda e, t: order.append("b"))
    dispatcher.register_listener(EventType.SCORE_REACHED, lambda e, t: order.append("c"))
    dispatcher.dispatch(EventType.SCORE_REACHED, None)
    assert order == ["a", "b", "c"]


def test_unregistered_listener_is_not_called():
    dispatcher = EventDispatcher()
    calls = []
    kept = dispatcher.register_listener(EventType.SCORE_REACHED, lambda e, t: calls.append("kept"))
    removed = dispatcher.register_listener(
        EventType.SCORE_REACHED, lambda e, t: calls.append("removed")
    )
    dispatcher.unregister_listener(EventType.SCORE_REACHED, removed)
    dispatcher.dispatch(EventType.SCORE_REACHED, None)
    assert calls == ["kept"]
    assert kept != removed


def test_unregister_on_other_event_leaves_listener():
    dispatcher = EventDispatcher()
    calls = []
    listener = dispatcher.register_listener(EventType.SCORE_REACHED, lambda e, t: calls.append(t))
    dispatcher.unregister_listener(EventType.ENEMY_DESTROYED, listener)
    dispatcher.dispatch(EventType.SCORE_REACHED, "x")
    assert calls == ["x"]


def test_failing_listener_does_not_stop_others():
    dispatcher = EventDispatcher()
    calls = []

    def boom(event, trigger):
        raise RuntimeError("listener failed")

    dispatcher.register_listener(EventType.PLAY_BUTTON_PRESSED, boom)
    dispatcher.register_listener(EventType.PLAY_BUTTON_PRESSED, lambda e, t: calls.append(t))
    dispatcher.dispatch(EventType.PLAY_BUTTON_PRESSED, "go")
    assert calls == ["go"]


def test_register_rejects_non_callable():
    dispatcher = EventDispatcher()
    with pytest.raises(TypeError):
        dispatcher.register_listener(EventType.SCORE_REACHED, None)


def test_unregister_rejects_id_zero():
    dispatcher = EventDispatcher()
    with pytest.raises(ValueError):
        dispatcher.unregister_listener(EventType.SCORE_REACHED, 0)