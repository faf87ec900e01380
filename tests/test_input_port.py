"""Tests for pointer routing."""

import pytest

from core.input_port import InputPort, PointerEvent, PointerKind, PointerRouter


class RecordingPort(InputPort):
    """InputPort that records every call."""

    def __init__(self):
        self.calls = []

    def on_press_start(self, client_x):
        self.calls.append(("start", client_x))

    def on_press_move(self, client_x):
        self.calls.append(("move", client_x))

    def on_press_end(self):
        self.calls.append(("end",))

    def on_pointer_enter(self):
        self.calls.append(("enter",))

    def on_pointer_leave(self):
        self.calls.append(("leave",))


def inside_box(x, y):
    return 100 <= x < 500 and 50 <= y < 250


@pytest.fixture
def port() -> RecordingPort:
    return RecordingPort()


@pytest.fixture
def router(port) -> PointerRouter:
    return PointerRouter(port, hit_test=inside_box)


class TestMouse:
    """Mouse events."""

    def test_press_inside_starts(self, router, port):
        event = PointerEvent(PointerKind.MOUSE_DOWN, 200, 100)
        assert router.dispatch(event)
        assert port.calls == [("start", 200)]
        assert event.default_prevented

    def test_press_outside_ignored(self, router, port):
        assert not router.dispatch(PointerEvent(PointerKind.MOUSE_DOWN, 20, 100))
        assert port.calls == []

    def test_move_routed_anywhere(self, router, port):
        router.dispatch(PointerEvent(PointerKind.MOUSE_MOVE, 900, 900))
        assert ("move", 900) in port.calls

    def test_release_routed_anywhere(self, router, port):
        router.dispatch(PointerEvent(PointerKind.MOUSE_UP, 900, 900))
        assert port.calls == [("end",)]


class TestTouch:
    """Single-finger touch events."""

    def test_start_uses_first_touch(self, router, port):
        event = PointerEvent(PointerKind.TOUCH_START, 0, 0, touches=[(150, 60), (400, 200)])
        assert router.dispatch(event)
        assert port.calls == [("start", 150)]
        assert event.default_prevented

    def test_start_without_touches_ignored(self, router, port):
        event = PointerEvent(PointerKind.TOUCH_START, 150, 60, touches=[])
        assert not router.dispatch(event)
        assert port.calls == []
        assert not event.default_prevented

    def test_start_outside_ignored(self, router, port):
        assert not router.dispatch(PointerEvent(PointerKind.TOUCH_START, touches=[(10, 10)]))
        assert port.calls == []

    def test_move(self, router, port):
        event = PointerEvent(PointerKind.TOUCH_MOVE, touches=[(320, 80)])
        assert router.dispatch(event)
        assert port.calls == [("move", 320)]
        assert event.default_prevented

    def test_move_without_touches_ignored(self, router, port):
        assert not router.dispatch(PointerEvent(PointerKind.TOUCH_MOVE))
        assert port.calls == []

    def test_end(self, router, port):
        router.dispatch(PointerEvent(PointerKind.TOUCH_END))
        assert port.calls == [("end",)]


class TestHover:
    """Enter/leave edges."""

    def test_enter_then_leave(self, router, port):
        router.dispatch(PointerEvent(PointerKind.MOUSE_MOVE, 200, 100))
        router.dispatch(PointerEvent(PointerKind.MOUSE_MOVE, 210, 100))
        router.dispatch(PointerEvent(PointerKind.MOUSE_MOVE, 900, 100))
        hover = [c for c in port.calls if c[0] in ("enter", "leave")]
        assert hover == [("enter",), ("leave",)]

    def test_window_leave(self, router, port):
        router.update_hover(200, 100)
        router.dispatch(PointerEvent(PointerKind.LEAVE))
        assert port.calls == [("enter",), ("leave",)]
        assert not router.hovering

    def test_leave_when_outside_is_silent(self, router, port):
        assert not router.dispatch(PointerEvent(PointerKind.LEAVE))
        assert port.calls == []

    def test_enter_event(self, router, port):
        assert router.dispatch(PointerEvent(PointerKind.ENTER, 300, 100))
        assert port.calls == [("enter",)]


class TestPointerEvent:
    """Event record helpers."""

    def test_first_touch(self):
        assert PointerEvent(PointerKind.TOUCH_MOVE, touches=[(1, 2), (3, 4)]).first_touch == (1, 2)
        assert PointerEvent(PointerKind.TOUCH_MOVE).first_touch is None

    def test_prevent_default(self):
        event = PointerEvent(PointerKind.MOUSE_DOWN)
        assert not event.default_prevented
        event.prevent_default()
        assert event.default_prevented
