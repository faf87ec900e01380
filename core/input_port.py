"""
Input Port Module
=================
Pointer input for draggable widgets.

Mouse and single-finger touch go through the same three calls, so a
widget never sees where an event came from:

    router = PointerRouter(carousel, hit_test=viewport.contains)
    for event in display_events['pointer']:
        router.dispatch(event)
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Callable, List, Optional, Tuple


class PointerKind(Enum):
    """What produced the pointer event."""
    MOUSE_DOWN = auto()
    MOUSE_MOVE = auto()
    MOUSE_UP = auto()
    TOUCH_START = auto()
    TOUCH_MOVE = auto()
    TOUCH_END = auto()
    ENTER = auto()
    LEAVE = auto()


@dataclass
class PointerEvent:
    """
    One pointer event in window pixel coordinates.

    For touch events `touches` lists the fingers still on the surface,
    first finger first; mouse events leave it empty.
    """
    kind: PointerKind
    x: float = 0.0
    y: float = 0.0
    touches: List[Tuple[float, float]] = field(default_factory=list)
    default_prevented: bool = False

    def prevent_default(self):
        """Stop the host from running its own gesture (page scroll) for this event."""
        self.default_prevented = True

    @property
    def first_touch(self) -> Optional[Tuple[float, float]]:
        return self.touches[0] if self.touches else None


class InputPort(ABC):
    """Receiver of unified press/move/release input along the x axis."""

    @abstractmethod
    def on_press_start(self, client_x: float):
        pass

    @abstractmethod
    def on_press_move(self, client_x: float):
        pass

    @abstractmethod
    def on_press_end(self):
        pass

    def on_pointer_enter(self):
        """Pointer moved over the widget."""
        pass

    def on_pointer_leave(self):
        """Pointer left the widget."""
        pass


class PointerRouter:
    """
    Routes PointerEvents to an InputPort.

    Mouse presses only start a drag when they hit the widget; moves and
    releases are routed wherever they happen so a drag survives the
    cursor leaving the widget. Touch events without a finger are dropped.
    """

    def __init__(self, port: InputPort, hit_test: Callable[[float, float], bool]):
        self.port = port
        self.hit_test = hit_test
        self.hovering = False

    def dispatch(self, event: PointerEvent) -> bool:
        """
        Route one event.

        Returns:
            True if the port received a call
        """
        kind = event.kind

        if kind == PointerKind.MOUSE_DOWN:
            if not self.hit_test(event.x, event.y):
                return False
            event.prevent_default()
            self.port.on_press_start(event.x)
            return True

        if kind == PointerKind.MOUSE_MOVE:
            self.update_hover(event.x, event.y)
            self.port.on_press_move(event.x)
            return True

        if kind in (PointerKind.MOUSE_UP, PointerKind.TOUCH_END):
            self.port.on_press_end()
            return True

        if kind == PointerKind.TOUCH_START:
            touch = event.first_touch
            if touch is None or not self.hit_test(*touch):
                return False
            event.prevent_default()
            self.port.on_press_start(touch[0])
            return True

        if kind == PointerKind.TOUCH_MOVE:
            touch = event.first_touch
            if touch is None:
                return False
            self.port.on_press_move(touch[0])
            event.prevent_default()
            return True

        if kind == PointerKind.LEAVE:
            return self._set_hover(False)

        if kind == PointerKind.ENTER:
            return self.update_hover(event.x, event.y)

        return False

    def update_hover(self, x: float, y: float) -> bool:
        """Fire enter/leave when the pointer crosses the widget edge."""
        return self._set_hover(self.hit_test(x, y))

    def _set_hover(self, inside: bool) -> bool:
        if inside == self.hovering:
            return False
        self.hovering = inside
        if inside:
            self.port.on_pointer_enter()
        else:
            self.port.on_pointer_leave()
        return True
