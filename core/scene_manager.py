"""
Scene Manager Module
====================
Scene registration and switching for the showcase window.

Features:
- Named scenes with enter/exit hooks
- Pointer, key and resize events forwarded to the active scene
"""

import numpy as np
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from .input_port import PointerEvent


class Scene(ABC):
    """Base class for showcase scenes."""

    def __init__(self):
        self.manager: Optional['SceneManager'] = None
        self.name: str = ""

    def on_enter(self, width: int, height: int, previous_scene: Optional[str] = None):
        """Called when this scene becomes active."""
        pass

    def on_exit(self, next_scene: Optional[str] = None):
        """Called when leaving this scene."""
        pass

    def on_resize(self, width: int, height: int):
        pass

    def handle_pointer(self, event: PointerEvent):
        pass

    def handle_action(self, action: str):
        """Handle a named keyboard action ('next', 'prev', ...)."""
        pass

    @abstractmethod
    def update(self, delta_time: float):
        """Update scene logic."""
        pass

    @abstractmethod
    def render(self, frame: np.ndarray):
        """Render the scene to the frame."""
        pass


class SceneManager:
    """Holds the registered scenes and forwards events to the active one."""

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height

        self.scenes: Dict[str, Scene] = {}
        self.current_scene: Optional[str] = None

    def add_scene(self, name: str, scene: Scene):
        scene.manager = self
        scene.name = name
        self.scenes[name] = scene

    def set_scene(self, name: str):
        """Switch to a scene by name."""
        if name not in self.scenes:
            raise ValueError(f"Scene '{name}' not found")

        if self.current_scene:
            self.scenes[self.current_scene].on_exit(name)

        prev = self.current_scene
        self.current_scene = name
        self.scenes[name].on_enter(self.width, self.height, prev)

    @property
    def active(self) -> Optional[Scene]:
        if self.current_scene is None:
            return None
        return self.scenes[self.current_scene]

    def resize(self, width: int, height: int):
        self.width = width
        self.height = height
        if self.active:
            self.active.on_resize(width, height)

    def dispatch_pointer(self, events: List[PointerEvent]):
        if not self.active:
            return
        for event in events:
            self.active.handle_pointer(event)

    def dispatch_action(self, action: str):
        if self.active:
            self.active.handle_action(action)

    def update(self, delta_time: float):
        if self.active:
            self.active.update(delta_time)

    def render(self, frame: np.ndarray):
        if self.active:
            self.active.render(frame)
