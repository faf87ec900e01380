"""
Display Module
==============
Pygame-based display wrapper for windowing, fullscreen, and pointer input.
Frames are drawn with OpenCV into numpy arrays and presented here.
"""

import pygame
import numpy as np
from typing import List, Tuple

from .input_port import PointerEvent, PointerKind


class ShowcaseDisplay:
    """
    Pygame-based display for the showcase.

    Features:
    - Fullscreen toggle
    - Resizable window (reported so layouts can recompute)
    - Mouse and touch translated to PointerEvents in window pixels
    """

    def __init__(self,
                 render_width: int = 1280,
                 render_height: int = 720,
                 title: str = "Showcase",
                 fullscreen: bool = False):
        """
        Initialize the display.

        Args:
            render_width: Window width
            render_height: Window height
            title: Window title
            fullscreen: Start in fullscreen mode
        """
        pygame.init()
        pygame.display.set_caption(title)

        self.render_width = render_width
        self.render_height = render_height
        self.title = title
        self._fullscreen = fullscreen
        self._running = True

        info = pygame.display.Info()
        self.screen_width = info.current_w
        self.screen_height = info.current_h

        self._create_window(fullscreen)

        self.clock = pygame.time.Clock()
        self.target_fps = 60  # 0 = uncapped

        # Fingers currently down, in touch order
        self._touches: dict = {}

    def set_target_fps(self, fps: int):
        """Set target FPS. Use 0 for uncapped."""
        self.target_fps = fps

    def _create_window(self, fullscreen: bool):
        """Create or recreate the window."""
        if fullscreen:
            flags = pygame.FULLSCREEN | pygame.SCALED
            self.screen = pygame.display.set_mode(
                (self.screen_width, self.screen_height),
                flags
            )
            self.display_width = self.screen_width
            self.display_height = self.screen_height
        else:
            self.screen = pygame.display.set_mode(
                (self.render_width, self.render_height),
                pygame.RESIZABLE
            )
            self.display_width = self.render_width
            self.display_height = self.render_height

        self._fullscreen = fullscreen

    def toggle_fullscreen(self):
        """Toggle between fullscreen and windowed mode."""
        self._create_window(not self._fullscreen)
        return self._fullscreen

    def get_display_size(self) -> Tuple[int, int]:
        return (self.display_width, self.display_height)

    def ticks_ms(self) -> float:
        """Milliseconds since pygame.init(), used as the frame timestamp."""
        return float(pygame.time.get_ticks())

    def _touch_list(self) -> List[Tuple[float, float]]:
        return [self._touches[k] for k in sorted(self._touches)]

    def _finger_pos(self, event) -> Tuple[float, float]:
        # Finger coordinates arrive normalized 0-1
        return (event.x * self.display_width, event.y * self.display_height)

    def process_events(self) -> dict:
        """
        Process pygame events and return relevant showcase events.

        Returns:
            Dictionary with:
            - 'quit': True if window should close
            - 'key_down': List of keys just pressed this frame
            - 'pointer': List of PointerEvents in arrival order
            - 'resized': New size if window was resized, None otherwise
        """
        events = {
            'quit': False,
            'key_down': [],
            'pointer': [],
            'resized': None,
        }
        pointer = events['pointer']

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                events['quit'] = True
                self._running = False

            elif event.type == pygame.KEYDOWN:
                events['key_down'].append(event.key)

                if event.key == pygame.K_F11:
                    self.toggle_fullscreen()
                    events['resized'] = (self.display_width, self.display_height)

            elif event.type == pygame.VIDEORESIZE:
                self.display_width = event.w
                self.display_height = event.h
                self.render_width = event.w
                self.render_height = event.h
                events['resized'] = (event.w, event.h)

            elif event.type in (pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP, pygame.MOUSEMOTION):
                # Touch screens also emit synthetic mouse events; fingers are handled below
                if getattr(event, 'touch', False):
                    continue
                x, y = event.pos
                if event.type == pygame.MOUSEMOTION:
                    pointer.append(PointerEvent(PointerKind.MOUSE_MOVE, x, y))
                elif event.button == 1:
                    kind = PointerKind.MOUSE_DOWN if event.type == pygame.MOUSEBUTTONDOWN else PointerKind.MOUSE_UP
                    pointer.append(PointerEvent(kind, x, y))

            elif event.type == pygame.FINGERDOWN:
                self._touches[event.finger_id] = self._finger_pos(event)
                x, y = self._finger_pos(event)
                pointer.append(PointerEvent(PointerKind.TOUCH_START, x, y, self._touch_list()))

            elif event.type == pygame.FINGERMOTION:
                if event.finger_id in self._touches:
                    self._touches[event.finger_id] = self._finger_pos(event)
                x, y = self._finger_pos(event)
                pointer.append(PointerEvent(PointerKind.TOUCH_MOVE, x, y, self._touch_list()))

            elif event.type == pygame.FINGERUP:
                self._touches.pop(event.finger_id, None)
                x, y = self._finger_pos(event)
                pointer.append(PointerEvent(PointerKind.TOUCH_END, x, y, self._touch_list()))

            elif event.type == pygame.WINDOWLEAVE:
                pointer.append(PointerEvent(PointerKind.LEAVE))

        return events

    def show_frame(self, frame: np.ndarray):
        """
        Display an OpenCV frame (BGR numpy array), scaled to the window.
        """
        # OpenCV is BGR and HxWxC, pygame wants RGB and WxHxC
        frame_rgb = frame[:, :, ::-1]
        surface = pygame.surfarray.make_surface(frame_rgb.swapaxes(0, 1))

        if (surface.get_width() != self.display_width or
                surface.get_height() != self.display_height):
            surface = pygame.transform.scale(surface, (self.display_width, self.display_height))

        self.screen.blit(surface, (0, 0))
        pygame.display.flip()

        if self.target_fps > 0:
            self.clock.tick(self.target_fps)
        else:
            self.clock.tick()

    @property
    def running(self) -> bool:
        return self._running

    def close(self):
        """Close the display and clean up pygame."""
        self._running = False
        pygame.quit()


class Keys:
    """Pygame key constants for convenience."""
    ESCAPE = pygame.K_ESCAPE
    F11 = pygame.K_F11
    Q = pygame.K_q
    LEFT = pygame.K_LEFT
    RIGHT = pygame.K_RIGHT
    HOME = pygame.K_HOME
