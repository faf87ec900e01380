"""
Carousel Scene
==============
The features section of the showcase: an endless strip of feature cards.

- Cards drift left on their own and loop forever
- Drag (mouse or finger) to scrub, release to fling
- Hovering pauses the drift
- Arrows step one card, dots jump to a page
"""

import cv2
import numpy as np
from typing import List, Optional, Tuple

from core.carousel_engine import ContinuousCarousel
from core.frame_scheduler import FrameScheduler
from core.input_port import PointerEvent, PointerKind, PointerRouter
from core.scene_manager import Scene
from core.track import HostDocument, IndicatorStrip, Slide, Track, Viewport
from ui.settings import ShowcaseSettings


BACKGROUND = (30, 26, 24)
TITLE_COLOR = (220, 220, 225)
DOT_ACTIVE = (200, 200, 220)
DOT_IDLE = (80, 80, 100)
ARROW_COLOR = (150, 150, 165)

DOT_RADIUS = 6
DOT_SPACING = 24
ARROW_SIZE = 15
ARROW_HIT = 30


def wrap_text(text: str, max_width: int, font=cv2.FONT_HERSHEY_SIMPLEX,
              scale: float = 0.5, thickness: int = 1) -> List[str]:
    """Greedy word wrap measured with cv2.getTextSize."""
    lines: List[str] = []
    current = ""
    for word in text.split():
        candidate = f"{current} {word}".strip()
        (tw, _), _ = cv2.getTextSize(candidate, font, scale, thickness)
        if tw <= max_width or not current:
            current = candidate
        else:
            lines.append(current)
            current = word
    if current:
        lines.append(current)
    return lines


class CarouselScene(Scene):
    """Hosts one ContinuousCarousel and draws it with OpenCV."""

    def __init__(self, settings: ShowcaseSettings, scheduler: FrameScheduler,
                 document: Optional[HostDocument] = None, title: str = "FEATURES"):
        super().__init__()
        self.settings = settings
        self.scheduler = scheduler
        self.document = document or HostDocument()
        self.title = title

        self.width = 0
        self.height = 0
        self.viewport = Viewport()
        self.track: Optional[Track] = None
        self.indicators = IndicatorStrip(enabled=settings.carousel.show_indicators)
        self.carousel: Optional[ContinuousCarousel] = None
        self.router: Optional[PointerRouter] = None
        self.show_debug = False

    # =====================
    # LAYOUT
    # =====================
    def _layout(self, width: int, height: int):
        self.width = width
        self.height = height
        margin = min(self.settings.graphics.side_margin, int(width * 0.08))
        self.viewport.x = margin
        self.viewport.y = int(height * 0.22)
        self.viewport.width = max(0, width - 2 * margin)
        self.viewport.height = int(height * 0.5)

    @property
    def prev_button_center(self) -> Tuple[int, int]:
        return (self.viewport.x // 2, self.viewport.y + self.viewport.height // 2)

    @property
    def next_button_center(self) -> Tuple[int, int]:
        return (self.width - self.viewport.x // 2, self.viewport.y + self.viewport.height // 2)

    def dot_centers(self) -> List[Tuple[int, int]]:
        count = len(self.indicators)
        if count == 0:
            return []
        y = self.viewport.y + self.viewport.height + 40
        start_x = (self.width - (count - 1) * DOT_SPACING) // 2
        return [(start_x + i * DOT_SPACING, y) for i in range(count)]

    # =====================
    # LIFECYCLE
    # =====================
    def on_enter(self, width: int, height: int, previous_scene: Optional[str] = None):
        if self.carousel:
            self.carousel.destroy()

        self._layout(width, height)
        self.track = Track([
            Slide(title=s.title, body=s.body, color=tuple(s.color))
            for s in self.settings.slides
        ])
        self.carousel = ContinuousCarousel(
            self.track,
            self.viewport,
            self.scheduler,
            config=self.settings.carousel.to_config(),
            window_width=width,
            indicators=self.indicators,
            document=self.document,
        )
        self.router = PointerRouter(self.carousel, hit_test=self.viewport.contains)

    def on_exit(self, next_scene: Optional[str] = None):
        if self.carousel:
            self.carousel.destroy()

    def on_resize(self, width: int, height: int):
        self._layout(width, height)
        if self.carousel:
            self.carousel.on_resize(width, self.viewport.width)

    # =====================
    # INPUT
    # =====================
    def handle_pointer(self, event: PointerEvent):
        if not self.carousel:
            return
        if event.kind in (PointerKind.MOUSE_DOWN, PointerKind.TOUCH_START):
            point = (event.x, event.y)
            if event.kind == PointerKind.TOUCH_START:
                point = event.first_touch
            if point is not None and self._click_controls(*point):
                return
        self.router.dispatch(event)

    def _click_controls(self, x: float, y: float) -> bool:
        """Arrow and dot hit testing. Returns True if a control took the click."""
        if self._near(x, y, self.prev_button_center, ARROW_HIT):
            self.carousel.prev()
            return True
        if self._near(x, y, self.next_button_center, ARROW_HIT):
            self.carousel.next()
            return True
        for page, center in enumerate(self.dot_centers()):
            if self._near(x, y, center, DOT_SPACING // 2):
                self.carousel.go_to_page(page)
                return True
        return False

    @staticmethod
    def _near(x: float, y: float, center: Tuple[int, int], radius: float) -> bool:
        return abs(x - center[0]) <= radius and abs(y - center[1]) <= radius

    def handle_action(self, action: str):
        if not self.carousel:
            return
        if action == 'next':
            self.carousel.next()
        elif action == 'prev':
            self.carousel.prev()
        elif action == 'home':
            self.carousel.go_to_page(0)
        elif action == 'debug':
            self.show_debug = not self.show_debug

    def update(self, delta_time: float):
        # Motion is driven by the frame scheduler
        pass

    # =====================
    # RENDER
    # =====================
    def render(self, frame: np.ndarray):
        frame[:] = BACKGROUND
        font = cv2.FONT_HERSHEY_SIMPLEX

        (tw, _), _ = cv2.getTextSize(self.title, font, 1.1, 2)
        cv2.putText(frame, self.title, ((self.width - tw) // 2, self.viewport.y - 40),
                    font, 1.1, TITLE_COLOR, 2)

        if not self.carousel or not self.carousel.mounted:
            return

        self._render_track(frame)
        self._render_indicators(frame)
        self._draw_arrow(frame, *self.prev_button_center, "left")
        self._draw_arrow(frame, *self.next_button_center, "right")

        if self.show_debug:
            self._render_debug(frame)

    def _render_track(self, frame: np.ndarray):
        vp = self.viewport
        if vp.width <= 0 or vp.height <= 0:
            return
        canvas = np.full((vp.height, vp.width, 3), BACKGROUND, dtype=np.uint8)

        carousel = self.carousel
        offset = self.track.offset_x
        slide_w = carousel.slide_width
        step = carousel.step
        font = cv2.FONT_HERSHEY_SIMPLEX

        for i, slide in enumerate(self.track.slides):
            x0 = offset + i * step
            if x0 > vp.width or x0 + slide_w < 0:
                continue
            left, right = int(round(x0)), int(round(x0 + slide_w))
            cv2.rectangle(canvas, (left, 0), (right, vp.height - 1), slide.color, -1)
            cv2.rectangle(canvas, (left, 0), (right, vp.height - 1), (120, 120, 130), 1)

            cv2.putText(canvas, slide.title, (left + 20, 50), font, 0.8, (240, 240, 240), 2)
            y = 90
            for line in wrap_text(slide.body, max(1, int(slide_w) - 40)):
                cv2.putText(canvas, line, (left + 20, y), font, 0.5, (210, 210, 210), 1)
                y += 24

        frame[vp.y:vp.y + vp.height, vp.x:vp.x + vp.width] = canvas

    def _render_indicators(self, frame: np.ndarray):
        for dot, center in zip(self.indicators, self.dot_centers()):
            if dot.active:
                cv2.circle(frame, center, DOT_RADIUS, DOT_ACTIVE, -1)
            else:
                cv2.circle(frame, center, DOT_RADIUS, DOT_IDLE, 2)

    def _draw_arrow(self, frame: np.ndarray, x: int, y: int, direction: str):
        size = ARROW_SIZE
        if direction == "left":
            pts = np.array([[x + size // 2, y - size], [x - size // 2, y], [x + size // 2, y + size]], np.int32)
        else:
            pts = np.array([[x - size // 2, y - size], [x + size // 2, y], [x - size // 2, y + size]], np.int32)
        cv2.polylines(frame, [pts], False, ARROW_COLOR, 2)

    def _render_debug(self, frame: np.ndarray):
        c = self.carousel
        font = cv2.FONT_HERSHEY_SIMPLEX
        lines = [
            f"pos {c.position:9.1f}  track {c.track_width:7.1f}",
            f"vel {c.velocity:+9.1f}  per view {c.items_per_view}",
            f"autoplay {c.autoplay.state.name}  drag {c.drag.phase.name}",
        ]
        y = 24
        for line in lines:
            cv2.putText(frame, line, (12, y), font, 0.45, (0, 255, 255), 1)
            y += 18
