"""
Carousel Engine Module
======================
Continuous-scroll carousel with drag, momentum and seamless looping.

The track holds three copies of the authored slides. The scroll position
is kept inside the middle copy, [-2 * track_width, -track_width), so
wrapping around never shows a jump: the copies on either side are
identical content.

Usage:
    scheduler = FrameScheduler()
    carousel = ContinuousCarousel(track, viewport, scheduler, window_width=1280)

    while running:
        scheduler.run_frame(clock_ms)   # autoplay tick
        render(track.transform)
"""

import math
import time
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Optional

from .frame_scheduler import FrameScheduler, SchedulerHandle
from .input_port import InputPort
from .track import HostDocument, IndicatorStrip, Track, Viewport


# Window width breakpoints (px) -> slides per view
BREAKPOINT_SINGLE = 768
BREAKPOINT_DOUBLE = 1024

# Below this speed (px/s) momentum is ignored
MOMENTUM_EPSILON = 0.1

# Smallest pointer sample interval (ms) used for velocity
MIN_SAMPLE_INTERVAL_MS = 1.0


def normalize_position(pos: float, track_width: float) -> float:
    """
    Map any offset onto the middle copy of the track.

    Returns the value congruent to `pos` modulo `track_width` that lies in
    [-2 * track_width, -track_width). A non-positive width means there is
    nothing to scroll, so the answer is 0.
    """
    if track_width <= 0:
        return 0.0
    o = track_width
    # Double modulo keeps the remainder in [0, o) for either operand sign
    mod = ((pos + 2 * o) % o + o) % o
    if mod >= o:
        # Float rounding can land exactly on o
        mod = 0.0
    return mod - 2 * o


def items_per_view_for(window_width: float) -> int:
    """Slides shown side by side at a given window width."""
    if window_width < BREAKPOINT_SINGLE:
        return 1
    if window_width < BREAKPOINT_DOUBLE:
        return 2
    return 3


@dataclass
class CarouselConfig:
    """
    Construction options.

    `autoplay_interval_ms` and `transition_duration_ms` belong to the
    stepped carousel; continuous scrolling stores them but does not use them.
    """
    items_per_view: int = 3
    autoplay_interval_ms: int = 5000
    transition_duration_ms: int = 600
    auto_scroll_speed: float = 100.0   # px per second, leftward
    friction: float = 5.0              # momentum decay rate, 1/s
    gap_rem: float = 1.5
    root_font_px: float = 16.0

    def __post_init__(self):
        if self.items_per_view < 1:
            raise ValueError(f"items_per_view must be >= 1, got {self.items_per_view}")
        if self.auto_scroll_speed < 0:
            raise ValueError(f"auto_scroll_speed must be >= 0, got {self.auto_scroll_speed}")
        if self.friction < 0:
            raise ValueError(f"friction must be >= 0, got {self.friction}")

    @property
    def gap_px(self) -> float:
        return self.gap_rem * self.root_font_px

    @classmethod
    def stepped(cls, **kwargs) -> 'CarouselConfig':
        """Config for the fixed-step carousel: no drift, navigation only."""
        kwargs.setdefault('auto_scroll_speed', 0.0)
        return cls(**kwargs)


class DragPhase(Enum):
    IDLE = auto()
    DRAGGING = auto()


@dataclass
class DragState:
    """Pointer bookkeeping for one drag. Sample fields are cleared on release."""
    phase: DragPhase = DragPhase.IDLE
    origin_client_x: float = 0.0
    origin_position: float = 0.0
    last_client_x: Optional[float] = None
    last_sample_time: Optional[float] = None  # ms

    @property
    def dragging(self) -> bool:
        return self.phase == DragPhase.DRAGGING

    def begin(self, client_x: float, position: float, now_ms: float):
        self.phase = DragPhase.DRAGGING
        self.origin_client_x = client_x
        self.origin_position = position
        self.last_client_x = client_x
        self.last_sample_time = now_ms

    def end(self):
        self.phase = DragPhase.IDLE
        self.last_client_x = None
        self.last_sample_time = None


def _perf_ms() -> float:
    return time.perf_counter() * 1000.0


class ContinuousCarousel(InputPort):
    """
    Infinite strip that drifts left, follows drags and coasts after release.

    Position changes come from three places: the per-frame autoplay tick,
    pointer drags and explicit navigation (next/prev/go_to_page). Ticks
    skip their position update while a drag is in progress.

    A carousel built without a track does nothing; every public method
    returns immediately.
    """

    def __init__(self,
                 track: Optional[Track],
                 viewport: Optional[Viewport],
                 scheduler: FrameScheduler,
                 config: Optional[CarouselConfig] = None,
                 window_width: Optional[float] = None,
                 indicators: Optional[IndicatorStrip] = None,
                 document: Optional[HostDocument] = None,
                 clock: Callable[[], float] = _perf_ms):
        """
        Args:
            track: Strip holding the authored slides (cloned here)
            viewport: Box whose width sizes the slides
            scheduler: Host frame queue
            config: Construction options
            window_width: Width used for breakpoints (defaults to viewport width)
            indicators: Page dot strip to fill, or None for no dots
            document: Host page whose text selection is disabled while dragging
            clock: Millisecond clock for pointer velocity sampling
        """
        self.config = config or CarouselConfig()
        self.track = track
        self.mounted = track is not None

        self.items_per_view = self.config.items_per_view
        self.auto_scroll_speed = self.config.auto_scroll_speed
        self.friction = self.config.friction
        self.autoplay_interval_ms = self.config.autoplay_interval_ms
        self.transition_duration_ms = self.config.transition_duration_ms

        self.position = 0.0
        self.velocity = 0.0
        self.slide_width = 0.0
        self.gap_px = 0.0
        self.original_count = 0
        self.current_index = 0

        self.drag = DragState()
        self.autoplay = SchedulerHandle(scheduler)
        self._last_timestamp: Optional[float] = None
        self._clock = clock

        self.viewport = viewport or Viewport()
        self.indicators = indicators if indicators is not None else IndicatorStrip(enabled=False)
        self.document = document or HostDocument()

        if not self.mounted:
            return

        self.track.will_change_transform = True
        self.original_count = self.track.clone_passes(2)

        total_pages = math.ceil(len(self.track.slides) / self.items_per_view)
        self.indicators.build(total_pages, active_index=0)

        if window_width is None:
            window_width = self.viewport.width
        self.on_resize(window_width, self.viewport.width)

        self.update_indicators()
        self.start_autoplay()

    # =====================
    # DERIVED
    # =====================
    @property
    def slides(self):
        return self.track.slides if self.mounted else []

    @property
    def track_width(self) -> float:
        """Pixel length of one authored set, gaps included."""
        n = self.original_count
        return self.slide_width * n + self.gap_px * max(0, n - 1)

    @property
    def step(self) -> float:
        return self.slide_width + self.gap_px

    @property
    def page_count(self) -> int:
        if not self.mounted:
            return 0
        return math.ceil(len(self.track.slides) / self.items_per_view)

    @property
    def is_dragging(self) -> bool:
        return self.drag.dragging

    # =====================
    # RESPONSIVE
    # =====================
    def on_resize(self, window_width: float, viewport_width: Optional[float] = None):
        """
        Recompute sizes for a new window/viewport width.

        Every quantity is derived from the widths passed in, so repeated
        calls with the same widths leave the state unchanged.
        """
        if not self.mounted:
            return
        if viewport_width is not None:
            self.viewport.width = viewport_width

        self.items_per_view = items_per_view_for(window_width)
        self._recalc_sizes()

        pages = self.page_count
        if self.indicators.enabled and len(self.indicators) != pages:
            active = self.indicators.active_index or 0
            self.indicators.build(pages, active_index=min(active, pages - 1))

    def _recalc_sizes(self):
        self.gap_px = self.config.gap_px
        viewport_width = self.viewport.width
        self.slide_width = (viewport_width - self.gap_px * (self.items_per_view - 1)) / self.items_per_view
        self.viewport.exposed_width = viewport_width

        track_width = self.track_width
        if self.position == 0:
            # First layout starts in the middle copy
            self.position = -track_width
        self.position = normalize_position(self.position, track_width)

    # =====================
    # AUTOPLAY
    # =====================
    def start_autoplay(self):
        if not self.mounted:
            return
        if self.autoplay.start(self._animate):
            self._last_timestamp = None

    def stop_autoplay(self):
        if not self.mounted:
            return
        if self.autoplay.stop():
            self._last_timestamp = None

    def reset_autoplay(self):
        self.stop_autoplay()
        self.start_autoplay()

    def tick(self, delta_seconds: float):
        """Advance one frame of drift and momentum, then wrap into the middle copy."""
        if not self.mounted:
            return
        dt = delta_seconds

        self.position -= self.auto_scroll_speed * dt

        if abs(self.velocity) > MOMENTUM_EPSILON:
            self.position += self.velocity * dt
            self.velocity *= math.exp(-self.friction * dt)

        # No slides means a zero width and a position pinned at 0
        self.position = normalize_position(self.position, self.track_width)

        self._apply_transform()

    def _animate(self, timestamp_ms: float):
        if self._last_timestamp is None:
            self._last_timestamp = timestamp_ms
        dt = (timestamp_ms - self._last_timestamp) / 1000.0
        self._last_timestamp = timestamp_ms

        if not self.drag.dragging:
            self.tick(dt)
        else:
            self._apply_transform()

        self.autoplay.renew(self._animate)

    # =====================
    # POINTER INPUT
    # =====================
    def on_pointer_enter(self):
        self.stop_autoplay()

    def on_pointer_leave(self):
        self.start_autoplay()

    def on_press_start(self, client_x: float):
        if not self.mounted:
            return
        self.drag.begin(client_x, self.position, self._clock())
        self.velocity = 0.0
        self.document.user_select = False
        self.stop_autoplay()

    def on_press_move(self, client_x: float):
        if not self.mounted or not self.drag.dragging:
            return
        # Absolute from the press origin, no accumulated drift
        self.position = self.drag.origin_position + (client_x - self.drag.origin_client_x)

        if self.drag.last_client_x is not None and self.drag.last_sample_time is not None:
            now = self._clock()
            dt = max(MIN_SAMPLE_INTERVAL_MS, now - self.drag.last_sample_time) / 1000.0
            self.velocity = (client_x - self.drag.last_client_x) / dt
            self.drag.last_client_x = client_x
            self.drag.last_sample_time = now

        self._apply_transform()

    def on_press_end(self):
        if not self.mounted:
            return
        self.drag.end()
        self.document.user_select = True
        # Velocity from the last move carries over as momentum
        self.start_autoplay()

    # =====================
    # NAVIGATION
    # =====================
    def next(self):
        """Jump one slide forward (content moves left)."""
        if not self.mounted:
            return
        self.position = normalize_position(self.position - self.step, self.track_width)
        self._apply_transform()
        self.update_indicators()
        self.reset_autoplay()

    def prev(self):
        """Jump one slide back (content moves right)."""
        if not self.mounted:
            return
        self.position = normalize_position(self.position + self.step, self.track_width)
        self._apply_transform()
        self.update_indicators()
        self.reset_autoplay()

    def go_to_page(self, page_index: int):
        if not self.mounted:
            return
        target = -(page_index * self.items_per_view * self.step)
        self.position = normalize_position(target, self.track_width)
        self._apply_transform()
        self.update_indicators()
        self.reset_autoplay()

    def go_to_slide(self, index: int):
        """Place slide `index` at the left edge (fixed-step paging)."""
        if not self.mounted:
            return
        self.current_index = index
        self.position = normalize_position(-(index * self.step), self.track_width)
        self._apply_transform()
        self.update_indicators()

    def update_indicators(self):
        """Mark the page dot under the current position as active."""
        if len(self.indicators) == 0 or self.step == 0:
            return
        # Halves round up; round() would send them to even
        nearest_slide = math.floor(self.position / self.step + 0.5)
        active_index = math.floor(abs(nearest_slide) / self.items_per_view)
        self.indicators.set_active(active_index)

    # =====================
    # LIFECYCLE
    # =====================
    def destroy(self):
        """Stop scheduling frames and release any drag in progress."""
        if not self.mounted:
            return
        self.stop_autoplay()
        if self.drag.dragging:
            self.drag.end()
            self.document.user_select = True
        self.mounted = False

    def _apply_transform(self):
        self.track.set_translate(self.position, 0.0)
