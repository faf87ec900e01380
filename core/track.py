"""
Track Module
============
Host-side objects the carousel engine draws on.

These stand in for the page elements of the features section:
- Slide: one card (authored or cloned)
- Track: the scrolling strip holding every slide copy
- Viewport: the clipping box around the track
- IndicatorStrip: page dots created by the engine
- HostDocument: page-wide state (text selection)
"""

from dataclasses import dataclass, replace
from typing import List, Optional, Tuple


@dataclass
class Slide:
    """A single card on the track."""
    title: str = ""
    body: str = ""
    color: Tuple[int, int, int] = (60, 60, 70)  # BGR
    is_clone: bool = False

    def clone(self) -> 'Slide':
        return replace(self, is_clone=True)


class Track:
    """
    The scrolling strip.

    Holds the slide list in visual order and the horizontal translate
    written by the engine every frame.
    """

    def __init__(self, slides: Optional[List[Slide]] = None):
        self.slides: List[Slide] = list(slides or [])
        self.transform: Tuple[float, float] = (0.0, 0.0)
        self.will_change_transform = False

    @property
    def authored_slides(self) -> List[Slide]:
        return [s for s in self.slides if not s.is_clone]

    def append(self, slide: Slide):
        self.slides.append(slide)

    def clone_passes(self, passes: int = 2) -> int:
        """
        Append `passes` copies of the authored set, in authored order.

        Returns the authored slide count.
        """
        originals = self.authored_slides
        for _ in range(passes):
            for slide in originals:
                self.append(slide.clone())
        return len(originals)

    def set_translate(self, x: float, y: float = 0.0):
        self.transform = (x, y)

    @property
    def offset_x(self) -> float:
        return self.transform[0]


@dataclass
class Viewport:
    """Clipping box around the track. Only its width matters to the engine."""
    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0
    # Last width reported to the renderer
    exposed_width: Optional[float] = None

    def contains(self, px: float, py: float) -> bool:
        return (self.x <= px < self.x + self.width and
                self.y <= py < self.y + self.height)


@dataclass
class Indicator:
    """One page dot."""
    page: int
    active: bool = False


class IndicatorStrip:
    """Ordered page dots. Empty strip means the section has no dot container."""

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self.dots: List[Indicator] = []

    def __len__(self) -> int:
        return len(self.dots)

    def __iter__(self):
        return iter(self.dots)

    def build(self, count: int, active_index: int = 0):
        """(Re)create `count` dots with one marked active."""
        if not self.enabled:
            self.dots = []
            return
        self.dots = [Indicator(page=i, active=(i == active_index)) for i in range(count)]

    def set_active(self, index: int):
        for dot in self.dots:
            dot.active = dot.page == index

    @property
    def active_index(self) -> Optional[int]:
        for dot in self.dots:
            if dot.active:
                return dot.page
        return None


@dataclass
class HostDocument:
    """Page-wide state touched by the carousel."""
    user_select: bool = True
