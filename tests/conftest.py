"""Shared pytest fixtures for showcase tests."""

import pytest

from core.carousel_engine import CarouselConfig, ContinuousCarousel
from core.frame_scheduler import FrameScheduler
from core.track import HostDocument, IndicatorStrip, Slide, Track, Viewport


class FakeClock:
    """Manually advanced millisecond clock."""

    def __init__(self, start_ms: float = 0.0):
        self.now = start_ms

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float):
        self.now += ms


def make_track(count: int = 3) -> Track:
    return Track([Slide(title=f"Card {i}") for i in range(count)])


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def scheduler() -> FrameScheduler:
    return FrameScheduler()


@pytest.fixture
def document() -> HostDocument:
    return HostDocument()


@pytest.fixture
def carousel(scheduler, document, clock) -> ContinuousCarousel:
    """Three slides, no gap, 900px viewport at desktop width.

    slide_width = 300, step = 300, track_width = 900.
    """
    return ContinuousCarousel(
        make_track(3),
        Viewport(width=900, height=300),
        scheduler,
        config=CarouselConfig(gap_rem=0.0),
        window_width=1280,
        indicators=IndicatorStrip(),
        document=document,
        clock=clock,
    )


@pytest.fixture
def gapped_carousel(scheduler, document, clock) -> ContinuousCarousel:
    """Default 24px gap, 948px viewport: slide_width = 300, step = 324, track_width = 948."""
    return ContinuousCarousel(
        make_track(3),
        Viewport(width=948, height=300),
        scheduler,
        window_width=1280,
        indicators=IndicatorStrip(),
        document=document,
        clock=clock,
    )
