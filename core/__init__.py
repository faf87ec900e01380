"""
Core engine components for the showcase.
"""

from .carousel_engine import CarouselConfig, ContinuousCarousel, normalize_position
from .frame_scheduler import AutoplayState, FrameScheduler, SchedulerHandle
from .input_port import InputPort, PointerEvent, PointerKind, PointerRouter
from .scene_manager import Scene, SceneManager
from .track import HostDocument, Indicator, IndicatorStrip, Slide, Track, Viewport

__all__ = [
    'CarouselConfig',
    'ContinuousCarousel',
    'normalize_position',
    'AutoplayState',
    'FrameScheduler',
    'SchedulerHandle',
    'InputPort',
    'PointerEvent',
    'PointerKind',
    'PointerRouter',
    'Scene',
    'SceneManager',
    'HostDocument',
    'Indicator',
    'IndicatorStrip',
    'Slide',
    'Track',
    'Viewport',
]
