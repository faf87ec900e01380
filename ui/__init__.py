"""
Settings for the showcase.
"""

from .settings import (
    ShowcaseSettings, CarouselSettings, GraphicsSettings, SlideContent
)

__all__ = [
    'ShowcaseSettings', 'CarouselSettings', 'GraphicsSettings', 'SlideContent',
]
