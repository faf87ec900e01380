"""
Showcase scenes.
"""

from .carousel_scene import CarouselScene

__all__ = [
    'CarouselScene',
]
