"""
Settings Module
================
Showcase settings and configuration management.

Features:
- Carousel physics tuning (drift speed, friction, gap)
- Resolution and display settings
- Slide content for the features section
"""

import json
import os
from dataclasses import dataclass, field, asdict
from typing import List, Tuple

from core.carousel_engine import CarouselConfig


# =====================================================
# SETTINGS DATA
# =====================================================

@dataclass
class SlideContent:
    """Text and color for one authored slide."""
    title: str
    body: str
    color: Tuple[int, int, int] = (70, 60, 50)  # BGR


def default_slides() -> List[SlideContent]:
    return [
        SlideContent("Package Scaffolding", "Create apps, services and libraries from one prompt.", (92, 64, 40)),
        SlideContent("Workflow Templates", "CI pipelines generated per package.", (48, 88, 60)),
        SlideContent("Orphan Cleanup", "Removes workflows whose package is gone.", (40, 60, 100)),
        SlideContent("Live README", "Package table kept in sync automatically.", (90, 50, 90)),
        SlideContent("Dockerfiles", "Container builds drafted for each service.", (100, 80, 40)),
        SlideContent("Deploy Config", "Deployment targets checked before release.", (60, 90, 100)),
    ]


@dataclass
class CarouselSettings:
    """Settings for the features carousel."""
    items_per_view: int = 3                 # Seed value, replaced by breakpoints
    autoplay_interval_ms: int = 5000
    transition_duration_ms: int = 600
    auto_scroll_speed: float = 100.0        # px per second (0 - 400)
    friction: float = 5.0                   # Momentum decay (1 - 15)
    gap_rem: float = 1.5
    root_font_px: float = 16.0
    show_indicators: bool = True

    def to_config(self) -> CarouselConfig:
        return CarouselConfig(
            items_per_view=self.items_per_view,
            autoplay_interval_ms=self.autoplay_interval_ms,
            transition_duration_ms=self.transition_duration_ms,
            auto_scroll_speed=self.auto_scroll_speed,
            friction=self.friction,
            gap_rem=self.gap_rem,
            root_font_px=self.root_font_px,
        )


@dataclass
class GraphicsSettings:
    """Settings for display."""
    resolution: Tuple[int, int] = (1280, 720)
    fullscreen: bool = False
    max_fps: int = 60                     # 0 for uncapped
    side_margin: int = 80                 # Space left of and right of the viewport


@dataclass
class ShowcaseSettings:
    """Complete showcase settings."""
    carousel: CarouselSettings = field(default_factory=CarouselSettings)
    graphics: GraphicsSettings = field(default_factory=GraphicsSettings)
    slides: List[SlideContent] = field(default_factory=default_slides)

    def save(self, path: str = "settings.json"):
        """Save settings to file."""
        data = {
            'carousel': asdict(self.carousel),
            'graphics': {
                **asdict(self.graphics),
                'resolution': list(self.graphics.resolution)
            },
            'slides': [
                {**asdict(s), 'color': list(s.color)} for s in self.slides
            ]
        }
        with open(path, 'w') as f:
            json.dump(data, f, indent=2)

    @classmethod
    def load(cls, path: str = "settings.json") -> 'ShowcaseSettings':
        """Load settings from file."""
        if not os.path.exists(path):
            return cls()

        try:
            with open(path, 'r') as f:
                data = json.load(f)

            settings = cls()

            if 'carousel' in data:
                for key, value in data['carousel'].items():
                    if hasattr(settings.carousel, key):
                        setattr(settings.carousel, key, value)

            if 'graphics' in data:
                for key, value in data['graphics'].items():
                    if key == 'resolution':
                        settings.graphics.resolution = tuple(value)
                    elif hasattr(settings.graphics, key):
                        setattr(settings.graphics, key, value)

            if 'slides' in data:
                settings.slides = [
                    SlideContent(
                        title=s.get('title', ''),
                        body=s.get('body', ''),
                        color=tuple(s.get('color', (70, 60, 50)))
                    )
                    for s in data['slides']
                ]

            # Out-of-range carousel values fail here instead of at scene entry
            settings.carousel.to_config()

            return settings
        except (OSError, ValueError, TypeError, AttributeError) as e:
            print(f"Error loading settings: {e}")
            return cls()
