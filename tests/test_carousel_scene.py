"""Tests for the features carousel scene."""

import numpy as np
import pytest

from core.carousel_engine import normalize_position
from core.frame_scheduler import AutoplayState
from core.input_port import PointerEvent, PointerKind
from core.scene_manager import SceneManager
from scenes.carousel_scene import CarouselScene, wrap_text
from ui.settings import ShowcaseSettings, SlideContent

WIDTH, HEIGHT = 1280, 720


@pytest.fixture
def settings() -> ShowcaseSettings:
    settings = ShowcaseSettings()
    settings.slides = [SlideContent(f"Card {i}", "Some body text for the card.") for i in range(4)]
    return settings


@pytest.fixture
def manager(settings, scheduler, document) -> SceneManager:
    manager = SceneManager(WIDTH, HEIGHT)
    manager.add_scene("features", CarouselScene(settings, scheduler, document))
    manager.set_scene("features")
    return manager


@pytest.fixture
def scene(manager) -> CarouselScene:
    return manager.active


class TestLayout:
    """Carousel construction from settings."""

    def test_builds_carousel(self, scene):
        c = scene.carousel
        assert c.mounted
        assert c.original_count == 4
        assert len(c.slides) == 12
        assert c.items_per_view == 3

    def test_viewport_inside_window(self, scene):
        vp = scene.viewport
        assert vp.x == 80
        assert vp.width == WIDTH - 160
        assert vp.y + vp.height < HEIGHT

    def test_indicator_count(self, scene):
        assert len(scene.indicators) == 4
        assert len(scene.dot_centers()) == 4

    def test_resize_to_mobile(self, manager, scene):
        manager.resize(600, 800)
        assert scene.carousel.items_per_view == 1
        assert scene.viewport.width == 600 - 2 * 48
        assert len(scene.indicators) == 12

    def test_reenter_replaces_carousel(self, manager, scene, scheduler):
        first = scene.carousel
        manager.set_scene("features")
        assert scene.carousel is not first
        assert not first.mounted
        assert scheduler.pending_count == 1

    def test_unknown_scene(self, manager):
        with pytest.raises(ValueError):
            manager.set_scene("pricing")

    def test_update_keeps_active_scene(self, manager, scene):
        carousel = scene.carousel
        manager.update(0.016)
        assert manager.active is scene
        assert scene.carousel is carousel


class TestControls:
    """Arrow, dot, key and drag input."""

    def click(self, manager, x, y):
        manager.dispatch_pointer([
            PointerEvent(PointerKind.MOUSE_DOWN, x, y),
            PointerEvent(PointerKind.MOUSE_UP, x, y),
        ])

    def test_next_arrow(self, manager, scene):
        c = scene.carousel
        before = c.position
        self.click(manager, *scene.next_button_center)
        moved = before - c.position
        turns = round((moved - c.step) / c.track_width)
        assert moved - turns * c.track_width == pytest.approx(c.step)

    def test_prev_arrow(self, manager, scene):
        c = scene.carousel
        before = c.position
        self.click(manager, *scene.prev_button_center)
        moved = c.position - before
        turns = round((moved - c.step) / c.track_width)
        assert moved - turns * c.track_width == pytest.approx(c.step)

    def test_dot_jumps_to_page(self, manager, scene):
        c = scene.carousel
        x, y = scene.dot_centers()[1]
        self.click(manager, x, y)
        assert c.position == pytest.approx(normalize_position(-3 * c.step, c.track_width))
        # Page 1 of 4 slides wraps to about slide -7 in the middle copy, so dot 7 // 3
        assert scene.indicators.active_index == 2
        assert sum(dot.active for dot in scene.indicators) == 1

    def test_key_actions(self, manager, scene):
        c = scene.carousel
        c.position = -2 * c.track_width + 10
        manager.dispatch_action("prev")
        assert c.position == pytest.approx(-2 * c.track_width + 10 + c.step)
        manager.dispatch_action("next")
        assert c.position == pytest.approx(-2 * c.track_width + 10)
        manager.dispatch_action("debug")
        assert scene.show_debug

    def test_drag_in_viewport(self, manager, scene, document):
        vp = scene.viewport
        x, y = vp.x + 200, vp.y + 50
        start = scene.carousel.position
        manager.dispatch_pointer([
            PointerEvent(PointerKind.MOUSE_DOWN, x, y),
            PointerEvent(PointerKind.MOUSE_MOVE, x + 40, y),
        ])
        assert scene.carousel.is_dragging
        assert document.user_select is False
        assert scene.carousel.position == start + 40
        manager.dispatch_pointer([PointerEvent(PointerKind.MOUSE_UP, x + 40, y)])
        assert not scene.carousel.is_dragging
        assert document.user_select is True

    def test_touch_drag(self, manager, scene):
        vp = scene.viewport
        x, y = vp.x + 300, vp.y + 40
        start = scene.carousel.position
        begin = PointerEvent(PointerKind.TOUCH_START, x, y, touches=[(x, y)])
        manager.dispatch_pointer([
            begin,
            PointerEvent(PointerKind.TOUCH_MOVE, x - 25, y, touches=[(x - 25, y)]),
        ])
        assert begin.default_prevented
        assert scene.carousel.position == start - 25

    def test_hover_pauses(self, manager, scene):
        vp = scene.viewport
        manager.dispatch_pointer([PointerEvent(PointerKind.MOUSE_MOVE, vp.x + 10, vp.y + 10)])
        assert scene.carousel.autoplay.state == AutoplayState.STOPPED
        manager.dispatch_pointer([PointerEvent(PointerKind.MOUSE_MOVE, 5, 5)])
        assert scene.carousel.autoplay.state == AutoplayState.RUNNING

    def test_press_outside_does_nothing(self, manager, scene):
        manager.dispatch_pointer([PointerEvent(PointerKind.MOUSE_DOWN, WIDTH // 2, 10)])
        assert not scene.carousel.is_dragging


class TestRender:
    """Drawing into a numpy frame."""

    def test_render_draws_slides(self, manager, scene, scheduler):
        scheduler.run_frame(0.0)
        scheduler.run_frame(16.0)
        frame = np.zeros((HEIGHT, WIDTH, 3), dtype=np.uint8)
        manager.render(frame)
        vp = scene.viewport
        region = frame[vp.y:vp.y + vp.height, vp.x:vp.x + vp.width]
        assert (region != np.array([30, 26, 24], dtype=np.uint8)).any()

    def test_render_with_debug(self, manager, scene):
        scene.handle_action("debug")
        frame = np.zeros((HEIGHT, WIDTH, 3), dtype=np.uint8)
        manager.render(frame)
        assert frame.any()

    def test_render_without_slides(self, scheduler, document):
        settings = ShowcaseSettings()
        settings.slides = []
        manager = SceneManager(WIDTH, HEIGHT)
        manager.add_scene("empty", CarouselScene(settings, scheduler, document))
        manager.set_scene("empty")
        frame = np.zeros((HEIGHT, WIDTH, 3), dtype=np.uint8)
        manager.render(frame)
        assert manager.active.carousel.position == 0.0


class TestWrapText:
    """Word wrapping."""

    def test_short_text_single_line(self):
        assert wrap_text("hello world", 1000) == ["hello world"]

    def test_wraps_long_text(self):
        lines = wrap_text("one two three four five six seven", 80)
        assert len(lines) > 1
        assert " ".join(lines) == "one two three four five six seven"

    def test_empty(self):
        assert wrap_text("", 100) == []
