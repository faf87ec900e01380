"""
Showcase
========
Feature carousel demo window.

Controls:
- Drag (mouse or touch): scrub the strip, release to fling
- Hover: pause the drift
- Left/Right arrows: previous/next card
- Home: first page
- D: toggle debug overlay
- F11: fullscreen
- Q / ESC: quit
"""

import numpy as np

from core.display import Keys, ShowcaseDisplay
from core.frame_scheduler import FrameScheduler
from core.scene_manager import SceneManager
from core.track import HostDocument
from scenes.carousel_scene import CarouselScene
from ui.settings import ShowcaseSettings


KEY_ACTIONS = {
    Keys.LEFT: 'prev',
    Keys.RIGHT: 'next',
    Keys.HOME: 'home',
    ord('d'): 'debug',
}


class Showcase:
    """Main application: window, frame scheduler and scenes."""

    def __init__(self, settings_path: str = "settings.json", title: str = "Showcase"):
        self.settings_path = settings_path
        self.settings = ShowcaseSettings.load(settings_path)

        self.width, self.height = self.settings.graphics.resolution
        self.display = ShowcaseDisplay(self.width, self.height, title=title,
                                       fullscreen=self.settings.graphics.fullscreen)
        self.display.set_target_fps(self.settings.graphics.max_fps)
        self.width, self.height = self.display.get_display_size()

        self.scheduler = FrameScheduler()
        self.document = HostDocument()

        self.scenes = SceneManager(self.width, self.height)
        self.scenes.add_scene('features', CarouselScene(self.settings, self.scheduler, self.document))

    def run(self, start_scene: str = 'features'):
        self.scenes.set_scene(start_scene)
        last_ms = self.display.ticks_ms()

        try:
            while self.display.running:
                events = self.display.process_events()
                if events['quit']:
                    break

                if events['resized']:
                    self.width, self.height = events['resized']
                    self.scenes.resize(self.width, self.height)

                if Keys.Q in events['key_down'] or Keys.ESCAPE in events['key_down']:
                    break
                for key in events['key_down']:
                    action = KEY_ACTIONS.get(key)
                    if action:
                        self.scenes.dispatch_action(action)

                self.scenes.dispatch_pointer(events['pointer'])

                now_ms = self.display.ticks_ms()
                self.scenes.update((now_ms - last_ms) / 1000.0)
                last_ms = now_ms
                self.scheduler.run_frame(now_ms)

                frame = np.zeros((self.height, self.width, 3), dtype=np.uint8)
                self.scenes.render(frame)
                self.display.show_frame(frame)
        finally:
            self.settings.save(self.settings_path)
            self.display.close()


def main():
    print("=" * 50)
    print("SHOWCASE")
    print("=" * 50)
    print("Controls:")
    print("  • Drag: scrub the carousel, release to fling")
    print("  • Hover: pause")
    print("  • Left/Right: previous/next card")
    print("  • D: debug overlay   F11: fullscreen   Q/ESC: quit")
    print("=" * 50)

    Showcase().run()


if __name__ == "__main__":
    main()
