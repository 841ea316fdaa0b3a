# visibility.py

from bubble_scene import Scene
from scrolly_config import SHOW_MS


class VisibilityController:
    """Fades element groups of a scene in and out. Only thing that touches opacity after mount."""

    def __init__(self, scene: Scene):
        self.scene = scene

    def show(self, selector: str, opacity: float = 1.0, duration_ms: int = SHOW_MS) -> None:
        for el in self.scene.select_all(selector):
            el.set(duration_ms, opacity=float(opacity))
        # circles created later (new countries) pick this up
        self.scene.group_opacity[selector] = float(opacity)

    def hide(self, selector: str, duration_ms: int = SHOW_MS) -> None:
        self.show(selector, 0.0, duration_ms)
