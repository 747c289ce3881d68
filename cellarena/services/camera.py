# cellarena/services/camera.py
"""Viewport camera that trails the player, used to map screen to world."""

from dataclasses import dataclass
from typing import Tuple

from cellarena.config.settings import CAMERA_SMOOTHING
from cellarena.utils.helpers import lerp


@dataclass
class Camera:
    x: float
    y: float
    smoothing: float = CAMERA_SMOOTHING

    def follow(self, target_x: float, target_y: float):
        """Move a fraction of the way toward the target each frame."""
        self.x = lerp(self.x, target_x, self.smoothing)
        self.y = lerp(self.y, target_y, self.smoothing)

    def screen_to_world(
        self, sx: float, sy: float, viewport_width: float, viewport_height: float
    ) -> Tuple[float, float]:
        """Convert a point on a viewport centred on the camera to world space."""
        return (
            self.x - viewport_width / 2 + sx,
            self.y - viewport_height / 2 + sy,
        )

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y}
