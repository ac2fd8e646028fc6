"""
View transform (zoom + pan) applied when a Picture is drawn.

World coordinates have their origin at the centre of the surface; pan is measured in
world units and zoom scales world units to pixels.
"""

from __future__ import annotations

from dataclasses import dataclass

from config import ZOOM_MAX, ZOOM_MIN


def clamp_zoom(z: float | None) -> float:
    """Clamp a zoom factor to the configured range (invalid values fall back to 1.0)."""
    try:
        zz = float(z) if z is not None else 1.0
    except (TypeError, ValueError):
        zz = 1.0
    if not zz or zz <= 0:
        zz = 1.0
    return max(ZOOM_MIN, min(ZOOM_MAX, zz))


@dataclass(frozen=True)
class ViewTransform:
    zoom: float = 1.0
    pan_x: float = 0.0
    pan_y: float = 0.0
    width: int = 0
    height: int = 0

    def to_screen(self, x: float, y: float) -> tuple[int, int]:
        """Convert world-space coordinates to surface pixels."""
        sx = self.width / 2 + (x + self.pan_x) * self.zoom
        sy = self.height / 2 + (y + self.pan_y) * self.zoom
        return int(round(sx)), int(round(sy))

    def to_world(self, sx: float, sy: float) -> tuple[float, float]:
        """Convert surface pixels to world-space coordinates."""
        z = self.zoom if self.zoom else 1.0
        return (sx - self.width / 2) / z - self.pan_x, (sy - self.height / 2) / z - self.pan_y

    def scale(self, length: float) -> int:
        return max(0, int(round(length * self.zoom)))
