"""
Headless binding (safe for CI / no-window environments).

Draws into an off-screen pygame.Surface, records every presented picture, and can
report QUIT after a fixed number of frames so a run terminates on its own.
"""

from __future__ import annotations

import threading
import time
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, List, Optional, Tuple

import pygame

from config import COLOR_BACKGROUND

from ..graphics.picture import Picture
from ..graphics.view import ViewTransform
from ..input import Event, EventKind
from .base import Backend, DisplayDevice


class HeadlessDevice(DisplayDevice):
    def __init__(self, size: Tuple[int, int] = (1920, 1080), fullscreen_supported: bool = True):
        self._size = (int(size[0]), int(size[1]))
        self._fullscreen_supported = bool(fullscreen_supported)

    @property
    def size(self) -> Tuple[int, int]:
        return self._size

    def supports_exclusive_fullscreen(self) -> bool:
        return self._fullscreen_supported


@dataclass
class HeadlessSurface:
    title: str
    width: int
    height: int
    canvas: Optional[pygame.Surface] = None
    fullscreen: bool = False
    visible: bool = False
    destroyed: bool = False
    presented: List[Tuple[Picture, ViewTransform]] = field(default_factory=list)


class HeadlessBackend(Backend):
    def __init__(
        self,
        *,
        fullscreen_supported: bool = True,
        device_size: Tuple[int, int] = (1920, 1080),
        frame_limit: Optional[int] = None,
        frame_delay: float = 0.001,
        background: Tuple[int, int, int] = COLOR_BACKGROUND,
    ):
        self.device = HeadlessDevice(device_size, fullscreen_supported)
        self.frame_limit = frame_limit
        self.frame_delay = float(frame_delay)
        self.background = background
        self.surfaces: List[HeadlessSurface] = []
        self.frames = 0
        self.shut_down = False
        self._pending: Deque[Event] = deque()
        self._lock = threading.Lock()

    def inject(self, event: Event) -> None:
        """Queue an event for the next poll (callable from any thread)."""
        with self._lock:
            self._pending.append(event)

    def default_device(self) -> DisplayDevice:
        return self.device

    def create_surface(self, title: str, width: int, height: int) -> HeadlessSurface:
        surface = HeadlessSurface(title=title, width=int(width), height=int(height))
        self.surfaces.append(surface)
        return surface

    def set_fullscreen(self, surface: HeadlessSurface, device: DisplayDevice) -> None:
        surface.width, surface.height = device.size
        surface.fullscreen = True
        surface.visible = True
        surface.canvas = pygame.Surface((max(1, surface.width), max(1, surface.height)))

    def show(self, surface: HeadlessSurface) -> None:
        surface.fullscreen = False
        surface.visible = True
        surface.canvas = pygame.Surface((max(1, surface.width), max(1, surface.height)))

    def surface_size(self, surface: HeadlessSurface) -> Tuple[int, int]:
        return surface.width, surface.height

    def poll_events(self, surface: HeadlessSurface) -> List[Event]:
        with self._lock:
            events = list(self._pending)
            self._pending.clear()
        if self.frame_limit is not None and self.frames >= self.frame_limit:
            events.append(Event(EventKind.QUIT))
        return events

    def present(self, surface: HeadlessSurface, picture: Picture, view: ViewTransform) -> None:
        if surface.canvas is not None:
            surface.canvas.fill(self.background)
            picture.draw(surface.canvas, view)
        surface.presented.append((picture, view))
        self.frames += 1

    def destroy(self, surface: HeadlessSurface) -> None:
        surface.destroyed = True
        surface.visible = False
        surface.canvas = None

    def wait_frame(self, fps: int) -> None:
        # Yield the GIL between frames; headless runs are not paced to real time.
        time.sleep(self.frame_delay)

    def shutdown(self) -> None:
        self.shut_down = True
