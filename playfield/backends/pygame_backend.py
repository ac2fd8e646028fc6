"""
pygame binding.

pygame has a single display surface per process, which matches the harness model
(one active window at a time). All calls happen on the UI thread.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

import pygame

from config import COLOR_BACKGROUND

from ..graphics import font_cache
from ..graphics.picture import Picture
from ..graphics.view import ViewTransform
from ..input import Event, from_pygame
from .base import Backend, DisplayDevice

logger = logging.getLogger(__name__)


class PygameDisplayDevice(DisplayDevice):
    def __init__(self, index: int = 0):
        self.index = int(index)

    @property
    def size(self) -> Tuple[int, int]:
        sizes = pygame.display.get_desktop_sizes()
        if self.index < len(sizes):
            w, h = sizes[self.index]
            return int(w), int(h)
        return 0, 0

    def supports_exclusive_fullscreen(self) -> bool:
        # -1 means any resolution is accepted; an empty list means fullscreen is unavailable.
        modes = pygame.display.list_modes(0, pygame.FULLSCREEN, self.index)
        return modes == -1 or bool(modes)


@dataclass
class PygameSurface:
    title: str
    width: int
    height: int
    screen: Optional[pygame.Surface] = None
    fullscreen: bool = False


class PygameBackend(Backend):
    def __init__(self, background: Tuple[int, int, int] = COLOR_BACKGROUND):
        self.background = background
        self._clock: Optional[pygame.time.Clock] = None

    def _ensure_init(self) -> None:
        if not pygame.get_init():
            pygame.init()
        if not pygame.display.get_init():
            pygame.display.init()
        if self._clock is None:
            self._clock = pygame.time.Clock()

    def default_device(self) -> DisplayDevice:
        self._ensure_init()
        return PygameDisplayDevice(0)

    def create_surface(self, title: str, width: int, height: int) -> PygameSurface:
        self._ensure_init()
        pygame.display.set_caption(title)
        return PygameSurface(title=title, width=int(width), height=int(height))

    def set_fullscreen(self, surface: PygameSurface, device: DisplayDevice) -> None:
        index = getattr(device, "index", 0)
        surface.screen = pygame.display.set_mode((0, 0), pygame.FULLSCREEN, display=index)
        surface.width, surface.height = surface.screen.get_size()
        surface.fullscreen = True
        logger.debug("fullscreen surface %dx%d on display %d", surface.width, surface.height, index)

    def show(self, surface: PygameSurface) -> None:
        surface.screen = pygame.display.set_mode((surface.width, surface.height), pygame.RESIZABLE)
        surface.fullscreen = False

    def surface_size(self, surface: PygameSurface) -> Tuple[int, int]:
        if surface.screen is not None:
            return surface.screen.get_size()
        return surface.width, surface.height

    def poll_events(self, surface: PygameSurface) -> List[Event]:
        events: List[Event] = []
        for raw in pygame.event.get():
            ev = from_pygame(raw)
            if ev is not None:
                events.append(ev)
        return events

    def present(self, surface: PygameSurface, picture: Picture, view: ViewTransform) -> None:
        if surface.screen is None:
            return
        surface.screen.fill(self.background)
        picture.draw(surface.screen, view)
        pygame.display.flip()

    def destroy(self, surface: PygameSurface) -> None:
        surface.screen = None
        if pygame.display.get_init():
            pygame.display.quit()

    def wait_frame(self, fps: int) -> None:
        if self._clock is not None:
            self._clock.tick(max(1, int(fps)))

    def shutdown(self) -> None:
        font_cache.clear()
        pygame.quit()
        self._clock = None
