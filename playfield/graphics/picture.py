"""
Picture values.

A Picture is an immutable drawable returned by a world once per frame. The frame driver
owns it for the duration of that frame's render. Worlds compose frames out of the small
shapes below; anything with a `draw(surface, view)` method is accepted.

Coordinates are world units (origin at the surface centre); sizes scale with zoom.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Tuple, runtime_checkable

import pygame

from config import COLOR_FOREGROUND

from .font_cache import render_text_cached
from .view import ViewTransform

Color = Tuple[int, int, int]


@runtime_checkable
class Picture(Protocol):
    def draw(self, surface: pygame.Surface, view: ViewTransform) -> None:
        """Draw onto `surface` using `view` to map world coordinates to pixels."""


@dataclass(frozen=True)
class Blank:
    """Draws nothing."""

    def draw(self, surface: pygame.Surface, view: ViewTransform) -> None:
        return None


@dataclass(frozen=True)
class Circle:
    x: float
    y: float
    radius: float
    color: Color = COLOR_FOREGROUND
    width: int = 0  # 0 = filled

    def draw(self, surface: pygame.Surface, view: ViewTransform) -> None:
        r = view.scale(self.radius)
        if r <= 0:
            return
        pygame.draw.circle(surface, self.color, view.to_screen(self.x, self.y), r, self.width)


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    w: float
    h: float
    color: Color = COLOR_FOREGROUND
    width: int = 0

    def draw(self, surface: pygame.Surface, view: ViewTransform) -> None:
        left, top = view.to_screen(self.x, self.y)
        pygame.draw.rect(surface, self.color, pygame.Rect(left, top, view.scale(self.w), view.scale(self.h)), self.width)


@dataclass(frozen=True)
class Line:
    x1: float
    y1: float
    x2: float
    y2: float
    color: Color = COLOR_FOREGROUND
    width: int = 1

    def draw(self, surface: pygame.Surface, view: ViewTransform) -> None:
        pygame.draw.line(surface, self.color, view.to_screen(self.x1, self.y1), view.to_screen(self.x2, self.y2), self.width)


@dataclass(frozen=True)
class Text:
    """Text anchored at its top-left corner. Font size is in pixels and does not zoom."""

    x: float
    y: float
    text: str
    size: int = 24
    color: Color = COLOR_FOREGROUND

    def draw(self, surface: pygame.Surface, view: ViewTransform) -> None:
        surface.blit(render_text_cached(self.size, self.text, self.color), view.to_screen(self.x, self.y))


@dataclass(frozen=True)
class Group:
    """Ordered composition: later pictures draw over earlier ones."""

    items: Tuple[Picture, ...] = ()

    @classmethod
    def of(cls, *items: Picture) -> "Group":
        return cls(tuple(items))

    def draw(self, surface: pygame.Surface, view: ViewTransform) -> None:
        for item in self.items:
            item.draw(surface, view)
