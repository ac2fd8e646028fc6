"""
Input events forwarded to worlds.

Worlds never see raw pygame events; the backend translates them into the small
immutable `Event` value below so worlds stay testable without a display.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

import pygame


class EventKind(Enum):
    QUIT = "quit"
    KEY_DOWN = "key_down"
    KEY_UP = "key_up"
    MOUSE_DOWN = "mouse_down"
    MOUSE_UP = "mouse_up"
    MOUSE_MOVE = "mouse_move"
    MOUSE_WHEEL = "mouse_wheel"
    RESIZE = "resize"


@dataclass(frozen=True)
class Event:
    kind: EventKind
    key: Optional[int] = None
    pos: Optional[Tuple[int, int]] = None
    button: Optional[int] = None
    wheel: int = 0
    rel: Tuple[int, int] = (0, 0)
    buttons: Tuple[int, ...] = ()
    size: Optional[Tuple[int, int]] = None
    # Filled in by the window from its current zoom/pan when `pos` is set
    world_pos: Optional[Tuple[float, float]] = None


def from_pygame(event: pygame.event.Event) -> Optional[Event]:
    """Translate a pygame event; returns None for kinds that are not forwarded."""
    t = event.type
    if t == pygame.QUIT:
        return Event(EventKind.QUIT)
    if t == pygame.KEYDOWN:
        return Event(EventKind.KEY_DOWN, key=event.key)
    if t == pygame.KEYUP:
        return Event(EventKind.KEY_UP, key=event.key)
    if t == pygame.MOUSEBUTTONDOWN:
        # Buttons 4/5 are the legacy wheel; MOUSEWHEEL covers it on pygame 2.
        if event.button in (4, 5):
            return None
        return Event(EventKind.MOUSE_DOWN, pos=tuple(event.pos), button=event.button)
    if t == pygame.MOUSEBUTTONUP:
        if event.button in (4, 5):
            return None
        return Event(EventKind.MOUSE_UP, pos=tuple(event.pos), button=event.button)
    if t == pygame.MOUSEMOTION:
        return Event(EventKind.MOUSE_MOVE, pos=tuple(event.pos), rel=tuple(event.rel), buttons=tuple(event.buttons))
    if t == pygame.MOUSEWHEEL:
        # event.y: +1 scroll up, -1 scroll down
        return Event(EventKind.MOUSE_WHEEL, pos=pygame.mouse.get_pos(), wheel=int(event.y))
    if t == pygame.VIDEORESIZE:
        return Event(EventKind.RESIZE, size=tuple(event.size))
    return None
