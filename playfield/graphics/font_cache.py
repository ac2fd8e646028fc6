"""
Lightweight pygame font cache.

Text pictures are drawn every frame; building pygame.font.Font objects or re-rendering
the same label per frame causes stutter. Fonts are cached by size and rendered labels
by (size, text, color), with a best-effort bound on the label cache.
"""

from __future__ import annotations

import threading
from typing import Dict, Tuple

import pygame

Color = Tuple[int, int, int]

_FONT_CACHE: Dict[int, pygame.font.Font] = {}
_TEXT_CACHE: Dict[Tuple[int, str, Color], pygame.Surface] = {}
_TEXT_CACHE_MAX = 512
_LOCK = threading.Lock()


def get_font(size: int) -> pygame.font.Font:
    """Get (and cache) the default font at a given size. Initializes pygame.font on first use."""
    s = max(1, int(size))
    with _LOCK:
        font = _FONT_CACHE.get(s)
        if font is None:
            if not pygame.font.get_init():
                pygame.font.init()
            font = pygame.font.Font(None, s)
            _FONT_CACHE[s] = font
        return font


def render_text_cached(size: int, text: str, color: Color, antialias: bool = True) -> pygame.Surface:
    """Render and cache a text surface."""
    key = (max(1, int(size)), str(text), (int(color[0]), int(color[1]), int(color[2])))
    with _LOCK:
        surf = _TEXT_CACHE.get(key)
    if surf is not None:
        return surf
    surf = get_font(key[0]).render(key[1], bool(antialias), key[2])
    with _LOCK:
        # Frequently-changing labels (timers, scores) would otherwise grow the cache forever.
        if len(_TEXT_CACHE) >= _TEXT_CACHE_MAX:
            _TEXT_CACHE.pop(next(iter(_TEXT_CACHE)))
        _TEXT_CACHE[key] = surf
    return surf


def clear() -> None:
    """Drop cached fonts and labels (required after pygame.quit())."""
    with _LOCK:
        _FONT_CACHE.clear()
        _TEXT_CACHE.clear()
