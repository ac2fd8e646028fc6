"""
Window creation and the public entry points.

`create_window` builds the surface on the UI thread and blocks until it exists, so the
caller always gets a live handle back. A size of 0 (or less) in either dimension asks
for fullscreen; that request falls back to a normal window when the display cannot go
fullscreen. Creation never raises: a failure leaves the handle in
`WindowState.FAILED` with the cause on `window.error`.

Usage:
    window = play_state("Counter", 640, 480, {"n": 0}, render, update, on_event)
    window.wait()
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional, Tuple

from config import CREATE_TIMEOUT, DEFAULT_HEIGHT, DEFAULT_WIDTH

from .backends.base import DisplayDevice
from .engine import Window
from .errors import MarshalError
from .graphics.picture import Picture
from .ui_context import UIContext, get_ui_context
from .world import AnimationWorld, DelegatingWorld, EventHandler, Renderer, StaticWorld, UpdateHandler, World

logger = logging.getLogger(__name__)


def _windowed_size(window: Window, device: DisplayDevice) -> Tuple[int, int]:
    if not window.wants_fullscreen:
        return window.requested_size
    dw, dh = device.size
    if dw > 0 and dh > 0:
        return dw, dh
    return DEFAULT_WIDTH, DEFAULT_HEIGHT


def _build_surface(window: Window, context: UIContext) -> None:
    """Runs on the UI thread: realize the surface and pick fullscreen vs windowed."""
    backend = context.backend
    device = backend.default_device()
    width, height = _windowed_size(window, device)
    surface = backend.create_surface(window.title, width, height)

    fullscreen = window.wants_fullscreen and device.supports_exclusive_fullscreen()
    if fullscreen:
        backend.set_fullscreen(surface, device)
    else:
        if window.wants_fullscreen:
            logger.info("fullscreen unavailable; opening %r as a %dx%d window", window.title, width, height)
        backend.show(surface)

    if not window.attach_surface(surface, backend.surface_size(surface), fullscreen):
        backend.destroy(surface)


def create_window(
    title: str,
    width: int,
    height: int,
    world: World,
    *,
    context: Optional[UIContext] = None,
    timeout: Optional[float] = CREATE_TIMEOUT,
    **window_options: Any,
) -> Window:
    """Create a window running `world` and return its handle once the surface exists."""
    if context is None:
        context = get_ui_context()
    window = Window(title, width, height, world, context, **window_options)
    try:
        context.run(lambda: _build_surface(window, context), timeout=timeout)
    except MarshalError as exc:
        if window.mark_failed(exc):
            logger.error("could not create window %r: %s", title, exc)
        else:
            logger.debug("window %r came up after the caller stopped waiting (%s)", title, exc)
    return window


# ---- convenience entry points ----


def display(title: str, width: int, height: int, picture: Picture, **kwargs: Any) -> Window:
    """Show a static picture (zoom and pan still work)."""
    return create_window(title, width, height, StaticWorld(picture), **kwargs)


def display_fullscreen(title: str, picture: Picture, **kwargs: Any) -> Window:
    return display(title, 0, 0, picture, **kwargs)


def animate(title: str, width: int, height: int, animation: World, **kwargs: Any) -> Window:
    return create_window(title, width, height, animation, **kwargs)


def animate_functions(
    title: str,
    width: int,
    height: int,
    picture_fn: Callable[[], Picture],
    update_fn: Callable[[float, float], None],
    **kwargs: Any,
) -> Window:
    """Animate from a picture function and an update function."""
    return create_window(title, width, height, AnimationWorld(picture_fn, update_fn), **kwargs)


def animate_state(
    title: str,
    width: int,
    height: int,
    state: Any,
    render: Renderer,
    update: UpdateHandler,
    **kwargs: Any,
) -> Window:
    """Animate a state value with render/update functions (no event handling)."""
    return create_window(title, width, height, DelegatingWorld(state, render, update), **kwargs)


def animate_fullscreen(title: str, animation: World, **kwargs: Any) -> Window:
    return create_window(title, 0, 0, animation, **kwargs)


def play(title: str, width: int, height: int, world: World, **kwargs: Any) -> Window:
    return create_window(title, width, height, world, **kwargs)


def play_state(
    title: str,
    width: int,
    height: int,
    state: Any,
    render: Renderer,
    update: Optional[UpdateHandler] = None,
    on_event: Optional[EventHandler] = None,
    **kwargs: Any,
) -> Window:
    """Run a state value with independently supplied render/update/event functions."""
    return create_window(title, width, height, DelegatingWorld(state, render, update, on_event), **kwargs)


def play_fullscreen(title: str, world: World, **kwargs: Any) -> Window:
    return create_window(title, 0, 0, world, **kwargs)


def play_state_fullscreen(
    title: str,
    state: Any,
    render: Renderer,
    update: Optional[UpdateHandler] = None,
    on_event: Optional[EventHandler] = None,
    **kwargs: Any,
) -> Window:
    return play_state(title, 0, 0, state, render, update, on_event, **kwargs)
