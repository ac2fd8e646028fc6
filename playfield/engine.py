"""
Frame driver - the live window handle.

A Window owns one World and one backend surface. Every tick it advances the world and
then asks it for a picture, in that order, and hands the picture to the backend. Input
is routed to the world on the same (UI) thread, between ticks.

The handle returned to callers is safe to use from any thread for view control
(zoom/pan), `close()` and `wait()`.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import replace
from enum import Enum
from typing import TYPE_CHECKING, Any, Optional, Tuple

import pygame

from config import FIXED_TIMESTEP, FPS, PAN_STEP_PX, ZOOM_STEP

from .errors import MarshalError
from .graphics.view import ViewTransform, clamp_zoom
from .input import Event, EventKind
from .sim import timebase
from .world import World

if TYPE_CHECKING:
    from .ui_context import UIContext

logger = logging.getLogger(__name__)

_ZOOM_IN_KEYS = (pygame.K_EQUALS, pygame.K_PLUS, pygame.K_KP_PLUS)
_ZOOM_OUT_KEYS = (pygame.K_MINUS, pygame.K_KP_MINUS)
_PAN_KEYS = {
    pygame.K_LEFT: (1.0, 0.0),
    pygame.K_RIGHT: (-1.0, 0.0),
    pygame.K_UP: (0.0, 1.0),
    pygame.K_DOWN: (0.0, -1.0),
}


class WindowState(Enum):
    CREATED = "created"
    RUNNING = "running"
    CLOSED = "closed"
    FAILED = "failed"


class Window:
    """Handle for one live window."""

    def __init__(
        self,
        title: str,
        width: int,
        height: int,
        world: World,
        context: "UIContext",
        *,
        fps: int = FPS,
        fixed_timestep: bool = FIXED_TIMESTEP,
    ):
        self.title = str(title)
        self.requested_size: Tuple[int, int] = (int(width), int(height))
        self.width = int(width)
        self.height = int(height)
        self.world = world
        self.fullscreen = False
        self.state = WindowState.CREATED
        self.error: Optional[BaseException] = None
        self.frame_count = 0
        self.fps = max(1, int(fps))
        self.fixed_timestep = bool(fixed_timestep)

        self._context = context
        self._surface: Any = None
        self._lock = threading.Lock()
        self._finished = threading.Event()

        # View (guarded by _lock; read on the UI thread every frame)
        self._zoom = 1.0
        self._pan_x = 0.0
        self._pan_y = 0.0

        # Frame timing (UI thread only)
        self._last_now: Optional[float] = None
        self._time = 0.0

    def __repr__(self) -> str:
        return f"<Window {self.title!r} {self.width}x{self.height} {self.state.value}>"

    @property
    def wants_fullscreen(self) -> bool:
        w, h = self.requested_size
        return w <= 0 or h <= 0

    @property
    def is_open(self) -> bool:
        return self.state is WindowState.RUNNING

    @property
    def time(self) -> float:
        """Seconds of world time advanced so far."""
        return self._time

    @property
    def surface(self) -> Any:
        return self._surface

    # ---- lifecycle ----

    def attach_surface(self, surface: Any, size: Tuple[int, int], fullscreen: bool) -> bool:
        """Bind a realized surface and start running. UI thread only.

        Returns False when the handle was closed before its surface arrived.
        """
        with self._lock:
            if self.state is not WindowState.CREATED:
                return False
            self._surface = surface
            self.width, self.height = int(size[0]), int(size[1])
            self.fullscreen = bool(fullscreen)
            self.state = WindowState.RUNNING
        self._context.attach(self)
        logger.info("window %r running (%dx%d, fullscreen=%s)", self.title, self.width, self.height, self.fullscreen)
        return True

    def mark_failed(self, error: BaseException) -> bool:
        """Record a creation failure; the handle stays inert.

        Returns False when the surface was attached (or the handle closed) first.
        """
        with self._lock:
            if self.state is not WindowState.CREATED:
                return False
            self.state = WindowState.FAILED
            self.error = error
        self._finished.set()
        return True

    def close(self) -> None:
        """Close the window. Safe from any thread; an in-flight tick still completes."""
        with self._lock:
            if self.state in (WindowState.CLOSED, WindowState.FAILED):
                return
            was_running = self.state is WindowState.RUNNING
            self.state = WindowState.CLOSED
        logger.info("window %r closed after %d frames", self.title, self.frame_count)
        if not was_running:
            self._finished.set()
            return
        if self._context.is_ui_thread():
            self._dispose()
            return
        try:
            self._context.post(self._dispose)
        except MarshalError:
            # UI thread already gone; nothing left to release
            self._finished.set()

    def _dispose(self) -> None:
        try:
            if self._surface is not None:
                self._context.backend.destroy(self._surface)
        finally:
            self._surface = None
            self._context.detach(self)
            self._finished.set()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until the window is closed (or failed to open). Returns False on timeout."""
        return self._finished.wait(timeout)

    # ---- view ----

    @property
    def zoom(self) -> float:
        with self._lock:
            return self._zoom

    @property
    def pan(self) -> Tuple[float, float]:
        with self._lock:
            return self._pan_x, self._pan_y

    @property
    def view(self) -> ViewTransform:
        with self._lock:
            return ViewTransform(self._zoom, self._pan_x, self._pan_y, self.width, self.height)

    def set_zoom(self, new_zoom: float) -> None:
        """Set zoom with clamping."""
        with self._lock:
            if self.state is not WindowState.RUNNING:
                return
            self._zoom = clamp_zoom(new_zoom)

    def zoom_by(self, factor: float, anchor: Optional[Tuple[float, float]] = None) -> None:
        """Zoom in/out, keeping the world point under `anchor` (surface pixels) in place."""
        if factor is None or float(factor) <= 0:
            return
        with self._lock:
            if self.state is not WindowState.RUNNING:
                return
            before = ViewTransform(self._zoom, self._pan_x, self._pan_y, self.width, self.height)
            self._zoom = clamp_zoom(self._zoom * float(factor))
            if anchor is not None:
                wx, wy = before.to_world(anchor[0], anchor[1])
                self._pan_x = (anchor[0] - self.width / 2) / self._zoom - wx
                self._pan_y = (anchor[1] - self.height / 2) / self._zoom - wy

    def set_pan(self, pan_x: float, pan_y: float) -> None:
        with self._lock:
            if self.state is not WindowState.RUNNING:
                return
            self._pan_x, self._pan_y = float(pan_x), float(pan_y)

    def pan_by(self, dx: float, dy: float) -> None:
        """Pan by (dx, dy) world units."""
        with self._lock:
            if self.state is not WindowState.RUNNING:
                return
            self._pan_x += float(dx)
            self._pan_y += float(dy)

    def reset_view(self) -> None:
        with self._lock:
            if self.state is not WindowState.RUNNING:
                return
            self._zoom = 1.0
            self._pan_x = 0.0
            self._pan_y = 0.0

    # ---- frame loop (UI thread) ----

    def pump(self) -> None:
        """Process pending input, then run one tick."""
        if not self.is_open:
            return
        try:
            events = self._context.backend.poll_events(self._surface)
        except Exception as exc:
            logger.exception("event polling failed for window %r", self.title)
            self._fail(exc)
            return
        for event in events:
            self.dispatch(event)
            if not self.is_open:
                return
        self.tick()

    def tick(self, now: Optional[float] = None) -> bool:
        """
        Advance the world, then render it. Returns False if no frame was produced.

        The first tick has delta 0. With a fixed timestep every later tick advances
        exactly 1/fps seconds regardless of the wall clock.
        """
        if not self.is_open:
            return False
        if now is None:
            now = timebase.now()

        if self._last_now is None:
            delta = 0.0
        elif self.fixed_timestep:
            delta = 1.0 / self.fps
        else:
            delta = max(0.0, now - self._last_now)
        self._last_now = now
        self._time += delta

        try:
            self.world.update(self._time, delta)
            picture = self.world.get_picture()
        except Exception as exc:
            logger.exception("world failed on tick %d of window %r", self.frame_count, self.title)
            self._fail(exc)
            return False

        if self._surface is None:
            # closed from inside the world on the UI thread; surface already released
            return False
        try:
            self._context.backend.present(self._surface, picture, self.view)
        except Exception as exc:
            logger.exception("rendering failed on tick %d of window %r", self.frame_count, self.title)
            self._fail(exc)
            return False
        self.frame_count += 1
        return True

    def dispatch(self, event: Event) -> None:
        """Route one input event: the world sees it first, then the built-in view controls."""
        if not self.is_open:
            return
        if event.pos is not None and event.world_pos is None:
            event = replace(event, world_pos=self.view.to_world(*event.pos))
        try:
            self.world.on_event(event)
        except Exception as exc:
            logger.exception("world failed handling %s in window %r", event.kind.value, self.title)
            self._fail(exc)
            return
        self._apply_view_controls(event)

    def _apply_view_controls(self, event: Event) -> None:
        kind = event.kind
        if kind is EventKind.QUIT:
            self.close()
        elif kind is EventKind.KEY_DOWN:
            if event.key == pygame.K_ESCAPE:
                self.close()
            elif event.key in _ZOOM_IN_KEYS:
                self.zoom_by(ZOOM_STEP)
            elif event.key in _ZOOM_OUT_KEYS:
                self.zoom_by(1.0 / ZOOM_STEP)
            elif event.key == pygame.K_HOME:
                self.reset_view()
            elif event.key in _PAN_KEYS:
                sx, sy = _PAN_KEYS[event.key]
                step = PAN_STEP_PX / self.zoom
                self.pan_by(sx * step, sy * step)
        elif kind is EventKind.MOUSE_WHEEL and event.wheel:
            self.zoom_by(ZOOM_STEP ** event.wheel, anchor=event.pos)
        elif kind is EventKind.MOUSE_MOVE and len(event.buttons) >= 3 and event.buttons[2]:
            # Right-drag pans (screen pixels -> world units)
            z = self.zoom
            self.pan_by(event.rel[0] / z, event.rel[1] / z)
        elif kind is EventKind.RESIZE and event.size:
            with self._lock:
                self.width, self.height = int(event.size[0]), int(event.size[1])

    def _fail(self, error: BaseException) -> None:
        self.error = error
        self.close()
