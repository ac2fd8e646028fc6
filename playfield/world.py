"""
Worlds: the unit the frame driver runs.

A world has three facets:
- get_picture()        -> the Picture for the current frame
- update(time, delta)  -> advance by `delta` seconds (`time` is seconds since the window started)
- on_event(event)      -> react to input (optional; the default ignores events)

Subclass `World` directly, or build one from plain functions with the adapters below.
`DelegatingWorld` is the general one: three independently supplied callables over a
single state value the world owns.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Generic, Optional, TypeVar

from .graphics.picture import Picture
from .input import Event

S = TypeVar("S")

Renderer = Callable[[S], Picture]
UpdateHandler = Callable[[S, float, float], Optional[S]]
EventHandler = Callable[[S, Event], Optional[S]]


class World(ABC):
    """Base class for everything a window can run."""

    @abstractmethod
    def get_picture(self) -> Picture:
        """Return the picture for the current frame. Must not mutate world state."""

    @abstractmethod
    def update(self, time: float, delta: float) -> None:
        """Advance the world."""

    def on_event(self, event: Event) -> None:
        """Handle an input event. Ignored by default."""
        return None


class StaticWorld(World):
    """Shows one picture forever."""

    def __init__(self, picture: Picture):
        self._picture = picture

    @property
    def picture(self) -> Picture:
        return self._picture

    def get_picture(self) -> Picture:
        return self._picture

    def update(self, time: float, delta: float) -> None:
        # do nothing, the picture is static.
        return None


class AnimationWorld(World):
    """Two caller-supplied functions: `picture_fn()` and `update_fn(time, delta)`."""

    def __init__(self, picture_fn: Callable[[], Picture], update_fn: Callable[[float, float], None]):
        self._picture_fn = picture_fn
        self._update_fn = update_fn

    def get_picture(self) -> Picture:
        return self._picture_fn()

    def update(self, time: float, delta: float) -> None:
        self._update_fn(time, delta)


class DelegatingWorld(World, Generic[S]):
    """
    A world composed of a state value plus render/update/event functions.

    `update` and `on_event` may either mutate the state in place and return None,
    or return a new state which then replaces the held one. Either way the next
    call observes the result.
    """

    def __init__(
        self,
        state: S,
        render: Renderer,
        update: Optional[UpdateHandler] = None,
        on_event: Optional[EventHandler] = None,
    ):
        if render is None:
            raise ValueError("DelegatingWorld requires a render function")
        self._state = state
        self._render = render
        self._update = update
        self._on_event = on_event

    @property
    def state(self) -> S:
        return self._state

    def get_picture(self) -> Picture:
        return self._render(self._state)

    def update(self, time: float, delta: float) -> None:
        if self._update is None:
            return
        result = self._update(self._state, time, delta)
        if result is not None:
            self._state = result

    def on_event(self, event: Event) -> None:
        if self._on_event is None:
            return
        result = self._on_event(self._state, event)
        if result is not None:
            self._state = result
