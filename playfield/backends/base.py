"""
Toolkit binding interface.

A backend owns the actual display: it builds surfaces, reports display capability,
pumps input and presents pictures. Every method is called on the UI thread only.

Expected interface:
- default_device() -> DisplayDevice
- create_surface(title, width, height) -> surface handle
- set_fullscreen(surface, device) / show(surface) / destroy(surface)
- poll_events(surface) -> list[Event]
- present(surface, picture, view) -> None
- wait_frame(fps) -> None  (frame pacing)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, List, Tuple

from ..graphics.picture import Picture
from ..graphics.view import ViewTransform
from ..input import Event


class DisplayDevice(ABC):
    @property
    @abstractmethod
    def size(self) -> Tuple[int, int]:
        """Native resolution (0, 0 when unknown)."""

    @abstractmethod
    def supports_exclusive_fullscreen(self) -> bool:
        ...


class Backend(ABC):
    @abstractmethod
    def default_device(self) -> DisplayDevice:
        ...

    @abstractmethod
    def create_surface(self, title: str, width: int, height: int) -> Any:
        ...

    @abstractmethod
    def set_fullscreen(self, surface: Any, device: DisplayDevice) -> None:
        ...

    @abstractmethod
    def show(self, surface: Any) -> None:
        ...

    @abstractmethod
    def surface_size(self, surface: Any) -> Tuple[int, int]:
        ...

    @abstractmethod
    def poll_events(self, surface: Any) -> List[Event]:
        ...

    @abstractmethod
    def present(self, surface: Any, picture: Picture, view: ViewTransform) -> None:
        ...

    @abstractmethod
    def destroy(self, surface: Any) -> None:
        ...

    def wait_frame(self, fps: int) -> None:
        """Pace the frame loop. Default: no pacing."""
        return None

    def shutdown(self) -> None:
        """Release toolkit resources when the UI thread stops."""
        return None
