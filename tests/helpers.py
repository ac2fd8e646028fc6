"""Test doubles shared across test modules."""

from __future__ import annotations

import time
from typing import Callable, List

from playfield.graphics.picture import Picture
from playfield.world import World


def wait_for(predicate: Callable[[], bool], timeout: float = 5.0) -> bool:
    """Poll `predicate` until it holds or `timeout` seconds pass."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.005)
    return predicate()


class RecordingPicture:
    """Picture that remembers it was drawn instead of touching pixels."""

    def __init__(self, label: str = "frame"):
        self.label = label
        self.draws = 0

    def draw(self, surface, view) -> None:
        self.draws += 1

    def __eq__(self, other: object) -> bool:
        return isinstance(other, RecordingPicture) and other.label == self.label

    def __hash__(self) -> int:
        return hash(self.label)

    def __repr__(self) -> str:
        return f"RecordingPicture({self.label!r})"


class LoggingWorld(World):
    """Appends "advance"/"produce"/"event" to a shared log."""

    def __init__(self, log: List[str]):
        self.log = log
        self.updates: List[tuple] = []
        self.events: list = []

    def get_picture(self) -> Picture:
        self.log.append("produce")
        return RecordingPicture(f"frame-{len(self.updates)}")

    def update(self, time: float, delta: float) -> None:
        self.log.append("advance")
        self.updates.append((time, delta))

    def on_event(self, event) -> None:
        self.log.append("event")
        self.events.append(event)
