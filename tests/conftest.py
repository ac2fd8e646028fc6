"""Shared fixtures.

- headless SDL (no window, no audio)
- RNG reset to the configured seed and the clock override cleared for every test
- a running UI context over a headless backend
"""

from __future__ import annotations

import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

from typing import Iterator, List  # noqa: E402

import pytest  # noqa: E402

from config import SIM_SEED  # noqa: E402
from playfield.backends import HeadlessBackend  # noqa: E402
from playfield.sim import determinism, timebase  # noqa: E402
from playfield.ui_context import UIContext  # noqa: E402


@pytest.fixture(autouse=True)
def reset_determinism() -> Iterator[None]:
    determinism.seed(SIM_SEED)
    timebase.set_sim_now(None)
    yield
    timebase.set_sim_now(None)


@pytest.fixture()
def backend() -> HeadlessBackend:
    return HeadlessBackend()


@pytest.fixture()
def ui_context(backend: HeadlessBackend) -> Iterator[UIContext]:
    ctx = UIContext(backend)
    ctx.start()
    yield ctx
    ctx.stop()


@pytest.fixture()
def make_context() -> Iterator:
    """Factory for started UI contexts over arbitrary backends; all are stopped afterwards."""
    started: List[UIContext] = []

    def _make(backend) -> UIContext:
        ctx = UIContext(backend)
        ctx.start()
        started.append(ctx)
        return ctx

    yield _make
    for ctx in started:
        ctx.stop()


@pytest.fixture()
def log() -> List[str]:
    return []
