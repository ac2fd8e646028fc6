from __future__ import annotations

import threading

import pygame
import pytest

from config import ZOOM_MAX, ZOOM_MIN, ZOOM_STEP
from playfield.backends import HeadlessBackend
from playfield.engine import Window, WindowState
from playfield.input import Event, EventKind
from playfield.ui_context import UIContext
from playfield.world import DelegatingWorld, StaticWorld

from tests.helpers import LoggingWorld, RecordingPicture


def make_window(backend: HeadlessBackend, world, width: int = 200, height: int = 100, **kwargs) -> Window:
    """A running window driven by hand (no UI thread)."""
    ctx = UIContext(backend)
    window = Window("test", width, height, world, ctx, **kwargs)
    surface = backend.create_surface("test", width, height)
    backend.show(surface)
    assert window.attach_surface(surface, (width, height), False)
    return window


def test_new_window_is_created_state(backend):
    window = Window("t", 10, 10, StaticWorld(RecordingPicture()), UIContext(backend))
    assert window.state is WindowState.CREATED
    assert not window.is_open
    assert window.tick(0.0) is False


def test_attach_surface_starts_running(backend):
    window = make_window(backend, StaticWorld(RecordingPicture()))
    assert window.state is WindowState.RUNNING
    assert window.is_open
    assert (window.width, window.height) == (200, 100)


def test_tick_advances_before_producing(backend, log):
    window = make_window(backend, LoggingWorld(log))
    for i in range(6):
        assert window.tick(i * 0.1)
    assert log == ["advance", "produce"] * 6
    assert window.frame_count == 6


def test_tick_presents_the_produced_picture(backend):
    picture = RecordingPicture("p")
    window = make_window(backend, StaticWorld(picture))
    window.tick(0.0)
    window.tick(0.1)
    surface = backend.surfaces[0]
    assert [p for p, _ in surface.presented] == [picture, picture]
    assert picture.draws == 2


def test_first_delta_is_zero_then_wall_clock(backend, log):
    world = LoggingWorld(log)
    window = make_window(backend, world)
    window.tick(10.0)
    window.tick(10.5)
    window.tick(10.75)
    assert world.updates == [(0.0, 0.0), (0.5, 0.5), (0.75, 0.25)]
    assert window.time == pytest.approx(0.75)


def test_clock_going_backwards_never_gives_negative_delta(backend, log):
    world = LoggingWorld(log)
    window = make_window(backend, world)
    window.tick(5.0)
    window.tick(4.0)
    assert world.updates[-1][1] == 0.0


def test_fixed_timestep_ignores_wall_clock(backend, log):
    world = LoggingWorld(log)
    window = make_window(backend, world, fps=50, fixed_timestep=True)
    for now in (0.0, 3.0, 3.001, 100.0):
        window.tick(now)
    deltas = [d for _, d in world.updates]
    assert deltas == [0.0, 0.02, 0.02, 0.02]
    assert window.time == pytest.approx(0.06)


def test_delegating_world_picture_reflects_same_tick_update(backend):
    window = make_window(
        backend,
        DelegatingWorld(0, render=lambda n: RecordingPicture(str(n)), update=lambda n, t, d: n + 1),
    )
    window.tick(0.0)
    presented, _ = backend.surfaces[0].presented[-1]
    assert presented == RecordingPicture("1")


def test_closed_window_produces_no_frames(backend, log):
    window = make_window(backend, LoggingWorld(log))
    window.tick(0.0)
    window.close()
    assert window.state is WindowState.CLOSED
    assert window.tick(1.0) is False
    assert log == ["advance", "produce"]
    assert window.wait(0)


def test_close_is_idempotent(backend):
    window = make_window(backend, StaticWorld(RecordingPicture()))
    window.close()
    window.close()
    assert window.state is WindowState.CLOSED


def test_world_update_failure_closes_window(backend):
    boom = RuntimeError("boom")

    def update(state, time, delta):
        raise boom

    window = make_window(backend, DelegatingWorld(0, render=lambda s: RecordingPicture(), update=update))
    assert window.tick(0.0) is False
    assert window.state is WindowState.CLOSED
    assert window.error is boom
    assert window.wait(0)
    assert backend.surfaces[0].presented == []


def test_picture_failure_closes_window(backend):
    class Broken:
        def draw(self, surface, view):
            raise ValueError("cannot draw")

    window = make_window(backend, StaticWorld(Broken()))
    assert window.tick(0.0) is False
    assert isinstance(window.error, ValueError)
    assert not window.is_open


def test_world_can_close_its_own_window():
    backend = HeadlessBackend()
    holder = {}

    def update(state, time, delta):
        holder["window"].close()

    window = make_window(backend, DelegatingWorld(0, render=lambda s: RecordingPicture(), update=update))
    holder["window"] = window
    # no UI thread here, so the in-flight tick still presents
    window.tick(0.0)
    assert window.state is WindowState.CLOSED
    assert window.tick(1.0) is False


def test_event_failure_closes_window(backend):
    def on_event(state, event):
        raise KeyError("x")

    window = make_window(backend, DelegatingWorld(0, render=lambda s: RecordingPicture(), on_event=on_event))
    window.dispatch(Event(EventKind.KEY_DOWN, key=pygame.K_a))
    assert window.state is WindowState.CLOSED
    assert isinstance(window.error, KeyError)


def test_events_reach_world_with_world_position(backend, log):
    world = LoggingWorld(log)
    window = make_window(backend, world, width=200, height=100)
    window.dispatch(Event(EventKind.MOUSE_DOWN, pos=(100, 50), button=1))
    window.dispatch(Event(EventKind.KEY_DOWN, key=pygame.K_a))
    assert [e.kind for e in world.events] == [EventKind.MOUSE_DOWN, EventKind.KEY_DOWN]
    assert world.events[0].world_pos == (0.0, 0.0)
    assert world.events[1].world_pos is None


def test_quit_event_is_seen_by_world_then_closes(backend, log):
    world = LoggingWorld(log)
    window = make_window(backend, world)
    window.dispatch(Event(EventKind.QUIT))
    assert world.events[0].kind is EventKind.QUIT
    assert window.state is WindowState.CLOSED


def test_escape_closes(backend):
    window = make_window(backend, StaticWorld(RecordingPicture()))
    window.dispatch(Event(EventKind.KEY_DOWN, key=pygame.K_ESCAPE))
    assert not window.is_open


def test_pump_dispatches_events_then_ticks(backend, log):
    world = LoggingWorld(log)
    window = make_window(backend, world)
    backend.inject(Event(EventKind.KEY_DOWN, key=pygame.K_a))
    window.pump()
    assert log == ["event", "advance", "produce"]


def test_zoom_keys_and_wheel(backend):
    window = make_window(backend, StaticWorld(RecordingPicture()))
    window.dispatch(Event(EventKind.KEY_DOWN, key=pygame.K_EQUALS))
    assert window.zoom == pytest.approx(ZOOM_STEP)
    window.dispatch(Event(EventKind.KEY_DOWN, key=pygame.K_MINUS))
    assert window.zoom == pytest.approx(1.0)
    window.dispatch(Event(EventKind.MOUSE_WHEEL, pos=(100, 50), wheel=2))
    assert window.zoom == pytest.approx(ZOOM_STEP**2)


def test_wheel_zoom_keeps_point_under_cursor(backend):
    window = make_window(backend, StaticWorld(RecordingPicture()), width=200, height=100)
    anchor = (150, 20)
    before = window.view.to_world(*anchor)
    window.zoom_by(2.0, anchor=anchor)
    after = window.view.to_world(*anchor)
    assert after == pytest.approx(before)
    assert window.zoom == pytest.approx(2.0)


def test_zoom_is_clamped(backend):
    window = make_window(backend, StaticWorld(RecordingPicture()))
    window.set_zoom(ZOOM_MAX * 10)
    assert window.zoom == ZOOM_MAX
    window.set_zoom(ZOOM_MIN / 10)
    assert window.zoom == ZOOM_MIN
    window.zoom_by(0)
    window.zoom_by(-1)
    assert window.zoom == ZOOM_MIN


def test_pan_controls_and_reset(backend):
    window = make_window(backend, StaticWorld(RecordingPicture()))
    window.pan_by(10, -5)
    assert window.pan == (10.0, -5.0)
    window.dispatch(Event(EventKind.KEY_DOWN, key=pygame.K_LEFT))
    assert window.pan[0] > 10.0
    window.dispatch(Event(EventKind.MOUSE_MOVE, pos=(5, 5), rel=(4, 6), buttons=(0, 0, 1)))
    window.set_zoom(2.0)
    window.dispatch(Event(EventKind.KEY_DOWN, key=pygame.K_HOME))
    assert window.zoom == 1.0
    assert window.pan == (0.0, 0.0)


def test_left_drag_does_not_pan(backend):
    window = make_window(backend, StaticWorld(RecordingPicture()))
    window.dispatch(Event(EventKind.MOUSE_MOVE, pos=(5, 5), rel=(4, 6), buttons=(1, 0, 0)))
    assert window.pan == (0.0, 0.0)


def test_view_is_passed_to_backend(backend):
    window = make_window(backend, StaticWorld(RecordingPicture()), width=200, height=100)
    window.set_zoom(3.0)
    window.set_pan(1.0, 2.0)
    window.tick(0.0)
    _, view = backend.surfaces[0].presented[-1]
    assert (view.zoom, view.pan_x, view.pan_y, view.width, view.height) == (3.0, 1.0, 2.0, 200, 100)


def test_view_changes_are_noops_after_close(backend):
    window = make_window(backend, StaticWorld(RecordingPicture()))
    window.close()
    window.set_zoom(4.0)
    window.pan_by(3, 3)
    window.reset_view()
    assert window.zoom == 1.0
    assert window.pan == (0.0, 0.0)


def test_resize_event_updates_size(backend):
    window = make_window(backend, StaticWorld(RecordingPicture()))
    window.dispatch(Event(EventKind.RESIZE, size=(640, 480)))
    assert (window.width, window.height) == (640, 480)


def test_close_from_another_thread_stops_ticks(backend, log):
    window = make_window(backend, LoggingWorld(log))
    window.tick(0.0)
    t = threading.Thread(target=window.close)
    t.start()
    t.join()
    assert window.tick(1.0) is False
    assert window.frame_count == 1


def test_mark_failed_is_terminal(backend):
    window = Window("t", 10, 10, StaticWorld(RecordingPicture()), UIContext(backend))
    err = RuntimeError("no display")
    assert window.mark_failed(err) is True
    assert window.state is WindowState.FAILED
    assert window.error is err
    assert window.wait(0)
    assert window.attach_surface(object(), (1, 1), False) is False
    window.close()
    assert window.state is WindowState.FAILED


def test_mark_failed_does_not_override_a_running_window(backend):
    window = make_window(backend, StaticWorld(RecordingPicture()))
    assert window.mark_failed(RuntimeError("late")) is False
    assert window.state is WindowState.RUNNING
    assert window.error is None
