"""
Playfield - a minimal animation harness.

Hand it a world (or the functions to build one) and it opens a window, runs the
update -> render loop on its own thread, and forwards input to the world.
"""
from .app import (
    animate,
    animate_fullscreen,
    animate_functions,
    animate_state,
    create_window,
    display,
    display_fullscreen,
    play,
    play_fullscreen,
    play_state,
    play_state_fullscreen,
)
from .engine import Window, WindowState
from .errors import MarshalError, PlayfieldError
from .input import Event, EventKind
from .sim.determinism import get_seed, random_int, random_range, seed, shuffle
from .ui_context import UIContext, get_ui_context, shutdown
from .world import AnimationWorld, DelegatingWorld, StaticWorld, World
