"""
Playfield demos.

Usage:
    python main.py [--demo <name>] [--fullscreen] [--seed N | --random-seed] [--headless-frames N]

Demos:
    static   - a fixed picture (zoom and pan still work)
    bounce   - balls bouncing in a box (state + render/update functions)
    orbit    - an animation built from two plain functions
    clicker  - reacts to mouse clicks and key presses
"""
import argparse
import logging
import math
import sys

from config import COLOR_BLUE, COLOR_GOLD, COLOR_GREEN, COLOR_RED, DEFAULT_HEIGHT, DEFAULT_WIDTH, LOG_LEVEL
from playfield import (
    Event,
    EventKind,
    UIContext,
    animate_functions,
    animate_state,
    display,
    get_seed,
    play_state,
    random_range,
    seed,
    shuffle,
    shutdown,
    WindowState,
)
from playfield.graphics import Circle, Group, Line, Rect, Text

BOX = 250
PALETTE = [COLOR_RED, COLOR_GREEN, COLOR_BLUE, COLOR_GOLD]


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Playfield - a minimal animation harness")
    parser.add_argument(
        "--demo",
        type=str,
        default="bounce",
        choices=["static", "bounce", "orbit", "clicker"],
        help="demo to run (default: bounce)",
    )
    parser.add_argument("--fullscreen", action="store_true", help="ask for a fullscreen window")
    seeding = parser.add_mutually_exclusive_group()
    seeding.add_argument("--seed", type=int, default=None, help="seed the global RNG")
    seeding.add_argument("--random-seed", action="store_true", help="seed the global RNG from the clock")
    parser.add_argument(
        "--headless-frames",
        type=int,
        default=0,
        help="run N frames without a display and exit (CI / smoke checks)",
    )
    return parser.parse_args()


# ---- bounce ----


def make_balls(count: int = 12) -> list:
    balls = []
    for _ in range(count):
        balls.append(
            {
                "x": float(random_range(-BOX + 20, BOX - 20)),
                "y": float(random_range(-BOX + 20, BOX - 20)),
                "vx": float(random_range(-150, 151)),
                "vy": float(random_range(-150, 151)),
                "r": float(random_range(6, 20)),
                "color": PALETTE[random_range(0, len(PALETTE))],
            }
        )
    return balls


def render_balls(balls: list):
    items = [Rect(-BOX, -BOX, 2 * BOX, 2 * BOX, width=2)]
    items.extend(Circle(b["x"], b["y"], b["r"], b["color"]) for b in balls)
    return Group(tuple(items))


def update_balls(balls: list, time: float, delta: float) -> None:
    for b in balls:
        b["x"] += b["vx"] * delta
        b["y"] += b["vy"] * delta
        if abs(b["x"]) > BOX - b["r"]:
            b["vx"] = -b["vx"]
            b["x"] = math.copysign(BOX - b["r"], b["x"])
        if abs(b["y"]) > BOX - b["r"]:
            b["vy"] = -b["vy"]
            b["y"] = math.copysign(BOX - b["r"], b["y"])


# ---- orbit ----


def make_orbit():
    clock = {"t": 0.0}

    def picture():
        t = clock["t"]
        x, y = 150 * math.cos(t), 150 * math.sin(t)
        mx, my = x + 40 * math.cos(4 * t), y + 40 * math.sin(4 * t)
        return Group.of(
            Circle(0, 0, 30, COLOR_GOLD),
            Line(0, 0, x, y),
            Circle(x, y, 12, COLOR_BLUE),
            Circle(mx, my, 5, COLOR_RED),
        )

    def update(time: float, delta: float) -> None:
        clock["t"] = time

    return picture, update


# ---- clicker ----


def render_clicker(state: dict):
    items = [Text(-BOX, -BOX, f"clicks: {state['clicks']}  keys: {state['keys']}")]
    items.extend(Circle(x, y, 8, color) for (x, y, color) in state["dots"])
    return Group(tuple(items))


def handle_clicker(state: dict, event: Event) -> dict:
    # Pure-functional style: every event returns a new state.
    if event.kind is EventKind.MOUSE_DOWN and event.button == 1:
        palette = list(state["palette"])
        shuffle(palette)
        x, y = event.world_pos or (0.0, 0.0)
        dot = (x, y, palette[0])
        return {**state, "clicks": state["clicks"] + 1, "dots": state["dots"] + [dot], "palette": palette}
    if event.kind is EventKind.KEY_DOWN:
        return {**state, "keys": state["keys"] + 1}
    return state


def start_demo(name: str, width: int, height: int, **kwargs):
    if name == "static":
        picture = Group.of(
            Rect(-100, -60, 200, 120, COLOR_BLUE),
            Circle(0, 0, 40, COLOR_GOLD),
            Text(-90, -55, "static picture"),
        )
        return display("Playfield - static", width, height, picture, **kwargs)
    if name == "orbit":
        picture_fn, update_fn = make_orbit()
        return animate_functions("Playfield - orbit", width, height, picture_fn, update_fn, **kwargs)
    if name == "clicker":
        state = {"clicks": 0, "keys": 0, "dots": [], "palette": tuple(PALETTE)}
        return play_state("Playfield - clicker", width, height, state, render_clicker, None, handle_clicker, **kwargs)
    return animate_state("Playfield - bounce", width, height, make_balls(), render_balls, update_balls, **kwargs)


def main():
    """Main entry point."""
    args = parse_args()
    logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    if args.random_seed:
        seed()
    elif args.seed is not None:
        seed(args.seed)

    print("=" * 50)
    print("  Playfield")
    print("=" * 50)
    print(f"Demo: {args.demo}  seed: {get_seed()}")
    print()
    print("Controls:")
    print("  Mouse Wheel / +/-  - Zoom")
    print("  Arrows / Right-drag - Pan")
    print("  Home               - Reset view")
    print("  Esc                - Close")
    print()

    width, height = (0, 0) if args.fullscreen else (DEFAULT_WIDTH, DEFAULT_HEIGHT)
    kwargs = {}
    context = None
    if args.headless_frames > 0:
        import os

        # Headless pygame setup (safe for CI / no-window environments)
        os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
        from playfield.backends import HeadlessBackend

        context = UIContext(HeadlessBackend(frame_limit=args.headless_frames))
        context.start()
        kwargs["context"] = context

    window = start_demo(args.demo, width, height, **kwargs)
    if window.state is not WindowState.FAILED:
        window.wait()

    if context is not None:
        context.stop()
    else:
        shutdown()

    if window.state is WindowState.FAILED:
        print(f"Could not open a window: {window.error}")
        return 1
    if window.error is not None:
        print(f"Stopped by an error: {window.error}")
        return 1
    print(f"Thanks for watching! ({window.frame_count} frames)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
