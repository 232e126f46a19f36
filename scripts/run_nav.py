from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

# Ensure project root is on path when running this script directly
_script_dir = Path(__file__).resolve().parent
_project_root = _script_dir.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from rover_nav.ascii_map import render_ascii
from rover_nav.config import NavConfig, load_nav_config
from rover_nav.errors import NavigationError, RoverNavError
from rover_nav.grid import Grid
from rover_nav.navigator import Navigator
from rover_nav.parser import parse_commands
from rover_nav.rover import RoverState
from rover_nav.telemetry import TelemetryLogger
from rover_nav.types import Heading, NavigationOutcome, Status


DEMO_RUNS = [
    ("Successful movement", 5, [(1, 2), (3, 3)], "MMMRML"),
    ("Out of bounds", 5, [], "MMMMMMMM"),
    ("Obstacle encountered", 5, [(1, 2), (3, 3)], "MMRM"),
]


def _parse_pair(text: str) -> Tuple[int, int]:
    try:
        x, y = text.split(",")
        return int(x), int(y)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected X,Y, got {text!r}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run a rover command sequence on an obstacle grid.")
    parser.add_argument("--config", type=str, default=None, help="Path to navigation YAML config.")
    parser.add_argument("--size", type=int, default=None, help="Grid edge length.")
    parser.add_argument(
        "--obstacle", type=_parse_pair, action="append", default=None, help="Obstacle cell X,Y (repeatable)."
    )
    parser.add_argument("--commands", type=str, default=None, help="Command string, e.g. MMRML.")
    parser.add_argument("--start", type=_parse_pair, default=None, help="Start cell X,Y.")
    parser.add_argument("--heading", type=str, default=None, help="Start heading N/E/S/W.")
    parser.add_argument("--ascii", action="store_true", help="Print the final grid as text.")
    parser.add_argument(
        "--render", action="store_true", help="Replay the run in a pygame window (ignored for the demo runs)."
    )
    parser.add_argument("--fps", type=int, default=4, help="Replay speed in steps per second.")
    return parser


def resolve_config(args: argparse.Namespace) -> NavConfig:
    cfg = load_nav_config(args.config) if args.config else NavConfig()
    if args.size is not None:
        cfg.grid_size = args.size
    if args.obstacle is not None:
        cfg.obstacles = list(args.obstacle)
    if args.commands is not None:
        cfg.commands = args.commands
    if args.start is not None:
        cfg.start = args.start
    if args.heading is not None:
        cfg.heading = Heading.parse(args.heading)
    return cfg


def run(cfg: NavConfig, show_ascii: bool = False, render: bool = False, fps: int = 4) -> NavigationOutcome:
    try:
        grid, rover = cfg.build()
        commands = parse_commands(cfg.commands)
    except RoverNavError as exc:
        raise NavigationError(f"Navigation failed: {exc}") from exc

    start = rover.get_state()
    frames: List[Dict[str, Any]] = []
    telemetry: Optional[TelemetryLogger] = None
    if cfg.telemetry.enabled:
        telemetry = TelemetryLogger(cfg.telemetry.path)
    try:
        outcome = Navigator(telemetry=telemetry, on_step=frames.append).execute(rover, commands)
    finally:
        if telemetry is not None:
            telemetry.close()

    print(json.dumps(outcome.to_dict()))
    if show_ascii:
        path = [start.position] + [(f["x"], f["y"]) for f in frames]
        print(render_ascii(grid, rover.get_state(), path))
    if render:
        replay(grid, start, frames, fps)
    return outcome


def replay(grid: Grid, start: RoverState, frames: List[Dict[str, Any]], fps: int) -> None:
    from rover_nav.render import PygameRenderer

    renderer = PygameRenderer(grid)
    renderer.draw(start)
    renderer.tick(fps)
    for frame in frames:
        state = RoverState(x=frame["x"], y=frame["y"], heading=Heading(frame["heading"]))
        renderer.draw(state, step=frame["step"], status=Status(frame["status"]))
        renderer.tick(fps)
    renderer.wait_for_close()
    renderer.close()


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    no_input = args.config is None and args.commands is None
    try:
        if no_input:
            print("=" * 50)
            print("Rover Navigation")
            print("=" * 50)
            for title, size, obstacles, commands in DEMO_RUNS:
                print()
                print(f"{title}: size={size} obstacles={obstacles} commands={commands}")
                cfg = NavConfig(grid_size=size, obstacles=list(obstacles), commands=commands)
                run(cfg, show_ascii=args.ascii)
            return 0
        run(resolve_config(args), show_ascii=args.ascii, render=args.render, fps=args.fps)
    except RoverNavError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
