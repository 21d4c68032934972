"""Entry point for `python -m raycaster`.

Usage:
    python -m raycaster
    python -m raycaster --map maps/open.map --scale 2
    python -m raycaster --snapshot frame.png

Without --map the built-in 16x16 level is used.  RAYCASTER_MAP and
RAYCASTER_SCALE (environment or .env) supply defaults for --map and --scale.
"""
import argparse
import sys

from dotenv import load_dotenv
from rich.markup import escape

from lib.config import console, env_settings
from lib.perf import perf


def parse_args(argv=None, env=None):
    env = env or {}
    p = argparse.ArgumentParser(prog="raycaster", description="Grid raycaster")
    p.add_argument("--map", default=env.get("map"), help="Path to a '0'/'1' map file")
    scale = env.get("scale")
    p.add_argument("--scale", type=int, default=scale if scale is not None else 3,
                   help="Window pixels per view pixel")
    p.add_argument("--snapshot", metavar="PNG",
                   help="Render one frame to an image file and exit")
    p.add_argument("--debug", action="store_true",
                   help="Log per-frame viewer/hit details to /tmp/raycaster_debug.log")
    p.add_argument("--perf", action="store_true",
                   help="Print frame timings on exit and save them under runs/")
    return p.parse_args(argv)


def main(argv=None) -> None:
    load_dotenv()

    try:
        args = parse_args(argv, env_settings())
    except ValueError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False)
        sys.exit(1)

    # Recording stays off unless --perf is passed
    perf.start(enabled=args.perf)

    from raycaster.defs import RaycasterConfig
    from raycaster.game import Game
    from raycaster.world import GridWorld, load_map

    try:
        config = RaycasterConfig(window_scale=args.scale)
        world = load_map(args.map, config.cell_size) if args.map else GridWorld.default(config.cell_size)
        game = Game(world, config, debug=args.debug)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False)
        print("Usage: python -m raycaster [--map PATH] [--scale N] [--snapshot PNG]")
        sys.exit(1)

    if args.snapshot:
        game.snapshot(args.snapshot)
    else:
        game.run()

    if args.perf:
        perf.finish()
        perf.summary()
        perf.save()


if __name__ == "__main__":
    main()
