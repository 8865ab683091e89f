# src/lockgrid/cli.py
import argparse
import logging
import os
import sys

from .config import LEVEL_SIZE, SPRITE_SIZE
from .codec import read_level, size_from_length, to_ascii, write_level
from .errors import LevelError
from .mapgen.generator import RECIPES, generate_level
from .oracle import is_completable, validate

logger = logging.getLogger(__name__)

def load(path):
    size = size_from_length(os.path.getsize(path))
    with open(path, "rb") as f:
        return read_level(f, size)

def cmd_generate(args):
    level = generate_level((args.seed[0], args.seed[1]), args.recipe, args.size)
    if args.out == "-":
        write_level(sys.stdout.buffer, level)
        sys.stdout.buffer.flush()
    else:
        with open(args.out, "wb") as f:
            write_level(f, level)
        print(f"Wrote {args.out}")
    return 0

def cmd_check(args):
    level = load(args.path)
    ok = is_completable(level)
    problems = validate(level, completable=ok)
    print("completable" if ok else "not completable")
    for p in problems:
        print(f"  - {p}")
    return 0 if ok else 1

def cmd_ascii(args):
    sys.stdout.write(to_ascii(load(args.path)))
    return 0

def cmd_render(args):
    from .render import save_png
    save_png(load(args.path), args.out, tile_size=args.tile, sheet_path=args.sheet)
    print(f"Wrote {args.out}")
    return 0

def level_size(text):
    n = int(text)
    if n < 3:
        raise argparse.ArgumentTypeError(f"level size must be at least 3, got {n}")
    return n

def build_parser():
    p = argparse.ArgumentParser(prog="lockgrid", description="Generate and check key/exit grid levels.")
    p.add_argument("--log-level", default="WARNING", help="DEBUG, INFO, WARNING, ...")
    sub = p.add_subparsers(dest="cmd", required=True)

    p1 = sub.add_parser("generate", help="generate a level and write the raw tile array")
    p1.add_argument("--seed", type=int, nargs=2, default=[1, 1], metavar=("A", "B"))
    p1.add_argument("--recipe", choices=RECIPES, default="reverse")
    p1.add_argument("--size", type=level_size, default=LEVEL_SIZE)
    p1.add_argument("--out", type=str, default="-", help="output .lvl path, '-' for stdout")
    p1.set_defaults(func=cmd_generate)

    p2 = sub.add_parser("check", help="report whether a level can be completed")
    p2.add_argument("path")
    p2.set_defaults(func=cmd_check)

    p3 = sub.add_parser("ascii", help="print a level as text")
    p3.add_argument("path")
    p3.set_defaults(func=cmd_ascii)

    p4 = sub.add_parser("render", help="render a level to PNG")
    p4.add_argument("path")
    p4.add_argument("--out", type=str, required=True)
    p4.add_argument("--tile", type=int, default=SPRITE_SIZE, help="tile size in pixels")
    p4.add_argument("--sheet", type=str, default=None, help="horizontal sprite sheet image")
    p4.set_defaults(func=cmd_render)
    return p

def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.WARNING),
                        format="%(levelname)s %(name)s: %(message)s")
    try:
        return args.func(args)
    except (LevelError, OSError) as e:
        logger.error("%s", e)
        raise SystemExit(2)

if __name__ == "__main__":
    sys.exit(main())
