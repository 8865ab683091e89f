#!/usr/bin/env python3
# Command-line front end: generate / check / ascii / render.
#   python tools/lgtool.py generate --seed 1 1 --recipe reverse --out level.lvl
#   python tools/lgtool.py check level.lvl
import sys

from lockgrid.cli import main

if __name__ == '__main__':
    sys.exit(main())
