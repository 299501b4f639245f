from __future__ import annotations

import argparse
import logging
import sys

from reel import config
from reel.reader.repl import Repl
from reel.tape.machine import TapeMachine


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="reel",
        description="Interactive expression runtime backed by a tape machine.",
    )
    parser.add_argument(
        "--log-level",
        default=config.get_log_level(),
        help="logging level (default: $REEL_LOG_LEVEL or WARNING)",
    )
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )
    Repl(TapeMachine()).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
