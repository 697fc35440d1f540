from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from .configuration import Configuration, OnEOFAction
from .errors import BFError
from .handlers import StreamHandlers
from .interpreter import Interpreter


def _configure_logging(verbosity: int) -> None:
    # Without -v only warnings reach stderr, through logging's last-resort handler
    if verbosity <= 0:
        return
    level = logging.INFO if verbosity == 1 else logging.DEBUG

    root = logging.getLogger("bfinterp")
    root.setLevel(level)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        root.addHandler(handler)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="bfinterp",
        description="Run a Brainfuck program. '#' dumps the tape to stderr, '!' starts literal input.",
    )
    parser.add_argument("filename", help="Brainfuck source file")
    parser.add_argument("--no-debug", action="store_true", help="Ignore '#' instead of dumping the tape")
    parser.add_argument(
        "--on-eof",
        choices=[a.value for a in OnEOFAction],
        default=OnEOFAction.STORE_ZERO.value,
        help="What ',' does at end of input (default: zero)",
    )
    parser.add_argument("-v", "--verbose", action="count", default=0, help="More logging (-vv for debug)")
    args = parser.parse_args(argv)

    _configure_logging(args.verbose)

    interpreter = Interpreter(
        configuration=Configuration.from_names(debug=not args.no_debug, on_eof=args.on_eof),
        handlers=StreamHandlers(),
    )

    try:
        try:
            interpreter.load_from_file(args.filename)
        except BFError as e:
            print(f"Cannot load program: {e}", file=sys.stderr)
            return 1

        try:
            interpreter.run()
        except BFError as e:
            print(f"Cannot run program: {e}", file=sys.stderr)
            return 1
    finally:
        interpreter.close()

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
