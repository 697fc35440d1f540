#!/usr/bin/env python3

import os
import sys

sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

from bfinterp import BFError, Configuration, HandlerResult, Handlers, Interpreter


class UpperCaseHandlers(Handlers):
    """Feeds a fixed sentence, collects output upper-cased and shows the tape on '#'."""

    def __init__(self, text):
        self.pending = [text]
        self.output = []

    def on_input(self, interpreter):
        return HandlerResult.success(self.pending.pop() if self.pending else None)

    def on_output(self, interpreter, value):
        self.output.append(chr(value & 0xFF).upper())
        return HandlerResult.success()

    def on_debug(self, interpreter):
        tape = interpreter.tape
        tape.push_bookmark()
        cells = []
        while not tape.is_at_beginning():
            tape.move_left()
        while True:
            cells.append(tape.get_current_value())
            if tape.is_at_end():
                break
            tape.move_right()
        tape.pop_bookmark()
        print("tape:", cells)
        return HandlerResult.success()


def main():
    handlers = UpperCaseHandlers("shout this\n")
    interpreter = Interpreter(configuration=Configuration(debug_is_enabled=True), handlers=handlers)
    try:
        interpreter.load(",[.>,]#")
        interpreter.run()
    except BFError as e:
        print(e, file=sys.stderr)
        return 1
    print("".join(handlers.output), end="")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
