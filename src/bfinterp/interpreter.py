from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Union

from .configuration import EOF_VALUE, Configuration, OnEOFAction
from .errors import BFRuntimeError
from .handlers import HandlerResult, Handlers, StreamHandlers
from .instruction import Instruction, InstructionValue
from .program import Program
from .state import InterpreterState
from .tape import Tape, wrap_cell

logger = logging.getLogger(__name__)

V = InstructionValue


class Interpreter:
    """
    Tree-walking Brainfuck interpreter.

    An interpreter owns a configuration, a program, a tape and a set of
    I/O handlers, all of which can be replaced between runs. The tape is
    not cleared between runs; assign a fresh ``Tape()`` for that.

    Execution never uses exceptions for control flow: every step reports
    success or failure, and the first handler failure unwinds the whole
    walk. ``run()`` turns that failure into a ``BFRuntimeError``.
    """

    def __init__(
        self,
        *,
        configuration: Optional[Configuration] = None,
        program: Optional[Program] = None,
        tape: Optional[Tape] = None,
        handlers: Optional[Handlers] = None,
        trace: bool = False,
    ):
        self._closed = False
        self._configuration = Configuration()
        self._program = Program()
        self._tape = Tape()
        self._handlers: Handlers = StreamHandlers()
        self._state = InterpreterState(is_tracing=trace)

        if configuration is not None:
            self.configuration = configuration
        if program is not None:
            self.program = program
        if tape is not None:
            self.tape = tape
        if handlers is not None:
            self.handlers = handlers

    # ===== Properties =====

    def _check_open(self) -> None:
        if self._closed:
            raise RuntimeError("Interpreter has been closed")

    @property
    def configuration(self) -> Configuration:
        self._check_open()
        return self._configuration

    @configuration.setter
    def configuration(self, configuration: Configuration) -> None:
        self._check_open()
        if not isinstance(configuration, Configuration):
            raise TypeError(f"Expected a Configuration, got {type(configuration).__name__}")
        self._configuration = configuration

    @property
    def program(self) -> Program:
        self._check_open()
        return self._program

    @program.setter
    def program(self, program: Program) -> None:
        self._check_open()
        if not isinstance(program, Program):
            raise TypeError(f"Expected a Program, got {type(program).__name__}")
        self._program = program
        self._state.reset()

    @property
    def tape(self) -> Tape:
        self._check_open()
        return self._tape

    @tape.setter
    def tape(self, tape: Tape) -> None:
        self._check_open()
        if not isinstance(tape, Tape):
            raise TypeError(f"Expected a Tape, got {type(tape).__name__}")
        self._tape = tape

    @property
    def handlers(self) -> Handlers:
        self._check_open()
        return self._handlers

    @handlers.setter
    def handlers(self, handlers: Handlers) -> None:
        self._check_open()
        if not isinstance(handlers, Handlers):
            raise TypeError(f"Expected Handlers, got {type(handlers).__name__}")
        self._handlers = handlers

    @property
    def state(self) -> InterpreterState:
        self._check_open()
        return self._state

    @property
    def trace(self) -> List[str]:
        self._check_open()
        return list(self._state.trace)

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        self._closed = True

    # ===== Loading =====

    def load(self, source: Union[str, bytes]) -> None:
        self._check_open()
        self._program.load(source)
        self._state.reset()

    def load_from_file(self, path: Union[str, Path]) -> None:
        self._check_open()
        self._program.load_from_file(path)
        self._state.reset()

    # ===== Execution =====

    def run(self) -> None:
        """
        Execute the loaded program against the current tape.

        Raises:
            BFRuntimeError: a handler reported failure. The handler's own
                error, if it supplied one, is available as ``cause``.
        """
        self._check_open()
        state = self._state
        state.reset(literal_input=self._program.input)

        logger.debug("Run started (literal input: %s)", state.had_input)
        if self._run_chain(self._program.instructions):
            logger.debug("Run finished at %s", self._tape.position)
            return

        cause = state.error
        detail = str(cause) if cause is not None else "a handler reported failure"
        raise BFRuntimeError(message=f"RuntimeError: {detail}", cause=cause)

    def _fail(self, result: HandlerResult, what: str) -> bool:
        self._state.error = result.error
        logger.info("%s handler failed: %s", what, result.error or "no details")
        return False

    def _run_chain(self, start: Instruction) -> bool:
        # LOOP_BEGIN nodes whose body is currently being executed
        frames: List[Instruction] = []
        tape = self._tape
        node: Optional[Instruction] = start

        while True:
            if node is None or node.value is V.LOOP_END:
                # End of the current chain: back to the enclosing loop, if any
                if not frames:
                    return True
                begin = frames[-1]
                if tape.get_current_value() != 0:
                    node = begin.loop
                else:
                    frames.pop()
                    node = begin.next
                continue

            if self._state.is_tracing:
                chunk, offset = tape.position
                self._state.add_trace(f"{node.value.value * node.quantity or 'nop'} @ {chunk}:{offset}")

            if node.value is V.LOOP_BEGIN:
                if node.loop is not None and tape.get_current_value() != 0:
                    frames.append(node)
                    node = node.loop
                else:
                    node = node.next
                continue

            if not self._execute(node):
                return False
            node = node.next

    def _execute(self, node: Instruction) -> bool:
        tape = self._tape
        value = node.value
        quantity = node.quantity

        if value is V.MOVE_LEFT:
            for _ in range(quantity):
                tape.move_left()
        elif value is V.MOVE_RIGHT:
            for _ in range(quantity):
                tape.move_right()
        elif value is V.INCREASE:
            tape.set_current_value(tape.get_current_value() + quantity)
        elif value is V.DECREASE:
            tape.set_current_value(tape.get_current_value() - quantity)
        elif value is V.READ:
            for _ in range(quantity):
                if not self._read():
                    return False
        elif value is V.PRINT:
            for _ in range(quantity):
                result = self._handlers.on_output(self, tape.get_current_value())
                if result.failed:
                    return self._fail(result, "Output")
        elif value is V.DUMP_TAPE:
            if self._configuration.debug_is_enabled:
                for _ in range(quantity):
                    result = self._handlers.on_debug(self)
                    if result.failed:
                        return self._fail(result, "Debug")

        return True

    def _read(self) -> bool:
        """Read one character into the current cell."""
        state = self._state

        if not state.had_input and not state.end_of_input_reached and state.input_exhausted:
            result = self._handlers.on_input(self)
            if result.failed:
                return self._fail(result, "Input")
            line = result.value
            if not line:
                state.end_of_input_reached = True
                state.input = None
            else:
                state.input = line
            state.input_cursor = 0

        if state.end_of_input_reached:
            self._store_eof()
            return True

        if state.input_exhausted:
            # Used-up literal input reads as its terminating NUL
            self._tape.set_current_value(0)
            return True

        ch = state.input[state.input_cursor]
        state.input_cursor += 1
        self._tape.set_current_value(wrap_cell(ord(ch)))
        return True

    def _store_eof(self) -> None:
        action = self._configuration.on_eof_action
        if action is OnEOFAction.STORE_ZERO:
            self._tape.set_current_value(0)
        elif action is OnEOFAction.STORE_EOF:
            self._tape.set_current_value(EOF_VALUE)
