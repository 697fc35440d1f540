#!/usr/bin/env python3
"""
Tests for program execution: arithmetic, loops, input/EOF handling, output
and failure propagation from handlers.
"""

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

import pytest

from bfinterp import (
    BFIOError,
    BFRuntimeError,
    CaptureHandlers,
    Configuration,
    HandlerResult,
    Handlers,
    Interpreter,
    OnEOFAction,
    Tape,
)


def make(source, *, lines=None, **config):
    handlers = CaptureHandlers(lines)
    interpreter = Interpreter(configuration=Configuration(**config), handlers=handlers)
    interpreter.load(source)
    return interpreter, handlers


def test_hello_world():
    source = (
        "++++++++[>++++[>++>+++>+++>+<<<<-]>+>+>->>+[<]<-]"
        ">>.>---.+++++++..+++.>>.<-.<.+++.------.--------.>>+.>++."
    )
    interpreter, handlers = make(source)
    interpreter.run()
    assert handlers.output == b"Hello World!\n"


def test_empty_program_runs():
    interpreter, handlers = make("")
    interpreter.run()
    assert handlers.output == b""
    assert interpreter.tape.position == (0, 0)


def test_increase_wraps_to_negative():
    interpreter, _ = make("+" * 128)
    interpreter.run()
    assert interpreter.tape.get_current_value() == -128


def test_decrease_below_zero():
    interpreter, handlers = make("-.")
    interpreter.run()
    assert interpreter.tape.get_current_value() == -1
    assert handlers.output == b"\xff"


def test_moves_grow_tape():
    interpreter, _ = make("<" * 300 + "+" + ">" * 600 + "++")
    interpreter.run()
    tape = interpreter.tape
    assert tape.get_current_value() == 2
    for _ in range(600):
        tape.move_left()
    assert tape.get_current_value() == 1


def test_clear_loop():
    interpreter, _ = make("+++++[-]")
    interpreter.run()
    assert interpreter.tape.get_current_value() == 0


def test_loop_is_skipped_on_zero():
    interpreter, handlers = make("[.]+.")
    interpreter.run()
    assert handlers.output == b"\x01"


def test_loop_condition_checked_only_between_passes():
    # The body drops the cell to zero before printing anything; a check
    # in the middle of the pass would produce no output at all.
    interpreter, handlers = make("+[-.+.-]")
    interpreter.run()
    assert handlers.output == b"\x00\x01"


def test_multiply_loop():
    # 3 * 4 = 12 added into cell 1
    interpreter, _ = make("+++[>++++<-]>")
    interpreter.run()
    assert interpreter.tape.get_current_value() == 12


def test_deep_nesting_does_not_recurse():
    depth = 3000
    source = "+" + "[" * depth + "-" + "]" * depth
    interpreter, _ = make(source)
    interpreter.run()
    assert interpreter.tape.get_current_value() == 0


def test_literal_input():
    interpreter, handlers = make(",[.,]!abc")
    interpreter.run()
    assert handlers.output == b"abc"
    assert handlers.input_requests == 0


def test_literal_input_does_not_request_more():
    interpreter, handlers = make(",,,!a", lines=["zzz"], on_eof_action=OnEOFAction.DO_NOTHING)
    interpreter.tape.set_current_value(9)
    interpreter.run()
    assert handlers.input_requests == 0
    # 'a', then two reads past the end of the literal input
    assert interpreter.tape.get_current_value() == 0


def test_input_lines_are_requested_when_exhausted():
    interpreter, handlers = make(",.,.,.,.", lines=["ab\n", "c"])
    interpreter.run()
    assert handlers.output == b"ab\nc"
    assert handlers.input_requests == 2


def test_end_of_input_is_sticky():
    interpreter, handlers = make(",,,,", lines=["a"])
    interpreter.run()
    # "a" then a None: no more requests after end of input
    assert handlers.input_requests == 2


@pytest.mark.parametrize("action, expected", [
    (OnEOFAction.STORE_ZERO, 0),
    (OnEOFAction.STORE_EOF, -1),
    (OnEOFAction.DO_NOTHING, 5),
])
def test_on_eof_policy(action, expected):
    interpreter, _ = make("+++++,", on_eof_action=action)
    interpreter.run()
    assert interpreter.tape.get_current_value() == expected


@pytest.mark.parametrize("action", list(OnEOFAction))
def test_used_up_literal_input_reads_zero(action):
    interpreter, handlers = make("+++++,!", on_eof_action=action)
    interpreter.run()
    assert interpreter.tape.get_current_value() == 0
    assert not interpreter.state.end_of_input_reached
    assert handlers.input_requests == 0


def test_used_up_literal_input_reads_zero_every_time():
    interpreter, _ = make(",>+++,!x", on_eof_action=OnEOFAction.STORE_EOF)
    interpreter.run()
    assert interpreter.tape.get_current_value() == 0
    interpreter.tape.move_left()
    assert interpreter.tape.get_current_value() == ord('x')


def test_read_quantity_consumes_several_chars():
    interpreter, _ = make(",,,!xyz")
    interpreter.run()
    assert interpreter.tape.get_current_value() == ord('z')


def test_non_ascii_input_wraps():
    interpreter, _ = make(",!ÿ")
    interpreter.run()
    assert interpreter.tape.get_current_value() == -1


def test_dump_tape_requires_debug():
    interpreter, handlers = make("+>++#")
    interpreter.run()
    assert handlers.tape_dumps == []

    interpreter, handlers = make("+>++##", debug_is_enabled=True)
    interpreter.run()
    assert handlers.tape_dumps == ["[ 1 <2> ]", "[ 1 <2> ]"]
    assert interpreter.tape.position == (0, 1)


class FailingOutput(CaptureHandlers):
    def __init__(self, fail_after, **kwargs):
        super().__init__(**kwargs)
        self.fail_after = fail_after

    def on_output(self, interpreter, value):
        if len(self.buffer) >= self.fail_after:
            return HandlerResult.failure(BFIOError(message="IOError: disk full"))
        return super().on_output(interpreter, value)


def test_output_failure_stops_everything():
    handlers = FailingOutput(2)
    interpreter = Interpreter(handlers=handlers)
    interpreter.load("+[.....>+<]+++")
    with pytest.raises(BFRuntimeError) as exc_info:
        interpreter.run()
    assert handlers.output == b"\x01\x01"
    assert "disk full" in str(exc_info.value)
    assert isinstance(exc_info.value.cause, BFIOError)
    # Nothing after the failing print ran
    assert interpreter.tape.get_current_value() == 1
    assert interpreter.tape.position == (0, 0)


class SuccessWithError(Handlers):
    def on_input(self, interpreter):
        return HandlerResult(ok=True, value="x", error=BFIOError(message="IOError: half-read"))


def test_success_with_error_counts_as_failure():
    interpreter = Interpreter(handlers=SuccessWithError())
    interpreter.load(",+")
    with pytest.raises(BFRuntimeError) as exc_info:
        interpreter.run()
    assert exc_info.value.cause.message == "IOError: half-read"
    assert interpreter.tape.get_current_value() == 0


class SilentFailure(Handlers):
    def on_debug(self, interpreter):
        return HandlerResult.failure()


def test_debug_failure_without_details():
    interpreter = Interpreter(configuration=Configuration(debug_is_enabled=True), handlers=SilentFailure())
    interpreter.load("#+")
    with pytest.raises(BFRuntimeError) as exc_info:
        interpreter.run()
    assert exc_info.value.cause is None
    assert interpreter.state.error is None


def test_tape_is_kept_between_runs():
    interpreter, _ = make("+")
    interpreter.run()
    interpreter.run()
    assert interpreter.tape.get_current_value() == 2
    interpreter.tape = Tape()
    interpreter.run()
    assert interpreter.tape.get_current_value() == 1


def test_trace():
    interpreter = Interpreter(handlers=CaptureHandlers(), trace=True)
    interpreter.load("++[>+<-]")
    interpreter.run()
    assert interpreter.trace[0] == "++ @ 0:0"
    assert interpreter.trace[1] == "[ @ 0:0"
    assert interpreter.trace[2] == "> @ 0:0"
    assert interpreter.trace[3] == "+ @ 0:1"


def test_closed_interpreter():
    interpreter, _ = make("+")
    interpreter.close()
    assert interpreter.closed
    with pytest.raises(RuntimeError):
        interpreter.state
    with pytest.raises(RuntimeError):
        interpreter.trace
    with pytest.raises(RuntimeError):
        interpreter.run()
    with pytest.raises(RuntimeError):
        interpreter.load("+")


def test_setters_check_types():
    interpreter = Interpreter()
    with pytest.raises(TypeError):
        interpreter.tape = object()
    with pytest.raises(TypeError):
        interpreter.configuration = {"debug_is_enabled": True}
