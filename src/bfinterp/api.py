from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Union

from .configuration import Configuration, OnEOFAction
from .handlers import CaptureHandlers
from .interpreter import Interpreter
from .tape import Tape


@dataclass(frozen=True)
class RunOptions:
    debug: bool = False
    on_eof: OnEOFAction = OnEOFAction.STORE_ZERO
    trace: bool = False


@dataclass(frozen=True)
class RunResult:
    output: bytes
    tape: Tape
    tape_dumps: List[str] = field(default_factory=list)
    trace: List[str] = field(default_factory=list)

    @property
    def text(self) -> str:
        return self.output.decode('latin-1')


def _run(
    load,
    *,
    input_lines: Optional[Iterable[str]],
    options: Optional[RunOptions],
) -> RunResult:
    opts = options or RunOptions()
    handlers = CaptureHandlers(input_lines)
    interpreter = Interpreter(
        configuration=Configuration(debug_is_enabled=opts.debug, on_eof_action=opts.on_eof),
        handlers=handlers,
        trace=opts.trace,
    )
    load(interpreter)
    interpreter.run()
    return RunResult(
        output=handlers.output,
        tape=interpreter.tape,
        tape_dumps=list(handlers.tape_dumps),
        trace=interpreter.trace,
    )


def run_string(
    source: Union[str, bytes],
    *,
    input_lines: Optional[Iterable[str]] = None,
    options: Optional[RunOptions] = None,
) -> RunResult:
    return _run(lambda i: i.load(source), input_lines=input_lines, options=options)


def run_file(
    path: Union[str, Path],
    *,
    input_lines: Optional[Iterable[str]] = None,
    options: Optional[RunOptions] = None,
) -> RunResult:
    return _run(lambda i: i.load_from_file(path), input_lines=input_lines, options=options)
