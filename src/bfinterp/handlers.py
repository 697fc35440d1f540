from __future__ import annotations

import io
import sys
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Iterable, Iterator, List, Optional

from .errors import BFError, BFIOError

if TYPE_CHECKING:
    from .interpreter import Interpreter


@dataclass(frozen=True)
class HandlerResult:
    ok: bool = True
    value: Any = None
    error: Optional[BFError] = None

    @property
    def failed(self) -> bool:
        # Reporting success while attaching an error still counts as failure
        return not self.ok or self.error is not None

    @classmethod
    def success(cls, value: Any = None) -> "HandlerResult":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: Optional[BFError] = None) -> "HandlerResult":
        return cls(ok=False, error=error)


class Handlers:
    """
    I/O callbacks invoked by the interpreter.

    Subclasses override any of the three methods. The defaults report end
    of input, discard output and ignore tape dumps.

    ``on_input`` returns the next line of input in ``value`` (including its
    trailing newline, if any); None or an empty string means end of input.
    ``on_output`` receives the signed 8-bit value of the current cell.
    ``on_debug`` may inspect ``interpreter.tape`` but has to leave the
    cursor where it found it.
    """

    def on_input(self, interpreter: "Interpreter") -> HandlerResult:
        return HandlerResult.success(None)

    def on_output(self, interpreter: "Interpreter", value: int) -> HandlerResult:
        return HandlerResult.success()

    def on_debug(self, interpreter: "Interpreter") -> HandlerResult:
        return HandlerResult.success()


def _write_byte(stream, byte: int) -> None:
    raw = getattr(stream, 'buffer', None)
    if raw is not None:
        stream.flush()
        raw.write(bytes([byte]))
        raw.flush()
    elif isinstance(stream, io.TextIOBase):
        stream.write(chr(byte))
        stream.flush()
    else:
        stream.write(bytes([byte]))
        stream.flush()


class StreamHandlers(Handlers):
    """Line-buffered input from stdin, raw bytes to stdout, tape dumps to stderr.

    Streams left as None are looked up on ``sys`` at call time.
    """

    def __init__(self, stdin=None, stdout=None, stderr=None):
        self.stdin = stdin
        self.stdout = stdout
        self.stderr = stderr

    def on_input(self, interpreter: "Interpreter") -> HandlerResult:
        stream = self.stdin if self.stdin is not None else sys.stdin
        try:
            line = stream.readline()
        except (OSError, UnicodeDecodeError) as exc:
            return HandlerResult.failure(BFIOError(message=f"IOError: cannot read input: {exc}"))
        if isinstance(line, (bytes, bytearray)):
            line = bytes(line).decode('utf-8', errors='replace')
        return HandlerResult.success(line or None)

    def on_output(self, interpreter: "Interpreter", value: int) -> HandlerResult:
        stream = self.stdout if self.stdout is not None else sys.stdout
        try:
            _write_byte(stream, value & 0xFF)
        except OSError as exc:
            return HandlerResult.failure(BFIOError(message=f"IOError: cannot write output: {exc}"))
        return HandlerResult.success()

    def on_debug(self, interpreter: "Interpreter") -> HandlerResult:
        stream = self.stderr if self.stderr is not None else sys.stderr
        try:
            print(interpreter.tape.dump(), file=stream)
            stream.flush()
        except OSError as exc:
            return HandlerResult.failure(BFIOError(message=f"IOError: cannot write tape dump: {exc}"))
        return HandlerResult.success()


class CaptureHandlers(Handlers):
    """Feed canned input lines and keep output and tape dumps in memory."""

    def __init__(self, input_lines: Optional[Iterable[str]] = None):
        self._lines: Iterator[str] = iter(input_lines or ())
        self.buffer = bytearray()
        self.tape_dumps: List[str] = []
        self.input_requests = 0

    @property
    def output(self) -> bytes:
        return bytes(self.buffer)

    def on_input(self, interpreter: "Interpreter") -> HandlerResult:
        self.input_requests += 1
        return HandlerResult.success(next(self._lines, None))

    def on_output(self, interpreter: "Interpreter", value: int) -> HandlerResult:
        self.buffer.append(value & 0xFF)
        return HandlerResult.success()

    def on_debug(self, interpreter: "Interpreter") -> HandlerResult:
        self.tape_dumps.append(interpreter.tape.dump())
        return HandlerResult.success()
