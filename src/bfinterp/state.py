from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .errors import BFError


@dataclass
class InterpreterState:
    had_input: bool = False
    input: Optional[str] = None
    input_cursor: int = 0
    end_of_input_reached: bool = False

    # Detailed error reported by the handler that stopped the last run
    error: Optional[BFError] = None

    trace: List[str] = field(default_factory=list)
    is_tracing: bool = False

    def reset(self, *, literal_input: Optional[str] = None) -> None:
        self.had_input = literal_input is not None
        self.input = literal_input
        self.input_cursor = 0
        self.end_of_input_reached = False
        self.error = None
        self.trace.clear()

    @property
    def input_exhausted(self) -> bool:
        return self.input is None or self.input_cursor >= len(self.input)

    def add_trace(self, message: str) -> None:
        if self.is_tracing:
            self.trace.append(message)
