from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, Tuple


class LoadErrorKind(Enum):
    BAD_UTF8 = 'bad-utf8'
    UNMATCHED_BRACKET = 'unmatched-bracket'
    UNBALANCED_BRACKETS = 'unbalanced-brackets'


def _build_context(lines: List[str], line_no_1: int, column_1: int, *, context: int = 2) -> str:
    idx = max(1, min(line_no_1, len(lines)))
    start = max(1, idx - context)
    end = min(len(lines), idx + context)

    out: List[str] = []
    for i in range(start, end + 1):
        prefix = '>' if i == idx else ' '
        out.append(f"{prefix} {i:4d} | {lines[i - 1]}")
        if i == idx and column_1 > 0:
            out.append(f"       | {' ' * (column_1 - 1)}^")
    return "\n".join(out)


def _hint_for(kind: LoadErrorKind) -> Optional[str]:
    if kind is LoadErrorKind.UNMATCHED_BRACKET:
        return 'Every "]" must close a "[" opened earlier in the program.'
    if kind is LoadErrorKind.UNBALANCED_BRACKETS:
        return 'Check for a missing "]"; everything after the first "!" is input, not code.'
    if kind is LoadErrorKind.BAD_UTF8:
        return 'Programs must be UTF-8 encoded text.'
    return None


def _locate(source: str, position: int) -> Tuple[int, int]:
    # 1-based (line, column) of the character at ``position``
    before = source[:position]
    line = before.count('\n') + 1
    column = position - (before.rfind('\n') + 1) + 1
    return line, column


@dataclass
class BFError(Exception):
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass
class BFLoadError(BFError):
    kind: LoadErrorKind
    line: int = 0
    column: int = 0
    context: str = ''


@dataclass
class BFIOError(BFError):
    path: Optional[Path] = None


@dataclass
class BFRuntimeError(BFError):
    cause: Optional[BFError] = field(default=None)


def make_load_error(*, kind: LoadErrorKind, source: str, position: int, message: str) -> BFLoadError:
    if kind is LoadErrorKind.BAD_UTF8:
        hint = _hint_for(kind)
        return BFLoadError(
            message=f"LoadError: {message} (byte {position})\nHint: {hint}",
            kind=kind,
        )

    line, column = _locate(source, position)
    ctx = _build_context(source.split('\n'), line, column)
    hint = _hint_for(kind)
    hint_block = f"\nHint: {hint}" if hint else ""
    return BFLoadError(
        message=f"LoadError: {message} (line {line}, column {column})\n{ctx}{hint_block}",
        kind=kind,
        line=line,
        column=column,
        context=ctx,
    )
