from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from .instruction import UNMERGEABLE, InstructionValue

INPUT_MARKER = '!'


@dataclass(frozen=True)
class Token:
    value: InstructionValue
    quantity: int
    position: int  # offset of the first character of the run


def split_input(source: str) -> Tuple[str, Optional[str]]:
    """Split ``source`` at the first input marker.

    Returns the code part and the literal input that follows the marker,
    taken verbatim, or None when the source has no marker at all.
    """
    idx = source.find(INPUT_MARKER)
    if idx < 0:
        return source, None
    return source[:idx], source[idx + 1:]


def tokenize(code: str) -> List[Token]:
    """
    Turn Brainfuck code into a list of run-length compressed tokens.

    Only strictly adjacent identical operators are merged: any other
    character, comments included, ends the current run. Brackets are
    never merged.
    """
    tokens: List[Token] = []
    i = 0
    length = len(code)
    while i < length:
        value = InstructionValue.from_char(code[i])
        if value is None:
            i += 1
            continue

        start = i
        i += 1
        if value not in UNMERGEABLE:
            while i < length and code[i] == code[start]:
                i += 1
        tokens.append(Token(value=value, quantity=i - start, position=start))

    return tokens
